from typing import Any, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from eduhub.config import settings
from eduhub.errors import Forbidden, NotFound, Unauthenticated
from eduhub.extensions import db
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission, has_permission
from eduhub.schemas.auth import Identity
from eduhub.services.mailer import LogMailer, Mailer, SmtpMailer
from eduhub.services.sessions import DatabaseSessionStore, SessionStore


def get_db() -> Any:
    """Dependency to provide a database session, closed once the response is sent."""
    session = db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_session_store(session: Session = Depends(get_db)) -> SessionStore:
    return DatabaseSessionStore(session)


def get_mailer() -> Mailer:
    if settings.smtp_configured:
        return SmtpMailer.from_settings(settings)
    return LogMailer()


def get_token(request: Request) -> Optional[str]:
    """Session token from the auth cookie, falling back to an `Authorization: Bearer` header."""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_current_user(
    token: Optional[str] = Depends(get_token),
    store: SessionStore = Depends(get_session_store),
) -> Optional[Identity]:
    """Retrieves the identity behind the request's session token, if any."""
    if not token:
        return None
    return store.resolve(token)


def require_user(current_user: Optional[Identity] = Depends(get_current_user)) -> Identity:
    """Dependency that ensures a user is authenticated."""
    if current_user is None:
        raise Unauthenticated()
    return current_user


def require_permission(permission: Permission):
    """Dependency factory that ensures the user's role grants `permission`."""
    def permission_checker(user: Identity = Depends(require_user)) -> Identity:
        if not has_permission(user.role, permission):
            raise Forbidden("Permission denied")
        return user
    return permission_checker


def get_teacher(user: Identity, session: Session) -> TeacherProfile:
    teacher = session.query(TeacherProfile).filter(TeacherProfile.user_id == user.id).first()
    if teacher is None:
        raise NotFound("Teacher profile not found")
    return teacher


def require_teacher(permission: Permission):
    """Like `require_permission`, but resolves the caller's teacher profile too."""
    def teacher_loader(
        user: Identity = Depends(require_permission(permission)),
        session: Session = Depends(get_db),
    ) -> TeacherProfile:
        return get_teacher(user, session)
    return teacher_loader
