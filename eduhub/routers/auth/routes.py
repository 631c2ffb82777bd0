from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from eduhub.config import settings
from eduhub.dependencies import get_db, get_session_store, get_token, require_user
from eduhub.errors import Unauthenticated
from eduhub.models import User
from eduhub.schemas.auth import Identity, LoginRequest
from eduhub.security import verify_and_update_password
from eduhub.services.sessions import SessionStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", name="auth.login")
def login(
    data: LoginRequest,
    session: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Checks credentials and issues a session cookie."""
    user = session.query(User).filter(User.email == data.email.lower().strip()).first()
    if not user:
        raise Unauthenticated("Invalid email or password")

    verified, new_hash = verify_and_update_password(data.password, user.password_hash)
    if not verified:
        raise Unauthenticated("Invalid email or password")
    if new_hash:
        user.password_hash = new_hash
        session.commit()

    token = store.create(user.id)
    identity = Identity.model_validate(user)
    response = JSONResponse({"user": identity.model_dump(mode="json", by_alias=True)})
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite=settings.SESSION_COOKIE_SAMESITE.lower(),
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response


@router.post("/logout", name="auth.logout")
def logout(
    token: Optional[str] = Depends(get_token),
    store: SessionStore = Depends(get_session_store),
):
    """Revokes the current session (if any) and clears the cookie."""
    if token:
        store.revoke(token)
    response = JSONResponse({"success": True})
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response


@router.get("/me", name="auth.me")
def me(current_user: Identity = Depends(require_user)):
    return {"user": current_user}
