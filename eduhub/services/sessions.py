from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from eduhub.models import AuthSession, User
from eduhub.schemas.auth import Identity
from eduhub.security import create_access_token, decode_access_token, token_lifetime
from eduhub.utils import utcnow

log = logging.getLogger(__name__)


class SessionStore:
    """Maps opaque bearer tokens to identities."""

    def create(self, user_id: int) -> str:
        raise NotImplementedError

    def resolve(self, token: str) -> Identity | None:
        raise NotImplementedError

    def revoke(self, token: str) -> None:
        raise NotImplementedError


class DatabaseSessionStore(SessionStore):
    """Signed JWTs that are only honoured while their `sessions` row exists and is unexpired."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user_id: int) -> str:
        lifetime = token_lifetime()
        token = create_access_token({"sub": str(user_id)}, expires_delta=lifetime)
        self.session.add(AuthSession(user_id=user_id, token=token, expires_at=utcnow() + lifetime))
        self.session.commit()
        return token

    def resolve(self, token: str) -> Identity | None:
        row = self.session.query(AuthSession).filter(AuthSession.token == token).first()
        if row is None:
            return None
        if row.is_expired():
            log.debug("Removing expired session %s for user %s", row.id, row.user_id)
            self.session.delete(row)
            self.session.commit()
            return None

        payload = decode_access_token(token)
        if not payload or not payload.get("sub"):
            return None

        user = self.session.get(User, row.user_id)
        if user is None or str(user.id) != str(payload["sub"]):
            return None
        return Identity.model_validate(user)

    def revoke(self, token: str) -> None:
        deleted = self.session.query(AuthSession).filter(AuthSession.token == token).delete()
        self.session.commit()
        log.debug("Revoked %d session(s)", deleted)
