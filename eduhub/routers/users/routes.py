from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_permission
from eduhub.models import User, UserRole
from eduhub.permissions import Permission
from eduhub.schemas.auth import Identity, UserListItem

router = APIRouter(prefix="/users", tags=["users"])

LISTED_ROLES = (UserRole.TEACHER, UserRole.PARENT, UserRole.STUDENT)


@router.get("", name="users.list")
def list_users(
    _: Identity = Depends(require_permission(Permission.USERS_READ)),
    session: Session = Depends(get_db),
):
    """People a message can be addressed to."""
    users = (
        session.query(User)
        .filter(User.role.in_(LISTED_ROLES))
        .order_by(User.last_name, User.first_name)
        .all()
    )
    return {
        "users": [
            UserListItem(id=u.id, name=u.full_name, email=u.email, role=u.role)
            for u in users
        ]
    }
