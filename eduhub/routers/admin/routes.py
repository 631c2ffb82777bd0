from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_permission
from eduhub.permissions import Permission
from eduhub.schemas.auth import Identity
from eduhub.services.dashboard import admin_dashboard

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard", name="admin.dashboard")
def dashboard(
    _: Identity = Depends(require_permission(Permission.ADMIN_DASHBOARD)),
    session: Session = Depends(get_db),
):
    return admin_dashboard(session)
