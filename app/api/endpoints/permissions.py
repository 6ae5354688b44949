import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.api.endpoints.auth import get_current_user
from app.core.config import Settings
from app.database import get_session
from app.models.user import User
from app.schemas.permission import MyPermissions
from app.services.permission_service import collect_permissions

router = APIRouter()
logger = logging.getLogger(__name__)
settings = Settings()


@router.get("/my-permissions", response_model=MyPermissions)
def my_permissions(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    try:
        return collect_permissions(session, current_user.id, settings.shared_permission_fallback)
    except Exception:
        logger.exception("Error fetching permissions")
        raise HTTPException(status_code=500, detail="Internal server error")
