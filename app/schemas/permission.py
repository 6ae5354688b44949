from typing import Optional, List
from datetime import datetime

from app.schemas.base import CamelModel
from app.models.permission import PermissionType


class UserContact(CamelModel):
    name: str
    email: str


class PermissionRead(CamelModel):
    id: str
    user_id: str
    type: PermissionType
    granted: bool
    granter_id: str
    created_at: datetime
    granter: Optional[UserContact] = None


class PermissionShareRead(CamelModel):
    id: str
    sharer_id: str
    shared_with_id: str
    permission_id: Optional[str] = None
    type: Optional[PermissionType] = None  # resolved from the referenced permission
    created_at: datetime
    sharer: Optional[UserContact] = None


class MyPermissions(CamelModel):
    permissions: List[PermissionRead]
    shared_permissions: List[PermissionShareRead]
    role_permissions: List[str]
    all_permissions: List[str]
