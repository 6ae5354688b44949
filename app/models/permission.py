from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from app.models.ids import new_id


class PermissionType(str, Enum):
    API_ACCESS = "API_ACCESS"
    COMPANY_INFO_EDIT = "COMPANY_INFO_EDIT"
    REPORT_VIEW = "REPORT_VIEW"
    REPORT_CREATE = "REPORT_CREATE"
    TASK_ASSIGN = "TASK_ASSIGN"
    USER_MANAGE = "USER_MANAGE"
    FINANCIAL_VIEW = "FINANCIAL_VIEW"


class Permission(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    type: PermissionType
    granted: bool = True
    granter_id: str = Field(foreign_key="user.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class PermissionShare(SQLModel, table=True):
    """A permission the sharer holds, extended to another user."""

    id: str = Field(default_factory=new_id, primary_key=True)
    sharer_id: str = Field(foreign_key="user.id")
    shared_with_id: str = Field(foreign_key="user.id", index=True)
    permission_id: Optional[str] = Field(default=None, foreign_key="permission.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
