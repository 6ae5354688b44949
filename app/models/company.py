from enum import Enum
from sqlmodel import SQLModel, Field
from datetime import datetime

from app.models.ids import new_id


class MemberRole(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class Company(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    owner_id: str = Field(foreign_key="user.id")


class CompanyMember(SQLModel, table=True):
    """Membership of a user in a company; the role drives role-based permissions."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    company_id: str = Field(foreign_key="company.id", index=True)
    role: MemberRole = MemberRole.EMPLOYEE
    joined_at: datetime = Field(default_factory=datetime.utcnow)
