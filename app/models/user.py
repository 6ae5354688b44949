from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from app.models.ids import new_id


class UserRole(str, Enum):
    ENTREPRENEUR = "ENTREPRENEUR"
    COMPANY = "COMPANY"
    FREELANCER = "FREELANCER"
    ADMIN = "ADMIN"


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: UserRole = UserRole.ENTREPRENEUR
    active: bool = True
    last_access_date: Optional[datetime] = None
    created_date: datetime = Field(default_factory=datetime.utcnow)
    updated_date: datetime = Field(default_factory=datetime.utcnow)
