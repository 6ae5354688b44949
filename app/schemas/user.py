# schemas/user.py

from typing import Optional
from pydantic import BaseModel
from datetime import datetime

from app.models.user import UserRole


class UserCreate(BaseModel):
    name: str
    email: str
    password: str
    role: UserRole = UserRole.ENTREPRENEUR


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    last_access_date: Optional[datetime]
    created_date: datetime
    updated_date: datetime
    active: bool

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
