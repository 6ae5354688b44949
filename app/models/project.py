from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from app.models.ids import new_id


class ProjectStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Project(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    description: str
    budget: Optional[float] = None
    industry: Optional[str] = None
    status: ProjectStatus = ProjectStatus.DRAFT
    entrepreneur_id: str = Field(foreign_key="user.id")
    company_id: Optional[str] = Field(default=None, foreign_key="company.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
