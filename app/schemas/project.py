from typing import Optional

from app.schemas.base import CamelModel
from app.models.project import ProjectStatus


class EntrepreneurSummary(CamelModel):
    id: str
    name: str
    email: str


class CompanySummary(CamelModel):
    id: str
    name: str


class ProjectContext(CamelModel):
    """Read-only view of a project handed to the reply generator."""

    id: str
    name: str
    description: str
    budget: Optional[float] = None
    industry: Optional[str] = None
    status: ProjectStatus
    entrepreneur: Optional[EntrepreneurSummary] = None
    company: Optional[CompanySummary] = None
