from typing import List, Optional
from sqlmodel import Session

from app.models.company import Company
from app.models.project import Project
from app.models.user import User
from app.schemas.chat_message import ConversationTurn
from app.schemas.project import ProjectContext, EntrepreneurSummary, CompanySummary
from app.services.reply_templates import NOT_SPECIFIED, format_budget
from app.utils.prompt_loader import load_prompt


def get_project_context(session: Session, project_id: Optional[str]) -> Optional[ProjectContext]:
    """Project with its entrepreneur and company, or None when the id matches nothing."""
    if not project_id:
        return None
    project = session.get(Project, project_id)
    if project is None:
        return None

    entrepreneur = session.get(User, project.entrepreneur_id)
    company = session.get(Company, project.company_id) if project.company_id else None
    return ProjectContext(
        id=project.id,
        name=project.name,
        description=project.description,
        budget=project.budget,
        industry=project.industry,
        status=project.status,
        entrepreneur=EntrepreneurSummary.model_validate(entrepreneur) if entrepreneur else None,
        company=CompanySummary.model_validate(company) if company else None,
    )


def format_history(history: Optional[List[ConversationTurn]]) -> str:
    if not history:
        return ""
    lines = "\n".join(f"{turn.role}: {turn.content}" for turn in history)
    return f"\nÖnceki Konuşma:\n{lines}\n"


def build_system_prompt() -> str:
    return load_prompt("assistant_system.txt")


def build_user_prompt(
    question: str,
    project: Optional[ProjectContext],
    history: Optional[List[ConversationTurn]] = None,
) -> str:
    if project is not None:
        project_block = load_prompt(
            "project_block.txt",
            name=project.name,
            description=project.description,
            budget=format_budget(project),
            industry=project.industry or NOT_SPECIFIED,
            status=project.status.value,
        )
    else:
        project_block = "Yeni proje oluşturuluyor"
    return load_prompt(
        "assistant_user.txt",
        project_block=project_block,
        question=question,
        history_block=format_history(history),
    )
