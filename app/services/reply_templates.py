"""Keyword-driven reply templates used when no generative backend is configured.

Selection looks only at the user's question, lowercased. The first matching
keyword group wins, in this order: budget, team, steps. Anything else gets the
default help menu.
"""
from typing import Optional

from app.schemas.project import ProjectContext
from app.utils.message_loader import load_message

NOT_SPECIFIED = "Belirtilmemiş"

BUDGET = "budget"
TEAM = "team"
STEPS = "steps"
DEFAULT = "default"

KEYWORDS = [
    (BUDGET, ("bütçe", "maliyet", "fiyat")),
    (TEAM, ("çalışan", "ekip", "freelancer", "kim çalışmalı")),
    (STEPS, ("yapılması gereken", "adım", "plan", "ne yapmalı")),
]


def select_branch(message: Optional[str]) -> str:
    # "İ".lower() leaves a combining dot behind
    text = (message or "").replace("İ", "i").lower()
    for branch, terms in KEYWORDS:
        if any(term in text for term in terms):
            return branch
    return DEFAULT


def format_currency(amount: float) -> str:
    # ₺150,000 / ₺1,250.5 / ₺1.234
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"₺{text}"


def format_budget(project: Optional[ProjectContext]) -> str:
    if project is None or not project.budget:
        return NOT_SPECIFIED
    return format_currency(project.budget)


def render_reply(message: Optional[str], project: Optional[ProjectContext] = None) -> str:
    branch = select_branch(message)
    has_budget = project is not None and bool(project.budget)

    if branch == BUDGET:
        closing = (
            "Bu bütçeye göre size özel bir planlama yapabilirim. Hangi alan hakkında daha detaylı bilgi istersiniz?"
            if has_budget
            else "Bütçenizi belirtirseniz, size daha spesifik öneriler sunabilirim."
        )
        return load_message("reply_budget.txt", budget=format_budget(project), closing=closing)

    if branch == TEAM:
        closing = (
            "Bu bütçeye göre size uygun freelancer ve çalışan önerileri sunabilirim. Hangi rolle başlamak istersiniz?"
            if has_budget
            else "Bütçenizi belirtirseniz, size en uygun çalışan önerilerini sunabilirim."
        )
        return load_message("reply_team.txt", budget=format_budget(project), closing=closing)

    if branch == STEPS:
        if project is not None:
            closing = (
                f"Projenizin mevcut durumu: {project.status.value}\n"
                "Hangi fazda olduğunuzu belirtirseniz, o faz için daha detaylı rehberlik sunabilirim."
            )
        else:
            closing = "Hangi aşamada olduğunuzu belirtirseniz, size daha spesifik adımlar sunabilirim."
        return load_message("reply_steps.txt", closing=closing)

    return load_message("reply_default.txt")
