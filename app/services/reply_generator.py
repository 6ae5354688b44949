"""Reply generation backends.

A generator is any callable ``(system_prompt, user_prompt, project) -> str``.
The chat endpoint receives one through ``get_reply_generator`` so a real model can
replace the templates without touching persistence.
"""
import logging
from typing import Callable, Optional

from app.core.config import Settings
from app.schemas.project import ProjectContext
from app.services.reply_templates import render_reply
from app.utils.ollama_client import call_ollama

logger = logging.getLogger(__name__)


class TemplateReplyGenerator:
    """Answers from the fixed keyword templates; the prompts are ignored.

    Templates are chosen from the raw question, which ``for_question`` binds
    for a single request.
    """

    def __init__(self, question: Optional[str] = None):
        self.question = question

    def for_question(self, question: Optional[str]) -> "TemplateReplyGenerator":
        return TemplateReplyGenerator(question)

    def __call__(self, system_prompt: str, user_prompt: str, project: Optional[ProjectContext]) -> str:
        return render_reply(self.question, project)


class OllamaReplyGenerator:
    def __init__(self, settings: Settings):
        self.settings = settings

    def __call__(self, system_prompt: str, user_prompt: str, project: Optional[ProjectContext]) -> str:
        logger.debug("Requesting reply from Ollama model %s", self.settings.ollama_model)
        return call_ollama(user_prompt, settings=self.settings, system=system_prompt)


def bind_question(generate_reply: Callable, question: Optional[str]) -> Callable:
    """Hands the raw question to generators that ask for it; others are returned unchanged."""
    for_question = getattr(generate_reply, "for_question", None)
    return for_question(question) if for_question is not None else generate_reply


def get_reply_generator():
    settings = Settings()
    if settings.chat_backend == "ollama":
        return OllamaReplyGenerator(settings)
    if settings.chat_backend != "template":
        logger.warning("Unknown chat_backend %r, falling back to templates", settings.chat_backend)
    return TemplateReplyGenerator()
