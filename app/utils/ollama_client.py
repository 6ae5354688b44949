import logging
import os
from typing import Optional

import requests
from app.core.config import Settings


logger = logging.getLogger(__name__)


def call_ollama(
    prompt: str,
    model: Optional[str] = None,
    settings: Optional[Settings] = None,
    system: Optional[str] = None,
) -> str:
    """Calls the Ollama generate endpoint with the given prompt (and optional system prompt)."""
    if settings is None:
        settings = Settings()
    base_url = os.environ.get("OLLAMA_URL") or getattr(settings, "ollama_url", "http://localhost:11434")
    model = model or settings.ollama_model

    payload = {
        "model": model,
        "prompt": prompt,
        "stream": False,
    }
    if system:
        payload["system"] = system

    try:
        response = requests.post(
            base_url.rstrip("/") + "/api/generate",
            json=payload,
            timeout=60,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        content = getattr(exc.response, "text", "")
        if content:
            logger.error("Ollama request failed: %s", content)
        else:
            logger.error("Ollama request failed: %s", exc)
        raise RuntimeError(
            f"Error calling Ollama at {base_url}: {content or exc}"
        ) from exc

    result = response.json()
    return result.get("response", "")
