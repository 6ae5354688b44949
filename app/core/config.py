from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    secret_key: str
    database_url: str
    backend_cors_origins: str = "http://localhost:3000"
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "llama3:8b"
    chat_backend: str = "template"  # "template" | "ollama"
    access_token_minutes: int = 60
    # Tag reported for shares that reference no permission (legacy parity). Empty = none.
    shared_permission_fallback: Optional[str] = None
    sql_echo: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.backend_cors_origins.split(",") if origin.strip()]
