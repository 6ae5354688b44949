from typing import Optional, Dict, Any
from sqlmodel import SQLModel, Field, Column
from datetime import datetime
from sqlalchemy.dialects.postgresql import JSON

from app.models.ids import new_id

class ChatMessage(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    message: str
    response: Optional[str] = None
    message_type: str  # "user" | "assistant"
    user_id: str = Field(foreign_key="user.id", index=True)
    project_id: Optional[str] = Field(default=None, foreign_key="project.id", index=True)
    context: Optional[Dict[str, Any]] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow)
