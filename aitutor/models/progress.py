from datetime import datetime, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


def as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class UserProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    subject_id: str
    last_accessed: Optional[datetime] = None
    messages_count: int = Field(default=0, ge=0)
    completed_topics: List[str] = Field(default_factory=list)
    score: Optional[int] = None
    study_minutes: int = Field(default=0, ge=0)

    @property
    def key(self) -> str:
        return f"{self.user_id}_{self.subject_id}"


class TopicUpdate(BaseModel):
    """Result of appending detected topics to a progress record."""
    model_config = ConfigDict(frozen=True)

    previous: List[str]
    added: List[str]

    @property
    def total(self) -> int:
        return len(self.previous) + len(self.added)


ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    user_id: str
    subject_id: str
    role: ChatRole
    content: str
    timestamp: Optional[datetime] = None
