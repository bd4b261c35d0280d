from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

from aitutor.models.catalog import Difficulty

RecommendationType = Literal["topic", "subtopic", "resource"]


class ContentRecommendation(BaseModel):
    """Derived per request from progress and the static catalog; never persisted."""
    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    id: str
    title: str
    description: str
    difficulty: Difficulty
    subject: str
    subject_id: str
    reason: str
    parent_title: Optional[str] = None
