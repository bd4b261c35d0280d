from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

Difficulty = Literal["beginner", "intermediate", "advanced"]
ResourceType = Literal["article", "video", "interactive", "practice", "quiz"]


@dataclass(frozen=True)
class Resource:
    title: str
    type: ResourceType
    description: str
    difficulty: Difficulty
    duration_minutes: Optional[int] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class SubTopic:
    id: str
    title: str
    description: str
    resources: Tuple[Resource, ...] = ()
    key_points: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Topic:
    """
    A catalog topic. It is "available" once every prerequisite topic has at
    least one completed subtopic.
    """

    id: str
    title: str
    description: str
    difficulty: Difficulty
    subtopics: Tuple[SubTopic, ...] = ()
    prerequisite_topic_ids: Tuple[str, ...] = ()

    @property
    def subtopic_ids(self) -> Tuple[str, ...]:
        return tuple(subtopic.id for subtopic in self.subtopics)


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    description: str
    color: str
    topics: Tuple[Topic, ...] = field(default_factory=tuple)
    icon: Optional[str] = None

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        return next((topic for topic in self.topics if topic.id == topic_id), None)


@dataclass(frozen=True)
class TutorPrompt:
    system_prompt: str
    example_questions: Tuple[str, ...]
