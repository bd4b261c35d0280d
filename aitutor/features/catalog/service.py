"""Lookups over the static catalog. Misses return None or an empty list, never raise."""

import re
from typing import List, Optional, Sequence, Tuple

from aitutor.features.catalog.data import SUBJECTS
from aitutor.models.catalog import Resource, Subject, SubTopic, Topic

_WHITESPACE = re.compile(r"\s+")


def list_subjects() -> Tuple[Subject, ...]:
    return SUBJECTS


def get_subject(subject_id: str, catalog: Sequence[Subject] = SUBJECTS) -> Optional[Subject]:
    return next((subject for subject in catalog if subject.id == subject_id), None)


def find_subtopic(subject: Subject, subtopic_id: str) -> Optional[Tuple[Topic, SubTopic]]:
    for topic in subject.topics:
        for subtopic in topic.subtopics:
            if subtopic.id == subtopic_id:
                return topic, subtopic
    return None


def get_resources_for_subtopic(subject_id: str, topic_id: str, subtopic_id: str) -> List[Resource]:
    subject = get_subject(subject_id)
    if not subject:
        return []
    topic = subject.get_topic(topic_id)
    if not topic:
        return []
    subtopic = next((st for st in topic.subtopics if st.id == subtopic_id), None)
    if not subtopic:
        return []
    return list(subtopic.resources)


def get_next_subtopic(subject_id: str, current_subtopic_id: str) -> Optional[SubTopic]:
    """Next subtopic in the same topic, else the first subtopic of the following topic."""
    subject = get_subject(subject_id)
    if not subject:
        return None

    for topic_index, topic in enumerate(subject.topics):
        ids = topic.subtopic_ids
        if current_subtopic_id not in ids:
            continue
        position = ids.index(current_subtopic_id)
        if position < len(ids) - 1:
            return topic.subtopics[position + 1]
        if topic_index >= len(subject.topics) - 1:
            return None
        next_topic = subject.topics[topic_index + 1]
        return next_topic.subtopics[0] if next_topic.subtopics else None
    return None


def resource_id(subtopic: SubTopic, resource: Resource) -> str:
    return f"{subtopic.id}-{_WHITESPACE.sub('-', resource.title.lower())}"


def subject_to_dict(subject: Subject, *, include_topics: bool = True) -> dict:
    payload = {
        "id": subject.id,
        "name": subject.name,
        "description": subject.description,
        "color": subject.color,
        "icon": subject.icon,
    }
    if include_topics:
        payload["topics"] = [topic_to_dict(topic) for topic in subject.topics]
    return payload


def topic_to_dict(topic: Topic) -> dict:
    return {
        "id": topic.id,
        "title": topic.title,
        "description": topic.description,
        "difficulty": topic.difficulty,
        "prerequisiteTopicIds": list(topic.prerequisite_topic_ids),
        "subtopics": [
            {
                "id": subtopic.id,
                "title": subtopic.title,
                "description": subtopic.description,
                "keyPoints": list(subtopic.key_points),
                "resources": [resource_to_dict(resource) for resource in subtopic.resources],
            }
            for subtopic in topic.subtopics
        ],
    }


def resource_to_dict(resource: Resource) -> dict:
    return {
        "title": resource.title,
        "type": resource.type,
        "description": resource.description,
        "difficulty": resource.difficulty,
        "durationMinutes": resource.duration_minutes,
        "url": resource.url,
    }
