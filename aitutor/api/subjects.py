from typing import Optional

from fastapi import APIRouter, Query

from aitutor.core.errors import NotFoundError
from aitutor.features.catalog.prompts import generate_tutor_prompt
from aitutor.features.catalog.service import (
    get_next_subtopic,
    get_resources_for_subtopic,
    get_subject,
    list_subjects,
    resource_to_dict,
    subject_to_dict,
)

router = APIRouter(prefix="/api/subjects", tags=["subjects"])


@router.get("")
def subjects():
    return {"data": [subject_to_dict(s, include_topics=False) for s in list_subjects()]}


@router.get("/{subject_id}")
def subject_detail(subject_id: str):
    subject = get_subject(subject_id)
    if subject is None:
        raise NotFoundError(f"Unknown subject: {subject_id}")
    return subject_to_dict(subject)


@router.get("/{subject_id}/prompt")
def tutor_prompt(subject_id: str, topic: Optional[str] = None, subtopic: Optional[str] = None):
    prompt = generate_tutor_prompt(subject_id, topic, subtopic)
    return {"systemPrompt": prompt.system_prompt, "exampleQuestions": list(prompt.example_questions)}


@router.get("/{subject_id}/next-subtopic")
def next_subtopic(subject_id: str, current: str = Query(..., min_length=1)):
    found = get_next_subtopic(subject_id, current)
    if found is None:
        return {"data": None}
    return {"data": {"id": found.id, "title": found.title, "description": found.description}}


@router.get("/{subject_id}/topics/{topic_id}/subtopics/{subtopic_id}/resources")
def subtopic_resources(subject_id: str, topic_id: str, subtopic_id: str):
    return {"data": [resource_to_dict(r) for r in get_resources_for_subtopic(subject_id, topic_id, subtopic_id)]}
