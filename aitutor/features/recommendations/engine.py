"""
Recommendation engine.

Pure function over the static catalog and a caller-supplied progress snapshot.
No I/O and no randomness: identical input always yields identical output.

Priority:
  1. per touched subject: available topics with nothing completed (max 2),
     each followed by its first subtopic; then the next subtopic of any
     partially completed topic
  2. first beginner topic of every untouched subject
  3. one beginner resource per subject as filler
"""

from typing import Dict, Iterable, List, Sequence

from aitutor.features.catalog.data import SUBJECTS
from aitutor.features.catalog.service import resource_id
from aitutor.models.catalog import Subject, Topic
from aitutor.models.progress import UserProgress
from aitutor.models.recommendation import ContentRecommendation

MAX_NEW_TOPICS_PER_SUBJECT = 2

REASON_PROGRESS = "Based on your current progress"
REASON_NEXT_STEP = "Next step in your learning path"
REASON_CONTINUE = "Continue where you left off"
REASON_EXPLORE = "Explore a new subject"
REASON_POPULAR = "Popular resource for beginners"


def _completed_count(topic: Topic, completed: Sequence[str]) -> int:
    return sum(1 for subtopic_id in topic.subtopic_ids if subtopic_id in completed)


def is_topic_available(subject: Subject, topic: Topic, completed: Sequence[str]) -> bool:
    """Every prerequisite has at least one completed subtopic. Unknown prerequisites count as met."""
    for prerequisite_id in topic.prerequisite_topic_ids:
        prerequisite = subject.get_topic(prerequisite_id)
        if prerequisite is None:
            continue
        if _completed_count(prerequisite, completed) == 0:
            return False
    return True


def _topic_recommendation(subject: Subject, topic: Topic, reason: str) -> ContentRecommendation:
    return ContentRecommendation(
        type="topic",
        id=topic.id,
        title=topic.title,
        description=topic.description,
        difficulty=topic.difficulty,
        subject=subject.name,
        subject_id=subject.id,
        reason=reason,
    )


def _subtopic_recommendation(subject: Subject, topic: Topic, index: int, reason: str) -> ContentRecommendation:
    subtopic = topic.subtopics[index]
    return ContentRecommendation(
        type="subtopic",
        id=subtopic.id,
        title=subtopic.title,
        description=subtopic.description,
        difficulty=topic.difficulty,
        parent_title=topic.title,
        subject=subject.name,
        subject_id=subject.id,
        reason=reason,
    )


def _for_touched_subject(subject: Subject, completed: Sequence[str]) -> List[ContentRecommendation]:
    items: List[ContentRecommendation] = []

    untouched = [
        topic
        for topic in subject.topics
        if _completed_count(topic, completed) == 0 and is_topic_available(subject, topic, completed)
    ]
    for topic in untouched[:MAX_NEW_TOPICS_PER_SUBJECT]:
        items.append(_topic_recommendation(subject, topic, REASON_PROGRESS))
        if topic.subtopics:
            items.append(_subtopic_recommendation(subject, topic, 0, REASON_NEXT_STEP))

    for topic in subject.topics:
        done = _completed_count(topic, completed)
        if not 0 < done < len(topic.subtopics):
            continue
        next_index = next(i for i, st in enumerate(topic.subtopics) if st.id not in completed)
        items.append(_subtopic_recommendation(subject, topic, next_index, REASON_CONTINUE))

    return items


def _explore_new_subjects(catalog: Sequence[Subject], touched: Iterable[str]) -> List[ContentRecommendation]:
    touched = set(touched)
    items = []
    for subject in catalog:
        if subject.id in touched:
            continue
        beginner = next((topic for topic in subject.topics if topic.difficulty == "beginner"), None)
        if beginner:
            items.append(_topic_recommendation(subject, beginner, REASON_EXPLORE))
    return items


def _popular_resources(catalog: Sequence[Subject]) -> List[ContentRecommendation]:
    items = []
    for subject in catalog:
        beginner = next((topic for topic in subject.topics if topic.difficulty == "beginner"), None)
        if not beginner or not beginner.subtopics:
            continue
        subtopic = beginner.subtopics[0]
        if not subtopic.resources:
            continue
        resource = subtopic.resources[0]
        items.append(
            ContentRecommendation(
                type="resource",
                id=resource_id(subtopic, resource),
                title=resource.title,
                description=resource.description,
                difficulty=resource.difficulty,
                parent_title=subtopic.title,
                subject=subject.name,
                subject_id=subject.id,
                reason=REASON_POPULAR,
            )
        )
    return items


def recommend(
    progress_records: Sequence[UserProgress],
    limit: int = 5,
    catalog: Sequence[Subject] = SUBJECTS,
) -> List[ContentRecommendation]:
    if limit <= 0:
        return []

    completed_by_subject: Dict[str, List[str]] = {}
    for record in progress_records:
        completed_by_subject.setdefault(record.subject_id, []).extend(record.completed_topics)

    by_id = {subject.id: subject for subject in catalog}
    items: List[ContentRecommendation] = []
    for subject_id, completed in completed_by_subject.items():
        subject = by_id.get(subject_id)
        if subject:
            items.extend(_for_touched_subject(subject, completed))

    if len(items) < limit:
        items.extend(_explore_new_subjects(catalog, completed_by_subject))

    if len(items) < limit:
        items.extend(_popular_resources(catalog))

    unique: Dict[str, ContentRecommendation] = {}
    for item in items:
        unique.setdefault(item.id, item)
    return list(unique.values())[:limit]


def recommendation_to_dict(item: ContentRecommendation) -> dict:
    return {
        "type": item.type,
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "difficulty": item.difficulty,
        "parentTitle": item.parent_title,
        "subject": item.subject,
        "subjectId": item.subject_id,
        "reason": item.reason,
    }
