from fastapi import APIRouter, Depends

from aitutor.core.auth import get_current_user_id
from aitutor.core.errors import NotFoundError
from aitutor.features.progress.store import get_subject_progress, get_user_progress, touch_progress
from aitutor.features.progress.topics import SUBJECT_TOPICS
from aitutor.models.progress import UserProgress

router = APIRouter(prefix="/api/progress", tags=["progress"])


def progress_to_dict(progress: UserProgress) -> dict:
    return {
        "userId": progress.user_id,
        "subjectId": progress.subject_id,
        "lastAccessed": progress.last_accessed.isoformat() if progress.last_accessed else None,
        "messagesCount": progress.messages_count,
        "completedTopics": list(progress.completed_topics),
        "score": progress.score,
        "studyMinutes": progress.study_minutes,
        "subjectTopics": list(SUBJECT_TOPICS.get(progress.subject_id, ())),
    }


@router.get("")
def list_progress(user_id: str = Depends(get_current_user_id)):
    return {"data": [progress_to_dict(p) for p in get_user_progress(user_id)]}


@router.get("/{subject_id}")
def subject_progress(subject_id: str, user_id: str = Depends(get_current_user_id)):
    progress = get_subject_progress(user_id, subject_id)
    if progress is None:
        raise NotFoundError(f"No progress recorded for {subject_id}")
    return progress_to_dict(progress)


@router.post("/{subject_id}/visit")
def visit_subject(subject_id: str, user_id: str = Depends(get_current_user_id)):
    """Opening a subject counts as an interaction: creates the record or refreshes lastAccessed."""
    ok = touch_progress(user_id, subject_id)
    progress = get_subject_progress(user_id, subject_id)
    return {"success": ok, "data": progress_to_dict(progress) if progress else None}
