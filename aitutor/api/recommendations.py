from fastapi import APIRouter, Depends, Query

from aitutor.core.auth import get_current_user_id
from aitutor.features.progress.store import get_user_progress
from aitutor.features.recommendations.engine import recommend, recommendation_to_dict

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("")
def get_recommendations(
    limit: int = Query(5, ge=0, le=20),
    user_id: str = Depends(get_current_user_id),
):
    """Computed fresh from the user's progress; a store outage yields new-subject suggestions."""
    items = recommend(get_user_progress(user_id), limit=limit)
    return {"data": [recommendation_to_dict(item) for item in items]}
