"""Weekly summary job. Schedule `enqueue_weekly_summary()` from cron or run the module directly."""
import logging
from typing import Optional

from redis import Redis
from rq import Queue

from aitutor.core.config import settings
from aitutor.core.database import is_configured
from aitutor.core.errors import StoreUnavailableError
from aitutor.features.notifications.summary import send_weekly_summaries

logger = logging.getLogger("aitutor.workers.summary")


def run_weekly_summary() -> dict:
    if not is_configured():
        raise StoreUnavailableError("Database is not configured")
    stats = send_weekly_summaries()
    logger.info("[summary] weekly summary job finished", extra=stats)
    return stats


def get_summary_queue(redis_url: Optional[str] = None, connection: Optional[Redis] = None) -> Queue:
    conn = connection or Redis.from_url(redis_url or settings.REDIS_URL)
    return Queue(settings.SUMMARY_QUEUE_NAME, connection=conn)


def enqueue_weekly_summary(redis_url: Optional[str] = None, connection: Optional[Redis] = None) -> str:
    """Returns the rq job id."""
    queue = get_summary_queue(redis_url, connection)
    job = queue.enqueue(run_weekly_summary, job_timeout="10m", result_ttl=86400)
    logger.info(f"[summary] enqueued weekly summary job {job.id}")
    return job.id


if __name__ == "__main__":
    print(run_weekly_summary())
