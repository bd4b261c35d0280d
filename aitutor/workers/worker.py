# Run this with: rq worker -u redis://localhost:6379/0 weekly-summary
# or: python -m aitutor.workers.worker (small worker loop for dev)
import logging

from redis import Redis
from rq import Queue, Worker

from aitutor.core.config import settings
from aitutor.core.database import init_engine
from aitutor.core.logging import configure_logging

logger = logging.getLogger("aitutor")


def main() -> None:
    configure_logging(settings.ENV)
    init_engine()
    conn = Redis.from_url(settings.REDIS_URL)
    worker = Worker([Queue(settings.SUMMARY_QUEUE_NAME, connection=conn)], connection=conn)
    logger.info(f"Starting RQ worker on queue {settings.SUMMARY_QUEUE_NAME}")
    worker.work()


if __name__ == "__main__":
    main()
