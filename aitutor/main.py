import logging
import os
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load env from aitutor/.env
package_dir = os.path.dirname(os.path.abspath(__file__))
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv(dotenv_path=os.path.join(package_dir, ".env"))

from aitutor.api import chat, health, notifications, profile, progress, recommendations, streaks, subjects  # noqa: E402
from aitutor.core.config import settings, validate_config  # noqa: E402
from aitutor.core.database import create_all_tables, dispose_engine, get_database_url, init_engine  # noqa: E402
from aitutor.core.errors import (  # noqa: E402
    AppError,
    app_error_handler,
    http_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from aitutor.core.logging import configure_logging  # noqa: E402
from aitutor.core.middleware.request_id import RequestIdMiddleware  # noqa: E402
from aitutor.core.validation import validate_env  # noqa: E402

configure_logging(settings.ENV)
validate_env()
validate_config(strict=getattr(settings, "CONFIG_STRICT", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("aitutor")
    logger.info("Starting AI Tutor backend...")
    app.state.startup_time = time.time()

    owns_engine = False
    if get_database_url():
        init_engine()
        create_all_tables()
        owns_engine = True
    else:
        logger.warning("No DATABASE_URL configured; notifications and progress run in demo mode")

    try:
        yield
    finally:
        if owns_engine:
            dispose_engine()
        logging.getLogger("aitutor").info("Stopping AI Tutor backend...")


def create_app() -> FastAPI:
    app = FastAPI(title="AI Tutor - Backend", lifespan=lifespan)

    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # CORS (adjust origins in production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)
    app.include_router(notifications.router)
    app.include_router(streaks.router)
    app.include_router(progress.router)
    app.include_router(recommendations.router)
    app.include_router(subjects.router)
    app.include_router(profile.router)
    app.include_router(health.root_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("aitutor.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=settings.ENV == "development")
