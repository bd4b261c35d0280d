"""
Document store configuration and connection management.

This module provides:
- SQLAlchemy engine and session management
- Connection pooling with sane defaults (StaticPool for SQLite)
- Table definitions for the tutor collections
- "Unconfigured" detection so callers can fall back to mock/demo mode
"""
import logging
from typing import Optional
from contextlib import contextmanager
from sqlalchemy import create_engine, MetaData, Table, Column, Integer, String, DateTime, Date, Boolean, JSON, Text, Index
from sqlalchemy.pool import QueuePool, StaticPool
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql import func
import os

from aitutor.core.config import settings

logger = logging.getLogger("aitutor")

# SQLAlchemy metadata for table definitions
metadata = MetaData()

# Connection pooling configuration
POOL_SIZE = 10
MAX_OVERFLOW = 20
POOL_TIMEOUT = 30
POOL_RECYCLE = 3600  # Recycle connections after 1 hour

# Global engine and session factory
_engine = None
_SessionLocal = None


def get_database_url() -> Optional[str]:
    """
    Get the database URL from settings or environment.

    For testing, use TEST_DATABASE_URL if available.
    """
    test_url = os.getenv("TEST_DATABASE_URL")
    if test_url:
        return test_url

    return settings.DATABASE_URL


def init_engine(database_url: Optional[str] = None):
    """
    Initialize the SQLAlchemy engine.

    Args:
        database_url: Optional override for DATABASE_URL
    """
    global _engine, _SessionLocal

    url = database_url or get_database_url()

    if not url:
        raise ValueError(
            "DATABASE_URL is not configured. "
            "Set DATABASE_URL in environment or .env file."
        )

    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        _engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    else:
        _engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_timeout=POOL_TIMEOUT,
            pool_recycle=POOL_RECYCLE,
            echo=False,  # Set to True for SQL query logging
        )

    # Create session factory
    _SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=_engine
    )

    return _engine


def dispose_engine() -> None:
    """Drop the current engine; the store reads as unconfigured until re-initialized."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def is_configured() -> bool:
    """True when a document store is available (initialized or configured by URL)."""
    return _engine is not None or bool(get_database_url())


def get_engine():
    """Get the current SQLAlchemy engine."""
    global _engine
    if _engine is None:
        init_engine()
    return _engine


def get_session_factory():
    """Get the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.

    Usage:
        with get_db_session() as session:
            session.execute(...)
    """
    SessionLocal = get_session_factory()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all_tables():
    """
    Create all tables defined in metadata.

    This is idempotent - tables that already exist will not be recreated.
    """
    engine = get_engine()
    metadata.create_all(bind=engine)


def progress_key(user_id: str, subject_id: str) -> str:
    """Progress records are keyed by user and subject concatenation."""
    return f"{user_id}_{subject_id}"


# userProfiles
user_profiles = Table(
    'user_profiles',
    metadata,
    Column('uid', String(128), primary_key=True),
    Column('display_name', Text, nullable=False, server_default=''),
    Column('email', String(320), nullable=False, server_default=''),
    Column('photo_url', Text, nullable=True),
    Column('bio', Text, nullable=True),
    Column('notifications_enabled', Boolean, nullable=False, server_default='1'),
    Column('email_updates', Boolean, nullable=False, server_default='1'),
    Column('learning_goals', JSON, nullable=True),
    Column('created_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
    Column('last_updated', DateTime(timezone=True), server_default=func.now(), nullable=False),
)

# userProgress, keyed "{userId}_{subjectId}"
user_progress = Table(
    'user_progress',
    metadata,
    Column('id', String(300), primary_key=True),
    Column('user_id', String(128), nullable=False),
    Column('subject_id', String(100), nullable=False),
    Column('last_accessed', DateTime(timezone=True), nullable=True),
    Column('messages_count', Integer, nullable=False, server_default='0'),
    Column('completed_topics', JSON, nullable=False),
    Column('score', Integer, nullable=True),
    Column('study_minutes', Integer, nullable=False, server_default='0'),
    Column('created_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
    Column('last_updated', DateTime(timezone=True), server_default=func.now(), nullable=False),
    Index('idx_user_progress_user_accessed', 'user_id', 'last_accessed'),
)

# userStreaks, keyed by user id
user_streaks = Table(
    'user_streaks',
    metadata,
    Column('user_id', String(128), primary_key=True),
    Column('current_streak', Integer, nullable=False, server_default='0'),
    Column('longest_streak', Integer, nullable=False, server_default='0'),
    Column('last_login_date', Date, nullable=True),
    Column('streak_milestones', JSON, nullable=False),
)

# chatMessages
chat_messages = Table(
    'chat_messages',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(128), nullable=False),
    Column('subject_id', String(100), nullable=False),
    Column('role', String(20), nullable=False),
    Column('content', Text, nullable=False),
    Column('timestamp', DateTime(timezone=True), server_default=func.now(), nullable=False),
    Index('idx_chat_messages_user_subject', 'user_id', 'subject_id', 'timestamp'),
)

# notifications
notifications = Table(
    'notifications',
    metadata,
    Column('id', String(64), primary_key=True),
    Column('user_id', String(128), nullable=False),
    Column('title', Text, nullable=False),
    Column('message', Text, nullable=False),
    Column('type', String(20), nullable=False),
    Column('is_read', Boolean, nullable=False, server_default='0'),
    Column('created_at', DateTime(timezone=True), nullable=False),
    Column('link', Text, nullable=True),
    Index('idx_notifications_user_created', 'user_id', 'created_at'),
)
