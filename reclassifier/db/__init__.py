"""Database module."""
from reclassifier.db.base import (
    Base,
    UUIDMixin,
    TimestampMixin,
    engine,
    async_session_maker,
    get_session,
)

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "engine",
    "async_session_maker",
    "get_session",
]
