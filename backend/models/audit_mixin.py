from sqlalchemy import Column, DateTime, String
from utils.time_utils import now


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Timestamps are timezone-aware and stamped in the configured APP_TIMEZONE.
    DateTime(timezone=True) ensures the timezone info is persisted in the database.
    """
    created_at = Column(DateTime(timezone=True), default=now)
    updated_at = Column(DateTime(timezone=True), default=now, onupdate=now)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)


class CreatedAtMixin:
    """Creation timestamp only, for append-only and lookup tables."""
    created_at = Column(DateTime(timezone=True), default=now, nullable=False)
