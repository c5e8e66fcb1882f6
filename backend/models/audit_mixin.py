from sqlalchemy import Column, DateTime
from datetime import datetime
import pytz

from config import APP_TIMEZONE


def now_local():
    return datetime.now(pytz.timezone(APP_TIMEZONE))


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Timestamps are timezone-aware and taken in the application timezone
    (APP_TIMEZONE, Asia/Kolkata by default). Nothing in this project is
    soft-deleted through a mixin: properties and tenants carry their own
    ``is_active`` flag and rent transactions are hard-deleted.
    """
    created_at = Column(DateTime(timezone=True), default=now_local)
    updated_at = Column(DateTime(timezone=True), onupdate=now_local)
