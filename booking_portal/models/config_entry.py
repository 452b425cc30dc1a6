# booking_portal/models/config_entry.py
from datetime import datetime

from sqlalchemy import Column, DateTime, JSON, String

from booking_portal.models.base import Base


class ConfigEntry(Base):
    """
    Durable key-value configuration (e.g. the availability policy).

    The value is opaque JSON; callers own its schema.
    """

    __tablename__ = "config_entries"

    key = Column(String(128), primary_key=True)
    value = Column(JSON, nullable=False, default=dict)

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )
