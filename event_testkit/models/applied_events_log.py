"""Per-listener catch-up progress."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from event_testkit.models.base import Base


class AppliedEventsLogEntry(Base):
    """Highest sequence number a listener has applied from its event store."""

    __tablename__ = "applied_events_log"

    listener: Mapped[str] = mapped_column(String(length=255), primary_key=True)
    highest_applied_sequence_number: Mapped[int] = mapped_column(Integer, nullable=False, default=-1)
