"""Row model for committed events."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from event_testkit.models.base import Base
from event_testkit.models.types import JSONType


class StoredEvent(Base):
    """Immutable record of one event appended to a stream."""

    __tablename__ = "event_store_events"
    __table_args__ = (
        UniqueConstraint("stream", "version", name="uq_event_store_events_stream_version"),
        UniqueConstraint("event_id", name="uq_event_store_events_event_id"),
        Index("ix_event_store_events_type", "type"),
    )

    sequence_number: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    stream: Mapped[str] = mapped_column(String(length=255), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(length=255), nullable=False)
    payload: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    metadata_: Mapped[dict] = mapped_column("metadata", JSONType, nullable=False, default=dict)
    event_id: Mapped[str] = mapped_column(String(length=255), nullable=False)
    correlation_id: Mapped[str | None] = mapped_column(String(length=255), nullable=True)
    causation_id: Mapped[str | None] = mapped_column(String(length=255), nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
