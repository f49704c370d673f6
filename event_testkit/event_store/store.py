"""Append-only event store persisted with SQLAlchemy."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Engine

from event_testkit.core.database import create_session_factory, session_scope
from event_testkit.core.errors import EventStoreNotConfigured
from event_testkit.events.domain import AnyEvent, DecoratedEvent, DomainEvent, DomainEvents, undecorated
from event_testkit.events.normalizer import EventNormalizer
from event_testkit.events.publisher import EventPublisher, NullEventPublisher
from event_testkit.models import Base, StoredEvent

LOGGER = logging.getLogger("event_testkit.event_store")


@dataclass(frozen=True)
class RawEvent:
    """An event as it was persisted."""

    sequence_number: int
    stream_name: str
    version: int
    type: str
    payload: Dict[str, Any]
    metadata: Dict[str, Any]
    identifier: str
    recorded_at: datetime
    correlation_identifier: Optional[str] = None
    causation_identifier: Optional[str] = None


@dataclass(frozen=True)
class EventEnvelope:
    """Pairs a persisted raw event with its reconstructed domain event."""

    raw_event: RawEvent
    domain_event: DomainEvent = field(compare=False)


class EventStore:
    """Event streams of one event store identifier."""

    def __init__(
        self,
        identifier: str,
        *,
        engine: Engine,
        publisher: Optional[EventPublisher] = None,
        normalizer: Optional[EventNormalizer] = None,
    ) -> None:
        self.identifier = identifier
        self._engine = engine
        self._sessions = create_session_factory(engine)
        self._publisher = publisher or NullEventPublisher()
        self._normalizer = normalizer or EventNormalizer()
        self._schema_verified = False

    @property
    def engine(self) -> Engine:
        return self._engine

    def setup(self) -> None:
        """Create the event and applied-events tables if missing. Idempotent."""

        Base.metadata.create_all(bind=self._engine)
        self._schema_verified = True
        LOGGER.debug("event_store_setup", extra={"event_store": self.identifier})

    def commit(self, stream_name: str, events: Union[DomainEvents, Iterable[AnyEvent]]) -> None:
        """Append ``events`` to ``stream_name`` and hand them to the publisher."""

        if not isinstance(events, DomainEvents):
            events = DomainEvents.from_events(events)
        if events.is_empty():
            return
        self._ensure_schema()

        with session_scope(self._sessions) as session:
            current_version = session.scalar(
                select(func.max(StoredEvent.version)).where(StoredEvent.stream == stream_name)
            )
            version = -1 if current_version is None else current_version
            for event in events:
                version += 1
                session.add(self._to_record(stream_name, version, event))

        LOGGER.info(
            "events_committed",
            extra={"event_store": self.identifier, "stream": stream_name, "event_count": len(events)},
        )
        self._publisher.publish(events)

    def load(self, stream_name: str, minimum_sequence_number: int = 0) -> List[EventEnvelope]:
        """Events of one stream with a sequence number of at least ``minimum_sequence_number``."""

        self._ensure_schema()
        stmt = (
            select(StoredEvent)
            .where(StoredEvent.stream == stream_name)
            .where(StoredEvent.sequence_number >= minimum_sequence_number)
            .order_by(StoredEvent.sequence_number)
        )
        return self._load(stmt)

    def load_all(self, minimum_sequence_number: int = 0) -> List[EventEnvelope]:
        """Events of every stream, in global commit order."""

        self._ensure_schema()
        stmt = (
            select(StoredEvent)
            .where(StoredEvent.sequence_number >= minimum_sequence_number)
            .order_by(StoredEvent.sequence_number)
        )
        return self._load(stmt)

    def dispose(self) -> None:
        self._engine.dispose()

    def _load(self, stmt) -> List[EventEnvelope]:
        with session_scope(self._sessions) as session:
            return [self._to_envelope(record) for record in session.scalars(stmt)]

    def _to_record(self, stream_name: str, version: int, event: AnyEvent) -> StoredEvent:
        type_name, payload = self._normalizer.normalize(undecorated(event))
        metadata: Dict[str, Any] = {}
        identifier = None
        correlation_identifier = None
        causation_identifier = None
        if isinstance(event, DecoratedEvent):
            metadata = dict(event.metadata)
            identifier = event.identifier
            correlation_identifier = event.correlation_identifier
            causation_identifier = event.causation_identifier

        return StoredEvent(
            stream=stream_name,
            version=version,
            type=type_name,
            payload=payload,
            metadata_=metadata,
            event_id=identifier or str(uuid.uuid4()),
            correlation_id=correlation_identifier,
            causation_id=causation_identifier,
        )

    def _to_envelope(self, record: StoredEvent) -> EventEnvelope:
        raw_event = RawEvent(
            sequence_number=record.sequence_number,
            stream_name=record.stream,
            version=record.version,
            type=record.type,
            payload=dict(record.payload),
            metadata=dict(record.metadata_),
            identifier=record.event_id,
            recorded_at=record.recorded_at,
            correlation_identifier=record.correlation_id,
            causation_identifier=record.causation_id,
        )
        return EventEnvelope(
            raw_event=raw_event,
            domain_event=self._normalizer.denormalize(record.type, raw_event.payload),
        )

    def _ensure_schema(self) -> None:
        if self._schema_verified:
            return
        if not inspect(self._engine).has_table(StoredEvent.__tablename__):
            raise EventStoreNotConfigured(
                f'Event store "{self.identifier}" has not been set up, call setup() first'
            )
        self._schema_verified = True
