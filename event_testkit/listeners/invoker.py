"""Catch-up of listeners against an event store."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.engine import Engine

from event_testkit.core.database import create_session_factory, session_scope
from event_testkit.event_store.store import EventStore
from event_testkit.events.domain import event_type_name
from event_testkit.listeners.identity import ListenerReference, listener_identity
from event_testkit.listeners.registry import ListenerRegistry
from event_testkit.models import AppliedEventsLogEntry

LOGGER = logging.getLogger("event_testkit.listeners.invoker")


class AppliedEventsLog:
    """Highest applied sequence number per listener, kept in the event store database."""

    def __init__(self, engine: Engine) -> None:
        self._sessions = create_session_factory(engine)

    def highest_applied_sequence_number(self, listener: str) -> int:
        with session_scope(self._sessions) as session:
            value = session.scalar(
                select(AppliedEventsLogEntry.highest_applied_sequence_number).where(
                    AppliedEventsLogEntry.listener == listener
                )
            )
        return -1 if value is None else value

    def save_highest_applied_sequence_number(self, listener: str, sequence_number: int) -> None:
        with session_scope(self._sessions) as session:
            entry = session.get(AppliedEventsLogEntry, listener)
            if entry is None:
                session.add(
                    AppliedEventsLogEntry(listener=listener, highest_applied_sequence_number=sequence_number)
                )
            else:
                entry.highest_applied_sequence_number = sequence_number


class ListenerInvoker:
    """Replays unseen events of a store into one listener."""

    def __init__(self, registry: ListenerRegistry) -> None:
        self._registry = registry

    def catch_up(self, listener: ListenerReference, event_store: EventStore) -> int:
        """Apply every event after the listener's last position; returns how many were handled."""

        identity = listener_identity(listener)
        instance = self._registry.get(identity)
        handled_types = {event_type_name(event_type) for event_type in instance.handled_event_types()}
        applied_log = AppliedEventsLog(event_store.engine)

        position = applied_log.highest_applied_sequence_number(identity)
        applied = 0
        for envelope in event_store.load_all(position + 1):
            if envelope.raw_event.type in handled_types:
                instance.apply(envelope.domain_event)
                applied += 1
            applied_log.save_highest_applied_sequence_number(identity, envelope.raw_event.sequence_number)

        LOGGER.info(
            "listener_caught_up",
            extra={
                "listener": identity,
                "event_store": event_store.identifier,
                "applied_events": applied,
            },
        )
        return applied
