"""Publisher contract used by event stores after a successful commit."""

from __future__ import annotations

import logging
from typing import Protocol

from event_testkit.events.domain import DomainEvents

LOGGER = logging.getLogger("event_testkit.events.publisher")


class EventPublisher(Protocol):
    """Receives every batch of events an event store has committed."""

    def publish(self, events: DomainEvents) -> None:
        ...


class NullEventPublisher(EventPublisher):
    """No-op publisher for stores nobody listens to."""

    def publish(self, events: DomainEvents) -> None:  # noqa: D401
        LOGGER.debug("events_publish_skipped", extra={"event_count": len(events)})
