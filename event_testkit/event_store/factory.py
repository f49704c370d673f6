"""Creates and caches one event store per identifier."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from event_testkit.core.config import TestkitSettings
from event_testkit.core.database import create_event_store_engine
from event_testkit.event_store.store import EventStore
from event_testkit.events.normalizer import EventNormalizer
from event_testkit.events.publisher import EventPublisher

LOGGER = logging.getLogger("event_testkit.event_store.factory")


class PublisherFactory(Protocol):
    """Hands out the publisher for an event store identifier."""

    def create(self, event_store_identifier: str) -> EventPublisher:
        ...


class EventStoreFactory:
    """Builds event stores wired to the publishers of a publisher factory.

    Every identifier gets its own engine; stores configured with the same
    file database share its tables and therefore its streams.
    """

    def __init__(
        self,
        settings: TestkitSettings,
        publisher_factory: PublisherFactory,
        normalizer: Optional[EventNormalizer] = None,
    ) -> None:
        self._settings = settings
        self._publisher_factory = publisher_factory
        self._normalizer = normalizer or EventNormalizer()
        self._stores: Dict[str, EventStore] = {}

    def create(self, event_store_identifier: str) -> EventStore:
        store = self._stores.get(event_store_identifier)
        if store is not None:
            return store

        url = self._settings.event_store_url(event_store_identifier)
        store = EventStore(
            event_store_identifier,
            engine=create_event_store_engine(url, echo=self._settings.sql_echo),
            publisher=self._publisher_factory.create(event_store_identifier),
            normalizer=self._normalizer,
        )
        self._stores[event_store_identifier] = store
        LOGGER.debug("event_store_created", extra={"event_store": event_store_identifier})
        return store

    def dispose(self) -> None:
        """Release all engines; later ``create`` calls start over."""

        for store in self._stores.values():
            store.dispose()
        self._stores.clear()
