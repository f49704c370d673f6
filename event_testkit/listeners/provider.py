"""Builds event-to-listener mappings per event store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from event_testkit.core.errors import InvalidListener
from event_testkit.events.domain import event_type_name
from event_testkit.listeners.identity import (
    ListenerReference,
    is_event_listener,
    listener_identity,
    resolve_listener_class,
)
from event_testkit.listeners.mapping import EventToListenerMapping

LOGGER = logging.getLogger("event_testkit.listeners.provider")


class ListenerMappingProvider:
    """Collects the listeners attached to each event store.

    Listeners come from configuration (event store identifier -> listener path ->
    options) and from explicit ``register`` calls. Every event type a listener
    handles yields one mapping.
    """

    def __init__(self, configured: Optional[Mapping[str, Mapping[str, Dict[str, Any]]]] = None) -> None:
        self._listeners: Dict[str, Dict[str, Tuple[type, Dict[str, Any]]]] = {}
        for event_store_identifier, listeners in (configured or {}).items():
            for listener, options in listeners.items():
                self.register(event_store_identifier, listener, **(options or {}))

    def register(self, event_store_identifier: str, listener: ListenerReference, **options: Any) -> None:
        if not is_event_listener(listener):
            raise InvalidListener(listener_identity(listener))
        identity = listener_identity(listener)
        listener_class = resolve_listener_class(listener)
        self._listeners.setdefault(event_store_identifier, {})[identity] = (listener_class, dict(options))
        LOGGER.debug(
            "listener_registered",
            extra={"event_store": event_store_identifier, "listener": identity},
        )

    def get_mappings_for_event_store(self, event_store_identifier: str) -> Tuple[EventToListenerMapping, ...]:
        mappings: List[EventToListenerMapping] = []
        for identity, (listener_class, options) in self._listeners.get(event_store_identifier, {}).items():
            for event_type in listener_class.handled_event_types():
                mappings.append(
                    EventToListenerMapping(
                        event_type=event_type_name(event_type),
                        listener=identity,
                        options=options,
                    )
                )
        return tuple(mappings)
