"""Listener instances used for catch-up."""

from __future__ import annotations

from typing import Dict

from event_testkit.core.errors import InvalidListener
from event_testkit.listeners.base import EventListener
from event_testkit.listeners.identity import ListenerReference, listener_identity, resolve_listener_class


class ListenerRegistry:
    """Hands out one listener instance per identity.

    Instances are created with no arguments on first use unless one was
    registered explicitly, which is how tests observe listener side effects.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, EventListener] = {}

    def register(self, listener: EventListener) -> None:
        self._instances[listener_identity(type(listener))] = listener

    def get(self, reference: ListenerReference) -> EventListener:
        identity = listener_identity(reference)
        instance = self._instances.get(identity)
        if instance is not None:
            return instance

        listener_class = resolve_listener_class(reference)
        if listener_class is None or not issubclass(listener_class, EventListener):
            raise InvalidListener(identity)
        instance = listener_class()
        self._instances[identity] = instance
        return instance
