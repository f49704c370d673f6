"""Conversion between domain events and their stored representation."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from event_testkit.core.errors import UnknownEventType
from event_testkit.core.imports import resolve_qualified_name
from event_testkit.events.domain import DomainEvent, event_type_name


class EventNormalizer:
    """Maps domain events to ``(type name, JSON payload)`` pairs and back."""

    def __init__(self) -> None:
        self._resolved: Dict[str, type[DomainEvent]] = {}

    def normalize(self, event: DomainEvent) -> Tuple[str, Dict[str, Any]]:
        return event_type_name(type(event)), event.model_dump(mode="json")

    def denormalize(self, type_name: str, payload: Dict[str, Any]) -> DomainEvent:
        return self.resolve(type_name).model_validate(payload)

    def resolve(self, type_name: str) -> type[DomainEvent]:
        event_type = self._resolved.get(type_name)
        if event_type is not None:
            return event_type

        candidate = resolve_qualified_name(type_name)
        if candidate is None or not issubclass(candidate, DomainEvent):
            raise UnknownEventType(f"Event type {type_name} could not be resolved to a domain event class")
        self._resolved[type_name] = candidate
        return candidate
