"""Domain events, decoration and ordered event collections."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from event_testkit.core.imports import qualified_name


class DomainEvent(BaseModel):
    """Base class for immutable domain facts."""

    model_config = ConfigDict(frozen=True)


class DecoratedEvent(BaseModel):
    """Wraps one domain event with metadata and tracing identifiers.

    Decorating an already decorated event merges into the existing wrapper,
    so the wrapped event is always an undecorated ``DomainEvent``.
    """

    model_config = ConfigDict(frozen=True)

    event: DomainEvent
    metadata: Dict[str, Any] = Field(default_factory=dict)
    identifier: Optional[str] = Field(default=None, min_length=1, max_length=255)
    causation_identifier: Optional[str] = Field(default=None, min_length=1, max_length=255)
    correlation_identifier: Optional[str] = Field(default=None, min_length=1, max_length=255)

    @classmethod
    def add_metadata(cls, event: "AnyEvent", metadata: Dict[str, Any]) -> "DecoratedEvent":
        if isinstance(event, DecoratedEvent):
            return event.model_copy(update={"metadata": {**event.metadata, **metadata}})
        return cls(event=event, metadata=dict(metadata))

    @classmethod
    def add_identifier(cls, event: "AnyEvent", identifier: str) -> "DecoratedEvent":
        return cls._decorate(event, identifier=identifier)

    @classmethod
    def add_causation_identifier(cls, event: "AnyEvent", causation_identifier: str) -> "DecoratedEvent":
        return cls._decorate(event, causation_identifier=causation_identifier)

    @classmethod
    def add_correlation_identifier(cls, event: "AnyEvent", correlation_identifier: str) -> "DecoratedEvent":
        return cls._decorate(event, correlation_identifier=correlation_identifier)

    @classmethod
    def _decorate(cls, event: "AnyEvent", **fields: str) -> "DecoratedEvent":
        if isinstance(event, DecoratedEvent):
            # Rebuild rather than model_copy so field constraints are validated.
            return cls(**{**dict(event), **fields})
        return cls(event=event, **fields)

    @property
    def wrapped_event(self) -> DomainEvent:
        return self.event


AnyEvent = Union[DomainEvent, DecoratedEvent]


def event_type_of(event: AnyEvent) -> type:
    """Return the concrete event class, unwrapping decoration."""

    if isinstance(event, DecoratedEvent):
        return type(event.event)
    return type(event)


def event_type_name(event_type: type) -> str:
    """Stable identity of an event class, as used in mappings and storage."""

    return qualified_name(event_type)


def undecorated(event: AnyEvent) -> DomainEvent:
    return event.event if isinstance(event, DecoratedEvent) else event


class DomainEvents:
    """Immutable, ordered collection of events committed or published together."""

    __slots__ = ("_events",)

    def __init__(self, events: Tuple[AnyEvent, ...] = ()) -> None:
        self._events = events

    @classmethod
    def from_events(cls, events: Iterable[AnyEvent]) -> "DomainEvents":
        return cls(tuple(events))

    @classmethod
    def with_single_event(cls, event: AnyEvent) -> "DomainEvents":
        return cls((event,))

    @classmethod
    def empty(cls) -> "DomainEvents":
        return cls()

    def append_event(self, event: AnyEvent) -> "DomainEvents":
        return DomainEvents(self._events + (event,))

    def append_events(self, other: Iterable[AnyEvent]) -> "DomainEvents":
        return DomainEvents(self._events + tuple(other))

    def map(self, transform: Callable[[AnyEvent], AnyEvent]) -> "DomainEvents":
        return DomainEvents(tuple(transform(event) for event in self._events))

    def is_empty(self) -> bool:
        return not self._events

    def __iter__(self) -> Iterator[AnyEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index: int) -> AnyEvent:
        return self._events[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainEvents):
            return NotImplemented
        return self._events == other._events

    def __repr__(self) -> str:
        return f"DomainEvents({list(self._events)!r})"
