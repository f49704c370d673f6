"""Domain event primitives."""

from event_testkit.events.domain import (  # noqa: F401
    DecoratedEvent,
    DomainEvent,
    DomainEvents,
    event_type_name,
    event_type_of,
)
