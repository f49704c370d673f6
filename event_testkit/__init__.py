"""Event-sourcing test harness with deterministic, synchronous listener dispatch."""

from event_testkit.events.domain import DecoratedEvent, DomainEvent, DomainEvents  # noqa: F401
from event_testkit.listeners.base import EventListener, handles  # noqa: F401
from event_testkit.runtime import TestkitRuntime, get_runtime, set_runtime  # noqa: F401
from event_testkit.testing.allow_list import (  # noqa: F401
    allowed_listeners,
    with_allowed_listeners,
    without_any_listeners,
)
from event_testkit.testing.builder import EventStoreBuilder  # noqa: F401
