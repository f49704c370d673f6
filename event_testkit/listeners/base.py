"""Base class for event listeners.

Listeners declare the event types they react to by decorating methods with
``@handles``::

    class OrderProjector(EventListener):
        @handles(OrderPlaced)
        def on_order_placed(self, event: OrderPlaced) -> None:
            ...
"""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, Tuple, TypeVar

from event_testkit.events.domain import AnyEvent, event_type_of, undecorated

_HANDLED_EVENT_TYPES = "__handled_event_types__"

F = TypeVar("F", bound=Callable[..., object])


def handles(*event_types: type) -> Callable[[F], F]:
    """Mark a listener method as the handler for ``event_types``."""

    def decorator(method: F) -> F:
        setattr(method, _HANDLED_EVENT_TYPES, getattr(method, _HANDLED_EVENT_TYPES, ()) + event_types)
        return method

    return decorator


class EventListener:
    """Reacts to domain events it has handlers for."""

    _event_handlers: ClassVar[Dict[type, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        handlers: Dict[type, str] = {}
        for name in dir(cls):
            for event_type in getattr(getattr(cls, name, None), _HANDLED_EVENT_TYPES, ()):
                handlers[event_type] = name
        cls._event_handlers = handlers

    @classmethod
    def handled_event_types(cls) -> Tuple[type, ...]:
        return tuple(cls._event_handlers)

    def apply(self, event: AnyEvent) -> bool:
        """Call the handler for ``event``; False if this listener ignores its type."""

        handler_name = self._event_handlers.get(event_type_of(event))
        if handler_name is None:
            return False
        getattr(self, handler_name)(undecorated(event))
        return True
