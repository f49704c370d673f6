"""Event listeners, their mappings and catch-up."""

from event_testkit.listeners.base import EventListener, handles  # noqa: F401
from event_testkit.listeners.identity import is_event_listener, listener_identity  # noqa: F401
from event_testkit.listeners.mapping import EventToListenerMapping  # noqa: F401
from event_testkit.listeners.provider import ListenerMappingProvider  # noqa: F401
