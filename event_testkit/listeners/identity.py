"""Listener identities.

A listener is identified by the import path of its class (``module:QualName``).
Classes are accepted wherever an identity is expected.
"""

from __future__ import annotations

from typing import Optional, Union

from event_testkit.core.imports import qualified_name, resolve_qualified_name
from event_testkit.listeners.base import EventListener

ListenerReference = Union[str, type]


def resolve_listener_class(reference: ListenerReference) -> Optional[type]:
    if isinstance(reference, type):
        return reference
    return resolve_qualified_name(reference)


def is_event_listener(reference: ListenerReference) -> bool:
    """Capability check: does ``reference`` name an ``EventListener`` subclass?"""

    listener_class = resolve_listener_class(reference)
    return listener_class is not None and issubclass(listener_class, EventListener)


def listener_identity(reference: ListenerReference) -> str:
    """Canonical identity string for ``reference``."""

    listener_class = resolve_listener_class(reference)
    if listener_class is None:
        return str(reference)
    return qualified_name(listener_class)
