"""Filters for picking objects out of collections in assertions."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

Capability = Callable[[Any], bool]


def instance_of(cls: type) -> Capability:
    """Capability satisfied by instances of ``cls``."""

    return lambda item: isinstance(item, cls)


def find_instances_of(subject: Iterable[T], capability: Capability) -> List[T]:
    return [item for item in subject if capability(item)]


def find_first_instance_of(subject: Iterable[T], capability: Capability) -> Optional[T]:
    return next((item for item in subject if capability(item)), None)
