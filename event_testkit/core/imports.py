"""Helpers for naming classes by import path and resolving them back."""

from __future__ import annotations

import importlib
from typing import Optional


def qualified_name(cls: type) -> str:
    """Return the ``module:QualName`` path for ``cls``."""

    return f"{cls.__module__}:{cls.__qualname__}"


def resolve_qualified_name(path: str) -> Optional[type]:
    """Resolve ``module:QualName`` (or ``module.Name``) to a class, or ``None``."""

    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
    else:
        module_name, _, attribute_path = path.rpartition(".")
    if not module_name or not attribute_path:
        return None

    try:
        target: object = importlib.import_module(module_name)
    except ImportError:
        return None

    for attribute in attribute_path.split("."):
        target = getattr(target, attribute, None)
        if target is None:
            return None
    return target if isinstance(target, type) else None
