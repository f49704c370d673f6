"""Queue message value object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    """A submitted payload and the identifier it was submitted under."""

    identifier: str
    payload: str
    number_of_releases: int = 0
