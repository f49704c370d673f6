"""Associations between event types and listeners."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class EventToListenerMapping(BaseModel):
    """One event type routed to one listener, with dispatch options.

    Recognized options are ``queueName`` and ``queueOptions``; anything else is
    carried along untouched.
    """

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(..., min_length=1)
    listener: str = Field(..., min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)
