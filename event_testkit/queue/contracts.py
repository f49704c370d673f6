"""Contract every queue backend satisfies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from event_testkit.queue.message import Message


class Queue(Protocol):
    """Backend the job manager submits serialized jobs to.

    ``wait_and_take``, ``wait_and_reserve`` and ``release`` exist for
    worker-driven backends. Backends without workers raise
    ``UnsupportedOperation`` from them instead of returning a message.
    """

    @property
    def name(self) -> str:
        ...

    def set_up(self) -> None:
        ...

    def submit(self, payload: str, options: Optional[Dict[str, Any]] = None) -> str:
        ...

    def wait_and_take(self, timeout: Optional[int] = None) -> Message:
        ...

    def wait_and_reserve(self, timeout: Optional[int] = None) -> Message:
        ...

    def release(self, message_id: str, options: Optional[Dict[str, Any]] = None) -> None:
        ...

    def abort(self, message_id: str) -> None:
        ...

    def finish(self, message_id: str) -> bool:
        ...

    def peek(self, limit: int = 1) -> List[Message]:
        ...

    def count_ready(self) -> int:
        ...

    def count_reserved(self) -> int:
        ...

    def count_failed(self) -> int:
        ...

    def flush(self) -> None:
        ...
