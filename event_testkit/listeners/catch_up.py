"""Job telling one listener to catch up with one event store."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from event_testkit.queue.jobs import register_job
from event_testkit.queue.message import Message

if TYPE_CHECKING:
    from event_testkit.queue.contracts import Queue


@register_job
class CatchUpListenerJob(BaseModel):
    """Replays unseen events of ``event_store`` into ``listener``."""

    model_config = ConfigDict(frozen=True)

    job_type: ClassVar[str] = "catch_up_listener"

    listener: str = Field(..., min_length=1)
    event_store: str = Field(..., min_length=1)

    @property
    def label(self) -> str:
        return f'Catch up event listener "{self.listener}" from event store "{self.event_store}"'

    def execute(self, queue: "Queue", message: Message) -> bool:
        runtime = getattr(queue, "runtime", None)
        if runtime is None:
            from event_testkit.runtime import get_runtime

            runtime = get_runtime()
        event_store = runtime.event_store_factory.create(self.event_store)
        runtime.listener_invoker.catch_up(self.listener, event_store)
        return True
