"""Queue that runs every submitted job immediately in the calling process."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from event_testkit.core.errors import InvalidPayload, JobExecutionFailed, UnsupportedOperation
from event_testkit.queue.jobs import deserialize_job
from event_testkit.queue.message import Message

if TYPE_CHECKING:
    from event_testkit.runtime import TestkitRuntime

LOGGER = logging.getLogger("event_testkit.queue.same_process")

_NO_WORKER_NEEDED = (
    "It is not required to use a worker for this queue as messages are handled immediately upon submission."
)


class SameProcessQueue:
    """Executes jobs on submission; nothing is ever stored.

    ``submit`` blocks until the job has run. Reserving, taking and releasing
    messages raise ``UnsupportedOperation``; peeking and counting always
    report an empty queue.

    Jobs find their collaborators through ``runtime``; a queue built without
    one leaves them to the process runtime.
    """

    def __init__(
        self,
        name: str,
        options: Optional[Dict[str, Any]] = None,
        *,
        runtime: Optional["TestkitRuntime"] = None,
    ) -> None:
        self._name = name
        self._options = dict(options or {})
        self.runtime = runtime

    @property
    def name(self) -> str:
        return self._name

    def set_up(self) -> None:
        pass

    def submit(self, payload: str, options: Optional[Dict[str, Any]] = None) -> str:
        message_id = str(uuid.uuid4())
        message = Message(identifier=message_id, payload=payload)
        job = deserialize_job(payload)
        if job is None:
            raise InvalidPayload("Given payload could not be deserialized to a job")

        LOGGER.debug("job_executing", extra={"queue": self._name, "job": job.label, "message_id": message_id})
        if not job.execute(self, message):
            raise JobExecutionFailed(job.label)
        return message_id

    def wait_and_take(self, timeout: Optional[int] = None) -> Message:
        raise UnsupportedOperation(f"The same-process queue does not support reserving of messages.\n{_NO_WORKER_NEEDED}")

    def wait_and_reserve(self, timeout: Optional[int] = None) -> Message:
        raise UnsupportedOperation(f"The same-process queue does not support reserving of messages.\n{_NO_WORKER_NEEDED}")

    def release(self, message_id: str, options: Optional[Dict[str, Any]] = None) -> None:
        raise UnsupportedOperation(
            "The same-process queue does not support releasing of failed messages.\n"
            'The "maximum_number_of_releases" setting should be removed or set to 0 for this queue!'
        )

    def abort(self, message_id: str) -> None:
        pass

    def finish(self, message_id: str) -> bool:
        return False

    def peek(self, limit: int = 1) -> List[Message]:
        return []

    def count_ready(self) -> int:
        return 0

    def count_reserved(self) -> int:
        return 0

    def count_failed(self) -> int:
        return 0

    def flush(self) -> None:
        pass
