"""Job queue abstractions with an immediate, same-process queue."""

from event_testkit.queue.jobs import Job, deserialize_job, register_job, serialize_job  # noqa: F401
from event_testkit.queue.manager import JobManager, QueueManager  # noqa: F401
from event_testkit.queue.message import Message  # noqa: F401
from event_testkit.queue.same_process import SameProcessQueue  # noqa: F401
