"""Named queues and job submission."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from event_testkit.queue.contracts import Queue
from event_testkit.queue.jobs import Job, serialize_job
from event_testkit.queue.same_process import SameProcessQueue

LOGGER = logging.getLogger("event_testkit.queue.manager")

QueueBuilder = Callable[[str], Queue]


class QueueManager:
    """Resolves queue names to queue instances, creating them on first use."""

    def __init__(self, builder: Optional[QueueBuilder] = None) -> None:
        self._builder: QueueBuilder = builder or SameProcessQueue
        self._queues: Dict[str, Queue] = {}

    def register(self, queue: Queue) -> None:
        self._queues[queue.name] = queue

    def get_queue(self, name: str) -> Queue:
        queue = self._queues.get(name)
        if queue is None:
            queue = self._builder(name)
            queue.set_up()
            self._queues[name] = queue
        return queue


class JobManager:
    """Serializes jobs and submits them to named queues."""

    def __init__(self, queue_manager: QueueManager) -> None:
        self._queue_manager = queue_manager

    def queue(self, queue_name: str, job: Job, options: Optional[Dict[str, Any]] = None) -> str:
        queue = self._queue_manager.get_queue(queue_name)
        message_id = queue.submit(serialize_job(job), dict(options or {}))
        LOGGER.info(
            "job_submitted",
            extra={"queue": queue_name, "job": job.label, "message_id": message_id},
        )
        return message_id
