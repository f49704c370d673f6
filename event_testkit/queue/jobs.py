"""Jobs and their JSON wire form."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Dict, Optional, Protocol, TypeVar

from pydantic import BaseModel

from event_testkit.queue.message import Message

if TYPE_CHECKING:
    from event_testkit.queue.contracts import Queue


class Job(Protocol):
    """A unit of work a queue executes."""

    job_type: str

    @property
    def label(self) -> str:
        ...

    def execute(self, queue: "Queue", message: Message) -> bool:
        ...


_JOB_TYPES: Dict[str, type[BaseModel]] = {}

J = TypeVar("J", bound=type[BaseModel])


def register_job(job_class: J) -> J:
    """Register a pydantic job model under its ``job_type`` class variable."""

    _JOB_TYPES[job_class.job_type] = job_class  # type: ignore[attr-defined]
    return job_class


def serialize_job(job: Job) -> str:
    if not isinstance(job, BaseModel):
        raise TypeError(f"{type(job).__name__} is not a pydantic job model")
    return json.dumps({"job_type": job.job_type, "job": job.model_dump(mode="json")})


def deserialize_job(payload: str) -> Optional[Job]:
    """Rebuild a job from ``payload``; ``None`` when it is not a registered job."""

    try:
        data = json.loads(payload)
        job_class = _JOB_TYPES[data["job_type"]]
        return job_class.model_validate(data["job"])  # type: ignore[return-value]
    except (ValueError, TypeError, KeyError):
        return None
