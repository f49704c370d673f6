"""Error hierarchy for the harness.

Every error propagates to the caller; nothing here is retried or recovered
locally.
"""

from __future__ import annotations


class TestkitError(RuntimeError):
    """Base class for harness errors."""

    __test__ = False


class InvalidPayload(TestkitError, ValueError):
    """Raised when a queue payload cannot be reconstructed into a job."""


class JobExecutionFailed(TestkitError):
    """Raised when a job ran but reported failure."""

    def __init__(self, label: str) -> None:
        super().__init__(f'Result for job "{label}" was a failure')
        self.label = label


class UnsupportedOperation(TestkitError, NotImplementedError):
    """Raised by queue operations the same-process queue cannot offer."""


class InvalidListener(TestkitError, TypeError):
    """Raised when an identity does not refer to an event listener."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"{identity} is not an event listener")
        self.identity = identity


class UnknownEventType(TestkitError, LookupError):
    """Raised when a stored event type name cannot be resolved to a class."""


class EventStoreNotConfigured(TestkitError):
    """Raised when an event store is used before it was set up."""
