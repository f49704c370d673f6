"""SQLAlchemy ORM models backing the reference event store."""

from event_testkit.models.base import Base  # noqa: F401
from event_testkit.models.applied_events_log import AppliedEventsLogEntry  # noqa: F401
from event_testkit.models.stored_event import StoredEvent  # noqa: F401
