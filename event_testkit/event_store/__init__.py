"""Reference SQLAlchemy event store used by the harness."""

from event_testkit.event_store.factory import EventStoreFactory  # noqa: F401
from event_testkit.event_store.store import EventEnvelope, EventStore, RawEvent  # noqa: F401
