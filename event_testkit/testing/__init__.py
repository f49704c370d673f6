"""Test harness: deferred publication, listener allow-list and store builder."""

from event_testkit.testing.allow_list import AllowList, AllowListStore  # noqa: F401
from event_testkit.testing.builder import EventStoreBuilder  # noqa: F401
from event_testkit.testing.helpers import find_first_instance_of, find_instances_of, instance_of  # noqa: F401
from event_testkit.testing.publisher import DeferredEventPublisher, TestingEventPublisher  # noqa: F401
from event_testkit.testing.publisher_factory import TestingEventPublisherFactory  # noqa: F401
