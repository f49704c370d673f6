"""Wiring of the harness components for one process."""

from __future__ import annotations

from typing import Dict, Optional

from event_testkit.core.config import TestkitSettings, get_settings
from event_testkit.event_store.factory import EventStoreFactory
from event_testkit.listeners.invoker import ListenerInvoker
from event_testkit.listeners.provider import ListenerMappingProvider
from event_testkit.listeners.registry import ListenerRegistry
from event_testkit.queue.manager import JobManager, QueueManager
from event_testkit.queue.same_process import SameProcessQueue
from event_testkit.services.cache import KeyValueCache, get_cache
from event_testkit.testing.allow_list import AllowListStore
from event_testkit.testing.publisher_factory import TestingEventPublisherFactory

_runtime: Optional["TestkitRuntime"] = None


class TestkitRuntime:
    """Holds the process-wide allow-list, publishers, queues and event stores."""

    __test__ = False

    def __init__(
        self,
        settings: Optional[TestkitSettings] = None,
        *,
        cache: Optional[KeyValueCache] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache or get_cache()
        self.allow_list = AllowListStore(self.cache)
        self.listener_registry = ListenerRegistry()
        self.mapping_provider = ListenerMappingProvider(self.settings.listeners)
        self.queue_manager = QueueManager(builder=lambda name: SameProcessQueue(name, runtime=self))
        self.job_manager = JobManager(self.queue_manager)
        self.publisher_factory = TestingEventPublisherFactory(
            self.mapping_provider,
            allow_list=self.allow_list,
            job_manager=self.job_manager,
            default_queue_name=self.settings.default_queue_name,
        )
        self.event_store_factory = EventStoreFactory(self.settings, self.publisher_factory)
        self.listener_invoker = ListenerInvoker(self.listener_registry)

    def caches(self) -> Dict[str, KeyValueCache]:
        return {self.cache.identifier: self.cache}

    def close(self) -> None:
        self.event_store_factory.dispose()


def get_runtime() -> TestkitRuntime:
    """Return the runtime of this process, creating it from settings on first use."""

    global _runtime
    if _runtime is None:
        _runtime = TestkitRuntime()
    return _runtime


def set_runtime(runtime: Optional[TestkitRuntime]) -> None:
    """Override the process runtime (primarily for tests)."""

    global _runtime
    _runtime = runtime
