import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("ETK_ENVIRONMENT", "test")
os.environ["ETK_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ETK_CACHE_BACKEND"] = "memory"
os.environ.setdefault("ETK_REDIS_URL", "")
os.environ.setdefault("ETK_REDIS_TOKEN", "")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from event_testkit.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from event_testkit.services import cache as cache_module  # noqa: E402

pytest_plugins = ["event_testkit.testing.plugin"]

STORE = "Acme.Orders:Store"


@pytest.fixture(autouse=True)
def reset_shared_cache():
    cache_module.set_cache(cache_module.InMemoryCache())
    yield
    cache_module.set_cache(None)


@pytest.fixture()
def recording_queue(testkit_runtime):
    from tests.support import RecordingQueue

    queue = RecordingQueue("neos-eventsourcing", runtime=testkit_runtime)
    testkit_runtime.queue_manager.register(queue)
    return queue
