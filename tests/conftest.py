import pytest

from boundedcache.config import reset_settings
from tests.factories import FakeClock


@pytest.fixture(autouse=True)
def _clean_cache_env(monkeypatch: pytest.MonkeyPatch):
    """Keep host BOUNDED_CACHE_* variables and cached settings out of tests."""
    for var in (
        "BOUNDED_CACHE_CAPACITY",
        "BOUNDED_CACHE_DEFAULT_TTL_SECONDS",
        "BOUNDED_CACHE_NAME",
        "BOUNDED_CACHE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def clock() -> FakeClock:
    """Manually advanced monotonic clock."""
    return FakeClock()
