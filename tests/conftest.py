import pytest

from regcheck.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Each test sees settings built from its own environment."""
    for var in ("REGCHECK_ENCODING", "REGCHECK_FALLBACK_ENCODING", "REGCHECK_HIVE_ALIASES",
                "REGCHECK_DEFAULT_VIEW", "REGCHECK_REG_EXECUTABLE", "REGCHECK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
