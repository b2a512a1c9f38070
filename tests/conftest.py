"""
Root Pytest Fixtures.

Shared fixtures available to all test types.
"""

import json
import logging
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from discourse_stats.core.config import get_app_config, get_settings
from discourse_stats.statistics import StatisticsDocument, parse_statistics

SAMPLE_PAYLOAD = {
    "topics_count": 5,
    "posts_count": "x",
    "users_count": 10,
}

FORUM_PAYLOAD = {
    "topics_count": 100,
    "posts_count": 500,
    "active_users_last_day": 12,
}


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop DISCOURSE_STATS_* overrides and cached config for every test."""
    for name in ("DISCOURSE_STATS_CONFIG_DIR", "DISCOURSE_STATS_TIMEOUT", "DISCOURSE_STATS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """setup_logging() replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# =============================================================================
# Documents
# =============================================================================


@pytest.fixture
def sample_document() -> StatisticsDocument:
    """Mixed numeric and text statistics."""
    return StatisticsDocument(SAMPLE_PAYLOAD)


@pytest.fixture
def forum_document() -> StatisticsDocument:
    """Small all-numeric statistics document."""
    return parse_statistics(json.dumps(FORUM_PAYLOAD).encode("utf-8"))


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build an httpx.MockTransport that answers the statistics endpoint.

    Usage:
        transport = mock_transport(json={"topics_count": 1})
        transport = mock_transport(status_code=503)
    """

    def _build(status_code: int = 200, **response_kwargs: Any) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/site/statistics.json"):
                return httpx.Response(status_code, **response_kwargs)
            return httpx.Response(404)

        return httpx.MockTransport(handler)

    return _build
