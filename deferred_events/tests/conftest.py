"""
Global pytest configuration and fixtures.

Isolates global settings and the default scheduler between tests.
"""

import asyncio

import pytest

from deferred_events.config.settings import ENV_VARS, reset_settings
from deferred_events.core.scheduling.scheduler import reset_default_scheduler


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """
    Every test starts from default settings and no default scheduler, whatever
    DEFERRED_EVENTS_* variables the surrounding shell exports.
    """
    for env_var in list(ENV_VARS) + ["DEFERRED_EVENTS_DEBUG"]:
        monkeypatch.delenv(env_var, raising=False)
    reset_settings()
    reset_default_scheduler()
    yield
    reset_default_scheduler()
    reset_settings()


async def settle(turns: int = 5) -> None:
    """Give the running loop a few iterations to drain deferred callbacks."""
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def drain():
    """Expose `settle` to tests without importing the conftest module."""
    return settle
