"""Pytest configuration and fixtures.

Provides environment isolation and shared error doubles. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import os

import pytest

from fallible.config import clear_config_cache

# =============================================================================
# Test Doubles
# =============================================================================


class NetworkError(Exception):
    """Broad error category used by recovery tests."""


class TimeoutNetworkError(NetworkError):
    """Narrower specialization of NetworkError."""


class DomainError(Exception):
    """Domain-level error that low-level errors are translated into."""


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_fallible_env(request, monkeypatch):
    """Clear FALLIBLE_* env vars and the cached config around each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("FALLIBLE_"):
                monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def debug_logging(caplog):
    """Capture DEBUG records from the fallible loggers (not autouse)."""
    caplog.set_level("DEBUG", logger="fallible")
    return caplog
