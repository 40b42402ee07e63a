"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and small test doubles.
Environment fixtures are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from railtypes.config import reset_default_config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callable test double that records every invocation.

    Use it wherever a handler, action or predicate is expected to check
    whether (and with what) the library called it.
    """

    returns: Any = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.returns

    @property
    def called(self) -> bool:
        return bool(self.calls)


@dataclass(frozen=True)
class ValidationIssue:
    """Domain object exposing an ``error`` message, like a form validator would."""

    error: str


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


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
def isolate_railtypes_env(request, monkeypatch):
    """Clear RAILTYPES_* variables and the cached default config per test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("RAILTYPES_"):
                monkeypatch.delenv(key, raising=False)
    reset_default_config()
    yield
    reset_default_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def debug_library_logging():
    """Let caplog see the library's DEBUG records."""
    logging.getLogger("railtypes").setLevel(logging.DEBUG)
