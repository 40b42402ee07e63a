"""Library configuration.

Resolve-once, freeze-then-flow: values are validated through a Pydantic schema
(``Settings``), frozen into ``FrozenConfig`` and then read by the primitives.
A ``ContextVar`` holds an optional ambient config so callers can scope
different settings to a block of code.

Precedence: defaults < environment < overrides.

Environment variables:
- ``RAILTYPES_ERROR_SEPARATOR``: separator used by ``combine_all`` when none is given
- ``RAILTYPES_NO_VALUE_TEXT``: text an absent ``Maybe`` renders as
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from railtypes.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ", "
NO_VALUE_STRING = "[No Value]"

_ENV_PREFIX = "RAILTYPES_"

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    model_config = ConfigDict(extra="forbid")

    # Empty is allowed: errors are then concatenated back to back.
    error_separator: str = Field(default=DEFAULT_SEPARATOR)
    no_value_text: str = Field(default=NO_VALUE_STRING, min_length=1)


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Validated, immutable configuration read by the primitives."""

    error_separator: str = DEFAULT_SEPARATOR
    no_value_text: str = NO_VALUE_STRING


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "railtypes_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


def _try_load_dotenv() -> None:
    """Load a project ``.env`` file once per process."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import load_dotenv

    load_dotenv()
    _DOTENV_LOADED = True


def _load_env() -> dict[str, str]:
    """Collect ``RAILTYPES_*`` variables keyed by their schema field names."""
    out: dict[str, str] = {}
    for field in Settings.model_fields:
        raw = os.environ.get(f"{_ENV_PREFIX}{field.upper()}")
        if raw is not None:
            out[field] = raw
    return out


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration from defaults, environment and overrides.

    Args:
        overrides: Programmatic values, highest precedence.

    Returns:
        A validated ``FrozenConfig``.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    _try_load_dotenv()

    env = _load_env()
    merged: dict[str, Any] = {**env, **(overrides or {})}
    if env:
        log.debug("Config values from environment: %s", sorted(env))

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        # Strip the Pydantic wrapper prefix from custom errors
        if msg.startswith("Value error, "):
            msg = msg[13:]
        raise ConfigurationError(
            f"Configuration validation failed: {loc}: {msg}",
            hint=f"Check {_ENV_PREFIX}{loc.upper()} or the override passed for {loc!r}.",
        ) from e

    return FrozenConfig(**settings.model_dump())


@cache
def _default_config() -> FrozenConfig:
    return resolve_config()


def current_config() -> FrozenConfig:
    """Return the ambient config, or the process-wide resolved default."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _default_config()


def reset_default_config() -> None:
    """Forget the cached process-wide config so the next read resolves again."""
    _default_config.cache_clear()


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Install a configuration for the duration of a ``with`` block.

    Args:
        cfg_or_overrides: A ``FrozenConfig`` to use directly, or a mapping of
            overrides to resolve.
        **overrides: Additional overrides merged on top of a mapping.

    Yields:
        The ``FrozenConfig`` active in this scope.

    Example:
        with config_scope(error_separator="; "):
            combine_all(results)  # errors joined with "; "
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)
