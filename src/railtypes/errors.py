"""Exception hierarchy for railtypes.

Two channels are kept apart:

- Contract violations (``ContractError`` and subclasses) are raised at the
  point of misuse. They signal a programming mistake in the caller and are
  never caught by the combinators.
- Expected failures are data: ``Result.fail(...)`` or an absent ``Maybe``.
  They flow through return values and are never raised.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class RailtypesError(Exception):
    """Base exception for all railtypes errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message followed by the hint, when one is attached."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ContractError(RailtypesError):
    """A caller broke an API contract."""


class InvalidOperationError(ContractError):
    """An accessor was used in a state that does not support it."""


class InvalidArgumentError(ContractError, ValueError):
    """A value handed to a factory or combinator is malformed."""


class MissingArgumentError(ContractError, TypeError):
    """A required callable or collection was ``None``."""


class ConfigurationError(RailtypesError):
    """Configuration validation or resolution failed."""


@runtime_checkable
class ErrorContainer(Protocol):
    """Anything exposing an ``error`` message can seed a failure."""

    @property
    def error(self) -> str: ...


# --- Actionable Hints ---

HINTS = {
    "error_on_success": (
        "Check is_failure before reading error, or use on_failure(...) to react "
        "to failures only."
    ),
    "value_on_failure": (
        "Check is_success before reading value, or chain with on_success(...)."
    ),
    "maybe_no_value": (
        "Check has_value first, or use unwrap()/get_value_or_default() for a fallback."
    ),
    "either_default": "Build Either values with Either.left(...) or Either.right(...).",
    "failure_needs_message": "Pass a non-empty message, exception or error container.",
}
