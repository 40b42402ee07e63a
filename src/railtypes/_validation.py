"""Internal validation helpers shared by the primitives and combinators.

These helpers centralize contract checks so that every misuse surfaces as the
same exception type with a consistent message.
"""

from __future__ import annotations

import typing

from railtypes.errors import ContractError, MissingArgumentError

T = typing.TypeVar("T")


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[ContractError] = ContractError,
    field_name: str | None = None,
    hint: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}", hint=hint)
        raise exc(message, hint=hint)


def _require_not_none(value: T | None, field_name: str) -> T:
    _require(
        condition=value is not None,
        message="must not be None",
        exc=MissingArgumentError,
        field_name=field_name,
    )
    return typing.cast("T", value)


def _require_callable(func: typing.Any, field_name: str) -> None:
    """Validate that ``func`` can be called before anything is invoked."""
    _require(
        condition=func is not None,
        message="must not be None",
        exc=MissingArgumentError,
        field_name=field_name,
    )
    _require(
        condition=callable(func),
        message="must be callable",
        exc=MissingArgumentError,
        field_name=field_name,
    )


def _require_callables(**funcs: typing.Any) -> None:
    """Validate several handlers at once, in keyword order."""
    for name, func in funcs.items():
        _require_callable(func, name)
