"""Success/failure results for railway-style chaining.

Two forms exist:

- ``Result``: success or failure, no payload.
- ``ValueResult[T]``: success carries a value, failure carries a message.

Both compose the same ``_Outcome`` record, which owns the success/failure flag
and the error message and enforces the construction rules:

- a failure must carry a non-empty message
- a success must not carry a message
- a ``ValueResult`` success must carry a non-``None`` value

Every chaining method short-circuits on failure: the message is forwarded
untouched and the supplied callable is not invoked.

Example:
    outcome = (
        parse_port(raw)
        .ensure(lambda port: port < 65536, "port out of range")
        .on_success_map(lambda port: f"listening on {port}")
        .on_failure(log.warning)
    )
"""

from __future__ import annotations

import dataclasses
import typing
from typing import TYPE_CHECKING, Any, overload

from railtypes._validation import _require, _require_callable
from railtypes.errors import (
    HINTS,
    ErrorContainer,
    InvalidArgumentError,
    InvalidOperationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

ErrorSource = str | BaseException | ErrorContainer

_MISSING: Any = object()


def _message_from(source: ErrorSource | None) -> str | None:
    """Extract the failure message from a string, exception or container."""
    if source is None or isinstance(source, str):
        return source
    if isinstance(source, BaseException):
        # Bare exceptions such as ``KeyError()`` have no text of their own
        return str(source) or type(source).__name__
    if isinstance(source, ErrorContainer):
        return source.error
    raise InvalidArgumentError(
        f"Cannot build a failure from {type(source).__name__}",
        hint=HINTS["failure_needs_message"],
    )


@dataclasses.dataclass(frozen=True, slots=True)
class _Outcome:
    """State shared by both result forms."""

    is_failure: bool
    message: str | None = None

    def __post_init__(self) -> None:
        if self.is_failure:
            _require(
                condition=bool(self.message),
                message="There must be an error message for failure",
                exc=InvalidArgumentError,
                field_name="error",
                hint=HINTS["failure_needs_message"],
            )
        else:
            _require(
                condition=self.message is None,
                message="There should be no error message for success",
                exc=InvalidArgumentError,
                field_name="error",
            )

    @property
    def is_success(self) -> bool:
        return not self.is_failure

    @property
    def error(self) -> str:
        if self.is_success:
            raise InvalidOperationError(
                "There is no error message for success",
                hint=HINTS["error_on_success"],
            )
        return typing.cast("str", self.message)


def _require_result(
    out: object,
    kind: type[Result | ValueResult[Any]],
    field_name: str,
    sibling: str | None = None,
) -> None:
    """Check that a bind stage returned the result kind its method promises."""
    if sibling and isinstance(out, (Result, ValueResult)):
        hint = f"Use {sibling}(...) for a stage that returns {type(out).__name__}."
    else:
        hint = "Use on_success_map(...) to wrap a plain return value."
    _require(
        condition=isinstance(out, kind),
        message=f"must return a {kind.__name__}, got {type(out).__name__}",
        exc=InvalidArgumentError,
        field_name=field_name,
        hint=hint,
    )


@dataclasses.dataclass(frozen=True, slots=True, init=False, repr=False)
class Result:
    """Outcome of an operation that produces no value.

    Build instances with ``ok()`` or ``fail()``; every success is the same
    shared object.
    """

    _outcome: _Outcome

    def __init__(self) -> None:
        raise TypeError("Use Result.ok() or Result.fail(...) to build a Result")

    @classmethod
    def _build(cls, outcome: _Outcome) -> Result:
        inst = object.__new__(cls)
        object.__setattr__(inst, "_outcome", outcome)
        return inst

    @staticmethod
    def _from_outcome(outcome: _Outcome) -> Result:
        return _OK if outcome.is_success else Result._build(outcome)

    # --- Factories ---

    @staticmethod
    @overload
    def ok() -> Result: ...

    @staticmethod
    @overload
    def ok[T](value: T) -> ValueResult[T]: ...

    @staticmethod
    def ok(value: Any = _MISSING) -> Result | ValueResult[Any]:
        """Return the shared success, or a ``ValueResult`` when given a value."""
        if value is _MISSING:
            return _OK
        return ValueResult.ok(value)

    @staticmethod
    def fail(source: ErrorSource) -> Result:
        """Build a failure from a message, an exception or an error container."""
        return Result._build(_Outcome(is_failure=True, message=_message_from(source)))

    @staticmethod
    def from_typed(result: ValueResult[Any]) -> Result:
        """Drop the payload of ``result``, keeping its state and message."""
        return result.to_result()

    # --- State ---

    @property
    def is_success(self) -> bool:
        return self._outcome.is_success

    @property
    def is_failure(self) -> bool:
        return self._outcome.is_failure

    @property
    def error(self) -> str:
        """Failure message; raises ``InvalidOperationError`` on success."""
        return self._outcome.error

    # --- Chaining ---

    def ensure(self, condition: bool | Callable[[], bool], error: str) -> Result:
        """Turn a success into a failure with ``error`` unless ``condition`` holds.

        ``condition`` may be a boolean or a zero-argument predicate; the
        predicate is only evaluated on success.
        """
        if self.is_failure:
            return self
        holds = condition() if callable(condition) else condition
        return _OK if holds else Result.fail(error)

    def on_success(self, fn: Callable[[], Result]) -> Result:
        """Run the next payload-less stage on success."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return self
        out = fn()
        _require_result(out, Result, "fn", "on_success_typed")
        return out

    def on_success_typed[U](self, fn: Callable[[], ValueResult[U]]) -> ValueResult[U]:
        """Run the next value-producing stage on success.

        A failure is forwarded as a ``ValueResult`` carrying the same message,
        so the chain keeps the typed API on both paths.
        """
        _require_callable(fn, "fn")
        if self.is_failure:
            return ValueResult(self._outcome)
        out = fn()
        _require_result(out, ValueResult, "fn", "on_success")
        return out

    def on_success_map[U](self, fn: Callable[[], U]) -> ValueResult[U]:
        """On success wrap ``fn()`` as a ``ValueResult``."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return ValueResult(self._outcome)
        return ValueResult.ok(fn())

    def on_success_value[U](self, value: U) -> ValueResult[U]:
        """On success carry ``value`` forward."""
        if self.is_failure:
            return ValueResult(self._outcome)
        return ValueResult.ok(value)

    def on_success_tee(self, action: Callable[[], object]) -> Result:
        """Run a side effect on success and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_success:
            action()
        return self

    def on_failure(self, action: Callable[[str], object]) -> Result:
        """Call ``action(error)`` on failure and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_failure:
            action(self.error)
        return self

    def on_failure_do(self, action: Callable[[], object]) -> Result:
        """Call ``action()`` on failure and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_failure:
            action()
        return self

    def on_both[U](self, fn: Callable[[Result], U]) -> U:
        """Hand the whole result to ``fn`` regardless of state."""
        _require_callable(fn, "fn")
        return fn(self)

    # --- Conversion ---

    def to_typed_result[U](self, item: U) -> ValueResult[U]:
        """Failure keeps its message; success carries ``item``."""
        return self.on_success_value(item)

    def __str__(self) -> str:
        return "Ok" if self.is_success else f"Failure: {self.error}"

    def __repr__(self) -> str:
        return "Result.ok()" if self.is_success else f"Result.fail({self.error!r})"


_OK = Result._build(_Outcome(is_failure=False))


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class ValueResult[T]:
    """Outcome of an operation that produces a value of type ``T`` on success."""

    _outcome: _Outcome
    _value: T | None = None

    def __post_init__(self) -> None:
        if self._outcome.is_success:
            _require(
                condition=self._value is not None,
                message="A successful result must carry a value",
                exc=InvalidArgumentError,
                field_name="value",
            )

    # --- Factories ---

    @staticmethod
    def ok[V](value: V) -> ValueResult[V]:
        """Build a success carrying ``value`` (which must not be ``None``)."""
        return ValueResult(_Outcome(is_failure=False), value)

    @staticmethod
    def fail(source: ErrorSource) -> ValueResult[Any]:
        """Build a failure from a message, an exception or an error container."""
        return ValueResult(_Outcome(is_failure=True, message=_message_from(source)))

    # --- State ---

    @property
    def is_success(self) -> bool:
        return self._outcome.is_success

    @property
    def is_failure(self) -> bool:
        return self._outcome.is_failure

    @property
    def error(self) -> str:
        """Failure message; raises ``InvalidOperationError`` on success."""
        return self._outcome.error

    @property
    def value(self) -> T:
        """Success value; raises ``InvalidOperationError`` on failure."""
        if self.is_failure:
            raise InvalidOperationError(
                "There is no value for failure", hint=HINTS["value_on_failure"]
            )
        return typing.cast("T", self._value)

    # --- Chaining ---

    def ensure(self, predicate: Callable[[T], bool], error: str) -> ValueResult[T]:
        """Turn a success into a failure with ``error`` unless ``predicate(value)``."""
        _require_callable(predicate, "predicate")
        if self.is_failure:
            return self
        return self if predicate(self.value) else ValueResult.fail(error)

    def ensure_or_else(
        self, condition: bool, when_false: Callable[[T], ValueResult[T]]
    ) -> ValueResult[T]:
        """On success, replace the result with ``when_false(value)`` unless ``condition``."""
        _require_callable(when_false, "when_false")
        if self.is_failure or condition:
            return self
        out = when_false(self.value)
        _require_result(out, ValueResult, "when_false")
        return out

    def on_success[U](self, fn: Callable[[T], ValueResult[U]]) -> ValueResult[U]:
        """Feed the value into the next value-producing stage."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return ValueResult(self._outcome)
        out = fn(self.value)
        _require_result(out, ValueResult, "fn", "on_success_plain")
        return out

    def on_success_plain(self, fn: Callable[[T], Result]) -> Result:
        """Feed the value into the next payload-less stage.

        A failure is forwarded as a ``Result`` carrying the same message.
        """
        _require_callable(fn, "fn")
        if self.is_failure:
            return Result._from_outcome(self._outcome)
        out = fn(self.value)
        _require_result(out, Result, "fn", "on_success")
        return out

    def then[U](self, fn: Callable[[], ValueResult[U]]) -> ValueResult[U]:
        """Like ``on_success`` for a stage that does not need the value."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return ValueResult(self._outcome)
        out = fn()
        _require_result(out, ValueResult, "fn", "then_plain")
        return out

    def then_plain(self, fn: Callable[[], Result]) -> Result:
        """Like ``on_success_plain`` for a stage that does not need the value."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return Result._from_outcome(self._outcome)
        out = fn()
        _require_result(out, Result, "fn", "then")
        return out

    def on_success_map[U](self, fn: Callable[[T], U]) -> ValueResult[U]:
        """Transform the value, wrapping the outcome as a new success."""
        _require_callable(fn, "fn")
        if self.is_failure:
            return typing.cast("ValueResult[U]", self)
        return ValueResult.ok(fn(self.value))

    def on_success_when(
        self, condition: bool, when_true: Callable[[T], ValueResult[T]]
    ) -> ValueResult[T]:
        """On success run ``when_true(value)`` only if ``condition`` holds."""
        _require_callable(when_true, "when_true")
        if self.is_failure or not condition:
            return self
        out = when_true(self.value)
        _require_result(out, ValueResult, "when_true")
        return out

    def on_success_tee(self, action: Callable[[T], object]) -> ValueResult[T]:
        """Run ``action(value)`` on success and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_success:
            action(self.value)
        return self

    def on_success_do(self, action: Callable[[], object]) -> ValueResult[T]:
        """Run ``action()`` on success and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_success:
            action()
        return self

    def on_failure(self, action: Callable[[str], object]) -> ValueResult[T]:
        """Call ``action(error)`` on failure and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_failure:
            action(self.error)
        return self

    def on_failure_do(self, action: Callable[[], object]) -> ValueResult[T]:
        """Call ``action()`` on failure and return ``self`` unchanged."""
        _require_callable(action, "action")
        if self.is_failure:
            action()
        return self

    def on_failure_use(self, value: T) -> ValueResult[T]:
        """Recover from a failure with a substitute success value."""
        return self if self.is_success else ValueResult.ok(value)

    def on_both[U](self, fn: Callable[[ValueResult[T]], U]) -> U:
        """Hand the whole result to ``fn`` regardless of state."""
        _require_callable(fn, "fn")
        return fn(self)

    # --- Conversion ---

    def to_result(self) -> Result:
        """Drop the payload, keeping state and message."""
        return Result._from_outcome(self._outcome)

    def to_typed_result[U](self, fn: Callable[[T], U]) -> ValueResult[U]:
        """Failure keeps its message; success carries ``fn(value)``."""
        return self.on_success_map(fn)

    def __str__(self) -> str:
        return f"Ok: {self.value}" if self.is_success else f"Failure: {self.error}"

    def __repr__(self) -> str:
        if self.is_success:
            return f"ValueResult.ok({self.value!r})"
        return f"ValueResult.fail({self.error!r})"
