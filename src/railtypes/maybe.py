"""Optional values.

``Maybe`` wraps a value that may be absent; ``None`` is the absent sentinel.
Conversion only ever goes value -> wrapper via ``Maybe(value)`` or
``Maybe.from_value(value)``.

Equality is deliberately asymmetric: an absent ``Maybe`` is unequal to
everything, another absent ``Maybe`` and itself included.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import TYPE_CHECKING, Any

from railtypes._validation import _require_callable
from railtypes.config import NO_VALUE_STRING, current_config
from railtypes.errors import HINTS, InvalidOperationError
from railtypes.result import ValueResult

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclasses.dataclass(frozen=True, slots=True)
class ElseHandle:
    """Second half of ``Maybe.if_value(...).else_(...)``."""

    _run_else: bool

    def else_(self, action: Callable[[], object]) -> None:
        """Run ``action`` if the ``Maybe`` that produced this handle was absent."""
        _require_callable(action, "action")
        if self._run_else:
            action()


@dataclasses.dataclass(frozen=True, slots=True, eq=False, repr=False)
class Maybe[T]:
    """A value of type ``T`` that may be absent."""

    NO_VALUE_STRING: typing.ClassVar[str] = NO_VALUE_STRING

    _value: T | None = None

    @staticmethod
    def from_value[V](value: V | None) -> Maybe[V]:
        return Maybe(value)

    @staticmethod
    def empty() -> Maybe[Any]:
        return Maybe()

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def has_no_value(self) -> bool:
        return not self.has_value

    @property
    def value(self) -> T:
        """The held value; raises ``InvalidOperationError`` when absent."""
        if self._value is None:
            raise InvalidOperationError(
                "This object has no value", hint=HINTS["maybe_no_value"]
            )
        return self._value

    def get_value_or_default(self, default: T) -> T:
        return self.value if self.has_value else default

    def unwrap(self, default: T | None = None) -> T | None:
        return self.value if self.has_value else default

    def if_value(self, action: Callable[[T], object]) -> ElseHandle:
        """Call ``action(value)`` when present.

        The returned handle's ``else_`` runs its action exactly when absent::

            user.if_value(greet).else_(ask_to_sign_in)
        """
        _require_callable(action, "action")
        if self.has_value:
            action(self.value)
        return ElseHandle(_run_else=self.has_no_value)

    def ensure(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        """Keep the value only if ``predicate`` accepts it."""
        _require_callable(predicate, "predicate")
        if self.has_value and predicate(self.value):
            return self
        return Maybe()

    def map[U](
        self, fn: Callable[[T], U | Maybe[U] | None], default: U | None = None
    ) -> Maybe[U]:
        """Transform a present value; absent yields ``Maybe(default)``.

        A ``Maybe`` returned by ``fn`` is used as-is instead of being nested.
        """
        _require_callable(fn, "fn")
        if self.has_no_value:
            return Maybe(default)
        out = fn(self.value)
        return out if isinstance(out, Maybe) else Maybe(out)

    def to_result(self, error_if_absent: str) -> ValueResult[T]:
        if self.has_value:
            return ValueResult.ok(self.value)
        return ValueResult.fail(error_if_absent)

    def __eq__(self, other: object) -> bool:
        if self.has_no_value:
            return False
        if isinstance(other, Maybe):
            return other.has_value and self._value == other._value
        return self._value == other

    def __hash__(self) -> int:
        return 0 if self._value is None else hash(self._value)

    def __str__(self) -> str:
        if self.has_value:
            return str(self._value)
        return current_config().no_value_text

    def __repr__(self) -> str:
        return f"Maybe({self._value!r})" if self.has_value else "Maybe.empty()"
