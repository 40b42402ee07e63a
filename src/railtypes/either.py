"""Two-sided containers.

- ``Either[L, R]`` (exclusive): exactly one side is valid.
- ``EitherOr[L, R]`` (inclusive): left, right, both or neither may be valid.

Both keep a small bit field as discriminant next to the two slots. The
``peek_*`` accessors read a slot without checking the discriminant; ``left``
and ``right`` check it and raise ``InvalidOperationError`` on mismatch.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from railtypes._validation import _require_callables
from railtypes.errors import HINTS, InvalidOperationError

if TYPE_CHECKING:
    from collections.abc import Callable

_NEITHER = 0b00
_RIGHT = 0b01
_LEFT = 0b10
_BOTH = _LEFT | _RIGHT


def _wrong_side(side: str) -> InvalidOperationError:
    return InvalidOperationError(
        f"Cannot access the {side} value when not in the {side} state."
    )


@dataclasses.dataclass(frozen=True, slots=True, init=False)
class Either[L, R]:
    """Exactly one of a left or a right value.

    ``Either()`` is the uninitialized state: every discriminant query on it
    raises. Use ``Either.left(...)`` or ``Either.right(...)`` to pick a side.
    """

    peek_left: L | None
    peek_right: R | None
    _which: int

    def __init__(self) -> None:
        object.__setattr__(self, "peek_left", None)
        object.__setattr__(self, "peek_right", None)
        object.__setattr__(self, "_which", _NEITHER)

    @classmethod
    def _build(cls, left: Any, right: Any, which: int) -> Either[Any, Any]:
        inst = cls()
        object.__setattr__(inst, "peek_left", left)
        object.__setattr__(inst, "peek_right", right)
        object.__setattr__(inst, "_which", which)
        return inst

    @classmethod
    def left(cls, value: L) -> Either[L, Any]:
        return cls._build(value, None, _LEFT)

    @classmethod
    def right(cls, value: R) -> Either[Any, R]:
        return cls._build(None, value, _RIGHT)

    @property
    def is_default(self) -> bool:
        return self._which == _NEITHER

    def _check_initialized(self) -> None:
        if self.is_default:
            raise InvalidOperationError(
                "Either was never initialized", hint=HINTS["either_default"]
            )

    @property
    def is_left(self) -> bool:
        self._check_initialized()
        return self._which == _LEFT

    @property
    def is_right(self) -> bool:
        self._check_initialized()
        return self._which == _RIGHT

    @property
    def left_value(self) -> L:
        """The left value; raises unless in the left state."""
        if not self.is_left:
            raise _wrong_side("Left")
        return self.peek_left  # type: ignore[return-value]

    @property
    def right_value(self) -> R:
        """The right value; raises unless in the right state."""
        if not self.is_right:
            raise _wrong_side("Right")
        return self.peek_right  # type: ignore[return-value]

    def fold[T](self, if_left: Callable[[L], T], if_right: Callable[[R], T]) -> T:
        """Collapse to one value by calling the handler for the active side."""
        _require_callables(if_left=if_left, if_right=if_right)
        self._check_initialized()
        if self._which == _LEFT:
            return if_left(self.peek_left)  # type: ignore[arg-type]
        return if_right(self.peek_right)  # type: ignore[arg-type]

    def switch(
        self, if_left: Callable[[L], object], if_right: Callable[[R], object]
    ) -> None:
        """Like ``fold`` for side effects."""
        _require_callables(if_left=if_left, if_right=if_right)
        if self.is_left:
            if_left(self.peek_left)  # type: ignore[arg-type]
        else:
            if_right(self.peek_right)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        if self._which == _LEFT:
            return f"Either.left({self.peek_left!r})"
        if self._which == _RIGHT:
            return f"Either.right({self.peek_right!r})"
        return "Either()"


@dataclasses.dataclass(frozen=True, slots=True, init=False)
class EitherOr[L, R]:
    """Any combination of a left and a right value, including none."""

    peek_left: L | None
    peek_right: R | None
    _which: int

    def __init__(
        self,
        left: L | None = None,
        right: R | None = None,
        *,
        is_left: bool = False,
        is_right: bool = False,
    ) -> None:
        which = _NEITHER
        if is_left:
            which |= _LEFT
        if is_right:
            which |= _RIGHT
        object.__setattr__(self, "peek_left", left)
        object.__setattr__(self, "peek_right", right)
        object.__setattr__(self, "_which", which)

    @classmethod
    def of(
        cls, left: L | None, right: R | None, *, is_left: bool, is_right: bool
    ) -> EitherOr[L, R]:
        """Build from both slots, each flagged as acceptable or not."""
        return cls(left, right, is_left=is_left, is_right=is_right)

    @classmethod
    def left(cls, value: L) -> EitherOr[L, Any]:
        return cls(value, None, is_left=True)

    @classmethod
    def right(cls, value: R) -> EitherOr[Any, R]:
        return cls(None, value, is_right=True)

    @classmethod
    def both(cls, left: L, right: R) -> EitherOr[L, R]:
        return cls(left, right, is_left=True, is_right=True)

    @classmethod
    def neither(cls) -> EitherOr[Any, Any]:
        return cls()

    @property
    def is_both(self) -> bool:
        return self._which == _BOTH

    @property
    def is_left(self) -> bool:
        return self._which & _LEFT == _LEFT

    @property
    def is_right(self) -> bool:
        return self._which & _RIGHT == _RIGHT

    @property
    def is_neither(self) -> bool:
        return self._which == _NEITHER

    @property
    def left_value(self) -> L:
        if not self.is_left:
            raise _wrong_side("Left")
        return self.peek_left  # type: ignore[return-value]

    @property
    def right_value(self) -> R:
        if not self.is_right:
            raise _wrong_side("Right")
        return self.peek_right  # type: ignore[return-value]

    def fold[T](
        self,
        if_left: Callable[[L], T],
        if_right: Callable[[R], T],
        if_both: Callable[[L, R], T],
        if_neither: Callable[[], T],
    ) -> T:
        """Dispatch to the handler matching the current state."""
        _require_callables(
            if_left=if_left, if_right=if_right, if_both=if_both, if_neither=if_neither
        )
        if self.is_both:
            return if_both(self.left_value, self.right_value)
        if self.is_left:
            return if_left(self.left_value)
        if self.is_right:
            return if_right(self.right_value)
        return if_neither()

    def fold_or[T](
        self,
        if_both: Callable[[L, R], T],
        if_neither: Callable[[], T],
        otherwise: T,
    ) -> T:
        """Three-way ``fold``: a single side yields ``otherwise``."""
        _require_callables(if_both=if_both, if_neither=if_neither)
        if self.is_both:
            return if_both(self.left_value, self.right_value)
        if self.is_neither:
            return if_neither()
        return otherwise

    def __repr__(self) -> str:
        return (
            f"EitherOr({self.peek_left!r}, {self.peek_right!r}, "
            f"is_left={self.is_left}, is_right={self.is_right})"
        )
