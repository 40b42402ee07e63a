"""Combinators over sequences of results and optional values.

Two failure policies are offered:

- accumulate-all (``combine_all``, ``combine_all_values``): every item is
  inspected and all failure messages are joined into one failure.
- short-circuit (``combine_sequential``, ``combine_sequential_calls``,
  ``iter_sequential``): the first failure wins and nothing after it is
  evaluated.

Functions returning iterators (``only_errors``, ``only_values``, ``tee``,
``iter_sequential``) are generators: lazy, single-pass and not restartable.
"""

from __future__ import annotations

from itertools import islice
import logging
from typing import TYPE_CHECKING, Any

from railtypes._validation import _require, _require_callable, _require_not_none
from railtypes.config import current_config
from railtypes.errors import InvalidArgumentError, InvalidOperationError
from railtypes.maybe import Maybe
from railtypes.result import Result, ValueResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, MutableSequence

    AnyResult = Result | ValueResult[Any]

log = logging.getLogger(__name__)


def _separator(separator: str | None) -> str:
    if separator is None:
        return current_config().error_separator
    _require(
        condition=isinstance(separator, str),
        message=f"must be a str, got {type(separator).__name__}",
        exc=InvalidArgumentError,
        field_name="separator",
    )
    return separator


# --- Accumulate-all ---


def combine_all(results: Iterable[AnyResult], separator: str | None = None) -> Result:
    """Inspect every result and merge all failures into one.

    Args:
        results: Results of any form; every one is inspected.
        separator: Text placed between error messages. Defaults to the
            configured ``error_separator`` (``", "``).

    Returns:
        ``Result.ok()`` if nothing failed, else a failure whose message joins
        every error in input order.

    Example:
        combine_all([Result.ok(), Result.fail("a"), Result.fail("b")])
        # Result.fail("a, b")
    """
    _require_not_none(results, "results")
    sep = _separator(separator)

    errors = list(only_errors(results))
    if not errors:
        return Result.ok()
    log.debug("combine_all collected %d failure(s)", len(errors))
    return Result.fail(sep.join(errors))


def combine_all_values[T](
    results: Iterable[ValueResult[T]], separator: str | None = None
) -> ValueResult[list[T]]:
    """Like ``combine_all`` but a full success carries every value in order."""
    _require_not_none(results, "results")
    sep = _separator(separator)

    errors: list[str] = []
    values: list[T] = []
    for item in results:
        if item.is_failure:
            errors.append(item.error)
        else:
            values.append(item.value)

    if errors:
        log.debug(
            "combine_all_values collected %d failure(s) out of %d",
            len(errors),
            len(errors) + len(values),
        )
        return ValueResult.fail(sep.join(errors))
    return ValueResult.ok(values)


# --- Short-circuit ---


def combine_sequential(results: Iterable[AnyResult]) -> Result:
    """Return the first failure, without pulling anything after it.

    A failing ``ValueResult`` is returned without its payload slot, as a
    ``Result``.
    """
    _require_not_none(results, "results")
    for idx, result in enumerate(results):
        if result.is_failure:
            log.debug("combine_sequential stopped at index %d", idx)
            return result if isinstance(result, Result) else result.to_result()
    return Result.ok()


def combine_sequential_calls(functions: Iterable[Callable[[], AnyResult]]) -> Result:
    """Call each function in order until one fails.

    Every entry is checked for being callable before the first call. Functions
    after the first failure are never invoked.
    """
    _require_not_none(functions, "functions")
    calls = list(functions)
    for idx, fn in enumerate(calls):
        _require_callable(fn, f"functions[{idx}]")

    for idx, fn in enumerate(calls):
        result = fn()
        if result.is_failure:
            log.debug("combine_sequential_calls stopped at call %d of %d", idx, len(calls))
            return result if isinstance(result, Result) else result.to_result()
    return Result.ok()


def iter_sequential[T](
    functions: Iterable[Callable[[], ValueResult[T]]],
) -> Iterator[ValueResult[T]]:
    """Lazily call each function, yielding results up to the first failure.

    Every entry is checked for being callable before this returns. Each
    function runs only when its result is pulled. The first failure is
    yielded and iteration ends there.
    """
    _require_not_none(functions, "functions")
    calls = list(functions)
    for idx, fn in enumerate(calls):
        _require_callable(fn, f"functions[{idx}]")
    return _iter_sequential(calls)


def _iter_sequential[T](
    calls: list[Callable[[], ValueResult[T]]],
) -> Iterator[ValueResult[T]]:
    for fn in calls:
        result = fn()
        yield result
        if result.is_failure:
            return


# --- Projections ---


def only_errors(results: Iterable[AnyResult]) -> Iterator[str]:
    """Yield the error message of each failure, in order."""
    _require_not_none(results, "results")
    return (r.error for r in results if r.is_failure)


def only_values[T](items: Iterable[ValueResult[T] | Maybe[T]]) -> Iterator[T]:
    """Yield the value of each success or present ``Maybe``, in order."""
    _require_not_none(items, "items")
    return (item.value for item in items if _is_present(item))


def _is_present(item: ValueResult[Any] | Maybe[Any]) -> bool:
    return item.has_value if isinstance(item, Maybe) else item.is_success


# --- Single element extraction ---


def _take_two[T](items: Iterable[T]) -> list[T]:
    # Never pull more than two items from a possibly long iterable
    _require_not_none(items, "items")
    return list(islice(items, 2))


def only_one_or_maybe[T](items: Iterable[T]) -> Maybe[T]:
    """Present if ``items`` holds exactly one element, else absent."""
    found = _take_two(items)
    return Maybe(found[0]) if len(found) == 1 else Maybe()


def only_one_or_none[T](items: Iterable[T]) -> T | None:
    """The single element of ``items``, or ``None`` for zero or several."""
    found = _take_two(items)
    return found[0] if len(found) == 1 else None


def only_one_or_result[T](items: Iterable[T], error_if_not_one: str) -> ValueResult[T]:
    """Success with the single element, else a failure with ``error_if_not_one``."""
    found = _take_two(items)
    if len(found) == 1:
        return ValueResult.ok(found[0])
    return ValueResult.fail(error_if_not_one)


def single_or_maybe[T](items: Iterable[T]) -> Maybe[T]:
    """Like ``only_one_or_maybe`` but several elements are a caller error."""
    found = _take_two(items)
    if len(found) > 1:
        raise InvalidOperationError("Sequence contains more than one element")
    return Maybe(found[0]) if found else Maybe()


# --- Instrumentation & mutation ---


def tee[T](
    items: Iterable[T],
    action: Callable[[T], object],
    when: bool | Callable[[T], bool] = True,
) -> Iterator[T]:
    """Pass ``items`` through unchanged, calling ``action`` on the way.

    Args:
        items: Source iterable.
        action: Side effect run for each qualifying element as it is pulled.
        when: ``True``/``False`` to enable or disable the action for every
            element, or a predicate deciding per element.

    Example:
        seen = []
        total = sum(tee(numbers, seen.append, when=lambda n: n < 0))
    """
    _require_not_none(items, "items")
    _require_callable(action, "action")
    if callable(when):
        return _tee_filtered(items, action, when)
    return _tee_all(items, action if when else None)


def _tee_all[T](items: Iterable[T], action: Callable[[T], object] | None) -> Iterator[T]:
    for item in items:
        if action is not None:
            action(item)
        yield item


def _tee_filtered[T](
    items: Iterable[T], action: Callable[[T], object], predicate: Callable[[T], bool]
) -> Iterator[T]:
    for item in items:
        if predicate(item):
            action(item)
        yield item


def alter_in_place[T](
    items: MutableSequence[T], fn: Callable[[T], T]
) -> MutableSequence[T]:
    """Replace every entry with ``fn(entry)`` and return the same sequence."""
    _require_not_none(items, "items")
    _require_callable(fn, "fn")
    for i in range(len(items)):
        items[i] = fn(items[i])
    return items
