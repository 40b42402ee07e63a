"""Unit tests for ``ValueResult``."""

from __future__ import annotations

import pytest

from railtypes import (
    InvalidArgumentError,
    InvalidOperationError,
    MissingArgumentError,
    Result,
    ValueResult,
)
from tests.conftest import CallRecorder, ValidationIssue

pytestmark = pytest.mark.unit


def parse_port(raw: str) -> ValueResult[int]:
    if not raw.isdigit():
        return ValueResult.fail(f"not a number: {raw!r}")
    return ValueResult.ok(int(raw))


class TestConstruction:
    def test_ok_carries_value(self) -> None:
        result = ValueResult.ok("abc")

        assert result.is_success
        assert result.value == "abc"
        with pytest.raises(InvalidOperationError):
            _ = result.error

    def test_ok_rejects_none(self) -> None:
        with pytest.raises(InvalidArgumentError, match="value"):
            ValueResult.ok(None)

    def test_falsy_values_are_still_values(self) -> None:
        assert ValueResult.ok(0).value == 0
        assert ValueResult.ok("").value == ""
        assert ValueResult.ok([]).value == []

    def test_failure_has_no_value(self) -> None:
        result = ValueResult.fail("missing")

        assert result.error == "missing"
        with pytest.raises(InvalidOperationError, match="no value for failure"):
            _ = result.value

    @pytest.mark.parametrize("message", ["", None])
    def test_fail_requires_message(self, message) -> None:
        with pytest.raises(InvalidArgumentError):
            ValueResult.fail(message)

    def test_fail_sources(self) -> None:
        assert ValueResult.fail(RuntimeError("boom")).error == "boom"
        assert ValueResult.fail(ValidationIssue("too short")).error == "too short"

    def test_equality_and_hash(self) -> None:
        assert ValueResult.ok(1) == ValueResult.ok(1)
        assert ValueResult.ok(1) != ValueResult.ok(2)
        assert hash(ValueResult.ok(1)) == hash(ValueResult.ok(1))
        assert ValueResult.fail("e") != Result.fail("e")

    def test_str_and_repr(self) -> None:
        assert str(ValueResult.ok(5)) == "Ok: 5"
        assert str(ValueResult.fail("bad")) == "Failure: bad"
        assert repr(ValueResult.ok("x")) == "ValueResult.ok('x')"


class TestEnsure:
    def test_predicate_holds(self) -> None:
        ok = ValueResult.ok(10)

        assert ok.ensure(lambda n: n > 5, "too small") is ok

    def test_predicate_fails(self) -> None:
        assert ValueResult.ok(1).ensure(lambda n: n > 5, "too small").error == "too small"

    def test_failure_skips_predicate(self, recorder: CallRecorder) -> None:
        failed = ValueResult.fail("earlier")

        assert failed.ensure(recorder, "later").error == "earlier"
        assert not recorder.called

    def test_ensure_or_else(self) -> None:
        ok = ValueResult.ok(3)

        assert ok.ensure_or_else(True, lambda n: ValueResult.ok(n * 2)) is ok
        assert ok.ensure_or_else(False, lambda n: ValueResult.ok(n * 2)).value == 6
        assert (
            ValueResult.fail("e").ensure_or_else(False, lambda n: ValueResult.ok(n)).error
            == "e"
        )


class TestOnSuccess:
    def test_bind_passes_value(self) -> None:
        result = ValueResult.ok("8080").on_success(parse_port)

        assert result.value == 8080

    def test_bind_short_circuits(self, recorder: CallRecorder) -> None:
        failed = ValueResult.fail("earlier")

        assert failed.on_success(recorder).error == "earlier"
        assert not recorder.called

    def test_failed_bind_keeps_typed_api(self) -> None:
        recovered = (
            ValueResult.fail("upstream down")
            .on_success(lambda _: ValueResult.ok(1))
            .on_failure_use(0)
        )

        assert recovered.value == 0

    def test_bind_rejects_plain_result(self) -> None:
        with pytest.raises(InvalidArgumentError, match="on_success_plain"):
            ValueResult.ok(1).on_success(lambda _: Result.ok())  # type: ignore[arg-type, return-value]

    def test_plain_bind_returns_result(self) -> None:
        assert ValueResult.ok(1).on_success_plain(lambda _: Result.ok()) is Result.ok()

    def test_failed_plain_bind_is_a_result(self, recorder: CallRecorder) -> None:
        result = ValueResult.fail("e").on_success_plain(recorder)

        assert isinstance(result, Result)
        assert result == Result.fail("e")
        assert not recorder.called

    def test_plain_bind_rejects_value_result(self) -> None:
        with pytest.raises(InvalidArgumentError, match="on_success"):
            ValueResult.ok(1).on_success_plain(lambda _: ValueResult.ok(2))  # type: ignore[arg-type, return-value]

    def test_then_ignores_value(self) -> None:
        result = ValueResult.ok(1).then(lambda: ValueResult.ok("next"))

        assert result.value == "next"

    def test_then_short_circuits(self, recorder: CallRecorder) -> None:
        assert ValueResult.fail("e").then(recorder).error == "e"
        assert not recorder.called

    def test_failed_then_keeps_typed_api(self) -> None:
        result = (
            ValueResult.fail("e")
            .then(lambda: ValueResult.ok("a"))
            .then(lambda: ValueResult.ok("b"))
            .on_failure_use("fallback")
        )

        assert result.value == "fallback"

    def test_then_plain(self, recorder: CallRecorder) -> None:
        assert ValueResult.ok(1).then_plain(lambda: Result.fail("x")) == Result.fail("x")

        failed = ValueResult.fail("e").then_plain(recorder)
        assert isinstance(failed, Result)
        assert failed.error == "e"
        assert not recorder.called

    def test_map(self) -> None:
        assert ValueResult.ok(2).on_success_map(lambda n: n + 1).value == 3
        assert ValueResult.fail("e").on_success_map(lambda n: n + 1).error == "e"

    def test_map_to_none_is_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ValueResult.ok(2).on_success_map(lambda _: None)

    def test_when(self) -> None:
        ok = ValueResult.ok(2)
        double = lambda n: ValueResult.ok(n * 2)  # noqa: E731

        assert ok.on_success_when(True, double).value == 4
        assert ok.on_success_when(False, double) is ok
        assert ValueResult.fail("e").on_success_when(True, double).error == "e"

    def test_tee_passes_value(self, recorder: CallRecorder) -> None:
        ok = ValueResult.ok("v")

        assert ok.on_success_tee(recorder) is ok
        ValueResult.fail("e").on_success_tee(recorder)
        assert recorder.calls == [("v",)]

    def test_do_ignores_value(self, recorder: CallRecorder) -> None:
        ok = ValueResult.ok("v")

        assert ok.on_success_do(recorder) is ok
        ValueResult.fail("e").on_success_do(recorder)
        assert recorder.calls == [()]

    def test_none_handler_is_rejected(self) -> None:
        with pytest.raises(MissingArgumentError):
            ValueResult.ok(1).on_success_map(None)  # type: ignore[arg-type]


class TestOnFailure:
    def test_action_receives_error(self, recorder: CallRecorder) -> None:
        failed = ValueResult.fail("broken")

        assert failed.on_failure(recorder) is failed
        assert recorder.calls == [("broken",)]

    def test_zero_arg_action(self, recorder: CallRecorder) -> None:
        ValueResult.ok(1).on_failure_do(recorder)
        ValueResult.fail("broken").on_failure_do(recorder)

        assert recorder.calls == [()]

    def test_use_substitutes_value(self) -> None:
        assert ValueResult.fail("e").on_failure_use(0).value == 0

    def test_use_keeps_success(self) -> None:
        ok = ValueResult.ok(9)

        assert ok.on_failure_use(0) is ok


class TestConversion:
    def test_to_result_drops_payload(self) -> None:
        assert ValueResult.ok(1).to_result() is Result.ok()
        converted = ValueResult.fail("e").to_result()
        assert isinstance(converted, Result)
        assert converted.error == "e"

    def test_to_typed_result_maps_value(self) -> None:
        assert ValueResult.ok(2).to_typed_result(str).value == "2"
        assert ValueResult.fail("e").to_typed_result(str).error == "e"

    def test_on_both(self) -> None:
        assert ValueResult.ok(4).on_both(lambda r: r.value * 2) == 8
        assert ValueResult.fail("e").on_both(lambda r: r.is_failure) is True


def test_chain_reads_top_to_bottom() -> None:
    seen: list[int] = []

    message = (
        parse_port("443")
        .ensure(lambda port: port < 65536, "port out of range")
        .on_success_tee(seen.append)
        .on_success_map(lambda port: f"listening on {port}")
        .on_both(lambda r: r.value if r.is_success else r.error)
    )

    assert message == "listening on 443"
    assert seen == [443]


def test_chain_reports_first_error() -> None:
    message = (
        parse_port("http")
        .ensure(lambda port: port < 65536, "port out of range")
        .on_success_map(lambda port: f"listening on {port}")
        .on_both(lambda r: r.value if r.is_success else r.error)
    )

    assert message == "not a number: 'http'"
