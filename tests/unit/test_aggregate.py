"""Unit tests for folding many Results into one."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from fallible import Result, ResultAggregator, aggregate, traverse

pytestmark = pytest.mark.unit


class _Uninspectable:
    """Stands in for a Result that must never be looked at."""

    def get_error(self) -> None:
        pytest.fail("aggregator inspected an element after a failure")

    def get_value(self) -> None:
        pytest.fail("aggregator inspected an element after a failure")


def test_all_successes_collect_in_order() -> None:
    results = [Result.success(1), Result.success(2), Result.success(3)]
    assert aggregate(results) == Result.success([1, 2, 3])


def test_empty_input_is_empty_success() -> None:
    assert aggregate([]) == Result.success([])


def test_first_failure_wins() -> None:
    first, second = ValueError("first"), ValueError("second")
    results = [Result.success(1), Result.failure(first), Result.failure(second)]
    assert aggregate(results).get_error() is first


def test_values_after_failure_never_contribute() -> None:
    err = KeyError("missing")
    results = [Result.success(1), Result.failure(err), Result.success(3)]
    assert aggregate(results) == Result.failure(err)


def test_lazy_input_is_not_consumed_past_failure() -> None:
    produced: list[str] = []

    def parse_all(raw: list[str]) -> Iterator[Result[int, Exception]]:
        for s in raw:
            produced.append(s)
            yield Result.attempt(int, s)

    r = aggregate(parse_all(["1", "x", "3"]))
    assert isinstance(r.get_error(), ValueError)
    assert produced == ["1", "x"]


def test_parses_numbers() -> None:
    r = aggregate(Result.attempt(int, s) for s in ["1", "2", "3", "1337"])
    assert r.or_else_throw() == [1, 2, 3, 1337]


def test_parse_failure_surfaces_original_error() -> None:
    r = aggregate(Result.attempt(int, s) for s in ["1", "2", "not-a-number"])
    with pytest.raises(ValueError, match="not-a-number"):
        r.or_else_throw()


def test_traverse_applies_function() -> None:
    assert traverse(["10", "20"], lambda s: Result.attempt(int, s)).get_value() == [10, 20]
    assert traverse([], lambda s: Result.attempt(int, s)) == Result.success([])


def test_collect_alias() -> None:
    assert Result.collect([Result.success("a")]) == Result.success(["a"])


class TestResultAggregator:
    def test_starts_as_empty_success(self) -> None:
        agg: ResultAggregator[int, Exception] = ResultAggregator()
        assert agg.finish() == Result.success([])
        assert not agg.short_circuited

    def test_ignores_elements_after_failure(self) -> None:
        err = ValueError("stop")
        agg: ResultAggregator[int, Exception] = ResultAggregator()
        agg.accumulate(Result.success(1))
        agg.accumulate(Result.failure(err))
        agg.accumulate(_Uninspectable())  # type: ignore[arg-type]
        assert agg.short_circuited
        assert agg.finish().get_error() is err

    def test_finish_snapshots_are_independent(self) -> None:
        agg: ResultAggregator[int, Exception] = ResultAggregator()
        agg.accumulate(Result.success(1))
        snapshot = agg.finish()
        agg.accumulate(Result.success(2))
        assert snapshot == Result.success([1])
        assert agg.finish() == Result.success([1, 2])

    def test_logs_short_circuit_index(self, debug_logging) -> None:
        agg: ResultAggregator[int, Exception] = ResultAggregator()
        for r in (Result.success(1), Result.success(2), Result.failure(KeyError())):
            agg.accumulate(r)

        messages = [
            rec.getMessage() for rec in debug_logging.records if rec.name == "fallible.aggregate"
        ]
        assert messages == ["Aggregation short-circuited at index 2 by KeyError"]
