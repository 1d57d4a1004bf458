"""Fold many Results into one.

``aggregate([success(1), success(2)])`` is ``success([1, 2])``; the first
failure in iteration order wins and everything after it is ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fallible.result import Result

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)


class ResultAggregator[V, E: BaseException]:
    """Sequential accumulator behind ``aggregate``.

    Tracks the values collected so far, or the first failure seen. Once a
    failure is held, further inputs are not inspected. An instance serves
    one fold and is not thread-safe; there is no way to merge two
    aggregators.
    """

    __slots__ = ("_count", "_error", "_values")

    def __init__(self) -> None:
        self._values: list[V] = []
        self._error: E | None = None
        self._count = 0

    @property
    def short_circuited(self) -> bool:
        """True once a failure has been accumulated."""
        return self._error is not None

    def accumulate(self, result: Result[V, E]) -> None:
        """Fold one more Result into the accumulator."""
        if self._error is not None:
            return
        index = self._count
        self._count += 1
        error = result.get_error()
        if error is None:
            self._values.append(result.get_value())
            return
        log.debug(
            "Aggregation short-circuited at index %d by %s",
            index,
            type(error).__name__,
        )
        self._error = error
        self._values = []

    def finish(self) -> Result[list[V], E]:
        """Return the accumulated Result; a success gets its own copy of the list."""
        if self._error is not None:
            return Result.failure(self._error)
        return Result.success(list(self._values))


def aggregate[V, E: BaseException](
    results: Iterable[Result[V, E]],
) -> Result[list[V], E]:
    """Collect an iterable of Results into a Result of a list.

    Elements are consumed in iteration order and consumption stops at the
    first failure, so a lazy iterable is not evaluated past it.
    """
    aggregator: ResultAggregator[V, E] = ResultAggregator()
    for result in results:
        aggregator.accumulate(result)
        if aggregator.short_circuited:
            break
    return aggregator.finish()


def traverse[T, V, E: BaseException](
    items: Iterable[T],
    fn: Callable[[T], Result[V, E]],
) -> Result[list[V], E]:
    """``aggregate`` the Results of applying *fn* to each item, lazily."""
    return aggregate(fn(item) for item in items)


__all__ = ["ResultAggregator", "aggregate", "traverse"]
