"""Result type for explicit, composable error handling.

A ``Result`` holds exactly one of a success value or a failure error. It
replaces broad ``try/except`` blocks with values that can be transformed,
chained and recovered, raising only where the caller decides to.

Example:
    port = (
        Result.attempt(os.environ.__getitem__, "PORT")
        .flat_map_attempt(int)
        .recover(KeyError, lambda: 8080)
        .or_else_throw()
    )
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import logging
from typing import TYPE_CHECKING, Any, Final, Literal, overload

from fallible.config import resolve_config
from fallible.errors import (
    HINTS,
    ConfigurationError,
    EmptyPayloadError,
    InvalidResultError,
    UnexpectedFailureError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from fallible.types import (
        Action,
        ErrorCategory,
        ErrorMapper,
        ErrorPredicate,
        Producer,
        Transform,
    )

log = logging.getLogger(__name__)


class _Nothing(enum.Enum):
    NOTHING = "NOTHING"

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False


#: Success value of operations that completed without producing one.
NOTHING: Final = _Nothing.NOTHING

type Nothing = Literal[_Nothing.NOTHING]


def _describe(fn: Any) -> str:
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    return name if isinstance(name, str) else type(fn).__name__


_CONFIG_WARNED = False


def _trace_capture(fn: Any, error: BaseException) -> None:
    global _CONFIG_WARNED
    if not log.isEnabledFor(logging.DEBUG):
        return
    try:
        cfg = resolve_config()
    except ConfigurationError as e:
        # Diagnostics must never change what attempt() returns.
        if not _CONFIG_WARNED:
            _CONFIG_WARNED = True
            log.warning("Capture tracing disabled: %s", e)
        return
    if not cfg.trace_captures:
        return
    log.debug(
        "Captured %s from %s: %s",
        type(error).__name__,
        _describe(fn),
        error,
        exc_info=error if cfg.trace_tracebacks else None,
    )


@dataclasses.dataclass(frozen=True, slots=True)
class Result[V, E: BaseException]:
    """Exactly one of a success ``value`` or a failure ``error``.

    Build instances with ``success``, ``failure``, ``attempt`` or ``of``.
    Equality and hashing are structural over both slots, and ``repr`` shows
    both, so ``Result(value=1, error=None)`` is a success.
    """

    value: V | None = None
    error: E | None = None

    def __post_init__(self) -> None:
        if self.value is None and self.error is None:
            raise EmptyPayloadError("payload", hint=HINTS["both_slots"])
        if self.value is not None and self.error is not None:
            raise InvalidResultError(
                "Result cannot hold both a value and an error",
                hint=HINTS["both_slots"],
            )
        if self.error is not None and not isinstance(self.error, BaseException):
            raise TypeError(
                f"Result error must be an exception, got {type(self.error).__name__}"
            )

    # --- Construction ---

    @classmethod
    def success(cls, value: V) -> Result[V, E]:
        """Wrap *value*, which must not be ``None``."""
        if value is None:
            raise EmptyPayloadError("value", hint=HINTS["success_none"])
        return cls(value=value)

    @classmethod
    def failure(cls, error: E) -> Result[V, E]:
        """Wrap *error*, which must not be ``None``."""
        if error is None:
            raise EmptyPayloadError("error", hint=HINTS["failure_none"])
        return cls(error=error)

    @classmethod
    def attempt(
        cls,
        producer: Producer[V],
        /,
        *args: Any,
        catch: ErrorCategory = Exception,
        **kwargs: Any,
    ) -> Result[V, Any]:
        """Call ``producer(*args, **kwargs)`` and capture the outcome.

        A normal return becomes a success; a ``None`` return is stored as
        ``NOTHING``. An exception matching *catch* becomes a failure; any
        other exception propagates, as does ``InvalidResultError`` raised by
        misuse of this API inside the producer.
        """
        try:
            value = producer(*args, **kwargs)
        except InvalidResultError:
            raise
        except catch as e:
            _trace_capture(producer, e)
            return cls(error=e)
        return cls(value=NOTHING if value is None else value)

    @classmethod
    def attempt_action(
        cls,
        action: Action,
        /,
        *args: Any,
        catch: ErrorCategory = Exception,
        **kwargs: Any,
    ) -> Result[Nothing, Any]:
        """Run *action* for its side effect; success holds ``NOTHING``."""

        def run() -> Nothing:
            action(*args, **kwargs)
            return NOTHING

        functools.update_wrapper(run, action)
        return cls.attempt(run, catch=catch)

    @classmethod
    def of(cls, value_or_error: V | E) -> Result[V, E]:
        """Build a failure from an exception instance, a success from anything else.

        Meant for boundaries with APIs that hand back a single slot holding
        either a value or an exception.
        """
        if isinstance(value_or_error, BaseException):
            return cls.failure(value_or_error)
        return cls.success(value_or_error)

    @classmethod
    def collect(cls, results: Iterable[Result[V, E]]) -> Result[list[V], E]:
        """Alias for ``fallible.aggregate``."""
        from fallible.aggregate import aggregate

        return aggregate(results)

    # --- Inspection ---

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    # --- Transformation ---

    def map[T](self, fn: Transform[V, T]) -> Result[T, E]:
        """Apply *fn* to the value; failures pass through without calling it.

        *fn* is not expected to raise (use ``flat_map_attempt`` for that) and
        must not return ``None``.
        """
        if self.error is not None:
            return Result(error=self.error)
        mapped = fn(self.value)
        if mapped is None:
            raise EmptyPayloadError("value", hint=HINTS["map_none"])
        return Result(value=mapped)

    def flat_map[T](self, fn: Transform[V, Result[T, E]]) -> Result[T, E]:
        """Chain a step that itself returns a Result."""
        if self.error is not None:
            return Result(error=self.error)
        chained = fn(self.value)
        if not isinstance(chained, Result):
            raise TypeError(
                f"flat_map() step {_describe(fn)} must return a Result, "
                f"got {type(chained).__name__}"
            )
        return chained

    def flat_map_attempt[T](
        self, fn: Transform[V, T], *, catch: ErrorCategory = Exception
    ) -> Result[T, Any]:
        """Chain a step that may raise; matching exceptions become a failure."""
        if self.error is not None:
            return Result(error=self.error)
        return Result.attempt(fn, self.value, catch=catch)

    # --- Recovery ---

    def recover(
        self, category: ErrorCategory, fallback: Callable[[], V]
    ) -> Result[V, E]:
        """Replace a failure whose error is an instance of *category*.

        Subclasses match. Successes and unrelated failures are returned as is.
        """
        if self.error is not None and isinstance(self.error, category):
            return Result.success(fallback())
        return self

    def recover_if(
        self, predicate: ErrorPredicate[E], fallback: Callable[[], V]
    ) -> Result[V, E]:
        """Like ``recover``, with membership decided by ``predicate(error)``."""
        if self.error is not None and predicate(self.error):
            return Result.success(fallback())
        return self

    def recover_with(
        self, category: ErrorCategory, handler: Callable[[E], V]
    ) -> Result[V, E]:
        """Like ``recover``, but the fallback is computed from the caught error."""
        if self.error is not None and isinstance(self.error, category):
            return Result.success(handler(self.error))
        return self

    # --- Extraction ---

    def or_else_throw(self) -> V:
        """Return the value, or raise the carried error itself."""
        if self.error is not None:
            raise self.error
        return self.value

    def or_else_throw_as[E2: BaseException](self, mapper: ErrorMapper[E, E2]) -> V:
        """Return the value, or raise ``mapper(error)`` chained from the error."""
        if self.error is None:
            return self.value
        translated = mapper(self.error)
        if not isinstance(translated, BaseException):
            raise TypeError(
                f"or_else_throw_as() mapper {_describe(mapper)} must return an exception, "
                f"got {type(translated).__name__}"
            ) from self.error
        if translated is self.error:
            raise translated
        raise translated from self.error

    def or_else_assert(self) -> V:
        """Return the value; a failure here is a bug and raises an AssertionError."""
        if self.error is not None:
            raise UnexpectedFailureError(self.error) from self.error
        return self.value

    def or_else(self, default: V) -> V:
        return self.value if self.error is None else default

    def or_else_get(self, supplier: Callable[[], V]) -> V:
        return self.value if self.error is None else supplier()

    def to_optional(self) -> V | None:
        """Return the value, or ``None`` for a failure."""
        return self.value

    def get_value(self) -> V | None:
        return self.value

    def get_error(self) -> E | None:
        return self.error

    def get_either(self) -> V | E:
        """Return whichever payload is present."""
        return self.value if self.error is None else self.error


attempt = Result.attempt
attempt_action = Result.attempt_action


@overload
def fallible[**P, V](
    fn: Callable[P, V], /
) -> Callable[P, Result[V, Exception]]: ...


@overload
def fallible[**P, V](
    *, catch: ErrorCategory = ...
) -> Callable[[Callable[P, V]], Callable[P, Result[V, Exception]]]: ...


def fallible(fn: Any = None, /, *, catch: ErrorCategory = Exception) -> Any:
    """Decorate a function so that it returns a Result instead of raising.

    Usable bare or with a narrower ``catch``:

        @fallible
        def load(path): ...

        @fallible(catch=OSError)
        def read(path): ...
    """

    def decorate(f: Callable[..., Any]) -> Callable[..., Result[Any, Exception]]:
        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Result[Any, Exception]:
            return Result.attempt(f, *args, catch=catch, **kwargs)

        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)


__all__ = [
    "NOTHING",
    "Nothing",
    "Result",
    "attempt",
    "attempt_action",
    "fallible",
]
