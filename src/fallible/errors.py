"""Exception hierarchy for fallible.

These are the library's own errors. Errors *carried* inside a Result belong
to the caller and are never wrapped in these types.
"""

from __future__ import annotations


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message followed by the hint, when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class InvalidResultError(FallibleError, ValueError):
    """A Result was constructed in a shape that breaks its invariant.

    This is API misuse rather than a domain failure, so ``attempt`` re-raises
    it instead of capturing it.
    """


class EmptyPayloadError(InvalidResultError):
    """A Result was built around ``None``."""

    def __init__(self, slot: str, *, hint: str | None = None) -> None:
        self.slot = slot
        super().__init__(f"Result {slot} must not be None", hint=hint)


class UnexpectedFailureError(FallibleError, AssertionError):
    """Raised by ``Result.or_else_assert`` when the Result is a failure."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(
            f"Expected a success but got {type(error).__name__}: {error}",
            hint="or_else_assert() is only for results that cannot fail",
        )


class ConfigurationError(FallibleError):
    """Configuration validation or resolution failed."""


# --- Actionable Hints ---

HINTS: dict[str, str] = {
    "success_none": (
        "Use Result.attempt_action() or the NOTHING marker for operations "
        "that produce no value"
    ),
    "failure_none": "Pass the exception instance that describes the failure",
    "map_none": "Return NOTHING, or use flat_map() to decide the variant explicitly",
    "both_slots": "Build results with Result.success() or Result.failure()",
}

