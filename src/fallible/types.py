"""Public type aliases for the callables the Result API accepts.

They carry no behaviour. Any of them may raise; ``attempt`` and
``flat_map_attempt`` are where those raises are turned into Results.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

#: Callable producing a value, e.g. ``lambda: int(raw)``; ``attempt`` forwards
#: any extra arguments to it.
type Producer[V] = Callable[..., V]

#: Callable run for its side effect; its return value is ignored.
type Action = Callable[..., Any]

#: One-argument step used by ``map``/``flat_map_attempt``.
type Transform[V, T] = Callable[[V], T]

#: Translates a carried error before ``or_else_throw_as`` raises it.
type ErrorMapper[E: BaseException, E2: BaseException] = Callable[[E], E2]

#: What ``recover`` and ``attempt(catch=...)`` match errors against.
type ErrorCategory = type[BaseException] | tuple[type[BaseException], ...]

#: Explicit category membership test for ``recover_if``.
type ErrorPredicate[E: BaseException] = Callable[[E], bool]

__all__ = [
    "Action",
    "ErrorCategory",
    "ErrorMapper",
    "ErrorPredicate",
    "Producer",
    "Transform",
]
