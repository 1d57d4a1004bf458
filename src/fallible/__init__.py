"""fallible: explicit success/failure values instead of exception control flow.

Public API:
    - Result: holds exactly one of a success value or a failure error
    - attempt() / attempt_action() / fallible: turn raising calls into Results
    - aggregate() / traverse() / ResultAggregator: fold many Results into one
    - NOTHING: success value of operations that produce none

Example:
    from fallible import Result, aggregate

    parsed = aggregate(Result.attempt(int, s) for s in ["1", "2", "3"])
    assert parsed.or_else_throw() == [1, 2, 3]
"""

from __future__ import annotations

import logging

from fallible.aggregate import ResultAggregator, aggregate, traverse
from fallible.config import FrozenConfig, Settings, config_scope, resolve_config
from fallible.errors import (
    ConfigurationError,
    EmptyPayloadError,
    FallibleError,
    InvalidResultError,
    UnexpectedFailureError,
)
from fallible.result import NOTHING, Nothing, Result, attempt, attempt_action, fallible

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "NOTHING",
    "ConfigurationError",
    "EmptyPayloadError",
    "FallibleError",
    "FrozenConfig",
    "InvalidResultError",
    "Nothing",
    "Result",
    "ResultAggregator",
    "Settings",
    "UnexpectedFailureError",
    "aggregate",
    "attempt",
    "attempt_action",
    "config_scope",
    "fallible",
    "resolve_config",
    "traverse",
]
