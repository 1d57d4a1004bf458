"""Configuration schema and resolution.

Configuration is resolved once into an immutable ``FrozenConfig``:

- ``Settings`` is the pydantic schema and the single source of truth for
  fields, defaults and validation.
- Precedence is explicit overrides > the enclosing ``config_scope`` >
  ``FALLIBLE_*`` environment variables (a ``.env`` file is honoured) > defaults.
- ``config_scope`` installs a config as ambient for a block; it is safe under
  threads and asyncio tasks.

Only diagnostics are configurable. Result semantics never depend on it.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
import dataclasses
from functools import cache
import os
from typing import TYPE_CHECKING, Any

import dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

ENV_PREFIX = "FALLIBLE_"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    #: Log every exception captured by ``attempt`` at DEBUG level.
    trace_captures: bool = Field(default=False)
    #: Attach the traceback (``exc_info``) to capture log records.
    trace_tracebacks: bool = Field(default=False)

    model_config = {"extra": "forbid"}

    @field_validator("trace_captures", "trace_tracebacks", mode="before")
    @classmethod
    def normalize_flag(cls, v: Any) -> Any:
        """Accept the usual environment spellings for booleans."""
        if isinstance(v, str):
            s = v.strip().lower()
            if s in _TRUTHY:
                return True
            if s in _FALSY:
                return False
        return v  # Let Pydantic raise with a precise error message


@dataclasses.dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration payload."""

    trace_captures: bool = False
    trace_tracebacks: bool = False


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "fallible_config", default=None
)

_DOTENV_LOADED: bool = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    dotenv.load_dotenv()
    _DOTENV_LOADED = True


def env_var_name(field: str) -> str:
    """Return the environment variable that feeds *field*."""
    return f"{ENV_PREFIX}{field.upper()}"


def _env_values() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.environ.get(env_var_name(name))
        if raw is not None:
            values[name] = raw
    return values


def _freeze(values: Mapping[str, Any]) -> FrozenConfig:
    try:
        settings = Settings.model_validate(dict(values))
    except ValidationError as e:
        fields = ", ".join(sorted(Settings.model_fields))
        raise ConfigurationError(
            f"Invalid fallible configuration: {e.error_count()} error(s)",
            hint=f"Known fields: {fields}; booleans accept 1/0, true/false, yes/no, on/off",
        ) from e
    return FrozenConfig(**settings.model_dump())


@cache
def _environment_config() -> FrozenConfig:
    _load_dotenv_once()
    return _freeze(_env_values())


def clear_config_cache() -> None:
    """Forget the environment-derived config so the next resolution re-reads it."""
    _environment_config.cache_clear()


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve the effective configuration.

    Args:
        overrides: Field values that take precedence over the active scope,
            or over the environment when no scope is active.

    Returns:
        The ambient config when a ``config_scope`` is active, otherwise the
        environment-derived config, with *overrides* layered on top.

    Raises:
        ConfigurationError: A value failed validation or a field is unknown.
    """
    ambient = _AMBIENT.get()
    if not overrides:
        return ambient if ambient is not None else _environment_config()

    if ambient is not None:
        return _freeze({**dataclasses.asdict(ambient), **overrides})
    _load_dotenv_once()
    return _freeze({**_env_values(), **overrides})


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block with a specific ambient configuration.

    Overrides layer onto the enclosing scope, or onto *cfg_or_overrides*
    when it is a ``FrozenConfig``.

    Example:
        with config_scope(trace_captures=True):
            Result.attempt(int, "x")  # capture is logged at DEBUG
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
        if overrides:
            cfg = _freeze({**dataclasses.asdict(cfg), **overrides})
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)
