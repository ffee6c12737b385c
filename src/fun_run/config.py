"""Configuration data loaded from the environment.

Provides immutable configuration read once at the entry point and passed
into the components that need it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEBUG_ENV_VAR = "FUN_RUN_DEBUG"
CHUNK_SIZE_ENV_VAR = "FUN_RUN_CHUNK_SIZE"

DEFAULT_COPY_CHUNK_SIZE = 8192

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class FunRunConfig:
    """Immutable configuration.

    Attributes:
        debug: Emit debug logging for process start, completion and classification
        copy_chunk_size: Maximum number of bytes read per copy in streamed mode
    """

    debug: bool = False
    copy_chunk_size: int = DEFAULT_COPY_CHUNK_SIZE


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Invalid value for {name}: {raw!r} (expected 1/0, true/false, yes/no)")


def _parse_chunk_size(name: str, raw: str) -> int:
    if not raw.strip().isdigit():
        raise ValueError(f"Invalid value for {name}: {raw!r} (expected a positive integer)")
    size = int(raw)
    if size <= 0:
        raise ValueError(f"Invalid value for {name}: {raw!r} (expected a positive integer)")
    return size


def load_config(environ: Mapping[str, str] | None = None) -> FunRunConfig:
    """Load configuration from environment variables.

    Args:
        environ: Environment to read, defaults to os.environ

    Returns:
        FunRunConfig with defaults for unset variables

    Raises:
        ValueError: If a variable is set to a malformed value
    """
    env = os.environ if environ is None else environ

    debug = False
    if DEBUG_ENV_VAR in env:
        debug = _parse_bool(DEBUG_ENV_VAR, env[DEBUG_ENV_VAR])

    copy_chunk_size = DEFAULT_COPY_CHUNK_SIZE
    if CHUNK_SIZE_ENV_VAR in env:
        copy_chunk_size = _parse_chunk_size(CHUNK_SIZE_ENV_VAR, env[CHUNK_SIZE_ENV_VAR])

    return FunRunConfig(debug=debug, copy_chunk_size=copy_chunk_size)
