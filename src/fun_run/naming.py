"""Naming utilities for turning commands into user readable strings.

All functions here are pure (no I/O). The quoting is intentionally simple:
a token is wrapped in double quotes when it contains whitespace and emitted
as-is otherwise. Embedded quote characters are never escaped, so the names
are meant for humans reading logs and error messages, not for pasting back
into a shell.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fun_run.command import Command

EnvSnapshot = Mapping[str, str] | Iterable[tuple[str, str]]


def quote_token(token: str) -> str:
    """Wrap a token in double quotes if it contains any whitespace.

    Examples:
        >>> quote_token("install")
        'install'
        >>> quote_token("hello world")
        '"hello world"'
    """
    if any(char.isspace() for char in token):
        return f'"{token}"'
    return token


def display(command: "Command") -> str:
    """Convert a command and its arguments into a user readable string.

    The program and every argument are quoted with quote_token() and joined
    by single spaces.

    Args:
        command: Command to render

    Returns:
        Display string such as 'bundle install' or 'bash -c "exit 1"'

    Example:
        display(Command("bundle").arg("install"))  # 'bundle install'
    """
    tokens = [command.program, *command.args]
    return " ".join(quote_token(token) for token in tokens)


def display_with_env_keys(command: "Command", env: EnvSnapshot, keys: Iterable[str]) -> str:
    """Convert a command and selected environment variables into a readable string.

    Each requested key found in the env snapshot is rendered as KEY="value"
    (the value is always quoted) in the order the keys were requested, followed
    by display(command). Keys missing from the snapshot are skipped.

    Args:
        command: Command to render
        env: Environment snapshot as a mapping or iterable of (key, value) pairs.
            Never read from os.environ implicitly.
        keys: Environment variable names to include

    Returns:
        Display string

    Example:
        >>> display_with_env_keys(
        ...     Command("bundle").arg("install"),
        ...     {"RAILS_ENV": "production"},
        ...     ["RAILS_ENV"],
        ... )
        'RAILS_ENV="production" bundle install'
    """
    snapshot = dict(env.items()) if isinstance(env, Mapping) else dict(env)

    parts = [f'{key}="{snapshot[key]}"' for key in keys if key in snapshot]
    parts.append(display(command))
    return " ".join(parts)
