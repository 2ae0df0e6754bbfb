"""Argument checks run before any browser call."""

from __future__ import annotations

from pathlib import Path

from selenium_mcp.errors import InvalidArgumentError
from selenium_mcp.schemas.arguments import check_url

__all__ = [
    'require_positive',
    'require_text',
    'require_timeout',
    'require_url',
    'resolve_within_cwd',
]


def require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f'{field} cannot be empty')
    return value


def require_url(url: str) -> str:
    require_text(url, 'URL')
    try:
        return check_url(url)
    except ValueError as e:
        raise InvalidArgumentError(str(e)) from None


def require_positive(value: int, field: str) -> int:
    # bool is an int subclass; True is not a window dimension
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f'{field} must be a positive integer, got {value!r}')
    return value


def resolve_within_cwd(path: str, field: str) -> Path:
    """Resolve ``path`` against the working directory, rejecting anything outside it.

    Symlinks and ``..`` segments are resolved before the check, so
    ``sub/../../etc/passwd`` is rejected the same way ``/etc/passwd`` is.
    """
    require_text(path, field)
    cwd = Path.cwd().resolve()
    resolved = (cwd / path).resolve()
    if not resolved.is_relative_to(cwd):
        raise InvalidArgumentError(f'{field} must be within the current working directory: {path}')
    return resolved


def require_timeout(timeout: int) -> int:
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
        raise InvalidArgumentError(f'Timeout must be a non-negative number of milliseconds, got {timeout!r}')
    return timeout
