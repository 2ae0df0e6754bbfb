"""Allow-list resolution for the ``MCP_TOOLS`` environment variable.

Accepted forms, all interpreted against the catalog's tool names:

    unset / empty / whitespace   -> every tool
    '*' or '"*"'                 -> every tool
    '["navigate", "get_title"]'  -> those tools (JSON array)
    'navigate, get_title'        -> those tools (comma-separated)

Resolution never fails: unknown names are dropped with one warning, and an
allow-list that keeps no known name falls back to every tool.
"""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

__all__ = [
    'AllowListSpec',
    'Outcome',
    'Resolution',
    'Restricted',
    'Unrestricted',
    'resolve',
    'resolve_detailed',
]

logger = logging.getLogger(__name__)

WILDCARD = '*'


@dataclass(frozen=True)
class Unrestricted:
    """Expose the whole catalog."""


@dataclass(frozen=True)
class Restricted:
    """Expose exactly ``names``; never empty, never contains an unknown name."""

    names: frozenset[str]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError('Restricted allow-list cannot be empty')


type AllowListSpec = Unrestricted | Restricted


class Outcome(enum.Enum):
    UNSET = 'unset'
    WILDCARD = 'wildcard'
    UNSUPPORTED_SHAPE = 'unsupported_shape'
    RESTRICTED = 'restricted'
    ALL_INVALID_IGNORED = 'all_invalid_ignored'


@dataclass(frozen=True)
class Resolution:
    """How a raw value was interpreted; ``spec`` is what the dispatcher uses."""

    outcome: Outcome
    spec: AllowListSpec
    ignored: tuple[str, ...] = field(default=())


def resolve(raw_config: str | None, catalog_names: Iterable[str]) -> AllowListSpec:
    return resolve_detailed(raw_config, catalog_names).spec


def resolve_detailed(raw_config: str | None, catalog_names: Iterable[str]) -> Resolution:
    if raw_config is None or not raw_config.strip():
        return Resolution(Outcome.UNSET, Unrestricted())

    known = frozenset(catalog_names)
    try:
        parsed = json.loads(raw_config)
    except json.JSONDecodeError:
        # Not JSON: comma-separated names, surrounding whitespace ignored
        tokens = [token.strip() for token in raw_config.split(',')]
        if tokens == [WILDCARD]:
            return Resolution(Outcome.WILDCARD, Unrestricted())
        return _restrict([token for token in tokens if token], known)

    if parsed == WILDCARD:
        return Resolution(Outcome.WILDCARD, Unrestricted())
    if isinstance(parsed, list):
        return _restrict(parsed, known)
    logger.warning('MCP_TOOLS must be a JSON array, "*" or a comma-separated list; exposing all tools')
    return Resolution(Outcome.UNSUPPORTED_SHAPE, Unrestricted())


def _restrict(requested: Sequence[object], known: frozenset[str]) -> Resolution:
    valid = [name for name in requested if isinstance(name, str) and name in known]
    invalid = tuple(str(name) for name in requested if not (isinstance(name, str) and name in known))
    if invalid:
        logger.warning('Invalid tool names in MCP_TOOLS will be ignored: %s', ', '.join(invalid))
    if not valid:
        return Resolution(Outcome.ALL_INVALID_IGNORED, Unrestricted(), invalid)
    return Resolution(Outcome.RESTRICTED, Restricted(frozenset(valid)), invalid)
