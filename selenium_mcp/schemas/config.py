"""Server configuration loaded from the process environment."""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Mapping
from typing import Literal

from pydantic import Field

from selenium_mcp.schemas.base import StrictModel

__all__ = [
    'LOG_LEVEL_ENV',
    'SERVER_NAME',
    'TOOLS_ENV',
    'LogLevel',
    'ServerConfig',
    'load_config',
    'server_version',
]

logger = logging.getLogger(__name__)

SERVER_NAME = 'selenium'

# Environment variables
TOOLS_ENV = 'MCP_TOOLS'
LOG_LEVEL_ENV = 'SELENIUM_MCP_LOG_LEVEL'

type LogLevel = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR']


class ServerConfig(StrictModel):
    """Startup configuration.

    ``tools`` is the raw ``MCP_TOOLS`` value; it is interpreted by the
    allow-list resolver, which never rejects it.
    """

    tools: str | None = None
    log_level: LogLevel = 'INFO'
    name: str = SERVER_NAME
    version: str = Field(default_factory=lambda: server_version())


def load_config(environ: Mapping[str, str]) -> ServerConfig:
    """Build config from environment variables.

    Raises:
        pydantic.ValidationError: SELENIUM_MCP_LOG_LEVEL is not a known level.
    """
    raw_level = environ.get(LOG_LEVEL_ENV)
    fields: dict[str, str | None] = {'tools': environ.get(TOOLS_ENV)}
    if raw_level:
        fields['log_level'] = raw_level.strip().upper()
    return ServerConfig.model_validate(fields)


def server_version() -> str:
    try:
        return importlib.metadata.version('selenium-mcp')
    except importlib.metadata.PackageNotFoundError:
        logger.debug('selenium-mcp is not installed; reporting version 0.0.0')
        return '0.0.0'
