"""Pydantic schemas for tool arguments, tool results and server configuration."""

from __future__ import annotations

from selenium_mcp.schemas.arguments import (
    DEFAULT_TIMEOUT_MS,
    BrowserName,
    BrowserOptions,
    LocatorStrategy,
    SelectorInput,
    WindowSize,
)
from selenium_mcp.schemas.base import StrictModel, ToolArguments, WireModel
from selenium_mcp.schemas.config import ServerConfig, load_config
from selenium_mcp.schemas.results import ToolResult

__all__ = [
    'DEFAULT_TIMEOUT_MS',
    'BrowserName',
    'BrowserOptions',
    'LocatorStrategy',
    'SelectorInput',
    'ServerConfig',
    'StrictModel',
    'ToolArguments',
    'ToolResult',
    'WindowSize',
    'WireModel',
    'load_config',
]
