#!/usr/bin/env python3
"""
Selenium MCP Server

Exposes Selenium WebDriver operations as MCP tools over stdio, plus captured
screenshots and page HTML as MCP resources.

Install:
    uv tool install selenium-mcp

Configuration (environment):
    MCP_TOOLS               Allow-list of tool names: JSON array, comma-separated list, or "*"
    SELENIUM_MCP_LOG_LEVEL  DEBUG, INFO (default), WARNING or ERROR

Architecture: the low-level MCP server is used instead of FastMCP so that
tool failures surface as JSON-RPC errors carrying their own error code,
rather than as generic tool results flagged isError.
"""

from __future__ import annotations

# Standard Library
import asyncio
import logging
import os
import signal
import sys
import typing
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# Third-Party Libraries
import mcp.types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

# Local imports
from selenium_mcp.allowlist import resolve_detailed
from selenium_mcp.browser.session import BrowserSession, DriverFactory, create_driver
from selenium_mcp.catalog import catalog_names, get_catalog
from selenium_mcp.dispatch import Dispatcher, DispatchRequest
from selenium_mcp.errors import BrowserAutomationError, classify
from selenium_mcp.resources import ResourceCache
from selenium_mcp.schemas.config import ServerConfig, load_config

__all__ = [
    'ServerState',
    'build_server',
    'configure_logging',
    'lifespan',
    'main',
    'serve',
]

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    """Container for all server state - initialized once at startup."""

    config: ServerConfig
    session: BrowserSession
    resources: ResourceCache
    dispatcher: Dispatcher

    @classmethod
    def create(cls, config: ServerConfig, driver_factory: DriverFactory = create_driver) -> typing.Self:
        """Factory method resolving the allow-list and wiring the dispatcher."""
        resolution = resolve_detailed(config.tools, catalog_names())
        logger.debug('MCP_TOOLS resolved as %s', resolution.outcome.value)
        session = BrowserSession.create(driver_factory=driver_factory)
        resources = ResourceCache()
        dispatcher = Dispatcher(get_catalog(), resolution.spec, session, resources)
        return cls(config=config, session=session, resources=resources, dispatcher=dispatcher)


def build_server(state: ServerState) -> Server:
    """Create the MCP server with request handlers closed over ``state``."""
    server: Server = Server(state.config.name, version=state.config.version)

    @server.list_tools()
    async def list_tools() -> list[mcp.types.Tool]:
        return state.dispatcher.list_tools()

    @server.list_resources()
    async def list_resources() -> list[mcp.types.Resource]:
        return state.resources.list()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        try:
            return [state.resources.read(str(uri))]
        except BrowserAutomationError as e:
            logger.info('Resource read rejected: %s', e)
            raise classify(e).to_mcp_error() from e

    # Registered directly rather than via @server.call_tool(): that decorator
    # turns every exception into an isError result and drops the error code.
    async def call_tool(request: mcp.types.CallToolRequest) -> mcp.types.ServerResult:
        envelope = await state.dispatcher.dispatch(
            DispatchRequest(tool_name=request.params.name, arguments=request.params.arguments or {})
        )
        return mcp.types.ServerResult(envelope.to_call_tool_result())

    server.request_handlers[mcp.types.CallToolRequest] = call_tool
    return server


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )
    # Silence noisy third-party loggers
    logging.getLogger('selenium').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(config: ServerConfig) -> AsyncIterator[ServerState]:
    """Manage browser lifecycle - initialization before requests, cleanup after shutdown."""
    state = ServerState.create(config)

    # Register signal handlers to ensure cleanup on SIGTERM/SIGINT
    def signal_handler(signum: int, frame: object) -> None:
        print('\n⚠ Signal received, cleaning up browser...', file=sys.stderr)
        state.session.cleanup_sync()
        print('✓ Signal cleanup complete, exiting', file=sys.stderr)
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    print(f'✓ Selenium MCP server {config.version} initialized', file=sys.stderr)
    print(f'  Tools exposed: {len(state.dispatcher.tool_names)}', file=sys.stderr)
    print(f'  Screenshot directory: {state.session.screenshot_dir}', file=sys.stderr)

    try:
        yield state
    finally:
        # Graceful shutdown path
        if state.session.is_active:
            try:
                await state.session.quit()
            except Exception:
                logger.warning('Browser did not shut down cleanly', exc_info=True)
        state.session.temp_dir.cleanup()
        print('✓ Server cleanup complete', file=sys.stderr)


async def serve(config: ServerConfig) -> None:
    async with lifespan(config) as state:
        server = build_server(state)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Entry point for the selenium-mcp console script."""
    config = load_config(os.environ)
    configure_logging(config.log_level)
    print('Starting Selenium MCP server', file=sys.stderr)
    asyncio.run(serve(config))


if __name__ == '__main__':
    main()
