"""Tests for the MCP request handlers registered by build_server.

Handlers are invoked through ``server.request_handlers`` with real request
objects, the same path the stdio session uses, so these cover result
shapes as clients see them.
"""

from __future__ import annotations

import base64
from collections.abc import Iterator

import mcp.types
import pytest
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from selenium_mcp.errors import ProtocolErrorCode
from selenium_mcp.schemas.config import ServerConfig, load_config
from selenium_mcp.server import ServerState, build_server
from tests.fakes import PNG_BYTES, FakeDriver


@pytest.fixture
def state(driver: FakeDriver) -> Iterator[ServerState]:
    config = ServerConfig(version='0.0.0-test')
    server_state = ServerState.create(config, driver_factory=lambda browser, options: driver)
    yield server_state
    server_state.session.temp_dir.cleanup()


@pytest.fixture
def server(state: ServerState) -> Server:
    return build_server(state)


async def _call_tool(server: Server, name: str, arguments: dict[str, object] | None = None) -> mcp.types.CallToolResult:
    request = mcp.types.CallToolRequest(
        method='tools/call',
        params=mcp.types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await server.request_handlers[mcp.types.CallToolRequest](request)
    assert isinstance(result.root, mcp.types.CallToolResult)
    return result.root


async def _read_resource(server: Server, uri: str) -> mcp.types.ReadResourceResult:
    request = mcp.types.ReadResourceRequest(
        method='resources/read',
        params=mcp.types.ReadResourceRequestParams(uri=uri),  # type: ignore[arg-type]
    )
    result = await server.request_handlers[mcp.types.ReadResourceRequest](request)
    assert isinstance(result.root, mcp.types.ReadResourceResult)
    return result.root


async def _list_resources(server: Server) -> list[mcp.types.Resource]:
    request = mcp.types.ListResourcesRequest(method='resources/list')
    result = await server.request_handlers[mcp.types.ListResourcesRequest](request)
    assert isinstance(result.root, mcp.types.ListResourcesResult)
    return result.root.resources


class TestCapabilities:
    def test_tools_and_resources_advertised(self, server: Server) -> None:
        options = server.create_initialization_options()
        assert options.server_name == 'selenium'
        assert options.server_version == '0.0.0-test'
        assert options.capabilities.tools is not None
        assert options.capabilities.resources is not None


class TestListTools:
    async def test_all_tools_by_default(self, server: Server) -> None:
        result = await server.request_handlers[mcp.types.ListToolsRequest](
            mcp.types.ListToolsRequest(method='tools/list')
        )
        assert isinstance(result.root, mcp.types.ListToolsResult)
        assert len(result.root.tools) == 52

    async def test_allow_list_from_environment(self, driver: FakeDriver) -> None:
        config = load_config({'MCP_TOOLS': 'navigate, get_title, bogus'})
        state = ServerState.create(config, driver_factory=lambda browser, options: driver)
        try:
            result = await build_server(state).request_handlers[mcp.types.ListToolsRequest](
                mcp.types.ListToolsRequest(method='tools/list')
            )
            assert isinstance(result.root, mcp.types.ListToolsResult)
            assert [tool.name for tool in result.root.tools] == ['navigate', 'get_title']
        finally:
            state.session.temp_dir.cleanup()


class TestCallTool:
    async def test_session_flow(self, server: Server, driver: FakeDriver) -> None:
        started = await _call_tool(server, 'start_browser', {'browser': 'chrome'})
        assert started.structuredContent == {'success': True, 'message': 'chrome browser started successfully'}

        navigated = await _call_tool(server, 'navigate', {'url': 'https://example.com/'})
        assert navigated.isError is False
        assert navigated.structuredContent == {
            'success': True,
            'message': 'Navigation successful',
            'url': 'https://example.com/',
        }
        assert isinstance(navigated.content[0], mcp.types.TextContent)
        assert '"url": "https://example.com/"' in navigated.content[0].text

        closed = await _call_tool(server, 'close_browser')
        assert closed.structuredContent == {'success': True, 'message': 'Browser closed successfully'}
        assert driver.quit_count == 1

    async def test_errors_are_protocol_errors(self, server: Server) -> None:
        with pytest.raises(McpError) as exc_info:
            await _call_tool(server, 'get_title')
        assert exc_info.value.error.code == ProtocolErrorCode.INVALID_REQUEST

    async def test_unknown_tool(self, server: Server) -> None:
        with pytest.raises(McpError) as exc_info:
            await _call_tool(server, 'teleport')
        assert exc_info.value.error.code == ProtocolErrorCode.METHOD_NOT_FOUND


class TestResources:
    async def test_screenshot_readable_as_blob(self, server: Server) -> None:
        await _call_tool(server, 'start_browser')
        await _call_tool(server, 'take_screenshot')

        [listed] = await _list_resources(server)
        assert str(listed.uri).startswith('screenshot://')

        result = await _read_resource(server, str(listed.uri))
        [contents] = result.contents
        assert isinstance(contents, mcp.types.BlobResourceContents)
        assert contents.mimeType == 'image/png'
        assert base64.b64decode(contents.blob) == PNG_BYTES

    async def test_html_readable_as_text(self, server: Server, driver: FakeDriver) -> None:
        await _call_tool(server, 'start_browser')
        driver.page_source = '<html><body>Hello</body></html>'
        await _call_tool(server, 'get_page_source')

        [listed] = await _list_resources(server)
        result = await _read_resource(server, str(listed.uri))
        [contents] = result.contents
        assert isinstance(contents, mcp.types.TextResourceContents)
        assert contents.text == '<html><body>Hello</body></html>'
        assert contents.mimeType == 'text/html'

    async def test_unknown_resource(self, server: Server) -> None:
        with pytest.raises(McpError) as exc_info:
            await _read_resource(server, 'screenshot://missing')
        assert exc_info.value.error.code == ProtocolErrorCode.INVALID_REQUEST
        assert exc_info.value.error.message == 'Screenshot not found: missing'
