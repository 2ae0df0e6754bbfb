"""Tool dispatch: lookup, argument marshaling, invocation, resource side channel.

``ROUTES`` maps every catalog tool to its argument model, the facade
operation, and a marshaler turning validated arguments into the operation's
positional parameters. ``verify_routes`` runs when a Dispatcher is built, so
a tool without a route (or a route without a tool) stops the server at
startup instead of failing the first call.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import mcp.types
import pydantic

from selenium_mcp.allowlist import AllowListSpec, Restricted
from selenium_mcp.browser import alerts, discovery, elements, files, keyboard, navigation, scripts, waits, windows
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.errors import (
    BrowserAutomationError,
    ErrorKind,
    InvalidArgumentError,
    UnknownToolError,
    classify,
    format_validation_error,
)
from selenium_mcp.resources import ResourceCache
from selenium_mcp.schemas import arguments as args
from selenium_mcp.schemas.base import ToolArguments
from selenium_mcp.schemas.results import PageSourceResult, ScreenshotResult, ToolResult

__all__ = [
    'ROUTES',
    'DispatchRequest',
    'Dispatcher',
    'ResponseEnvelope',
    'Route',
    'effective_tools',
    'verify_routes',
]

logger = logging.getLogger(__name__)


# =============================================================================
# Route table
# =============================================================================


def _no_args(_: ToolArguments) -> tuple[Any, ...]:
    return ()


def _locator(a: args.LocatorArgs) -> tuple[Any, ...]:
    return (a.by, a.value, a.timeout)


@dataclass(frozen=True)
class Route:
    arguments: type[ToolArguments]
    operation: Callable[..., Awaitable[ToolResult]]
    marshal: Callable[[Any], tuple[Any, ...]] = _no_args


ROUTES: Mapping[str, Route] = {
    # Browser management
    'start_browser': Route(args.StartBrowserArgs, navigation.start_browser, lambda a: (a.browser, a.options)),
    'navigate': Route(args.NavigateArgs, navigation.navigate, lambda a: (a.url,)),
    'get_current_url': Route(args.NoArgs, navigation.get_current_url),
    'close_browser': Route(args.NoArgs, navigation.close_browser),
    'get_title': Route(args.NoArgs, navigation.get_title),
    'refresh': Route(args.NoArgs, navigation.refresh),
    'go_back': Route(args.NoArgs, navigation.go_back),
    'go_forward': Route(args.NoArgs, navigation.go_forward),
    # Page content and capture
    'get_page_source': Route(args.NoArgs, navigation.get_page_source),
    'find_element': Route(args.LocatorArgs, elements.find_element, _locator),
    'find_elements': Route(args.LocatorArgs, elements.find_elements, _locator),
    'take_screenshot': Route(args.TakeScreenshotArgs, files.take_screenshot, lambda a: (a.output_path,)),
    'execute_script': Route(args.ExecuteScriptArgs, scripts.execute_script, lambda a: (a.script, a.args)),
    # Alerts
    'accept_alert': Route(args.NoArgs, alerts.accept_alert),
    'dismiss_alert': Route(args.NoArgs, alerts.dismiss_alert),
    'get_alert_text': Route(args.NoArgs, alerts.get_alert_text),
    'send_alert_text': Route(args.SendAlertTextArgs, alerts.send_alert_text, lambda a: (a.text,)),
    # Element inspection
    'get_element_text': Route(args.LocatorArgs, elements.get_element_text, _locator),
    'get_element_attribute': Route(
        args.ElementAttributeArgs,
        elements.get_element_attribute,
        lambda a: (a.by, a.value, a.attribute, a.timeout),
    ),
    'get_element_property': Route(
        args.ElementPropertyArgs,
        elements.get_element_property,
        lambda a: (a.by, a.value, a.property, a.timeout),
    ),
    'is_element_displayed': Route(args.LocatorArgs, elements.is_element_displayed, _locator),
    'is_element_enabled': Route(args.LocatorArgs, elements.is_element_enabled, _locator),
    'is_element_selected': Route(args.LocatorArgs, elements.is_element_selected, _locator),
    'get_element_css_value': Route(
        args.ElementCssValueArgs,
        elements.get_element_css_value,
        lambda a: (a.by, a.value, a.css_property, a.timeout),
    ),
    'scroll_to_element': Route(args.LocatorArgs, elements.scroll_to_element, _locator),
    # Element interaction
    'click_element': Route(args.LocatorArgs, elements.click_element, _locator),
    'send_keys': Route(args.SendKeysArgs, elements.send_keys, lambda a: (a.by, a.value, a.text, a.timeout)),
    'hover_element': Route(args.LocatorArgs, elements.hover_element, _locator),
    'clear_element': Route(args.LocatorArgs, elements.clear_element, _locator),
    'double_click_element': Route(args.LocatorArgs, elements.double_click_element, _locator),
    'right_click_element': Route(args.LocatorArgs, elements.right_click_element, _locator),
    'drag_and_drop': Route(
        args.DragAndDropArgs,
        elements.drag_and_drop,
        lambda a: (a.source_by, a.source_value, a.target_by, a.target_value, a.timeout),
    ),
    # Keyboard
    'press_key': Route(args.PressKeyArgs, keyboard.press_key, lambda a: (a.key,)),
    'press_key_combo': Route(args.PressKeyComboArgs, keyboard.press_key_combo, lambda a: (a.keys,)),
    # Files
    'upload_file': Route(args.UploadFileArgs, files.upload_file, lambda a: (a.by, a.value, a.file_path, a.timeout)),
    # Windows and frames
    'maximize_window': Route(args.NoArgs, windows.maximize_window),
    'minimize_window': Route(args.NoArgs, windows.minimize_window),
    'set_window_size': Route(args.SetWindowSizeArgs, windows.set_window_size, lambda a: (a.width, a.height)),
    'get_window_size': Route(args.NoArgs, windows.get_window_size),
    'switch_to_window': Route(args.SwitchToWindowArgs, windows.switch_to_window, lambda a: (a.window_handle,)),
    'get_window_handles': Route(args.NoArgs, windows.get_window_handles),
    'switch_to_frame': Route(args.SwitchToFrameArgs, windows.switch_to_frame, lambda a: (a.frame_reference,)),
    'switch_to_default_content': Route(args.NoArgs, windows.switch_to_default_content),
    # Waits
    'wait_for_element': Route(args.LocatorArgs, waits.wait_for_element, _locator),
    'wait_for_element_visible': Route(args.LocatorArgs, waits.wait_for_element_visible, _locator),
    'wait_for_element_clickable': Route(args.LocatorArgs, waits.wait_for_element_clickable, _locator),
    'wait_for_text_present': Route(
        args.TextPresentArgs,
        waits.wait_for_text_present,
        lambda a: (a.by, a.value, a.text, a.timeout),
    ),
    # Discovery
    'get_all_links': Route(args.NoArgs, discovery.get_all_links),
    'get_all_forms': Route(args.NoArgs, discovery.get_all_forms),
    'get_all_buttons': Route(args.NoArgs, discovery.get_all_buttons),
    'get_page_summary': Route(args.NoArgs, discovery.get_page_summary),
    'validate_selectors': Route(args.ValidateSelectorsArgs, discovery.validate_selectors, lambda a: (a.selectors,)),
}


def verify_routes(catalog: Sequence[mcp.types.Tool], routes: Mapping[str, Route] = ROUTES) -> None:
    """Fail unless catalog names and route names are the same set.

    Raises:
        RuntimeError: Listing tools without routes and routes without tools.
    """
    catalog_names = {tool.name for tool in catalog}
    unrouted = sorted(catalog_names - routes.keys())
    orphaned = sorted(routes.keys() - catalog_names)
    problems = []
    if unrouted:
        problems.append(f'tools without a route: {", ".join(unrouted)}')
    if orphaned:
        problems.append(f'routes without a catalog entry: {", ".join(orphaned)}')
    if problems:
        raise RuntimeError('Dispatch table does not match the tool catalog; ' + '; '.join(problems))


def effective_tools(catalog: Sequence[mcp.types.Tool], allow_list: AllowListSpec) -> tuple[mcp.types.Tool, ...]:
    """Apply the allow-list; an allow-list that selects nothing exposes everything."""
    if isinstance(allow_list, Restricted):
        selected = tuple(tool for tool in catalog if tool.name in allow_list.names)
        if selected:
            return selected
        logger.warning('Allow-list selected no catalog tools; exposing all %d tools', len(catalog))
    return tuple(catalog)


# =============================================================================
# Dispatcher
# =============================================================================


@dataclass(frozen=True)
class DispatchRequest:
    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResponseEnvelope:
    """A successful call: the result as pretty-printed JSON text and as structured content."""

    text: str
    structured: dict[str, Any]

    @classmethod
    def from_result(cls, result: ToolResult) -> ResponseEnvelope:
        structured = result.to_wire()
        return cls(text=json.dumps(structured, indent=2), structured=structured)

    def to_call_tool_result(self) -> mcp.types.CallToolResult:
        return mcp.types.CallToolResult(
            content=[mcp.types.TextContent(type='text', text=self.text)],
            structuredContent=self.structured,
            isError=False,
        )


class Dispatcher:
    """Routes call-tool requests for the effective tool set. One call runs at a time."""

    def __init__(
        self,
        catalog: Sequence[mcp.types.Tool],
        allow_list: AllowListSpec,
        session: BrowserSession,
        resources: ResourceCache,
        routes: Mapping[str, Route] = ROUTES,
    ) -> None:
        verify_routes(catalog, routes)
        self.session = session
        self.resources = resources
        self._routes = routes
        self._tools = effective_tools(catalog, allow_list)
        self._tool_names = frozenset(tool.name for tool in self._tools)
        self._lock = asyncio.Lock()

    @property
    def tool_names(self) -> frozenset[str]:
        return self._tool_names

    def list_tools(self) -> list[mcp.types.Tool]:
        return [tool.model_copy(deep=True) for tool in self._tools]

    async def dispatch(self, request: DispatchRequest) -> ResponseEnvelope:
        """Run one tool call.

        Raises:
            McpError: Every failure, classified into exactly one error kind.
        """
        try:
            async with self._lock:
                return await self._dispatch(request)
        except Exception as e:
            envelope = classify(e)
            if envelope.kind is ErrorKind.UNDERLYING_FAILURE:
                logger.error('%s failed: %s', request.tool_name, envelope.message, exc_info=e)
            else:
                logger.info('%s rejected (%s): %s', request.tool_name, envelope.kind, envelope.message)
            raise envelope.to_mcp_error() from e

    async def _dispatch(self, request: DispatchRequest) -> ResponseEnvelope:
        if request.tool_name not in self._tool_names:
            raise UnknownToolError(request.tool_name)
        route = self._routes[request.tool_name]
        try:
            arguments = route.arguments.model_validate(dict(request.arguments or {}))
        except pydantic.ValidationError as e:
            raise InvalidArgumentError(format_validation_error(e, request.tool_name)) from e

        logger.debug('Calling %s', request.tool_name)
        result = await route.operation(self.session, *route.marshal(arguments))
        await self._publish_resources(request.tool_name, result)
        return ResponseEnvelope.from_result(result)

    async def _publish_resources(self, tool_name: str, result: ToolResult) -> None:
        """Register captures as resources. Best-effort: never fails the call."""
        try:
            if tool_name == 'get_page_source' and isinstance(result, PageSourceResult):
                source_url = await self._current_url()
                resource_id = self.resources.register_html(source_url, result.source)
                logger.info('Page HTML published as html://%s', resource_id)
            elif tool_name == 'take_screenshot' and isinstance(result, ScreenshotResult):
                resource_id = self.resources.register_screenshot(result.path)
                logger.info('Screenshot published as screenshot://%s', resource_id)
        except Exception:
            logger.warning('Failed to publish %s result as a resource', tool_name, exc_info=True)

    async def _current_url(self) -> str:
        try:
            return (await navigation.get_current_url(self.session)).url
        except BrowserAutomationError as e:
            logger.debug('Current URL unavailable for HTML resource: %s', e)
            return 'unknown'
