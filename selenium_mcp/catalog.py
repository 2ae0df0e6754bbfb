"""Static catalog of every tool the server can expose.

Descriptors are built once at import. Input and output schemas come from the
pydantic argument and result models, so the schema a client sees is the
schema arguments are validated against.
"""

from __future__ import annotations

from collections.abc import Sequence

import mcp.types

from selenium_mcp.schemas import arguments as args
from selenium_mcp.schemas import results
from selenium_mcp.schemas.base import ToolArguments
from selenium_mcp.schemas.results import ToolResult

__all__ = [
    'CATALOG',
    'catalog_names',
    'get_catalog',
    'validate_catalog',
]


def _tool(
    name: str,
    title: str,
    description: str,
    arguments: type[ToolArguments] = args.NoArgs,
    result: type[ToolResult] = results.SuccessResult,
    read_only: bool = False,
) -> mcp.types.Tool:
    return mcp.types.Tool(
        name=name,
        title=title,
        description=description,
        inputSchema=arguments.model_json_schema(by_alias=True),
        outputSchema=result.model_json_schema(by_alias=True, mode='serialization'),
        annotations=mcp.types.ToolAnnotations(title=title, readOnlyHint=read_only),
    )


CATALOG: tuple[mcp.types.Tool, ...] = (
    # -- Browser management --
    _tool(
        'start_browser',
        'Start Browser',
        'Start a new browser session with specified browser and options',
        args.StartBrowserArgs,
        results.StartBrowserResult,
    ),
    _tool('navigate', 'Navigate to URL', 'Navigate to a URL for page analysis', args.NavigateArgs, results.NavigateResult),
    _tool(
        'get_current_url',
        'Get Current URL',
        'Get the current page URL (useful for SPA navigation detection)',
        result=results.UrlResult,
        read_only=True,
    ),
    _tool('close_browser', 'Close Browser', 'Close the current browser session'),
    _tool('get_title', 'Get Page Title', 'Get the current page title', result=results.TitleResult, read_only=True),
    _tool('refresh', 'Refresh Page', 'Refresh the current page'),
    _tool('go_back', 'Go Back', 'Navigate back in browser history'),
    _tool('go_forward', 'Go Forward', 'Navigate forward in browser history'),
    # -- Page discovery --
    _tool(
        'get_page_source',
        'Get Page Source',
        'Get the complete HTML source code for AI analysis. The HTML is also published as an html:// resource.',
        result=results.PageSourceResult,
        read_only=True,
    ),
    _tool(
        'find_element',
        'Find Element',
        'Find a single element to verify selectors work',
        args.LocatorArgs,
        results.FindElementResult,
        read_only=True,
    ),
    _tool(
        'find_elements',
        'Find Elements',
        'Find multiple elements and get count for test validation',
        args.LocatorArgs,
        results.FindElementsResult,
        read_only=True,
    ),
    _tool(
        'take_screenshot',
        'Take Screenshot',
        'Capture page screenshot for visual context and documentation. '
        'The image is also published as a screenshot:// resource.',
        args.TakeScreenshotArgs,
        results.ScreenshotResult,
    ),
    _tool(
        'execute_script',
        'Execute JavaScript',
        'Execute JavaScript for custom page analysis',
        args.ExecuteScriptArgs,
        results.ScriptResult,
    ),
    # -- Alerts --
    _tool('accept_alert', 'Accept Alert', 'Accept (click OK on) the current alert, confirm, or prompt dialog'),
    _tool('dismiss_alert', 'Dismiss Alert', 'Dismiss (click Cancel on) the current alert or confirm dialog'),
    _tool(
        'get_alert_text',
        'Get Alert Text',
        'Get the text content of the current alert, confirm, or prompt dialog',
        result=results.AlertTextResult,
        read_only=True,
    ),
    _tool(
        'send_alert_text',
        'Send Alert Text',
        'Send text to a prompt dialog (must be called before accepting the prompt)',
        args.SendAlertTextArgs,
    ),
    # -- Element inspection --
    _tool(
        'get_element_text',
        'Get Element Text',
        'Get element text content for labels, buttons, and validation',
        args.LocatorArgs,
        results.ElementTextResult,
        read_only=True,
    ),
    _tool(
        'get_element_attribute',
        'Get Element Attribute',
        'Get element attributes (id, class, type, name, placeholder, etc.)',
        args.ElementAttributeArgs,
        results.ElementAttributeResult,
        read_only=True,
    ),
    _tool(
        'get_element_property',
        'Get Element Property',
        'Get element properties (value, checked, selected, etc.)',
        args.ElementPropertyArgs,
        results.ElementPropertyResult,
        read_only=True,
    ),
    _tool(
        'is_element_displayed',
        'Is Element Displayed',
        'Check if element is visible on the page',
        args.LocatorArgs,
        results.DisplayedResult,
        read_only=True,
    ),
    _tool(
        'is_element_enabled',
        'Is Element Enabled',
        'Check if element is enabled and interactive',
        args.LocatorArgs,
        results.EnabledResult,
        read_only=True,
    ),
    _tool(
        'is_element_selected',
        'Is Element Selected',
        'Check if element is selected (checkboxes, radio buttons)',
        args.LocatorArgs,
        results.SelectedResult,
        read_only=True,
    ),
    _tool(
        'get_element_css_value',
        'Get Element CSS Value',
        'Get element CSS properties for styling analysis',
        args.ElementCssValueArgs,
        results.CssValueResult,
        read_only=True,
    ),
    _tool('scroll_to_element', 'Scroll to Element', 'Scroll element into view for analysis', args.LocatorArgs),
    # -- Element interaction --
    _tool('click_element', 'Click Element', 'Test click interaction (for verification only)', args.LocatorArgs),
    _tool('send_keys', 'Send Keys', 'Test text input (for verification only)', args.SendKeysArgs),
    _tool(
        'hover_element',
        'Hover Over Element',
        'Hover over element to reveal hidden content (dropdowns, tooltips, menus)',
        args.LocatorArgs,
    ),
    _tool('clear_element', 'Clear Element', 'Clear the content of an input element', args.LocatorArgs),
    _tool('double_click_element', 'Double Click Element', 'Perform a double click on an element', args.LocatorArgs),
    _tool(
        'right_click_element',
        'Right Click Element',
        'Perform a right click (context click) on an element',
        args.LocatorArgs,
    ),
    _tool(
        'drag_and_drop',
        'Drag and Drop',
        'Drag an element and drop it onto another element',
        args.DragAndDropArgs,
    ),
    # -- Keyboard --
    _tool('press_key', 'Press Key', 'Simulate pressing a keyboard key', args.PressKeyArgs),
    _tool('press_key_combo', 'Press Key Combo', 'Simulate pressing a combination of keys', args.PressKeyComboArgs),
    # -- Files --
    _tool('upload_file', 'Upload File', 'Upload a file using a file input element', args.UploadFileArgs),
    # -- Windows and frames --
    _tool('maximize_window', 'Maximize Window', 'Maximize the browser window'),
    _tool('minimize_window', 'Minimize Window', 'Minimize the browser window'),
    _tool('set_window_size', 'Set Window Size', 'Set the browser window size', args.SetWindowSizeArgs),
    _tool(
        'get_window_size',
        'Get Window Size',
        'Get the current browser window size',
        result=results.WindowSizeResult,
        read_only=True,
    ),
    _tool(
        'switch_to_window',
        'Switch to Window',
        'Switch to a specific browser window or tab',
        args.SwitchToWindowArgs,
    ),
    _tool(
        'get_window_handles',
        'Get Window Handles',
        'Get all available window handles',
        result=results.WindowHandlesResult,
        read_only=True,
    ),
    _tool('switch_to_frame', 'Switch to Frame', 'Switch to a specific frame or iframe', args.SwitchToFrameArgs),
    _tool(
        'switch_to_default_content',
        'Switch to Default Content',
        'Switch back to the main document from a frame',
    ),
    # -- Waits --
    _tool(
        'wait_for_element',
        'Wait for Element',
        'Wait for an element to be present on the page',
        args.LocatorArgs,
        read_only=True,
    ),
    _tool(
        'wait_for_element_visible',
        'Wait for Element Visible',
        'Wait for an element to become visible',
        args.LocatorArgs,
        read_only=True,
    ),
    _tool(
        'wait_for_element_clickable',
        'Wait for Element Clickable',
        'Wait for an element to become clickable',
        args.LocatorArgs,
        read_only=True,
    ),
    _tool(
        'wait_for_text_present',
        'Wait for Text Present',
        'Wait for specific text to be present in an element',
        args.TextPresentArgs,
        read_only=True,
    ),
    # -- AI-oriented discovery --
    _tool(
        'get_all_links',
        'Get All Links',
        'Get all clickable links on the page for navigation test generation',
        result=results.LinksResult,
        read_only=True,
    ),
    _tool(
        'get_all_forms',
        'Get All Forms',
        'Get all forms and their fields for form test generation',
        result=results.FormsResult,
        read_only=True,
    ),
    _tool(
        'get_all_buttons',
        'Get All Buttons',
        'Get all buttons and interactive elements',
        result=results.ButtonsResult,
        read_only=True,
    ),
    _tool(
        'get_page_summary',
        'Get Page Summary',
        'Get AI-friendly structured summary of the page',
        result=results.PageSummaryResult,
        read_only=True,
    ),
    _tool(
        'validate_selectors',
        'Validate Selectors',
        'Test multiple selectors to find the most reliable ones',
        args.ValidateSelectorsArgs,
        results.ValidateSelectorsResult,
        read_only=True,
    ),
)


def validate_catalog(tools: Sequence[mcp.types.Tool]) -> None:
    """Check descriptor invariants: unique names, required fields declared.

    Raises:
        RuntimeError: On the first violation.
    """
    seen: set[str] = set()
    for tool in tools:
        if tool.name in seen:
            raise RuntimeError(f'Duplicate tool name in catalog: {tool.name}')
        seen.add(tool.name)
        properties = tool.inputSchema.get('properties', {})
        undeclared = [field for field in tool.inputSchema.get('required', []) if field not in properties]
        if undeclared:
            raise RuntimeError(f'Tool {tool.name} requires undeclared fields: {", ".join(undeclared)}')


validate_catalog(CATALOG)


def get_catalog() -> list[mcp.types.Tool]:
    """Fresh copies of every descriptor; callers may not mutate the catalog."""
    return [tool.model_copy(deep=True) for tool in CATALOG]


def catalog_names() -> frozenset[str]:
    return frozenset(tool.name for tool in CATALOG)
