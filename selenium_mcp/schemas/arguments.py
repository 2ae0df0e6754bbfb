"""Tool argument models.

Field names are snake_case in Python and camelCase on the wire (``outputPath``,
``sourceBy``, ``windowHandle``...). Each model's JSON schema becomes the
``inputSchema`` of the tools that accept it.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

import pydantic
from pydantic import AnyUrl, Field, TypeAdapter, field_validator

from selenium_mcp.schemas.base import ToolArguments

__all__ = [
    'DEFAULT_TIMEOUT_MS',
    'BrowserName',
    'BrowserOptions',
    'DragAndDropArgs',
    'ElementAttributeArgs',
    'ElementCssValueArgs',
    'ElementPropertyArgs',
    'ExecuteScriptArgs',
    'LocatorArgs',
    'LocatorStrategy',
    'NavigateArgs',
    'NoArgs',
    'PressKeyArgs',
    'PressKeyComboArgs',
    'SelectorInput',
    'SendAlertTextArgs',
    'SendKeysArgs',
    'SetWindowSizeArgs',
    'StartBrowserArgs',
    'SwitchToFrameArgs',
    'SwitchToWindowArgs',
    'TakeScreenshotArgs',
    'TextPresentArgs',
    'UploadFileArgs',
    'ValidateSelectorsArgs',
    'WindowSize',
    'check_url',
]

DEFAULT_TIMEOUT_MS = 10_000

type BrowserName = Literal['chrome', 'firefox', 'edge', 'safari']
type LocatorStrategy = Literal['id', 'css', 'xpath', 'name', 'tag', 'class', 'linkText', 'partialLinkText']

type Timeout = Annotated[int, Field(ge=0, description='Wait timeout in milliseconds')]
type PositiveInt = Annotated[int, Field(gt=0)]


class NoArgs(ToolArguments):
    pass


# =============================================================================
# Session / navigation
# =============================================================================


class WindowSize(ToolArguments):
    width: PositiveInt = Field(description='Window width')
    height: PositiveInt = Field(description='Window height')


class BrowserOptions(ToolArguments):
    headless: bool = Field(default=False, description='Run browser in headless mode')
    arguments: list[str] = Field(default_factory=list, description='Additional browser arguments')
    window_size: WindowSize | None = Field(default=None, description='Browser window size')


class StartBrowserArgs(ToolArguments):
    browser: BrowserName = Field(default='chrome', description='Browser to launch')
    options: BrowserOptions = Field(default_factory=BrowserOptions, description='Browser options')


_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def check_url(url: str) -> str:
    """Return ``url`` unchanged if it parses as an absolute URL (scheme required).

    Raises:
        ValueError: ``Invalid URL format: <url>``
    """
    try:
        _url_adapter.validate_python(url)
    except pydantic.ValidationError:
        raise ValueError(f'Invalid URL format: {url}') from None
    return url


class NavigateArgs(ToolArguments):
    url: str = Field(min_length=1, description='URL to navigate to for analysis')

    @field_validator('url')
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return check_url(value)


# =============================================================================
# Element location
# =============================================================================


class LocatorArgs(ToolArguments):
    by: LocatorStrategy = Field(description='Locator strategy')
    value: str = Field(description='Selector value')
    timeout: Timeout = DEFAULT_TIMEOUT_MS


class ElementAttributeArgs(LocatorArgs):
    attribute: str = Field(min_length=1, description='Attribute name to get')


class ElementPropertyArgs(LocatorArgs):
    property: str = Field(min_length=1, description='Property name to get')


class ElementCssValueArgs(LocatorArgs):
    css_property: str = Field(min_length=1, description='CSS property name')


class SendKeysArgs(LocatorArgs):
    text: str = Field(description='Text to input')


class TextPresentArgs(LocatorArgs):
    text: str = Field(description='Text to wait for in the element')


class UploadFileArgs(LocatorArgs):
    file_path: str = Field(description='Absolute or relative path to the file to upload')


class DragAndDropArgs(ToolArguments):
    source_by: LocatorStrategy = Field(description='Locator strategy for source element')
    source_value: str = Field(description='Selector value for source element')
    target_by: LocatorStrategy = Field(description='Locator strategy for target element')
    target_value: str = Field(description='Selector value for target element')
    timeout: Timeout = DEFAULT_TIMEOUT_MS


# =============================================================================
# Keyboard, scripts, alerts, capture
# =============================================================================


class PressKeyArgs(ToolArguments):
    key: str = Field(description="Key to press (e.g., 'Enter', 'Tab', 'Escape', 'Space', 'F1', etc.)")


class PressKeyComboArgs(ToolArguments):
    keys: list[str] = Field(
        min_length=1,
        description="Array of keys to press together (e.g., ['ctrl', 'c'] for Ctrl+C)",
    )


class ExecuteScriptArgs(ToolArguments):
    script: str = Field(min_length=1, description='JavaScript code to execute')
    args: list[Any] = Field(
        default_factory=list,
        description="Optional arguments to pass to the script (accessible via 'arguments' array in the script)",
    )


class SendAlertTextArgs(ToolArguments):
    text: str = Field(description='Text to input into the prompt dialog')


class TakeScreenshotArgs(ToolArguments):
    output_path: str | None = Field(default=None, description='Optional path to save screenshot')


# =============================================================================
# Windows and frames
# =============================================================================


class SetWindowSizeArgs(ToolArguments):
    width: PositiveInt = Field(description='Window width in pixels')
    height: PositiveInt = Field(description='Window height in pixels')


class SwitchToWindowArgs(ToolArguments):
    window_handle: str = Field(min_length=1, description='Window handle to switch to')


class SwitchToFrameArgs(ToolArguments):
    frame_reference: str | int = Field(
        description='Frame reference (index, name, or id). Numbers should be passed as strings.'
    )


# =============================================================================
# Page discovery
# =============================================================================


class SelectorInput(ToolArguments):
    # Not LocatorStrategy: unsupported strategies are reported per selector, not rejected
    by: str = Field(description='Locator strategy')
    value: str = Field(description='Selector value')


class ValidateSelectorsArgs(ToolArguments):
    selectors: list[SelectorInput] = Field(description='Array of selectors to validate')
