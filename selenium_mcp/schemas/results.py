"""Tool result models.

Results are serialized with ``exclude_unset=True`` so optional fields such as
``warnings`` only appear when an operation produced them; no result field
carries a default otherwise.
"""

from __future__ import annotations

from typing import Any

from selenium_mcp.schemas.arguments import SelectorInput
from selenium_mcp.schemas.base import WireModel

__all__ = [
    'AlertTextResult',
    'ButtonInfo',
    'ButtonsResult',
    'CssValueResult',
    'DisplayedResult',
    'ElementAttributeResult',
    'ElementPropertyResult',
    'ElementTextResult',
    'EnabledResult',
    'FindElementResult',
    'FindElementsResult',
    'FormField',
    'FormInfo',
    'FormsResult',
    'Heading',
    'LinkInfo',
    'LinksResult',
    'NavigateResult',
    'PageSourceResult',
    'PageSummaryResult',
    'ScreenshotResult',
    'ScriptResult',
    'SelectedResult',
    'SelectorValidationResult',
    'StartBrowserResult',
    'SuccessResult',
    'TitleResult',
    'ToolResult',
    'UrlResult',
    'ValidateSelectorsResult',
    'WindowHandlesResult',
    'WindowSizeResult',
]


class ToolResult(WireModel):
    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_unset=True)


class SuccessResult(ToolResult):
    success: bool
    message: str


class StartBrowserResult(SuccessResult):
    warnings: list[str] | None = None  # Only set when the browser ignored some options


class NavigateResult(SuccessResult):
    url: str


class ScreenshotResult(SuccessResult):
    path: str


class UrlResult(ToolResult):
    url: str


class TitleResult(ToolResult):
    title: str


class PageSourceResult(ToolResult):
    source: str


class FindElementResult(ToolResult):
    found: bool
    message: str


class FindElementsResult(ToolResult):
    count: int
    message: str


class ElementTextResult(ToolResult):
    text: str


class ElementAttributeResult(ToolResult):
    attribute: str
    value: str | None


class ElementPropertyResult(ToolResult):
    property: str
    value: Any


class CssValueResult(ToolResult):
    property: str
    value: str


class DisplayedResult(ToolResult):
    displayed: bool


class EnabledResult(ToolResult):
    enabled: bool


class SelectedResult(ToolResult):
    selected: bool


class ScriptResult(ToolResult):
    result: Any


class AlertTextResult(ToolResult):
    text: str


class WindowSizeResult(ToolResult):
    width: int
    height: int


class WindowHandlesResult(ToolResult):
    handles: list[str]


# -- Page discovery --


class LinkInfo(WireModel):
    text: str
    href: str
    selector: str


class LinksResult(ToolResult):
    links: list[LinkInfo]


class FormField(WireModel):
    name: str
    type: str
    label: str
    selector: str


class FormInfo(WireModel):
    action: str
    method: str
    fields: list[FormField]


class FormsResult(ToolResult):
    forms: list[FormInfo]


class ButtonInfo(WireModel):
    text: str
    type: str
    selector: str


class ButtonsResult(ToolResult):
    buttons: list[ButtonInfo]


class Heading(WireModel):
    level: str  # "H1" .. "H6"
    text: str


class PageSummaryResult(ToolResult):
    title: str
    url: str
    forms: int
    links: int
    buttons: int
    inputs: int
    images: int
    headings: list[Heading]
    main_content: str


class SelectorValidationResult(WireModel):
    selector: SelectorInput
    found: bool
    count: int
    error: str | None = None


class ValidateSelectorsResult(ToolResult):
    results: list[SelectorValidationResult]
