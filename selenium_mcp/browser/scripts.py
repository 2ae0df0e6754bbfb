"""Arbitrary JavaScript execution in the page."""

from __future__ import annotations

import asyncio
from typing import Any

from selenium.webdriver.remote.webelement import WebElement

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_text
from selenium_mcp.schemas.results import ScriptResult

__all__ = [
    'execute_script',
    'to_json_value',
]


async def execute_script(session: BrowserSession, script: str, args: list[Any] | None = None) -> ScriptResult:
    """Run ``script`` synchronously; its ``return`` value becomes ``result``."""
    require_text(script, 'Script')
    driver = session.require_driver('execute_script')
    async with DriverBoundary('execute script'):
        result = await asyncio.to_thread(driver.execute_script, script, *(args or []))
    return ScriptResult(result=to_json_value(result))


def to_json_value(value: Any) -> Any:
    """Replace WebElements (returned for DOM nodes) with a reference the client can read."""
    if isinstance(value, WebElement):
        return {'elementId': value.id}
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value
