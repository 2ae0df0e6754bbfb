"""File upload and screenshot capture.

Both accept paths from the client, so both confine them to the server's
working directory before touching the browser or the filesystem.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.elements import locate
from selenium_mcp.browser.locators import Locator
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_timeout, resolve_within_cwd
from selenium_mcp.errors import InvalidArgumentError
from selenium_mcp.schemas.arguments import DEFAULT_TIMEOUT_MS
from selenium_mcp.schemas.results import ScreenshotResult, SuccessResult

__all__ = [
    'take_screenshot',
    'upload_file',
]

logger = logging.getLogger(__name__)


async def upload_file(
    session: BrowserSession, by: str, value: str, file_path: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    """Send the absolute file path to a ``<input type="file">`` element."""
    locator = Locator.of(by, value)
    absolute_path = resolve_within_cwd(file_path, 'File path')
    if not absolute_path.is_file():
        raise InvalidArgumentError(f'File not found: {absolute_path}')
    require_timeout(timeout)
    driver = session.require_driver('upload_file')
    element = await locate(driver, locator, timeout, 'locate file input')
    async with DriverBoundary(f'upload file {absolute_path}', locator=locator, timeout_ms=timeout):
        await asyncio.to_thread(element.send_keys, str(absolute_path))
    return SuccessResult(success=True, message=f'File uploaded successfully: {absolute_path}')


async def take_screenshot(session: BrowserSession, output_path: str | None = None) -> ScreenshotResult:
    """Save a PNG of the viewport.

    Without ``output_path`` the image goes to the session's temporary
    screenshot directory, so a saved file always backs the result.
    """
    target = session.next_screenshot_path() if output_path is None else resolve_within_cwd(output_path, 'Output path')
    driver = session.require_driver('take_screenshot')
    async with DriverBoundary('take screenshot'):
        png = await asyncio.to_thread(driver.get_screenshot_as_png)
    async with DriverBoundary(f'save screenshot to {target}'):
        await asyncio.to_thread(_write_png, target, png)
    logger.info('Screenshot saved: %s (%d bytes)', target, len(png))
    return ScreenshotResult(success=True, message='Screenshot saved successfully', path=str(target))


def _write_png(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
