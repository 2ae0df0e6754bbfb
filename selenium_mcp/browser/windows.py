"""Window sizing, window handles and frame switching."""

from __future__ import annotations

import asyncio

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_positive, require_text
from selenium_mcp.errors import InvalidArgumentError
from selenium_mcp.schemas.results import SuccessResult, WindowHandlesResult, WindowSizeResult

__all__ = [
    'frame_target',
    'get_window_handles',
    'get_window_size',
    'maximize_window',
    'minimize_window',
    'set_window_size',
    'switch_to_default_content',
    'switch_to_frame',
    'switch_to_window',
]


async def maximize_window(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('maximize_window')
    async with DriverBoundary('maximize window'):
        await asyncio.to_thread(driver.maximize_window)
    return SuccessResult(success=True, message='Window maximized successfully')


async def minimize_window(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('minimize_window')
    async with DriverBoundary('minimize window'):
        await asyncio.to_thread(driver.minimize_window)
    return SuccessResult(success=True, message='Window minimized successfully')


async def set_window_size(session: BrowserSession, width: int, height: int) -> SuccessResult:
    """Resize the window, keeping it anchored at the top-left corner."""
    require_positive(width, 'Window width')
    require_positive(height, 'Window height')
    driver = session.require_driver('set_window_size')
    async with DriverBoundary(f'set window size to {width}x{height}'):
        await asyncio.to_thread(driver.set_window_rect, x=0, y=0, width=width, height=height)
    return SuccessResult(success=True, message=f'Window size set to {width}x{height}')


async def get_window_size(session: BrowserSession) -> WindowSizeResult:
    driver = session.require_driver('get_window_size')
    async with DriverBoundary('get window size'):
        rect = await asyncio.to_thread(driver.get_window_rect)
    return WindowSizeResult(width=int(rect['width']), height=int(rect['height']))


async def get_window_handles(session: BrowserSession) -> WindowHandlesResult:
    driver = session.require_driver('get_window_handles')
    async with DriverBoundary('get window handles'):
        handles = await asyncio.to_thread(lambda: driver.window_handles)
    return WindowHandlesResult(handles=list(handles))


async def switch_to_window(session: BrowserSession, window_handle: str) -> SuccessResult:
    require_text(window_handle, 'Window handle')
    driver = session.require_driver('switch_to_window')
    async with DriverBoundary(f'switch to window {window_handle}'):
        await asyncio.to_thread(driver.switch_to.window, window_handle)
    return SuccessResult(success=True, message='Switched to window successfully')


def frame_target(frame_reference: str | int) -> str | int:
    """Numeric strings ("0", "12") select frames by index; other strings by name or id."""
    if isinstance(frame_reference, bool):
        raise InvalidArgumentError(f'Frame reference must be a string or index, got {frame_reference!r}')
    if isinstance(frame_reference, int):
        if frame_reference < 0:
            raise InvalidArgumentError(f'Frame index cannot be negative: {frame_reference}')
        return frame_reference
    require_text(frame_reference, 'Frame reference')
    if frame_reference.isdecimal() and str(int(frame_reference)) == frame_reference:
        return int(frame_reference)
    return frame_reference


async def switch_to_frame(session: BrowserSession, frame_reference: str | int) -> SuccessResult:
    target = frame_target(frame_reference)
    driver = session.require_driver('switch_to_frame')
    async with DriverBoundary(f'switch to frame {frame_reference!r}'):
        await asyncio.to_thread(driver.switch_to.frame, target)
    return SuccessResult(success=True, message='Switched to frame successfully')


async def switch_to_default_content(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('switch_to_default_content')
    async with DriverBoundary('switch to default content'):
        await asyncio.to_thread(driver.switch_to.default_content)
    return SuccessResult(success=True, message='Switched to default content successfully')
