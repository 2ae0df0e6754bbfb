"""Session lifecycle and page navigation."""

from __future__ import annotations

import asyncio
import logging

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_positive, require_url
from selenium_mcp.errors import InvalidArgumentError
from selenium_mcp.schemas.arguments import BrowserName, BrowserOptions
from selenium_mcp.schemas.results import (
    NavigateResult,
    PageSourceResult,
    StartBrowserResult,
    SuccessResult,
    TitleResult,
    UrlResult,
)

__all__ = [
    'SUPPORTED_BROWSERS',
    'close_browser',
    'get_current_url',
    'get_page_source',
    'get_title',
    'go_back',
    'go_forward',
    'navigate',
    'refresh',
    'start_browser',
]

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS: tuple[BrowserName, ...] = ('chrome', 'firefox', 'edge', 'safari')


async def start_browser(
    session: BrowserSession,
    browser: BrowserName = 'chrome',
    options: BrowserOptions | None = None,
) -> StartBrowserResult:
    """Launch a browser, replacing any active session.

    Safari ignores ``headless`` and ``arguments``; both are reported as
    warnings instead of failing. Safari window sizing is best-effort.
    """
    if browser not in SUPPORTED_BROWSERS:
        raise InvalidArgumentError(f'Unsupported browser: {browser} (expected one of: {", ".join(SUPPORTED_BROWSERS)})')
    options = options or BrowserOptions()
    if options.window_size is not None:
        require_positive(options.window_size.width, 'Window width')
        require_positive(options.window_size.height, 'Window height')

    async with DriverBoundary(f'start {browser} browser'):
        driver = await session.launch(browser, options)

    if options.window_size is not None:
        size = options.window_size
        try:
            async with DriverBoundary(f'set {browser} window size'):
                await asyncio.to_thread(driver.set_window_rect, x=0, y=0, width=size.width, height=size.height)
        except Exception:
            if browser != 'safari':
                raise
            logger.warning('Safari rejected window size %dx%d; continuing', size.width, size.height)

    warnings = []
    if browser == 'safari':
        if options.arguments:
            warnings.append('Safari does not support custom arguments. Ignoring provided arguments.')
        if options.headless:
            warnings.append('Safari does not support headless mode. Running in normal mode.')

    message = f'{browser} browser started successfully'
    if warnings:
        return StartBrowserResult(success=True, message=message, warnings=warnings)
    return StartBrowserResult(success=True, message=message)


async def close_browser(session: BrowserSession) -> SuccessResult:
    async with DriverBoundary('close browser'):
        closed = await session.quit()
    if not closed:
        return SuccessResult(success=True, message='No browser session to close')
    return SuccessResult(success=True, message='Browser closed successfully')


async def navigate(session: BrowserSession, url: str) -> NavigateResult:
    require_url(url)
    driver = session.require_driver('navigate')
    async with DriverBoundary(f'navigate to {url}', timeout_kind='operation'):
        await asyncio.to_thread(driver.get, url)
        current_url = await asyncio.to_thread(lambda: driver.current_url)
    return NavigateResult(success=True, message='Navigation successful', url=current_url)


async def get_current_url(session: BrowserSession) -> UrlResult:
    driver = session.require_driver('get_current_url')
    async with DriverBoundary('get current URL'):
        url = await asyncio.to_thread(lambda: driver.current_url)
    return UrlResult(url=url)


async def get_title(session: BrowserSession) -> TitleResult:
    driver = session.require_driver('get_title')
    async with DriverBoundary('get page title'):
        title = await asyncio.to_thread(lambda: driver.title)
    return TitleResult(title=title)


async def refresh(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('refresh')
    async with DriverBoundary('refresh page', timeout_kind='operation'):
        await asyncio.to_thread(driver.refresh)
    return SuccessResult(success=True, message='Page refreshed successfully')


async def go_back(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('go_back')
    async with DriverBoundary('navigate back', timeout_kind='operation'):
        await asyncio.to_thread(driver.back)
    return SuccessResult(success=True, message='Navigated back successfully')


async def go_forward(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('go_forward')
    async with DriverBoundary('navigate forward', timeout_kind='operation'):
        await asyncio.to_thread(driver.forward)
    return SuccessResult(success=True, message='Navigated forward successfully')


async def get_page_source(session: BrowserSession) -> PageSourceResult:
    driver = session.require_driver('get_page_source')
    async with DriverBoundary('get page source'):
        source = await asyncio.to_thread(lambda: driver.page_source)
    return PageSourceResult(source=source)
