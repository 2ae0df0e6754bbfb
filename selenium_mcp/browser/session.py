"""Browser session handle shared by every facade operation."""

from __future__ import annotations

import asyncio
import logging
import sys
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Self

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.safari.options import Options as SafariOptions

from selenium_mcp.errors import SessionNotStartedError
from selenium_mcp.schemas.arguments import BrowserName, BrowserOptions

__all__ = [
    'BrowserSession',
    'DriverFactory',
    'create_driver',
]

logger = logging.getLogger(__name__)

type DriverFactory = Callable[[BrowserName, BrowserOptions], WebDriver]


def create_driver(browser: BrowserName, options: BrowserOptions) -> WebDriver:
    """Launch a local browser. Blocking; call through ``asyncio.to_thread``.

    Window size is applied by the caller after launch, uniformly for every
    browser. Safari accepts neither headless mode nor custom arguments.
    """
    match browser:
        case 'chrome':
            chrome_options = ChromeOptions()
            _add_arguments(chrome_options, options, headless_flag='--headless=new')
            return webdriver.Chrome(options=chrome_options)
        case 'firefox':
            firefox_options = FirefoxOptions()
            _add_arguments(firefox_options, options, headless_flag='--headless')
            return webdriver.Firefox(options=firefox_options)
        case 'edge':
            edge_options = EdgeOptions()
            _add_arguments(edge_options, options, headless_flag='--headless=new')
            return webdriver.Edge(options=edge_options)
        case 'safari':
            return webdriver.Safari(options=SafariOptions())


def _add_arguments(
    target: ChromeOptions | EdgeOptions | FirefoxOptions,
    options: BrowserOptions,
    headless_flag: str,
) -> None:
    if options.headless:
        target.add_argument(headless_flag)
    for argument in options.arguments:
        target.add_argument(argument)


class BrowserSession:
    """At most one live WebDriver, plus a temp directory for screenshots.

    Created once at startup and passed explicitly to every operation. The
    driver is None until ``start_browser`` and again after ``close_browser``.
    """

    @classmethod
    def create(cls, driver_factory: DriverFactory = create_driver) -> Self:
        """Factory method creating the session and its screenshot directory."""
        temp_dir = tempfile.TemporaryDirectory(prefix='selenium-mcp-')
        return cls(temp_dir=temp_dir, driver_factory=driver_factory)

    def __init__(self, temp_dir: tempfile.TemporaryDirectory[str], driver_factory: DriverFactory) -> None:
        self.driver: WebDriver | None = None
        self.browser: BrowserName | None = None
        self.temp_dir = temp_dir
        self.screenshot_dir = Path(temp_dir.name)
        self._driver_factory = driver_factory
        self._screenshot_counter = 0

    @property
    def is_active(self) -> bool:
        return self.driver is not None

    def require_driver(self, operation: str) -> WebDriver:
        """Return the live driver or fail with SessionNotStarted."""
        if self.driver is None:
            raise SessionNotStartedError(operation)
        return self.driver

    async def launch(self, browser: BrowserName, options: BrowserOptions) -> WebDriver:
        """Start a new driver, replacing any active one.

        Closing the previous driver is best-effort: a failure is logged and
        the new browser still starts.
        """
        if self.driver is not None:
            previous, self.driver, self.browser = self.driver, None, None
            try:
                await asyncio.to_thread(previous.quit)
            except Exception:
                logger.warning('Failed to close previous browser session', exc_info=True)
        driver = await asyncio.to_thread(self._driver_factory, browser, options)
        self.driver = driver
        self.browser = browser
        logger.info('Started %s browser', browser)
        return driver

    async def quit(self) -> bool:
        """Quit the active driver. Returns False when there was none.

        The session is cleared even if ``quit`` fails; a driver that cannot
        quit is not reusable.
        """
        driver = self.driver
        if driver is None:
            return False
        self.driver, self.browser = None, None
        await asyncio.to_thread(driver.quit)
        logger.info('Browser closed')
        return True

    def next_screenshot_path(self) -> Path:
        """Fresh PNG path inside the session's temporary screenshot directory."""
        self._screenshot_counter += 1
        timestamp_ms = int(time.time() * 1000)
        return self.screenshot_dir / f'screenshot-{timestamp_ms}-{self._screenshot_counter}.png'

    def cleanup_sync(self) -> None:
        """Synchronous cleanup for signal handlers (runs in main thread)."""
        if self.driver is not None:
            try:
                self.driver.quit()
                print('✓ Browser closed', file=sys.stderr)
            except Exception as e:
                print(f'✗ Browser close error: {e}', file=sys.stderr)
            self.driver = None
        self.temp_dir.cleanup()
