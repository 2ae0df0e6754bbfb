"""Automation facade over Selenium WebDriver.

Every operation takes the BrowserSession as its first argument, validates
its inputs, requires a live driver, and runs blocking Selenium calls in a
worker thread behind a DriverBoundary.
"""

from __future__ import annotations

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.locators import LOCATOR_STRATEGIES, Locator
from selenium_mcp.browser.session import BrowserSession, DriverFactory, create_driver

__all__ = [
    'LOCATOR_STRATEGIES',
    'BrowserSession',
    'DriverBoundary',
    'DriverFactory',
    'Locator',
    'create_driver',
]
