"""Explicit wait tools.

``wait_for_element`` and ``wait_for_text_present`` time out as
OperationTimedOut; the visibility and clickability waits report
ElementNotReady with the state that was not reached.
"""

from __future__ import annotations

import asyncio

from selenium.webdriver.support import expected_conditions as EC

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.elements import element_is_enabled, locate, wait_until
from selenium_mcp.browser.locators import Locator
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_text, require_timeout
from selenium_mcp.schemas.arguments import DEFAULT_TIMEOUT_MS
from selenium_mcp.schemas.results import SuccessResult

__all__ = [
    'wait_for_element',
    'wait_for_element_clickable',
    'wait_for_element_visible',
    'wait_for_text_present',
]


async def wait_for_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('wait_for_element')
    async with DriverBoundary('wait for element', locator=locator, timeout_ms=timeout, timeout_kind='operation'):
        await asyncio.to_thread(wait_until, driver, timeout, EC.presence_of_element_located(locator.selenium))
    return SuccessResult(success=True, message='Element found within timeout')


async def wait_for_element_visible(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('wait_for_element_visible')
    async with DriverBoundary(
        'wait for element visible', locator=locator, timeout_ms=timeout, expected_state='visible'
    ):
        element = await locate(driver, locator, timeout, 'wait for element visible')
        await asyncio.to_thread(wait_until, driver, timeout, EC.visibility_of(element))
    return SuccessResult(success=True, message='Element became visible within timeout')


async def wait_for_element_clickable(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    """Wait until the element is present and enabled."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('wait_for_element_clickable')
    async with DriverBoundary(
        'wait for element clickable', locator=locator, timeout_ms=timeout, expected_state='clickable'
    ):
        element = await locate(driver, locator, timeout, 'wait for element clickable')
        await asyncio.to_thread(wait_until, driver, timeout, element_is_enabled(element))
    return SuccessResult(success=True, message='Element became clickable within timeout')


async def wait_for_text_present(
    session: BrowserSession, by: str, value: str, text: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_text(text, 'Text')
    require_timeout(timeout)
    driver = session.require_driver('wait_for_text_present')
    async with DriverBoundary(
        f'wait for text {text!r}', locator=locator, timeout_ms=timeout, timeout_kind='operation'
    ):
        await asyncio.to_thread(wait_until, driver, timeout, EC.text_to_be_present_in_element(locator.selenium, text))
    return SuccessResult(success=True, message=f"Text '{text}' found in element within timeout")
