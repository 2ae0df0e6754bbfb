"""Element lookup, queries and interactions.

Every operation locates its element with an explicit wait (``presence``) of
``timeout`` milliseconds. A locate that times out is an ElementNotReady
failure carrying the locator and timeout.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.locators import Locator
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_text, require_timeout
from selenium_mcp.errors import ElementNotReadyError, UnderlyingFailureError
from selenium_mcp.schemas.arguments import DEFAULT_TIMEOUT_MS
from selenium_mcp.schemas.results import (
    CssValueResult,
    DisplayedResult,
    ElementAttributeResult,
    ElementPropertyResult,
    ElementTextResult,
    EnabledResult,
    FindElementResult,
    FindElementsResult,
    SelectedResult,
    SuccessResult,
)

__all__ = [
    'clear_element',
    'click_element',
    'double_click_element',
    'drag_and_drop',
    'element_is_enabled',
    'find_element',
    'find_elements',
    'get_element_attribute',
    'get_element_css_value',
    'get_element_property',
    'get_element_text',
    'hover_element',
    'is_element_displayed',
    'is_element_enabled',
    'is_element_selected',
    'locate',
    'right_click_element',
    'scroll_to_element',
    'send_keys',
    'wait_until',
]

logger = logging.getLogger(__name__)

# find_elements pauses at most this long before counting
FIND_ELEMENTS_SETTLE_MS = 1000


# =============================================================================
# Shared helpers
# =============================================================================


def wait_until(driver: WebDriver, timeout_ms: int, condition: Callable[[WebDriver], Any]) -> Any:
    """Blocking WebDriverWait on ``condition``. Raises TimeoutException."""
    return WebDriverWait(driver, timeout_ms / 1000).until(condition)


def element_is_enabled(element: WebElement) -> Callable[[WebDriver], WebElement | bool]:
    def _predicate(_driver: WebDriver) -> WebElement | bool:
        return element if element.is_enabled() else False

    return _predicate


async def locate(driver: WebDriver, locator: Locator, timeout_ms: int, operation: str) -> WebElement:
    """Wait for the element to be present in the DOM."""
    async with DriverBoundary(operation, locator=locator, timeout_ms=timeout_ms):
        return await asyncio.to_thread(wait_until, driver, timeout_ms, EC.presence_of_element_located(locator.selenium))


# =============================================================================
# Queries
# =============================================================================


async def find_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> FindElementResult:
    """Report whether the element exists; a missing element is a result, not an error."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('find_element')
    try:
        await locate(driver, locator, timeout, f'find element [{locator}]')
    except (ElementNotReadyError, UnderlyingFailureError) as e:
        return FindElementResult(found=False, message=f'Element not found: {e}')
    return FindElementResult(found=True, message='Element found successfully')


async def find_elements(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> FindElementsResult:
    """Count matching elements after a short settle pause (no presence wait)."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('find_elements')
    await asyncio.sleep(min(timeout, FIND_ELEMENTS_SETTLE_MS) / 1000)
    async with DriverBoundary(f'find elements [{locator}]'):
        elements = await asyncio.to_thread(driver.find_elements, *locator.selenium)
    return FindElementsResult(count=len(elements), message=f'Found {len(elements)} elements')


async def get_element_text(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> ElementTextResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('get_element_text')
    element = await locate(driver, locator, timeout, 'get element text')
    async with DriverBoundary('get element text', locator=locator, timeout_ms=timeout):
        text = await asyncio.to_thread(lambda: element.text)
    return ElementTextResult(text=text)


async def get_element_attribute(
    session: BrowserSession, by: str, value: str, attribute: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> ElementAttributeResult:
    locator = Locator.of(by, value)
    require_text(attribute, 'Attribute name')
    require_timeout(timeout)
    driver = session.require_driver('get_element_attribute')
    element = await locate(driver, locator, timeout, 'get element attribute')
    async with DriverBoundary(f'get attribute {attribute!r}', locator=locator, timeout_ms=timeout):
        attr_value = await asyncio.to_thread(element.get_attribute, attribute)
    return ElementAttributeResult(attribute=attribute, value=attr_value)


async def get_element_property(
    session: BrowserSession, by: str, value: str, property: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> ElementPropertyResult:
    """Read a DOM property (value, checked, selected...).

    ``get_attribute`` is used because it falls back from property to
    attribute and always returns a JSON-serializable value, unlike
    ``get_property`` which can return WebElements.
    """
    locator = Locator.of(by, value)
    require_text(property, 'Property name')
    require_timeout(timeout)
    driver = session.require_driver('get_element_property')
    element = await locate(driver, locator, timeout, 'get element property')
    async with DriverBoundary(f'get property {property!r}', locator=locator, timeout_ms=timeout):
        prop_value = await asyncio.to_thread(element.get_attribute, property)
    return ElementPropertyResult(property=property, value=prop_value)


async def get_element_css_value(
    session: BrowserSession, by: str, value: str, css_property: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> CssValueResult:
    locator = Locator.of(by, value)
    require_text(css_property, 'CSS property')
    require_timeout(timeout)
    driver = session.require_driver('get_element_css_value')
    element = await locate(driver, locator, timeout, 'get element CSS value')
    async with DriverBoundary(f'get CSS value {css_property!r}', locator=locator, timeout_ms=timeout):
        css_value = await asyncio.to_thread(element.value_of_css_property, css_property)
    return CssValueResult(property=css_property, value=css_value)


async def _element_flag(
    session: BrowserSession, operation: str, by: str, value: str, timeout: int, read: Callable[[WebElement], bool]
) -> bool:
    """Shared body of the is_element_* tools: any lookup or driver failure reads as False."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver(operation)
    try:
        element = await locate(driver, locator, timeout, operation)
        async with DriverBoundary(operation, locator=locator, timeout_ms=timeout):
            return bool(await asyncio.to_thread(read, element))
    except (ElementNotReadyError, UnderlyingFailureError) as e:
        logger.debug('%s [%s] reported False: %s', operation, locator, e)
        return False


async def is_element_displayed(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> DisplayedResult:
    displayed = await _element_flag(session, 'is_element_displayed', by, value, timeout, WebElement.is_displayed)
    return DisplayedResult(displayed=displayed)


async def is_element_enabled(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> EnabledResult:
    enabled = await _element_flag(session, 'is_element_enabled', by, value, timeout, WebElement.is_enabled)
    return EnabledResult(enabled=enabled)


async def is_element_selected(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SelectedResult:
    selected = await _element_flag(session, 'is_element_selected', by, value, timeout, WebElement.is_selected)
    return SelectedResult(selected=selected)


# =============================================================================
# Interactions
# =============================================================================


async def scroll_to_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('scroll_to_element')
    element = await locate(driver, locator, timeout, 'scroll to element')
    async with DriverBoundary('scroll to element', locator=locator, timeout_ms=timeout):
        await asyncio.to_thread(driver.execute_script, 'arguments[0].scrollIntoView(true);', element)
    return SuccessResult(success=True, message='Scrolled to element successfully')


async def click_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    """Click once the element is present and enabled."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('click_element')
    element = await locate(driver, locator, timeout, 'click element')
    async with DriverBoundary('click element', locator=locator, timeout_ms=timeout, expected_state='enabled'):
        await asyncio.to_thread(wait_until, driver, timeout, element_is_enabled(element))
        await asyncio.to_thread(element.click)
    return SuccessResult(success=True, message='Element clicked successfully')


async def send_keys(
    session: BrowserSession, by: str, value: str, text: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    """Replace the element's content with ``text``."""
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('send_keys')
    element = await locate(driver, locator, timeout, 'send keys')
    async with DriverBoundary('send keys', locator=locator, timeout_ms=timeout):
        await asyncio.to_thread(element.clear)
        await asyncio.to_thread(element.send_keys, text)
    return SuccessResult(success=True, message='Text sent successfully')


async def clear_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('clear_element')
    element = await locate(driver, locator, timeout, 'clear element')
    async with DriverBoundary('clear element', locator=locator, timeout_ms=timeout):
        await asyncio.to_thread(element.clear)
    return SuccessResult(success=True, message='Element cleared successfully')


async def _perform(driver: WebDriver, build: Callable[[ActionChains], ActionChains]) -> None:
    def _run() -> None:
        build(ActionChains(driver)).perform()

    await asyncio.to_thread(_run)


async def hover_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('hover_element')
    element = await locate(driver, locator, timeout, 'hover over element')
    async with DriverBoundary('hover over element', locator=locator, timeout_ms=timeout):
        await _perform(driver, lambda actions: actions.move_to_element(element))
    return SuccessResult(success=True, message='Hovered over element successfully')


async def double_click_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('double_click_element')
    element = await locate(driver, locator, timeout, 'double click element')
    async with DriverBoundary('double click element', locator=locator, timeout_ms=timeout):
        await _perform(driver, lambda actions: actions.double_click(element))
    return SuccessResult(success=True, message='Double clicked element successfully')


async def right_click_element(
    session: BrowserSession, by: str, value: str, timeout: int = DEFAULT_TIMEOUT_MS
) -> SuccessResult:
    locator = Locator.of(by, value)
    require_timeout(timeout)
    driver = session.require_driver('right_click_element')
    element = await locate(driver, locator, timeout, 'right click element')
    async with DriverBoundary('right click element', locator=locator, timeout_ms=timeout):
        await _perform(driver, lambda actions: actions.context_click(element))
    return SuccessResult(success=True, message='Right clicked element successfully')


async def drag_and_drop(
    session: BrowserSession,
    source_by: str,
    source_value: str,
    target_by: str,
    target_value: str,
    timeout: int = DEFAULT_TIMEOUT_MS,
) -> SuccessResult:
    source = Locator.of(source_by, source_value)
    target = Locator.of(target_by, target_value)
    require_timeout(timeout)
    driver = session.require_driver('drag_and_drop')
    source_element = await locate(driver, source, timeout, 'locate drag source')
    target_element = await locate(driver, target, timeout, 'locate drop target')
    async with DriverBoundary(f'drag [{source}] onto [{target}]', timeout_ms=timeout):
        await _perform(driver, lambda actions: actions.drag_and_drop(source_element, target_element))
    return SuccessResult(success=True, message='Drag and drop completed successfully')
