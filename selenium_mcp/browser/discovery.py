"""Page discovery for test generation.

Extracts links, forms, buttons and a page summary, each paired with a
suggested CSS selector. Selector preference: ``#id``, then the first class,
then an attribute selector.
"""

from __future__ import annotations

import asyncio
import logging

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.locators import Locator
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.errors import BrowserAutomationError
from selenium_mcp.schemas.arguments import SelectorInput
from selenium_mcp.schemas.results import (
    ButtonInfo,
    ButtonsResult,
    FormField,
    FormInfo,
    FormsResult,
    Heading,
    LinkInfo,
    LinksResult,
    PageSummaryResult,
    SelectorValidationResult,
    ValidateSelectorsResult,
)

__all__ = [
    'MAX_CONTENT_LENGTH',
    'MAX_HEADINGS',
    'MAX_LINKS_TO_EXTRACT',
    'get_all_buttons',
    'get_all_forms',
    'get_all_links',
    'get_page_summary',
    'validate_selectors',
]

logger = logging.getLogger(__name__)

MAX_LINKS_TO_EXTRACT = 50
MAX_HEADINGS = 10
MAX_CONTENT_LENGTH = 500

LINKS_CSS = 'a[href]'
FORM_FIELDS_CSS = 'input, select, textarea'
BUTTONS_CSS = 'button, input[type="button"], input[type="submit"], input[type="reset"], [role="button"]'
SUMMARY_BUTTONS_CSS = 'button, input[type="button"], input[type="submit"]'
HEADINGS_CSS = 'h1, h2, h3, h4, h5, h6'
MAIN_CONTENT_CSS = 'main, [role="main"], .main-content, #main-content'


async def get_all_links(session: BrowserSession) -> LinksResult:
    driver = session.require_driver('get_all_links')
    async with DriverBoundary('get all links'):
        links = await asyncio.to_thread(_extract_links, driver)
    return LinksResult(links=links)


def _extract_links(driver: WebDriver) -> list[LinkInfo]:
    links = []
    for link in driver.find_elements(By.CSS_SELECTOR, LINKS_CSS)[:MAX_LINKS_TO_EXTRACT]:
        href = link.get_attribute('href') or ''
        selector = _best_selector(link.get_attribute('id'), link.get_attribute('class'), f'a[href="{href}"]')
        links.append(LinkInfo(text=link.text.strip(), href=href, selector=selector))
    return links


async def get_all_forms(session: BrowserSession) -> FormsResult:
    driver = session.require_driver('get_all_forms')
    async with DriverBoundary('get all forms'):
        forms = await asyncio.to_thread(_extract_forms, driver)
    return FormsResult(forms=forms)


def _extract_forms(driver: WebDriver) -> list[FormInfo]:
    forms = []
    for form in driver.find_elements(By.CSS_SELECTOR, 'form'):
        fields = [_form_field(driver, field) for field in form.find_elements(By.CSS_SELECTOR, FORM_FIELDS_CSS)]
        forms.append(
            FormInfo(
                action=form.get_attribute('action') or '',
                method=form.get_attribute('method') or 'GET',
                fields=fields,
            )
        )
    return forms


def _form_field(driver: WebDriver, field: WebElement) -> FormField:
    name = field.get_attribute('name') or ''
    field_type = field.get_attribute('type') or 'text'
    field_id = field.get_attribute('id') or ''
    placeholder = field.get_attribute('placeholder') or ''

    label = ''
    if field_id:
        try:
            label = driver.find_element(By.CSS_SELECTOR, f'label[for="{field_id}"]').text
        except NoSuchElementException:
            pass  # Unlabelled field; placeholder is the fallback

    if field_id:
        selector = f'#{field_id}'
    elif name:
        selector = f'[name="{name}"]'
    else:
        selector = f'[type="{field_type}"]'
    return FormField(name=name, type=field_type, label=label or placeholder, selector=selector)


async def get_all_buttons(session: BrowserSession) -> ButtonsResult:
    driver = session.require_driver('get_all_buttons')
    async with DriverBoundary('get all buttons'):
        buttons = await asyncio.to_thread(_extract_buttons, driver)
    return ButtonsResult(buttons=buttons)


def _extract_buttons(driver: WebDriver) -> list[ButtonInfo]:
    buttons = []
    for button in driver.find_elements(By.CSS_SELECTOR, BUTTONS_CSS):
        display_text = button.text or button.get_attribute('value') or ''
        button_type = button.get_attribute('type') or 'button'
        fallback = f'button:contains("{display_text}")' if display_text else f'[type="{button_type}"]'
        selector = _best_selector(button.get_attribute('id'), button.get_attribute('class'), fallback)
        buttons.append(ButtonInfo(text=display_text.strip(), type=button_type, selector=selector))
    return buttons


def _best_selector(element_id: str | None, class_name: str | None, fallback: str) -> str:
    if element_id:
        return f'#{element_id}'
    if class_name and class_name.split():
        return f'.{class_name.split()[0]}'
    return fallback


async def get_page_summary(session: BrowserSession) -> PageSummaryResult:
    """Title, URL, element counts, the first headings and a main-content preview."""
    driver = session.require_driver('get_page_summary')
    async with DriverBoundary('get page summary'):
        return await asyncio.to_thread(_summarize, driver)


def _summarize(driver: WebDriver) -> PageSummaryResult:
    def count(css: str) -> int:
        return len(driver.find_elements(By.CSS_SELECTOR, css))

    headings = [
        Heading(level=heading.tag_name.upper(), text=heading.text.strip())
        for heading in driver.find_elements(By.CSS_SELECTOR, HEADINGS_CSS)[:MAX_HEADINGS]
    ]
    return PageSummaryResult(
        title=driver.title,
        url=driver.current_url,
        forms=count('form'),
        links=count(LINKS_CSS),
        buttons=count(SUMMARY_BUTTONS_CSS),
        inputs=count(FORM_FIELDS_CSS),
        images=count('img'),
        headings=headings,
        main_content=_main_content(driver),
    )


def _main_content(driver: WebDriver) -> str:
    for css in (MAIN_CONTENT_CSS, 'body'):
        try:
            return driver.find_element(By.CSS_SELECTOR, css).text[:MAX_CONTENT_LENGTH]
        except NoSuchElementException:
            continue
    return 'Could not extract main content'


async def validate_selectors(session: BrowserSession, selectors: list[SelectorInput]) -> ValidateSelectorsResult:
    """Count matches for each selector. Per-selector failures are reported, never raised."""
    driver = session.require_driver('validate_selectors')
    results = []
    for selector in selectors:
        try:
            locator = Locator.of(selector.by, selector.value)
            async with DriverBoundary('validate selector', locator=locator):
                elements = await asyncio.to_thread(driver.find_elements, *locator.selenium)
        except BrowserAutomationError as e:
            logger.debug('Selector %s=%r failed validation: %s', selector.by, selector.value, e)
            results.append(SelectorValidationResult(selector=selector, found=False, count=0, error=str(e)))
            continue
        results.append(SelectorValidationResult(selector=selector, found=bool(elements), count=len(elements)))
    return ValidateSelectorsResult(results=results)
