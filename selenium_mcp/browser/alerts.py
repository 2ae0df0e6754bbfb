"""JavaScript alert, confirm and prompt dialogs."""

from __future__ import annotations

import asyncio

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.schemas.results import AlertTextResult, SuccessResult

__all__ = [
    'accept_alert',
    'dismiss_alert',
    'get_alert_text',
    'send_alert_text',
]


async def accept_alert(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('accept_alert')
    async with DriverBoundary('accept alert'):
        await asyncio.to_thread(lambda: driver.switch_to.alert.accept())
    return SuccessResult(success=True, message='Alert accepted successfully')


async def dismiss_alert(session: BrowserSession) -> SuccessResult:
    driver = session.require_driver('dismiss_alert')
    async with DriverBoundary('dismiss alert'):
        await asyncio.to_thread(lambda: driver.switch_to.alert.dismiss())
    return SuccessResult(success=True, message='Alert dismissed successfully')


async def get_alert_text(session: BrowserSession) -> AlertTextResult:
    driver = session.require_driver('get_alert_text')
    async with DriverBoundary('get alert text'):
        text = await asyncio.to_thread(lambda: driver.switch_to.alert.text)
    return AlertTextResult(text=text or '')


async def send_alert_text(session: BrowserSession, text: str) -> SuccessResult:
    """Type into a prompt dialog; the prompt still needs accept_alert afterwards."""
    driver = session.require_driver('send_alert_text')
    async with DriverBoundary('send text to alert'):
        await asyncio.to_thread(lambda: driver.switch_to.alert.send_keys(text))
    return SuccessResult(success=True, message='Text sent to alert successfully')
