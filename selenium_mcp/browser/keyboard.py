"""Keyboard simulation through ActionChains."""

from __future__ import annotations

import asyncio

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.browser.validation import require_text
from selenium_mcp.errors import InvalidArgumentError
from selenium_mcp.schemas.results import SuccessResult

__all__ = [
    'NAMED_KEYS',
    'press_key',
    'press_key_combo',
    'resolve_key',
]

# Case-insensitive names; anything else is sent as literal text
NAMED_KEYS: dict[str, str] = {
    'enter': Keys.ENTER,
    'return': Keys.ENTER,
    'tab': Keys.TAB,
    'escape': Keys.ESCAPE,
    'esc': Keys.ESCAPE,
    'space': Keys.SPACE,
    'backspace': Keys.BACK_SPACE,
    'delete': Keys.DELETE,
    'arrowup': Keys.ARROW_UP,
    'up': Keys.ARROW_UP,
    'arrowdown': Keys.ARROW_DOWN,
    'down': Keys.ARROW_DOWN,
    'arrowleft': Keys.ARROW_LEFT,
    'left': Keys.ARROW_LEFT,
    'arrowright': Keys.ARROW_RIGHT,
    'right': Keys.ARROW_RIGHT,
    'home': Keys.HOME,
    'end': Keys.END,
    'pageup': Keys.PAGE_UP,
    'pagedown': Keys.PAGE_DOWN,
    'shift': Keys.SHIFT,
    'control': Keys.CONTROL,
    'ctrl': Keys.CONTROL,
    'alt': Keys.ALT,
    'meta': Keys.META,
    'cmd': Keys.META,
    **{f'f{n}': getattr(Keys, f'F{n}') for n in range(1, 13)},
}


def resolve_key(key: str) -> str:
    return NAMED_KEYS.get(key.lower(), key)


async def press_key(session: BrowserSession, key: str) -> SuccessResult:
    """Press and release one key on the focused element."""
    require_text(key, 'Key')
    driver = session.require_driver('press_key')
    resolved = resolve_key(key)

    def _press() -> None:
        ActionChains(driver).key_down(resolved).key_up(resolved).perform()

    async with DriverBoundary(f'press key {key!r}'):
        await asyncio.to_thread(_press)
    return SuccessResult(success=True, message=f"Key '{key}' pressed successfully")


async def press_key_combo(session: BrowserSession, keys: list[str]) -> SuccessResult:
    """Hold every key in order, then release them in reverse order."""
    if not keys:
        raise InvalidArgumentError('Keys array cannot be empty')
    if any(not key or not key.strip() for key in keys):
        raise InvalidArgumentError('Keys array cannot contain empty or whitespace-only strings')
    driver = session.require_driver('press_key_combo')
    resolved = [resolve_key(key) for key in keys]

    def _press() -> None:
        actions = ActionChains(driver)
        for key in resolved:
            actions.key_down(key)
        for key in reversed(resolved):
            actions.key_up(key)
        actions.perform()

    combo = '+'.join(keys)
    async with DriverBoundary(f'press key combination {combo!r}'):
        await asyncio.to_thread(_press)
    return SuccessResult(success=True, message=f"Key combination '{combo}' pressed successfully")
