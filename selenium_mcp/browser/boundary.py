"""Exception translation at Selenium call boundaries.

Selenium reports every failure through its own exception hierarchy
(``TimeoutException``, ``NoSuchElementException``, ``WebDriverException``...).
DriverBoundary translates whatever escapes a Selenium call into one of the
server's domain errors, adding the context the call site knows (operation,
locator, timeout) and preserving the original via exception chaining.

    boundary = DriverBoundary('click element', locator=locator, timeout_ms=5000)

    async with boundary:
        await asyncio.to_thread(element.click)

Translation rules, most specific first:

    Domain error (already translated)  -> unchanged
    InvalidSelectorException           -> InvalidArgumentError
    TimeoutException                   -> ElementNotReadyError when a locator is known and
                                          the wait is an element wait, else OperationTimedOutError
    NoSuchElementException + locator   -> ElementNotReadyError
    any other Exception                -> UnderlyingFailureError

See also:
    - PEP 3134: Exception chaining (``raise X from Y``).
"""

from __future__ import annotations

__all__ = ['DriverBoundary', 'TimeoutKind']

import logging
from types import TracebackType
from typing import Literal, Self

from selenium.common.exceptions import InvalidSelectorException, NoSuchElementException, TimeoutException

from selenium_mcp.browser.locators import Locator
from selenium_mcp.errors import (
    BrowserAutomationError,
    ElementNotReadyError,
    InvalidArgumentError,
    OperationTimedOutError,
    UnderlyingFailureError,
)

logger = logging.getLogger(__name__)

# Control-flow exceptions that are Exception subclasses but must never be
# translated. Translating any of these breaks iterator/generator protocols.
_PASSTHROUGH = (StopIteration, StopAsyncIteration, GeneratorExit)

# 'element': a timeout means the element never reached the required state.
# 'operation': a timeout means the whole wait operation ran out of time.
type TimeoutKind = Literal['element', 'operation']


class DriverBoundary:
    """Translate exceptions from Selenium calls into domain errors.

    Used as ``async with boundary:`` around worker-thread Selenium calls.
    The sync ``with`` form shares the same translation.

    Args:
        operation: Human-readable action, used as ``Failed to <operation>``.
        locator: Element being located, if any; included in messages.
        timeout_ms: Wait budget of the call, reported on timeouts.
        timeout_kind: How a ``TimeoutException`` is classified.
        expected_state: Element state being waited for (``visible``, ``clickable``).
    """

    def __init__(
        self,
        operation: str,
        *,
        locator: Locator | None = None,
        timeout_ms: int | None = None,
        timeout_kind: TimeoutKind = 'element',
        expected_state: str | None = None,
    ) -> None:
        self.operation = operation
        self.locator = locator
        self.timeout_ms = timeout_ms
        self.timeout_kind = timeout_kind
        self.expected_state = expected_state

    # -- Sync context manager --

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is None or isinstance(exc_val, BrowserAutomationError):
            return  # No exception, or already translated (nested boundaries)
        if not isinstance(exc_val, Exception) or isinstance(exc_val, _PASSTHROUGH):
            return  # System or control-flow exception, pass through
        translated = self.translate(exc_val)
        logger.debug('%s: %s translated to %s', self.operation, type(exc_val).__name__, translated.kind)
        raise translated.with_traceback(exc_tb) from exc_val

    # -- Async context manager --

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)

    # -- Translation --

    def translate(self, exc: Exception) -> BrowserAutomationError:
        locator = self.locator
        if isinstance(exc, InvalidSelectorException):
            described = f' [{locator}]' if locator else ''
            return InvalidArgumentError(f'Invalid selector{described}: {_message(exc)}')
        if isinstance(exc, TimeoutException):
            if locator is not None and self.timeout_kind == 'element':
                return ElementNotReadyError(locator.by, locator.value, self.timeout_ms, self.expected_state, exc)
            subject = f'{self.operation} [{locator}]' if locator else self.operation
            return OperationTimedOutError(subject, self.timeout_ms, exc)
        if isinstance(exc, NoSuchElementException) and locator is not None:
            return ElementNotReadyError(locator.by, locator.value, self.timeout_ms, self.expected_state, exc)
        return UnderlyingFailureError(self.operation, exc)


def _message(exc: Exception) -> str:
    text = getattr(exc, 'msg', None) or type(exc).__name__
    return text.strip().splitlines()[0]
