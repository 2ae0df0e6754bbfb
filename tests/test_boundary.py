"""Tests for DriverBoundary -- Selenium exception translation at call sites.

Covers both usage forms (sync and async context manager) and
each translation rule: which Selenium failure becomes which domain error,
and what context the resulting message carries.
"""

from __future__ import annotations

import pytest
from selenium.common.exceptions import (
    InvalidSelectorException,
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)

from selenium_mcp.browser.boundary import DriverBoundary
from selenium_mcp.browser.locators import Locator
from selenium_mcp.errors import (
    ElementNotReadyError,
    ErrorKind,
    InvalidArgumentError,
    OperationTimedOutError,
    SessionNotStartedError,
    UnderlyingFailureError,
)

LOCATOR = Locator.of('css', '#submit')


class TestContextManager:
    """Translation rules, most specific first."""

    def test_no_exception_passes_through(self) -> None:
        with DriverBoundary('read title'):
            result = 42
        assert result == 42

    def test_domain_error_unchanged(self) -> None:
        """Errors raised by nested boundaries or validation are not re-wrapped."""
        original = SessionNotStartedError('navigate')
        with pytest.raises(SessionNotStartedError) as exc_info, DriverBoundary('navigate'):
            raise original
        assert exc_info.value is original

    def test_invalid_selector_is_invalid_argument(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info, DriverBoundary('find element', locator=LOCATOR):
            raise InvalidSelectorException('invalid selector: An invalid or illegal selector was specified')
        # Selenium appends a documentation link to the message
        assert str(exc_info.value).startswith(
            'Invalid selector [css="#submit"]: invalid selector: An invalid or illegal selector was specified'
        )
        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT

    def test_element_timeout_is_element_not_ready(self) -> None:
        boundary = DriverBoundary('click element', locator=LOCATOR, timeout_ms=5000)
        with pytest.raises(ElementNotReadyError) as exc_info, boundary:
            raise TimeoutException()
        assert str(exc_info.value) == 'Element not found [css="#submit"] within 5000ms'
        assert exc_info.value.timeout_ms == 5000

    def test_element_timeout_reports_expected_state(self) -> None:
        boundary = DriverBoundary('wait', locator=LOCATOR, timeout_ms=250, expected_state='visible')
        with pytest.raises(ElementNotReadyError) as exc_info, boundary:
            raise TimeoutException()
        assert str(exc_info.value) == 'Element [css="#submit"] did not become visible within 250ms'

    def test_operation_timeout_with_locator(self) -> None:
        boundary = DriverBoundary('wait for element', locator=LOCATOR, timeout_ms=100, timeout_kind='operation')
        with pytest.raises(OperationTimedOutError) as exc_info, boundary:
            raise TimeoutException()
        assert str(exc_info.value) == 'wait for element [css="#submit"] timed out after 100ms'

    def test_timeout_without_locator_is_operation_timeout(self) -> None:
        with pytest.raises(OperationTimedOutError) as exc_info, DriverBoundary('navigate to https://example.com'):
            raise TimeoutException('page load timed out')
        assert str(exc_info.value) == 'navigate to https://example.com timed out: page load timed out'

    def test_no_such_element_with_locator(self) -> None:
        with pytest.raises(ElementNotReadyError), DriverBoundary('get text', locator=LOCATOR, timeout_ms=0):
            raise NoSuchElementException('no such element')

    def test_no_such_element_without_locator_is_underlying(self) -> None:
        with pytest.raises(UnderlyingFailureError), DriverBoundary('read page'):
            raise NoSuchElementException('no such element')

    @pytest.mark.parametrize(
        'exception',
        [
            WebDriverException('chrome not reachable'),
            StaleElementReferenceException('stale element reference'),
            OSError('connection refused'),
        ],
    )
    def test_other_failures_are_underlying(self, exception: Exception) -> None:
        with pytest.raises(UnderlyingFailureError) as exc_info, DriverBoundary('click element'):
            raise exception
        assert str(exc_info.value).startswith('Failed to click element: ')
        assert exc_info.value.__cause__ is exception

    def test_selenium_stacktrace_not_in_message(self) -> None:
        exc = WebDriverException('session deleted', stacktrace=['#0 0x55d chrome', '#1 0x55e chrome'])
        with pytest.raises(UnderlyingFailureError) as exc_info, DriverBoundary('get title'):
            raise exc
        assert str(exc_info.value) == 'Failed to get title: session deleted'

    @pytest.mark.parametrize('exception', [KeyboardInterrupt, SystemExit, StopIteration])
    def test_system_and_control_flow_pass_through(self, exception: type[BaseException]) -> None:
        with pytest.raises(exception), DriverBoundary('anything'):
            raise exception

    def test_preserves_traceback(self) -> None:
        """Original raise location is preserved as deepest traceback frame."""

        def selenium_call() -> None:
            raise WebDriverException('deep')

        with pytest.raises(UnderlyingFailureError) as exc_info, DriverBoundary('call'):
            selenium_call()

        tb = exc_info.value.__traceback__
        assert tb is not None
        while tb.tb_next:
            tb = tb.tb_next
        assert tb.tb_frame.f_code.co_name == 'selenium_call'


class TestAsyncContextManager:
    """Verify async context manager behaves identically to sync."""

    async def test_translates_exception(self) -> None:
        with pytest.raises(ElementNotReadyError):
            async with DriverBoundary('locate', locator=LOCATOR, timeout_ms=10):
                raise TimeoutException()

    async def test_no_exception_passes_through(self) -> None:
        async with DriverBoundary('locate'):
            value = 'ok'
        assert value == 'ok'
