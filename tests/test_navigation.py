"""Tests for session lifecycle and navigation operations."""

from __future__ import annotations

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException

from selenium_mcp.browser import navigation
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.errors import (
    InvalidArgumentError,
    OperationTimedOutError,
    SessionNotStartedError,
    UnderlyingFailureError,
)
from selenium_mcp.schemas.arguments import BrowserOptions, WindowSize
from tests.fakes import FakeDriver


class TestStartBrowser:
    async def test_starts_session(self, session: BrowserSession, driver: FakeDriver) -> None:
        result = await navigation.start_browser(session, 'chrome')
        assert result.to_wire() == {'success': True, 'message': 'chrome browser started successfully'}
        assert session.driver is driver
        assert session.browser == 'chrome'

    async def test_applies_window_size(self, session: BrowserSession, driver: FakeDriver) -> None:
        options = BrowserOptions(window_size=WindowSize(width=800, height=600))
        await navigation.start_browser(session, 'firefox', options)
        assert driver.window_rect == {'x': 0, 'y': 0, 'width': 800, 'height': 600}

    async def test_replaces_active_session(self, session: BrowserSession, driver: FakeDriver) -> None:
        await navigation.start_browser(session, 'chrome')
        await navigation.start_browser(session, 'edge')
        assert driver.quit_count == 1
        assert session.browser == 'edge'

    async def test_safari_warnings(self, session: BrowserSession) -> None:
        options = BrowserOptions(headless=True, arguments=['--incognito'])
        result = await navigation.start_browser(session, 'safari', options)
        assert result.to_wire()['warnings'] == [
            'Safari does not support custom arguments. Ignoring provided arguments.',
            'Safari does not support headless mode. Running in normal mode.',
        ]

    async def test_unsupported_browser(self, session: BrowserSession) -> None:
        with pytest.raises(InvalidArgumentError, match='Unsupported browser: opera'):
            await navigation.start_browser(session, 'opera')  # type: ignore[arg-type]

    async def test_launch_failure_is_underlying(self) -> None:
        def broken_factory(browser: str, options: BrowserOptions) -> FakeDriver:
            raise WebDriverException('chromedriver not found')

        session = BrowserSession.create(driver_factory=broken_factory)  # type: ignore[arg-type]
        try:
            with pytest.raises(UnderlyingFailureError, match='Failed to start chrome browser: chromedriver not found'):
                await navigation.start_browser(session, 'chrome')
            assert not session.is_active
        finally:
            session.temp_dir.cleanup()


class TestCloseBrowser:
    async def test_close(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        result = await navigation.close_browser(live_session)
        assert result.message == 'Browser closed successfully'
        assert driver.quit_count == 1
        assert not live_session.is_active

    async def test_close_without_session(self, session: BrowserSession) -> None:
        result = await navigation.close_browser(session)
        assert result.to_wire() == {'success': True, 'message': 'No browser session to close'}


class TestNavigate:
    async def test_navigate(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        result = await navigation.navigate(live_session, 'https://example.com/')
        assert result.to_wire() == {'success': True, 'message': 'Navigation successful', 'url': 'https://example.com/'}
        assert driver.history == ['https://example.com/']

    async def test_requires_session(self, session: BrowserSession) -> None:
        with pytest.raises(SessionNotStartedError, match='before using navigate'):
            await navigation.navigate(session, 'https://example.com/')

    async def test_empty_url_checked_before_session(self, session: BrowserSession) -> None:
        with pytest.raises(InvalidArgumentError, match='URL cannot be empty'):
            await navigation.navigate(session, '  ')

    @pytest.mark.parametrize('url', ['not a url', 'example.com'])
    async def test_malformed_url_checked_before_session(self, session: BrowserSession, url: str) -> None:
        with pytest.raises(InvalidArgumentError, match=f'Invalid URL format: {url}'):
            await navigation.navigate(session, url)

    @pytest.mark.parametrize('url', ['not a url', 'example.com'])
    async def test_malformed_url_never_reaches_driver(
        self, live_session: BrowserSession, driver: FakeDriver, url: str
    ) -> None:
        with pytest.raises(InvalidArgumentError, match='Invalid URL format'):
            await navigation.navigate(live_session, url)
        assert driver.history == []

    @pytest.mark.parametrize('url', ['about:blank', 'file:///tmp/index.html', 'http://localhost:8080/app'])
    async def test_accepts_any_scheme(self, live_session: BrowserSession, driver: FakeDriver, url: str) -> None:
        await navigation.navigate(live_session, url)
        assert driver.history == [url]

    async def test_page_load_timeout(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        driver.fail_with = TimeoutException('timeout: Timed out receiving message from renderer')
        with pytest.raises(OperationTimedOutError, match='navigate to https://slow.example timed out'):
            await navigation.navigate(live_session, 'https://slow.example')


class TestPageQueries:
    async def test_url_and_title(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        driver.current_url = 'https://example.com/app#/settings'
        driver.title = 'Settings'
        assert (await navigation.get_current_url(live_session)).url == 'https://example.com/app#/settings'
        assert (await navigation.get_title(live_session)).title == 'Settings'

    async def test_history(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        await navigation.go_back(live_session)
        await navigation.go_forward(live_session)
        await navigation.refresh(live_session)
        assert driver.calls == ['back', 'forward', 'refresh']

    async def test_page_source(self, live_session: BrowserSession, driver: FakeDriver) -> None:
        driver.page_source = '<html><body><h1>Hi</h1></body></html>'
        result = await navigation.get_page_source(live_session)
        assert result.source == '<html><body><h1>Hi</h1></body></html>'

    @pytest.mark.parametrize(
        'operation',
        [
            navigation.get_current_url,
            navigation.get_title,
            navigation.refresh,
            navigation.go_back,
            navigation.go_forward,
            navigation.get_page_source,
        ],
    )
    async def test_require_session(self, session: BrowserSession, operation: object) -> None:
        with pytest.raises(SessionNotStartedError):
            await operation(session)  # type: ignore[operator]
