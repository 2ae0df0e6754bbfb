"""Shared fixtures: a browser session backed by the in-memory FakeDriver.

``session`` starts with no driver (the state before start_browser);
``live_session`` already holds the fake driver. Both own a real temporary
screenshot directory, removed at teardown.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.resources import ResourceCache
from tests.fakes import FakeDriver


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def session(driver: FakeDriver) -> Iterator[BrowserSession]:
    browser_session = BrowserSession.create(driver_factory=lambda browser, options: driver)
    yield browser_session
    browser_session.temp_dir.cleanup()


@pytest.fixture
def live_session(session: BrowserSession, driver: FakeDriver) -> BrowserSession:
    session.driver = driver  # type: ignore[assignment]
    session.browser = 'chrome'
    return session


@pytest.fixture
def resources() -> ResourceCache:
    return ResourceCache()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside ``tmp_path``; client paths resolve against it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path.resolve()
