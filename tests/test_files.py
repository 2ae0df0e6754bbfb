"""Tests for screenshot capture and file upload path handling."""

from __future__ import annotations

from pathlib import Path

import pytest
from selenium.webdriver.common.by import By

from selenium_mcp.browser import files
from selenium_mcp.browser.session import BrowserSession
from selenium_mcp.errors import InvalidArgumentError, SessionNotStartedError
from tests.fakes import PNG_BYTES, FakeDriver, FakeElement


class TestTakeScreenshot:
    async def test_default_path_in_session_directory(self, live_session: BrowserSession) -> None:
        result = await files.take_screenshot(live_session)
        path = Path(result.path)
        assert path.parent == live_session.screenshot_dir
        assert path.name.startswith('screenshot-')
        assert path.suffix == '.png'
        assert path.read_bytes() == PNG_BYTES
        assert result.message == 'Screenshot saved successfully'

    async def test_default_paths_unique(self, live_session: BrowserSession) -> None:
        first = await files.take_screenshot(live_session)
        second = await files.take_screenshot(live_session)
        assert first.path != second.path

    async def test_output_path_inside_cwd(self, live_session: BrowserSession, workdir: Path) -> None:
        result = await files.take_screenshot(live_session, 'captures/home.png')
        assert result.path == str(workdir / 'captures' / 'home.png')
        assert (workdir / 'captures' / 'home.png').read_bytes() == PNG_BYTES

    @pytest.mark.parametrize('output_path', ['../escape.png', '../../etc/passwd', '/tmp/escape.png'])
    async def test_output_path_outside_cwd_rejected(
        self, live_session: BrowserSession, workdir: Path, output_path: str
    ) -> None:
        with pytest.raises(InvalidArgumentError, match='Output path must be within the current working directory'):
            await files.take_screenshot(live_session, output_path)

    async def test_requires_session(self, session: BrowserSession) -> None:
        with pytest.raises(SessionNotStartedError, match='take_screenshot'):
            await files.take_screenshot(session)


class TestUploadFile:
    @pytest.fixture
    def file_input(self, driver: FakeDriver) -> FakeElement:
        element = FakeElement(driver, tag_name='input', attributes={'type': 'file'})
        driver.add(By.CSS_SELECTOR, 'input[type="file"]', element)
        return element

    async def test_sends_absolute_path(
        self, live_session: BrowserSession, workdir: Path, file_input: FakeElement
    ) -> None:
        (workdir / 'report.pdf').write_bytes(b'%PDF-1.4')
        result = await files.upload_file(live_session, 'css', 'input[type="file"]', 'report.pdf')
        assert file_input.typed == [str(workdir / 'report.pdf')]
        assert result.message == f'File uploaded successfully: {workdir / "report.pdf"}'

    async def test_missing_file(self, live_session: BrowserSession, workdir: Path, file_input: FakeElement) -> None:
        with pytest.raises(InvalidArgumentError, match='File not found'):
            await files.upload_file(live_session, 'css', 'input[type="file"]', 'missing.pdf')
        assert file_input.typed == []

    async def test_path_traversal_rejected(self, live_session: BrowserSession, workdir: Path) -> None:
        with pytest.raises(InvalidArgumentError, match='File path must be within the current working directory'):
            await files.upload_file(live_session, 'css', 'input[type="file"]', '../../etc/passwd')
