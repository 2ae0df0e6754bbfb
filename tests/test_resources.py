"""Tests for the screenshot and HTML resource cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from selenium_mcp.errors import ErrorKind, ResourceNotFoundError
from selenium_mcp.resources import ResourceCache
from tests.fakes import PNG_BYTES


@pytest.fixture
def screenshot_file(tmp_path: Path) -> Path:
    path = tmp_path / 'shot.png'
    path.write_bytes(PNG_BYTES)
    return path


class TestHtml:
    def test_round_trip(self, resources: ResourceCache) -> None:
        resource_id = resources.register_html('https://example.com/', '<html><body>Hi</body></html>')
        contents = resources.read(f'html://{resource_id}')
        assert contents.content == '<html><body>Hi</body></html>'
        assert contents.mime_type == 'text/html'

    def test_unknown_id(self, resources: ResourceCache) -> None:
        with pytest.raises(ResourceNotFoundError, match='HTML not found: page-1') as exc_info:
            resources.read('html://page-1')
        assert exc_info.value.kind is ErrorKind.RESOURCE_NOT_FOUND


class TestScreenshots:
    def test_round_trip(self, resources: ResourceCache, screenshot_file: Path) -> None:
        resource_id = resources.register_screenshot(screenshot_file)
        contents = resources.read(f'screenshot://{resource_id}')
        assert contents.content == PNG_BYTES
        assert contents.mime_type == 'image/png'

    def test_payload_memoized_after_first_read(self, resources: ResourceCache, screenshot_file: Path) -> None:
        """Later reads return the cached bytes even if the file is gone."""
        resource_id = resources.register_screenshot(screenshot_file)
        first = resources.read(f'screenshot://{resource_id}')
        screenshot_file.unlink()
        second = resources.read(f'screenshot://{resource_id}')
        assert second.content == first.content == PNG_BYTES

    def test_missing_file_before_first_read(self, resources: ResourceCache, tmp_path: Path) -> None:
        resource_id = resources.register_screenshot(tmp_path / 'never-written.png')
        with pytest.raises(ResourceNotFoundError, match='could not be read'):
            resources.read(f'screenshot://{resource_id}')

    def test_unknown_id(self, resources: ResourceCache) -> None:
        with pytest.raises(ResourceNotFoundError, match='Screenshot not found: nope'):
            resources.read('screenshot://nope')


class TestUris:
    @pytest.mark.parametrize('uri', ['file:///etc/passwd', 'https://example.com', 'no-scheme'])
    def test_unknown_scheme(self, resources: ResourceCache, uri: str) -> None:
        with pytest.raises(ResourceNotFoundError, match='Unknown resource URI'):
            resources.read(uri)


class TestListing:
    def test_empty(self, resources: ResourceCache) -> None:
        assert resources.list() == []
        assert len(resources) == 0

    def test_screenshots_first_then_html(self, resources: ResourceCache, screenshot_file: Path) -> None:
        html_id = resources.register_html('https://example.com/', '<html></html>')
        first_shot = resources.register_screenshot(screenshot_file)
        second_shot = resources.register_screenshot(screenshot_file)

        listed = resources.list()

        assert [str(resource.uri) for resource in listed] == [
            f'screenshot://{first_shot}',
            f'screenshot://{second_shot}',
            f'html://{html_id}',
        ]
        assert [resource.mimeType for resource in listed] == ['image/png', 'image/png', 'text/html']
        assert listed[2].name == 'Page HTML: https://example.com/'
        assert listed[0].name == f'Screenshot {first_shot}'
        assert listed[0].description is not None
        assert listed[0].description.startswith('Screenshot taken at ')
        assert listed[0].description.endswith('Z')

    def test_ids_unique_within_same_millisecond(self, resources: ResourceCache, screenshot_file: Path) -> None:
        ids = {resources.register_screenshot(screenshot_file) for _ in range(5)}
        assert len(ids) == 5
        assert len(resources) == 5
