"""In-memory cache of captured screenshots and page HTML, exposed as MCP resources.

    screenshot://<id>  image/png  bytes read from disk on first read, then memoized
    html://<id>        text/html  captured in memory at registration

Entries live for the life of the process; nothing is evicted.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import mcp.types
from mcp.server.lowlevel.helper_types import ReadResourceContents

from selenium_mcp.errors import ResourceNotFoundError

__all__ = [
    'HTML_SCHEME',
    'SCREENSHOT_SCHEME',
    'HtmlResource',
    'ResourceCache',
    'ScreenshotResource',
]

logger = logging.getLogger(__name__)

SCREENSHOT_SCHEME = 'screenshot'
HTML_SCHEME = 'html'


@dataclass
class ScreenshotResource:
    id: str
    file_path: Path
    captured_at_ms: int
    cached_payload: bytes | None = None  # Filled on first read


@dataclass(frozen=True)
class HtmlResource:
    id: str
    source_url: str
    html: str
    captured_at_ms: int


def _now_ms() -> int:
    return int(time.time() * 1000)


def _iso(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class ResourceCache:
    """Screenshots and HTML captures keyed by id, in registration order."""

    def __init__(self) -> None:
        self._screenshots: dict[str, ScreenshotResource] = {}
        self._html: dict[str, HtmlResource] = {}

    def _fresh_id(self, prefix: str, timestamp_ms: int) -> str:
        # Two captures in the same millisecond must not overwrite each other
        candidate = f'{prefix}-{timestamp_ms}'
        suffix = 1
        while candidate in self._screenshots or candidate in self._html:
            suffix += 1
            candidate = f'{prefix}-{timestamp_ms}-{suffix}'
        return candidate

    def register_screenshot(self, file_path: str | Path) -> str:
        captured_at_ms = _now_ms()
        resource_id = self._fresh_id('screenshot', captured_at_ms)
        self._screenshots[resource_id] = ScreenshotResource(
            id=resource_id,
            file_path=Path(file_path),
            captured_at_ms=captured_at_ms,
        )
        logger.debug('Registered %s://%s -> %s', SCREENSHOT_SCHEME, resource_id, file_path)
        return resource_id

    def register_html(self, source_url: str, html: str) -> str:
        captured_at_ms = _now_ms()
        resource_id = self._fresh_id('page', captured_at_ms)
        self._html[resource_id] = HtmlResource(
            id=resource_id,
            source_url=source_url,
            html=html,
            captured_at_ms=captured_at_ms,
        )
        logger.debug('Registered %s://%s (%d chars from %s)', HTML_SCHEME, resource_id, len(html), source_url)
        return resource_id

    def list(self) -> list[mcp.types.Resource]:
        """Screenshots first, then HTML captures, each in registration order."""
        listed = [
            mcp.types.Resource(
                uri=f'{SCREENSHOT_SCHEME}://{shot.id}',
                name=f'Screenshot {shot.id}',
                description=f'Screenshot taken at {_iso(shot.captured_at_ms)}',
                mimeType='image/png',
            )
            for shot in self._screenshots.values()
        ]
        listed.extend(
            mcp.types.Resource(
                uri=f'{HTML_SCHEME}://{page.id}',
                name=f'Page HTML: {page.source_url}',
                description=f'HTML captured at {_iso(page.captured_at_ms)}',
                mimeType='text/html',
            )
            for page in self._html.values()
        )
        return listed

    def read(self, uri: str) -> ReadResourceContents:
        """Return the resource payload.

        Raises:
            ResourceNotFoundError: Unknown scheme, unknown id, or a screenshot
                whose file can no longer be read.
        """
        scheme, separator, resource_id = uri.partition('://')
        if not separator:
            raise ResourceNotFoundError(f'Unknown resource URI: {uri}', uri)
        if scheme == SCREENSHOT_SCHEME:
            return self._read_screenshot(resource_id, uri)
        if scheme == HTML_SCHEME:
            page = self._html.get(resource_id)
            if page is None:
                raise ResourceNotFoundError(f'HTML not found: {resource_id}', uri)
            return ReadResourceContents(content=page.html, mime_type='text/html')
        raise ResourceNotFoundError(f'Unknown resource URI: {uri}', uri)

    def _read_screenshot(self, resource_id: str, uri: str) -> ReadResourceContents:
        shot = self._screenshots.get(resource_id)
        if shot is None:
            raise ResourceNotFoundError(f'Screenshot not found: {resource_id}', uri)
        if shot.cached_payload is None:
            try:
                shot.cached_payload = shot.file_path.read_bytes()
            except OSError as e:
                raise ResourceNotFoundError(
                    f'Screenshot {resource_id} could not be read from {shot.file_path}: {e.strerror or e}', uri
                ) from e
        return ReadResourceContents(content=shot.cached_payload, mime_type='image/png')

    def __len__(self) -> int:
        return len(self._screenshots) + len(self._html)
