"""Shared fixtures and test utilities for podfeed tests.

This module contains:
- Test constants
- Helpers for building feed XML
- A mock HTTP response for downloader tests

All test files can import from this module using pytest's conftest.py mechanism.
"""

from pathlib import Path
from typing import Iterable, Optional

import pytest

# Test constants
TEST_BASE_URL = "https://example.com"
TEST_FEED_URL = "https://example.com/feed.xml"
TEST_FEED_TITLE = "Test Feed"
TEST_EPISODE_TITLE = "Episode Title"
TEST_MEDIA_URL = f"{TEST_BASE_URL}/episode.mp3"
TEST_MEDIA_TYPE_MP3 = "audio/mpeg"
TEST_IMAGE_URL = f"{TEST_BASE_URL}/cover.jpg"
TEST_EPISODE_IMAGE_URL = f"{TEST_BASE_URL}/episode.jpg"
TEST_OWNER_NAME = "Jane Smith"
TEST_OWNER_EMAIL = "jane@example.com"
ITUNES_NAMESPACE = "http://www.itunes.com/dtds/podcast-1.0.dtd"

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "feeds"


def build_item_xml(
    title: str = TEST_EPISODE_TITLE,
    pub_date: Optional[str] = None,
    extra: str = "",
) -> str:
    """Build one <item> element.

    Args:
        title: Episode title
        pub_date: Optional RFC 822 publish date
        extra: Additional child elements, inserted verbatim

    Returns:
        Item XML string
    """
    pub_date_xml = f"<pubDate>{pub_date}</pubDate>" if pub_date else ""
    return f"""
    <item>
      <title>{title}</title>
      {pub_date_xml}
      {extra}
    </item>"""


def build_feed_xml(channel_body: str = "", items: Iterable[str] = ()) -> str:
    """Build a complete RSS document with the iTunes namespace declared.

    Args:
        channel_body: Channel-level child elements, inserted verbatim
        items: Item XML strings (see build_item_xml)

    Returns:
        RSS XML string
    """
    items_xml = "".join(items)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="{ITUNES_NAMESPACE}">
  <channel>
    {channel_body}
    {items_xml}
  </channel>
</rss>""".strip()


class MockHTTPResponse:
    """Minimal stand-in for requests.Response used by downloader tests."""

    def __init__(self, content: bytes = b"", status_code: int = 200, chunks=None):
        self.content = content
        self.status_code = status_code
        self.headers = {"Content-Length": str(len(content))}
        self._chunks = chunks
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"HTTP {self.status_code}")

    def iter_content(self, chunk_size: int = 1):
        if self._chunks is not None:
            yield from self._chunks
            return
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fixture_feed_path():
    """Return a function resolving a fixture feed name to its path."""

    def _resolve(name: str) -> Path:
        return FIXTURES_DIR / f"{name}.xml"

    return _resolve
