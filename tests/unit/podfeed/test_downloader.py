#!/usr/bin/env python3
"""Tests for feed retrieval over HTTP."""

import sys
import unittest
from pathlib import Path
from unittest import mock

import requests

from podfeed import downloader

# Add tests directory to path for conftest import
tests_dir = Path(__file__).resolve().parents[2]
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from conftest import MockHTTPResponse, TEST_BASE_URL, TEST_FEED_URL  # noqa: E402


class TestFeedSession(unittest.TestCase):
    """Tests for the retrying session."""

    def test_retry_policy(self):
        retry = downloader.feed_retry_policy()
        self.assertEqual(retry.total, downloader.FEED_RETRY_TOTAL)
        self.assertEqual(retry.backoff_factor, downloader.FEED_RETRY_BACKOFF_FACTOR)
        self.assertEqual(retry.allowed_methods, downloader.FEED_RETRY_METHODS)
        self.assertEqual(set(retry.status_forcelist), set(downloader.FEED_RETRY_STATUS_CODES))
        self.assertFalse(retry.raise_on_status)

    def test_session_mounts_retrying_adapters(self):
        with downloader.feed_session() as session:
            for prefix in ("https://", "http://"):
                adapter = session.get_adapter(prefix)
                self.assertIsInstance(adapter, requests.adapters.HTTPAdapter)
                self.assertEqual(adapter.max_retries.total, downloader.FEED_RETRY_TOTAL)

    def test_session_closed_on_exit(self):
        with mock.patch("podfeed.downloader.requests.Session") as session_cls:
            with downloader.feed_session() as session:
                self.assertIs(session, session_cls.return_value)
            session.close.assert_called_once_with()

    def test_session_closed_on_error(self):
        with mock.patch("podfeed.downloader.requests.Session") as session_cls:
            with self.assertRaises(RuntimeError):
                with downloader.feed_session():
                    raise RuntimeError("boom")
            session_cls.return_value.close.assert_called_once_with()


class TestHttpGet(unittest.TestCase):
    """Tests for http_get function."""

    def setUp(self):
        patcher = mock.patch("podfeed.downloader.requests.Session")
        self.session = patcher.start().return_value
        self.addCleanup(patcher.stop)

    def test_returns_body(self):
        response = MockHTTPResponse(content=b"<rss/>")
        self.session.get.return_value = response
        body = downloader.http_get(TEST_FEED_URL, "podfeed-test", 7)
        self.assertEqual(body, b"<rss/>")
        self.assertTrue(response.closed)
        self.session.close.assert_called_once_with()
        self.session.get.assert_called_once_with(
            TEST_FEED_URL, headers={"User-Agent": "podfeed-test"}, timeout=7, stream=True
        )

    def test_non_ascii_url_is_quoted(self):
        self.session.get.return_value = MockHTTPResponse(content=b"<rss/>")
        downloader.http_get(f"{TEST_BASE_URL}/тест.xml", "ua", 5)
        requested = self.session.get.call_args.args[0]
        self.assertIn("%D1%82%D0%B5%D1%81%D1%82", requested)

    def test_already_encoded_url_unchanged(self):
        url = f"{TEST_BASE_URL}/a%20b.xml"
        self.session.get.return_value = MockHTTPResponse(content=b"<rss/>")
        downloader.http_get(url, "ua", 5)
        self.assertEqual(self.session.get.call_args.args[0], url)

    def test_skips_empty_chunks(self):
        self.session.get.return_value = MockHTTPResponse(chunks=[b"<rss>", b"", b"</rss>"])
        self.assertEqual(downloader.http_get(TEST_FEED_URL, "ua", 5), b"<rss></rss>")

    def test_http_error_returns_none(self):
        response = MockHTTPResponse(status_code=404)
        self.session.get.return_value = response
        self.assertIsNone(downloader.http_get(TEST_FEED_URL, "ua", 5))
        self.assertTrue(response.closed)

    def test_connection_error_returns_none(self):
        self.session.get.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("podfeed.downloader", level="WARNING") as logs:
            self.assertIsNone(downloader.http_get(TEST_FEED_URL, "ua", 5))
        self.assertIn("Failed to fetch feed", logs.output[0])
        self.session.close.assert_called_once_with()

    def test_read_error_returns_none(self):
        response = MockHTTPResponse(content=b"<rss/>")
        response.iter_content = mock.Mock(side_effect=requests.ConnectionError("reset"))
        self.session.get.return_value = response
        self.assertIsNone(downloader.http_get(TEST_FEED_URL, "ua", 5))
        self.assertTrue(response.closed)


if __name__ == "__main__":
    unittest.main()
