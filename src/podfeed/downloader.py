"""Feed document retrieval over HTTP.

Each fetch opens its own session with a retrying adapter and closes it when
the body has been read, so nothing outlives a ``fetch_and_parse_feed`` call.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.utils import requote_uri
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

FEED_RETRY_TOTAL = 5
FEED_RETRY_BACKOFF_FACTOR = 0.5
FEED_RETRY_STATUS_CODES = (429, 500, 502, 503, 504)
FEED_RETRY_METHODS = frozenset({"GET"})
FEED_READ_CHUNK_SIZE = 64 * 1024


class _FeedRetry(Retry):
    """Retry policy that logs every retried feed request."""

    def increment(  # type: ignore[override]
        self, method=None, url=None, response=None, error=None, _pool=None, _stacktrace=None
    ):
        retry = super().increment(
            method, url, response=response, error=error, _pool=_pool, _stacktrace=_stacktrace
        )
        logger.warning(
            "Retrying feed request %s (%s retries left): %s", url or "", retry.total, error or response
        )
        return retry


def feed_retry_policy() -> Retry:
    """Retry connection faults and transient statuses; the final status is returned, not raised."""
    return _FeedRetry(
        total=FEED_RETRY_TOTAL,
        backoff_factor=FEED_RETRY_BACKOFF_FACTOR,
        status_forcelist=FEED_RETRY_STATUS_CODES,
        allowed_methods=FEED_RETRY_METHODS,
        raise_on_status=False,
    )


@contextmanager
def feed_session() -> Iterator[requests.Session]:
    """Yield a session whose http and https adapters retry with ``feed_retry_policy``."""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=feed_retry_policy())
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    try:
        yield session
    finally:
        session.close()


def http_get(url: str, user_agent: str, timeout: int) -> Optional[bytes]:
    """Download a feed document.

    Returns:
        The response body, or None when the request or the read fails (the
        failure is logged as a warning).
    """
    request_url = requote_uri(url)
    if request_url != url:
        logger.debug("Requesting %s as %s", url, request_url)

    with feed_session() as session:
        try:
            resp = session.get(
                request_url, headers={"User-Agent": user_agent}, timeout=timeout, stream=True
            )
        except requests.RequestException as exc:
            logger.warning("Failed to fetch feed %s: %s", url, exc)
            return None

        try:
            resp.raise_for_status()
            body = b"".join(
                chunk for chunk in resp.iter_content(chunk_size=FEED_READ_CHUNK_SIZE) if chunk
            )
        except (requests.RequestException, OSError) as exc:
            logger.warning("Failed to fetch feed %s: %s", url, exc)
            return None
        finally:
            resp.close()

    logger.debug("Read %d bytes from %s", len(body), url)
    return body
