"""Value transforms applied to feed text before it lands in the result.

Every transform is total: text it cannot interpret yields ``None`` (or an
empty partial record) rather than an exception, so a sloppy feed never aborts
the parse.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

from . import config_constants

logger = logging.getLogger(__name__)

# Seconds represented by each colon-separated duration segment, right to left
DURATION_MULTIPLIERS = (1, 60, 60 * 60, 24 * 60 * 60)

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_QUALIFIED_LANGUAGE_RE = re.compile(r"\w\w-\w\w", re.IGNORECASE)


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a string, ignoring any trailing garbage.

    Returns:
        The integer, or None if the string does not start with digits
    """
    if not text:
        return None
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_duration(text: str) -> Optional[int]:
    """Parse an iTunes duration string to total seconds.

    Supports ``SS``, ``MM:SS``, ``HH:MM:SS`` and ``D:HH:MM:SS``.

    Example:
        >>> parse_duration("1:03:13")
        3793
        >>> parse_duration("424")
        424
    """
    parts = text.strip().split(":")
    if len(parts) > len(DURATION_MULTIPLIERS):
        logger.debug("Unexpected duration format: %r", text)
        return None

    total = 0
    for multiplier, part in zip(DURATION_MULTIPLIERS, reversed(parts)):
        value = parse_int(part)
        if value is None:
            logger.debug("Failed to parse duration %r", text)
            return None
        total += value * multiplier
    return total


def normalize_language(text: str) -> str:
    """Expand a bare language code to a lowercase locale tag.

    Codes already carrying a region (``en-GB``) are only lowercased.
    """
    lang = text
    if not _QUALIFIED_LANGUAGE_RE.search(text):
        if lang == "en":
            lang = config_constants.DEFAULT_ENGLISH_LOCALE
        else:
            lang = f"{lang}-{lang.upper()}"
    return lang.lower()


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse an RFC 822 date (RSS ``pubDate``), falling back to ISO 8601.

    Naive results are assumed to be UTC so all timestamps compare.
    """
    value = text.strip()
    parsed: Optional[datetime]
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Failed to parse timestamp %r", text)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def language_field(text: str) -> Dict[str, Any]:
    return {"language": normalize_language(text)}


def explicit_field(text: str) -> Dict[str, Any]:
    return {"explicit": (text or "").strip().lower() in config_constants.EXPLICIT_VALUES}


def ttl_field(text: str) -> Dict[str, Any]:
    ttl = parse_int(text)
    return {} if ttl is None else {"ttl": ttl}


def updated_field(text: str) -> Dict[str, Any]:
    updated = parse_timestamp(text)
    return {} if updated is None else {"updated": updated}


def published_field(text: str) -> Dict[str, Any]:
    published = parse_timestamp(text)
    return {} if published is None else {"published": published}


def duration_field(text: str) -> Dict[str, Any]:
    duration = parse_duration(text)
    return {} if duration is None else {"duration": duration}
