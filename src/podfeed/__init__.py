"""podfeed - Normalize podcast RSS feeds into a uniform object model.

Feeds in any of the common RSS/iTunes dialects are parsed into a Podcast with
normalized languages, durations in seconds, hierarchical category labels,
coalesced episode descriptions, and episodes sorted newest first.

Programmatic API Example:
    >>> import podfeed
    >>>
    >>> podcast = podfeed.parse_feed(xml_bytes)
    >>> print(podcast.title, len(podcast.episodes))
    >>> podcast.to_dict(mode="json")["episodes"][0]["rawDescription"]

CLI Usage:
    $ podfeed https://example.com/feed.xml
    $ python -m podfeed feed.xml --output podcast.json
"""

from __future__ import annotations

__version__ = "1.0.0"

from .config import Config, load_config_file, ParserOptions
from .exceptions import FeedError, FeedFetchError, MalformedDocumentError
from .models import Enclosure, Episode, Owner, Podcast, PodcastDescription
from .rss_parser import fetch_and_parse_feed, parse_feed, parse_feed_file

__all__ = [
    "Config",
    "Enclosure",
    "Episode",
    "FeedError",
    "FeedFetchError",
    "MalformedDocumentError",
    "Owner",
    "ParserOptions",
    "Podcast",
    "PodcastDescription",
    "fetch_and_parse_feed",
    "load_config_file",
    "parse_feed",
    "parse_feed_file",
    "__version__",
]
