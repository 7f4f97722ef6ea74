"""Output models for a parsed podcast feed.

Models are built from the records the document builder accumulates, so
``model_fields_set`` tracks which fields the feed actually supplied.
``to_dict()`` relies on that to keep "absent" distinct from "explicitly null"
(``updated`` is always set, possibly to ``None``; an unknown enclosure size is
kept as ``None``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FeedModel(BaseModel):
    """Base for output models: snake_case attributes, camelCase serialization."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self, mode: Literal["python", "json"] = "python") -> Dict[str, Any]:
        """Serialize the fields that were set while parsing.

        Args:
            mode: ``"json"`` renders datetimes as ISO 8601 strings.
        """
        return self.model_dump(mode=mode, by_alias=True, exclude_unset=True)


class Enclosure(FeedModel):
    """Media file attached to an episode."""

    filesize: Optional[int] = None
    type: Optional[str] = None
    url: Optional[str] = None


class Owner(FeedModel):
    """Feed owner contact (``itunes:owner``); either field may be missing."""

    name: Optional[str] = None
    email: Optional[str] = None


class PodcastDescription(FeedModel):
    """Short (``itunes:subtitle``) and long (``description``) podcast descriptions."""

    short: Optional[str] = None
    long: Optional[str] = None


class Episode(FeedModel):
    """A single podcast episode.

    Attributes:
        guid: Episode identifier from ``guid``.
        title: Episode title.
        description: ``itunes:summary`` if present, else ``description``, else "".
        raw_description: ``description`` with markup tags stripped.
        subtitle: ``itunes:subtitle``.
        published: Publication timestamp (timezone-aware).
        image: Episode artwork URL (``itunes:image`` href).
        duration: Length in seconds.
        explicit: ``itunes:explicit`` flag.
        enclosure: Media file details.
        season: ``itunes:season``, verbatim.
        episode: ``itunes:episode``, verbatim.
        episode_type: ``itunes:episodeType``, verbatim.
        categories: Plain ``category`` values, in document order.
    """

    guid: Optional[str] = None
    title: Optional[str] = None
    description: str = ""
    raw_description: str = ""
    subtitle: Optional[str] = None
    published: Optional[datetime] = None
    image: Optional[str] = None
    duration: Optional[int] = None
    explicit: Optional[bool] = None
    enclosure: Optional[Enclosure] = None
    season: Optional[str] = None
    episode: Optional[str] = None
    episode_type: Optional[str] = None
    categories: Optional[List[str]] = None


class Podcast(FeedModel):
    """A parsed podcast feed.

    Attributes:
        title: Channel title.
        link: Channel website.
        language: Normalized lowercase locale tag (e.g. ``en-us``).
        description: Short and long descriptions.
        image: Channel artwork URL.
        categories: Hierarchical labels such as ``Technology>Gadgets``, unique.
        author: ``itunes:author``.
        owner: ``itunes:owner``; empty when the feed has none.
        ttl: Time to live in minutes.
        updated: Channel ``pubDate``, else the newest episode's, else None.
        explicit: ``itunes:explicit`` flag.
        type: ``itunes:type`` (``episodic`` or ``serial``).
        episodes: Episodes, newest first.
    """

    title: Optional[str] = None
    link: Optional[str] = None
    language: Optional[str] = None
    description: Optional[PodcastDescription] = None
    image: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    owner: Owner = Field(default_factory=Owner)
    ttl: Optional[int] = None
    updated: Optional[datetime] = None
    explicit: Optional[bool] = None
    type: Optional[str] = None
    episodes: List[Episode] = Field(default_factory=list)
