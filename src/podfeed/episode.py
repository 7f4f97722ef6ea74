"""In-progress episode accumulation and description coalescing."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from . import models
from .normalizers import parse_int
from .sanitizer import strip_html

logger = logging.getLogger(__name__)


class EpisodeBuilder:
    """Accumulates one episode while its ``item`` element is open.

    ``fields`` is the dispatch target for the item's children. Descriptions
    arrive as ``description.primary`` (``itunes:summary``) and
    ``description.alternate`` (plain ``description``) and are coalesced by
    ``build()``.
    """

    def __init__(self) -> None:
        self.fields: Dict[str, Any] = {}

    def set_image(self, attributes: Mapping[str, str]) -> None:
        href = attributes.get("href")
        if href is not None:
            self.fields["image"] = href

    def set_enclosure(self, attributes: Mapping[str, str]) -> None:
        """Record enclosure attributes; an absent or unparseable length stays None."""
        length = attributes.get("length")
        filesize = parse_int(length)
        if length and filesize is None:
            logger.debug("Ignoring unparseable enclosure length %r", length)
        self.fields["enclosure"] = {
            "filesize": filesize,
            "type": attributes.get("type"),
            "url": attributes.get("url"),
        }

    def add_category(self, text: str) -> None:
        self.fields.setdefault("categories", []).append(text)

    def build(self) -> models.Episode:
        """Coalesce descriptions and validate the finished episode."""
        fields = dict(self.fields)
        candidates = fields.pop("description", None) or {}
        description = candidates.get("primary") or candidates.get("alternate") or ""
        fields["description"] = description
        fields["raw_description"] = strip_html(description)
        return models.Episode.model_validate(fields)
