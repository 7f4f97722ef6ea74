"""Event-driven podcast document builder.

The builder consumes the four parse events of a feed document in order:

- ``open_tag(name, attributes)``
- ``text(text)`` (possibly several times for one text node)
- ``close_tag(name)``
- ``end_document()``

and assembles a single :class:`~podfeed.models.Podcast`. Names are expected to
be lowercased already when the dispatch tables should match camelCase tags.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import categories, models
from .context import CONTAINER_TYPES, CHANNEL, ContextStack, ItemContext, NodeContext
from .dispatch import apply_field

logger = logging.getLogger(__name__)

ITUNES_IMAGE = "itunes:image"
ENCLOSURE = "enclosure"
CATEGORY = "category"

# Episodes without a usable publish date sort after every dated one
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _published_sort_key(episode: models.Episode) -> datetime:
    return episode.published or _UNDATED


class FeedDocumentBuilder:
    """Builds one podcast from one feed's parse events.

    Instances are single use: after ``end_document()`` the finished podcast is
    available from ``result``.
    """

    def __init__(self) -> None:
        self._record: Dict[str, Any] = {"categories": [], "episodes": []}
        self._stack = ContextStack(self._record)
        self._podcast: Optional[models.Podcast] = None

    @property
    def stack(self) -> ContextStack:
        return self._stack

    @property
    def finished(self) -> bool:
        return self._podcast is not None

    @property
    def result(self) -> models.Podcast:
        if self._podcast is None:
            raise RuntimeError("Feed document has not been finished yet")
        return self._podcast

    def open_tag(self, name: str, attributes: Dict[str, str]) -> None:
        context = self._stack.push(name, attributes)
        parent = context.parent
        if parent is None or isinstance(context, CONTAINER_TYPES):
            return

        if name == ITUNES_IMAGE and parent.name == CHANNEL:
            href = attributes.get("href")
            if href is not None:
                self._record["image"] = href
        elif name == categories.ITUNES_CATEGORY:
            categories.record_category(
                self._record["categories"], categories.category_segments(context)
            )
        else:
            item = self._stack.enclosing(ItemContext)
            if item is None:
                return
            if name == ITUNES_IMAGE:
                item.episode.set_image(attributes)
            elif name == ENCLOSURE:
                item.episode.set_enclosure(attributes)

    def text(self, text: str) -> None:
        if not text.strip():
            return
        node = self._stack.top
        # Text directly under the document root has no field to go to
        if node is None or node.parent is None:
            return

        parent = node.parent
        if isinstance(parent, CONTAINER_TYPES):
            rule = parent.fields.get(node.name)
            if rule is not None:
                apply_field(parent.target, node.name, rule, text)

        if node.name == CATEGORY:
            item = self._stack.enclosing(ItemContext)
            if item is not None:
                item.episode.add_category(text)

    def close_tag(self, name: str) -> None:
        context: NodeContext = self._stack.pop()
        if isinstance(context, ItemContext):
            episodes: List[models.Episode] = self._record["episodes"]
            episodes.append(context.episode.build())

    def end_document(self) -> None:
        """Sort episodes, fill defaults, dedupe categories, and validate the podcast."""
        record = self._record
        episodes: List[models.Episode] = record["episodes"]
        episodes.sort(key=_published_sort_key, reverse=True)

        if record.get("updated") is None:
            record["updated"] = episodes[0].published if episodes else None

        record["categories"] = categories.dedupe_categories(record["categories"])
        record.setdefault("owner", {})

        self._podcast = models.Podcast.model_validate(record)
        logger.debug(
            "Finished feed %r: %d episodes, %d categories",
            self._podcast.title,
            len(episodes),
            len(self._podcast.categories),
        )
