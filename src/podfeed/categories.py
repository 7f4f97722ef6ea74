"""Hierarchical category labels from nested ``itunes:category`` elements.

Feeds nest refinements inside their parent category::

    <itunes:category text="Technology">
        <itunes:category text="Gadgets"/>
    </itunes:category>

The outer element is recorded first as ``Technology``; when the nested one
opens, its full label ``Technology>Gadgets`` replaces that entry.
"""

from __future__ import annotations

from typing import List, Optional

from .config_constants import CATEGORY_DELIMITER
from .context import NodeContext

ITUNES_CATEGORY = "itunes:category"
LABEL_ATTRIBUTE = "text"


def category_segments(context: NodeContext) -> List[str]:
    """Return the label segments from the outermost enclosing category down to ``context``.

    Ancestors without a label attribute are skipped; an element without one
    of its own yields no segments at all.
    """
    if context.attributes.get(LABEL_ATTRIBUTE) is None:
        return []
    segments: List[str] = []
    node: Optional[NodeContext] = context
    while node is not None and node.name == ITUNES_CATEGORY:
        label = node.attributes.get(LABEL_ATTRIBUTE)
        if label is not None:
            segments.insert(0, label)
        node = node.parent
    return segments


def record_category(
    categories: List[str], segments: List[str], delimiter: str = CATEGORY_DELIMITER
) -> None:
    """Record a category label, replacing the last entry when this one refines it.

    The last entry is replaced only when it is exactly the new label's first
    segment; anything else is appended.
    """
    if not segments:
        return
    label = delimiter.join(segments)
    if categories and categories[-1] == segments[0]:
        categories[-1] = label
    else:
        categories.append(label)


def dedupe_categories(categories: List[str]) -> List[str]:
    """Drop exact duplicates, keeping first-occurrence order."""
    return list(dict.fromkeys(categories))
