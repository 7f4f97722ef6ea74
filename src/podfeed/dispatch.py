"""Field dispatch tables for container elements.

Each container element (channel, owner, item) routes the text of its direct
children through a table keyed by lowercase child tag name. A rule either
copies the text to a field path or hands it to a transform that returns a
partial record to merge into the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional, Union

from . import normalizers

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class CopyField:
    """Copy text verbatim to ``path``, or to a field named like the tag when unset.

    Text arriving for a field that already holds a value is appended after a
    single space (feeds can split one text node into several fragments).
    """

    path: Optional[str] = None

    def target_path(self, tag: str) -> str:
        return self.path or tag


@dataclass(frozen=True)
class TransformField:
    """Merge ``transform(text)`` into the target; later merges overwrite."""

    transform: Callable[[str], Dict[str, Any]]


FieldRule = Union[CopyField, TransformField]
DispatchTable = Mapping[str, FieldRule]


CHANNEL_FIELDS: DispatchTable = {
    "title": CopyField(),
    "link": CopyField(),
    "language": TransformField(normalizers.language_field),
    "itunes:author": CopyField("author"),
    "itunes:subtitle": CopyField("description.short"),
    "description": CopyField("description.long"),
    "ttl": TransformField(normalizers.ttl_field),
    "pubdate": TransformField(normalizers.updated_field),
    "itunes:explicit": TransformField(normalizers.explicit_field),
    "itunes:type": CopyField("type"),
}

OWNER_FIELDS: DispatchTable = {
    "itunes:name": CopyField("name"),
    "itunes:email": CopyField("email"),
}

ITEM_FIELDS: DispatchTable = {
    "title": CopyField(),
    "guid": CopyField(),
    "itunes:summary": CopyField("description.primary"),
    "itunes:subtitle": CopyField("subtitle"),
    "description": CopyField("description.alternate"),
    "pubdate": TransformField(normalizers.published_field),
    "itunes:duration": TransformField(normalizers.duration_field),
    "itunes:season": CopyField("season"),
    "itunes:episode": CopyField("episode"),
    "itunes:episodetype": CopyField("episode_type"),
    "itunes:explicit": TransformField(normalizers.explicit_field),
}


def append_to_path(target: MutableMapping[str, Any], path: str, text: str) -> None:
    """Store text at a dot-delimited path, creating intermediate records.

    If the field already holds a value, the text is appended after a space.
    """
    *parents, leaf = path.split(PATH_SEPARATOR)
    record = target
    for key in parents:
        child = record.get(key)
        if not isinstance(child, dict):
            child = {}
            record[key] = child
        record = child
    previous = record.get(leaf)
    record[leaf] = f"{previous} {text}" if previous else text


def apply_field(target: MutableMapping[str, Any], tag: str, rule: FieldRule, text: str) -> None:
    """Write one text fragment of child ``tag`` into ``target`` according to ``rule``."""
    if isinstance(rule, TransformField):
        target.update(rule.transform(text))
    else:
        append_to_path(target, rule.target_path(tag), text)
