"""Open-element bookkeeping for the document builder.

Every open element gets a context linked to its parent's. Container elements
get a typed variant that carries the record their children write into and the
dispatch table that routes that text; everything else is a passthrough.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from .dispatch import CHANNEL_FIELDS, ITEM_FIELDS, OWNER_FIELDS, DispatchTable
from .episode import EpisodeBuilder

logger = logging.getLogger(__name__)

CHANNEL = "channel"
ITEM = "item"
ITUNES_OWNER = "itunes:owner"


@dataclass
class NodeContext:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    parent: Optional["NodeContext"] = field(default=None, repr=False)


@dataclass
class PassthroughContext(NodeContext):
    """An element with no target of its own; its text is ignored unless special-cased."""


@dataclass
class ChannelContext(NodeContext):
    """The ``channel`` element; writes into the podcast record."""

    fields: ClassVar[DispatchTable] = CHANNEL_FIELDS
    target: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class OwnerContext(NodeContext):
    """``itunes:owner`` directly under the channel; writes into the owner record."""

    fields: ClassVar[DispatchTable] = OWNER_FIELDS
    target: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ItemContext(NodeContext):
    """``item`` directly under the channel; owns the in-progress episode."""

    fields: ClassVar[DispatchTable] = ITEM_FIELDS
    episode: EpisodeBuilder = field(default_factory=EpisodeBuilder, repr=False)

    @property
    def target(self) -> Dict[str, Any]:
        return self.episode.fields


CONTAINER_TYPES = (ChannelContext, OwnerContext, ItemContext)

ContextT = TypeVar("ContextT", bound=NodeContext)


class ContextStack:
    """Stack of open-element contexts for one parse.

    Args:
        result: The podcast record under construction. The channel context
            writes into it directly and an owner context attaches its record
            to it as ``owner``.
    """

    def __init__(self, result: Dict[str, Any]) -> None:
        self._result = result
        self._top: Optional[NodeContext] = None
        self._depth = 0

    @property
    def top(self) -> Optional[NodeContext]:
        return self._top

    @property
    def depth(self) -> int:
        return self._depth

    def push(self, name: str, attributes: Dict[str, str]) -> NodeContext:
        """Open an element and return its (possibly container) context."""
        context = self._make_context(name, attributes, self._top)
        self._top = context
        self._depth += 1
        return context

    def pop(self) -> NodeContext:
        """Close the innermost element and return its context."""
        if self._top is None:
            raise IndexError("pop from empty context stack")
        context = self._top
        self._top = context.parent
        self._depth -= 1
        return context

    def enclosing(self, kind: Type[ContextT]) -> Optional[ContextT]:
        """Return the innermost open context of the given variant, if any."""
        node = self._top
        while node is not None:
            if isinstance(node, kind):
                return node
            node = node.parent
        return None

    def _make_context(
        self, name: str, attributes: Dict[str, str], parent: Optional[NodeContext]
    ) -> NodeContext:
        # The document root is never a container
        if parent is None:
            return PassthroughContext(name, attributes)
        if name == CHANNEL:
            return ChannelContext(name, attributes, parent, target=self._result)
        if name == ITUNES_OWNER and parent.name == CHANNEL:
            owner: Dict[str, Any] = {}
            self._result["owner"] = owner
            return OwnerContext(name, attributes, parent, target=owner)
        if name == ITEM and parent.name == CHANNEL:
            logger.debug("Starting episode at depth %d", self._depth)
            return ItemContext(name, attributes, parent)
        return PassthroughContext(name, attributes, parent)
