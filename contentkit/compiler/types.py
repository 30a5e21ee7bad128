# contentkit/compiler/types.py
"""
Type descriptors and the registries that index them.

A ``Type`` describes one kind of block or markup (id, name, tag, whether it is
self-closing, and an optional renderer override). A ``TypeSet`` indexes types
by id, tag and name. Two independent sets are used by the compiler: one for
block types and one for markup types.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, List, Optional

from .utils import underscore

logger = logging.getLogger(__name__)

SELF_CLOSING_TAGS_RE = re.compile(r"^(br|img|hr|meta|link|embed)$", re.IGNORECASE)


class Type:
    """Meta info about a node type (id, name, tag, etc)."""

    def __init__(
        self,
        tag: Optional[str] = None,
        name: Optional[str] = None,
        id: Optional[int] = None,
        renderer: Optional[Callable] = None,
    ):
        self.name = underscore(name or tag).upper()
        self.id = id
        self.tag = tag.lower() if tag else None
        self.self_closing = bool(self.tag and SELF_CLOSING_TAGS_RE.match(self.tag))
        self.renderer = renderer

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "tag": self.tag,
            "self_closing": self.self_closing,
        }

    def __repr__(self):
        return f"Type(id={self.id!r}, name={self.name!r}, tag={self.tag!r})"


class TypeSet:
    """
    A registry of Types.

    Types are only ever added. Registering a second type for a tag that is
    already indexed replaces the tag entry, while the id index keeps the old
    type around.
    """

    def __init__(self, types: Optional[Iterable[Type]] = None):
        self._auto_id = 1
        self.id_lookup: Dict[int, Type] = {}
        self.tag_lookup: Dict[str, Type] = {}
        self.name_lookup: Dict[str, Type] = {}
        for type_ in types or []:
            self.add_type(type_)

    def add_type(self, type_: Type) -> Type:
        if type_.id is None:
            type_.id = self._auto_id
            self._auto_id += 1
        self.id_lookup[type_.id] = type_
        if type_.tag:
            previous = self.tag_lookup.get(type_.tag)
            if previous is not None and previous is not type_:
                logger.debug(f"Tag '{type_.tag}' re-registered: {previous.name} -> {type_.name}")
            self.tag_lookup[type_.tag] = type_
        if type_.name:
            self.name_lookup[type_.name] = type_
        return type_

    def find_by_node(self, node) -> Optional[Type]:
        return self.find_by_tag(getattr(node, "name", None))

    def find_by_tag(self, tag: Optional[str]) -> Optional[Type]:
        if not tag:
            return None
        return self.tag_lookup.get(tag.lower())

    def find_by_id(self, type_id) -> Optional[Type]:
        return self.id_lookup.get(type_id)

    def find_by_name(self, name: Optional[str]) -> Optional[Type]:
        if not name:
            return None
        return self.name_lookup.get(underscore(name).upper())

    def __iter__(self):
        return iter(self.id_lookup.values())

    def __len__(self):
        return len(self.id_lookup)

    def __contains__(self, type_: Type) -> bool:
        return self.id_lookup.get(type_.id) is type_


def default_block_types() -> TypeSet:
    """Build the default block registry (ids 1..9)."""
    return TypeSet(
        [
            Type(tag="p", name="text"),
            Type(tag="h2", name="heading"),
            Type(tag="h3", name="subheading"),
            Type(tag="img", name="image"),
            Type(tag="blockquote", name="quote"),
            Type(tag="ul", name="list"),
            Type(tag="ol", name="ordered list"),
            Type(name="embed"),
            Type(name="group"),
        ]
    )


def default_markup_types() -> TypeSet:
    """Build the default markup registry (ids 1..8)."""
    return TypeSet(
        [
            Type(tag="b", name="bold"),
            Type(tag="i", name="italic"),
            Type(tag="u", name="underline"),
            Type(tag="a", name="link"),
            Type(tag="br", name="break"),
            Type(tag="li", name="list item"),
            Type(tag="sub", name="subscript"),
            Type(tag="sup", name="superscript"),
        ]
    )


def types_from_config(entries: Iterable[dict]) -> List[Type]:
    """Build Types from ``[{"tag": ..., "name": ...}]`` settings entries."""
    types = []
    for entry in entries or []:
        tag = entry.get("tag")
        name = entry.get("name")
        if not tag and not name:
            logger.warning(f"Ignoring type entry without tag or name: {entry!r}")
            continue
        types.append(Type(tag=tag, name=name, id=entry.get("id")))
    return types
