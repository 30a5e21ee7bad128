"""
Document model records.

A document is an ordered list of ``Block`` records. Each block carries the
plain text of one top-level element plus a list of ``Markup`` spans addressed
by character offsets into that text. The ``text`` and ``embed`` variants are
ordinary blocks discriminated by their ``type`` id and built with
``text_block`` and ``embed_block``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TypedDict

from .types import TypeSet

logger = logging.getLogger(__name__)


class MarkupDict(TypedDict, total=False):
    type: int
    type_name: str
    start: int
    end: int
    attributes: Dict[str, str]


class BlockDict(TypedDict, total=False):
    type: int
    type_name: str
    value: str
    attributes: Dict[str, str]
    markup: List[MarkupDict]


# Providers an embed can be mapped to
SUPPORTED_SERVICES: Dict[str, int] = {
    "YOUTUBE": 1,
    "TWITTER": 2,
    "INSTAGRAM": 3,
}


@dataclass
class Markup:
    type: Optional[int]
    start: int = 0
    end: int = 0
    attributes: Optional[Dict[str, str]] = None
    type_name: Optional[str] = None

    def to_dict(self) -> MarkupDict:
        data: MarkupDict = {"type": self.type}
        if self.type_name:
            data["type_name"] = self.type_name
        data["start"] = self.start
        data["end"] = self.end
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Markup":
        return cls(
            type=data.get("type"),
            start=data.get("start") or 0,
            end=data.get("end") or 0,
            attributes=dict(data["attributes"]) if data.get("attributes") else None,
            type_name=data.get("type_name") or None,
        )


def sort_block_markups(markups: List[Markup]) -> List[Markup]:
    """
    Ensure markups covering the exact same range are always in the same order.

    Markups sharing ``(start, end)`` are ordered by descending type id, so a
    bold link is consistently rendered as ``<a><b>text</b></a>``. Every other
    pair keeps its original order; this is not a sort by offset.
    """
    slots: Dict[tuple, List[int]] = {}
    for index, markup in enumerate(markups):
        slots.setdefault((markup.start, markup.end), []).append(index)

    result = list(markups)
    for indexes in slots.values():
        if len(indexes) < 2:
            continue
        group = sorted((markups[i] for i in indexes), key=lambda m: m.type or 0, reverse=True)
        for index, markup in zip(indexes, group):
            result[index] = markup
    return result


@dataclass
class Block:
    type: Optional[int]
    value: str = ""
    markup: List[Markup] = field(default_factory=list)
    attributes: Optional[Dict[str, str]] = None
    type_name: Optional[str] = None

    def __post_init__(self):
        self.value = self.value or ""
        self.markup = sort_block_markups(list(self.markup or []))

    def to_dict(self) -> BlockDict:
        data: BlockDict = {"type": self.type}
        if self.type_name:
            data["type_name"] = self.type_name
        data["value"] = self.value
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        data["markup"] = [markup.to_dict() for markup in self.markup]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Block":
        return cls(
            type=data.get("type"),
            value=data.get("value") or "",
            markup=[Markup.from_dict(item) for item in data.get("markup") or []],
            attributes=dict(data["attributes"]) if data.get("attributes") else None,
            type_name=data.get("type_name") or None,
        )


def coerce_block(block) -> Block:
    """Accept either a Block or its JSON dict form."""
    if isinstance(block, Block):
        return block
    if isinstance(block, Mapping):
        return Block.from_dict(block)
    raise TypeError(f"Expected a Block or a mapping, got {type(block).__name__}")


def text_block(
    block_types: TypeSet,
    value: str = "",
    markup: Optional[List[Markup]] = None,
    attributes: Optional[Dict[str, str]] = None,
    include_type_name: bool = False,
) -> Block:
    """A paragraph of text, typed as the registered ``TEXT`` block type."""
    text_type = block_types.find_by_name("TEXT")
    return Block(
        type=text_type.id if text_type else None,
        value=value,
        markup=markup or [],
        attributes=attributes,
        type_name=text_type.name if include_type_name and text_type else None,
    )


def service_for(provider: Optional[str]) -> Optional[int]:
    """Return the id of a supported service from a provider name."""
    if not provider:
        return None
    return SUPPORTED_SERVICES.get(str(provider).upper())


def embed_block(
    block_types: TypeSet,
    oembed: Optional[Mapping[str, Any]] = None,
    include_type_name: bool = False,
) -> Optional[Block]:
    """
    Massage an oEmbed response into an embed block.

    Only the fields the renderer cares about are kept: ``embed_type``,
    ``provider_name``, ``provider_id`` (for supported services), ``url``,
    ``title`` and ``thumbnail``. Anything else in the response is dropped.
    Returns ``None`` when there is no response to work from.
    """
    if not oembed:
        return None

    embed_type_meta = block_types.find_by_name("EMBED")
    attributes: Dict[str, str] = {}

    embed_type = oembed.get("type")
    provider_name = oembed.get("provider_name")
    provider_id = service_for(provider_name)
    embed_url = oembed.get("url")
    embed_title = oembed.get("title")
    embed_thumbnail = oembed.get("thumbnail_url")

    if embed_type:
        attributes["embed_type"] = embed_type
    if provider_name:
        attributes["provider_name"] = provider_name
    if provider_id:
        attributes["provider_id"] = str(provider_id)
    if embed_url:
        attributes["url"] = embed_url
    if embed_title:
        attributes["title"] = embed_title

    if embed_type == "photo":
        thumbnail = oembed.get("media_url") or embed_url
        if thumbnail:
            attributes["thumbnail"] = thumbnail
    elif embed_thumbnail:
        attributes["thumbnail"] = embed_thumbnail

    if provider_name and not provider_id:
        logger.debug(f"Embed provider '{provider_name}' is not a supported service")

    return Block(
        type=embed_type_meta.id if embed_type_meta else None,
        attributes=attributes,
        type_name=embed_type_meta.name if include_type_name and embed_type_meta else None,
    )
