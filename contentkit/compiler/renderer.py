# contentkit/compiler/renderer.py
"""
Document model -> HTML.

Each block is rendered by its type's ``renderer`` override when one is set,
otherwise by ``HTMLRenderer.render_block``. Inline markup is re-applied by
splicing opening/closing tags into the block's plain text at the recorded
offsets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable, Dict, List, Optional, Union

from django.utils.html import escape

from .document import Block, Markup, coerce_block
from .types import Type, TypeSet, default_block_types, default_markup_types
from .utils import create_close_tag, create_opening_tag

logger = logging.getLogger(__name__)

BlockRenderer = Callable[[Block, Type], str]


class HTMLRenderer:
    def __init__(self, block_types: Optional[TypeSet] = None, markup_types: Optional[TypeSet] = None):
        self.block_types = block_types if block_types is not None else default_block_types()
        self.markup_types = markup_types if markup_types is not None else default_markup_types()

    def render(self, blocks: Iterable) -> str:
        """Render a list of blocks (Block records or their dicts) to HTML."""
        if blocks is None:
            return ""
        if isinstance(blocks, (str, bytes)) or not isinstance(blocks, Iterable):
            raise TypeError(f"Expected a list of blocks, got {type(blocks).__name__}")

        html = []
        for item in blocks:
            block = coerce_block(item)
            type_ = self.block_types.find_by_id(block.type)
            if type_ is None:
                logger.debug(f"Skipping block with unknown type id {block.type!r}")
                continue
            block_html = self.renderer_for(type_)(block, type_)
            if block_html:
                html.append(block_html)
        return "".join(html)

    def render_block(self, block: Block, type_: Optional[Type] = None) -> str:
        """Render a single block with its tag, attributes and inline markup."""
        type_ = type_ or self.block_types.find_by_id(block.type)
        if type_ is None or not type_.tag:
            return ""

        opening = create_opening_tag(type_.tag, block.attributes, type_.self_closing)
        if type_.self_closing:
            return opening
        return opening + self.render_markup(block.value, block.markup) + create_close_tag(type_.tag)

    def render_markup(self, text: str, markups: Optional[List[Markup]]) -> str:
        """
        Splice markup tags into plain text.

        Tags are collected per offset in markup order. An opening tag goes after
        whatever was already inserted at its offset and a closing tag goes in
        front of it, so spans sharing a boundary stay properly nested.
        """
        text = text or ""
        inserted: Dict[int, List[str]] = {}

        for markup in markups or []:
            if not isinstance(markup, Markup):
                markup = Markup.from_dict(markup)
            type_ = self.markup_types.find_by_id(markup.type)
            if type_ is None or not type_.tag:
                logger.debug(f"Skipping markup with unknown type id {markup.type!r}")
                continue

            start = max(0, min(markup.start, len(text)))
            end = max(start, min(markup.end, len(text)))

            inserted.setdefault(start, []).append(
                create_opening_tag(type_.tag, markup.attributes, type_.self_closing)
            )
            if not type_.self_closing:
                inserted.setdefault(end, []).insert(0, create_close_tag(type_.tag))

        parts = []
        cursor = 0
        for offset in sorted(inserted):
            parts.append(escape(text[cursor:offset]))
            parts.extend(inserted[offset])
            cursor = offset
        parts.append(escape(text[cursor:]))
        return "".join(parts)

    def renderer_for(self, type_: Union[Type, int]) -> BlockRenderer:
        """Return the rendering function for a block type (or type id)."""
        if not isinstance(type_, Type):
            type_ = self.block_types.find_by_id(type_)
        if type_ is not None and type_.renderer is not None:
            return type_.renderer
        return self.render_block

    def set_renderer_for(self, type_: Union[Type, int], renderer: Optional[BlockRenderer]) -> Optional[Type]:
        """Register custom rendering for a block type (or type id)."""
        if not isinstance(type_, Type):
            type_ = self.block_types.find_by_id(type_)
        if type_ is None:
            logger.warning("Cannot set a renderer for an unknown block type")
            return None
        type_.renderer = renderer
        return type_
