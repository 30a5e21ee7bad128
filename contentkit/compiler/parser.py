# contentkit/compiler/parser.py
"""
HTML -> document model.

The parser assumes sane input (such as HTML produced by the editor) and is not
an HTML sanitizer. Top-level nodes are expected to be elements of registered
block types; stray inline elements and loose text are folded into the
preceding text block so no content is lost.

Inline markup is flattened into offset-addressed spans by a single pre-order
walk over each block element. The input tree is never modified.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import Tag

from .document import Block, Markup, text_block
from .types import TypeSet, default_block_types, default_markup_types
from .utils import (
    attributes_for_node,
    is_text_node,
    parse_fragment,
    sanitize_whitespace,
    text_of_node,
)

logger = logging.getLogger(__name__)


def _without_doubled_space(value: str, text: str) -> str:
    if not value or value.endswith(" "):
        return text.lstrip(" ")
    return text


class _TextBuffer:
    """Plain text accumulated while walking a block's subtree."""

    def __init__(self):
        self.parts: List[str] = []
        self.length = 0
        self.ends_with_space = False

    def append(self, text: str) -> None:
        # Leading whitespace of the block and whitespace that would double up
        # across a tag boundary are dropped, matching text_of_node().
        if self.length == 0 or self.ends_with_space:
            text = text.lstrip(" ")
        if not text:
            return
        self.parts.append(text)
        self.length += len(text)
        self.ends_with_space = text.endswith(" ")


class HTMLParser:
    def __init__(
        self,
        block_types: Optional[TypeSet] = None,
        markup_types: Optional[TypeSet] = None,
        include_type_names: bool = False,
    ):
        self.block_types = block_types if block_types is not None else default_block_types()
        self.markup_types = markup_types if markup_types is not None else default_markup_types()
        self.include_type_names = include_type_names

    def parse(self, html) -> List[Block]:
        """
        Parse an HTML string (or the contents of a BeautifulSoup tag) into blocks.
        """
        if isinstance(html, Tag):
            html = html.decode_contents()
        elif html is None:
            html = ""
        elif not isinstance(html, str):
            raise TypeError(f"Expected an HTML string or a Tag, got {type(html).__name__}")

        root = parse_fragment(sanitize_whitespace(html))
        blocks: List[Block] = []
        # Blocks that received loose root content still need their value trimmed
        touched: List[Block] = []

        for node in list(root.children):
            if isinstance(node, Tag):
                block = self.parse_block(node)
                if block is not None:
                    blocks.append(block)
                else:
                    touched.append(self._handle_non_block_element(node, blocks))
            elif is_text_node(node):
                text = str(node)
                if text.strip():
                    block = self._last_block_or_create(blocks)
                    block.value += _without_doubled_space(block.value, text)
                    touched.append(block)

        for block in {id(block): block for block in touched}.values():
            block.value = block.value.rstrip(" ")
            block.markup = self._clamp(block.markup, len(block.value))

        return blocks

    def parse_block(self, node: Tag) -> Optional[Block]:
        """Parse a single block-type element into a Block, or None."""
        type_ = self.block_types.find_by_node(node)
        if type_ is None:
            return None

        value = text_of_node(node).strip()
        markups = self.parse_block_markup(node)
        return Block(
            type=type_.id,
            value=value,
            markup=self._clamp(markups, len(value)),
            attributes=attributes_for_node(node),
            type_name=type_.name if self.include_type_names else None,
        )

    def _clamp(self, markups: List[Markup], length: int) -> List[Markup]:
        # Trailing whitespace trimmed off the value may leave a span hanging past it
        kept = []
        for markup in markups:
            markup.start = min(markup.start, length)
            markup.end = min(markup.end, length)
            type_ = self.markup_types.find_by_id(markup.type)
            if markup.end == markup.start and not (type_ and type_.self_closing):
                logger.debug(f"Dropping span trimmed to zero length at {markup.start}")
                continue
            kept.append(markup)
        return kept

    def parse_block_markup(self, node: Tag) -> List[Markup]:
        """Flatten the inline markup of a block element into offset spans."""
        markups: List[Markup] = []
        self._walk(node, _TextBuffer(), markups)
        return markups

    def parse_element_markup(self, node: Tag, start_index: int) -> Optional[Markup]:
        """Parse the markup span of a single element starting at ``start_index``."""
        return self._element_markup(node, start_index, start_index + len(text_of_node(node)))

    def _walk(self, node: Tag, buffer: _TextBuffer, markups: List[Markup]) -> None:
        for child in node.children:
            if isinstance(child, Tag):
                start = buffer.length
                index = len(markups)
                # Reserve the slot so the span stays ahead of its descendants
                markups.append(None)
                self._walk(child, buffer, markups)
                markup = self._element_markup(child, start, buffer.length)
                if markup is not None:
                    markups[index] = markup
                else:
                    del markups[index]
            elif is_text_node(child):
                buffer.append(sanitize_whitespace(str(child)))

    def _element_markup(self, node: Tag, start: int, end: int) -> Optional[Markup]:
        type_ = self.markup_types.find_by_node(node)
        if type_ is None:
            logger.debug(f"Dropping markup for unregistered tag <{node.name}>")
            return None

        self_closing = type_.self_closing
        if not self_closing and not node.contents:
            logger.debug(f"Dropping empty <{node.name}> element")
            return None

        if self_closing:
            end = start
        if end > start or (self_closing and end == start):
            return Markup(
                type=type_.id,
                start=start,
                end=end,
                attributes=attributes_for_node(node),
                type_name=type_.name if self.include_type_names else None,
            )

        logger.debug(f"Dropping zero-length <{node.name}> span at {start}")
        return None

    def _last_block_or_create(self, blocks: List[Block]) -> Block:
        if blocks:
            return blocks[-1]
        block = text_block(self.block_types, include_type_name=self.include_type_names)
        blocks.append(block)
        return block

    def _handle_non_block_element(self, node: Tag, blocks: List[Block]) -> Block:
        """Keep the text of a stray element at the root that is not a block."""
        block = self._last_block_or_create(blocks)
        text = _without_doubled_space(block.value, text_of_node(node))
        start = len(block.value)
        markup = self._element_markup(node, start, start + len(text))
        if markup is not None:
            block.markup.append(markup)
        else:
            logger.debug(f"Unrecognized root element <{node.name}> kept as plain text")
        block.value += text
        return block
