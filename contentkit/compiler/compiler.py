# contentkit/compiler/compiler.py

import logging
import threading
from typing import List, Optional

from .document import Block
from .parser import HTMLParser
from .renderer import BlockRenderer, HTMLRenderer
from .types import Type, TypeSet, default_block_types, default_markup_types

logger = logging.getLogger(__name__)


class Compiler:
    """
    HTML <-> block document compiler.

    Owns one parser, one renderer and the block/markup type registries they
    share. Registering types is serialized against parsing and rendering.

    Args:
        block_types: Block registry (defaults to a fresh default set)
        markup_types: Markup registry (defaults to a fresh default set)
        include_type_names: Add ``type_name`` to parsed records, for debugging
    """

    def __init__(
        self,
        block_types: Optional[TypeSet] = None,
        markup_types: Optional[TypeSet] = None,
        include_type_names: bool = False,
    ):
        self.block_types = block_types if block_types is not None else default_block_types()
        self.markup_types = markup_types if markup_types is not None else default_markup_types()
        self.include_type_names = include_type_names
        self.parser = HTMLParser(
            block_types=self.block_types,
            markup_types=self.markup_types,
            include_type_names=include_type_names,
        )
        self.renderer = HTMLRenderer(block_types=self.block_types, markup_types=self.markup_types)
        self._lock = threading.RLock()

    def parse(self, html) -> List[Block]:
        with self._lock:
            return self.parser.parse(html)

    def render(self, blocks) -> str:
        with self._lock:
            return self.renderer.render(blocks)

    def register_block_type(self, type_) -> Optional[Type]:
        return self._register(self.block_types, type_)

    def register_markup_type(self, type_) -> Optional[Type]:
        return self._register(self.markup_types, type_)

    def set_renderer_for(self, type_, renderer: Optional[BlockRenderer]) -> Optional[Type]:
        with self._lock:
            return self.renderer.set_renderer_for(type_, renderer)

    def _register(self, type_set: TypeSet, type_) -> Optional[Type]:
        if not isinstance(type_, Type):
            logger.debug(f"Ignoring registration of non-Type value {type_!r}")
            return None
        with self._lock:
            return type_set.add_type(type_)
