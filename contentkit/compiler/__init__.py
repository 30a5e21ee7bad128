"""
HTML <-> block document compiler.
"""

from .compiler import Compiler
from .document import (
    SUPPORTED_SERVICES,
    Block,
    Markup,
    embed_block,
    service_for,
    sort_block_markups,
    text_block,
)
from .parser import HTMLParser
from .renderer import HTMLRenderer
from .types import Type, TypeSet, default_block_types, default_markup_types

__all__ = [
    "Compiler",
    "HTMLParser",
    "HTMLRenderer",
    # Types
    "Type",
    "TypeSet",
    "default_block_types",
    "default_markup_types",
    # Document model
    "Block",
    "Markup",
    "SUPPORTED_SERVICES",
    "embed_block",
    "service_for",
    "sort_block_markups",
    "text_block",
]
