"""Utilities shared by the HTML parser and renderer."""

from __future__ import annotations

import re
from typing import Dict, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from django.utils.html import escape

# Line breaks, tabs and non-breaking spaces are dropped outright
_WS_CHARS_RE = re.compile(r"(\r\n|\n|\r|\t|\u00a0)")
_MULTI_WS_RE = re.compile(r"\s+")


def sanitize_whitespace(text: Optional[str]) -> str:
    """Remove line breaks, tabs and nbsp, then collapse whitespace runs."""
    if not text:
        return ""
    return _MULTI_WS_RE.sub(" ", _WS_CHARS_RE.sub("", str(text)))


def underscore(text: Optional[str]) -> str:
    """Replace spaces with underscores."""
    return str(text).replace(" ", "_") if text else ""


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment with single-valued attributes.

    ``class`` and friends stay plain strings so they can round trip through
    the JSON model unchanged.
    """
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def is_text_node(node) -> bool:
    """True for plain text nodes; comments, doctypes and CDATA are excluded."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def text_of_node(node) -> str:
    """Return the whitespace-sanitized plain text of a node."""
    if is_text_node(node):
        return sanitize_whitespace(str(node))
    if isinstance(node, Tag):
        return sanitize_whitespace("".join(str(child) for child in node.descendants if is_text_node(child)))
    return ""


def attributes_for_node(node: Tag) -> Optional[Dict[str, str]]:
    """Copy a node's own attributes, or ``None`` when it has none."""
    if not node.attrs:
        return None
    return {name: "" if value is None else str(value) for name, value in node.attrs.items()}


def create_opening_tag(tag: str, attributes: Optional[Dict[str, str]] = None, self_closing: bool = False) -> str:
    """Build an opening tag, e.g. ``<a href="http://link.com/" rel="author">``."""
    parts = [f"<{tag}"]
    for name, value in (attributes or {}).items():
        parts.append(f' {name}="{escape(value)}"')
    if self_closing:
        parts.append("/")
    parts.append(">")
    return "".join(parts)


def create_close_tag(tag: str) -> str:
    return f"</{tag}>"
