# contentkit/templatetags/contentkit_tags.py

import json
import logging

from django import template
from django.utils.safestring import mark_safe

from contentkit.compiler.config import get_default_compiler

logger = logging.getLogger(__name__)

register = template.Library()


def _load_blocks(value):
    if not value:
        return []
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("render_blocks received a string that is not JSON")
            return []
    return value


@register.filter(name="render_blocks")
def render_blocks_filter(value):
    """Render a block list (or its JSON string) to HTML."""
    return mark_safe(get_default_compiler().render(_load_blocks(value)))


@register.filter(name="parse_html")
def parse_html_filter(value):
    """Parse HTML into a list of block dicts."""
    return [block.to_dict() for block in get_default_compiler().parse(value or "")]


@register.filter(name="block_text")
def block_text_filter(value):
    """Plain text of a block list, one paragraph per block."""
    return "\n\n".join(
        block.get("value", "") for block in _load_blocks(value) if isinstance(block, dict) and block.get("value")
    )
