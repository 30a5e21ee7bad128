"""
Validation of block documents stored as JSON.

The compiler itself never raises on odd content, but anything persisted or
accepted over the API has to match the block grammar:

    Block  = {type: int, type_name?: str, value: str,
              attributes?: {str: str}, markup: [Markup]}
    Markup = {type: int, type_name?: str, start: int, end: int,
              attributes?: {str: str}}
"""

from django.core.exceptions import ValidationError

BLOCK_KEYS = {"type", "type_name", "value", "attributes", "markup"}
MARKUP_KEYS = {"type", "type_name", "start", "end", "attributes"}


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_attributes(attributes, where):
    if attributes is None:
        return
    if not isinstance(attributes, dict):
        raise ValidationError(f"{where}: attributes must be an object", code="invalid_attributes")
    for name, value in attributes.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ValidationError(
                f"{where}: attribute '{name}' must map a string to a string",
                code="invalid_attributes",
            )


def _validate_markup(markup, value_length, where):
    if not isinstance(markup, dict):
        raise ValidationError(f"{where}: markup must be an object", code="invalid_markup")

    unknown = set(markup) - MARKUP_KEYS
    if unknown:
        raise ValidationError(f"{where}: unknown keys {sorted(unknown)}", code="invalid_markup")

    if not _is_int(markup.get("type")):
        raise ValidationError(f"{where}: type must be an integer", code="invalid_markup")
    if not isinstance(markup.get("type_name", ""), str):
        raise ValidationError(f"{where}: type_name must be a string", code="invalid_markup")

    start, end = markup.get("start"), markup.get("end")
    if not _is_int(start) or not _is_int(end):
        raise ValidationError(f"{where}: start and end must be integers", code="invalid_markup")
    if not 0 <= start <= end <= value_length:
        raise ValidationError(
            f"{where}: offsets {start}..{end} fall outside the block value (length {value_length})",
            code="invalid_offsets",
        )

    _validate_attributes(markup.get("attributes"), where)


def validate_blocks(value):
    """Raise ValidationError unless ``value`` is a list of block dicts."""
    if not isinstance(value, list):
        raise ValidationError("Blocks must be a list", code="invalid_blocks")

    for index, block in enumerate(value):
        where = f"Block {index}"
        if not isinstance(block, dict):
            raise ValidationError(f"{where}: must be an object", code="invalid_block")

        unknown = set(block) - BLOCK_KEYS
        if unknown:
            raise ValidationError(f"{where}: unknown keys {sorted(unknown)}", code="invalid_block")

        if not _is_int(block.get("type")):
            raise ValidationError(f"{where}: type must be an integer", code="invalid_block")
        if not isinstance(block.get("type_name", ""), str):
            raise ValidationError(f"{where}: type_name must be a string", code="invalid_block")

        text = block.get("value", "")
        if not isinstance(text, str):
            raise ValidationError(f"{where}: value must be a string", code="invalid_block")

        _validate_attributes(block.get("attributes"), where)

        markups = block.get("markup", [])
        if not isinstance(markups, list):
            raise ValidationError(f"{where}: markup must be a list", code="invalid_block")
        for markup_index, markup in enumerate(markups):
            _validate_markup(markup, len(text), f"{where}, markup {markup_index}")
