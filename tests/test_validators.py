"""Tests for block JSON validation."""

import pytest
from django.core.exceptions import ValidationError

from contentkit.validators import validate_blocks


def test_valid_blocks_pass():
    validate_blocks([])
    validate_blocks(
        [
            {"type": 1, "value": "abcd", "markup": [{"type": 1, "start": 1, "end": 3}]},
            {"type": 4, "value": "", "attributes": {"src": "a.png"}, "markup": []},
            {"type": 1, "type_name": "TEXT", "value": "ab", "markup": [{"type": 5, "start": 2, "end": 2}]},
        ]
    )


@pytest.mark.parametrize(
    "blocks",
    [
        {"type": 1},
        ["not a block"],
        [{"value": "missing type", "markup": []}],
        [{"type": True, "value": "", "markup": []}],
        [{"type": 1, "value": 5, "markup": []}],
        [{"type": 1, "value": "", "markup": {}}],
        [{"type": 1, "value": "", "markup": [], "extra": 1}],
        [{"type": 1, "value": "", "attributes": {"src": 1}, "markup": []}],
        [{"type": 1, "value": "", "attributes": ["src"], "markup": []}],
        [{"type": 1, "type_name": 1, "value": "", "markup": []}],
    ],
)
def test_invalid_blocks(blocks):
    with pytest.raises(ValidationError):
        validate_blocks(blocks)


@pytest.mark.parametrize(
    "markup",
    [
        "bold",
        {"start": 0, "end": 1},
        {"type": 1, "start": "0", "end": 1},
        {"type": 1, "start": 2, "end": 1},
        {"type": 1, "start": 0, "end": 9},
        {"type": 1, "start": -1, "end": 1},
        {"type": 1, "start": 0, "end": 1, "href": "/x"},
        {"type": 1, "type_name": ["BOLD"], "start": 0, "end": 1},
    ],
)
def test_invalid_markup(markup):
    with pytest.raises(ValidationError):
        validate_blocks([{"type": 1, "value": "abc", "markup": [markup]}])


def test_offset_error_code():
    with pytest.raises(ValidationError) as excinfo:
        validate_blocks([{"type": 1, "value": "abc", "markup": [{"type": 1, "start": 0, "end": 4}]}])
    assert excinfo.value.code == "invalid_offsets"
