"""Tests for the document model records and builders."""

from contentkit.compiler import (
    Block,
    Markup,
    default_block_types,
    embed_block,
    service_for,
    sort_block_markups,
    text_block,
)


def types_of(markups):
    return [(m.type, m.start, m.end) for m in markups]


def test_same_range_markups_sort_by_descending_type():
    markups = [Markup(type=1, start=0, end=2), Markup(type=4, start=0, end=2)]
    assert types_of(sort_block_markups(markups)) == [(4, 0, 2), (1, 0, 2)]


def test_sort_only_reorders_ties():
    markups = [Markup(type=2, start=1, end=3), Markup(type=1, start=0, end=5), Markup(type=4, start=1, end=3)]
    assert types_of(sort_block_markups(markups)) == [(4, 1, 3), (1, 0, 5), (2, 1, 3)]


def test_sort_is_not_a_sort_by_offset():
    markups = [Markup(type=1, start=3, end=4), Markup(type=1, start=0, end=1)]
    assert types_of(sort_block_markups(markups)) == [(1, 3, 4), (1, 0, 1)]


def test_block_sorts_markup_on_construction():
    block = Block(type=1, value="ab", markup=[Markup(type=2, start=0, end=2), Markup(type=3, start=0, end=2)])
    assert [m.type for m in block.markup] == [3, 2]


def test_from_dict_sorts_markup():
    block = Block.from_dict(
        {"type": 1, "value": "ab", "markup": [{"type": 1, "start": 0, "end": 2}, {"type": 2, "start": 0, "end": 2}]}
    )
    assert [m.type for m in block.markup] == [2, 1]


def test_to_dict_omits_empty_optional_fields():
    block = Block(type=1, value="x", attributes={}, markup=[Markup(type=1, start=0, end=1, attributes={})])
    assert block.to_dict() == {"type": 1, "value": "x", "markup": [{"type": 1, "start": 0, "end": 1}]}


def test_dict_round_trip_keeps_fields():
    data = {
        "type": 1,
        "type_name": "TEXT",
        "value": "go",
        "attributes": {"class": "lead"},
        "markup": [{"type": 4, "type_name": "LINK", "start": 0, "end": 2, "attributes": {"href": "/"}}],
    }
    assert Block.from_dict(data).to_dict() == data


def test_text_block():
    block = text_block(default_block_types(), value="hello")
    assert block.to_dict() == {"type": 1, "value": "hello", "markup": []}
    named = text_block(default_block_types(), include_type_name=True)
    assert named.type_name == "TEXT"


def test_service_for():
    assert service_for("YouTube") == 1
    assert service_for("twitter") == 2
    assert service_for("Instagram") == 3
    assert service_for("Vimeo") is None
    assert service_for(None) is None


def test_embed_block_from_video():
    block = embed_block(
        default_block_types(),
        {
            "type": "video",
            "provider_name": "YouTube",
            "url": "https://www.youtube.com/watch?v=abc",
            "title": "A video",
            "thumbnail_url": "https://i.ytimg.com/vi/abc/hqdefault.jpg",
            "html": "<iframe></iframe>",
            "width": 480,
        },
    )
    assert block.type == 8
    assert block.type_name is None
    assert block.attributes == {
        "embed_type": "video",
        "provider_name": "YouTube",
        "provider_id": "1",
        "url": "https://www.youtube.com/watch?v=abc",
        "title": "A video",
        "thumbnail": "https://i.ytimg.com/vi/abc/hqdefault.jpg",
    }


def test_embed_block_photo_uses_media_url():
    block = embed_block(
        default_block_types(),
        {
            "type": "photo",
            "provider_name": "Instagram",
            "url": "https://instagram.com/p/x",
            "media_url": "https://instagram.com/p/x/media",
            "thumbnail_url": "https://instagram.com/p/x/thumb",
        },
    )
    assert block.attributes["thumbnail"] == "https://instagram.com/p/x/media"
    assert block.attributes["provider_id"] == "3"


def test_embed_block_photo_falls_back_to_url():
    block = embed_block(default_block_types(), {"type": "photo", "url": "https://example.com/a.jpg"})
    assert block.attributes == {
        "embed_type": "photo",
        "url": "https://example.com/a.jpg",
        "thumbnail": "https://example.com/a.jpg",
    }


def test_embed_block_unsupported_provider():
    block = embed_block(default_block_types(), {"type": "video", "provider_name": "Vimeo"})
    assert block.attributes == {"embed_type": "video", "provider_name": "Vimeo"}


def test_embed_block_without_metadata():
    assert embed_block(default_block_types(), None) is None
    assert embed_block(default_block_types(), {}) is None


def test_embed_block_type_name_follows_flag():
    oembed = {"type": "video", "provider_name": "YouTube", "url": "https://youtu.be/abc"}
    assert "type_name" not in embed_block(default_block_types(), oembed).to_dict()
    named = embed_block(default_block_types(), oembed, include_type_name=True)
    assert named.to_dict()["type_name"] == "EMBED"
