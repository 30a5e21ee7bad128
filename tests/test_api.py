"""Tests for the JSON API views."""

import json

import pytest

from contentkit.models import Document


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def test_parse_endpoint(client):
    response = post_json(client, "/api/v1/parse/", {"html": "<p>a<b>bc</b>d</p>"})
    assert response.status_code == 200
    assert response.json() == {
        "blocks": [{"type": 1, "value": "abcd", "markup": [{"type": 1, "start": 1, "end": 3}]}]
    }


def test_parse_endpoint_requires_html(client):
    response = post_json(client, "/api/v1/parse/", {"markup": "<p>x</p>"})
    assert response.status_code == 400
    assert response.json() == {"error": "html is required"}


def test_invalid_json(client):
    response = client.post("/api/v1/parse/", data="{nope", content_type="application/json")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON"}


def test_parse_endpoint_rejects_get(client):
    assert client.get("/api/v1/parse/").status_code == 405


def test_render_endpoint(client):
    blocks = [{"type": 1, "value": "ab", "markup": [{"type": 5, "start": 1, "end": 1}]}]
    response = post_json(client, "/api/v1/render/", {"blocks": blocks})
    assert response.status_code == 200
    assert response.json() == {"html": "<p>a<br/>b</p>"}


def test_render_endpoint_validates_blocks(client):
    blocks = [{"type": 1, "value": "ab", "markup": [{"type": 1, "start": 0, "end": 9}]}]
    response = post_json(client, "/api/v1/render/", {"blocks": blocks})
    assert response.status_code == 400
    assert "outside the block value" in response.json()["error"]


def test_render_endpoint_requires_blocks(client):
    response = post_json(client, "/api/v1/render/", {})
    assert response.status_code == 400


def test_types_endpoint(client):
    data = client.get("/api/v1/types/").json()
    assert [t["name"] for t in data["block_types"]][:3] == ["TEXT", "HEADING", "SUBHEADING"]
    assert {"id": 5, "name": "BREAK", "tag": "br", "self_closing": True} in data["markup_types"]


@pytest.mark.django_db
def test_document_detail(client):
    document = Document.objects.create(title="Doc", blocks=[{"type": 1, "value": "x", "markup": []}])
    data = client.get(f"/api/v1/documents/{document.pk}/").json()
    assert data["title"] == "Doc"
    assert data["blocks"] == [{"type": 1, "value": "x", "markup": []}]
    assert data["html"] == "<p>x</p>"


@pytest.mark.django_db
def test_document_detail_not_found(client):
    assert client.get("/api/v1/documents/424242/").status_code == 404
