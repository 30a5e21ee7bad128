"""Tests for the Document model and the rebuild task."""

import pytest
from django.core.exceptions import ValidationError

from contentkit.models import Document
from contentkit.tasks import rebuild_document_html

pytestmark = pytest.mark.django_db


def test_save_renders_html():
    document = Document(title="Hello")
    document.set_html("<h2>Hello</h2><p>a<b>bc</b>d</p>")
    document.save()

    document.refresh_from_db()
    assert document.blocks == [
        {"type": 2, "value": "Hello", "markup": []},
        {"type": 1, "value": "abcd", "markup": [{"type": 1, "start": 1, "end": 3}]},
    ]
    assert document.content_html_cached == "<h2>Hello</h2><p>a<b>bc</b>d</p>"


def test_edited_blocks_rerender_on_save():
    document = Document.objects.create(blocks=[{"type": 1, "value": "old", "markup": []}])
    document.blocks = [{"type": 3, "value": "new", "markup": []}]
    document.save()
    assert Document.objects.get(pk=document.pk).content_html_cached == "<h3>new</h3>"


def test_plain_text_and_str():
    document = Document(blocks=[{"type": 1, "value": "one", "markup": []}, {"type": 4, "value": "", "markup": []}, {"type": 1, "value": "two", "markup": []}])
    assert document.plain_text == "one\n\ntwo"
    assert str(Document(title="Notes")) == "Notes"


def test_invalid_blocks_fail_validation():
    document = Document(blocks=[{"type": 1, "value": "ab", "markup": [{"type": 1, "start": 0, "end": 5}]}])
    with pytest.raises(ValidationError) as excinfo:
        document.full_clean()
    assert "blocks" in excinfo.value.message_dict


def test_async_render_schedules_task(settings, monkeypatch, django_capture_on_commit_callbacks):
    settings.CONTENT_KIT = {"ASYNC_RENDER": True}
    scheduled = []

    class FakeTask:
        def delay(self, document_id):
            scheduled.append(document_id)

    monkeypatch.setattr("contentkit.models.document.rebuild_document_html", FakeTask())

    with django_capture_on_commit_callbacks(execute=True):
        document = Document.objects.create(blocks=[{"type": 1, "value": "x", "markup": []}])

    assert scheduled == [document.pk]
    assert document.content_html_cached == ""

    with django_capture_on_commit_callbacks(execute=True):
        document.title = "Renamed"
        document.save()
    assert scheduled == [document.pk]


def test_rebuild_task_restores_cache():
    document = Document.objects.create(blocks=[{"type": 5, "value": "quoted", "markup": []}])
    Document.objects.filter(pk=document.pk).update(content_html_cached="")

    result = rebuild_document_html(document.pk)

    assert result == {"success": True, "document_id": document.pk, "length": len("<blockquote>quoted</blockquote>")}
    assert Document.objects.get(pk=document.pk).content_html_cached == "<blockquote>quoted</blockquote>"


def test_rebuild_task_missing_document():
    result = rebuild_document_html(999999)
    assert result["success"] is False
    assert "not found" in result["error"]
