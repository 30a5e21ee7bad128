"""
API views for the content compiler.

Endpoints:
- POST /api/v1/parse/ - Parse HTML into blocks
- POST /api/v1/render/ - Render blocks into HTML
- GET /api/v1/types/ - List registered block and markup types
- GET /api/v1/documents/{document_id}/ - Fetch a stored document
"""

import json
import logging

from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from contentkit.compiler.config import get_default_compiler
from contentkit.models import Document
from contentkit.validators import validate_blocks

logger = logging.getLogger(__name__)


def _load_json(request):
    try:
        return json.loads(request.body or b"{}"), None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)


@csrf_exempt
@require_http_methods(["POST"])
def parse_html(request):
    """
    Parse HTML into blocks.

    POST /api/v1/parse/

    Request body:
    {
        "html": "<p>a<b>bc</b>d</p>"
    }

    Response (200):
    {
        "blocks": [{"type": 1, "value": "abcd", "markup": [{"type": 1, "start": 1, "end": 3}]}]
    }
    """
    data, error = _load_json(request)
    if error:
        return error

    html = data.get("html") if isinstance(data, dict) else None
    if not isinstance(html, str):
        return JsonResponse({"error": "html is required"}, status=400)

    blocks = get_default_compiler().parse(html)
    return JsonResponse({"blocks": [block.to_dict() for block in blocks]})


@csrf_exempt
@require_http_methods(["POST"])
def render_blocks(request):
    """
    Render blocks into HTML.

    POST /api/v1/render/

    Request body:
    {
        "blocks": [{"type": 1, "value": "abcd", "markup": [{"type": 1, "start": 1, "end": 3}]}]
    }

    Response (200):
    {
        "html": "<p>a<b>bc</b>d</p>"
    }
    """
    data, error = _load_json(request)
    if error:
        return error

    blocks = data.get("blocks") if isinstance(data, dict) else None
    if blocks is None:
        return JsonResponse({"error": "blocks is required"}, status=400)

    try:
        validate_blocks(blocks)
    except ValidationError as e:
        logger.debug(f"Rejected blocks: {e.messages}")
        return JsonResponse({"error": " ".join(e.messages)}, status=400)

    return JsonResponse({"html": get_default_compiler().render(blocks)})


@require_http_methods(["GET"])
def list_types(request):
    """
    List registered types.

    GET /api/v1/types/
    """
    compiler = get_default_compiler()
    return JsonResponse(
        {
            "block_types": [type_.to_dict() for type_ in compiler.block_types],
            "markup_types": [type_.to_dict() for type_ in compiler.markup_types],
        }
    )


@require_http_methods(["GET"])
def document_detail(request, document_id):
    """
    Fetch a stored document.

    GET /api/v1/documents/{document_id}/
    """
    try:
        document = Document.objects.get(pk=document_id)
    except Document.DoesNotExist:
        return JsonResponse({"error": "Document not found"}, status=404)

    return JsonResponse(
        {
            "id": document.pk,
            "title": document.title,
            "blocks": document.blocks,
            "html": document.content_html_cached,
            "updated_at": document.updated_at.isoformat(),
        }
    )
