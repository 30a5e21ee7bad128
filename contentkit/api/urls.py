"""
URL patterns for the compiler API.

Endpoints:
- POST /api/v1/parse/ - Parse HTML into blocks
- POST /api/v1/render/ - Render blocks into HTML
- GET /api/v1/types/ - List registered types
- GET /api/v1/documents/<id>/ - Fetch a stored document
"""

from django.urls import path

from .views import document_detail, list_types, parse_html, render_blocks

app_name = "contentkit_api"

urlpatterns = [
    path("v1/parse/", parse_html, name="parse"),
    path("v1/render/", render_blocks, name="render"),
    path("v1/types/", list_types, name="types"),
    path(
        "v1/documents/<int:document_id>/",
        document_detail,
        name="document-detail",
    ),
]
