"""
Celery tasks for asynchronous document processing.

Rendering cached HTML is cheap for short documents, so it happens inline on
save unless ``CONTENT_KIT["ASYNC_RENDER"]`` is enabled, in which case the
save schedules ``rebuild_document_html`` once the transaction commits.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(ConnectionError,),
    retry_backoff=5,
    retry_kwargs={"max_retries": 3},
)
def rebuild_document_html(self, document_id: int):
    """
    Re-render the cached HTML of a Document from its blocks.

    Returns:
        Dict with the rebuild result
    """
    from .models import Document

    try:
        document = Document.objects.get(pk=document_id)
    except Document.DoesNotExist:
        logger.warning(f"Document {document_id} not found, nothing to rebuild")
        return {"success": False, "error": f"Document {document_id} not found."}

    try:
        html = document.render_html()
    except (TypeError, ValueError) as e:
        logger.error(f"Rendering document {document_id} failed: {e}", exc_info=True)
        return {
            "success": False,
            "document_id": document_id,
            "error": str(e),
        }

    # Update the field directly to avoid re-triggering save()
    Document.objects.filter(pk=document_id).update(content_html_cached=html)
    logger.info(f"Rebuilt HTML for document {document_id} ({len(html)} chars)")

    return {
        "success": True,
        "document_id": document_id,
        "length": len(html),
    }
