"""
Document model: editor content persisted as a list of blocks.
"""

import logging

from django.db import models, transaction

from contentkit.compiler.config import get_compiler_config, get_default_compiler
from contentkit.tasks import rebuild_document_html
from contentkit.validators import validate_blocks

from .base import TimeStampedModel

logger = logging.getLogger(__name__)


class Document(TimeStampedModel):
    """
    The block list is the source of truth.
    HTML is derived from it by the compiler and kept in `content_html_cached`.
    """

    title = models.CharField(max_length=200, blank=True)

    blocks = models.JSONField(
        default=list,
        blank=True,
        validators=[validate_blocks],
        help_text="Parsed content: a list of blocks with offset-addressed markup.",
    )

    content_html_cached = models.TextField(
        blank=True, help_text="Cache of the HTML rendered from blocks."
    )

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return self.title or f"Document {self.pk}"

    # ---------------------------
    # Lifecycle
    # ---------------------------

    def save(self, *args, **kwargs):
        rebuild_later = False
        if get_compiler_config()["ASYNC_RENDER"]:
            rebuild_later = self.pk is None or self._blocks_changed()
        else:
            self.content_html_cached = self.render_html()

        super().save(*args, **kwargs)

        if rebuild_later:
            transaction.on_commit(lambda: rebuild_document_html.delay(self.pk))

    def _blocks_changed(self) -> bool:
        original = Document.objects.filter(pk=self.pk).values_list("blocks", flat=True).first()
        return original != self.blocks

    # ---------------------------
    # Helpers
    # ---------------------------

    def render_html(self) -> str:
        return get_default_compiler().render(self.blocks or [])

    def set_html(self, html: str) -> None:
        """Replace the blocks with the parsed form of ``html``."""
        self.blocks = [block.to_dict() for block in get_default_compiler().parse(html)]
        logger.debug(f"Parsed {len(self.blocks)} block(s) into document '{self}'")

    @property
    def plain_text(self) -> str:
        return "\n\n".join(block.get("value", "") for block in self.blocks or [] if block.get("value"))
