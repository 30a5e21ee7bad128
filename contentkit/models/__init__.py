"""
Models for the contentkit app.

- base: Base models (TimeStampedModel)
- document: Block documents with a cached HTML rendering
"""

from .base import TimeStampedModel
from .document import Document

__all__ = [
    "TimeStampedModel",
    "Document",
]
