"""Database models for the marketing workflow service.

This module imports all models to ensure they are registered
with SQLAlchemy's declarative base.
"""

from db.models.document import Document

__all__ = [
    "Document",
]
