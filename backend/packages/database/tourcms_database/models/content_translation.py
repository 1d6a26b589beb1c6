"""
Content translation model definition.

This module defines the ContentTranslation model for storing translated
versions of sections, blogs, packages, testimonials and gallery items.
"""

from typing import Any

from sqlalchemy import JSON, Boolean, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class ContentTranslation(Base, TimestampMixin):
    """
    Translated content for one (content type, content id, language).

    Rows never exist for the source language. ``fields`` mirrors the shape
    of the translated entity: text fields map to strings, structured fields
    map to already-deserialized lists. Missing or empty fields mean "not
    translated yet" and readers fall back to the original value.

    Attributes:
        id: Unique translation identifier (UUID).
        content_type: Content type name (section/blog/package/testimonial/gallery).
        content_id: Identifier of the translated entity.
        language: Target language code (e.g. "en", "de").
        fields: Translated field values.
        source_snapshot: Source values the last completed pass translated from.
        is_auto_translated: False when the row was saved manually.
        status: untranslated/translating/translated/failed.
        error: Error message if the last pass failed.
    """

    __tablename__ = "content_translations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    content_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    language: Mapped[str] = mapped_column(String(10), nullable=False)
    fields: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    source_snapshot: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    is_auto_translated: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="untranslated", nullable=False)
    error: Mapped[str | None] = mapped_column(Text)

    # Constraints
    __table_args__ = (
        UniqueConstraint(
            "content_type", "content_id", "language", name="uq_content_translation_lang"
        ),
    )
