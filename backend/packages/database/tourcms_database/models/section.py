"""
Section content model definition.

This module defines the SectionContent model for the homepage sections
(hero, whyChooseUs, tourPackages, testimonials, ...).
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class SectionContent(Base, TimestampMixin):
    """
    Homepage section content in the base language.

    Sections are addressed by their stable ``section_id`` slug rather than
    by the surrogate primary key.

    Attributes:
        id: Surrogate identifier (UUID).
        section_id: Stable section slug (e.g. "hero", "tourPackages").
        title: Section heading.
        subtitle: Section sub-heading.
        description: Section body text.
        cta_text: Call-to-action label.
        button_text: Secondary button label.
        cta_link: Call-to-action target URL.
        image: Background or feature image URL.
        features: JSON-serialized list of {icon, title, description}.
        stats: JSON-serialized list of {number, label}.
        destinations: JSON-serialized list of destination cards.
    """

    __tablename__ = "section_contents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    section_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    title: Mapped[str | None] = mapped_column(String(500))
    subtitle: Mapped[str | None] = mapped_column(String(1000))
    description: Mapped[str | None] = mapped_column(Text)
    cta_text: Mapped[str | None] = mapped_column(String(255))
    button_text: Mapped[str | None] = mapped_column(String(255))
    cta_link: Mapped[str | None] = mapped_column(String(2000))
    image: Mapped[str | None] = mapped_column(String(2000))

    # JSON-serialized structured content
    features: Mapped[str | None] = mapped_column(Text)
    stats: Mapped[str | None] = mapped_column(Text)
    destinations: Mapped[str | None] = mapped_column(Text)
