"""
Tour package model definition.

This module defines the TourPackage model. List-like columns
(destinations, includes, itinerary, ...) hold JSON-serialized arrays.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class TourPackage(Base, TimestampMixin):
    """
    Tour package in the base language.

    Attributes:
        id: Unique package identifier.
        title: Package name.
        description: Short description.
        long_description: Full description (HTML).
        price: Price in IDR.
        duration: Duration label (e.g. "2D1N").
        group_size: Group size label.
        difficulty: Difficulty label.
        best_for: Audience label.
        departure: Departure time/place.
        return_time: Return time/place.
        location: Meeting point.
        image: Cover image URL.
        destinations: JSON list of destination names.
        includes: JSON list of included items.
        excludes: JSON list of excluded items.
        highlights: JSON list of highlights.
        itinerary: JSON list of {day, title, description}.
        faqs: JSON list of {question, answer}.
        status: Publication status (draft/published).
    """

    __tablename__ = "packages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    long_description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[int | None] = mapped_column(Integer)
    duration: Mapped[str | None] = mapped_column(String(100))
    group_size: Mapped[str | None] = mapped_column(String(100))
    difficulty: Mapped[str | None] = mapped_column(String(100))
    best_for: Mapped[str | None] = mapped_column(String(255))
    departure: Mapped[str | None] = mapped_column(String(255))
    return_time: Mapped[str | None] = mapped_column("return", String(255))
    location: Mapped[str | None] = mapped_column(String(255))
    image: Mapped[str | None] = mapped_column(String(2000))

    # JSON-serialized structured content
    destinations: Mapped[str | None] = mapped_column(Text)
    includes: Mapped[str | None] = mapped_column(Text)
    excludes: Mapped[str | None] = mapped_column(Text)
    highlights: Mapped[str | None] = mapped_column(Text)
    itinerary: Mapped[str | None] = mapped_column(Text)
    faqs: Mapped[str | None] = mapped_column(Text)

    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
