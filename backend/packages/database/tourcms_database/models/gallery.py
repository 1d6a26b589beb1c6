"""
Gallery item model definition.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class GalleryItem(Base, TimestampMixin):
    """
    Gallery image with caption in the base language.

    Attributes:
        id: Unique gallery item identifier.
        title: Caption title.
        description: Caption text.
        category: Category label.
        tags: JSON-serialized list of tags.
        image: Image URL.
    """

    __tablename__ = "gallery_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(100))
    tags: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str] = mapped_column(String(2000), nullable=False)
