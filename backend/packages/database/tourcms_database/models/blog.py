"""
Blog post model definition.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class Blog(Base, TimestampMixin):
    """
    Blog post in the base language.

    Attributes:
        id: Unique blog identifier.
        slug: URL slug.
        title: Post title.
        excerpt: Short teaser shown on listing pages.
        content: Post body (HTML).
        author: Author display name.
        category: Category label.
        tags: JSON-serialized list of tags.
        image: Cover image URL.
        featured: Whether the post is pinned on the homepage.
        status: Publication status (draft/published).
        publish_date: Publication timestamp.
    """

    __tablename__ = "blogs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    slug: Mapped[str | None] = mapped_column(String(255), unique=True, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text)
    content: Mapped[str | None] = mapped_column(Text)
    author: Mapped[str | None] = mapped_column(String(255))
    category: Mapped[str | None] = mapped_column(String(100))
    tags: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str | None] = mapped_column(String(2000))
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
    publish_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
