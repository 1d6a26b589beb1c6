"""
Database models package.

This module exports all SQLAlchemy models for the TourCMS application.
"""

from .base import Base, TimestampMixin
from .blog import Blog
from .content_translation import ContentTranslation
from .gallery import GalleryItem
from .section import SectionContent
from .testimonial import Testimonial
from .tour_package import TourPackage

__all__ = [
    "Base",
    "TimestampMixin",
    # Content models
    "SectionContent",
    "Blog",
    "TourPackage",
    "Testimonial",
    "GalleryItem",
    # Translation models
    "ContentTranslation",
]
