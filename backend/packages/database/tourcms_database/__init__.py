"""
TourCMS Database Package.

SQLAlchemy models, session management and migrations.
"""

__version__ = "0.1.0"

from .models import Base

__all__ = ["Base"]
