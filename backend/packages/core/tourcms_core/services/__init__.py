"""
Business logic services.

This package contains service classes that implement the core business logic.
"""

from tourcms_core.content_types import ContentNotFoundError

from .content_service import ContentService
from .coverage_service import CoverageService
from .translation_merge import has_translated_values, is_blank, merge_translation
from .translation_providers import (
    DeepLProvider,
    GoogleFreeProvider,
    RateLimitedError,
    TranslationProvider,
    TranslationProviderError,
    create_translation_provider,
)
from .translation_service import TranslationFailedError, TranslationService, translate_with_retry

__all__ = [
    "ContentNotFoundError",
    "ContentService",
    "CoverageService",
    "TranslationService",
    "TranslationFailedError",
    "translate_with_retry",
    "merge_translation",
    "has_translated_values",
    "is_blank",
    "TranslationProvider",
    "TranslationProviderError",
    "RateLimitedError",
    "DeepLProvider",
    "GoogleFreeProvider",
    "create_translation_provider",
]
