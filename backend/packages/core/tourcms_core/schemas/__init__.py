"""
Pydantic schemas for API requests and responses.
"""

from .content import ContentListResponse, ContentResponse, LocalizedContent
from .translation import (
    BatchTranslationResult,
    ContentType,
    CoverageResponse,
    ItemCoverage,
    LanguageCoverage,
    LanguageResult,
    LanguageStatus,
    ManualTranslationRequest,
    SectionCoverage,
    TranslateTextData,
    TranslateTextRequest,
    TranslateTextResponse,
    TranslationRecordResponse,
    TranslationState,
    TranslationStatusResponse,
    TriggerTranslationData,
    TriggerTranslationRequest,
    TriggerTranslationResponse,
)

__all__ = [
    # Content
    "LocalizedContent",
    "ContentResponse",
    "ContentListResponse",
    # Translation
    "ContentType",
    "TranslationState",
    "TriggerTranslationRequest",
    "TriggerTranslationData",
    "TriggerTranslationResponse",
    "LanguageResult",
    "BatchTranslationResult",
    "LanguageStatus",
    "TranslationStatusResponse",
    "LanguageCoverage",
    "ItemCoverage",
    "SectionCoverage",
    "CoverageResponse",
    "ManualTranslationRequest",
    "TranslationRecordResponse",
    "TranslateTextRequest",
    "TranslateTextData",
    "TranslateTextResponse",
]
