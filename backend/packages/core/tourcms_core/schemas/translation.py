"""
Translation schemas.

Request and response models for translation triggers, status and coverage.
Wire names are camelCase (``contentType``); Python attributes stay snake_case.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContentType(str, Enum):
    """Translatable content types."""

    SECTION = "section"
    BLOG = "blog"
    PACKAGE = "package"
    TESTIMONIAL = "testimonial"
    GALLERY = "gallery"


class TranslationState(str, Enum):
    """Translation state of one (entity, language) pair."""

    UNTRANSLATED = "untranslated"
    TRANSLATING = "translating"
    TRANSLATED = "translated"  # terminal success
    FAILED = "failed"  # terminal for this attempt


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TriggerTranslationRequest(CamelModel):
    """Trigger translation of one entity into every target language."""

    content_type: ContentType
    content_id: str = Field(min_length=1)
    force_retranslate: bool = False


class TriggerTranslationData(CamelModel):
    """Identifies the entity a trigger ran for."""

    content_type: ContentType
    content_id: str


class TriggerTranslationResponse(CamelModel):
    """Trigger response envelope; no per-language breakdown."""

    success: bool
    data: TriggerTranslationData | None = None
    error: str | None = None


class LanguageResult(CamelModel):
    """Outcome of one language within a batch run."""

    language: str
    state: TranslationState
    skipped: bool = False
    fields_translated: list[str] = Field(default_factory=list)
    error: str | None = None


class BatchTranslationResult(CamelModel):
    """Outcome of a batch run over all target languages for one entity."""

    content_type: str
    content_id: str
    results: list[LanguageResult] = Field(default_factory=list)

    @property
    def failed_languages(self) -> list[str]:
        return [r.language for r in self.results if r.state == TranslationState.FAILED]

    @property
    def translated_languages(self) -> list[str]:
        return [r.language for r in self.results if r.state == TranslationState.TRANSLATED]


class LanguageStatus(CamelModel):
    """Existence and freshness of one language for an entity."""

    exists: bool
    status: TranslationState
    is_auto_translated: bool = False
    last_updated: datetime | None = None


class TranslationStatusResponse(CamelModel):
    """Per-language status for an entity."""

    success: bool = True
    content_type: ContentType
    content_id: str
    data: dict[str, LanguageStatus]


class LanguageCoverage(CamelModel):
    """Field completeness of one language for one item."""

    exists: bool
    is_auto_translated: bool = False
    completeness: float = 0.0
    missing_fields: list[str] = Field(default_factory=list)


class ItemCoverage(CamelModel):
    """Coverage of one item across all target languages."""

    section: str
    content_id: str
    content_title: str | None
    languages: dict[str, LanguageCoverage]
    overall_coverage: float
    missing_languages: list[str]
    status: Literal["complete", "partial", "missing"]


class SectionCoverage(CamelModel):
    """Coverage of every public item of one content type."""

    section: str
    total_items: int
    translated_items: int
    coverage_percentage: float
    items: list[ItemCoverage]


class CoverageResponse(CamelModel):
    """Coverage report envelope."""

    success: bool = True
    data: list[SectionCoverage] | list[ItemCoverage]
    message: str


class ManualTranslationRequest(CamelModel):
    """Manually provided translated field values (partial)."""

    fields: dict[str, Any] = Field(min_length=1)


class TranslationRecordResponse(CamelModel):
    """A stored translation row."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    content_type: str
    content_id: str
    language: str
    fields: dict[str, Any]
    status: TranslationState
    is_auto_translated: bool
    error: str | None = None
    updated_at: datetime | None = None


class TranslateTextRequest(BaseModel):
    """Ad-hoc text translation request."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=1)
    source: str = Field("id", alias="from")
    target: str = Field("en", alias="to")


class TranslateTextData(CamelModel):
    """Ad-hoc translation result."""

    original_text: str
    translated_text: str
    source: str = Field(alias="from")
    target: str = Field(alias="to")


class TranslateTextResponse(CamelModel):
    """Ad-hoc translation envelope."""

    success: bool
    data: TranslateTextData | None = None
    error: str | None = None
