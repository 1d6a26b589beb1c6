"""
Translation service.

Runs the per-entity translation pass over every target language and
persists results in the ContentTranslation table.
"""

import asyncio
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from tourcms_core import get_logger
from tourcms_core.config import TranslationConfig, translation_config
from tourcms_core.content_types import (
    ContentNotFoundError,
    ContentTypeSpec,
    StructuredField,
    get_content_type,
    source_values,
    to_record,
)
from tourcms_core.schemas.translation import (
    BatchTranslationResult,
    LanguageResult,
    TranslationState,
)
from tourcms_core.services.translation_merge import is_blank
from tourcms_core.services.translation_providers import (
    RateLimitedError,
    TranslationProvider,
    TranslationProviderError,
)
from tourcms_database.models import Base, ContentTranslation
from tourcms_database.models.base import generate_uuid

logger = get_logger(__name__)


class TranslationFailedError(Exception):
    """A field could not be translated; the current language pass is abandoned."""


async def translate_with_retry(
    provider: TranslationProvider,
    text: str,
    source: str,
    target: str,
    *,
    backoff_seconds: float,
) -> str:
    """
    Translate text, retrying exactly once after a rate-limit signal.

    Raises:
        TranslationFailedError: On any non-rate-limit error, or when the
            retry after a rate limit fails as well.
    """
    try:
        return await provider.translate(text, source, target)
    except RateLimitedError:
        logger.warning(
            "Rate limit hit, waiting before retry",
            extra={"target_language": target, "backoff_seconds": backoff_seconds},
        )
    except TranslationProviderError as e:
        raise TranslationFailedError(str(e)) from e

    await asyncio.sleep(backoff_seconds)
    try:
        return await provider.translate(text, source, target)
    except TranslationProviderError as e:
        raise TranslationFailedError(f"Retry after rate limit failed: {e}") from e


class TranslationService:
    """Translation writer and batch driver."""

    def __init__(
        self,
        session: AsyncSession,
        provider: TranslationProvider,
        config: TranslationConfig | None = None,
    ):
        self.session = session
        self.provider = provider
        self.config = config or translation_config

    @property
    def target_languages(self) -> list[str]:
        """Configured target languages, in processing order, without the source language."""
        return [lang for lang in self.config.target_languages if lang != self.config.source_language]

    async def translate_content(
        self, content_type: str, content_id: str, force_retranslate: bool = False
    ) -> BatchTranslationResult:
        """
        Translate one entity into every target language.

        Languages are processed one at a time with a fixed pause between
        them. A failure in one language is logged and recorded in the
        result; the remaining languages still run.

        Args:
            content_type: Content type name.
            content_id: Entity identifier.
            force_retranslate: Translate even if an up-to-date row exists.

        Returns:
            Per-language outcome.

        Raises:
            ValueError: If the content type is unknown.
            ContentNotFoundError: If the entity is not found.
        """
        spec = get_content_type(content_type)
        entity = await self.get_entity(spec, content_id)
        source = source_values(spec, to_record(spec, entity))

        logger.info(
            "Starting batch translation",
            extra={
                "content_type": content_type,
                "content_id": content_id,
                "languages": self.target_languages,
                "force_retranslate": force_retranslate,
            },
        )

        batch = BatchTranslationResult(content_type=content_type, content_id=content_id)
        for index, language in enumerate(self.target_languages):
            if index > 0:
                await asyncio.sleep(self.config.inter_language_delay_seconds)
            batch.results.append(
                await self._translate_language(spec, content_id, source, language, force_retranslate)
            )

        logger.info(
            "Batch translation finished",
            extra={
                "content_type": content_type,
                "content_id": content_id,
                "translated": batch.translated_languages,
                "failed": batch.failed_languages,
            },
        )
        return batch

    async def translate_published(
        self, content_type: str, force_retranslate: bool = False
    ) -> list[BatchTranslationResult]:
        """
        Translate every public item of one content type, one after another.

        Args:
            content_type: Content type name.
            force_retranslate: Translate even if up-to-date rows exist.

        Returns:
            One batch result per item.
        """
        spec = get_content_type(content_type)
        stmt = select(getattr(spec.model, spec.key))
        if spec.published_status is not None:
            stmt = stmt.where(spec.model.status == spec.published_status)
        result = await self.session.execute(stmt)
        content_ids = [str(value) for value in result.scalars().all()]

        logger.info(
            "Translating published content",
            extra={"content_type": content_type, "count": len(content_ids)},
        )
        return [
            await self.translate_content(content_type, content_id, force_retranslate)
            for content_id in content_ids
        ]

    async def get_entity(self, spec: ContentTypeSpec, content_id: str) -> Base:
        """
        Load the base-language entity.

        Raises:
            ContentNotFoundError: If the entity is not found.
        """
        stmt = select(spec.model).where(getattr(spec.model, spec.key) == content_id)
        result = await self.session.execute(stmt)
        entity = result.scalar_one_or_none()
        if entity is None:
            raise ContentNotFoundError(f"{spec.label} {content_id} not found")
        return entity

    async def get_translation(
        self, content_type: str, content_id: str, language: str
    ) -> ContentTranslation | None:
        stmt = select(ContentTranslation).where(
            ContentTranslation.content_type == content_type,
            ContentTranslation.content_id == content_id,
            ContentTranslation.language == language,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_translation(
        self,
        content_type: str,
        content_id: str,
        language: str,
        fields: dict[str, Any],
        **columns: Any,
    ) -> ContentTranslation:
        """
        Create or update the translation row for (content, language).

        ``fields`` is merged into the stored fields, so values not given
        here keep what was stored before. Extra keyword arguments set
        columns on the row (status, error, source_snapshot, ...).

        Raises:
            ValueError: If ``language`` is the source language.
        """
        if language == self.config.source_language:
            raise ValueError(
                f"Translations cannot be stored for the source language ({language})"
            )

        row = await self.get_translation(content_type, content_id, language)
        if row is None:
            await self._insert_translation_row(content_type, content_id, language)
            row = await self.get_translation(content_type, content_id, language)

        merged = dict(row.fields or {})
        merged.update(fields)
        row.fields = merged
        for name, value in columns.items():
            if isinstance(value, TranslationState):
                value = value.value
            setattr(row, name, value)

        await self.session.commit()
        await self.session.refresh(row)
        return row

    def _get_insert(self):  # type: ignore[no-untyped-def]
        """Dialect-specific insert, needed for ON CONFLICT."""
        if self.session.bind.dialect.name == "postgresql":
            return pg_insert
        return sqlite_insert

    async def _insert_translation_row(
        self, content_type: str, content_id: str, language: str
    ) -> None:
        """Create an empty row unless a concurrent pass already created it."""
        insert = self._get_insert()
        stmt = (
            insert(ContentTranslation)
            .values(
                id=generate_uuid(),
                content_type=content_type,
                content_id=content_id,
                language=language,
                fields={},
                is_auto_translated=True,
                status=TranslationState.UNTRANSLATED.value,
            )
            .on_conflict_do_nothing(index_elements=["content_type", "content_id", "language"])
        )
        await self.session.execute(stmt)

    async def save_manual_translation(
        self, content_type: str, content_id: str, language: str, fields: dict[str, Any]
    ) -> ContentTranslation:
        """
        Store editor-provided translated values for one language.

        Only the given fields change and the row is marked as not
        auto-translated. Status and source snapshot of an existing row are
        kept, so a row that was up to date stays skipped by automatic runs.

        Raises:
            ValueError: If the content type, language or a field name is
                invalid, or the entity is not found.
        """
        spec = get_content_type(content_type)
        if language == self.config.source_language:
            raise ValueError(
                f"Translations cannot be stored for the source language ({language})"
            )
        if language not in self.target_languages:
            raise ValueError(f"Unsupported language: {language}")
        unknown = sorted(set(fields) - set(spec.translatable_fields))
        if unknown:
            raise ValueError(f"Fields are not translatable: {', '.join(unknown)}")
        await self.get_entity(spec, content_id)

        columns: dict[str, Any] = {"is_auto_translated": False, "error": None}
        if await self.get_translation(content_type, content_id, language) is None:
            columns["status"] = TranslationState.TRANSLATED
        row = await self.upsert_translation(content_type, content_id, language, fields, **columns)
        logger.info(
            "Manual translation saved",
            extra={
                "content_type": content_type,
                "content_id": content_id,
                "language": language,
                "fields": list(fields),
            },
        )
        return row

    @staticmethod
    def _is_up_to_date(row: ContentTranslation, source: dict[str, Any]) -> bool:
        """A completed row whose recorded source equals the current source, field by field."""
        if row.status != TranslationState.TRANSLATED.value or row.source_snapshot is None:
            return False
        snapshot = row.source_snapshot
        return all(snapshot.get(name) == value for name, value in source.items())

    async def _translate_language(
        self,
        spec: ContentTypeSpec,
        content_id: str,
        source: dict[str, Any],
        language: str,
        force_retranslate: bool,
    ) -> LanguageResult:
        existing = await self.get_translation(spec.name, content_id, language)
        if existing and not force_retranslate and self._is_up_to_date(existing, source):
            logger.info(
                "Content unchanged, skipping language",
                extra={"content_type": spec.name, "content_id": content_id, "language": language},
            )
            return LanguageResult(language=language, state=TranslationState.TRANSLATED, skipped=True)

        logger.info(
            "Translating language",
            extra={"content_type": spec.name, "content_id": content_id, "language": language},
        )
        await self.upsert_translation(
            spec.name, content_id, language, {}, status=TranslationState.TRANSLATING
        )

        translated_fields: list[str] = []
        try:
            for name in spec.translatable_fields:
                value = source.get(name)
                if is_blank(value):
                    continue
                structured = spec.structured(name)
                if structured is None:
                    translated = await self._translate_text(value, language)
                else:
                    translated = await self._translate_structured(value, structured, language)
                await self.upsert_translation(spec.name, content_id, language, {name: translated})
                translated_fields.append(name)
        except TranslationFailedError as e:
            error_msg = str(e)
            logger.exception(
                "Translation failed",
                extra={
                    "content_type": spec.name,
                    "content_id": content_id,
                    "language": language,
                    "error": error_msg,
                },
            )
            await self.upsert_translation(
                spec.name,
                content_id,
                language,
                {},
                status=TranslationState.FAILED,
                error=error_msg,
            )
            return LanguageResult(
                language=language,
                state=TranslationState.FAILED,
                fields_translated=translated_fields,
                error=error_msg,
            )

        await self.upsert_translation(
            spec.name,
            content_id,
            language,
            {},
            status=TranslationState.TRANSLATED,
            source_snapshot=source,
            is_auto_translated=True,
            error=None,
        )
        logger.info(
            "Language translated",
            extra={
                "content_type": spec.name,
                "content_id": content_id,
                "language": language,
                "fields": translated_fields,
            },
        )
        return LanguageResult(
            language=language,
            state=TranslationState.TRANSLATED,
            fields_translated=translated_fields,
        )

    async def _translate_text(self, text: str, language: str) -> str:
        translated = await translate_with_retry(
            self.provider,
            text,
            self.config.source_language,
            language,
            backoff_seconds=self.config.rate_limit_backoff_seconds,
        )
        if self.config.request_delay_seconds:
            await asyncio.sleep(self.config.request_delay_seconds)
        return translated

    async def _translate_structured(
        self, items: Any, structured: StructuredField, language: str
    ) -> Any:
        """
        Translate the designated sub-fields of every element.

        Order and non-text sibling values are preserved.
        """
        if not isinstance(items, list):
            return items

        translated_items: list[Any] = []
        for item in items:
            if isinstance(item, str):
                translated_items.append(
                    item if is_blank(item) else await self._translate_text(item, language)
                )
            elif isinstance(item, dict):
                translated_item = dict(item)
                for sub_field in structured.sub_fields:
                    value = item.get(sub_field)
                    if isinstance(value, str) and not is_blank(value):
                        translated_item[sub_field] = await self._translate_text(value, language)
                    elif isinstance(value, list):
                        translated_item[sub_field] = [
                            await self._translate_text(v, language)
                            if isinstance(v, str) and not is_blank(v)
                            else v
                            for v in value
                        ]
                translated_items.append(translated_item)
            else:
                translated_items.append(item)
        return translated_items
