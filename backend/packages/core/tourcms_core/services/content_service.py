"""
Content service.

Serves base-language content with stored translations merged on top.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourcms_core import get_logger
from tourcms_core.config import TranslationConfig, translation_config
from tourcms_core.content_types import (
    ContentNotFoundError,
    ContentTypeSpec,
    get_content_type,
    to_record,
)
from tourcms_core.schemas.content import LocalizedContent
from tourcms_core.services.translation_merge import has_translated_values, merge_translation
from tourcms_database.models import Base, ContentTranslation

logger = get_logger(__name__)


class ContentService:
    """Localized content reader."""

    def __init__(self, session: AsyncSession, config: TranslationConfig | None = None):
        self.session = session
        self.config = config or translation_config

    def check_language(self, language: str) -> None:
        """
        Raises:
            ValueError: If the language is not supported.
        """
        if language not in self.config.supported_languages:
            raise ValueError(f"Unsupported language: {language}")

    async def get_localized(
        self, content_type: str, content_id: str, language: str
    ) -> LocalizedContent:
        """
        Get one item in the requested language.

        Raises:
            ValueError: If the content type is unknown or the item is not found.
        """
        spec = get_content_type(content_type)
        stmt = select(spec.model).where(getattr(spec.model, spec.key) == content_id)
        if spec.published_status is not None:
            stmt = stmt.where(spec.model.status == spec.published_status)
        result = await self.session.execute(stmt)
        entity = result.scalar_one_or_none()
        if entity is None:
            raise ContentNotFoundError(f"{spec.label} {content_id} not found")

        translations = await self._load_translations(spec, [content_id], language)
        return self._localize(spec, entity, language, translations.get(content_id))

    async def list_localized(self, content_type: str, language: str) -> list[LocalizedContent]:
        """
        Get every public item of a content type in the requested language.

        Raises:
            ValueError: If the content type is unknown.
        """
        spec = get_content_type(content_type)
        stmt = select(spec.model)
        if spec.published_status is not None:
            stmt = stmt.where(spec.model.status == spec.published_status)
        if spec.name == "section":
            stmt = stmt.order_by(spec.model.created_at.asc())
        else:
            stmt = stmt.order_by(spec.model.created_at.desc())
        result = await self.session.execute(stmt)
        entities = list(result.scalars().all())

        ids = [str(getattr(entity, spec.key)) for entity in entities]
        translations = await self._load_translations(spec, ids, language)
        return [
            self._localize(spec, entity, language, translations.get(content_id))
            for entity, content_id in zip(entities, ids)
        ]

    async def _load_translations(
        self, spec: ContentTypeSpec, content_ids: list[str], language: str
    ) -> dict[str, ContentTranslation]:
        if language == self.config.source_language or not content_ids:
            return {}
        stmt = select(ContentTranslation).where(
            ContentTranslation.content_type == spec.name,
            ContentTranslation.content_id.in_(content_ids),
            ContentTranslation.language == language,
        )
        result = await self.session.execute(stmt)
        return {row.content_id: row for row in result.scalars().all()}

    def _localize(
        self,
        spec: ContentTypeSpec,
        entity: Base,
        language: str,
        translation: ContentTranslation | None,
    ) -> LocalizedContent:
        record = to_record(spec, entity)
        fields = translation.fields if translation else None
        data = merge_translation(
            record,
            language,
            fields,
            base_language=self.config.source_language,
            fields=spec.translatable_fields,
        )
        if language != self.config.source_language and has_translated_values(
            fields, spec.translatable_fields
        ):
            source = "database-translation"
        else:
            source = "original-data"
            if language != self.config.source_language:
                logger.debug(
                    "No translation available, serving original",
                    extra={
                        "content_type": spec.name,
                        "content_id": record.get(spec.key),
                        "language": language,
                    },
                )
        return LocalizedContent(data=data, source=source, language=language)
