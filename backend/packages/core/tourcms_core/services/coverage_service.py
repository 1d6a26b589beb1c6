"""
Translation coverage service.

Reports which languages exist for an entity and how completely every
public item of a content type has been translated.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourcms_core import get_logger
from tourcms_core.config import TranslationConfig, translation_config
from tourcms_core.content_types import (
    CONTENT_TYPES,
    ContentNotFoundError,
    ContentTypeSpec,
    get_content_type,
    get_content_type_by_section,
    source_values,
    to_record,
)
from tourcms_core.schemas.translation import (
    ItemCoverage,
    LanguageCoverage,
    LanguageStatus,
    SectionCoverage,
    TranslationState,
)
from tourcms_core.services.translation_merge import is_blank
from tourcms_database.models import Base, ContentTranslation

logger = get_logger(__name__)


class CoverageService:
    """Translation status and coverage reporting."""

    def __init__(self, session: AsyncSession, config: TranslationConfig | None = None):
        self.session = session
        self.config = config or translation_config

    @property
    def target_languages(self) -> list[str]:
        return [lang for lang in self.config.target_languages if lang != self.config.source_language]

    async def get_status(self, content_type: str, content_id: str) -> dict[str, LanguageStatus]:
        """
        Get per-language existence and freshness for one entity.

        The source language always exists. Target languages report the
        state of their translation row, or untranslated when none exists.

        Raises:
            ValueError: If the content type is unknown or the entity is not found.
        """
        spec = get_content_type(content_type)
        stmt = select(spec.model).where(getattr(spec.model, spec.key) == content_id)
        result = await self.session.execute(stmt)
        entity = result.scalar_one_or_none()
        if entity is None:
            raise ContentNotFoundError(f"{spec.label} {content_id} not found")

        rows = await self._load_translations(spec, [content_id])
        by_language = {row.language: row for row in rows.get(content_id, [])}

        status = {
            self.config.source_language: LanguageStatus(
                exists=True,
                status=TranslationState.TRANSLATED,
                is_auto_translated=False,
                last_updated=entity.updated_at,
            )
        }
        for language in self.target_languages:
            row = by_language.get(language)
            if row is None:
                status[language] = LanguageStatus(exists=False, status=TranslationState.UNTRANSLATED)
            else:
                status[language] = LanguageStatus(
                    exists=True,
                    status=TranslationState(row.status),
                    is_auto_translated=row.is_auto_translated,
                    last_updated=row.updated_at,
                )
        return status

    async def check_all(self) -> list[SectionCoverage]:
        """Coverage for every content type."""
        return [await self.check_section(spec.coverage_section) for spec in CONTENT_TYPES.values()]

    async def check_section(self, section: str) -> SectionCoverage:
        """
        Coverage for the public items of one content type.

        Args:
            section: Coverage section name ("packages", "blogs", ...).

        Raises:
            ValueError: If the section is unknown.
        """
        spec = get_content_type_by_section(section)
        stmt = select(spec.model)
        if spec.published_status is not None:
            stmt = stmt.where(spec.model.status == spec.published_status)
        result = await self.session.execute(stmt)
        entities = list(result.scalars().all())

        ids = [str(getattr(entity, spec.key)) for entity in entities]
        rows = await self._load_translations(spec, ids)
        items = [
            self._item_coverage(spec, entity, rows.get(content_id, []))
            for entity, content_id in zip(entities, ids)
        ]

        translated_items = sum(1 for item in items if item.status == "complete")
        coverage = round(translated_items / len(items) * 100, 1) if items else 100.0
        logger.debug(
            "Section coverage computed",
            extra={"section": section, "total": len(items), "complete": translated_items},
        )
        return SectionCoverage(
            section=section,
            total_items=len(items),
            translated_items=translated_items,
            coverage_percentage=coverage,
            items=items,
        )

    async def find_missing(self, section: str = "all") -> list[ItemCoverage]:
        """Items in one section (or all) that are not completely translated."""
        if section == "all":
            reports = await self.check_all()
        else:
            reports = [await self.check_section(section)]
        return [item for report in reports for item in report.items if item.status != "complete"]

    async def _load_translations(
        self, spec: ContentTypeSpec, content_ids: list[str]
    ) -> dict[str, list[ContentTranslation]]:
        if not content_ids:
            return {}
        stmt = select(ContentTranslation).where(
            ContentTranslation.content_type == spec.name,
            ContentTranslation.content_id.in_(content_ids),
        )
        result = await self.session.execute(stmt)
        grouped: dict[str, list[ContentTranslation]] = {}
        for row in result.scalars().all():
            grouped.setdefault(row.content_id, []).append(row)
        return grouped

    def _item_coverage(
        self, spec: ContentTypeSpec, entity: Base, rows: list[ContentTranslation]
    ) -> ItemCoverage:
        record = to_record(spec, entity)
        # Fields that are blank in the source cannot be translated
        expected = [name for name, value in source_values(spec, record).items() if not is_blank(value)]
        by_language = {row.language: row for row in rows}

        languages: dict[str, LanguageCoverage] = {}
        missing_languages: list[str] = []
        for language in self.target_languages:
            row = by_language.get(language)
            if row is None:
                languages[language] = LanguageCoverage(exists=False, missing_fields=list(expected))
                missing_languages.append(language)
                continue
            stored = row.fields or {}
            missing = [name for name in expected if is_blank(stored.get(name))]
            completeness = (
                round((len(expected) - len(missing)) / len(expected) * 100, 1) if expected else 100.0
            )
            languages[language] = LanguageCoverage(
                exists=True,
                is_auto_translated=row.is_auto_translated,
                completeness=completeness,
                missing_fields=missing,
            )

        total = len(self.target_languages)
        overall = (
            round(sum(lang.completeness for lang in languages.values()) / total, 1) if total else 100.0
        )
        if overall >= 100.0:
            status = "complete"
        elif any(lang.exists for lang in languages.values()):
            status = "partial"
        else:
            status = "missing"

        title = record.get(spec.title_field)
        return ItemCoverage(
            section=spec.coverage_section,
            content_id=str(record.get(spec.key)),
            content_title=str(title) if title is not None else None,
            languages=languages,
            overall_coverage=overall,
            missing_languages=missing_languages,
            status=status,
        )
