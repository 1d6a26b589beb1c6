"""Tests for coverage service."""

import pytest

from tourcms_core.content_types import ContentNotFoundError
from tourcms_core.schemas import TranslationState
from tourcms_core.services.coverage_service import CoverageService
from tourcms_core.services.translation_service import TranslationService


class TestGetStatus:
    """Test CoverageService.get_status."""

    @pytest.mark.asyncio
    async def test_untranslated_entity(self, db_session, translation_config, bromo_blog):
        status = await CoverageService(db_session, translation_config).get_status(
            "blog", bromo_blog.id
        )

        assert list(status) == ["id", "en", "de", "nl", "zh"]
        assert status["id"].exists is True
        assert status["id"].status == TranslationState.TRANSLATED
        assert status["en"].exists is False
        assert status["en"].status == TranslationState.UNTRANSLATED

    @pytest.mark.asyncio
    async def test_reports_stored_rows(
        self, db_session, translation_config, fake_provider, bromo_blog
    ):
        writer = TranslationService(db_session, fake_provider, translation_config)
        await writer.save_manual_translation("blog", bromo_blog.id, "de", {"title": "Bromo-Führer"})

        status = await CoverageService(db_session, translation_config).get_status(
            "blog", bromo_blog.id
        )

        assert status["de"].exists is True
        assert status["de"].is_auto_translated is False
        assert status["de"].last_updated is not None

    @pytest.mark.asyncio
    async def test_unknown_entity(self, db_session, translation_config):
        with pytest.raises(ContentNotFoundError, match="not found"):
            await CoverageService(db_session, translation_config).get_status("blog", "missing")


class TestCheckSection:
    """Test CoverageService.check_section."""

    @pytest.mark.asyncio
    async def test_missing_item(self, db_session, translation_config, bromo_blog):
        report = await CoverageService(db_session, translation_config).check_section("blogs")

        assert report.total_items == 1
        assert report.translated_items == 0
        assert report.coverage_percentage == 0.0
        item = report.items[0]
        assert item.status == "missing"
        assert item.content_title == "Panduan Bromo"
        assert item.missing_languages == ["en", "de", "nl", "zh"]
        assert item.languages["en"].missing_fields == ["title", "excerpt", "content", "category"]

    @pytest.mark.asyncio
    async def test_partial_item(self, db_session, translation_config, fake_provider, bromo_blog):
        writer = TranslationService(db_session, fake_provider, translation_config)
        await writer.upsert_translation(
            "blog", bromo_blog.id, "en", {"title": "Bromo Guide", "excerpt": "Summary"}
        )

        report = await CoverageService(db_session, translation_config).check_section("blogs")

        item = report.items[0]
        assert item.status == "partial"
        assert item.languages["en"].completeness == 50.0
        assert item.languages["en"].missing_fields == ["content", "category"]
        assert item.overall_coverage == 12.5
        assert item.missing_languages == ["de", "nl", "zh"]

    @pytest.mark.asyncio
    async def test_complete_item(self, db_session, translation_config, fake_provider, bromo_blog):
        writer = TranslationService(db_session, fake_provider, translation_config)
        await writer.translate_content("blog", bromo_blog.id)

        service = CoverageService(db_session, translation_config)
        report = await service.check_section("blogs")

        assert report.items[0].status == "complete"
        assert report.coverage_percentage == 100.0
        assert await service.find_missing("blogs") == []

    @pytest.mark.asyncio
    async def test_empty_section(self, db_session, translation_config):
        report = await CoverageService(db_session, translation_config).check_section("gallery")

        assert report.total_items == 0
        assert report.items == []

    @pytest.mark.asyncio
    async def test_unknown_section(self, db_session, translation_config):
        with pytest.raises(ValueError, match="Unknown section"):
            await CoverageService(db_session, translation_config).check_section("brochures")


class TestFindMissing:
    """Test CoverageService.find_missing."""

    @pytest.mark.asyncio
    async def test_all_sections(self, db_session, translation_config, bromo_blog, hero_section):
        items = await CoverageService(db_session, translation_config).find_missing()

        assert sorted(item.section for item in items) == ["blogs", "sections"]
