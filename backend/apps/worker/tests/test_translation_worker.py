"""Tests for content translation worker tasks."""

import inspect
from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest

from tourcms_database.models import Blog
from tourcms_worker.main import WorkerSettings
from tourcms_worker.tasks.translation import (
    translate_content_task,
    translate_published_content_task,
)


@pytest.fixture
def worker_env(db_session, fake_provider, translation_config):
    """Route worker tasks to the test session, fake provider and test config."""

    @asynccontextmanager
    async def _session_context():
        yield db_session

    with (
        patch(
            "tourcms_worker.tasks.translation.get_session_context",
            side_effect=_session_context,
        ),
        patch(
            "tourcms_worker.tasks.translation.create_translation_provider",
            return_value=fake_provider,
        ),
        patch("tourcms_worker.tasks.translation.translation_config", translation_config),
    ):
        yield


class TestTranslateContentTask:
    """Test translate_content_task worker function."""

    @pytest.mark.asyncio
    async def test_successful_translation(self, worker_env, bromo_blog, fake_provider):
        """Test that every language is translated."""
        result = await translate_content_task({}, "blog", bromo_blog.id)

        assert result["status"] == "success"
        assert result["translated"] == ["en", "de", "nl", "zh"]
        assert result["failed"] == []
        assert len(fake_provider.calls) == 16

    @pytest.mark.asyncio
    async def test_entity_not_found(self, worker_env, fake_provider):
        """Test task handles missing entity."""
        result = await translate_content_task({}, "blog", "missing")

        assert result["status"] == "error"
        assert "not found" in result["message"]
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_unknown_content_type(self, worker_env):
        """Test task handles unknown content type."""
        result = await translate_content_task({}, "brochure", "x")

        assert result["status"] == "error"
        assert "Unknown content type" in result["message"]


class TestTranslatePublishedContentTask:
    """Test translate_published_content_task worker function."""

    @pytest.mark.asyncio
    async def test_translates_published_items(
        self, worker_env, db_session, bromo_blog, fake_provider
    ):
        """Test that only published items are translated."""
        db_session.add(Blog(title="Draf", status="draft"))
        await db_session.commit()

        result = await translate_published_content_task({}, "blog")

        assert result == {"status": "success", "content_type": "blog", "items": 1, "failed": {}}
        assert "Draf" not in [text for text, _, _ in fake_provider.calls]

    @pytest.mark.asyncio
    async def test_reports_failed_languages(self, worker_env, bromo_blog, fake_provider):
        """Test that per-item language failures are reported."""
        from tourcms_core.services import TranslationProviderError

        fake_provider.failures[bromo_blog.title] = [TranslationProviderError("down")]

        result = await translate_published_content_task({}, "blog")

        assert result["failed"] == {bromo_blog.id: ["en"]}


def test_worker_settings_register_tasks():
    """Test that both tasks are registered with arq."""
    assert WorkerSettings.functions == [translate_content_task, translate_published_content_task]


def test_tasks_take_worker_context_first():
    """Test that arq can pass its context as the first argument."""
    for task in WorkerSettings.functions:
        assert next(iter(inspect.signature(task).parameters)) == "ctx"
