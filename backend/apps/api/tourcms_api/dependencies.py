"""
FastAPI dependencies.

Provides dependency injection for database sessions, the task queue,
the translation provider, and services.
"""

from typing import Annotated

from arq.connections import ArqRedis
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tourcms_core.config import TranslationConfig, translation_config
from tourcms_core.services import (
    ContentService,
    CoverageService,
    TranslationProvider,
    TranslationService,
    create_translation_provider,
)
from tourcms_database.session import get_session

# Global Redis connection pool for the task queue, set during app startup
redis_pool: ArqRedis | None = None


async def get_redis_pool() -> ArqRedis | None:
    """
    Get the global Redis connection pool for arq.

    Returns:
        ArqRedis connection pool, or None when the queue is unavailable.
        Background jobs are best effort, so callers skip queueing then.
    """
    return redis_pool


def get_translation_config() -> TranslationConfig:
    """Get translation configuration."""
    return translation_config


def get_translation_provider(
    config: Annotated[TranslationConfig, Depends(get_translation_config)],
) -> TranslationProvider:
    """Get the configured translation provider."""
    return create_translation_provider(config)


# Service dependencies
def get_translation_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    provider: Annotated[TranslationProvider, Depends(get_translation_provider)],
    config: Annotated[TranslationConfig, Depends(get_translation_config)],
) -> TranslationService:
    """Get translation service instance."""
    return TranslationService(session, provider, config)


def get_content_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    config: Annotated[TranslationConfig, Depends(get_translation_config)],
) -> ContentService:
    """Get content service instance."""
    return ContentService(session, config)


def get_coverage_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    config: Annotated[TranslationConfig, Depends(get_translation_config)],
) -> CoverageService:
    """Get coverage service instance."""
    return CoverageService(session, config)
