"""
TourCMS Worker - arq worker entry point.

Run with: arq tourcms_worker.main.WorkerSettings
"""

from typing import Any

from arq.connections import RedisSettings

from tourcms_core import get_logger, init_logging
from tourcms_database.session import close_database, init_database

from .config import settings
from .tasks.translation import translate_content_task, translate_published_content_task

logger = get_logger(__name__)


async def startup(ctx: dict[str, Any]) -> None:
    """
    Worker startup handler.

    Args:
        ctx: Worker context.
    """
    init_logging(settings.log_level, json_format=settings.log_json)
    init_database(settings.database_url)
    logger.info("TourCMS worker started")


async def shutdown(ctx: dict[str, Any]) -> None:
    """
    Worker shutdown handler.

    Args:
        ctx: Worker context.
    """
    await close_database()
    logger.info("TourCMS worker stopped")


class WorkerSettings:
    """arq worker configuration."""

    functions = [translate_content_task, translate_published_content_task]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = RedisSettings.from_dsn(settings.redis_url)

    max_jobs = settings.max_jobs
    job_timeout = settings.job_timeout_seconds
