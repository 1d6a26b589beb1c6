"""
Content translation worker tasks.

Runs the translation batch driver outside the request cycle.
"""

from typing import Any

from tourcms_core import get_logger
from tourcms_core.config import translation_config
from tourcms_core.services import TranslationService, create_translation_provider
from tourcms_database.session import get_session_context

logger = get_logger(__name__)


async def translate_content_task(
    ctx: dict[str, Any],
    content_type: str,
    content_id: str,
    force_retranslate: bool = False,
) -> dict[str, Any]:
    """
    Translate one entity into every target language.

    Args:
        ctx: Worker context.
        content_type: Content type name.
        content_id: Entity identifier.
        force_retranslate: Translate even if up-to-date rows exist.

    Returns:
        Result dictionary with status.
    """
    logger.info(
        "Starting content translation task",
        extra={"content_type": content_type, "content_id": content_id},
    )

    async with get_session_context() as session:
        service = TranslationService(
            session, create_translation_provider(translation_config), translation_config
        )
        try:
            batch = await service.translate_content(content_type, content_id, force_retranslate)
        except ValueError as e:
            logger.error(
                "Content translation task failed",
                extra={"content_type": content_type, "content_id": content_id, "error": str(e)},
            )
            return {"status": "error", "message": str(e)}

    return {
        "status": "success",
        "content_type": content_type,
        "content_id": content_id,
        "translated": batch.translated_languages,
        "failed": batch.failed_languages,
    }


async def translate_published_content_task(
    ctx: dict[str, Any],
    content_type: str,
    force_retranslate: bool = False,
) -> dict[str, Any]:
    """
    Translate every published item of one content type.

    Items are processed one after the other; a failing language of one
    item does not stop the others.

    Args:
        ctx: Worker context.
        content_type: Content type name.
        force_retranslate: Translate even if up-to-date rows exist.

    Returns:
        Result dictionary with status and per-item failures.
    """
    logger.info("Starting published content translation task", extra={"content_type": content_type})

    async with get_session_context() as session:
        service = TranslationService(
            session, create_translation_provider(translation_config), translation_config
        )
        try:
            batches = await service.translate_published(content_type, force_retranslate)
        except ValueError as e:
            logger.error(
                "Published content translation task failed",
                extra={"content_type": content_type, "error": str(e)},
            )
            return {"status": "error", "message": str(e)}

    failed = {batch.content_id: batch.failed_languages for batch in batches if batch.failed_languages}
    logger.info(
        "Published content translation finished",
        extra={"content_type": content_type, "items": len(batches), "items_with_failures": len(failed)},
    )
    return {
        "status": "success",
        "content_type": content_type,
        "items": len(batches),
        "failed": failed,
    }
