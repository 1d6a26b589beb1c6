"""
Translations router.

Provides endpoints for triggering, inspecting and editing content translations.
"""

from typing import Annotated

from arq.connections import ArqRedis
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from tourcms_core import get_logger
from tourcms_core.content_types import SECTION_CASCADES
from tourcms_core.schemas import (
    ContentType,
    CoverageResponse,
    ManualTranslationRequest,
    TranslationRecordResponse,
    TranslationStatusResponse,
    TriggerTranslationData,
    TriggerTranslationRequest,
    TriggerTranslationResponse,
)
from tourcms_core.services import ContentNotFoundError, CoverageService, TranslationService

from ..dependencies import get_coverage_service, get_redis_pool, get_translation_service

logger = get_logger(__name__)

router = APIRouter()


@router.post("/trigger", response_model=TriggerTranslationResponse)
async def trigger_translation(
    data: TriggerTranslationRequest,
    translation_service: Annotated[TranslationService, Depends(get_translation_service)],
    redis: Annotated[ArqRedis | None, Depends(get_redis_pool)],
) -> TriggerTranslationResponse | JSONResponse:
    """
    Translate one entity into every target language.

    Runs the whole batch before responding. Languages that fail are logged
    and stored on their translation record; they do not fail the request.

    Args:
        data: Content type, content id and force flag.
        translation_service: Translation service.
        redis: Task queue pool, if available.

    Returns:
        Success envelope identifying the entity, or a 404 error envelope.
    """
    content_type = data.content_type.value
    try:
        await translation_service.translate_content(
            content_type, data.content_id, data.force_retranslate
        )
    except ContentNotFoundError as e:
        body = TriggerTranslationResponse(success=False, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=body.model_dump(by_alias=True, exclude_none=True),
        )

    cascade_type = SECTION_CASCADES.get(data.content_id)
    if content_type == ContentType.SECTION.value and cascade_type:
        await _enqueue_cascade(redis, cascade_type, data.force_retranslate)

    return TriggerTranslationResponse(
        success=True,
        data=TriggerTranslationData(content_type=data.content_type, content_id=data.content_id),
    )


async def _enqueue_cascade(redis: ArqRedis | None, content_type: str, force: bool) -> None:
    """Queue translation of every published item behind a listing section."""
    if redis is None:
        logger.warning(
            "Task queue unavailable, skipping cascade translation",
            extra={"content_type": content_type},
        )
        return
    try:
        await redis.enqueue_job("translate_published_content_task", content_type, force)
    except Exception:
        logger.exception(
            "Failed to queue cascade translation", extra={"content_type": content_type}
        )
        return
    logger.info("Queued cascade translation", extra={"content_type": content_type})


@router.get("/status")
async def get_translation_status(
    coverage_service: Annotated[CoverageService, Depends(get_coverage_service)],
    content_type: Annotated[ContentType, Query(alias="contentType")],
    content_id: Annotated[str, Query(alias="contentId", min_length=1)],
) -> TranslationStatusResponse:
    """
    Get per-language translation status of one entity.

    Args:
        coverage_service: Coverage service.
        content_type: Content type.
        content_id: Entity identifier.

    Returns:
        Status for the source language and every target language.

    Raises:
        HTTPException: If the entity is not found.
    """
    try:
        languages = await coverage_service.get_status(content_type.value, content_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return TranslationStatusResponse(
        content_type=content_type, content_id=content_id, data=languages
    )


@router.get("/check")
async def check_translations(
    coverage_service: Annotated[CoverageService, Depends(get_coverage_service)],
    section: str = Query("all"),
    only_missing: bool = Query(False, alias="onlyMissing"),
) -> CoverageResponse:
    """
    Report translation coverage of public content.

    Args:
        coverage_service: Coverage service.
        section: "all" or one coverage section ("packages", "blogs", ...).
        only_missing: Return only items that are not completely translated.

    Returns:
        Per-section coverage, or the list of incomplete items.

    Raises:
        HTTPException: If the section is unknown.
    """
    try:
        if only_missing:
            items = await coverage_service.find_missing(section)
            return CoverageResponse(
                data=items, message=f"Found {len(items)} items needing translation"
            )
        if section == "all":
            reports = await coverage_service.check_all()
        else:
            reports = [await coverage_service.check_section(section)]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    return CoverageResponse(data=reports, message=f"Coverage report for {section}")


@router.put("/{content_type}/{content_id}/{language}")
async def save_manual_translation(
    content_type: ContentType,
    content_id: str,
    language: str,
    data: ManualTranslationRequest,
    translation_service: Annotated[TranslationService, Depends(get_translation_service)],
) -> TranslationRecordResponse:
    """
    Save manually edited translated fields.

    Args:
        content_type: Content type.
        content_id: Entity identifier.
        language: Target language.
        data: Translated field values; fields not given keep their stored value.
        translation_service: Translation service.

    Returns:
        The stored translation record.

    Raises:
        HTTPException: 404 if the entity is not found, 400 for an invalid
            language or field.
    """
    try:
        row = await translation_service.save_manual_translation(
            content_type.value, content_id, language, data.fields
        )
    except ContentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return TranslationRecordResponse.model_validate(row)
