"""
Content router.

Serves public content in the requested language, falling back to the
original text for anything not translated yet.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tourcms_core.schemas import ContentListResponse, ContentResponse, ContentType
from tourcms_core.services import ContentNotFoundError, ContentService

from ..dependencies import get_content_service

router = APIRouter()


def _resolve_language(content_service: ContentService, language: str | None) -> str:
    """Default to the source language; reject unsupported codes with 400."""
    if language is None:
        return content_service.config.source_language
    try:
        content_service.check_language(language)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return language


@router.get("/{content_type}")
async def list_content(
    content_type: ContentType,
    content_service: Annotated[ContentService, Depends(get_content_service)],
    language: str | None = None,
) -> ContentListResponse:
    """
    Get every public item of a content type.

    Args:
        content_type: Content type.
        content_service: Content service.
        language: Language code.

    Returns:
        Localized items.
    """
    language = _resolve_language(content_service, language)
    items = await content_service.list_localized(content_type.value, language)
    return ContentListResponse(
        data=[item.data for item in items], language=language, total=len(items)
    )


@router.get("/{content_type}/{content_id}")
async def get_content(
    content_type: ContentType,
    content_id: str,
    content_service: Annotated[ContentService, Depends(get_content_service)],
    language: str | None = None,
) -> ContentResponse:
    """
    Get one public item.

    Args:
        content_type: Content type.
        content_id: Item identifier (section id for sections).
        content_service: Content service.
        language: Language code.

    Returns:
        Localized item and whether translated text was used.

    Raises:
        HTTPException: If the language is unsupported or the item is not found.
    """
    language = _resolve_language(content_service, language)
    try:
        item = await content_service.get_localized(content_type.value, content_id, language)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return ContentResponse(data=item.data, source=item.source, language=item.language)
