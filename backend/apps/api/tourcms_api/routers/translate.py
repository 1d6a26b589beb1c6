"""
Translate router.

Ad-hoc text translation for editors.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from tourcms_core import get_logger
from tourcms_core.config import TranslationConfig
from tourcms_core.schemas import TranslateTextData, TranslateTextRequest, TranslateTextResponse
from tourcms_core.services import TranslationFailedError, TranslationProvider, translate_with_retry

from ..dependencies import get_translation_config, get_translation_provider

logger = get_logger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    body = TranslateTextResponse(success=False, error=message)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True)
    )


@router.post("", response_model=TranslateTextResponse)
async def translate_text(
    data: TranslateTextRequest,
    provider: Annotated[TranslationProvider, Depends(get_translation_provider)],
    config: Annotated[TranslationConfig, Depends(get_translation_config)],
) -> TranslateTextResponse | JSONResponse:
    """
    Translate a piece of text.

    Args:
        data: Text with source ("from") and target ("to") language codes.
        provider: Translation provider.
        config: Translation configuration.

    Returns:
        Original and translated text; 400 for invalid input, 502 if the
        translator fails.
    """
    if not data.text.strip():
        return _error(status.HTTP_400_BAD_REQUEST, "Text is required")
    for language in (data.source, data.target):
        if language not in config.supported_languages:
            return _error(status.HTTP_400_BAD_REQUEST, f"Unsupported language: {language}")

    if data.source == data.target:
        translated = data.text
    else:
        try:
            translated = await translate_with_retry(
                provider,
                data.text,
                data.source,
                data.target,
                backoff_seconds=config.rate_limit_backoff_seconds,
            )
        except TranslationFailedError as e:
            logger.exception(
                "Ad-hoc translation failed",
                extra={"source_language": data.source, "target_language": data.target},
            )
            return _error(status.HTTP_502_BAD_GATEWAY, f"Translation failed: {e}")

    return TranslateTextResponse(
        success=True,
        data=TranslateTextData(
            original_text=data.text,
            translated_text=translated,
            source=data.source,
            target=data.target,
        ),
    )
