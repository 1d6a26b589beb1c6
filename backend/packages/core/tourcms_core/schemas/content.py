"""
Content schemas.

Response models for localized (translated-or-original) content.
"""

from typing import Any, Literal

from pydantic import BaseModel

ContentSource = Literal["database-translation", "original-data"]


class LocalizedContent(BaseModel):
    """One merged record and where its text came from."""

    data: dict[str, Any]
    source: ContentSource
    language: str


class ContentResponse(BaseModel):
    """Single localized item envelope."""

    success: bool = True
    data: dict[str, Any]
    source: ContentSource
    language: str


class ContentListResponse(BaseModel):
    """Localized list envelope."""

    success: bool = True
    data: list[dict[str, Any]]
    language: str
    total: int
