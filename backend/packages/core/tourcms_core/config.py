"""
Translation configuration.

This module provides configuration settings for the translation pipeline
loaded from environment variables.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent.parent.parent.parent / ".env"


class TranslationConfig(BaseSettings):
    """
    Translation configuration from environment variables.

    All settings are prefixed with TRANSLATION_ in environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATION_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider selection: "deepl" needs an API key, otherwise Google free is used
    provider: str = "deepl"
    deepl_api_key: str = ""
    deepl_api_url: str = "https://api-free.deepl.com/v2/translate"

    # Languages
    source_language: str = "id"
    target_languages: list[str] = Field(default_factory=lambda: ["en", "de", "nl", "zh"])

    # Pacing (seconds)
    inter_language_delay_seconds: float = Field(5.0, ge=0)
    rate_limit_backoff_seconds: float = Field(10.0, ge=0)
    request_delay_seconds: float = Field(1.0, ge=0)
    request_timeout_seconds: float = Field(15.0, gt=0)

    @property
    def supported_languages(self) -> list[str]:
        """Source language followed by the target languages."""
        return [self.source_language] + [
            lang for lang in self.target_languages if lang != self.source_language
        ]


# Global instance
translation_config = TranslationConfig()
