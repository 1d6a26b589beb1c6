"""
Translation provider abstraction.

Supports DeepL (API key required) and Google Translate (free) as
configurable translation backends. Providers raise ``RateLimitedError``
when the backend throttles, and ``TranslationProviderError`` for every
other failure, so callers can retry the former only.
"""

import asyncio
from abc import ABC, abstractmethod

import httpx
from bs4 import BeautifulSoup, Comment, NavigableString

from tourcms_core import get_logger
from tourcms_core.config import TranslationConfig

logger = get_logger(__name__)

# Google Translate has a ~5000 character limit per request
_CHUNK_SIZE = 4500

# Elements whose text should not be translated
_SKIP_ANCESTORS = frozenset({"code", "pre", "script", "style"})


class TranslationProviderError(Exception):
    """The external translator failed."""


class RateLimitedError(TranslationProviderError):
    """The external translator asked us to slow down (HTTP 429)."""


def _is_html(text: str) -> bool:
    """Check whether text contains markup."""
    return "<" in text and BeautifulSoup(text, "html.parser").find() is not None


def _has_skip_ancestor(node: NavigableString) -> bool:
    """Check if a text node is nested inside code/pre/script/style."""
    return any(parent.name in _SKIP_ANCESTORS for parent in node.parents)


class TranslationProvider(ABC):
    """Base class for translation providers."""

    name: str = "base"

    @abstractmethod
    async def translate(self, text: str, source: str, target: str) -> str:
        """Translate a single text string."""

    async def translate_batch(self, texts: list[str], source: str, target: str) -> list[str]:
        """Translate a list of texts. Default: translate one by one."""
        return [await self.translate(t, source, target) for t in texts]


class DeepLProvider(TranslationProvider):
    """DeepL REST API provider."""

    name = "deepl"

    # DeepL uses different target language codes than standard
    _TARGET_LANG_MAP: dict[str, str] = {
        "en": "EN-US",
        "zh": "ZH-HANS",
        "pt": "PT-BR",
    }

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api-free.deepl.com/v2/translate",
        timeout: float = 15.0,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def _map_lang(self, lang: str, *, is_source: bool = False) -> str:
        if is_source:
            return lang.split("-")[0].upper()
        return self._TARGET_LANG_MAP.get(lang, lang.upper())

    async def translate(self, text: str, source: str, target: str) -> str:
        if not text or not text.strip():
            return text

        data = {
            "text": text,
            "source_lang": self._map_lang(source, is_source=True),
            "target_lang": self._map_lang(target),
        }
        if _is_html(text):
            data["tag_handling"] = "html"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    data=data,
                    headers={"Authorization": f"DeepL-Auth-Key {self.api_key}"},
                )
        except httpx.HTTPError as e:
            raise TranslationProviderError(f"DeepL request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitedError("DeepL rate limit exceeded (429)")
        if response.status_code == 456:
            raise TranslationProviderError("DeepL quota exceeded (456)")
        if response.is_error:
            raise TranslationProviderError(
                f"DeepL API error: {response.status_code} {response.text[:200]}"
            )

        try:
            text_out = response.json()["translations"][0]["text"]
        except (ValueError, KeyError, IndexError, AttributeError, TypeError) as e:
            raise TranslationProviderError(f"DeepL returned an unreadable response: {e}") from e
        if not isinstance(text_out, str):
            raise TranslationProviderError("DeepL response does not contain translated text")
        return text_out


class GoogleFreeProvider(TranslationProvider):
    """Free Google Translate via deep-translator."""

    name = "google"

    _LANG_MAP: dict[str, str] = {
        "zh": "zh-CN",
    }

    def _map_lang(self, lang: str) -> str:
        return self._LANG_MAP.get(lang, lang)

    def _translate_sync(self, text: str, source: str, target: str) -> str:
        from deep_translator import GoogleTranslator
        from deep_translator.exceptions import TooManyRequests

        try:
            translator = GoogleTranslator(source=self._map_lang(source), target=self._map_lang(target))
            result: str | None = translator.translate(text[:_CHUNK_SIZE])
        except TooManyRequests as e:
            raise RateLimitedError(f"Google Translate rate limit exceeded: {e}") from e
        except Exception as e:
            raise TranslationProviderError(f"Google Translate failed: {e}") from e
        if result is None:
            raise TranslationProviderError("Google Translate returned no text")
        return result

    async def _translate_html(self, html: str, source: str, target: str) -> str:
        """Translate each visible text node, keeping the markup intact."""
        soup = BeautifulSoup(html, "html.parser")
        nodes = [
            node
            for node in soup.find_all(string=True)
            if not isinstance(node, Comment) and node.strip() and not _has_skip_ancestor(node)
        ]
        for node in nodes:
            original = str(node)
            stripped = original.strip()
            translated = await asyncio.to_thread(self._translate_sync, stripped, source, target)
            leading = original[: len(original) - len(original.lstrip())]
            trailing = original[len(original.rstrip()) :]
            node.replace_with(f"{leading}{translated}{trailing}")
        return str(soup)

    async def translate(self, text: str, source: str, target: str) -> str:
        if not text or not text.strip():
            return text
        if _is_html(text):
            return await self._translate_html(text, source, target)
        return await asyncio.to_thread(self._translate_sync, text, source, target)


def create_translation_provider(config: TranslationConfig) -> TranslationProvider:
    """
    Create a translation provider from configuration.

    Uses DeepL when selected and an API key is configured; falls back to
    GoogleFreeProvider otherwise.
    """
    if config.provider == "deepl" and config.deepl_api_key:
        logger.info("Using DeepL translation provider", extra={"api_url": config.deepl_api_url})
        return DeepLProvider(
            config.deepl_api_key,
            api_url=config.deepl_api_url,
            timeout=config.request_timeout_seconds,
        )

    if config.provider == "deepl":
        logger.warning("DeepL API key not configured; falling back to Google Translate")
    return GoogleFreeProvider()
