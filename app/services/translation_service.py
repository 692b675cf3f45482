"""Best-effort translation of search prompts into the processing language."""

import warnings

import httpx
import structlog

from app.config import settings
from app.core.exceptions import TranslationWarning

logger = structlog.get_logger(__name__)


class LanguageNormalizer:
    """
    Detect the prompt language and translate it when needed.

    Uses the Google Cloud Translation v2 REST API. Any failure leaves the
    prompt untouched; normalization never blocks a search.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        target_language: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.translation_api_key if api_key is None else api_key
        self.api_url = (api_url or settings.translation_api_url).rstrip("/")
        self.target_language = target_language or settings.target_language
        self.timeout = timeout or settings.external_call_timeout
        self._transport = transport

    async def normalize(self, text: str) -> str:
        """Return the text in the target language, or unchanged on any failure."""
        if not text.strip():
            return text
        if not self.api_key:
            logger.debug("translation_skipped", reason="no_api_key")
            return text

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                language = await self._detect(client, text)
                if self._is_target(language):
                    logger.debug("translation_skipped", reason="target_language", language=language)
                    return text
                translated = await self._translate(client, text, language)
        except Exception as e:
            warnings.warn(f"Translation failed: {e}", TranslationWarning, stacklevel=2)
            logger.warning("translation_failed", error=str(e), error_type=type(e).__name__)
            return text

        logger.info("prompt_translated", source_language=language, target=self.target_language)
        return translated

    def _is_target(self, language: str) -> bool:
        # "en-US" and "en" both count as English
        return language.split("-")[0].lower() == self.target_language.split("-")[0].lower()

    async def _detect(self, client: httpx.AsyncClient, text: str) -> str:
        response = await client.post(
            f"{self.api_url}/detect",
            params={"key": self.api_key},
            json={"q": text},
        )
        response.raise_for_status()
        detections = response.json()["data"]["detections"][0]
        best = max(detections, key=lambda d: d.get("confidence", 0))
        return str(best["language"])

    async def _translate(self, client: httpx.AsyncClient, text: str, source: str) -> str:
        response = await client.post(
            self.api_url,
            params={"key": self.api_key},
            json={"q": text, "source": source, "target": self.target_language, "format": "text"},
        )
        response.raise_for_status()
        translated = response.json()["data"]["translations"][0]["translatedText"]
        if not isinstance(translated, str) or not translated.strip():
            raise ValueError("empty translation")
        return translated
