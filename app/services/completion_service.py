"""Chat-completion client for the OpenRouter API."""

import httpx
import structlog

from app.config import settings
from app.core.exceptions import ExtractionError

logger = structlog.get_logger(__name__)


class CompletionClient:
    """Send a system instruction and a single user message, return the reply text."""

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.openrouter_api_key if api_key is None else api_key
        self.api_url = api_url or settings.openrouter_api_url
        self.model = model or settings.openrouter_model
        self.timeout = timeout or settings.external_call_timeout
        self._transport = transport

    async def complete(self, system_instruction: str, user_message: str) -> str:
        """
        Run one chat completion.

        Args:
            system_instruction: System turn content
            user_message: Sole user turn content

        Returns:
            Text content of the first choice

        Raises:
            ExtractionError: On timeout, network failure, non-2xx status or a
                reply without message content
        """
        if not self.api_key:
            raise ExtractionError("Search is unavailable: completion API key is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_message},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
            except httpx.TimeoutException as e:
                logger.warning("completion_timeout", timeout=self.timeout)
                raise ExtractionError("Search is unavailable: completion service timed out") from e
            except httpx.HTTPStatusError as e:
                logger.error(
                    "completion_http_error",
                    status_code=e.response.status_code,
                    body=e.response.text[:500],
                )
                raise ExtractionError(
                    f"Search is unavailable: completion service returned {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                logger.error("completion_request_failed", error=str(e))
                raise ExtractionError("Search is unavailable: completion service unreachable") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExtractionError("Search is unavailable: malformed completion response") from e

        if not isinstance(content, str) or not content.strip():
            raise ExtractionError("Search is unavailable: empty completion response")

        return content
