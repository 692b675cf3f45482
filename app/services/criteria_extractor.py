"""Turn a free-text prompt into structured search criteria."""

import json
import re
from typing import Any

import structlog
from pydantic import ValidationError

from app.core.exceptions import ExtractionError
from app.schemas.search import SearchCriteria
from app.services.completion_service import CompletionClient

logger = structlog.get_logger(__name__)

# Field names here must match the aliases on SearchCriteria.
SYSTEM_INSTRUCTION = """You are a medical assistant AI. Extract key medical search criteria from user queries and respond ONLY with valid JSON.
Include date-related information when users mention "today", "tomorrow" or specific days.

Return a single JSON object with the following fields:
- condition (string or null)
- district (string or null)
- specialty (string or null)
- timePreferences (array of: "morning", "afternoon", "evening", "weekday", "weekend")
- dateRequirement (one of: null, "today", "tomorrow", "specific_date")
- specificDate (string in YYYY-MM-DD format, required when dateRequirement is "specific_date")
- urgency (true/false)
- hospitalPreference (string or null)
- relatedConditions (array of strings)"""

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole reply."""
    text = text.strip()
    match = CODE_FENCE_RE.match(text)
    return match.group(1) if match else text


def parse_criteria(reply: str, fallback_location: str | None = None) -> SearchCriteria:
    """
    Parse a completion reply into search criteria.

    Args:
        reply: Raw reply text, expected to be a JSON object
        fallback_location: District to use when the reply has none

    Returns:
        Validated search criteria

    Raises:
        ExtractionError: If the reply is not a JSON object or violates the schema
    """
    try:
        payload: Any = json.loads(strip_code_fence(reply))
    except json.JSONDecodeError as e:
        logger.warning("criteria_reply_not_json", reply=reply[:500])
        raise ExtractionError("Search is unavailable: could not understand the search prompt") from e

    if not isinstance(payload, dict):
        raise ExtractionError("Search is unavailable: could not understand the search prompt")

    district = payload.get("district")
    if isinstance(district, str):
        district = district.strip()
    if not district and fallback_location:
        payload["district"] = fallback_location

    try:
        return SearchCriteria.model_validate(payload)
    except ValidationError as e:
        logger.warning("criteria_reply_invalid", errors=e.errors(include_url=False))
        raise ExtractionError("Search is unavailable: invalid search criteria") from e


class CriteriaExtractor:
    """Extract search criteria with one call to the completion service."""

    def __init__(self, completion_client: CompletionClient):
        self.completion_client = completion_client

    async def extract(self, prompt: str, fallback_location: str | None = None) -> SearchCriteria:
        """Return search criteria for a prompt. Raises ExtractionError on any failure."""
        reply = await self.completion_client.complete(SYSTEM_INSTRUCTION, prompt)
        criteria = parse_criteria(reply, fallback_location)
        logger.info(
            "criteria_extracted",
            criteria=criteria.model_dump(mode="json", by_alias=True, exclude_defaults=True),
        )
        return criteria
