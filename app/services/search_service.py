"""Natural-language doctor search."""

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.exceptions import SearchFailedException
from app.core.serialization import serialize_document
from app.models import DOCTORS
from app.schemas.search import AISearchMeta, AISearchResult
from app.search.query_builder import QueryBuilder
from app.services.criteria_extractor import CriteriaExtractor
from app.services.translation_service import LanguageNormalizer

logger = structlog.get_logger(__name__)


class SearchService:
    """
    Run an AI search: normalize, extract, build, look up, wrap.

    Each call is independent. Results are neither cached nor paginated.
    """

    def __init__(
        self,
        normalizer: LanguageNormalizer,
        extractor: CriteriaExtractor,
        query_builder: QueryBuilder,
    ):
        self.normalizer = normalizer
        self.extractor = extractor
        self.query_builder = query_builder

    async def search(
        self,
        db: AsyncIOMotorDatabase,
        prompt: str,
        fallback_location: str | None = None,
    ) -> AISearchResult:
        """
        Find every doctor matching a free-text prompt.

        Args:
            db: Database handle
            prompt: User utterance in any language
            fallback_location: District to use when the prompt names none

        Returns:
            Matching doctors, their count and the criteria used

        Raises:
            ExtractionError: If the prompt could not be turned into criteria
            SearchFailedException: If the database lookup failed
        """
        logger.info("ai_search_started", prompt_length=len(prompt))

        normalized = await self.normalizer.normalize(prompt)
        criteria = await self.extractor.extract(normalized, fallback_location)
        query = self.query_builder.build_filter(criteria)

        try:
            doctors = await db[DOCTORS].find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error("ai_search_lookup_failed", error=str(e))
            raise SearchFailedException() from e

        logger.info("ai_search_completed", count=len(doctors))
        return AISearchResult(
            data=[serialize_document(d) for d in doctors],
            meta=AISearchMeta(count=len(doctors)),
            searchCriteria=criteria,
        )
