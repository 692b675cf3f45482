"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.redis_client import CacheManager, get_redis_client
from app.database import get_db
from app.search.lexicon import DEFAULT_LEXICON, SpecialtyLexicon
from app.search.query_builder import QueryBuilder
from app.services.completion_service import CompletionClient
from app.services.criteria_extractor import CriteriaExtractor
from app.services.doctor_service import DoctorService
from app.services.search_service import SearchService
from app.services.specialization_service import SpecializationService
from app.services.translation_service import LanguageNormalizer


def get_cache_manager() -> CacheManager:
    """Get cache manager backed by the shared Redis client."""
    return CacheManager(redis_client=get_redis_client())


def get_lexicon() -> SpecialtyLexicon:
    """Get the specialty lexicon built at startup."""
    return DEFAULT_LEXICON


def get_doctor_service(
    cache_manager: Annotated[CacheManager, Depends(get_cache_manager)],
) -> DoctorService:
    """Get doctor service instance."""
    return DoctorService(cache_manager=cache_manager)


def get_specialization_service(
    cache_manager: Annotated[CacheManager, Depends(get_cache_manager)],
) -> SpecializationService:
    """Get specialization service instance."""
    return SpecializationService(cache_manager=cache_manager)


def get_search_service(
    lexicon: Annotated[SpecialtyLexicon, Depends(get_lexicon)],
) -> SearchService:
    """Get AI search service instance."""
    return SearchService(
        normalizer=LanguageNormalizer(),
        extractor=CriteriaExtractor(CompletionClient()),
        query_builder=QueryBuilder(lexicon=lexicon),
    )


# Type aliases for dependency injection
Database = Annotated[AsyncIOMotorDatabase, Depends(get_db)]
DoctorServiceDep = Annotated[DoctorService, Depends(get_doctor_service)]
SpecializationServiceDep = Annotated[SpecializationService, Depends(get_specialization_service)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
