import copy
import re
from collections.abc import AsyncGenerator, Callable
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.redis_client import CacheManager
from app.database import get_db
from app.dependencies import get_cache_manager, get_search_service
from app.main import app
from app.search.lexicon import DEFAULT_LEXICON
from app.search.query_builder import QueryBuilder
from app.services.completion_service import CompletionClient
from app.services.criteria_extractor import CriteriaExtractor
from app.services.search_service import SearchService
from app.services.translation_service import LanguageNormalizer

# Wednesday
FIXED_TODAY = date(2026, 10, 21)

# ============================================================================
# In-memory MongoDB stand-in
# ============================================================================


def _resolve(value: Any, parts: list[str]) -> list[Any]:
    """
    Values reached by a dotted path.

    Like MongoDB, a path crossing an array fans out over its elements and a
    numeric part indexes into the array. Missing paths yield no values.
    """
    if not parts:
        return [value]
    head, rest = parts[0], parts[1:]
    if isinstance(value, dict):
        return _resolve(value[head], rest) if head in value else []
    if isinstance(value, list):
        if head.isdigit():
            index = int(head)
            return _resolve(value[index], rest) if index < len(value) else []
        return [v for item in value if isinstance(item, dict) for v in _resolve(item, parts)]
    return []


def _candidates(values: list[Any]) -> list[Any]:
    """Resolved values plus the elements of any array among them."""
    found = []
    for value in values:
        found.append(value)
        if isinstance(value, list):
            found.extend(value)
    return found


def _is_operator_doc(condition: Any) -> bool:
    return isinstance(condition, dict) and bool(condition) and next(iter(condition)).startswith("$")


def _compare(candidate: Any, op: str, operand: Any) -> bool:
    if candidate is None or type(candidate) is not type(operand):
        return False
    return {
        "$lt": candidate < operand,
        "$lte": candidate <= operand,
        "$gt": candidate > operand,
        "$gte": candidate >= operand,
    }[op]


def _check_operators(values: list[Any], condition: dict) -> bool:
    candidates = _candidates(values)
    flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
    for op, operand in condition.items():
        if op == "$eq":
            ok = operand in candidates
        elif op == "$in":
            ok = any(c in operand for c in candidates)
        elif op == "$ne":
            ok = operand not in candidates
        elif op == "$exists":
            ok = bool(values) == operand
        elif op == "$regex":
            ok = any(isinstance(c, str) and re.search(operand, c, flags) for c in candidates)
        elif op == "$options":
            ok = True
        elif op in ("$lt", "$lte", "$gt", "$gte"):
            ok = any(_compare(c, op, operand) for c in candidates)
        elif op == "$elemMatch":
            ok = any(
                _check_operators([item], operand)
                if _is_operator_doc(operand)
                else isinstance(item, dict) and _matches(item, operand)
                for value in values
                if isinstance(value, list)
                for item in value
            )
        else:
            raise NotImplementedError(op)
        if not ok:
            return False
    return True


def _matches(document: dict, query: dict) -> bool:
    """
    Evaluate a MongoDB filter against one document.

    Covers ``$and``, ``$or``, ``$eq``, ``$ne``, ``$in``, ``$exists``,
    ``$regex``/``$options``, ``$lt``/``$lte``/``$gt``/``$gte`` and
    ``$elemMatch`` with MongoDB's array semantics. Other operators raise
    ``NotImplementedError``.
    """
    for key, condition in query.items():
        if key == "$and":
            if not all(_matches(document, q) for q in condition):
                return False
            continue
        if key == "$or":
            if not any(_matches(document, q) for q in condition):
                return False
            continue

        values = _resolve(document, key.split("."))
        if _is_operator_doc(condition):
            if not _check_operators(values, condition):
                return False
        elif condition is None:
            if values and None not in _candidates(values):
                return False
        elif condition not in _candidates(values):
            return False
    return True


class InMemoryCursor:
    def __init__(self, documents: list[dict]):
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "InMemoryCursor":
        self._documents.sort(key=lambda d: (d.get(key) is None, d.get(key)), reverse=direction < 0)
        return self

    def skip(self, count: int) -> "InMemoryCursor":
        self._documents = self._documents[count:]
        return self

    def limit(self, count: int) -> "InMemoryCursor":
        self._documents = self._documents[:count]
        return self

    async def to_list(self, length: int | None = None) -> list[dict]:
        docs = self._documents if length is None else self._documents[:length]
        return [copy.deepcopy(d) for d in docs]


class InMemoryCollection:
    def __init__(self, unique_key: str | None = None):
        self.documents: list[dict] = []
        self.unique_key = unique_key
        self.queries: list[dict] = []

    async def insert_one(self, document: dict) -> MagicMock:
        if self.unique_key and any(
            d.get(self.unique_key) == document.get(self.unique_key) for d in self.documents
        ):
            raise DuplicateKeyError(f"duplicate {self.unique_key}")
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return MagicMock(inserted_id=document["_id"])

    def find(self, query: dict | None = None, projection: dict | None = None) -> InMemoryCursor:
        query = query or {}
        self.queries.append(query)
        return InMemoryCursor([d for d in self.documents if _matches(d, query)])

    async def find_one(self, query: dict, projection: dict | None = None) -> dict | None:
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def find_one_and_update(
        self,
        query: dict,
        update: dict,
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> dict | None:
        for document in self.documents:
            if _matches(document, query):
                before = copy.deepcopy(document)
                document.update(update.get("$set", {}))
                return copy.deepcopy(document if return_document == ReturnDocument.AFTER else before)
        return None

    async def update_one(self, query: dict, update: dict, upsert: bool = False) -> None:
        for document in self.documents:
            if _matches(document, query):
                document.update(update.get("$set", {}))
                return
        if upsert:
            await self.insert_one({**query, **update.get("$set", {})})

    async def update_many(self, query: dict, update: dict) -> None:
        for document in self.documents:
            if _matches(document, query):
                document.update(update.get("$set", {}))

    async def count_documents(self, query: dict) -> int:
        return sum(1 for d in self.documents if _matches(d, query))


class InMemoryDatabase:
    def __init__(self) -> None:
        self.collections = {
            "doctors": InMemoryCollection(unique_key="id"),
            "specializations": InMemoryCollection(unique_key="name"),
            "doctorspecializations": InMemoryCollection(),
        }

    def __getitem__(self, name: str) -> InMemoryCollection:
        return self.collections.setdefault(name, InMemoryCollection())


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    """Empty in-memory database."""
    return InMemoryDatabase()


@pytest.fixture
def mock_redis() -> MagicMock:
    """Redis client double that always misses."""
    redis_client = MagicMock()
    redis_client.get.return_value = None
    return redis_client


@pytest.fixture
def cache_manager(mock_redis: MagicMock) -> CacheManager:
    return CacheManager(redis_client=mock_redis)


@pytest.fixture
def query_builder() -> QueryBuilder:
    """Query builder pinned to a Wednesday."""
    return QueryBuilder(lexicon=DEFAULT_LEXICON, today=lambda: FIXED_TODAY)


def _completion_transport(
    content: str | None = None, status_code: int = 200, calls: list | None = None
) -> httpx.MockTransport:
    """Fake chat-completions endpoint replying with ``content``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": {"message": "upstream failure"}})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    return httpx.MockTransport(handler)


@pytest.fixture
def completion_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for fake chat-completions transports."""
    return _completion_transport


@pytest.fixture
def make_search_service(query_builder: QueryBuilder) -> Callable[..., SearchService]:
    """Build a search service whose completion call returns the given reply."""

    def factory(reply: str, normalizer: LanguageNormalizer | None = None) -> SearchService:
        client = CompletionClient(api_key="test-key", transport=_completion_transport(reply))
        return SearchService(
            normalizer=normalizer or LanguageNormalizer(api_key=""),
            extractor=CriteriaExtractor(client),
            query_builder=query_builder,
        )

    return factory


@pytest_asyncio.fixture
async def client(
    memory_db: InMemoryDatabase, cache_manager: CacheManager
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client backed by the in-memory database."""

    async def override_get_db() -> InMemoryDatabase:
        return memory_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: cache_manager

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def override_search_service():
    """Install a search service for the AI search endpoint."""

    def install(service: SearchService) -> None:
        app.dependency_overrides[get_search_service] = lambda: service

    return install


@pytest.fixture
def sample_doctor_data() -> dict:
    """Sample doctor payload for testing."""
    return {
        "id": "doc-1001",
        "name": "Dr. Nusrat Jahan",
        "specialty": "Dental Specialist",
        "specialtyList": ["Dental Surgeon", "Orthodontics"],
        "specialtyCategories": ["Dental Specialist"],
        "district": "Dhaka",
        "degree": "BDS, MS (Orthodontics)",
        "designation": "Associate Professor",
        "workplace": "Dhaka Dental College",
        "source_hospital": "Popular Diagnostic Centre",
        "chambers": [
            {
                "hospital_name": "Popular Diagnostic Centre, Dhanmondi",
                "address": "House 16, Road 2, Dhanmondi, Dhaka",
                "visiting_hours": [
                    {
                        "visiting_days": ["Saturday", "Monday", "Thursday"],
                        "closed_days": ["Friday"],
                        "visiting_hours": "4pm to 9pm",
                        "time_slots": [
                            {
                                "start_time_24hr": "16:00",
                                "end_time_24hr": "21:00",
                                "original_time": "4pm to 9pm",
                            }
                        ],
                    }
                ],
            }
        ],
    }
