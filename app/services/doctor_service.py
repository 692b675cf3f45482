"""Doctor service for business logic."""

import asyncio
import math
from datetime import UTC, datetime
from typing import Any

import structlog
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictException
from app.core.redis_client import CacheManager
from app.core.serialization import serialize_document
from app.models import DOCTOR_SPECIALIZATIONS, DOCTORS, SPECIALIZATIONS
from app.schemas.doctors import DoctorCreate, DoctorListParams, DoctorUpdate
from app.search.filters import (
    And,
    Compare,
    ElemMatch,
    Equals,
    In,
    Or,
    Predicate,
    Regex,
)
from app.search.query_builder import TIME_SLOTS, VISITING_HOURS

logger = structlog.get_logger(__name__)

# Fields scanned by the free-text search term
SEARCH_TERM_FIELDS = (
    "name",
    "specialty",
    "degree",
    "designation",
    "chambers.hospital_name",
    "chambers.address",
    f"{VISITING_HOURS}.visiting_days",
    f"{VISITING_HOURS}.visiting_hours",
    f"{TIME_SLOTS}.original_time",
)
SEARCH_TERM_ARRAY_FIELDS = ("specialtyList", "specialtyCategories")


class DoctorService:
    """Service for doctor operations."""

    # Cache TTL in seconds
    DOCTOR_CACHE_TTL = 900  # 15 minutes for individual doctors

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def _get_doctor_cache_key(doctor_id: str) -> str:
        """Generate cache key for doctor."""
        return f"doctor:{doctor_id}"

    def _invalidate(self, doctor_id: str) -> None:
        if self.cache:
            self.cache.delete(self._get_doctor_cache_key(doctor_id))

    async def create_doctor(self, db: AsyncIOMotorDatabase, doctor_data: DoctorCreate) -> dict:
        """Create a new doctor profile."""
        now = datetime.now(UTC)
        document = doctor_data.model_dump(by_alias=True)
        document.update(isDeleted=False, deletedAt=None, createdAt=now, updatedAt=now)

        try:
            await db[DOCTORS].insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictException(f"Doctor with id '{doctor_data.id}' already exists") from e

        logger.info("doctor_created", doctor_id=doctor_data.id)
        return serialize_document(document)

    async def update_doctor(
        self, db: AsyncIOMotorDatabase, doctor_id: str, doctor_data: DoctorUpdate
    ) -> dict | None:
        """Merge the provided fields into a doctor. Returns None if the doctor does not exist."""
        update_values = doctor_data.model_dump(by_alias=True, exclude_unset=True)

        if not update_values:
            existing = await db[DOCTORS].find_one({"id": doctor_id})
            return serialize_document(existing) if existing else None

        update_values["updatedAt"] = datetime.now(UTC)
        updated = await db[DOCTORS].find_one_and_update(
            {"id": doctor_id},
            {"$set": update_values},
            return_document=ReturnDocument.AFTER,
        )

        if updated:
            self._invalidate(doctor_id)
            logger.info("doctor_updated", doctor_id=doctor_id, fields=sorted(update_values))

        return serialize_document(updated) if updated else None

    async def delete_doctor(self, db: AsyncIOMotorDatabase, doctor_id: str) -> dict | None:
        """Soft-delete a doctor. Returns None if absent or already deleted."""
        deleted = await db[DOCTORS].find_one_and_update(
            {"id": doctor_id, "isDeleted": False},
            {"$set": {"isDeleted": True, "deletedAt": datetime.now(UTC)}},
            return_document=ReturnDocument.AFTER,
        )

        if deleted:
            self._invalidate(doctor_id)
            logger.info("doctor_deleted", doctor_id=doctor_id)

        return serialize_document(deleted) if deleted else None

    async def restore_doctor(self, db: AsyncIOMotorDatabase, doctor_id: str) -> dict | None:
        """Restore a soft-deleted doctor. Returns None if absent or not deleted."""
        restored = await db[DOCTORS].find_one_and_update(
            {"id": doctor_id, "isDeleted": True},
            {"$set": {"isDeleted": False, "deletedAt": None}},
            return_document=ReturnDocument.AFTER,
        )

        if restored:
            self._invalidate(doctor_id)
            logger.info("doctor_restored", doctor_id=doctor_id)

        return serialize_document(restored) if restored else None

    async def get_deleted_doctors(self, db: AsyncIOMotorDatabase) -> list[dict]:
        """List soft-deleted doctors."""
        cursor = db[DOCTORS].find({"isDeleted": True})
        return [serialize_document(d) for d in await cursor.to_list(length=None)]

    async def build_list_filter(
        self, db: AsyncIOMotorDatabase, params: DoctorListParams
    ) -> Predicate:
        """Build the filter for a doctor list request."""
        clauses: list[Predicate] = [Equals("isDeleted", False)]

        if params.district:
            clauses.append(Equals("district", params.district))

        # Specialty is a specialization id, resolved through the relation collection
        if params.specialty and ObjectId.is_valid(params.specialty):
            relations = await (
                db[DOCTOR_SPECIALIZATIONS]
                .find({"specialization": ObjectId(params.specialty)}, {"doctor": 1})
                .to_list(length=None)
            )
            clauses.append(In("_id", tuple(r["doctor"] for r in relations)))

        if params.search_term:
            term = params.search_term
            term_clauses: list[Predicate] = [Regex(field, term) for field in SEARCH_TERM_FIELDS]
            term_clauses.extend(
                ElemMatch(field, (Regex("", term),)) for field in SEARCH_TERM_ARRAY_FIELDS
            )
            clauses.append(Or(tuple(term_clauses)))

        if params.hospital_name:
            clauses.append(Regex("chambers.hospital_name", params.hospital_name))

        if params.address:
            clauses.append(Regex("chambers.address", params.address))

        if params.visiting_day:
            clauses.append(Equals(f"{VISITING_HOURS}.visiting_days", params.visiting_day))

        if params.visiting_hours:
            clauses.append(Regex(f"{VISITING_HOURS}.visiting_hours", params.visiting_hours))

        if params.time_slot:
            clauses.append(
                ElemMatch(
                    TIME_SLOTS,
                    (
                        Compare("start_time_24hr", "lte", params.time_slot),
                        Compare("end_time_24hr", "gte", params.time_slot),
                    ),
                )
            )

        return And(tuple(clauses))

    async def get_doctors(self, db: AsyncIOMotorDatabase, params: DoctorListParams) -> dict:
        """Get one page of doctors with filtering and sorting, plus the total count."""
        query = (await self.build_list_filter(db, params)).to_mongo()
        skip = (params.page - 1) * params.limit
        direction = ASCENDING if params.sort_order == "asc" else DESCENDING

        cursor = db[DOCTORS].find(query).sort(params.sort_by, direction).skip(skip).limit(params.limit)
        doctors, total = await asyncio.gather(
            cursor.to_list(length=params.limit),
            db[DOCTORS].count_documents(query),
        )

        return {
            "data": [serialize_document(d) for d in doctors],
            "meta": {
                "page": params.page,
                "limit": params.limit,
                "total": total,
                "totalPages": math.ceil(total / params.limit),
            },
        }

    async def get_single_doctor(self, db: AsyncIOMotorDatabase, doctor_id: str) -> dict | None:
        """
        Get a non-deleted doctor with its specializations.

        Adds ``primarySpecialization`` (the relation marked primary) and
        ``secondarySpecializations`` (all other relations).
        """
        if self.cache:
            cached = self.cache.get_json(self._get_doctor_cache_key(doctor_id))
            if cached:
                return cached

        doctor = await db[DOCTORS].find_one({"id": doctor_id, "isDeleted": False})
        if not doctor:
            return None

        relations = await db[DOCTOR_SPECIALIZATIONS].find({"doctor": doctor["_id"]}).to_list(
            length=None
        )
        details: list[dict[str, Any]] = []
        if relations:
            details = await db[SPECIALIZATIONS].find(
                {"_id": {"$in": [r["specialization"] for r in relations]}}
            ).to_list(length=None)

        primary_ids = {r["specialization"] for r in relations if r.get("isPrimary")}
        secondary_ids = {r["specialization"] for r in relations if not r.get("isPrimary")}

        doctor["primarySpecialization"] = next(
            (spec for spec in details if spec["_id"] in primary_ids), None
        )
        doctor["secondarySpecializations"] = [
            spec for spec in details if spec["_id"] in secondary_ids
        ]

        doctor_dict = serialize_document(doctor)

        if self.cache:
            self.cache.set_json(
                self._get_doctor_cache_key(doctor_id), doctor_dict, ttl=self.DOCTOR_CACHE_TTL
            )

        return doctor_dict
