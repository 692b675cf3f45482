"""Specialization service for business logic."""

import re
from datetime import UTC, datetime

import structlog
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictException, NotFoundException
from app.core.redis_client import CacheManager
from app.core.serialization import serialize_document
from app.models import DOCTOR_SPECIALIZATIONS, DOCTORS, SPECIALIZATIONS
from app.schemas.specializations import SpecializationAssign, SpecializationCreate

logger = structlog.get_logger(__name__)


class SpecializationService:
    """Service for specializations and their links to doctors."""

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    async def create_specialization(
        self, db: AsyncIOMotorDatabase, data: SpecializationCreate
    ) -> dict:
        """Create a specialization with a unique name."""
        document = {**data.model_dump(), "createdAt": datetime.now(UTC)}

        try:
            await db[SPECIALIZATIONS].insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictException(f"Specialization '{data.name}' already exists") from e

        logger.info("specialization_created", name=data.name)
        return serialize_document(document)

    async def get_specializations(
        self, db: AsyncIOMotorDatabase, search_term: str | None = None
    ) -> list[dict]:
        """List specializations by name, optionally filtered by a substring."""
        query: dict = {}
        if search_term:
            query["name"] = {"$regex": re.escape(search_term), "$options": "i"}

        cursor = db[SPECIALIZATIONS].find(query).sort("name", ASCENDING)
        return [serialize_document(s) for s in await cursor.to_list(length=None)]

    async def assign_to_doctor(self, db: AsyncIOMotorDatabase, data: SpecializationAssign) -> dict:
        """
        Link a doctor to a specialization.

        A doctor has at most one primary specialization: assigning a new
        primary demotes the previous one.

        Raises:
            NotFoundException: If the doctor or the specialization does not exist
        """
        doctor = await db[DOCTORS].find_one({"id": data.doctor_id, "isDeleted": False}, {"_id": 1})
        if not doctor:
            raise NotFoundException("Doctor not found")

        if not ObjectId.is_valid(data.specialization_id):
            raise NotFoundException("Specialization not found")
        specialization_id = ObjectId(data.specialization_id)
        if not await db[SPECIALIZATIONS].find_one({"_id": specialization_id}, {"_id": 1}):
            raise NotFoundException("Specialization not found")

        relations = db[DOCTOR_SPECIALIZATIONS]
        if data.is_primary:
            await relations.update_many(
                {"doctor": doctor["_id"], "isPrimary": True},
                {"$set": {"isPrimary": False}},
            )

        await relations.update_one(
            {"doctor": doctor["_id"], "specialization": specialization_id},
            {"$set": {"isPrimary": data.is_primary}},
            upsert=True,
        )
        relation = await relations.find_one(
            {"doctor": doctor["_id"], "specialization": specialization_id}
        )

        if self.cache:
            self.cache.delete(f"doctor:{data.doctor_id}")

        logger.info(
            "specialization_assigned",
            doctor_id=data.doctor_id,
            specialization_id=data.specialization_id,
            is_primary=data.is_primary,
        )
        return serialize_document(relation)
