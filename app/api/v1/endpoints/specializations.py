"""Specialization endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import Database, SpecializationServiceDep
from app.schemas.common import ApiResponse
from app.schemas.specializations import SpecializationAssign, SpecializationCreate

router = APIRouter()


@router.post("/", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_specialization(
    specialization_data: SpecializationCreate,
    db: Database,
    specialization_service: SpecializationServiceDep,
):
    """Create a specialization. Names are unique."""
    specialization = await specialization_service.create_specialization(db, specialization_data)
    return ApiResponse(message="Specialization created successfully", data=specialization)


@router.get("/", response_model=ApiResponse)
async def list_specializations(
    db: Database,
    specialization_service: SpecializationServiceDep,
    search_term: str | None = Query(None, alias="searchTerm", description="Partial name match"),
):
    """List specializations sorted by name."""
    specializations = await specialization_service.get_specializations(db, search_term)
    return ApiResponse(message="Specializations retrieved successfully", data=specializations)


@router.post("/assign", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def assign_specialization(
    assignment: SpecializationAssign,
    db: Database,
    specialization_service: SpecializationServiceDep,
):
    """
    Link a doctor to a specialization.

    - **doctorId**: Doctor business id
    - **specializationId**: Specialization id
    - **isPrimary**: Mark as the doctor's primary specialization (replaces any previous one)
    """
    relation = await specialization_service.assign_to_doctor(db, assignment)
    return ApiResponse(message="Specialization assigned successfully", data=relation)
