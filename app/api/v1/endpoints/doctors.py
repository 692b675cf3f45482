"""Doctor management and search endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.core.exceptions import NotFoundException
from app.dependencies import Database, DoctorServiceDep, SearchServiceDep, get_lexicon
from app.schemas.common import ApiResponse
from app.schemas.doctors import DoctorCreate, DoctorListParams, DoctorUpdate
from app.schemas.search import AISearchRequest, AISearchResponse
from app.search.lexicon import SpecialtyLexicon

router = APIRouter()


# ============================================================================
# AI Search Endpoints
# ============================================================================


@router.post("/ai-search", response_model=AISearchResponse)
async def ai_search_doctors(
    search_request: AISearchRequest,
    db: Database,
    search_service: SearchServiceDep,
):
    """
    Search doctors with a free-text prompt.

    The prompt may be in any language. It is translated when needed, turned
    into structured criteria by the completion service and matched against
    the doctor directory. All matches are returned, unpaginated.

    - **prompt**: What the user is looking for, e.g. "a dentist in Dhaka tomorrow morning"
    - **fallbackLocation**: District to use when the prompt does not name one
    """
    result = await search_service.search(
        db, search_request.prompt, search_request.fallback_location
    )
    return AISearchResponse(
        message="Doctors retrieved successfully",
        data=result.data,
        meta=result.meta.model_dump(),
        search_criteria=result.search_criteria,
    )


@router.get("/ai-search/specialties", response_model=ApiResponse)
async def list_search_specialties(
    lexicon: Annotated[SpecialtyLexicon, Depends(get_lexicon)],
):
    """List the canonical specialty labels AI search can map conditions to."""
    return ApiResponse(message="Specialties retrieved successfully", data=lexicon.labels())


# ============================================================================
# Doctor CRUD Endpoints
# ============================================================================


@router.post("/", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(doctor_data: DoctorCreate, db: Database, doctor_service: DoctorServiceDep):
    """Create a new doctor profile."""
    doctor = await doctor_service.create_doctor(db, doctor_data)
    return ApiResponse(message="Doctor created successfully", data=doctor)


@router.get("/", response_model=ApiResponse)
async def list_doctors(
    params: Annotated[DoctorListParams, Query()],
    db: Database,
    doctor_service: DoctorServiceDep,
):
    """
    List doctors with filtering, sorting and pagination.

    - **searchTerm**: Matches name, specialty, degree, designation, chambers and schedule text
    - **district**: Exact district
    - **specialty**: Specialization id
    - **hospital_name / address / visiting_hours**: Case-insensitive partial match
    - **visiting_day**: Exact weekday name
    - **time_slot**: "HH:MM" that must fall inside a time slot
    - **page / limit**: Pagination (limit max 100)
    - **sortBy / sortOrder**: Sort field and direction (default createdAt desc)
    """
    result = await doctor_service.get_doctors(db, params)
    return ApiResponse(
        message="Doctors retrieved successfully", data=result["data"], meta=result["meta"]
    )


@router.get("/deleted", response_model=ApiResponse)
async def list_deleted_doctors(db: Database, doctor_service: DoctorServiceDep):
    """List soft-deleted doctors."""
    doctors = await doctor_service.get_deleted_doctors(db)
    return ApiResponse(message="Deleted doctors retrieved successfully", data=doctors)


@router.get("/{doctor_id}", response_model=ApiResponse)
async def get_doctor(doctor_id: str, db: Database, doctor_service: DoctorServiceDep):
    """
    Get doctor details by ID.

    Includes the primary specialization and all secondary specializations.
    """
    doctor = await doctor_service.get_single_doctor(db, doctor_id)

    if not doctor:
        raise NotFoundException("Doctor not found")

    return ApiResponse(message="Doctor retrieved successfully", data=doctor)


@router.patch("/{doctor_id}", response_model=ApiResponse)
async def update_doctor(
    doctor_id: str,
    doctor_data: DoctorUpdate,
    db: Database,
    doctor_service: DoctorServiceDep,
):
    """
    Update doctor information.

    All fields are optional. Only provided fields will be updated.
    """
    doctor = await doctor_service.update_doctor(db, doctor_id, doctor_data)

    if not doctor:
        raise NotFoundException("Doctor not found")

    return ApiResponse(message="Doctor updated successfully", data=doctor)


@router.delete("/{doctor_id}", response_model=ApiResponse)
async def delete_doctor(doctor_id: str, db: Database, doctor_service: DoctorServiceDep):
    """Soft-delete a doctor."""
    doctor = await doctor_service.delete_doctor(db, doctor_id)

    if not doctor:
        raise NotFoundException("Doctor not found or already deleted")

    return ApiResponse(message="Doctor deleted successfully", data=doctor)


@router.patch("/{doctor_id}/restore", response_model=ApiResponse)
async def restore_doctor(doctor_id: str, db: Database, doctor_service: DoctorServiceDep):
    """Restore a soft-deleted doctor."""
    doctor = await doctor_service.restore_doctor(db, doctor_id)

    if not doctor:
        raise NotFoundException("Doctor not found or not deleted")

    return ApiResponse(message="Doctor restored successfully", data=doctor)
