"""Doctor schemas for request/response validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TIME_24HR_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

# ============================================================================
# Schedule Schemas
# ============================================================================


class TimeSlot(BaseModel):
    """A contiguous visiting interval in 24-hour "HH:MM" form."""

    start_time_24hr: str = Field(..., pattern=TIME_24HR_PATTERN)
    end_time_24hr: str = Field(..., pattern=TIME_24HR_PATTERN)
    original_time: str | None = None


class VisitingHours(BaseModel):
    """Visiting schedule of a chamber."""

    visiting_days: list[str] = Field(default_factory=list)
    closed_days: list[str] = Field(default_factory=list)
    visiting_hours: str | None = None
    time_slots: list[TimeSlot] = Field(default_factory=list)


class Chamber(BaseModel):
    """A practice location with its own visiting schedule."""

    hospital_name: str | None = None
    address: str | None = None
    visiting_hours: list[VisitingHours] = Field(default_factory=list)


# ============================================================================
# Doctor Base Schemas
# ============================================================================


class DoctorBase(BaseModel):
    """Base schema for doctor."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    specialty: str | None = None
    specialty_list: list[str] = Field(default_factory=list, alias="specialtyList")
    specialty_categories: list[str] = Field(default_factory=list, alias="specialtyCategories")
    district: str | None = None
    degree: str | None = None
    designation: str | None = None
    workplace: str | None = None
    source_hospital: str | None = None
    chambers: list[Chamber] = Field(default_factory=list)


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""

    id: str = Field(..., min_length=1, max_length=100)


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor. Only provided fields are changed."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    specialty: str | None = None
    specialty_list: list[str] | None = Field(None, alias="specialtyList")
    specialty_categories: list[str] | None = Field(None, alias="specialtyCategories")
    district: str | None = None
    degree: str | None = None
    designation: str | None = None
    workplace: str | None = None
    source_hospital: str | None = None
    chambers: list[Chamber] | None = None


# ============================================================================
# Doctor List Schemas
# ============================================================================


class DoctorListParams(BaseModel):
    """Filters, pagination and sorting for doctor lists."""

    model_config = ConfigDict(populate_by_name=True)

    search_term: str | None = Field(None, alias="searchTerm")
    district: str | None = None
    specialty: str | None = Field(None, description="Specialization id")
    hospital_name: str | None = None
    address: str | None = None
    visiting_day: str | None = None
    visiting_hours: str | None = None
    time_slot: str | None = Field(None, pattern=TIME_24HR_PATTERN)
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort_by: str = Field("createdAt", alias="sortBy")
    sort_order: Literal["asc", "desc"] = Field("desc", alias="sortOrder")

