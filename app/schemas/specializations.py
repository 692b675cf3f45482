"""Specialization schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SpecializationCreate(BaseModel):
    """Schema for creating a specialization."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None


class SpecializationResponse(BaseModel):
    """Specialization response schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    description: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")


class SpecializationAssign(BaseModel):
    """Link a doctor to a specialization."""

    model_config = ConfigDict(populate_by_name=True)

    doctor_id: str = Field(..., alias="doctorId", description="Business id of the doctor")
    specialization_id: str = Field(..., alias="specializationId")
    is_primary: bool = Field(False, alias="isPrimary")
