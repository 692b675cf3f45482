"""Database collections."""

from pymongo import IndexModel

from app.models.doctor_specializations import (
    DOCTOR_SPECIALIZATIONS,
    doctor_specialization_indexes,
)
from app.models.doctors import DOCTORS, doctor_indexes
from app.models.specializations import SPECIALIZATIONS, specialization_indexes

COLLECTION_INDEXES: dict[str, list[IndexModel]] = {
    DOCTORS: doctor_indexes,
    SPECIALIZATIONS: specialization_indexes,
    DOCTOR_SPECIALIZATIONS: doctor_specialization_indexes,
}

__all__ = [
    "COLLECTION_INDEXES",
    "DOCTORS",
    "DOCTOR_SPECIALIZATIONS",
    "SPECIALIZATIONS",
]
