"""Specialization collection definition."""

from pymongo import ASCENDING, IndexModel

SPECIALIZATIONS = "specializations"

specialization_indexes = [
    IndexModel([("name", ASCENDING)], unique=True, name="specializations_name_key"),
]
