"""Doctor collection definition."""

from pymongo import ASCENDING, DESCENDING, IndexModel

DOCTORS = "doctors"

doctor_indexes = [
    IndexModel([("id", ASCENDING)], unique=True, name="doctors_id_key"),
    IndexModel([("isDeleted", ASCENDING), ("createdAt", DESCENDING)], name="doctors_active_recent"),
    IndexModel([("district", ASCENDING)], name="doctors_district"),
    IndexModel([("specialty", ASCENDING)], name="doctors_specialty"),
    IndexModel([("chambers.visiting_hours.visiting_days", ASCENDING)], name="doctors_visiting_days"),
]
