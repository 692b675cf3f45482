"""Doctor to specialization relation collection definition."""

from pymongo import ASCENDING, IndexModel

DOCTOR_SPECIALIZATIONS = "doctorspecializations"

doctor_specialization_indexes = [
    IndexModel(
        [("doctor", ASCENDING), ("specialization", ASCENDING)],
        unique=True,
        name="doctorspecializations_doctor_specialization_key",
    ),
    IndexModel([("specialization", ASCENDING)], name="doctorspecializations_specialization"),
]
