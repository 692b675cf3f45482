"""Lay medical terms mapped to canonical specialty labels."""

from collections.abc import Mapping
from types import MappingProxyType

DENTAL = "Dental Specialist"
CHILD = "Child Specialist"
BRAIN = "Brain Specialist"
CARDIOLOGY = "Cardiology Specialist"
ORTHOPEDICS = "Orthopedics Specialist"
GYNECOLOGY = "Gynecology Specialist"
ENT = "ENT Specialist"
EYE = "Eye Specialist"
CANCER = "Cancer & Tumor Specialist"
CHEST = "Chest Diseases Specialist"
DIABETES = "Diabetes Specialist"
ENDOCRINOLOGY = "Endocrinology"
RHEUMATOLOGY = "Rheumatology"
PSYCHIATRY = "Psychiatry"
DERMATOLOGY = "Dermatology"
GENERAL = "General Specialist"
MEDICINE = "Medicine Specialist"
HEPATOLOGY = "Hepatology Specialist"
GASTRO = "Gastro Liver Specialist"
KIDNEY = "Kidney Diseases Specialist"
NEUROSURGERY = "Neurosurgery"

TERM_TO_SPECIALTY: dict[str, str] = {
    # Dentistry
    "dentistry": DENTAL,
    "dentist": DENTAL,
    "teeth": DENTAL,
    "tooth": DENTAL,
    "gum": DENTAL,
    "oral": DENTAL,
    # Pediatrics
    "child": CHILD,
    "children": CHILD,
    "kid": CHILD,
    "kids": CHILD,
    "baby": CHILD,
    "newborn": CHILD,
    "pediatric": CHILD,
    "pediatrician": CHILD,
    # Neurology
    "brain": BRAIN,
    "nerve": BRAIN,
    "neurology": BRAIN,
    "neuromedicine": BRAIN,
    "spine": BRAIN,
    "stroke": BRAIN,
    # Cardiology
    "heart": CARDIOLOGY,
    "cardio": CARDIOLOGY,
    "cardiovascular": CARDIOLOGY,
    # Orthopedics
    "bone": ORTHOPEDICS,
    "joint": ORTHOPEDICS,
    "orthopedic": ORTHOPEDICS,
    "arthritis": ORTHOPEDICS,
    "trauma": ORTHOPEDICS,
    # Gynecology
    "women": GYNECOLOGY,
    "pregnancy": GYNECOLOGY,
    "gynecologist": GYNECOLOGY,
    "obstetrics": GYNECOLOGY,
    "gynae": GYNECOLOGY,
    "infertility": GYNECOLOGY,
    # ENT
    "ear": ENT,
    "nose": ENT,
    "throat": ENT,
    "ent": ENT,
    "sinus": ENT,
    # Ophthalmology
    "eye": EYE,
    "vision": EYE,
    # Oncology
    "cancer": CANCER,
    "tumor": CANCER,
    "oncology": CANCER,
    "breast": CANCER,
    # Pulmonology
    "chest": CHEST,
    "asthma": CHEST,
    "respiratory": CHEST,
    "cough": CHEST,
    "lung": CHEST,
    # Endocrinology
    "diabetes": DIABETES,
    "sugar": DIABETES,
    "hormone": ENDOCRINOLOGY,
    "thyroid": ENDOCRINOLOGY,
    # Rheumatology
    "rheumatism": RHEUMATOLOGY,
    "jointpain": RHEUMATOLOGY,
    # Psychiatry
    "mental": PSYCHIATRY,
    "depression": PSYCHIATRY,
    "addiction": PSYCHIATRY,
    "psychiatry": PSYCHIATRY,
    # Dermatology
    "skin": DERMATOLOGY,
    "rash": DERMATOLOGY,
    "allergy": DERMATOLOGY,
    "leprosy": DERMATOLOGY,
    "eczema": DERMATOLOGY,
    # General
    "general": GENERAL,
    "medicine": MEDICINE,
    # Hepatology
    "liver": HEPATOLOGY,
    "pancreas": HEPATOLOGY,
    "gallbladder": HEPATOLOGY,
    "jaundice": HEPATOLOGY,
    # Gastroenterology
    "gastro": GASTRO,
    "stomach": GASTRO,
    # Urology / nephrology
    "kidney": KIDNEY,
    "dialysis": KIDNEY,
    "urine": KIDNEY,
    "prostate": KIDNEY,
    # Neurosurgery
    "neurosurgery": NEUROSURGERY,
    "skull": NEUROSURGERY,
}


class SpecialtyLexicon:
    """
    Immutable lookup table from lay terms to canonical specialty labels.

    Lookup is an exact, case-insensitive key match. There is no fuzzy
    matching: a term that is not in the table resolves to None.
    """

    def __init__(self, table: Mapping[str, str]):
        """Build the lexicon from a term -> label mapping."""
        self._table: Mapping[str, str] = MappingProxyType(
            {term.strip().lower(): label for term, label in table.items()}
        )

    def resolve(self, term: str | None) -> str | None:
        """Return the canonical label for a term, or None if it is unknown."""
        if not term:
            return None
        return self._table.get(term.strip().lower())

    def labels(self) -> list[str]:
        """Return every canonical label, sorted."""
        return sorted(set(self._table.values()))

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and self.resolve(term) is not None

    def __len__(self) -> int:
        return len(self._table)


DEFAULT_LEXICON = SpecialtyLexicon(TERM_TO_SPECIALTY)
