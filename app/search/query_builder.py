"""Translate search criteria into a doctor collection filter."""

from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

from app.schemas.search import DateRequirement, SearchCriteria, TimePreference
from app.search.filters import (
    And,
    Compare,
    ElemMatch,
    Equals,
    Exists,
    NotEquals,
    Or,
    Predicate,
    Regex,
    any_of,
)
from app.search.lexicon import DEFAULT_LEXICON, SpecialtyLexicon

VISITING_HOURS = "chambers.visiting_hours"
TIME_SLOTS = "chambers.visiting_hours.time_slots"

# Inclusive "HH:MM" bounds for each part of the day
TIME_BUCKETS: dict[TimePreference, tuple[str, str]] = {
    TimePreference.MORNING: ("08:00", "12:00"),
    TimePreference.AFTERNOON: ("12:00", "17:00"),
    TimePreference.EVENING: ("17:00", "22:00"),
}

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

SPECIALTY_FIELD = "specialty"
SPECIALTY_ARRAY_FIELDS = ("specialtyList", "specialtyCategories")
HOSPITAL_FIELDS = ("chambers.hospital_name", "workplace", "source_hospital")


def weekday_name(day: date) -> str:
    """English weekday name, independent of the process locale."""
    return WEEKDAY_NAMES[day.weekday()]


class QueryBuilder:
    """
    Build doctor filters from search criteria.

    The builder holds no mutable state. Results depend only on the criteria,
    the lexicon and the date returned by ``today``.
    """

    def __init__(
        self,
        lexicon: SpecialtyLexicon = DEFAULT_LEXICON,
        today: Callable[[], date] = date.today,
    ):
        self.lexicon = lexicon
        self.today = today

    def build(self, criteria: SearchCriteria) -> Predicate:
        """Return the filter expression for the given criteria."""
        clauses: list[Predicate] = [Equals("isDeleted", False)]

        target_day = self.resolve_weekday(criteria)
        if target_day:
            clauses.append(self._day_clause(target_day))

        if criteria.district:
            clauses.append(Regex("district", criteria.district))

        specialties = self.expand_specialties(criteria)
        if specialties:
            clauses.append(self._specialty_clause(specialties))

        time_clause = self._time_clause(criteria.time_preferences)
        if time_clause:
            clauses.append(time_clause)

        if criteria.hospital_preference:
            clauses.append(
                Or(tuple(Regex(field, criteria.hospital_preference) for field in HOSPITAL_FIELDS))
            )

        if criteria.urgency:
            clauses.append(
                any_of(
                    Exists(f"{TIME_SLOTS}.1"),
                    Exists(f"{VISITING_HOURS}.visiting_days.1"),
                )
            )

        return And(tuple(clauses))

    def build_filter(self, criteria: SearchCriteria) -> dict[str, Any]:
        """Return the rendered MongoDB filter for the given criteria."""
        return self.build(criteria).to_mongo()

    def resolve_weekday(self, criteria: SearchCriteria) -> str | None:
        """Weekday name the doctor must be visiting on, if any."""
        requirement = criteria.date_requirement
        if requirement is DateRequirement.TODAY:
            return weekday_name(self.today())
        if requirement is DateRequirement.TOMORROW:
            return weekday_name(self.today() + timedelta(days=1))
        if requirement is DateRequirement.SPECIFIC_DATE and criteria.specific_date:
            return weekday_name(criteria.specific_date)
        return None

    def expand_specialties(self, criteria: SearchCriteria) -> list[str]:
        """Specialty labels to look for, de-duplicated in first-seen order."""
        candidates = [criteria.specialty, self.lexicon.resolve(criteria.condition)]
        candidates.extend(self.lexicon.resolve(term) for term in criteria.related_conditions)
        return list(dict.fromkeys(label for label in candidates if label))

    @staticmethod
    def _day_clause(day: str) -> Predicate:
        # Both tests must hold for the same visiting-hours entry; closed days win.
        return ElemMatch(
            VISITING_HOURS,
            (Equals("visiting_days", day), NotEquals("closed_days", day)),
        )

    @staticmethod
    def _specialty_clause(labels: list[str]) -> Predicate:
        clauses: list[Predicate] = []
        for label in labels:
            clauses.append(Regex(SPECIALTY_FIELD, label))
            clauses.extend(ElemMatch(field, (Regex("", label),)) for field in SPECIALTY_ARRAY_FIELDS)
        return Or(tuple(clauses))

    @staticmethod
    def _time_clause(preferences: list[TimePreference]) -> Predicate | None:
        buckets = [TIME_BUCKETS[p] for p in dict.fromkeys(preferences) if p in TIME_BUCKETS]
        if not buckets:
            return None
        return Or(
            tuple(
                ElemMatch(
                    TIME_SLOTS,
                    (
                        Compare("start_time_24hr", "lte", end),
                        Compare("end_time_24hr", "gte", start),
                    ),
                )
                for start, end in buckets
            )
        )

