"""AI search schemas."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.common import ApiResponse


class DateRequirement(str, Enum):
    """When the user wants to see the doctor."""

    NONE = "none"
    TODAY = "today"
    TOMORROW = "tomorrow"
    SPECIFIC_DATE = "specific_date"


class TimePreference(str, Enum):
    """Part of the day (or week) the user prefers."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    WEEKDAY = "weekday"
    WEEKEND = "weekend"


class SearchCriteria(BaseModel):
    """
    Structured criteria extracted from a free-text search prompt.

    Built once per search from the completion reply, consumed by the query
    builder and echoed back to the caller. Never persisted.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, use_enum_values=False)

    condition: str | None = None
    specialty: str | None = None
    related_conditions: list[str] = Field(default_factory=list, alias="relatedConditions")
    district: str | None = None
    time_preferences: list[TimePreference] = Field(
        default_factory=list, alias="timePreferences"
    )
    hospital_preference: str | None = Field(default=None, alias="hospitalPreference")
    date_requirement: DateRequirement = Field(
        default=DateRequirement.NONE, alias="dateRequirement"
    )
    specific_date: date | None = Field(default=None, alias="specificDate")
    urgency: bool = False

    @field_validator(
        "condition", "specialty", "district", "hospital_preference", "specific_date", mode="before"
    )
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """Strip strings and treat empty ones as missing values."""
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("related_conditions", "time_preferences", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        """Treat null arrays as empty."""
        return [] if value is None else value

    @field_validator("related_conditions", mode="before")
    @classmethod
    def drop_blank_conditions(cls, value: Any) -> Any:
        """Skip null and blank entries."""
        if isinstance(value, list):
            return [
                v.strip() if isinstance(v, str) else v
                for v in value
                if v is not None and not (isinstance(v, str) and not v.strip())
            ]
        return value

    @field_validator("time_preferences", mode="before")
    @classmethod
    def lowercase_time_preferences(cls, value: Any) -> Any:
        """Accept time preferences in any case."""
        if isinstance(value, list):
            return [v.strip().lower() if isinstance(v, str) else v for v in value]
        return value

    @field_validator("date_requirement", mode="before")
    @classmethod
    def null_date_requirement(cls, value: Any) -> Any:
        """A null or empty date requirement means no date constraint; case is ignored."""
        if value is None:
            return DateRequirement.NONE
        if isinstance(value, str):
            return value.strip().lower() or DateRequirement.NONE
        return value

    @field_validator("urgency", mode="before")
    @classmethod
    def null_urgency(cls, value: Any) -> Any:
        """A null urgency means not urgent."""
        return False if value is None else value

    @model_validator(mode="after")
    def check_specific_date(self) -> "SearchCriteria":
        """A specific date is required exactly when the requirement asks for one."""
        if self.date_requirement is DateRequirement.SPECIFIC_DATE and self.specific_date is None:
            raise ValueError("specificDate is required when dateRequirement is specific_date")
        return self


class AISearchRequest(BaseModel):
    """Request body for AI search."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., min_length=1, max_length=2000)
    fallback_location: str | None = Field(default=None, alias="fallbackLocation")


class AISearchMeta(BaseModel):
    """Result metadata for AI search."""

    count: int


class AISearchResult(BaseModel):
    """Full set of doctors matching an AI search, with the criteria used."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[dict[str, Any]]
    meta: AISearchMeta
    search_criteria: SearchCriteria = Field(..., alias="searchCriteria")


class AISearchResponse(ApiResponse):
    """Envelope for AI search results."""

    model_config = ConfigDict(populate_by_name=True)

    search_criteria: SearchCriteria = Field(..., alias="searchCriteria")
