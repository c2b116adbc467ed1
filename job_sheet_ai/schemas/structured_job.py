"""Structured job schema after AI structuring."""

import re
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Every degraded record's job_description starts with this
DEGRADED_MARKER = "[Extraction error]"

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


def _coerce_text(value: Any) -> Any:
    """Flatten a scalar-or-collection reply value into one string; None stays None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        parts = [_coerce_text(v) for v in value]
        return ", ".join(p for p in parts if p) or None
    if isinstance(value, dict):
        parts = [f"{k}: {_coerce_text(v)}" for k, v in value.items() if v is not None]
        return ", ".join(parts) or None
    return str(value)


def _coerce_string_list(value: Any) -> Any:
    """null -> [], "x" -> ["x"], {"k": "v"} -> ["k: v"]; items are flattened to strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, dict):
        value = [f"{k}: {_coerce_text(v)}" for k, v in value.items() if v is not None]
    if isinstance(value, (list, tuple)):
        return [text for text in (_coerce_text(v) for v in value) if text]
    return value


class Salary(BaseModel):
    """Salary range as reported on the posting."""

    model_config = _WIRE_CONFIG

    min: Optional[Union[int, float]] = Field(default=None, description="Lowest amount, numeric")
    max: Optional[Union[int, float]] = Field(default=None, description="Highest amount, numeric")
    type: Optional[str] = Field(default=None, description="Monthly, annual, hourly, ...")
    details: Optional[str] = Field(default=None, description="Free-text salary details")

    @field_validator("type", "details", mode="before")
    @classmethod
    def text_as_string(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("min", "max", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Any:
        # Models sometimes return "1,200" despite being asked for numbers
        if isinstance(value, str):
            match = _NUMBER_RE.search(value.replace(",", ""))
            if not match:
                return None
            number = float(match.group(0))
            return int(number) if number.is_integer() else number
        return value


class Requirements(BaseModel):
    """Candidate requirements."""

    model_config = _WIRE_CONFIG

    experience: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    education: Optional[str] = None

    @field_validator("experience", "education", mode="before")
    @classmethod
    def text_as_string(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("skills", mode="before")
    @classmethod
    def skills_as_list(cls, value: Any) -> Any:
        return _coerce_string_list(value)


class StructuredJob(BaseModel):
    """
    One job posting coerced into the fixed schema.

    Wire names are camelCase (jobTitle, companyName, ...) so the structuring
    service's JSON validates directly. source_url and extracted_at_utc are
    always set by the caller; every other field may be absent.
    """

    model_config = _WIRE_CONFIG

    job_title: Optional[str] = Field(default=None, description="Job title")
    company_name: Optional[str] = Field(default=None, description="Company or employer name")
    location: Optional[str] = Field(default=None, description="Work location")
    salary: Salary = Field(default_factory=Salary)
    working_hours: Optional[str] = None
    holidays: Optional[str] = None
    benefits: List[str] = Field(default_factory=list)
    requirements: Requirements = Field(default_factory=Requirements)
    job_description: Optional[str] = Field(
        default=None, description="Duties, or the diagnostic on degraded records"
    )
    application_method: Optional[str] = None
    employment_type: Optional[str] = Field(default=None, description="Full-time, contract, part-time, ...")
    source_url: str = Field(..., description="URL the record was built from")
    extracted_at_utc: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("benefits", mode="before")
    @classmethod
    def benefits_as_list(cls, value: Any) -> Any:
        return _coerce_string_list(value)

    @field_validator(
        "job_title",
        "company_name",
        "location",
        "working_hours",
        "holidays",
        "job_description",
        "application_method",
        "employment_type",
        mode="before",
    )
    @classmethod
    def text_as_string(cls, value: Any) -> Any:
        # ["Sat", "Sun"] -> "Sat, Sun"; 40 -> "40"
        return _coerce_text(value)

    @field_validator("salary", mode="before")
    @classmethod
    def salary_as_group(cls, value: Any) -> Any:
        # "negotiable" -> {"details": "negotiable"}
        if value is None or isinstance(value, dict):
            return value or {}
        return {"details": _coerce_text(value)}

    @field_validator("requirements", mode="before")
    @classmethod
    def requirements_as_group(cls, value: Any) -> Any:
        if value is None or isinstance(value, dict):
            return value or {}
        if isinstance(value, (list, tuple)):
            return {"skills": list(value)}
        return {"experience": _coerce_text(value)}

    @property
    def is_degraded(self) -> bool:
        return bool(self.job_description and self.job_description.startswith(DEGRADED_MARKER))

    @classmethod
    def degraded(cls, source_url: str, diagnostic: str) -> "StructuredJob":
        """A record that carries only a diagnostic; every structured field is absent."""
        return cls(
            source_url=source_url,
            job_description=f"{DEGRADED_MARKER} {diagnostic}",
        )
