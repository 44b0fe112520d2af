from typing import List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone

from pathforge.models.job import JobStatus

MAX_REQUIREMENTS = 50
MAX_REQUIREMENT_LENGTH = 200

# Fields that may be omitted from a PATCH but never cleared
NON_NULLABLE_FIELDS = ("title", "company", "location", "status", "requirements", "applied_date")


class CamelModel(BaseModel):
    """Accepts both camelCase and snake_case keys; serializes camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )


def _normalize_requirements(value: Any) -> Any:
    # A textarea submission arrives as one newline-separated string
    if isinstance(value, str):
        value = value.splitlines()
    if isinstance(value, list):
        cleaned = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError("requirements must be a list of strings")
            item = item.strip()
            if item:
                if len(item) > MAX_REQUIREMENT_LENGTH:
                    raise ValueError(f"each requirement cannot exceed {MAX_REQUIREMENT_LENGTH} characters")
                cleaned.append(item)
        if len(cleaned) > MAX_REQUIREMENTS:
            raise ValueError(f"at most {MAX_REQUIREMENTS} requirements are allowed")
        return cleaned
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Offset-less input is taken to be UTC already
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class JobFields(CamelModel):
    salary: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=2000)


class JobCreate(JobFields):
    title: str = Field(min_length=1, max_length=100)
    company: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=100)
    status: JobStatus = JobStatus.APPLIED
    requirements: List[str] = Field(default_factory=list)
    applied_date: Optional[datetime] = None

    @field_validator("requirements", mode="before")
    @classmethod
    def clean_requirements(cls, value):
        return _normalize_requirements(value)

    @field_validator("applied_date")
    @classmethod
    def applied_date_in_utc(cls, value):
        return _as_utc(value)


class JobUpdate(JobFields):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    company: Optional[str] = Field(default=None, min_length=1, max_length=100)
    location: Optional[str] = Field(default=None, min_length=1, max_length=100)
    status: Optional[JobStatus] = None
    requirements: Optional[List[str]] = None
    applied_date: Optional[datetime] = None

    @field_validator("requirements", mode="before")
    @classmethod
    def clean_requirements(cls, value):
        return _normalize_requirements(value)

    @field_validator("applied_date")
    @classmethod
    def applied_date_in_utc(cls, value):
        return _as_utc(value)

    @model_validator(mode="after")
    def reject_cleared_required_fields(self):
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class JobResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    company: str
    location: str
    status: JobStatus
    salary: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    applied_date: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("requirements", mode="before")
    @classmethod
    def default_requirements(cls, value):
        return value or []
