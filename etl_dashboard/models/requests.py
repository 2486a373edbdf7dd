"""Pydantic request payloads for mutation endpoints.

These models double as client-side form validation: constructing one from
incomplete form data raises a pydantic ValidationError before any request
is sent. ``to_wire()`` produces the camelCase JSON body the backend expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from etl_dashboard.models.schemas import ScheduleFrequency, Severity, SourceType


class RequestModel(BaseModel):
    """Base for outgoing payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------


class DataSourceCreate(RequestModel):
    name: str = ""
    type: SourceType
    config: dict[str, Any] = Field(default_factory=dict)


class DataSourceUpdate(RequestModel):
    name: str | None = None
    type: SourceType | None = None
    config: dict[str, Any] | None = None


class ScheduleUpdate(RequestModel):
    """Schedule settings for a data source.

    ``time`` is dropped for hourly schedules and ``days`` for anything but
    weekly ones. ``next_run`` is derived for enabled schedules unless given.
    """

    enabled: bool = False
    frequency: ScheduleFrequency = ScheduleFrequency.DAILY
    time: str | None = "09:00"
    days: list[str] | None = None
    next_run: str | None = None

    @model_validator(mode="after")
    def _normalize(self) -> ScheduleUpdate:
        if self.frequency == ScheduleFrequency.HOURLY:
            self.time = None
        if self.frequency != ScheduleFrequency.WEEKLY:
            self.days = None
        if not self.enabled:
            self.next_run = None
        elif self.next_run is None:
            self.next_run = describe_next_run(self.frequency, self.time, self.days)
        return self


def describe_next_run(
    frequency: ScheduleFrequency, time: str | None, days: list[str] | None
) -> str:
    """Human-readable description of the next scheduled run."""
    if frequency == ScheduleFrequency.HOURLY:
        return "In 1 hour"
    if frequency == ScheduleFrequency.DAILY:
        return f"Tomorrow at {time}"
    if frequency == ScheduleFrequency.WEEKLY:
        if days:
            return f"Next {days[0]} at {time}"
        return f"Next week at {time}"
    return f"Next month at {time}"


# ---------------------------------------------------------------------------
# Correction rules
# ---------------------------------------------------------------------------


class CorrectionRuleCreate(RequestModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    condition: str = Field(..., min_length=1)
    action: str = Field(default="replace", pattern=r"^(replace|remove|flag)$")
    replacement: str | None = None
    severity: Severity = Severity.MEDIUM
    auto_apply: bool = False

    @field_validator("severity")
    @classmethod
    def _no_critical(cls, value: Severity) -> Severity:
        if value == Severity.CRITICAL:
            raise ValueError("correction rules support low, medium or high severity")
        return value


class CorrectionRuleUpdate(RequestModel):
    name: str | None = None
    description: str | None = None
    condition: str | None = None
    action: str | None = Field(default=None, pattern=r"^(replace|remove|flag)$")
    replacement: str | None = None
    severity: Severity | None = None
    auto_apply: bool | None = None


# ---------------------------------------------------------------------------
# Anomaly alert rules
# ---------------------------------------------------------------------------


class AlertRuleCreate(RequestModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    metric: str = Field(..., min_length=1)
    threshold: float
    operator: str = Field(default=">", pattern=r"^(>|<|=|!=)$")
    severity: Severity = Severity.MEDIUM
    alert_channels: list[str] = Field(default_factory=list)
    auto_resolve: bool = False

    @field_validator("threshold")
    @classmethod
    def _threshold_set(cls, value: float) -> float:
        # A zero threshold is indistinguishable from an untouched form field
        if value == 0:
            raise ValueError("threshold is required")
        return value


class AlertRuleUpdate(RequestModel):
    name: str | None = None
    description: str | None = None
    metric: str | None = None
    threshold: float | None = None
    operator: str | None = Field(default=None, pattern=r"^(>|<|=|!=)$")
    severity: Severity | None = None
    alert_channels: list[str] | None = None
    auto_resolve: bool | None = None


# ---------------------------------------------------------------------------
# File upload
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UploadFile:
    """A file selected for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class UploadOptions(RequestModel):
    """Processing switches sent as multipart form fields."""

    validate_schema: bool | None = None
    error_correction: bool | None = None
    anomaly_detection: bool | None = None

    def to_form(self) -> dict[str, str]:
        return {
            key: str(value).lower() for key, value in self.to_wire().items()
        }
