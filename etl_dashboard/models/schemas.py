"""Resource DTOs exchanged with the backend.

The backend owns the real schema and lifecycle of these entities. Fields are
camelCase on the wire and snake_case here. Most fields are optional so that
partial payloads still parse, and unknown fields are kept rather than
rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for camelCase wire payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SourceType(str, Enum):
    API = "api"
    FOLDER = "folder"
    SHAREPOINT = "sharepoint"


class SourceStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class ScheduleFrequency(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class JobStatus(str, Enum):
    """Status of a file-processing job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    PAUSED = "paused"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ErrorStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    IGNORED = "ignored"
    CORRECTED = "corrected"


class AnomalyStatus(str, Enum):
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"


class HealthStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Dashboard overview
# ---------------------------------------------------------------------------


class DashboardStats(WireModel):
    """Summary counters for the overview page."""

    total_sources: int = 0
    files_processed_today: int = 0
    active_errors: int = 0
    success_rate: float = 0.0


class RecentJob(WireModel):
    id: str
    source: str | None = None
    status: str | None = None
    files: int | None = None
    duration: str | None = None
    timestamp: str | None = None
    scheduled: bool = False


class ScheduledPipeline(WireModel):
    id: str
    name: str = ""
    type: SourceType | None = None
    frequency: ScheduleFrequency | None = None
    next_run: str | None = None
    status: str | None = None
    last_run: str | None = None
    success: bool | None = None


class SystemHealth(WireModel):
    """Live resource gauges, in percent."""

    cpu: float = 0.0
    memory: float = 0.0
    storage: float = 0.0
    network: float = 0.0


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------


class Schedule(WireModel):
    enabled: bool = False
    frequency: ScheduleFrequency = ScheduleFrequency.DAILY
    time: str | None = None
    days: list[str] | None = None
    next_run: str | None = None


class DataSource(WireModel):
    id: str
    name: str = ""
    type: SourceType | None = None
    status: SourceStatus | None = None
    last_sync: str | None = None
    records_count: int = 0
    config: dict[str, Any] = Field(default_factory=dict)
    schedule: Schedule | None = None


class ConnectionTestResult(WireModel):
    success: bool
    message: str = ""


# ---------------------------------------------------------------------------
# File processing
# ---------------------------------------------------------------------------


class ProcessingJob(WireModel):
    id: str
    file_name: str = ""
    file_type: str | None = None
    size: str | None = None
    status: JobStatus = JobStatus.PENDING
    progress: float = 0.0
    records_processed: int = 0
    total_records: int = 0
    start_time: str | None = None
    duration: str | None = None
    errors: int = 0
    source: str | None = None


class UploadResult(WireModel):
    job_id: str
    message: str = ""
    files_processed: int = 0


# ---------------------------------------------------------------------------
# Error detection
# ---------------------------------------------------------------------------


class DataError(WireModel):
    id: str
    type: str | None = None
    severity: Severity | None = None
    message: str = ""
    description: str | None = None
    source: str | None = None
    file_name: str | None = None
    row_number: int | None = None
    column_name: str | None = None
    detected_at: str | None = None
    status: ErrorStatus = ErrorStatus.OPEN
    suggested_fix: str | None = None
    affected_records: int = 0


class CorrectionRule(WireModel):
    id: str
    name: str = ""
    description: str | None = None
    type: str | None = None
    condition: str = ""
    action: str | None = None
    replacement: str | None = None
    severity: Severity | None = None
    auto_apply: bool = False
    is_active: bool = True
    applied_count: int = 0


# ---------------------------------------------------------------------------
# Anomaly detection
# ---------------------------------------------------------------------------


class Anomaly(WireModel):
    id: str
    type: str | None = None
    severity: Severity | None = None
    title: str = ""
    description: str | None = None
    source: str | None = None
    detected_at: str | None = None
    value: str | None = None
    expected_range: str | None = None
    confidence: float | None = None
    status: AnomalyStatus = AnomalyStatus.ACTIVE
    alerts_sent: int = 0


class AlertRule(WireModel):
    id: str
    name: str = ""
    description: str | None = None
    type: str | None = None
    metric: str | None = None
    condition: str | None = None
    operator: str | None = None
    threshold: float | str | None = None
    severity: Severity | None = None
    is_active: bool = True
    channels: list[str] = Field(default_factory=list)
    auto_resolve: bool = False
    triggered_count: int = 0
    last_triggered: str | None = None


class CreatedResource(WireModel):
    """Acknowledgement returned by rule-creation endpoints."""

    id: str
    message: str = ""


# ---------------------------------------------------------------------------
# Performance monitoring
# ---------------------------------------------------------------------------


class PerformanceMetric(WireModel):
    name: str
    value: float = 0.0
    unit: str = ""
    trend: str | None = None
    trend_value: float | None = None
    status: HealthStatus | None = None


class PerformanceSnapshot(WireModel):
    """Headline metrics for one time range (e.g. ``24h``)."""

    range: str | None = None
    metrics: list[PerformanceMetric] = Field(default_factory=list)


class JobPerformance(WireModel):
    """Throughput and latency of one pipeline stage."""

    name: str
    throughput: str | None = None
    latency: str | None = None
    status: HealthStatus | None = None
    bottleneck: bool = False


class ScheduledJobPerformance(WireModel):
    id: str | None = None
    name: str = ""
    frequency: ScheduleFrequency | None = None
    avg_duration: str | None = None
    success_rate: float | None = None
    last_run: str | None = None


class SystemResource(WireModel):
    name: str
    usage: float = 0.0
    total: float = 0.0
    unit: str = ""
    status: HealthStatus | None = None


class ResourceUsage(WireModel):
    resources: list[SystemResource] = Field(default_factory=list)
