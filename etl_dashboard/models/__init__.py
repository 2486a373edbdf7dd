"""Public models for the dashboard client."""

from etl_dashboard.models.requests import (
    AlertRuleCreate,
    AlertRuleUpdate,
    CorrectionRuleCreate,
    CorrectionRuleUpdate,
    DataSourceCreate,
    DataSourceUpdate,
    ScheduleUpdate,
    UploadFile,
    UploadOptions,
)
from etl_dashboard.models.responses import ApiResponse, Envelope, PaginatedResponse
from etl_dashboard.models.schemas import (
    AlertRule,
    Anomaly,
    ConnectionTestResult,
    CorrectionRule,
    CreatedResource,
    DashboardStats,
    DataError,
    DataSource,
    JobPerformance,
    PerformanceSnapshot,
    ProcessingJob,
    RecentJob,
    ResourceUsage,
    ScheduledJobPerformance,
    ScheduledPipeline,
    SystemHealth,
    UploadResult,
)

__all__ = [
    "AlertRule",
    "AlertRuleCreate",
    "AlertRuleUpdate",
    "Anomaly",
    "ApiResponse",
    "ConnectionTestResult",
    "CorrectionRule",
    "CorrectionRuleCreate",
    "CorrectionRuleUpdate",
    "CreatedResource",
    "DashboardStats",
    "DataError",
    "DataSource",
    "DataSourceCreate",
    "DataSourceUpdate",
    "Envelope",
    "JobPerformance",
    "PaginatedResponse",
    "PerformanceSnapshot",
    "ProcessingJob",
    "RecentJob",
    "ResourceUsage",
    "ScheduleUpdate",
    "ScheduledJobPerformance",
    "ScheduledPipeline",
    "SystemHealth",
    "UploadFile",
    "UploadOptions",
    "UploadResult",
]
