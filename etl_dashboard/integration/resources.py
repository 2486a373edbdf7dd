"""Typed resource access functions, one per backend operation.

Each method binds a fixed path template and an envelope type to
``ApiClient.request`` and returns whatever it returns. No additional error
translation happens here.
"""

from __future__ import annotations

from collections.abc import Sequence

from etl_dashboard import keys
from etl_dashboard.integration.api_client import ApiClient
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


class DashboardApi:
    """Resource access layer over a non-throwing ApiClient."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    @property
    def client(self) -> ApiClient:
        return self._client

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    async def get_dashboard_stats(self) -> Envelope:
        return await self._client.request(
            keys.DASHBOARD_STATS, response_model=ApiResponse[DashboardStats]
        )

    async def get_recent_jobs(self, limit: int = 10) -> Envelope:
        return await self._client.request(
            keys.recent_jobs_key(limit), response_model=ApiResponse[list[RecentJob]]
        )

    async def get_scheduled_pipelines(self) -> Envelope:
        return await self._client.request(
            keys.SCHEDULED_PIPELINES, response_model=ApiResponse[list[ScheduledPipeline]]
        )

    async def get_system_health(self) -> Envelope:
        return await self._client.request(
            keys.SYSTEM_HEALTH, response_model=ApiResponse[SystemHealth]
        )

    # ------------------------------------------------------------------
    # Data sources
    # ------------------------------------------------------------------

    async def get_data_sources(self) -> Envelope:
        return await self._client.request(
            keys.DATA_SOURCES, response_model=ApiResponse[list[DataSource]]
        )

    async def create_data_source(self, source: DataSourceCreate) -> Envelope:
        return await self._client.request(
            keys.DATA_SOURCES,
            method="POST",
            json=source.to_wire(),
            response_model=ApiResponse[DataSource],
        )

    async def update_data_source(self, source_id: str, source: DataSourceUpdate) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_SOURCES, source_id),
            method="PUT",
            json=source.to_wire(),
            response_model=ApiResponse[DataSource],
        )

    async def delete_data_source(self, source_id: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_SOURCES, source_id), method="DELETE"
        )

    async def test_data_source(self, source_id: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_SOURCES, source_id, "test"),
            method="POST",
            response_model=ApiResponse[ConnectionTestResult],
        )

    async def update_schedule(self, source_id: str, schedule: ScheduleUpdate) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_SOURCES, source_id, "schedule"),
            method="PUT",
            json=schedule.to_wire(),
            response_model=ApiResponse[DataSource],
        )

    async def toggle_schedule(self, source_id: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_SOURCES, source_id, "schedule", "toggle"),
            method="POST",
            response_model=ApiResponse[DataSource],
        )

    # ------------------------------------------------------------------
    # File processing
    # ------------------------------------------------------------------

    async def get_processing_jobs(self) -> Envelope:
        return await self._client.request(
            keys.PROCESSING_JOBS, response_model=ApiResponse[list[ProcessingJob]]
        )

    async def upload_files(
        self,
        files: Sequence[UploadFile],
        target_sink: str,
        options: UploadOptions | None = None,
    ) -> Envelope:
        """Upload files as multipart form data and start a processing job."""
        parts = [
            ("files", (upload.filename, upload.content, upload.content_type))
            for upload in files
        ]
        form = {"target_sink": target_sink}
        if options is not None:
            form.update(options.to_form())

        return await self._client.request(
            keys.PROCESSING_UPLOAD,
            method="POST",
            files=parts,
            form=form,
            response_model=ApiResponse[UploadResult],
        )

    async def pause_job(self, job_id: str) -> Envelope:
        return await self._job_action(job_id, "pause")

    async def resume_job(self, job_id: str) -> Envelope:
        return await self._job_action(job_id, "resume")

    async def retry_job(self, job_id: str) -> Envelope:
        return await self._job_action(job_id, "retry")

    async def _job_action(self, job_id: str, action: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.PROCESSING_JOBS, job_id, action),
            method="POST",
            response_model=ApiResponse[ProcessingJob],
        )

    # ------------------------------------------------------------------
    # Error detection
    # ------------------------------------------------------------------

    async def get_data_errors(self, page: int = 1, limit: int = 10) -> Envelope:
        return await self._client.request(
            keys.data_errors_key(page, limit),
            response_model=PaginatedResponse[DataError],
        )

    async def get_correction_rules(self) -> Envelope:
        return await self._client.request(
            keys.CORRECTION_RULES, response_model=ApiResponse[list[CorrectionRule]]
        )

    async def create_correction_rule(self, rule: CorrectionRuleCreate) -> Envelope:
        return await self._client.request(
            keys.CORRECTION_RULES,
            method="POST",
            json=rule.to_wire(),
            response_model=ApiResponse[CreatedResource],
        )

    async def update_correction_rule(self, rule_id: str, rule: CorrectionRuleUpdate) -> Envelope:
        return await self._client.request(
            keys.member(keys.CORRECTION_RULES, rule_id),
            method="PUT",
            json=rule.to_wire(),
            response_model=ApiResponse[CorrectionRule],
        )

    async def apply_correction_rule(self, rule_id: str, error_ids: Sequence[str]) -> Envelope:
        return await self._client.request(
            keys.member(keys.CORRECTION_RULES, rule_id, "apply"),
            method="POST",
            json={"error_ids": list(error_ids)},
        )

    async def ignore_error(self, error_id: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.DATA_ERRORS, error_id, "ignore"),
            method="POST",
            response_model=ApiResponse[DataError],
        )

    # ------------------------------------------------------------------
    # Anomaly detection
    # ------------------------------------------------------------------

    async def get_anomalies(self) -> Envelope:
        return await self._client.request(
            keys.ANOMALIES, response_model=ApiResponse[list[Anomaly]]
        )

    async def get_anomaly_rules(self) -> Envelope:
        return await self._client.request(
            keys.ANOMALY_RULES, response_model=ApiResponse[list[AlertRule]]
        )

    async def create_anomaly_rule(self, rule: AlertRuleCreate) -> Envelope:
        return await self._client.request(
            keys.ANOMALY_RULES,
            method="POST",
            json=rule.to_wire(),
            response_model=ApiResponse[CreatedResource],
        )

    async def update_anomaly_rule(self, rule_id: str, rule: AlertRuleUpdate) -> Envelope:
        return await self._client.request(
            keys.member(keys.ANOMALY_RULES, rule_id),
            method="PUT",
            json=rule.to_wire(),
            response_model=ApiResponse[AlertRule],
        )

    async def acknowledge_anomaly(self, anomaly_id: str) -> Envelope:
        return await self._client.request(
            keys.member(keys.ANOMALIES, anomaly_id, "acknowledge"),
            method="POST",
            response_model=ApiResponse[Anomaly],
        )

    # ------------------------------------------------------------------
    # Performance monitoring
    # ------------------------------------------------------------------

    async def get_performance_metrics(self, time_range: str = "24h") -> Envelope:
        return await self._client.request(
            keys.performance_metrics_key(time_range),
            response_model=ApiResponse[PerformanceSnapshot],
        )

    async def get_job_performance(self) -> Envelope:
        return await self._client.request(
            keys.JOB_PERFORMANCE, response_model=ApiResponse[list[JobPerformance]]
        )

    async def get_scheduled_jobs_performance(self) -> Envelope:
        return await self._client.request(
            keys.SCHEDULED_JOBS_PERFORMANCE,
            response_model=ApiResponse[list[ScheduledJobPerformance]],
        )

    async def get_resource_usage(self) -> Envelope:
        return await self._client.request(
            keys.RESOURCE_USAGE, response_model=ApiResponse[ResourceUsage]
        )
