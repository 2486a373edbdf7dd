"""In-memory sample data for the stub backend.

Seeded with the rows the dashboard pages were designed around. State changes
(CRUD, schedule toggles, job control, error and anomaly triage) are applied
in memory only and are lost on restart.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from etl_dashboard.errors import NotFoundError, StubValidationError
from etl_dashboard.models.requests import (
    AlertRuleCreate,
    AlertRuleUpdate,
    CorrectionRuleCreate,
    CorrectionRuleUpdate,
    DataSourceCreate,
    DataSourceUpdate,
    ScheduleUpdate,
    describe_next_run,
)
from etl_dashboard.models.schemas import (
    AlertRule,
    Anomaly,
    AnomalyStatus,
    ConnectionTestResult,
    CorrectionRule,
    CreatedResource,
    DashboardStats,
    DataError,
    DataSource,
    ErrorStatus,
    HealthStatus,
    JobPerformance,
    JobStatus,
    PerformanceMetric,
    PerformanceSnapshot,
    ProcessingJob,
    RecentJob,
    ResourceUsage,
    Schedule,
    ScheduledJobPerformance,
    ScheduledPipeline,
    ScheduleFrequency,
    Severity,
    SourceStatus,
    SourceType,
    SystemHealth,
    SystemResource,
    UploadResult,
)

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class SampleStore:
    """Mutable in-memory state behind the stub backend routes."""

    def __init__(self) -> None:
        self.data_sources: dict[str, DataSource] = {}
        self.processing_jobs: dict[str, ProcessingJob] = {}
        self.errors: dict[str, DataError] = {}
        self.correction_rules: dict[str, CorrectionRule] = {}
        self.anomalies: dict[str, Anomaly] = {}
        self.alert_rules: dict[str, AlertRule] = {}
        self.system_health = SystemHealth(cpu=45, memory=68, storage=23, network=12)
        self.files_processed_today = 1247
        self._seed()

    # ------------------------------------------------------------------
    # Overview
    # ------------------------------------------------------------------

    def dashboard_stats(self) -> DashboardStats:
        completed = sum(
            1 for job in self.processing_jobs.values() if job.status == JobStatus.COMPLETED
        )
        failed = sum(1 for job in self.processing_jobs.values() if job.status == JobStatus.ERROR)
        finished = completed + failed
        return DashboardStats(
            total_sources=len(self.data_sources),
            files_processed_today=self.files_processed_today,
            active_errors=sum(
                1 for error in self.errors.values() if error.status == ErrorStatus.OPEN
            ),
            success_rate=round(100.0 * completed / finished, 1) if finished else 100.0,
        )

    def recent_jobs(self, limit: int) -> list[RecentJob]:
        jobs = list(self.processing_jobs.values())[-limit:]
        return [
            RecentJob(
                id=job.id,
                source=f"{job.source} - {job.file_name}",
                status=job.status.value,
                files=1,
                duration=job.duration,
                timestamp=job.start_time,
                scheduled=False,
            )
            for job in reversed(jobs)
        ]

    def scheduled_pipelines(self) -> list[ScheduledPipeline]:
        return [
            ScheduledPipeline(
                id=f"schedule-{source.id}",
                name=source.name,
                type=source.type,
                frequency=source.schedule.frequency,
                next_run=source.schedule.next_run,
                status="active" if source.schedule.enabled else "paused",
                last_run=source.last_sync,
                success=source.status != SourceStatus.ERROR,
            )
            for source in self.data_sources.values()
            if source.schedule is not None
        ]

    # ------------------------------------------------------------------
    # Data sources
    # ------------------------------------------------------------------

    def get_data_source(self, source_id: str) -> DataSource:
        source = self.data_sources.get(source_id)
        if source is None:
            raise NotFoundError(f"Data source '{source_id}' not found")
        return source

    def create_data_source(self, payload: DataSourceCreate) -> DataSource:
        source = DataSource(
            id=_new_id("src"),
            name=payload.name,
            type=payload.type,
            status=SourceStatus.INACTIVE,
            last_sync=None,
            records_count=0,
            config=payload.config,
        )
        self.data_sources[source.id] = source
        logger.info("Created data source %s", source.id)
        return source

    def update_data_source(self, source_id: str, payload: DataSourceUpdate) -> DataSource:
        source = self.get_data_source(source_id)
        changes = payload.model_dump(exclude_none=True)
        updated = source.model_copy(update=changes)
        self.data_sources[source_id] = updated
        return updated

    def delete_data_source(self, source_id: str) -> DataSource:
        source = self.get_data_source(source_id)
        del self.data_sources[source_id]
        logger.info("Deleted data source %s", source_id)
        return source

    def test_connection(self, source_id: str) -> ConnectionTestResult:
        source = self.get_data_source(source_id)
        if source.status == SourceStatus.ERROR:
            return ConnectionTestResult(
                success=False, message=f"Could not connect to {source.name}."
            )
        return ConnectionTestResult(
            success=True, message=f"Connection to {source.name} is healthy."
        )

    def update_schedule(self, source_id: str, schedule: ScheduleUpdate) -> DataSource:
        source = self.get_data_source(source_id)
        updated = source.model_copy(
            update={"schedule": Schedule(**schedule.model_dump())}
        )
        self.data_sources[source_id] = updated
        return updated

    def toggle_schedule(self, source_id: str) -> DataSource:
        source = self.get_data_source(source_id)
        current = source.schedule or Schedule()
        enabled = not current.enabled
        schedule = current.model_copy(
            update={
                "enabled": enabled,
                "next_run": (
                    describe_next_run(current.frequency, current.time, current.days)
                    if enabled
                    else None
                ),
            }
        )
        updated = source.model_copy(update={"schedule": schedule})
        self.data_sources[source_id] = updated
        return updated

    # ------------------------------------------------------------------
    # File processing
    # ------------------------------------------------------------------

    def get_job(self, job_id: str) -> ProcessingJob:
        job = self.processing_jobs.get(job_id)
        if job is None:
            raise NotFoundError(f"Processing job '{job_id}' not found")
        return job

    def control_job(self, job_id: str, action: str) -> ProcessingJob:
        """Apply pause / resume / retry to a job."""
        job = self.get_job(job_id)
        transitions = {
            "pause": ({JobStatus.PENDING, JobStatus.PROCESSING}, JobStatus.PAUSED),
            "resume": ({JobStatus.PAUSED}, JobStatus.PROCESSING),
            "retry": ({JobStatus.ERROR}, JobStatus.PENDING),
        }
        allowed, target = transitions[action]
        if job.status not in allowed:
            raise StubValidationError(f"Cannot {action} a job that is {job.status.value}")

        changes: dict = {"status": target}
        if action == "retry":
            changes.update(progress=0.0, records_processed=0, errors=0)
        updated = job.model_copy(update=changes)
        self.processing_jobs[job_id] = updated
        return updated

    def start_upload(self, filenames: Sequence[str], target_sink: str, sizes: Sequence[int]) -> UploadResult:
        if not filenames:
            raise StubValidationError("No files uploaded")
        job = ProcessingJob(
            id=_new_id("job"),
            file_name=", ".join(filenames),
            file_type=filenames[0].rsplit(".", 1)[-1].lower() if "." in filenames[0] else None,
            size=f"{sum(sizes) / 1_000_000:.1f} MB",
            status=JobStatus.PENDING,
            start_time="-",
            duration="-",
            source=f"Upload -> {target_sink}",
        )
        self.processing_jobs[job.id] = job
        logger.info("Queued upload job %s with %d file(s)", job.id, len(filenames))
        return UploadResult(
            job_id=job.id,
            message=f"{len(filenames)} file(s) queued for {target_sink}",
            files_processed=len(filenames),
        )

    # ------------------------------------------------------------------
    # Error detection
    # ------------------------------------------------------------------

    def list_errors(self, page: int, limit: int) -> tuple[list[DataError], int]:
        rows = list(self.errors.values())
        start = (page - 1) * limit
        return rows[start:start + limit], len(rows)

    def get_error(self, error_id: str) -> DataError:
        error = self.errors.get(error_id)
        if error is None:
            raise NotFoundError(f"Error '{error_id}' not found")
        return error

    def ignore_error(self, error_id: str) -> DataError:
        error = self.get_error(error_id).model_copy(update={"status": ErrorStatus.IGNORED})
        self.errors[error_id] = error
        return error

    def get_correction_rule(self, rule_id: str) -> CorrectionRule:
        rule = self.correction_rules.get(rule_id)
        if rule is None:
            raise NotFoundError(f"Correction rule '{rule_id}' not found")
        return rule

    def create_correction_rule(self, payload: CorrectionRuleCreate) -> CreatedResource:
        rule = CorrectionRule(id=_new_id("rule"), **payload.model_dump())
        self.correction_rules[rule.id] = rule
        return CreatedResource(id=rule.id, message="Correction rule created")

    def update_correction_rule(self, rule_id: str, payload: CorrectionRuleUpdate) -> CorrectionRule:
        rule = self.get_correction_rule(rule_id).model_copy(
            update=payload.model_dump(exclude_none=True)
        )
        self.correction_rules[rule_id] = rule
        return rule

    def apply_correction_rule(self, rule_id: str, error_ids: Sequence[str]) -> dict:
        rule = self.get_correction_rule(rule_id)
        targets = [self.get_error(error_id) for error_id in error_ids]
        for error in targets:
            self.errors[error.id] = error.model_copy(update={"status": ErrorStatus.CORRECTED})
        self.correction_rules[rule_id] = rule.model_copy(
            update={"applied_count": rule.applied_count + len(targets)}
        )
        return {"ruleId": rule_id, "corrected": len(targets)}

    # ------------------------------------------------------------------
    # Anomaly detection
    # ------------------------------------------------------------------

    def acknowledge_anomaly(self, anomaly_id: str) -> Anomaly:
        anomaly = self.anomalies.get(anomaly_id)
        if anomaly is None:
            raise NotFoundError(f"Anomaly '{anomaly_id}' not found")
        updated = anomaly.model_copy(update={"status": AnomalyStatus.ACKNOWLEDGED})
        self.anomalies[anomaly_id] = updated
        return updated

    def get_alert_rule(self, rule_id: str) -> AlertRule:
        rule = self.alert_rules.get(rule_id)
        if rule is None:
            raise NotFoundError(f"Alert rule '{rule_id}' not found")
        return rule

    def create_alert_rule(self, payload: AlertRuleCreate) -> CreatedResource:
        fields = payload.model_dump()
        channels = fields.pop("alert_channels")
        rule = AlertRule(id=_new_id("alert"), channels=channels, **fields)
        self.alert_rules[rule.id] = rule
        return CreatedResource(id=rule.id, message="Alert rule created")

    def update_alert_rule(self, rule_id: str, payload: AlertRuleUpdate) -> AlertRule:
        changes = payload.model_dump(exclude_none=True)
        if "alert_channels" in changes:
            changes["channels"] = changes.pop("alert_channels")
        rule = self.get_alert_rule(rule_id).model_copy(update=changes)
        self.alert_rules[rule_id] = rule
        return rule

    # ------------------------------------------------------------------
    # Performance
    # ------------------------------------------------------------------

    def performance_metrics(self, time_range: str) -> PerformanceSnapshot:
        return PerformanceSnapshot(
            range=time_range,
            metrics=[
                PerformanceMetric(name="Throughput", value=12450, unit="records/min", trend="up", trend_value=8.5, status=HealthStatus.GOOD),
                PerformanceMetric(name="Latency", value=245, unit="ms", trend="down", trend_value=12.3, status=HealthStatus.GOOD),
                PerformanceMetric(name="Error Rate", value=2.1, unit="%", trend="up", trend_value=0.8, status=HealthStatus.WARNING),
                PerformanceMetric(name="Success Rate", value=97.9, unit="%", trend="stable", trend_value=0.1, status=HealthStatus.GOOD),
            ],
        )

    def job_performance(self) -> list[JobPerformance]:
        return [
            JobPerformance(name="Data Extraction", throughput="8,450 records/min", latency="120ms", status=HealthStatus.GOOD),
            JobPerformance(name="Data Validation", throughput="8,200 records/min", latency="85ms", status=HealthStatus.GOOD),
            JobPerformance(name="Data Transformation", throughput="6,800 records/min", latency="340ms", status=HealthStatus.WARNING, bottleneck=True),
            JobPerformance(name="Data Loading", throughput="7,200 records/min", latency="180ms", status=HealthStatus.GOOD),
        ]

    def scheduled_jobs_performance(self) -> list[ScheduledJobPerformance]:
        return [
            ScheduledJobPerformance(
                id=pipeline.id,
                name=pipeline.name,
                frequency=pipeline.frequency,
                avg_duration="2m 10s",
                success_rate=99.1 if pipeline.success else 82.4,
                last_run=pipeline.last_run,
            )
            for pipeline in self.scheduled_pipelines()
        ]

    def resource_usage(self) -> ResourceUsage:
        return ResourceUsage(
            resources=[
                SystemResource(name="CPU Usage", usage=self.system_health.cpu, total=100, unit="%", status=HealthStatus.GOOD),
                SystemResource(name="Memory Usage", usage=6.8, total=16, unit="GB", status=HealthStatus.GOOD),
                SystemResource(name="Disk Usage", usage=234, total=1000, unit="GB", status=HealthStatus.GOOD),
                SystemResource(name="Network I/O", usage=125, total=1000, unit="Mbps", status=HealthStatus.GOOD),
            ]
        )

    # ------------------------------------------------------------------
    # Seed data
    # ------------------------------------------------------------------

    def _seed(self) -> None:
        for source in (
            DataSource(
                id="src-001", name="Sales API", type=SourceType.API, status=SourceStatus.ACTIVE,
                last_sync="37 minutes ago", records_count=15420,
                config={"url": "https://api.example.com/sales"},
                schedule=Schedule(enabled=True, frequency=ScheduleFrequency.HOURLY, next_run="In 23 minutes"),
            ),
            DataSource(
                id="src-002", name="Customer Files", type=SourceType.FOLDER, status=SourceStatus.ACTIVE,
                last_sync="Yesterday at 2:00 AM", records_count=12678,
                config={"path": "/data/customers"},
                schedule=Schedule(enabled=True, frequency=ScheduleFrequency.DAILY, time="02:00", next_run="Tomorrow at 02:00"),
            ),
            DataSource(
                id="src-003", name="SharePoint Reports", type=SourceType.SHAREPOINT, status=SourceStatus.ERROR,
                last_sync="3 days ago", records_count=5200,
                config={"site": "reports"},
                schedule=Schedule(enabled=False, frequency=ScheduleFrequency.WEEKLY, time="09:00", days=["Monday"]),
            ),
        ):
            self.data_sources[source.id] = source

        for job in (
            ProcessingJob(id="job-001", file_name="sales_data_2024.csv", file_type="csv", size="2.4 MB", status=JobStatus.COMPLETED, progress=100, records_processed=15420, total_records=15420, start_time="10:30 AM", duration="2m 34s", errors=0, source="File Folder"),
            ProcessingJob(id="job-002", file_name="customer_records.json", file_type="json", size="5.1 MB", status=JobStatus.PROCESSING, progress=65, records_processed=8234, total_records=12678, start_time="10:45 AM", duration="1m 12s", errors=3, source="API"),
            ProcessingJob(id="job-003", file_name="inventory_data.xlsx", file_type="excel", size="1.8 MB", status=JobStatus.ERROR, progress=45, records_processed=2341, total_records=5200, start_time="10:20 AM", duration="45s", errors=12, source="SharePoint"),
            ProcessingJob(id="job-004", file_name="analytics_export.parquet", file_type="parquet", size="8.7 MB", status=JobStatus.PENDING, progress=0, records_processed=0, total_records=25000, start_time="-", duration="-", errors=0, source="File Folder"),
            ProcessingJob(id="job-005", file_name="backup_files.zip", file_type="zip", size="15.2 MB", status=JobStatus.PAUSED, progress=30, records_processed=1200, total_records=4000, start_time="09:15 AM", duration="3m 45s", errors=1, source="SharePoint"),
        ):
            self.processing_jobs[job.id] = job

        error_kinds = [
            ("validation", Severity.HIGH, "Invalid email format", "email"),
            ("missing", Severity.MEDIUM, "Required field is empty", "customer_id"),
            ("format", Severity.LOW, "Date not in ISO 8601 format", "order_date"),
            ("duplicate", Severity.MEDIUM, "Duplicate primary key", "order_id"),
            ("constraint", Severity.CRITICAL, "Negative quantity", "quantity"),
        ]
        for index in range(1, 24):
            kind, severity, message, column = error_kinds[index % len(error_kinds)]
            error = DataError(
                id=f"err-{index:03d}",
                type=kind,
                severity=severity,
                message=message,
                source="Customer Files" if index % 2 else "Sales API",
                file_name="customer_records.json" if index % 2 else "sales_data_2024.csv",
                row_number=100 + index * 7,
                column_name=column,
                detected_at=f"{index} minutes ago",
                status=ErrorStatus.OPEN,
                affected_records=index % 4 + 1,
            )
            self.errors[error.id] = error

        for rule in (
            CorrectionRule(id="rule-001", name="Email Validation Rule", type="validate", condition="email !~ /^[^@]+@[^@]+$/", action="flag", severity=Severity.HIGH, applied_count=156),
            CorrectionRule(id="rule-002", name="Date Normalisation", type="transform", condition="order_date is not ISO 8601", action="replace", replacement="ISO 8601", severity=Severity.LOW, auto_apply=True, applied_count=89),
        ):
            self.correction_rules[rule.id] = rule

        for anomaly in (
            Anomaly(id="anom-001", type="volume", severity=Severity.HIGH, title="Unusual spike in record volume", description="Record volume 340% above the 7-day average", source="Sales API", detected_at="12 minutes ago", value="52,340 records", expected_range="10,000 - 15,000 records", confidence=94.5, alerts_sent=2),
            Anomaly(id="anom-002", type="outlier", severity=Severity.MEDIUM, title="Outlier order values", description="Order totals beyond 4 standard deviations", source="Customer Files", detected_at="1 hour ago", value="$98,000", expected_range="$10 - $5,000", confidence=87.2, alerts_sent=1),
            Anomaly(id="anom-003", type="pattern", severity=Severity.LOW, title="Late-night ingestion pattern", description="Files arriving outside the usual window", source="SharePoint Reports", detected_at="5 hours ago", value="03:14 AM", expected_range="08:00 AM - 06:00 PM", confidence=71.0, status=AnomalyStatus.ACKNOWLEDGED),
        ):
            self.anomalies[anomaly.id] = anomaly

        for alert_rule in (
            AlertRule(id="alert-001", name="Volume Spike Detection", type="volume", metric="record_count", operator=">", threshold=200, condition="Record count > 200% of average", severity=Severity.HIGH, channels=["email", "slack"], triggered_count=12, last_triggered="12 minutes ago"),
            AlertRule(id="alert-002", name="Error Rate Threshold", type="threshold", metric="error_rate", operator=">", threshold=5, condition="Error rate > 5%", severity=Severity.CRITICAL, channels=["email", "webhook"], triggered_count=3),
        ):
            self.alert_rules[alert_rule.id] = alert_rule
