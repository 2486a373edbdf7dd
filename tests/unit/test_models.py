"""Unit tests for envelope, resource and request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from etl_dashboard.models.requests import (
    AlertRuleCreate,
    CorrectionRuleCreate,
    DataSourceCreate,
    ScheduleUpdate,
    UploadOptions,
    describe_next_run,
)
from etl_dashboard.models.responses import ApiResponse, PaginatedResponse
from etl_dashboard.models.schemas import (
    DataSource,
    ProcessingJob,
    ScheduleFrequency,
    Severity,
    SourceStatus,
    SourceType,
)


class TestApiResponse:
    def test_failure_factory(self):
        resp = ApiResponse.failure("backend down")

        assert resp.success is False
        assert resp.ok is False
        assert resp.data is None
        assert resp.message == "backend down"

    def test_typed_data(self):
        resp = ApiResponse[list[DataSource]].model_validate(
            {"success": True, "data": [{"id": "src-1", "type": "api", "recordsCount": 7}]}
        )

        assert resp.data[0].type == SourceType.API
        assert resp.data[0].records_count == 7

    def test_success_is_required(self):
        with pytest.raises(ValidationError):
            ApiResponse.model_validate({"data": {}})


class TestPaginatedResponse:
    def test_wire_shape_without_success(self):
        resp = PaginatedResponse[dict].model_validate(
            {"data": [{"id": 1}], "total": 45, "page": 2, "limit": 10}
        )

        assert resp.success is True
        assert resp.total == 45

    def test_rejects_page_larger_than_limit(self):
        with pytest.raises(ValidationError):
            PaginatedResponse[int].model_validate(
                {"data": [1, 2, 3], "total": 3, "page": 1, "limit": 2}
            )

    @pytest.mark.parametrize("field,value", [("page", 0), ("limit", 0), ("total", -1)])
    def test_rejects_out_of_range_numbers(self, field, value):
        body = {"data": [], "total": 0, "page": 1, "limit": 10, field: value}

        with pytest.raises(ValidationError):
            PaginatedResponse[int].model_validate(body)


class TestResourceModels:
    def test_unknown_fields_are_kept(self):
        job = ProcessingJob.model_validate({"id": "job-1", "fileName": "a.csv", "owner": "ops"})

        assert job.file_name == "a.csv"
        assert job.model_extra == {"owner": "ops"}

    def test_status_enum_parsing(self):
        source = DataSource.model_validate({"id": "s", "status": "error"})

        assert source.status == SourceStatus.ERROR


class TestScheduleUpdate:
    def test_hourly_drops_time_and_days(self):
        schedule = ScheduleUpdate(
            enabled=True, frequency=ScheduleFrequency.HOURLY, time="10:00", days=["Monday"]
        )

        assert schedule.time is None
        assert schedule.days is None
        assert schedule.next_run == "In 1 hour"

    def test_weekly_keeps_days(self):
        schedule = ScheduleUpdate(
            enabled=True, frequency=ScheduleFrequency.WEEKLY, time="08:00", days=["Friday"]
        )

        assert schedule.days == ["Friday"]
        assert schedule.next_run == "Next Friday at 08:00"

    def test_disabled_has_no_next_run(self):
        schedule = ScheduleUpdate(enabled=False, next_run="Tomorrow at 09:00")

        assert schedule.next_run is None

    def test_wire_format(self):
        wire = ScheduleUpdate(enabled=True, frequency="monthly").to_wire()

        assert wire == {
            "enabled": True,
            "frequency": "monthly",
            "time": "09:00",
            "nextRun": "Next month at 09:00",
        }

    @pytest.mark.parametrize(
        "frequency,days,expected",
        [
            (ScheduleFrequency.DAILY, None, "Tomorrow at 07:00"),
            (ScheduleFrequency.WEEKLY, None, "Next week at 07:00"),
            (ScheduleFrequency.WEEKLY, ["Tuesday", "Friday"], "Next Tuesday at 07:00"),
            (ScheduleFrequency.MONTHLY, None, "Next month at 07:00"),
        ],
    )
    def test_describe_next_run(self, frequency, days, expected):
        assert describe_next_run(frequency, "07:00", days) == expected


class TestRequestModels:
    def test_data_source_requires_type(self):
        with pytest.raises(ValidationError):
            DataSourceCreate(name="x")

    def test_correction_rule_defaults(self):
        rule = CorrectionRuleCreate(name="Trim", condition="name has spaces")

        assert rule.action == "replace"
        assert rule.severity == Severity.MEDIUM
        assert rule.auto_apply is False

    def test_correction_rule_rejects_critical(self):
        with pytest.raises(ValidationError):
            CorrectionRuleCreate(name="n", condition="c", severity="critical")

    def test_correction_rule_rejects_unknown_action(self):
        with pytest.raises(ValidationError):
            CorrectionRuleCreate(name="n", condition="c", action="explode")

    def test_whitespace_only_name_rejected(self):
        with pytest.raises(ValidationError):
            CorrectionRuleCreate(name="   ", condition="c")

    def test_alert_rule_accepts_camel_case_form(self):
        rule = AlertRuleCreate.model_validate(
            {"name": "r", "metric": "m", "threshold": "5", "alertChannels": ["slack"], "autoResolve": True}
        )

        assert rule.threshold == 5.0
        assert rule.alert_channels == ["slack"]
        assert rule.auto_resolve is True

    def test_upload_options_form_values(self):
        options = UploadOptions(validate_schema=True, anomaly_detection=False)

        assert options.to_form() == {"validateSchema": "true", "anomalyDetection": "false"}
