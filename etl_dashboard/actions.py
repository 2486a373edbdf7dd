"""Mutation actions: create / update / delete / toggle calls with revalidation.

Every action follows the same sequence:

1. Validate form input client-side. Missing required fields produce a
   "Missing Information" notice and no request is sent.
2. Call the resource access function.
3. On success, invalidate the cache keys covering the affected resources and
   return a confirmation notice. On failure, return a destructive notice and
   leave the cache untouched. No optimistic updates are made, so there is
   nothing to roll back.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from etl_dashboard import keys
from etl_dashboard.cache.query_cache import QueryCache
from etl_dashboard.errors import FormValidationError
from etl_dashboard.integration.resources import DashboardApi
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
from etl_dashboard.models.responses import Envelope

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

FormData = Mapping[str, Any]


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    """Transient user-facing notification."""

    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a mutation action.

    ``response`` is None when client-side validation stopped the request.
    ``invalidated`` lists the cache keys that were revalidated.
    """

    ok: bool
    notice: Notice
    response: Envelope | None = None
    invalidated: list[str] = field(default_factory=list)


def _failure(title: str, description: str) -> Notice:
    return Notice(title, description, NoticeVariant.DESTRUCTIVE)


def parse_form(model: type[M], form: FormData | M) -> M:
    """Validate form input against a request model.

    Raises
    ------
    FormValidationError
        If required fields are missing or invalid. ``fields`` names them.
    """
    if isinstance(form, model):
        return form
    try:
        return model.model_validate(dict(form))
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(part) for part in err["loc"]) or "__root__" for err in exc.errors()}
        )
        raise FormValidationError(fields=fields) from exc


class DashboardActions:
    """Mutation actions bound to a resource API and the query cache."""

    def __init__(self, api: DashboardApi, cache: QueryCache) -> None:
        self._api = api
        self._cache = cache

    async def _perform(
        self,
        call: Awaitable[Envelope],
        *,
        invalidates: Sequence[str],
        success: Notice,
        failure: Notice,
    ) -> ActionResult:
        response = await call
        if not response.success:
            logger.warning(
                "Mutation failed: %s",
                failure.title,
                extra={"error_reason": response.message},
            )
            return ActionResult(ok=False, notice=failure, response=response)

        invalidated = await self._cache.invalidate(*invalidates)
        return ActionResult(
            ok=True, notice=success, response=response, invalidated=invalidated
        )

    @staticmethod
    def _rejected(exc: FormValidationError) -> ActionResult:
        logger.info("Form rejected before submission", extra={"error_reason": exc.fields})
        return ActionResult(ok=False, notice=_failure("Missing Information", exc.message))

    # ------------------------------------------------------------------
    # Data sources
    # ------------------------------------------------------------------

    async def create_data_source(self, source_type: str | None, form: FormData) -> ActionResult:
        """Create a data source. Every form field is kept in its ``config``."""
        if not source_type:
            return self._rejected(FormValidationError("Please select a source type.", ["type"]))
        try:
            payload = parse_form(
                DataSourceCreate,
                {"name": form.get("name") or "", "type": source_type, "config": dict(form)},
            )
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.create_data_source(payload),
            invalidates=[keys.DATA_SOURCES],
            success=Notice("Data Source Created", "Your data source has been created successfully."),
            failure=_failure("Creation Failed", "Failed to create data source. Please try again."),
        )

    async def update_data_source(self, source_id: str, form: FormData | DataSourceUpdate) -> ActionResult:
        try:
            payload = parse_form(DataSourceUpdate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.update_data_source(source_id, payload),
            invalidates=[keys.DATA_SOURCES],
            success=Notice("Data Source Updated", "Your data source has been updated successfully."),
            failure=_failure("Update Failed", "Failed to update data source. Please try again."),
        )

    async def delete_data_source(self, source_id: str) -> ActionResult:
        return await self._perform(
            self._api.delete_data_source(source_id),
            invalidates=[keys.DATA_SOURCES, keys.SCHEDULED_PIPELINES],
            success=Notice("Source Deleted", "Data source has been deleted successfully."),
            failure=_failure("Error", "Failed to delete data source. Please try again."),
        )

    async def test_connection(self, source_id: str) -> ActionResult:
        """Test a data source connection. Invalidates nothing."""
        response = await self._api.test_data_source(source_id)
        if not response.success or response.data is None:
            return ActionResult(
                ok=False,
                notice=_failure("Test Failed", "Unable to test connection. Please try again."),
                response=response,
            )

        result = response.data
        if result.success:
            notice = Notice("Connection Successful", result.message)
        else:
            notice = _failure("Connection Failed", result.message)
        return ActionResult(ok=result.success, notice=notice, response=response)

    async def update_schedule(self, source_id: str, form: FormData | ScheduleUpdate) -> ActionResult:
        try:
            schedule = parse_form(ScheduleUpdate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.update_schedule(source_id, schedule),
            invalidates=[keys.DATA_SOURCES, keys.SCHEDULED_PIPELINES],
            success=Notice("Schedule Updated", "Data source schedule has been saved successfully."),
            failure=_failure("Update Failed", "Failed to update schedule. Please try again."),
        )

    async def toggle_schedule(self, source_id: str) -> ActionResult:
        return await self._perform(
            self._api.toggle_schedule(source_id),
            invalidates=[keys.DATA_SOURCES, keys.SCHEDULED_PIPELINES],
            success=Notice("Schedule Updated", "Data source schedule has been toggled successfully."),
            failure=_failure("Error", "Failed to update schedule. Please try again."),
        )

    # ------------------------------------------------------------------
    # File processing
    # ------------------------------------------------------------------

    async def upload_files(
        self,
        files: Sequence[UploadFile],
        target_sink: str,
        options: FormData | UploadOptions | None = None,
    ) -> ActionResult:
        if not files:
            return self._rejected(
                FormValidationError("Please select at least one file to upload.", ["files"])
            )
        if not target_sink or not target_sink.strip():
            return self._rejected(
                FormValidationError("Please choose a target data sink.", ["target_sink"])
            )
        try:
            parsed_options = parse_form(UploadOptions, options) if options is not None else None
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.upload_files(files, target_sink.strip(), parsed_options),
            invalidates=[keys.PROCESSING_JOBS, keys.RECENT_JOBS],
            success=Notice("Upload Started", f"{len(files)} file(s) queued for processing."),
            failure=_failure("Upload Failed", "Failed to upload files. Please try again."),
        )

    async def pause_job(self, job_id: str) -> ActionResult:
        return await self._job_action(self._api.pause_job(job_id), "Paused", "pause")

    async def resume_job(self, job_id: str) -> ActionResult:
        return await self._job_action(self._api.resume_job(job_id), "Resumed", "resume")

    async def retry_job(self, job_id: str) -> ActionResult:
        return await self._job_action(self._api.retry_job(job_id), "Retried", "retry")

    async def _job_action(self, call: Awaitable[Envelope], done: str, verb: str) -> ActionResult:
        return await self._perform(
            call,
            invalidates=[keys.PROCESSING_JOBS, keys.RECENT_JOBS],
            success=Notice(f"Job {done}", f"The processing job has been {done.lower()}."),
            failure=_failure("Action Failed", f"Failed to {verb} job. Please try again."),
        )

    # ------------------------------------------------------------------
    # Error detection
    # ------------------------------------------------------------------

    async def ignore_error(self, error_id: str) -> ActionResult:
        return await self._perform(
            self._api.ignore_error(error_id),
            invalidates=[keys.DATA_ERRORS, keys.DASHBOARD_STATS],
            success=Notice("Error Ignored", "The error has been marked as ignored."),
            failure=_failure("Action Failed", "Failed to ignore error. Please try again."),
        )

    async def apply_correction_rule(self, rule_id: str, error_ids: Sequence[str]) -> ActionResult:
        if not error_ids:
            return self._rejected(
                FormValidationError("Please select at least one error.", ["error_ids"])
            )
        return await self._perform(
            self._api.apply_correction_rule(rule_id, error_ids),
            invalidates=[keys.DATA_ERRORS, keys.CORRECTION_RULES, keys.DASHBOARD_STATS],
            success=Notice("Rule Applied", "Correction rule has been applied successfully."),
            failure=_failure("Application Failed", "Failed to apply correction rule. Please try again."),
        )

    async def create_correction_rule(self, form: FormData | CorrectionRuleCreate) -> ActionResult:
        try:
            rule = parse_form(CorrectionRuleCreate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.create_correction_rule(rule),
            invalidates=[keys.CORRECTION_RULES],
            success=Notice("Rule Created", "Correction rule has been created successfully."),
            failure=_failure("Creation Failed", "Failed to create correction rule. Please try again."),
        )

    async def update_correction_rule(
        self, rule_id: str, form: FormData | CorrectionRuleUpdate
    ) -> ActionResult:
        try:
            rule = parse_form(CorrectionRuleUpdate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.update_correction_rule(rule_id, rule),
            invalidates=[keys.CORRECTION_RULES],
            success=Notice("Rule Updated", "Correction rule has been updated successfully."),
            failure=_failure("Update Failed", "Failed to update correction rule. Please try again."),
        )

    # ------------------------------------------------------------------
    # Anomaly detection
    # ------------------------------------------------------------------

    async def acknowledge_anomaly(self, anomaly_id: str) -> ActionResult:
        return await self._perform(
            self._api.acknowledge_anomaly(anomaly_id),
            invalidates=[keys.ANOMALIES],
            success=Notice("Anomaly Acknowledged", "The anomaly has been acknowledged."),
            failure=_failure("Action Failed", "Failed to acknowledge anomaly. Please try again."),
        )

    async def create_anomaly_rule(self, form: FormData | AlertRuleCreate) -> ActionResult:
        try:
            rule = parse_form(AlertRuleCreate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.create_anomaly_rule(rule),
            invalidates=[keys.ANOMALY_RULES],
            success=Notice("Rule Created", "Alert rule has been created successfully."),
            failure=_failure("Creation Failed", "Failed to create alert rule. Please try again."),
        )

    async def update_anomaly_rule(self, rule_id: str, form: FormData | AlertRuleUpdate) -> ActionResult:
        try:
            rule = parse_form(AlertRuleUpdate, form)
        except FormValidationError as exc:
            return self._rejected(exc)

        return await self._perform(
            self._api.update_anomaly_rule(rule_id, rule),
            invalidates=[keys.ANOMALY_RULES],
            success=Notice("Rule Updated", "Alert rule has been updated successfully."),
            failure=_failure("Update Failed", "Failed to update alert rule. Please try again."),
        )
