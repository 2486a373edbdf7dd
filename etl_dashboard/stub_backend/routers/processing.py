"""File processing endpoints.

- GET  /api/processing/jobs — list processing jobs
- POST /api/processing/upload — multipart upload; starts a processing job
- POST /api/processing/jobs/{job_id}/pause
- POST /api/processing/jobs/{job_id}/resume
- POST /api/processing/jobs/{job_id}/retry
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, Form, UploadFile

from etl_dashboard import keys
from etl_dashboard.errors import StubValidationError
from etl_dashboard.stub_backend.envelope import ok
from etl_dashboard.stub_backend.store import SampleStore

logger = logging.getLogger(__name__)


def create_processing_router(*, store: SampleStore) -> APIRouter:
    """Factory that creates the processing router bound to ``store``."""

    router = APIRouter(tags=["processing"])

    @router.get(keys.PROCESSING_JOBS)
    async def list_jobs() -> dict:
        return ok(list(store.processing_jobs.values()))

    @router.post(keys.PROCESSING_UPLOAD)
    async def upload(
        files: list[UploadFile] = File(...),
        target_sink: str = Form(...),
        validate_schema: bool | None = Form(default=None, alias="validateSchema"),
        error_correction: bool | None = Form(default=None, alias="errorCorrection"),
        anomaly_detection: bool | None = Form(default=None, alias="anomalyDetection"),
    ) -> dict:
        logger.debug(
            "Upload options: validateSchema=%s errorCorrection=%s anomalyDetection=%s",
            validate_schema,
            error_correction,
            anomaly_detection,
        )
        sizes = []
        for upload_file in files:
            sizes.append(len(await upload_file.read()))
        result = store.start_upload(
            [upload_file.filename or "upload" for upload_file in files], target_sink, sizes
        )
        return ok(result, result.message)

    @router.post(keys.PROCESSING_JOBS + "/{job_id}/{action}")
    async def control_job(job_id: str, action: str) -> dict:
        if action not in ("pause", "resume", "retry"):
            raise StubValidationError(f"Unknown job action '{action}'")
        return ok(store.control_job(job_id, action))

    return router
