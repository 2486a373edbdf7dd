"""Data source endpoints.

- GET    /api/data-sources — list sources
- POST   /api/data-sources — create a source
- PUT    /api/data-sources/{source_id} — update a source
- DELETE /api/data-sources/{source_id} — delete a source
- POST   /api/data-sources/{source_id}/test — test the connection
- PUT    /api/data-sources/{source_id}/schedule — replace the schedule
- POST   /api/data-sources/{source_id}/schedule/toggle — enable / disable the schedule
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from etl_dashboard import keys
from etl_dashboard.models.requests import DataSourceCreate, DataSourceUpdate, ScheduleUpdate
from etl_dashboard.stub_backend.envelope import ok
from etl_dashboard.stub_backend.store import SampleStore

logger = logging.getLogger(__name__)


def create_data_sources_router(*, store: SampleStore) -> APIRouter:
    """Factory that creates the data sources router bound to ``store``."""

    router = APIRouter(prefix=keys.DATA_SOURCES, tags=["data-sources"])

    @router.get("")
    async def list_sources() -> dict:
        return ok(list(store.data_sources.values()))

    @router.post("")
    async def create_source(body: DataSourceCreate) -> dict:
        return ok(store.create_data_source(body), "Data source created")

    @router.put("/{source_id}")
    async def update_source(source_id: str, body: DataSourceUpdate) -> dict:
        return ok(store.update_data_source(source_id, body), "Data source updated")

    @router.delete("/{source_id}")
    async def delete_source(source_id: str) -> dict:
        store.delete_data_source(source_id)
        return ok({"id": source_id}, "Data source deleted")

    @router.post("/{source_id}/test")
    async def test_source(source_id: str) -> dict:
        result = store.test_connection(source_id)
        logger.info("Connection test for %s: %s", source_id, result.success)
        return ok(result)

    @router.put("/{source_id}/schedule")
    async def update_schedule(source_id: str, body: ScheduleUpdate) -> dict:
        return ok(store.update_schedule(source_id, body), "Schedule updated")

    @router.post("/{source_id}/schedule/toggle")
    async def toggle_schedule(source_id: str) -> dict:
        return ok(store.toggle_schedule(source_id), "Schedule toggled")

    return router
