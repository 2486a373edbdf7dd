"""Overview and performance endpoints.

- GET /api/dashboard/stats — summary counters
- GET /api/jobs/recent?limit= — most recent processing jobs
- GET /api/pipelines/scheduled — scheduled pipelines derived from data sources
- GET /api/system/health — resource gauges
- GET /api/performance/metrics?range= — headline metrics
- GET /api/performance/jobs — per-stage throughput
- GET /api/performance/scheduled-jobs — scheduled pipeline run history
- GET /api/performance/resources — resource usage
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from etl_dashboard import keys
from etl_dashboard.stub_backend.envelope import ok
from etl_dashboard.stub_backend.store import SampleStore


def create_overview_router(*, store: SampleStore) -> APIRouter:
    """Factory that creates the overview router bound to ``store``."""

    router = APIRouter(tags=["overview"])

    @router.get(keys.DASHBOARD_STATS)
    async def dashboard_stats() -> dict:
        return ok(store.dashboard_stats())

    @router.get(keys.RECENT_JOBS)
    async def recent_jobs(limit: int = Query(default=10, ge=1, le=100)) -> dict:
        return ok(store.recent_jobs(limit))

    @router.get(keys.SCHEDULED_PIPELINES)
    async def scheduled_pipelines() -> dict:
        return ok(store.scheduled_pipelines())

    @router.get(keys.SYSTEM_HEALTH)
    async def system_health() -> dict:
        return ok(store.system_health)

    @router.get(keys.PERFORMANCE_METRICS)
    async def performance_metrics(time_range: str = Query(default="24h", alias="range")) -> dict:
        return ok(store.performance_metrics(time_range))

    @router.get(keys.JOB_PERFORMANCE)
    async def job_performance() -> dict:
        return ok(store.job_performance())

    @router.get(keys.SCHEDULED_JOBS_PERFORMANCE)
    async def scheduled_jobs_performance() -> dict:
        return ok(store.scheduled_jobs_performance())

    @router.get(keys.RESOURCE_USAGE)
    async def resource_usage() -> dict:
        return ok(store.resource_usage())

    return router
