"""Unit tests for the cached dashboard queries."""

from __future__ import annotations

import asyncio

import pytest

from etl_dashboard import keys
from etl_dashboard.cache.query_cache import QueryCache, QueryStatus
from etl_dashboard.config.refresh_policies import RefreshPolicy, Resource
from etl_dashboard.integration.api_client import ApiClient
from etl_dashboard.integration.resources import DashboardApi
from etl_dashboard.queries import DashboardQueries


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def api(backend) -> DashboardApi:
    return DashboardApi(ApiClient("http://backend.test", transport=backend.transport))


@pytest.fixture
def queries(api: DashboardApi, cache: QueryCache) -> DashboardQueries:
    return DashboardQueries(api, cache)


class TestRefreshIntervals:
    """Only volatile resources poll, at their documented cadence."""

    @pytest.mark.parametrize(
        "resource,interval",
        [
            (Resource.SYSTEM_HEALTH, 30),
            (Resource.PROCESSING_JOBS, 5),
            (Resource.RESOURCE_USAGE, 10),
            (Resource.DASHBOARD_STATS, None),
            (Resource.DATA_SOURCES, None),
            (Resource.DATA_ERRORS, None),
            (Resource.ANOMALIES, None),
        ],
    )
    def test_default_intervals(self, queries: DashboardQueries, resource, interval) -> None:
        assert queries.refresh_interval(resource) == interval

    def test_partial_policy_table_falls_back_to_defaults(self, api, cache) -> None:
        queries = DashboardQueries(
            api, cache, {Resource.SYSTEM_HEALTH: RefreshPolicy(interval_seconds=2)}
        )

        assert queries.refresh_interval(Resource.SYSTEM_HEALTH) == 2
        assert queries.refresh_interval(Resource.PROCESSING_JOBS) == 5

    @pytest.mark.asyncio
    async def test_polling_resources_poll(self, queries: DashboardQueries, cache: QueryCache) -> None:
        subs = [queries.system_health(), queries.processing_jobs(), queries.resource_usage()]
        static = [queries.dashboard_stats(), queries.data_sources()]

        for key in (keys.SYSTEM_HEALTH, keys.PROCESSING_JOBS, keys.RESOURCE_USAGE):
            assert cache.is_polling(key)
        for key in (keys.DASHBOARD_STATS, keys.DATA_SOURCES):
            assert not cache.is_polling(key)

        for sub in subs + static:
            sub.close()

    @pytest.mark.asyncio
    async def test_short_override_polls_backend(self, api, cache, backend) -> None:
        backend.route("GET", keys.SYSTEM_HEALTH, {"success": True, "data": {"cpu": 1}})
        queries = DashboardQueries(
            api, cache, {Resource.SYSTEM_HEALTH: RefreshPolicy(interval_seconds=0.01)}
        )

        sub = queries.system_health()
        await asyncio.sleep(0.1)
        sub.close()

        assert len(backend.calls("GET", keys.SYSTEM_HEALTH)) >= 3


class TestKeys:
    """Each query is cached under its endpoint key."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,args,key",
        [
            ("dashboard_stats", (), keys.DASHBOARD_STATS),
            ("recent_jobs", (), "/api/jobs/recent?limit=10"),
            ("recent_jobs", (5,), "/api/jobs/recent?limit=5"),
            ("scheduled_pipelines", (), keys.SCHEDULED_PIPELINES),
            ("data_sources", (), keys.DATA_SOURCES),
            ("data_errors", (2, 10), "/api/errors?page=2&limit=10"),
            ("correction_rules", (), keys.CORRECTION_RULES),
            ("anomalies", (), keys.ANOMALIES),
            ("anomaly_rules", (), keys.ANOMALY_RULES),
            ("performance_metrics", ("7d",), "/api/performance/metrics?range=7d"),
            ("job_performance", (), keys.JOB_PERFORMANCE),
            ("scheduled_jobs_performance", (), keys.SCHEDULED_JOBS_PERFORMANCE),
        ],
    )
    async def test_query_key(self, queries, cache, backend, method, args, key) -> None:
        sub = getattr(queries, method)(*args)
        await sub.wait()

        assert sub.key == key
        assert cache.keys() == [key]
        assert backend.requests[0].url.raw_path.decode() == key
        sub.close()

    @pytest.mark.asyncio
    async def test_pages_are_cached_separately(self, queries, cache, backend) -> None:
        def page(n: int) -> dict:
            rows = [{"id": f"err-{n}-{i}"} for i in range(10)]
            return {"data": rows, "total": 45, "page": n, "limit": 10}

        backend.route("GET", "/api/errors?page=2&limit=10", page(2))
        backend.route("GET", "/api/errors?page=3&limit=10", page(3))

        second = queries.data_errors(2, 10)
        third = queries.data_errors(3, 10)
        await second.wait()
        await third.wait()

        assert second.key != third.key
        assert len(second.data) == 10
        assert second.state.response.total == 45
        assert {row.id for row in second.data}.isdisjoint(row.id for row in third.data)
        second.close()
        third.close()

    @pytest.mark.asyncio
    async def test_listener_is_forwarded(self, queries, backend) -> None:
        backend.route("GET", keys.ANOMALIES, {"success": True, "data": []})
        seen: list[QueryStatus] = []

        sub = queries.anomalies(listener=lambda s: seen.append(s.status))
        await sub.wait()

        assert seen == [QueryStatus.LOADING, QueryStatus.SUCCESS]
        sub.close()
