"""Cached queries over the resource access functions.

Each method subscribes to one backend read under its cache key, with the
refresh interval taken from the refresh policy table. Consumers read
``subscription.state`` and close the subscription when they no longer
display the data.
"""

from __future__ import annotations

from etl_dashboard import keys
from etl_dashboard.cache.query_cache import Fetcher, Listener, QueryCache, Subscription
from etl_dashboard.config.refresh_policies import (
    DEFAULT_REFRESH_POLICIES,
    RefreshPolicy,
    Resource,
)
from etl_dashboard.integration.resources import DashboardApi


class DashboardQueries:
    """Subscribes presentation code to backend reads through a QueryCache."""

    def __init__(
        self,
        api: DashboardApi,
        cache: QueryCache,
        policies: dict[Resource, RefreshPolicy] | None = None,
    ) -> None:
        self._api = api
        self._cache = cache
        self._policies = policies if policies is not None else dict(DEFAULT_REFRESH_POLICIES)

    def refresh_interval(self, resource: Resource) -> float | None:
        policy = self._policies.get(resource, DEFAULT_REFRESH_POLICIES[resource])
        return policy.interval_seconds

    def _subscribe(
        self,
        resource: Resource,
        key: str,
        fetcher: Fetcher,
        listener: Listener | None,
    ) -> Subscription:
        return self._cache.subscribe(
            key,
            fetcher,
            refresh_interval=self.refresh_interval(resource),
            listener=listener,
        )

    # Dashboard

    def dashboard_stats(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.DASHBOARD_STATS, keys.DASHBOARD_STATS, self._api.get_dashboard_stats, listener
        )

    def recent_jobs(self, limit: int = 10, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.RECENT_JOBS,
            keys.recent_jobs_key(limit),
            lambda: self._api.get_recent_jobs(limit),
            listener,
        )

    def scheduled_pipelines(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.SCHEDULED_PIPELINES,
            keys.SCHEDULED_PIPELINES,
            self._api.get_scheduled_pipelines,
            listener,
        )

    def system_health(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.SYSTEM_HEALTH, keys.SYSTEM_HEALTH, self._api.get_system_health, listener
        )

    # Data sources

    def data_sources(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.DATA_SOURCES, keys.DATA_SOURCES, self._api.get_data_sources, listener
        )

    # File processing

    def processing_jobs(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.PROCESSING_JOBS,
            keys.PROCESSING_JOBS,
            self._api.get_processing_jobs,
            listener,
        )

    # Error detection

    def data_errors(
        self, page: int = 1, limit: int = 10, listener: Listener | None = None
    ) -> Subscription:
        return self._subscribe(
            Resource.DATA_ERRORS,
            keys.data_errors_key(page, limit),
            lambda: self._api.get_data_errors(page, limit),
            listener,
        )

    def correction_rules(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.CORRECTION_RULES,
            keys.CORRECTION_RULES,
            self._api.get_correction_rules,
            listener,
        )

    # Anomaly detection

    def anomalies(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.ANOMALIES, keys.ANOMALIES, self._api.get_anomalies, listener
        )

    def anomaly_rules(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.ANOMALY_RULES, keys.ANOMALY_RULES, self._api.get_anomaly_rules, listener
        )

    # Performance monitoring

    def performance_metrics(
        self, time_range: str = "24h", listener: Listener | None = None
    ) -> Subscription:
        return self._subscribe(
            Resource.PERFORMANCE_METRICS,
            keys.performance_metrics_key(time_range),
            lambda: self._api.get_performance_metrics(time_range),
            listener,
        )

    def job_performance(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.JOB_PERFORMANCE,
            keys.JOB_PERFORMANCE,
            self._api.get_job_performance,
            listener,
        )

    def scheduled_jobs_performance(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.SCHEDULED_JOBS_PERFORMANCE,
            keys.SCHEDULED_JOBS_PERFORMANCE,
            self._api.get_scheduled_jobs_performance,
            listener,
        )

    def resource_usage(self, listener: Listener | None = None) -> Subscription:
        return self._subscribe(
            Resource.RESOURCE_USAGE,
            keys.RESOURCE_USAGE,
            self._api.get_resource_usage,
            listener,
        )
