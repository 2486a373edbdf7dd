"""Placeholder values for sections whose backend read failed.

Placeholders keep a page readable while the backend is down. They are never
passed off as live data: ``resolve_display`` always flags them and carries a
banner explaining why they are shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from etl_dashboard.cache.query_cache import QueryState, QueryStatus
from etl_dashboard.models.schemas import (
    DashboardStats,
    HealthStatus,
    PerformanceMetric,
    ResourceUsage,
    SystemHealth,
    SystemResource,
)

PLACEHOLDER_DASHBOARD_STATS = DashboardStats(
    total_sources=12,
    files_processed_today=1247,
    active_errors=3,
    success_rate=98.7,
)

PLACEHOLDER_SYSTEM_HEALTH = SystemHealth(cpu=45, memory=68, storage=23, network=12)

PLACEHOLDER_PERFORMANCE_METRICS = [
    PerformanceMetric(name="Throughput", value=12450, unit="records/min", trend="up", trend_value=8.5, status=HealthStatus.GOOD),
    PerformanceMetric(name="Latency", value=245, unit="ms", trend="down", trend_value=12.3, status=HealthStatus.GOOD),
    PerformanceMetric(name="Error Rate", value=2.1, unit="%", trend="up", trend_value=0.8, status=HealthStatus.WARNING),
    PerformanceMetric(name="Success Rate", value=97.9, unit="%", trend="stable", trend_value=0.1, status=HealthStatus.GOOD),
]

PLACEHOLDER_RESOURCE_USAGE = ResourceUsage(
    resources=[
        SystemResource(name="CPU Usage", usage=45, total=100, unit="%", status=HealthStatus.GOOD),
        SystemResource(name="Memory Usage", usage=6.8, total=16, unit="GB", status=HealthStatus.GOOD),
        SystemResource(name="Disk Usage", usage=234, total=1000, unit="GB", status=HealthStatus.GOOD),
        SystemResource(name="Network I/O", usage=125, total=1000, unit="Mbps", status=HealthStatus.GOOD),
    ]
)


@dataclass(frozen=True)
class DisplayValue:
    """What a section should render, and whether it is live."""

    value: Any
    is_placeholder: bool
    banner: str | None = None


def resolve_display(state: QueryState, placeholder: Any) -> DisplayValue:
    """Pick live data when available, otherwise a clearly flagged placeholder.

    Live data is kept even while a refetch is failing; the banner then notes
    that the values may be stale.
    """
    if state.has_data:
        banner = None
        if state.status == QueryStatus.ERROR:
            banner = f"Showing last known data: {state.error}"
        return DisplayValue(value=state.data, is_placeholder=False, banner=banner)

    if state.status == QueryStatus.ERROR:
        reason = state.error or "backend unavailable"
        banner = f"Live data unavailable, showing sample values ({reason})"
    else:
        banner = "Live data not loaded yet, showing sample values"
    return DisplayValue(value=placeholder, is_placeholder=True, banner=banner)
