"""Unit tests for placeholder resolution."""

from etl_dashboard.cache.query_cache import QueryState, QueryStatus
from etl_dashboard.fallbacks import (
    PLACEHOLDER_DASHBOARD_STATS,
    PLACEHOLDER_SYSTEM_HEALTH,
    resolve_display,
)


class TestResolveDisplay:
    def test_live_data_is_never_flagged(self):
        state = QueryState(key="k", status=QueryStatus.SUCCESS, data={"cpu": 10}, has_data=True)

        display = resolve_display(state, PLACEHOLDER_SYSTEM_HEALTH)

        assert display.value == {"cpu": 10}
        assert display.is_placeholder is False
        assert display.banner is None

    def test_stale_live_data_keeps_value_with_banner(self):
        state = QueryState(
            key="k", status=QueryStatus.ERROR, data={"cpu": 10}, error="timeout", has_data=True
        )

        display = resolve_display(state, PLACEHOLDER_SYSTEM_HEALTH)

        assert display.value == {"cpu": 10}
        assert display.is_placeholder is False
        assert "timeout" in display.banner

    def test_failed_load_uses_flagged_placeholder(self):
        state = QueryState(key="k", status=QueryStatus.ERROR, error="Failed to fetch /api/dashboard/stats")

        display = resolve_display(state, PLACEHOLDER_DASHBOARD_STATS)

        assert display.value is PLACEHOLDER_DASHBOARD_STATS
        assert display.is_placeholder is True
        assert display.banner.startswith("Live data unavailable")
        assert "/api/dashboard/stats" in display.banner

    def test_loading_uses_flagged_placeholder(self):
        state = QueryState(key="k", status=QueryStatus.LOADING)

        display = resolve_display(state, PLACEHOLDER_DASHBOARD_STATS)

        assert display.is_placeholder is True
        assert display.banner == "Live data not loaded yet, showing sample values"

    def test_placeholder_sample_values(self):
        assert PLACEHOLDER_DASHBOARD_STATS.total_sources == 12
        assert PLACEHOLDER_DASHBOARD_STATS.files_processed_today == 1247
        assert PLACEHOLDER_DASHBOARD_STATS.success_rate == 98.7
