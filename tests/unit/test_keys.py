"""Unit tests for endpoint paths and cache keys."""

from etl_dashboard import keys


class TestWithQuery:
    def test_no_params_returns_path(self):
        assert keys.with_query("/api/anomalies") == "/api/anomalies"

    def test_none_values_are_skipped(self):
        assert keys.with_query("/api/errors", page=1, limit=None) == "/api/errors?page=1"

    def test_argument_order_is_kept(self):
        assert keys.with_query("/x", b=2, a=1) == "/x?b=2&a=1"

    def test_values_are_encoded(self):
        assert keys.with_query("/x", q="a b&c") == "/x?q=a+b%26c"


class TestMember:
    def test_plain_member(self):
        assert keys.member(keys.DATA_SOURCES, "src-1") == "/api/data-sources/src-1"

    def test_member_with_action(self):
        assert (
            keys.member(keys.DATA_SOURCES, "src-1", "schedule", "toggle")
            == "/api/data-sources/src-1/schedule/toggle"
        )

    def test_id_is_percent_encoded(self):
        assert keys.member(keys.ANOMALIES, "a/b c") == "/api/anomalies/a%2Fb%20c"


class TestParameterisedKeys:
    def test_defaults(self):
        assert keys.recent_jobs_key() == "/api/jobs/recent?limit=10"
        assert keys.data_errors_key() == "/api/errors?page=1&limit=10"
        assert keys.performance_metrics_key() == "/api/performance/metrics?range=24h"

    def test_distinct_pages_give_distinct_keys(self):
        assert keys.data_errors_key(2, 10) == "/api/errors?page=2&limit=10"
        assert keys.data_errors_key(2, 10) != keys.data_errors_key(3, 10)


class TestKeyMatching:
    def test_exact_match(self):
        assert keys.key_matches(keys.DATA_SOURCES, keys.DATA_SOURCES)

    def test_path_covers_all_parameterisations(self):
        assert keys.key_matches(keys.data_errors_key(4, 25), keys.DATA_ERRORS)

    def test_exact_parameterised_target_only_matches_itself(self):
        target = keys.data_errors_key(1, 10)
        assert keys.key_matches(keys.data_errors_key(1, 10), target)
        assert not keys.key_matches(keys.data_errors_key(2, 10), target)

    def test_sibling_paths_do_not_match(self):
        assert not keys.key_matches(keys.CORRECTION_RULES, keys.DATA_ERRORS)
        assert not keys.key_matches(keys.ANOMALY_RULES, keys.ANOMALIES)

    def test_key_path(self):
        assert keys.key_path("/api/errors?page=2&limit=10") == "/api/errors"
        assert keys.key_path("/api/anomalies") == "/api/anomalies"
