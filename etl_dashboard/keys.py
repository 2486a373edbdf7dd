"""Endpoint paths and cache keys.

A cache key is the endpoint path plus the query string of every parameter
that affects the result, e.g. ``/api/errors?page=2&limit=10``. Resource
functions request exactly these paths, so a key always names the request
that fills it. Query parameters keep their argument order.
"""

from __future__ import annotations

from urllib.parse import quote, urlencode

DASHBOARD_STATS = "/api/dashboard/stats"
RECENT_JOBS = "/api/jobs/recent"
SCHEDULED_PIPELINES = "/api/pipelines/scheduled"
SYSTEM_HEALTH = "/api/system/health"
DATA_SOURCES = "/api/data-sources"
PROCESSING_JOBS = "/api/processing/jobs"
PROCESSING_UPLOAD = "/api/processing/upload"
DATA_ERRORS = "/api/errors"
CORRECTION_RULES = "/api/errors/rules"
ANOMALIES = "/api/anomalies"
ANOMALY_RULES = "/api/anomalies/rules"
PERFORMANCE_METRICS = "/api/performance/metrics"
JOB_PERFORMANCE = "/api/performance/jobs"
SCHEDULED_JOBS_PERFORMANCE = "/api/performance/scheduled-jobs"
RESOURCE_USAGE = "/api/performance/resources"


def with_query(path: str, **params: object) -> str:
    """Append ``params`` to ``path`` as a query string, skipping None values."""
    present = {name: value for name, value in params.items() if value is not None}
    if not present:
        return path
    return f"{path}?{urlencode(present)}"


def member(collection: str, resource_id: str, *action: str) -> str:
    """Path of one member of ``collection``, optionally with a trailing action.

    >>> member(DATA_SOURCES, "src 1", "schedule", "toggle")
    '/api/data-sources/src%201/schedule/toggle'
    """
    segments = [collection.rstrip("/"), quote(str(resource_id), safe="")]
    segments.extend(action)
    return "/".join(segments)


def key_path(key: str) -> str:
    """The path portion of a cache key (everything before ``?``)."""
    return key.split("?", 1)[0]


def key_matches(key: str, target: str) -> bool:
    """True if ``target`` names ``key`` exactly or names its whole resource path."""
    return key == target or key_path(key) == target


# ---------------------------------------------------------------------------
# Parameterised read keys
# ---------------------------------------------------------------------------


def recent_jobs_key(limit: int = 10) -> str:
    return with_query(RECENT_JOBS, limit=limit)


def data_errors_key(page: int = 1, limit: int = 10) -> str:
    return with_query(DATA_ERRORS, page=page, limit=limit)


def performance_metrics_key(time_range: str = "24h") -> str:
    return with_query(PERFORMANCE_METRICS, range=time_range)
