"""Per-resource refresh policies and YAML loader.

Volatile operational resources poll on a fixed interval; everything else is
fetched once per mount or key change. The built-in table can be overridden
from a YAML file of the form::

    resources:
      system_health:
        interval_seconds: 15
      data_sources:
        interval_seconds: null
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    """Readable backend resources, one per cached query."""

    DASHBOARD_STATS = "dashboard_stats"
    RECENT_JOBS = "recent_jobs"
    SCHEDULED_PIPELINES = "scheduled_pipelines"
    SYSTEM_HEALTH = "system_health"
    DATA_SOURCES = "data_sources"
    PROCESSING_JOBS = "processing_jobs"
    DATA_ERRORS = "data_errors"
    CORRECTION_RULES = "correction_rules"
    ANOMALIES = "anomalies"
    ANOMALY_RULES = "anomaly_rules"
    PERFORMANCE_METRICS = "performance_metrics"
    JOB_PERFORMANCE = "job_performance"
    SCHEDULED_JOBS_PERFORMANCE = "scheduled_jobs_performance"
    RESOURCE_USAGE = "resource_usage"


class RefreshPolicy(BaseModel):
    """Automatic refresh behaviour for a single resource."""

    interval_seconds: float | None = Field(default=None, gt=0)

    @property
    def polls(self) -> bool:
        return self.interval_seconds is not None


DEFAULT_REFRESH_POLICIES: dict[Resource, RefreshPolicy] = {
    resource: RefreshPolicy() for resource in Resource
}
DEFAULT_REFRESH_POLICIES.update(
    {
        Resource.SYSTEM_HEALTH: RefreshPolicy(interval_seconds=30),
        Resource.PROCESSING_JOBS: RefreshPolicy(interval_seconds=5),
        Resource.RESOURCE_USAGE: RefreshPolicy(interval_seconds=10),
    }
)


def load_refresh_policies(yaml_path: str | None) -> dict[Resource, RefreshPolicy]:
    """Build the refresh policy table, applying overrides from ``yaml_path``.

    Args:
        yaml_path: Path to the YAML override file, or None for defaults only.

    Returns:
        A dict with an entry for every Resource. Unknown resource names and
        invalid entries are logged and skipped.
    """
    policies = dict(DEFAULT_REFRESH_POLICIES)
    if yaml_path is None:
        return policies

    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Refresh policies file not found at %s, using built-in defaults", yaml_path)
        return policies

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse refresh policies YAML at %s: %s", yaml_path, exc)
        return policies

    if not isinstance(raw, dict) or not isinstance(raw.get("resources"), dict):
        logger.warning("Refresh policies YAML missing 'resources' mapping, using built-in defaults")
        return policies

    for name, config in raw["resources"].items():
        try:
            resource = Resource(name)
        except ValueError:
            logger.error("Unknown resource '%s' in refresh policies, skipping", name)
            continue
        try:
            policies[resource] = RefreshPolicy.model_validate(config or {})
        except Exception as exc:
            logger.error("Invalid refresh policy for '%s': %s, skipping", name, exc)

    return policies
