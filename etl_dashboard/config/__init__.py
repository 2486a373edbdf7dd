"""Configuration module — settings and refresh policies."""

from etl_dashboard.config.refresh_policies import (
    DEFAULT_REFRESH_POLICIES,
    RefreshPolicy,
    Resource,
    load_refresh_policies,
)
from etl_dashboard.config.settings import DashboardSettings

__all__ = [
    "DEFAULT_REFRESH_POLICIES",
    "DashboardSettings",
    "RefreshPolicy",
    "Resource",
    "load_refresh_policies",
]
