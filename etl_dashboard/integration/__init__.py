"""Backend integration — HTTP client wrapper and resource access functions."""

from etl_dashboard.integration.api_client import ApiClient
from etl_dashboard.integration.resources import DashboardApi

__all__ = [
    "ApiClient",
    "DashboardApi",
]
