"""Composition root for the dashboard client.

Wires settings, logging, the HTTP client wrapper, the resource access layer,
the query cache, cached queries and mutation actions into one Dashboard.
The cache is created here and injected, never held as a module global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from etl_dashboard.actions import DashboardActions
from etl_dashboard.cache.query_cache import QueryCache, QueryState
from etl_dashboard.config.refresh_policies import load_refresh_policies
from etl_dashboard.config.settings import DashboardSettings
from etl_dashboard.fallbacks import DisplayValue, resolve_display
from etl_dashboard.integration.api_client import ApiClient
from etl_dashboard.integration.resources import DashboardApi
from etl_dashboard.logging_config import configure_logging
from etl_dashboard.queries import DashboardQueries

logger = logging.getLogger(__name__)


@dataclass
class Dashboard:
    """Everything presentation code needs to read and change backend state."""

    settings: DashboardSettings
    api: DashboardApi
    cache: QueryCache
    queries: DashboardQueries
    actions: DashboardActions

    def display(self, state: QueryState, placeholder: Any) -> DisplayValue:
        """Resolve what a section shows for ``state``, falling back to ``placeholder``."""
        return resolve_display(state, placeholder)

    async def aclose(self) -> None:
        """Stop polling and drop all cached queries."""
        await self.cache.aclose()
        logger.info("Dashboard client closed")


def create_dashboard(
    settings: DashboardSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logs: bool = True,
) -> Dashboard:
    """Create and wire a Dashboard.

    Settings are read from the environment when not given. ``transport``
    routes requests elsewhere (e.g. an in-process stub backend).
    """
    if settings is None:
        settings = DashboardSettings()

    if configure_logs:
        configure_logging(settings.log_level, json_output=settings.log_json)

    policies = load_refresh_policies(settings.refresh_policies_path)

    client = ApiClient(settings.api_url, transport=transport)
    api = DashboardApi(client)
    cache = QueryCache()

    logger.info("Dashboard client configured for %s", settings.api_url)

    return Dashboard(
        settings=settings,
        api=api,
        cache=cache,
        queries=DashboardQueries(api, cache, policies),
        actions=DashboardActions(api, cache),
    )
