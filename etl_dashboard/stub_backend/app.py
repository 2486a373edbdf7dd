"""FastAPI application serving the dashboard endpoints from sample data.

Used for local development of presentation code and by the end-to-end tests,
which drive it in-process through ``httpx.ASGITransport``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from etl_dashboard.stub_backend.error_handler import register_error_handlers
from etl_dashboard.stub_backend.request_id import RequestIdMiddleware
from etl_dashboard.stub_backend.routers.data_sources import create_data_sources_router
from etl_dashboard.stub_backend.routers.overview import create_overview_router
from etl_dashboard.stub_backend.routers.processing import create_processing_router
from etl_dashboard.stub_backend.routers.quality import create_quality_router
from etl_dashboard.stub_backend.store import SampleStore

logger = logging.getLogger(__name__)


def create_stub_app(store: SampleStore | None = None) -> FastAPI:
    """Create the stub backend. A fresh ``SampleStore`` is seeded when none is given."""
    if store is None:
        store = SampleStore()

    app = FastAPI(title="ETL Dashboard Stub Backend", version="1.0.0")
    app.state.store = store

    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)

    app.include_router(create_overview_router(store=store))
    app.include_router(create_data_sources_router(store=store))
    app.include_router(create_processing_router(store=store))
    app.include_router(create_quality_router(store=store))

    logger.info(
        "Stub backend ready with %d data sources and %d jobs",
        len(store.data_sources),
        len(store.processing_jobs),
    )
    return app
