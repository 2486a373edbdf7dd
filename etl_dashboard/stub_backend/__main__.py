"""Serve the stub backend: ``python -m etl_dashboard.stub_backend``."""

import uvicorn

from etl_dashboard.config.settings import DashboardSettings
from etl_dashboard.logging_config import configure_logging
from etl_dashboard.stub_backend.app import create_stub_app

if __name__ == "__main__":
    settings = DashboardSettings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    uvicorn.run(create_stub_app(), host="127.0.0.1", port=settings.stub_port)
