"""In-memory stub of the dashboard backend."""

from etl_dashboard.stub_backend.app import create_stub_app
from etl_dashboard.stub_backend.store import SampleStore

__all__ = ["SampleStore", "create_stub_app"]
