"""Property tests for response envelopes.

- The client never raises: any non-2xx status or unparseable body becomes a
  ``success: false`` envelope with ``data`` unset.
- Paged envelopes never hold more items than their limit.
- The stub backend answers every error with the same envelope shape.
"""

from __future__ import annotations

import asyncio

import httpx
from fastapi.testclient import TestClient
from hypothesis import given, settings, strategies as st
from pydantic import ValidationError

from etl_dashboard.integration.api_client import ApiClient
from etl_dashboard.models.responses import PaginatedResponse
from etl_dashboard.stub_backend import create_stub_app


# --- Strategies ---

error_statuses = st.sampled_from([400, 401, 403, 404, 409, 422, 429, 500, 502, 503, 504])
endpoints = st.sampled_from(
    ["/api/dashboard/stats", "/api/data-sources", "/api/errors?page=1&limit=10", "/api/anomalies"]
)
garbage_bodies = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)), min_size=1, max_size=50
).filter(lambda t: not t.strip().startswith(("{", "[", '"')))
missing_ids = st.from_regex(r"missing-[a-z0-9]{1,12}", fullmatch=True)


def _request(handler, endpoint: str):
    client = ApiClient("http://backend.test", transport=httpx.MockTransport(handler))
    return asyncio.run(client.request(endpoint))


@settings(max_examples=50)
@given(status=error_statuses, endpoint=endpoints)
def test_non_2xx_becomes_failure_envelope(status: int, endpoint: str) -> None:
    result = _request(
        lambda request: httpx.Response(status, json={"success": True, "data": [1]}), endpoint
    )

    assert result.success is False
    assert result.data is None
    assert f"status: {status}" in result.message


@settings(max_examples=50)
@given(body=garbage_bodies, endpoint=endpoints)
def test_unparseable_body_becomes_failure_envelope(body: str, endpoint: str) -> None:
    result = _request(lambda request: httpx.Response(200, text=body), endpoint)

    assert result.success is False
    assert result.data is None


@settings(max_examples=100)
@given(
    items=st.lists(st.integers(), max_size=30),
    limit=st.integers(min_value=1, max_value=30),
)
def test_paged_envelope_respects_limit(items: list[int], limit: int) -> None:
    body = {"data": items, "total": len(items), "page": 1, "limit": limit}

    try:
        page = PaginatedResponse[int].model_validate(body)
    except ValidationError:
        assert len(items) > limit
    else:
        assert len(page.data) <= page.limit


_stub_client = TestClient(create_stub_app())


@settings(max_examples=30)
@given(resource_id=missing_ids)
def test_stub_unknown_ids_return_404_envelope(resource_id: str) -> None:
    for method, path in (
        ("DELETE", f"/api/data-sources/{resource_id}"),
        ("POST", f"/api/data-sources/{resource_id}/test"),
        ("POST", f"/api/processing/jobs/{resource_id}/pause"),
        ("POST", f"/api/errors/{resource_id}/ignore"),
        ("POST", f"/api/anomalies/{resource_id}/acknowledge"),
    ):
        resp = _stub_client.request(method, path)
        body = resp.json()

        assert resp.status_code == 404
        assert body["success"] is False
        assert body["data"] is None
        assert resource_id in body["message"]
