"""HTTP client wrapper for the dashboard backend.

Single choke point for every outbound call. Builds the URL from the configured
base address, attaches JSON headers, performs the request and parses the
response envelope.

Failures never propagate as exceptions. Unreachable backends, non-2xx
statuses, non-JSON bodies and bodies that do not match the expected envelope
all come back as ``ApiResponse(success=False, data=None, message=...)``.
Callers branch on ``success``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from etl_dashboard.errors import EnvelopeError, TransportError
from etl_dashboard.models.responses import ApiResponse, Envelope

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """Non-throwing HTTP client for the backend REST API.

    Parameters
    ----------
    base_url:
        Backend base URL (e.g. "http://localhost:8000"). Endpoint paths are
        appended verbatim.
    transport:
        Optional httpx transport, used to route requests to a mock or an
        in-process ASGI app.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        json: Any = None,
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
        form: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        response_model: type[BaseModel] = ApiResponse,
    ) -> Envelope:
        """Perform a request and return the parsed envelope.

        Multipart requests (``files`` given, even empty) do not get the JSON
        ``Content-Type`` default, so the transport can set its own boundary.
        """
        url = f"{self._base_url}{endpoint}"
        merged_headers = {} if files is not None else dict(_JSON_HEADERS)
        merged_headers.update(headers or {})

        started = time.monotonic()
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    json=json,
                    files=files,
                    data=form,
                    headers=merged_headers,
                )
            duration_ms = round((time.monotonic() - started) * 1000, 1)

            if not response.is_success:
                raise TransportError(
                    f"HTTP error! status: {response.status_code}",
                    status_code=response.status_code,
                )

            envelope = self._parse(response, response_model)

        except (httpx.HTTPError, httpx.InvalidURL, TransportError, EnvelopeError) as exc:
            logger.warning(
                "API request failed: %s %s",
                method,
                endpoint,
                extra={
                    "endpoint": endpoint,
                    "method": method,
                    "error_reason": str(exc) or exc.__class__.__name__,
                    "duration_ms": round((time.monotonic() - started) * 1000, 1),
                },
            )
            return ApiResponse.failure(self._failure_message(endpoint, exc))

        logger.debug(
            "API request %s %s -> %d",
            method,
            endpoint,
            response.status_code,
            extra={
                "endpoint": endpoint,
                "method": method,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return envelope  # type: ignore[return-value]

    @staticmethod
    def _parse(response: httpx.Response, response_model: type[BaseModel]) -> BaseModel:
        """Decode the JSON body and validate it against the envelope model."""
        try:
            body = response.json()
        except ValueError as exc:
            raise EnvelopeError("Response body is not valid JSON") from exc

        try:
            return response_model.model_validate(body)
        except ValidationError as exc:
            raise EnvelopeError(
                f"Response does not match {response_model.__name__}: "
                f"{exc.error_count()} validation error(s)"
            ) from exc

    def _failure_message(self, endpoint: str, exc: Exception) -> str:
        reason = str(exc) or exc.__class__.__name__
        return (
            f"Failed to fetch {endpoint} ({reason}). Please ensure the backend at "
            f"{self._base_url} is running and DASHBOARD_API_URL is set correctly."
        )
