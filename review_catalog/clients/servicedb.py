"""HTTP client for the upstream servicedb API.

Every call returns one of three results instead of raising:
``Ok(body)``, ``NotFound()`` or ``Failure(status, detail)``. Callers decide
what a missing entity means for them; ``unwrap`` turns anything but ``Ok``
into ``UpstreamFailure``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Union

import httpx

from review_catalog.core.config import settings
from review_catalog.core.trace import TRACE_HEADER, get_trace_id
from review_catalog.services.errors import UpstreamFailure

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    body: Any = None


@dataclass(frozen=True)
class NotFound:
    path: str = ""


@dataclass(frozen=True)
class Failure:
    status: Optional[int]
    detail: str


UpstreamResult = Union[Ok, NotFound, Failure]


def unwrap(result: UpstreamResult) -> Any:
    """Return the body of ``Ok``; raise ``UpstreamFailure`` otherwise."""
    if isinstance(result, Ok):
        return result.body
    if isinstance(result, NotFound):
        raise UpstreamFailure(
            f"unexpected not found: {result.path}",
            status=HTTPStatus.NOT_FOUND,
        )
    raise UpstreamFailure(result.detail, status=result.status)


class ServiceDbClient:
    """Thin JSON wrapper over an ``httpx.AsyncClient`` bound to servicedb."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def get(self, path: str) -> UpstreamResult:
        return await self._send("GET", path)

    async def post(self, path: str, payload: Any) -> UpstreamResult:
        return await self._send("POST", path, payload)

    async def put(self, path: str, payload: Any) -> UpstreamResult:
        return await self._send("PUT", path, payload)

    async def delete(self, path: str) -> UpstreamResult:
        return await self._send("DELETE", path)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _send(
            self,
            method: str,
            path: str,
            payload: Any = None) -> UpstreamResult:
        headers = {TRACE_HEADER: get_trace_id()}
        try:
            response = await self.http.request(
                method,
                path,
                json=payload,
                headers=headers,
            )
        except httpx.HTTPError as error:
            log.error(
                "servicedb_transport_error",
                extra={"method": method, "path": path, "err": str(error)})
            return Failure(status=None, detail=f"{method} {path}: {error}")

        if response.status_code == HTTPStatus.NOT_FOUND:
            return NotFound(path=path)
        if response.is_error:
            log.error(
                "servicedb_error_status",
                extra={"method": method, "path": path,
                       "status": response.status_code})
            return Failure(
                status=response.status_code,
                detail=f"{method} {path} -> {response.status_code}",
            )
        if not response.content:
            return Ok(None)
        try:
            return Ok(response.json())
        except ValueError as error:
            return Failure(
                status=response.status_code,
                detail=f"{method} {path}: invalid json: {error}",
            )


_client: ServiceDbClient | None = None


def build_http_client(base_url: str | None = None) -> httpx.AsyncClient:
    """AsyncClient with the configured timeouts and connection pool."""
    return httpx.AsyncClient(
        base_url=base_url or settings.servicedb_url,
        timeout=httpx.Timeout(
            settings.servicedb_timeout,
            connect=settings.servicedb_connect_timeout,
        ),
        limits=httpx.Limits(
            max_connections=settings.servicedb_max_connections),
        headers={"Accept": "application/json"},
    )


async def get_client() -> ServiceDbClient:
    """
    Process-wide servicedb client, created on first use.
    """
    global _client
    if _client is None:
        _client = ServiceDbClient(build_http_client())
    return _client


async def close_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
