"""
Swappable HTTP transport for the Gemini REST calls.

The resolver only depends on the Transport protocol, so tests can feed it a
scripted fake instead of patching httpx. Transport-level failures (DNS,
connection reset, timeout) are raised; HTTP error statuses are returned.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

import httpx
from pydantic import BaseModel

from gemini.config import ATTEMPT_TIMEOUT_SECS

logger = logging.getLogger(__name__)


class TransportResponse(BaseModel):
    status_code: int
    body: Any = None    # parsed JSON, or None when the body isn't JSON

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict] = None,
    ) -> TransportResponse:
        ...


class HttpxTransport:
    """Transport backed by httpx.AsyncClient with a per-call timeout."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = ATTEMPT_TIMEOUT_SECS,
    ):
        self._client = client
        self._timeout = timeout

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict] = None,
    ) -> TransportResponse:
        if self._client is not None:
            resp = await self._client.request(
                method, url, params=params, json=json, timeout=self._timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(method, url, params=params, json=json)

        try:
            body = resp.json()
        except ValueError:
            logger.debug("Non-JSON body from %s %s (status %s)", method, url, resp.status_code)
            body = None

        return TransportResponse(status_code=resp.status_code, body=body)


@asynccontextmanager
async def open_transport(transport: Optional[Transport] = None) -> AsyncIterator[Transport]:
    """
    Yield `transport` unchanged if given, else an HttpxTransport over one
    AsyncClient that lives for the whole block, so every call of a
    resolution reuses the same connection pool.
    """
    if transport is not None:
        yield transport
        return

    async with httpx.AsyncClient(timeout=ATTEMPT_TIMEOUT_SECS) as client:
        yield HttpxTransport(client=client)
