"""
HTTP transport used by transactions.

This module provides:
- HttpTransportProtocol: the request capability a Transaction calls through
- HttpxTransport: real transport on a shared httpx.AsyncClient
- FakeHttpTransport: in-memory fake that records requests for tests

Transports return the status code and raw body of every response and
never retry; interpreting the response is the caller's job.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of an HTTP response."""

    status_code: int
    body: bytes = b""

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.body.decode("utf-8"))


@dataclass(frozen=True)
class RecordedRequest:
    """A request captured by FakeHttpTransport."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None = None

    def json(self) -> Any:
        """Decode the request body as JSON."""
        return json.loads(self.body.decode("utf-8")) if self.body else None


@runtime_checkable
class HttpTransportProtocol(Protocol):
    """Protocol defining the transport interface."""

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        """Send one request and return its response."""
        ...


class HttpxTransport:
    """Transport backed by httpx.AsyncClient.

    Usage:
        async with HttpxTransport(timeout=10.0) as transport:
            response = await transport.request("POST", url, headers, body)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with a timeout or an existing client.

        Args:
            timeout: Socket/read timeout in seconds for a client created here
            client: Existing client to use; its owner is responsible for closing it
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def is_closed(self) -> bool:
        """Check if the underlying client is closed."""
        return self._client.is_closed

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        """Send one request.

        Raises:
            httpx.HTTPError: On connection errors, timeouts, or invalid URLs
        """
        logger.debug("HTTP %s %s", method, url)
        response = await self._client.request(
            method,
            url,
            headers=headers,
            content=body,
        )
        logger.debug("HTTP %s %s -> %d", method, url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()


Responder = Callable[[RecordedRequest], TransportResponse]


@dataclass
class FakeHttpTransport:
    """In-memory fake transport for testing.

    Replies with queued responses in order, falling back to ``handler``
    when the queue is empty. Queued exceptions are raised instead of
    returned.

    Usage:
        fake = FakeHttpTransport()
        fake.queue_json(201, {"results": [], "errors": [], "commit": "http://db/commit"})
        fake.queue_response(200)
        results = await Transaction(url, auth, fake).execute()
        assert [r.method for r in fake.requests] == ["POST", "POST"]
    """

    handler: Responder | None = None
    requests: list[RecordedRequest] = field(default_factory=list)
    _queue: deque[TransportResponse | Exception] = field(default_factory=deque)

    def queue_response(self, status_code: int, body: bytes = b"") -> None:
        """Queue a raw response."""
        self._queue.append(TransportResponse(status_code=status_code, body=body))

    def queue_json(self, status_code: int, payload: Any) -> None:
        """Queue a response whose body is ``payload`` encoded as JSON."""
        self.queue_response(status_code, json.dumps(payload).encode("utf-8"))

    def queue_exception(self, exc: Exception) -> None:
        """Queue an exception to raise from the next request."""
        self._queue.append(exc)

    def requests_for(self, method: str) -> list[RecordedRequest]:
        """Recorded requests with the given HTTP method."""
        return [r for r in self.requests if r.method == method.upper()]

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        """Record the request and reply from the queue or handler."""
        await asyncio.sleep(0)  # Yield to event loop for true async
        recorded = RecordedRequest(
            method=method.upper(), url=url, headers=dict(headers), body=body
        )
        self.requests.append(recorded)
        if self._queue:
            reply = self._queue.popleft()
            if isinstance(reply, Exception):
                raise reply
            return reply
        if self.handler is not None:
            return self.handler(recorded)
        return TransportResponse(status_code=200)
