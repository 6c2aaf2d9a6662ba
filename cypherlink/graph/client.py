"""
Neo4j HTTP client: entry point for creating transactions.

The client holds the endpoint and credential, and shares one transport
across every transaction it creates.

Usage:
    async with Neo4jHttpClient(settings=get_settings()) as client:
        qb = client.create_query_builder()
        qb.add(["MATCH (u:User)", "RETURN u.name"])
        tx = client.create_transaction().add_query(qb)
        names = client.get_simple_list_data(await tx.execute())
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any

from cypherlink.core.config import Settings
from cypherlink.graph import cypher_format, results
from cypherlink.graph.query_builder import QueryBuilder
from cypherlink.graph.transaction import Transaction
from cypherlink.graph.transport import HttpTransportProtocol, HttpxTransport

logger = logging.getLogger(__name__)


def basic_auth_token(user: str | None, password: str | None) -> str:
    """Return base64("user:password"), or "" unless both are given."""
    if not user or not password:
        return ""
    return base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")


class Neo4jHttpClient:
    """Factory for transactions against one Neo4j server.

    When no transport is injected an HttpxTransport is created lazily and
    closed by close(); an injected transport is left to its owner.
    close() first waits for rollbacks dispatched by this client's
    transactions, so they are sent before the transport goes away.
    """

    def __init__(
        self,
        settings: Settings,
        transport: HttpTransportProtocol | None = None,
    ) -> None:
        """Initialize client with Settings object.

        Args:
            settings: Settings with neo4j_url, neo4j_user, neo4j_password,
                      neo4j_transaction_path, http_timeout_seconds
            transport: Optional transport shared by created transactions
        """
        self._settings = settings
        self._base_url = settings.neo4j_url.rstrip("/")
        self._auth = basic_auth_token(settings.neo4j_user, settings.neo4j_password)
        self._transport = transport
        self._owns_transport = transport is None
        self._pending_rollbacks: set[asyncio.Task[None]] = set()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def auth(self) -> str:
        """Basic credential sent with every request."""
        return self._auth

    @property
    def transaction_url(self) -> str:
        """Transactional Cypher endpoint."""
        return f"{self._base_url}{self._settings.neo4j_transaction_path}"

    def _get_transport(self) -> HttpTransportProtocol:
        if self._transport is None:
            logger.debug("Creating HTTP transport for %s", self._base_url)
            self._transport = HttpxTransport(timeout=self._settings.http_timeout_seconds)
        return self._transport

    def create_transaction(self) -> Transaction:
        """Create an empty single-use transaction."""
        return Transaction(
            self.transaction_url,
            self._auth,
            self._get_transport(),
            background_tasks=self._pending_rollbacks,
        )

    @staticmethod
    def create_query_builder() -> QueryBuilder:
        """Create an empty query builder."""
        return QueryBuilder()

    async def close(self) -> None:
        """Wait for pending rollbacks, then close the transport if owned.

        Rollback outcomes are already logged by the transaction and are
        not raised here. Safe to call repeatedly.
        """
        if self._pending_rollbacks:
            logger.debug("Waiting for %d pending rollback(s)", len(self._pending_rollbacks))
            await asyncio.gather(*list(self._pending_rollbacks), return_exceptions=True)
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()
            self._transport = None

    async def __aenter__(self) -> Neo4jHttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    get_simple_data = staticmethod(results.get_simple_data)
    get_simple_list_data = staticmethod(results.get_simple_list_data)
    to_props = staticmethod(cypher_format.to_props)
    to_named_props = staticmethod(cypher_format.to_named_props)
    to_sets = staticmethod(cypher_format.to_sets)
