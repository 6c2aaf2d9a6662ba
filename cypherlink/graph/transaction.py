"""
Transaction over Neo4j's transactional Cypher REST endpoint.

A Transaction collects statements and runs them in one exchange:

1. POST every statement to the transaction endpoint.
2. If the status is not 200/201, dispatch a best-effort DELETE to the
   endpoint and fail with TransportFailure.
3. If the body reports statement errors, fail with StatementError
   (no rollback is dispatched for this case).
4. Otherwise POST an empty body to the returned commit URL and resolve
   with the statement results once it returns 200; any other status
   fails with CommitFailure.

Anything else that goes wrong (connection errors, malformed JSON) is
wrapped in TransportException. Nothing is retried.

A Transaction is single use: execute() moves it out of BUILDING before
it returns, so add_query() is rejected from that point on, even while
the exchange is still in flight.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Coroutine, Mapping
from enum import Enum
from typing import Any

from pydantic import ValidationError

from cypherlink.core.logging import reset_transaction_id, set_transaction_id
from cypherlink.graph.exceptions import (
    CommitFailure,
    InvalidParameterError,
    StatementError,
    TransactionError,
    TransactionReuseError,
    TransportException,
    TransportFailure,
)
from cypherlink.graph.models import (
    ParameterValue,
    Statement,
    TransactionRequest,
    TransactionResponse,
)
from cypherlink.graph.transport import HttpTransportProtocol

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_CREATED = 201

# Strong references to in-flight rollbacks so they are not collected early
_background_tasks: set[asyncio.Task[None]] = set()


class TransactionState(Enum):
    """Lifecycle of a Transaction.

    - BUILDING: accepting statements
    - EXECUTING: exchange in flight
    - COMMITTED: resolved with results
    - FAILED: rejected; covers rolled-back and failed-after-commit alike
    """

    BUILDING = "BUILDING"
    EXECUTING = "EXECUTING"
    COMMITTED = "COMMITTED"
    FAILED = "FAILED"


class Transaction:
    """Single-use batch of Cypher statements executed atomically.

    Usage:
        tx = client.create_transaction()
        tx.add_query("CREATE (u:User {id: $id})", {"id": 1}).add_query(
            "MATCH (u:User) RETURN count(u)"
        )
        results = await tx.execute()
    """

    def __init__(
        self,
        transaction_url: str,
        auth: str,
        transport: HttpTransportProtocol,
        background_tasks: set[asyncio.Task[None]] | None = None,
    ) -> None:
        """Initialize an empty transaction.

        Args:
            transaction_url: Transaction endpoint to POST statements to
            auth: Precomputed Basic credential (base64 of "user:password")
            transport: HTTP capability used for every request
            background_tasks: Set that holds a dispatched rollback until it
                finishes, so its owner can wait for it before shutting down.
                Defaults to a module-level set.
        """
        self._transaction_url = transaction_url
        self._auth = auth
        self._transport = transport
        self._statements: list[Statement] = []
        self._state = TransactionState.BUILDING
        self._transaction_id = uuid.uuid4().hex[:12]
        self._results: list[dict[str, Any]] | None = None
        self._rollback_task: asyncio.Task[None] | None = None
        self._background_tasks = (
            background_tasks if background_tasks is not None else _background_tasks
        )

    @property
    def transaction_url(self) -> str:
        return self._transaction_url

    @property
    def transaction_id(self) -> str:
        """Identifier attached to this transaction's log records."""
        return self._transaction_id

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def used(self) -> bool:
        """True once execute() has been invoked."""
        return self._state is not TransactionState.BUILDING

    @property
    def statements(self) -> tuple[Statement, ...]:
        """Accumulated statements in submission order."""
        return tuple(self._statements)

    @property
    def results(self) -> list[dict[str, Any]] | None:
        """Results recorded from the statement request, if it succeeded."""
        return self._results

    @property
    def rollback_task(self) -> asyncio.Task[None] | None:
        """Best-effort rollback dispatched after a TransportFailure."""
        return self._rollback_task

    def add_query(
        self,
        statement: Any,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> Transaction:
        """Append a statement to the transaction.

        Args:
            statement: Query text, or a QueryBuilder (rendered via str())
            parameters: Named bind values for the statement

        Returns:
            This transaction, for chaining

        Raises:
            TransactionReuseError: If execute() has already been invoked
            InvalidParameterError: If a parameter value is not JSON-serializable
        """
        if self.used:
            raise TransactionReuseError()
        text = str(statement)
        try:
            entry = Statement(statement=text, parameters=dict(parameters or {}))
        except ValidationError as e:
            raise InvalidParameterError(
                f"Invalid parameters for statement: {e}", statement=text, cause=e
            ) from e
        self._statements.append(entry)
        return self

    def execute(self) -> Coroutine[Any, Any, list[dict[str, Any]]]:
        """Run the accumulated statements and commit them.

        The transaction is marked used before this method returns, so
        the append window closes at call time rather than at first await.
        The returned coroutine must be awaited: until it runs, the
        transaction stays in EXECUTING and no request is sent.

        Returns:
            Awaitable resolving to the per-statement results

        Raises:
            TransactionReuseError: If execute() has already been invoked
            TransactionError: From the awaitable, when the exchange fails
        """
        if self.used:
            raise TransactionReuseError("Transaction has already been executed")
        self._state = TransactionState.EXECUTING
        return self._run()

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "Accept": "application/json; charset=UTF-8",
            "Authorization": f"Basic {self._auth}",
        }

    async def _run(self) -> list[dict[str, Any]]:
        token = set_transaction_id(self._transaction_id)
        try:
            results = await self._exchange()
        except TransactionError as e:
            self._state = TransactionState.FAILED
            logger.warning("Transaction failed: %s", e)
            raise
        except Exception as e:
            self._state = TransactionState.FAILED
            logger.warning("Transaction failed unexpectedly: %s", e)
            raise TransportException(e) from e
        else:
            self._state = TransactionState.COMMITTED
            return results
        finally:
            reset_transaction_id(token)

    async def _exchange(self) -> list[dict[str, Any]]:
        headers = self._headers()
        body = TransactionRequest(statements=self._statements).model_dump_json()

        logger.debug(
            "Submitting %d statement(s) to %s",
            len(self._statements),
            self._transaction_url,
        )
        response = await self._transport.request(
            "POST", self._transaction_url, headers, body.encode("utf-8")
        )
        if response.status_code not in (HTTP_OK, HTTP_CREATED):
            self._dispatch_rollback(headers)
            raise TransportFailure(response.status_code)

        payload = TransactionResponse.model_validate_json(response.body)
        if payload.errors:
            first = payload.errors[0]
            raise StatementError(
                first.message,
                code=first.code,
                errors=[error.model_dump() for error in payload.errors],
            )
        if not payload.commit:
            msg = "Response did not include a commit URL"
            raise ValueError(msg)

        self._results = payload.results
        commit_response = await self._transport.request(
            "POST", payload.commit, headers, b""
        )
        if commit_response.status_code != HTTP_OK:
            raise CommitFailure(commit_response.status_code, results=self._results)

        logger.info("Committed %d statement(s)", len(self._statements))
        return self._results

    def _dispatch_rollback(self, headers: dict[str, str]) -> None:
        logger.warning("Statement request failed, rolling back %s", self._transaction_url)
        task = asyncio.create_task(self._rollback(headers))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        self._rollback_task = task

    async def _rollback(self, headers: dict[str, str]) -> None:
        # Outcome is logged only; the caller already has the TransportFailure
        try:
            response = await self._transport.request(
                "DELETE", self._transaction_url, headers
            )
        except asyncio.CancelledError:
            logger.warning("Rollback of %s abandoned", self._transaction_url)
            raise
        except Exception:
            logger.warning(
                "Rollback request to %s failed", self._transaction_url, exc_info=True
            )
            return
        logger.debug("Rollback returned %d", response.status_code)

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self._transaction_id!r}, state={self._state.value}, "
            f"statements={len(self._statements)})"
        )
