# Graph module for the Neo4j transactional HTTP endpoint
"""
Graph layer for Neo4j REST operations including:
- Neo4jHttpClient: creates transactions and query builders
- Transaction: single-use execute-then-commit statement batch
- QueryBuilder: assembles statement text from fragments
- Cypher formatting and result simplification helpers
"""

from cypherlink.graph.client import Neo4jHttpClient, basic_auth_token
from cypherlink.graph.cypher_format import to_named_props, to_props, to_sets
from cypherlink.graph.exceptions import (
    CommitFailure,
    CypherLinkError,
    InvalidParameterError,
    StatementError,
    TransactionError,
    TransactionReuseError,
    TransportException,
    TransportFailure,
    UnsupportedPropertyTypeError,
)
from cypherlink.graph.models import Statement, TransactionResponse
from cypherlink.graph.query_builder import QueryBuilder
from cypherlink.graph.results import get_simple_data, get_simple_list_data
from cypherlink.graph.transaction import Transaction, TransactionState
from cypherlink.graph.transport import (
    FakeHttpTransport,
    HttpTransportProtocol,
    HttpxTransport,
    TransportResponse,
)

__all__ = [
    # Exceptions
    "CypherLinkError",
    "TransactionReuseError",
    "InvalidParameterError",
    "TransactionError",
    "TransportFailure",
    "StatementError",
    "CommitFailure",
    "TransportException",
    "UnsupportedPropertyTypeError",
    # Client
    "Neo4jHttpClient",
    "basic_auth_token",
    # Transaction
    "Transaction",
    "TransactionState",
    "Statement",
    "TransactionResponse",
    "QueryBuilder",
    # Transport
    "HttpTransportProtocol",
    "HttpxTransport",
    "FakeHttpTransport",
    "TransportResponse",
    # Helpers
    "to_props",
    "to_named_props",
    "to_sets",
    "get_simple_data",
    "get_simple_list_data",
]
