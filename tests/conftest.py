"""
Pytest configuration and fixtures for cypherlink tests.
"""

import pytest

from cypherlink.core.config import Settings
from cypherlink.graph.transport import FakeHttpTransport

COMMIT_URL = "http://localhost:7474/db/data/transaction/7/commit"


@pytest.fixture
def settings() -> Settings:
    """Provide test settings pointing at a local server."""
    return Settings(
        neo4j_url="http://localhost:7474",
        neo4j_user="neo4j",
        neo4j_password="testpassword",
        http_timeout_seconds=5.0,
    )


@pytest.fixture
def fake_transport() -> FakeHttpTransport:
    """Fake transport with no scripted responses."""
    return FakeHttpTransport()


@pytest.fixture
def success_payload() -> dict:
    """Statement response that opens a transaction and returns one row."""
    return {
        "results": [{"columns": ["n"], "data": [{"row": [1], "meta": [None]}]}],
        "errors": [],
        "commit": COMMIT_URL,
    }
