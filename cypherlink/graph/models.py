"""
Pydantic models for the transactional Cypher endpoint.

These models define the wire contract: what is POSTed as statements and
what the server is expected to return.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue

# string | number | boolean | null | nested mapping | nested sequence
ParameterValue = JsonValue


class Statement(BaseModel):
    """One Cypher query plus its named parameter bindings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    statement: str = Field(description="Fully assembled Cypher query text")
    parameters: dict[str, ParameterValue] = Field(
        default_factory=dict,
        description="Named bind values",
    )


class TransactionRequest(BaseModel):
    """Body of the statement request, statements in execution order."""

    model_config = ConfigDict(frozen=True)

    statements: list[Statement] = Field(default_factory=list)


class ServerError(BaseModel):
    """Statement-level error entry reported by the server."""

    model_config = ConfigDict(extra="allow")

    code: str = ""
    message: str = ""


class TransactionResponse(BaseModel):
    """Response to the statement request.

    ``results`` holds one entry per statement with ``columns`` and ``data``.
    """

    model_config = ConfigDict(extra="allow")

    results: list[dict[str, Any]] = Field(default_factory=list)
    errors: list[ServerError] = Field(default_factory=list)
    commit: str | None = Field(
        default=None,
        description="URL that finalizes the open transaction",
    )
