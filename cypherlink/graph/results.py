"""
Helpers that simplify statement results.

``results`` is the list returned by Transaction.execute(): one entry per
statement, each with ``columns`` and ``data``. Only the first statement's
result is inspected.
"""

from __future__ import annotations

from typing import Any


def _first_result(results: list[dict[str, Any]] | None) -> dict[str, Any] | None:
    if not results:
        return None
    result = results[0]
    if not result or not result.get("data"):
        return None
    return result


def get_simple_data(results: list[dict[str, Any]] | None) -> Any:
    """Return the single value of a single-column result.

    Returns None when there is no data or more than one column.
    """
    result = _first_result(results)
    if result is None or len(result.get("columns", [])) != 1:
        return None
    first = result["data"][0]
    if isinstance(first, dict):
        return first["row"][0]
    return first[0]


def get_simple_list_data(results: list[dict[str, Any]] | None) -> list[Any] | None:
    """Return the first column of every row, or None when there is no data."""
    result = _first_result(results)
    if result is None:
        return None
    return [entry["row"][0] for entry in result["data"]]
