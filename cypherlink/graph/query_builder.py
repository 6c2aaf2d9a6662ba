"""
Query builder for assembling Cypher statement text from fragments.

Fragments are kept in insertion order and only normalized when the
statement is rendered, so rendering is repeatable.
"""

from __future__ import annotations

import re
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s\s+")
_LINE_BREAKS = re.compile(r"\r\n|\r|\n|\t")


class QueryBuilder:
    """Accumulates query fragments into one statement.

    Usage:
        qb = QueryBuilder()
        qb.add("MATCH (u:User)")
        qb.add(["WHERE u.id = $id", ["RETURN", "u"]])
        qb.render()  # "MATCH (u:User) WHERE u.id = $id RETURN u"
    """

    def __init__(self) -> None:
        self._fragments: list[Any] = []

    @property
    def fragments(self) -> list[Any]:
        """Accumulated fragments, flattened, in insertion order."""
        return list(self._fragments)

    def add(self, partial: Any) -> QueryBuilder:
        """Append a fragment or a (possibly nested) list of fragments.

        Non-string values are kept as-is and stringified by render().
        """
        if isinstance(partial, (list, tuple)):
            for element in partial:
                self.add(element)
        else:
            self._fragments.append(partial)
        return self

    def render(self) -> str:
        """Return the full query text as sent on the wire."""
        text = " ".join(str(fragment) for fragment in self._fragments)
        text = _WHITESPACE_RUN.sub(" ", text)
        text = _LINE_BREAKS.sub("", text)
        return text.strip()

    def __str__(self) -> str:
        return self.render()
