"""
Unit tests for result simplification helpers.
"""

from __future__ import annotations

from cypherlink.graph.results import get_simple_data, get_simple_list_data


class TestGetSimpleData:
    """Tests for get_simple_data()."""

    def test_single_column_row_value(self) -> None:
        results = [{"columns": ["count"], "data": [{"row": [42], "meta": [None]}]}]

        assert get_simple_data(results) == 42

    def test_bare_list_rows(self) -> None:
        results = [{"columns": ["name"], "data": [["Ada"]]}]

        assert get_simple_data(results) == "Ada"

    def test_multiple_columns_returns_none(self) -> None:
        results = [{"columns": ["a", "b"], "data": [{"row": [1, 2]}]}]

        assert get_simple_data(results) is None

    def test_empty_inputs_return_none(self) -> None:
        assert get_simple_data(None) is None
        assert get_simple_data([]) is None
        assert get_simple_data([{"columns": ["n"], "data": []}]) is None

    def test_only_first_statement_is_used(self) -> None:
        results = [
            {"columns": ["n"], "data": [{"row": [1]}]},
            {"columns": ["n"], "data": [{"row": [2]}]},
        ]

        assert get_simple_data(results) == 1


class TestGetSimpleListData:
    """Tests for get_simple_list_data()."""

    def test_first_column_of_each_row(self) -> None:
        results = [
            {
                "columns": ["name"],
                "data": [{"row": ["Ada"]}, {"row": ["Grace"]}, {"row": ["Linus"]}],
            }
        ]

        assert get_simple_list_data(results) == ["Ada", "Grace", "Linus"]

    def test_empty_inputs_return_none(self) -> None:
        assert get_simple_list_data(None) is None
        assert get_simple_list_data([]) is None
        assert get_simple_list_data([{"columns": ["n"], "data": []}]) is None
