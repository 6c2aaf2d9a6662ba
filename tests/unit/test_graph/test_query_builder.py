"""
Unit tests for QueryBuilder fragment accumulation and rendering.
"""

from __future__ import annotations

from cypherlink.graph.query_builder import QueryBuilder


class TestQueryBuilderAdd:
    """Tests for add()."""

    def test_add_single_fragment(self) -> None:
        qb = QueryBuilder()
        qb.add("MATCH (n)")

        assert qb.fragments == ["MATCH (n)"]

    def test_nested_lists_are_flattened_in_order(self) -> None:
        nested = QueryBuilder().add(["A", ["B", "C"]])
        sequential = QueryBuilder()
        for fragment in ("A", "B", "C"):
            sequential.add(fragment)

        assert nested.fragments == sequential.fragments == ["A", "B", "C"]

    def test_deeply_nested_fragments(self) -> None:
        qb = QueryBuilder().add([["MATCH", ["(u)", ("RETURN", ["u"])]]])

        assert qb.render() == "MATCH (u) RETURN u"

    def test_add_returns_builder(self) -> None:
        qb = QueryBuilder()

        assert qb.add("RETURN 1") is qb

    def test_non_string_fragment_is_stringified_on_render(self) -> None:
        qb = QueryBuilder().add(["MATCH (n) RETURN n LIMIT", 10])

        assert qb.fragments[-1] == 10
        assert qb.render() == "MATCH (n) RETURN n LIMIT 10"

    def test_fragments_returns_copy(self) -> None:
        qb = QueryBuilder().add("RETURN 1")
        qb.fragments.append("RETURN 2")

        assert qb.fragments == ["RETURN 1"]


class TestQueryBuilderRender:
    """Tests for render() normalization."""

    def test_whitespace_collapsed_and_newline_stripped(self) -> None:
        qb = QueryBuilder().add(["MATCH (u)", "  RETURN   u\n"])

        assert qb.render() == "MATCH (u) RETURN u"

    def test_render_is_repeatable(self) -> None:
        qb = QueryBuilder().add(["MATCH (u)", "  RETURN   u\n"])

        assert qb.render() == qb.render()

    def test_render_reflects_later_additions(self) -> None:
        qb = QueryBuilder().add("MATCH (u)")
        before = qb.render()
        qb.add("RETURN u")

        assert before == "MATCH (u)"
        assert qb.render() == "MATCH (u) RETURN u"

    def test_tabs_and_carriage_returns_removed(self) -> None:
        qb = QueryBuilder().add(["\tMATCH (u)\r\n", "RETURN u\t"])

        assert qb.render() == "MATCH (u) RETURN u"

    def test_empty_builder_renders_empty_string(self) -> None:
        assert QueryBuilder().render() == ""

    def test_str_matches_render(self) -> None:
        qb = QueryBuilder().add(["CREATE (n:Node)", "RETURN n"])

        assert str(qb) == qb.render() == "CREATE (n:Node) RETURN n"
