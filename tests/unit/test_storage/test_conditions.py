"""Tests for compiling store conditions to SQL."""

from psycopg.types.json import Jsonb

from docweave_core.documents.store import Condition, SortKey
from docweave_storage.repositories.conditions import compile_condition, compile_order, compile_where


def _sql(composable: object) -> str:
    return composable.as_string(None)  # type: ignore[attr-defined]


class TestCompileCondition:
    def test_equality_on_body_field(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="status", value="written"), params)
        assert _sql(clause) == "(body -> 'status') = %s"
        assert len(params) == 1
        assert isinstance(params[0], Jsonb)
        assert params[0].obj == "written"

    def test_equality_on_id(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="id", value="doc-1"), params)
        assert _sql(clause) == "id = %s"
        assert params == ["doc-1"]

    def test_null_matches_missing_key(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="quality_control", value=None), params)
        assert "IS NULL" in _sql(clause)
        assert "'null'::jsonb" in _sql(clause)
        assert params == []

    def test_not_equal(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="status", op="ne", value="written"), params)
        assert _sql(clause) == "NOT (body -> 'status') = %s"

    def test_in_expands_to_alternatives(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="read_status", op="in", value=[2, 3]), params)
        assert _sql(clause) == "((body -> 'read_status') = %s OR (body -> 'read_status') = %s)"
        assert [param.obj for param in params] == [2, 3]  # type: ignore[attr-defined]

    def test_empty_in_matches_nothing(self) -> None:
        params: list[object] = []
        clause = compile_condition(Condition(field="status", op="in", value=[]), params)
        assert _sql(clause) == "FALSE"
        assert params == []

    def test_boolean_values_stay_json_booleans(self) -> None:
        params: list[object] = []
        compile_condition(Condition(field="quality_control", value=True), params)
        assert params[0].obj is True  # type: ignore[attr-defined]


class TestCompileWhere:
    def test_collection_filter_comes_first(self) -> None:
        where, params = compile_where("books", [Condition(field="status", value="written")])
        assert _sql(where) == "WHERE collection = %s AND (body -> 'status') = %s"
        assert params[0] == "books"
        assert len(params) == 2

    def test_no_conditions(self) -> None:
        where, params = compile_where("books", [])
        assert _sql(where) == "WHERE collection = %s"
        assert params == ["books"]


class TestCompileOrder:
    def test_default_order_is_insertion(self) -> None:
        assert _sql(compile_order([])) == "ORDER BY created_at, id"

    def test_body_and_id_keys(self) -> None:
        order = [SortKey(field="name", descending=True), SortKey(field="id")]
        assert _sql(compile_order(order)) == "ORDER BY body -> 'name' DESC, id ASC"
