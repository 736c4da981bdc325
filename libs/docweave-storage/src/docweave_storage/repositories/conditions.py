"""Compile store conditions into JSONB predicates on the documents table."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from psycopg import sql
from psycopg.types.json import Jsonb

from docweave_core.documents.store import ID_FIELD, Condition, SortKey


def _equals(field: str, value: Any, params: list[Any]) -> sql.Composable:
    if field == ID_FIELD:
        params.append(str(value))
        return sql.SQL("id = %s")
    path = sql.SQL("(body -> {})").format(sql.Literal(field))
    if value is None:
        # Missing keys count as null.
        return sql.SQL("({path} IS NULL OR {path} = 'null'::jsonb)").format(path=path)
    params.append(Jsonb(value))
    return sql.SQL("{path} = %s").format(path=path)


def compile_condition(condition: Condition, params: list[Any]) -> sql.Composable:
    if condition.op == "eq":
        return _equals(condition.field, condition.value, params)
    if condition.op == "ne":
        return sql.SQL("NOT {}").format(_equals(condition.field, condition.value, params))
    if not condition.value:
        return sql.SQL("FALSE")
    alternatives = [_equals(condition.field, candidate, params) for candidate in condition.value]
    return sql.SQL("({})").format(sql.SQL(" OR ").join(alternatives))


def compile_where(
    collection: str, conditions: Sequence[Condition]
) -> tuple[sql.Composable, list[Any]]:
    """Build the WHERE clause (including the collection filter) and its params."""
    params: list[Any] = [collection]
    clauses: list[sql.Composable] = [sql.SQL("collection = %s")]
    clauses.extend(compile_condition(condition, params) for condition in conditions)
    return sql.SQL("WHERE ") + sql.SQL(" AND ").join(clauses), params


def compile_order(order: Sequence[SortKey]) -> sql.Composable:
    if not order:
        return sql.SQL("ORDER BY created_at, id")
    keys = [
        sql.SQL("{} {}").format(
            sql.SQL("id") if key.field == ID_FIELD else sql.SQL("body -> {}").format(sql.Literal(key.field)),
            sql.SQL("DESC") if key.descending else sql.SQL("ASC"),
        )
        for key in order
    ]
    return sql.SQL("ORDER BY ") + sql.SQL(", ").join(keys)
