"""Composable WHERE-clause scopes for order, user and group listings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

Scope = Callable[["Query"], "Query"]


def _bind(clause: str, args: tuple[Any, ...]) -> tuple[str, list[Any]]:
    pieces = clause.split("?")
    text = pieces[0]
    values: list[Any] = []
    for arg, piece in zip(args, pieces[1:]):
        if isinstance(arg, (list, tuple)):
            text += ", ".join("?" for _ in arg) if arg else "NULL"
            values.extend(arg)
        else:
            text += "?"
            values.append(arg)
        text += piece
    return text, values


@dataclass(frozen=True)
class Query:
    """An immutable list of WHERE conditions with bound parameters."""

    conditions: tuple[tuple[str, tuple[Any, ...]], ...] = ()

    def where(self, clause: str, *args: Any) -> Query:
        """Return a query with one more condition."""
        if clause.count("?") != len(args):
            raise ValueError(
                f"clause {clause!r} has {clause.count('?')} placeholders "
                f"but {len(args)} arguments were given"
            )
        return Query(self.conditions + ((clause, args),))

    def scopes(self, *args: Scope) -> Query:
        """Apply each scope in turn."""
        query = self
        for scope in args:
            query = scope(query)
        return query

    def where_sql(self) -> tuple[str, list[Any]]:
        """Render the conditions as SQL and a flat parameter list.

        List arguments are expanded to one placeholder per element.
        """
        parts: list[str] = []
        params: list[Any] = []
        for clause, args in self.conditions:
            text, values = _bind(clause, args)
            parts.append(f"({text})")
            params.extend(values)
        return " AND ".join(parts), params


def _like(column: str, text: str) -> Scope:
    def scope(query: Query) -> Query:
        if text == "":
            return query
        return query.where(f"{column} like ?", f"%{text}%")

    return scope


def _fixed(clause: str, *args: Any) -> Scope:
    return lambda query: query.where(clause, *args)


def _span(column: str, span: Sequence[str]) -> Scope:
    values = list(span)

    def scope(query: Query) -> Query:
        if values == ["", ""] or len(values) != 2:
            return query
        return query.where(f"{column} >= ? AND {column} <= ?", values[0], values[1])

    return scope


def _state(column: str, state: int) -> Scope:
    def scope(query: Query) -> Query:
        if state == 7:
            return query
        return query.where(f"`{column}` = ?" if column == "query_per" else f"`{column}` = (?)", state)

    return scope


def according_to_work_id(work_id: str) -> Scope:
    return _like("work_id", work_id)


def according_to_query_per() -> Scope:
    return _fixed("`query_per` in (?)", [1, 3])


def according_to_all_query_order_state(state: int) -> Scope:
    return _state("query_per", state)


def according_to_order_state() -> Scope:
    return _fixed("`status` in (?)", [1, 4])


def according_to_all_order_state(state: int) -> Scope:
    return _state("status", state)


def according_to_assigned(user: str) -> Scope:
    return _fixed("`assigned` = ?", user)


def according_to_username(user: str) -> Scope:
    return _like("username", user)


def according_to_datetime(span: Sequence[str]) -> Scope:
    return _span("time", span)


def according_to_date(span: Sequence[str]) -> Scope:
    return _span("date", span)


def according_to_relevant(user: str) -> Scope:
    return _fixed("JSON_SEARCH(relevant, 'one', ?) IS NOT NULL", user)


def according_to_username_equal(user: str) -> Scope:
    return _fixed("username = ?", user)


def according_to_name_equal(name: str) -> Scope:
    return _fixed("`name` = ?", name)


def according_to_text(text: str) -> Scope:
    return _like("text", text)


def according_to_order_name(text: str) -> Scope:
    return _like("`name`", text)


def according_to_order_idc(text: str) -> Scope:
    return _like("id_c", text)


def according_to_order_source(text: str) -> Scope:
    return _like("`source`", text)


def according_to_order_dept(text: str) -> Scope:
    return _like("department", text)


def according_to_rule_super_or_admin() -> Scope:
    return _fixed("rule in (?)", ["admin", "super"])


def according_to_group_source_is_query(start: int, end: int) -> Scope:
    return _fixed("is_query =? or is_query = ?", start, end)


def according_to_group_name_is_like(text: str) -> Scope:
    return _like("`group`", text)