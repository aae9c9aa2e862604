"""
db/query_builder.py
-------------------
Table-agnostic SQL statement builder.

Every function here is a pure string transform: it never touches the
database. Values are never interpolated; each one becomes a `%s`
placeholder for psycopg2 to bind.

Conditions are either a column name (equality) or a `Condition` carrying
an explicit operator. An empty condition (``""`` or ``None``) is omitted,
it never means "match the empty string".
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

PLACEHOLDER = "%s"

_OPERATORS = ("=", "<>")


@dataclass(frozen=True)
class Condition:
    """A single `column <operator> %s` predicate."""

    column: str
    operator: str = "="

    def __post_init__(self):
        if self.operator not in _OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator!r}")

    def __str__(self) -> str:
        return f"{self.column} {self.operator} {PLACEHOLDER}"


@dataclass(frozen=True)
class SetExpression:
    """
    A code-controlled raw SQL fragment for an UPDATE's SET clause.

    Only module-level constants should ever be wrapped in this type; user
    input goes into the bound parameters, never into ``sql``.

    Attributes:
        sql: The fragment, e.g. ``likes = likes + 1``.
        params: How many placeholders the fragment itself consumes.
    """

    sql: str
    params: int = 0

    def __post_init__(self):
        if self.sql.count(PLACEHOLDER) != self.params:
            raise ValueError(
                f"SetExpression {self.sql!r} declares {self.params} params "
                f"but contains {self.sql.count(PLACEHOLDER)} placeholders"
            )


ConditionLike = Optional[Union[str, Condition]]


def _condition(cond: ConditionLike) -> Optional[Condition]:
    if not cond:
        return None
    if isinstance(cond, Condition):
        return cond
    return Condition(cond)


def where_clause(condition1: ConditionLike = None, condition2: ConditionLike = None) -> str:
    """
    Render ``WHERE c1 = %s [AND c2 = %s]``, or an empty string.

    Condition order is preserved; empty conditions are dropped.
    """
    parts = [str(c) for c in (_condition(condition1), _condition(condition2)) if c]
    if not parts:
        return ""
    return " WHERE " + " AND ".join(parts)


def build_insert(table: str, columns: Sequence[str]) -> str:
    """INSERT with one placeholder per column, in the given order."""
    col_names = ", ".join(columns)
    placeholders = ", ".join([PLACEHOLDER] * len(columns))
    return f"INSERT INTO {table} ({col_names}) VALUES ({placeholders})"


def build_select(
    table: str,
    condition1: ConditionLike,
    condition2: ConditionLike,
    columns: Sequence[str],
    order_by: Optional[str] = None,
) -> str:
    sql = f"SELECT {', '.join(columns)} FROM {table}{where_clause(condition1, condition2)}"
    if order_by:
        sql += f" ORDER BY {order_by}"
    return sql


def build_select_with_join(
    table: str,
    condition1: ConditionLike,
    condition2: ConditionLike,
    join_clause: str,
    columns: Sequence[str],
    order_by: Optional[str] = None,
) -> str:
    """Like `build_select`, with a literal JOIN clause between table and WHERE."""
    sql = (
        f"SELECT {', '.join(columns)} FROM {table} {join_clause}"
        f"{where_clause(condition1, condition2)}"
    )
    if order_by:
        sql += f" ORDER BY {order_by}"
    return sql


def build_delete(table: str, condition1: ConditionLike, condition2: ConditionLike = None) -> str:
    where = where_clause(condition1, condition2)
    if not where:
        raise ValueError(f"Refusing to build an unconditional DELETE on {table}")
    return f"DELETE FROM {table}{where}"


def build_update(
    table: str,
    condition1: ConditionLike,
    condition2: ConditionLike,
    columns: Sequence[str],
) -> str:
    """Field-by-field UPDATE: ``SET a = %s, b = %s WHERE ...``."""
    where = where_clause(condition1, condition2)
    if not where:
        raise ValueError(f"Refusing to build an unconditional UPDATE on {table}")
    set_clause = ", ".join(f"{col} = {PLACEHOLDER}" for col in columns)
    return f"UPDATE {table} SET {set_clause}{where}"


def build_update_with_expression(
    table: str,
    condition1: ConditionLike,
    condition2: ConditionLike,
    expression: SetExpression,
) -> str:
    """
    UPDATE whose SET clause is a `SetExpression` evaluated by the store.

    Used for counter increments and list appends, so the new value is
    computed by the engine in one statement instead of read-modify-write.

    Raises:
        TypeError: If ``expression`` is a bare string.
    """
    if not isinstance(expression, SetExpression):
        raise TypeError("build_update_with_expression requires a SetExpression")
    where = where_clause(condition1, condition2)
    if not where:
        raise ValueError(f"Refusing to build an unconditional UPDATE on {table}")
    return f"UPDATE {table} SET {expression.sql}{where}"
