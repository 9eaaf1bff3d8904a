from __future__ import annotations

from typing import Mapping, Tuple

from ..core.enums import FilterOp
from .model import Condition, Predicate

# Column expressions come from repository constants, never from request data.
ColumnMap = Mapping[str, str]


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column(columns: ColumnMap, field: str) -> str:
    try:
        return columns[field]
    except KeyError:
        raise ValueError(f"No column mapped for field {field!r}")


def _compile_condition(condition: Condition, columns: ColumnMap) -> Tuple[list[str], list[object]]:
    op = condition.op
    value = condition.value

    if op is FilterOp.EQUALS:
        return [f"{_column(columns, condition.field)} = %s"], [value]

    if op is FilterOp.SUBSTRING:
        col = _column(columns, condition.field)
        return [f"LOWER({col}) LIKE %s"], [f"%{escape_like(str(value).lower())}%"]

    if op is FilterOp.DATE_RANGE:
        col = _column(columns, condition.field)
        clauses: list[str] = []
        params: list[object] = []
        if value.start is not None:
            clauses.append(f"{col} >= %s")
            params.append(value.start)
        if value.end is not None:
            clauses.append(f"{col} < %s")
            params.append(value.end)
        return clauses, params

    if op is FilterOp.RANGE_OVERLAPS:
        first_field, last_field = condition.field
        clauses = []
        params = []
        if value.end is not None:
            clauses.append(f"{_column(columns, first_field)} < %s")
            params.append(value.end)
        if value.start is not None:
            clauses.append(f"{_column(columns, last_field)} >= %s")
            params.append(value.start)
        return clauses, params

    raise ValueError(f"Unsupported filter operator: {op!r}")


def compile_where(predicate: Predicate, columns: ColumnMap) -> Tuple[str, list[object]]:
    """Render a predicate as a WHERE body with `%s` placeholders.

    Returns ("1=1", []) for an empty predicate so callers can always write
    `WHERE {where}`.
    """
    clauses: list[str] = []
    params: list[object] = []
    for condition in predicate:
        c, p = _compile_condition(condition, columns)
        clauses.extend(c)
        params.extend(p)
    if not clauses:
        return "1=1", []
    return " AND ".join(clauses), params
