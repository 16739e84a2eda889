# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Safe query compiler for hera.select.

Turns a select request plus a trusted organization scope into one
parameterized SELECT statement. Only whitelisted identifiers ever reach the
SQL text; every caller value is bound as a positional parameter. The
organization id is always ``$1``.

Unrecognized filter keys, operators outside a key's allowed set, malformed
operator values and non-whitelisted order-by columns are dropped rather than
rejected. Each drop is recorded in ``ModelCompiledQuery.dropped``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hera_infra.enums import EnumFilterOperator, EnumInfraTransportType
from hera_infra.errors import (
    ModelInfraErrorContext,
    NoValidColumnsError,
    TableNotAllowedError,
)
from hera_infra.models import (
    ALL_COLUMNS,
    ModelCompiledQuery,
    ModelDroppedInputs,
    ModelFilterRule,
    ModelSelectRequest,
    ModelTableWhitelist,
)
from hera_infra.query.whitelist_registry import lookup_whitelist
from hera_infra.runtime import TrustedOrgId

logger = logging.getLogger(__name__)

DEFAULT_LIMIT: int = 50
MAX_LIMIT: int = 1000
MIN_LIMIT: int = 1


def clamp_limit(value: object) -> int:
    """Clamp a caller limit to [1, 1000]; missing or non-numeric means 50."""
    number = _as_int(value)
    if number is None:
        return DEFAULT_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, number))


def clamp_offset(value: object) -> int:
    """Clamp a caller offset to >= 0; missing or non-numeric means 0."""
    number = _as_int(value)
    if number is None:
        return 0
    return max(0, number)


def _as_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


class _ParamList:
    """Positional parameter accumulator; ``$1`` is the organization id."""

    def __init__(self, org_id: TrustedOrgId) -> None:
        self.values: list[object] = [org_id.value]

    def add(self, value: object) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


def _normalize_filter_value(value: object) -> dict[str, object]:
    # A bare list reads as membership, any other bare value as equality.
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return {EnumFilterOperator.IN.value: list(value)}
    return {EnumFilterOperator.EQ.value: value}


def _compile_operator(
    column: str,
    op: EnumFilterOperator,
    value: object,
    params: _ParamList,
) -> str | None:
    """Return the SQL fragment for one operator, or None if the value is malformed."""
    if op is EnumFilterOperator.EQ:
        return f"{column} = {params.add(value)}"
    if op is EnumFilterOperator.IN:
        if not isinstance(value, (list, tuple)):
            return None
        return f"{column} = ANY({params.add(list(value))})"
    if op is EnumFilterOperator.LIKE:
        return f"{column} LIKE {params.add(value)}"
    if op is EnumFilterOperator.GTE:
        return f"{column} >= {params.add(value)}"
    if op is EnumFilterOperator.LTE:
        return f"{column} <= {params.add(value)}"
    if op is EnumFilterOperator.BETWEEN:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            return None
        low = params.add(value[0])
        high = params.add(value[1])
        return f"{column} BETWEEN {low} AND {high}"
    if op is EnumFilterOperator.IS_NULL:
        return f"{column} IS NULL" if value else f"{column} IS NOT NULL"
    return None


def _compile_filter(
    key: str,
    rule: ModelFilterRule,
    value: object,
    params: _ParamList,
    dropped_ops: list[str],
) -> list[str]:
    fragments: list[str] = []
    for raw_op, op_value in _normalize_filter_value(value).items():
        try:
            op = EnumFilterOperator(raw_op)
        except ValueError:
            dropped_ops.append(f"{key}.{raw_op}")
            continue
        if op not in rule.allowed_ops:
            dropped_ops.append(f"{key}.{raw_op}")
            continue
        fragment = _compile_operator(rule.target_column, op, op_value, params)
        if fragment is None:
            dropped_ops.append(f"{key}.{raw_op}")
            continue
        fragments.append(fragment)
    return fragments


def _select_columns(
    requested: list[Any] | None,
    whitelist: ModelTableWhitelist,
    dropped: list[str],
    ctx: ModelInfraErrorContext,
) -> list[str]:
    if requested is None:
        return [ALL_COLUMNS]
    kept: list[str] = []
    for column in requested:
        if isinstance(column, str) and whitelist.is_column_allowed(column):
            if column not in kept:
                kept.append(column)
        else:
            dropped.append(str(column))
    if not kept:
        raise NoValidColumnsError(context=ctx, requested_count=len(requested))
    return kept


def _order_entry(entry: object) -> tuple[object, object]:
    if isinstance(entry, Mapping):
        return entry.get("column"), entry.get("direction")
    return entry, None


def _compile_order_by(
    order_by: list[Any],
    whitelist: ModelTableWhitelist,
    dropped: list[str],
) -> list[str]:
    clauses: list[str] = []
    for entry in order_by:
        column, direction = _order_entry(entry)
        if not isinstance(column, str) or column not in whitelist.allowed_columns:
            dropped.append(str(column))
            continue
        is_desc = isinstance(direction, str) and direction.lower() == "desc"
        clauses.append(f"{column} {'DESC' if is_desc else 'ASC'}")
    return clauses


def build_select(
    request: ModelSelectRequest | Mapping[str, Any],
    org_id: TrustedOrgId,
) -> ModelCompiledQuery:
    """Compile a select request into a parameterized, organization-scoped query.

    Args:
        request: Select request model, or a raw mapping validated into one.
        org_id: Trusted organization scope, bound as ``$1``.

    Returns:
        The compiled query with ``params[0] == org_id.value``.

    Raises:
        TableNotAllowedError: If the table is not whitelisted.
        NoValidColumnsError: If every requested column was rejected.
        TypeError: If ``org_id`` is not a TrustedOrgId.
    """
    if not isinstance(org_id, TrustedOrgId):
        raise TypeError("build_select requires a TrustedOrgId")
    if not isinstance(request, ModelSelectRequest):
        request = ModelSelectRequest.model_validate(dict(request))

    ctx = ModelInfraErrorContext.with_correlation(
        transport_type=EnumInfraTransportType.DATABASE,
        operation="hera.select",
        target_name=request.table if isinstance(request.table, str) else None,
    )
    whitelist = lookup_whitelist(request.table)
    if whitelist is None:
        logger.warning(
            "Rejected select on non-whitelisted table",
            extra={"table": request.table, "correlation_id": str(ctx.correlation_id)},
        )
        raise TableNotAllowedError(context=ctx)

    dropped_columns: list[str] = []
    dropped_filters: list[str] = []
    dropped_ops: list[str] = []
    dropped_order: list[str] = []

    columns = _select_columns(request.columns, whitelist, dropped_columns, ctx)

    params = _ParamList(org_id)
    where = ["organization_id = $1"]
    for key, value in request.filters.items():
        rule = whitelist.filter_rules.get(key)
        if rule is None:
            dropped_filters.append(key)
            continue
        where.extend(_compile_filter(key, rule, value, params, dropped_ops))

    order_clauses = _compile_order_by(request.order_by, whitelist, dropped_order)
    limit = clamp_limit(request.limit)
    offset = clamp_offset(request.offset)

    sql = (
        f"SELECT {', '.join(columns)} FROM {whitelist.table_name}"
        f" WHERE {' AND '.join(where)}"
    )
    if order_clauses:
        sql += f" ORDER BY {', '.join(order_clauses)}"
    sql += f" LIMIT {limit} OFFSET {offset}"

    dropped = ModelDroppedInputs(
        columns=dropped_columns,
        filters=dropped_filters,
        operators=dropped_ops,
        order_by=dropped_order,
    )
    if not dropped.is_empty:
        logger.debug(
            "Select compiler dropped caller inputs",
            extra={
                "table": whitelist.table_name,
                "dropped": dropped.model_dump(),
                "correlation_id": str(ctx.correlation_id),
            },
        )

    return ModelCompiledQuery(
        table=whitelist.table_name,
        sql=sql,
        params=tuple(params.values),
        limit=limit,
        offset=offset,
        allowed_columns=sorted(whitelist.allowed_columns),
        allowed_filters=whitelist.describe_filters(),
        dropped=dropped,
    )


__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "build_select", "clamp_limit", "clamp_offset"]
