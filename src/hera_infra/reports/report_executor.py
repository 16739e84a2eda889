# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Report executor for hera.report.run.

Safety gate
===========

Before every execution the stored template must:

1. start with ``select`` (case-insensitive, after trimming),
2. contain none of ``insert``, ``update``, ``delete``, ``drop``, ``alter``,
   ``create`` as whole words,
3. literally contain ``organization_id = $1``.

The gate runs per call, not once at import, so a template altered at runtime
fails on its very next invocation. It is a denylist and only one layer: run
reports through a database role with read-only grants.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from hera_infra.enums import EnumInfraTransportType, EnumReportFormat
from hera_infra.errors import (
    ModelInfraErrorContext,
    ReportNotFoundError,
    ReportUnsafeSqlError,
)
from hera_infra.models import ModelReportDefinition
from hera_infra.protocols import ProtocolDbSessionFactory
from hera_infra.query.result_embeds import fetch_display_labels
from hera_infra.reports.report_catalog import get_report
from hera_infra.runtime import TrustedOrgId
from hera_infra.utils import json_cell

logger = logging.getLogger(__name__)

ORG_SCOPE_PREDICATE: str = "organization_id = $1"

_UNSAFE_KEYWORDS = re.compile(
    r"\b(insert|update|delete|drop|alter|create)\b", re.IGNORECASE
)


def is_safe_select(sql: str) -> bool:
    """Return True for a single read statement free of denylisted keywords."""
    if not isinstance(sql, str):
        return False
    stripped = sql.strip()
    return stripped.lower().startswith("select") and not _UNSAFE_KEYWORDS.search(stripped)


def is_report_template_safe(sql: str) -> bool:
    """Apply the full per-call gate: safe select plus literal organization scope."""
    return is_safe_select(sql) and ORG_SCOPE_PREDICATE in sql


def bind_report_params(
    definition: ModelReportDefinition,
    org_id: TrustedOrgId,
    params: Mapping[str, Any] | None,
) -> list[object]:
    """Build ``[org_id, *params[name] for name in definition.params]``.

    Values are matched by declared name; missing names bind as NULL. Any
    caller key not declared by the report, ``organization_id`` included, is
    ignored.
    """
    supplied = params or {}
    return [org_id.value, *(supplied.get(name) for name in definition.params)]


def rows_to_csv(fields: Sequence[str], rows: Sequence[Mapping[str, Any]]) -> str:
    """Serialize rows with a header line; cells are JSON literals joined by commas."""
    lines = [",".join(fields)]
    for row in rows:
        lines.append(",".join(json_cell(row.get(field)) for field in fields))
    return "\n".join(lines)


def _resolve_format(fmt: object) -> EnumReportFormat:
    if isinstance(fmt, str) and fmt.lower() == EnumReportFormat.CSV.value:
        return EnumReportFormat.CSV
    return EnumReportFormat.JSON


async def run_report(
    db: ProtocolDbSessionFactory,
    org_id: TrustedOrgId,
    report_code: object,
    params: Mapping[str, Any] | None = None,
    fmt: object = EnumReportFormat.JSON.value,
    display_labels: bool = False,
    correlation_id: UUID | None = None,
) -> dict[str, Any]:
    """Run a catalog report scoped to the trusted organization.

    Args:
        db: Session factory.
        org_id: Trusted organization scope, bound as ``$1``.
        report_code: Catalog key.
        params: Caller parameters matched to the report's declared names.
        fmt: ``json`` (default) or ``csv``; anything else means json.
        display_labels: Also attach the organization's display labels.
        correlation_id: Correlation ID for logs and errors.

    Returns:
        ``{format, data, meta: {rows, display_labels?}, explain: {sql, params}}``.

    Raises:
        ReportNotFoundError: If ``report_code`` is not in the catalog.
        ReportUnsafeSqlError: If the stored template fails the safety gate.
    """
    if not isinstance(org_id, TrustedOrgId):
        raise TypeError("run_report requires a TrustedOrgId")

    ctx = ModelInfraErrorContext.with_correlation(
        correlation_id=correlation_id,
        transport_type=EnumInfraTransportType.DATABASE,
        operation="hera.report.run",
        target_name=str(report_code),
    )

    definition = get_report(report_code)
    if definition is None:
        raise ReportNotFoundError(context=ctx)

    if not is_report_template_safe(definition.sql_template):
        logger.error(
            "Report template failed safety gate",
            extra={
                "report_code": definition.report_code,
                "correlation_id": str(ctx.correlation_id),
            },
        )
        raise ReportUnsafeSqlError(context=ctx)

    bound = bind_report_params(definition, org_id, params)
    output_format = _resolve_format(fmt)

    async with db.session(ctx.correlation_id) as session:
        result = await session.fetch(definition.sql_template, bound)
        labels = (
            await fetch_display_labels(session, bound[0]) if display_labels else None
        )

    data: object
    if output_format is EnumReportFormat.CSV:
        data = rows_to_csv(result.fields, result.rows)
    else:
        data = result.rows

    meta: dict[str, Any] = {"rows": result.row_count}
    if labels is not None:
        meta["display_labels"] = labels

    logger.info(
        "hera.report.run completed",
        extra={
            "report_code": definition.report_code,
            "row_count": result.row_count,
            "format": output_format.value,
            "correlation_id": str(ctx.correlation_id),
        },
    )
    return {
        "format": output_format.value,
        "data": data,
        "meta": meta,
        "explain": {"sql": definition.sql_template, "params": bound},
    }


__all__ = [
    "ORG_SCOPE_PREDICATE",
    "bind_report_params",
    "is_report_template_safe",
    "is_safe_select",
    "rows_to_csv",
    "run_report",
]
