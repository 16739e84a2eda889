# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Executor for hera.select: compile, run, enrich, report."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from hera_infra.models import ModelSelectRequest
from hera_infra.protocols import ProtocolDbSessionFactory
from hera_infra.query.result_embeds import apply_embeds
from hera_infra.query.select_compiler import build_select
from hera_infra.runtime import TrustedOrgId

logger = logging.getLogger(__name__)


async def execute_select(
    db: ProtocolDbSessionFactory,
    request: ModelSelectRequest | Mapping[str, Any],
    org_id: TrustedOrgId,
    correlation_id: UUID | None = None,
) -> dict[str, Any]:
    """Run a whitelisted select and its embeds on one scoped session.

    Returns:
        ``{rows, meta}`` where meta carries count, limit, offset, duration_ms,
        the executed sql, the table's whitelist, any dropped inputs and the
        embed results.

    Raises:
        TableNotAllowedError, NoValidColumnsError: From the compiler.
        InfraTimeoutError, InfraConnectionError, RuntimeHostError: From the
            database. No partial result is returned when an embed fails.
    """
    if not isinstance(request, ModelSelectRequest):
        request = ModelSelectRequest.model_validate(dict(request))
    compiled = build_select(request, org_id)

    async with db.session(correlation_id) as session:
        result = await session.fetch(compiled.sql, compiled.params)
        rows = [dict(row) for row in result.rows]
        embed_meta: dict[str, Any] = {}
        if request.embed.any_enabled:
            embed_meta = await apply_embeds(
                session, compiled.table, rows, compiled.org_param, request.embed
            )

    meta: dict[str, Any] = {
        "count": result.row_count,
        "limit": compiled.limit,
        "offset": compiled.offset,
        "duration_ms": result.duration_ms,
        "sql": compiled.sql,
        "allowed_columns": compiled.allowed_columns,
        "allowed_filters": compiled.allowed_filters,
    }
    if not compiled.dropped.is_empty:
        meta["dropped"] = compiled.dropped.model_dump()
    meta.update(embed_meta)

    logger.info(
        "hera.select completed",
        extra={
            "table": compiled.table,
            "row_count": result.row_count,
            "duration_ms": result.duration_ms,
            "correlation_id": str(correlation_id) if correlation_id else None,
        },
    )
    return {"rows": rows, "meta": meta}


__all__ = ["execute_select"]
