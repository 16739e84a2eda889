# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Tool Dispatcher - the hera.* RPC surface for AI agents.

Maps a tool name to its handler and normalizes every outcome into a JSON
envelope:

    - success: the handler result plus ``exit_code: 0``
    - failure: ``{"exit_code": 1, "error": message}``; for tool errors the
      message is the bare code, e.g. ``"TABLE_NOT_ALLOWED"``
    - unknown tool: ``{"error": "UNKNOWN_TOOL", "tools": [...]}`` with no
      ``exit_code`` key, so callers must check ``error`` first

Organization Scope:
    The organization id is resolved once per call from trusted process
    configuration (``HERA_ORG_ID``, then ``DEFAULT_ORGANIZATION_ID``). An
    ``organization_id`` supplied in params is discarded before the handler
    runs. Nothing raised inside a handler escapes ``dispatch``.

Tools:
    - hera.select: whitelisted, org-scoped SELECT with optional embeds
    - hera.report.run: catalog report with safety gate
    - hera.labels.get: display labels, optionally for one locale
    - hera.config.preview: test candidate configuration rules
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from hera_infra.enums import EnumToolErrorCode
from hera_infra.errors import RuntimeHostError, ToolError
from hera_infra.models import ModelConfigPreviewRequest, ModelSelectRequest
from hera_infra.protocols import ProtocolDbSessionFactory
from hera_infra.query import (
    execute_select,
    fetch_display_labels,
    labels_for_locale,
)
from hera_infra.reports import list_reports, run_report
from hera_infra.rules import run_config_preview
from hera_infra.runtime import TrustedOrgId, resolve_trusted_org_id

logger = logging.getLogger(__name__)

TOOL_SELECT: str = "hera.select"
TOOL_REPORT_RUN: str = "hera.report.run"
TOOL_LABELS_GET: str = "hera.labels.get"
TOOL_CONFIG_PREVIEW: str = "hera.config.preview"

_CALLER_ORG_KEYS: tuple[str, ...] = ("organization_id", "org_id")

ToolHandler = Callable[
    [TrustedOrgId, dict[str, Any], UUID], Awaitable[dict[str, Any]]
]


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool: name, caller-facing description and input schema."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler


def _report_input_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "report_code": {
                "type": "string",
                "enum": [r["report_code"] for r in list_reports()],
            },
            "params": {"type": "object"},
            "format": {"type": "string", "enum": ["json", "csv"]},
            "display_labels": {"type": "boolean"},
        },
        "required": ["report_code"],
    }


def _labels_input_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"locale": {"type": "string"}},
        "required": [],
    }


class HeraToolDispatcher:
    """Dispatch hera.* tool calls against a database session factory."""

    def __init__(
        self,
        db: ProtocolDbSessionFactory,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            db: Session factory used by every tool.
            environ: Trusted environment to resolve the organization from;
                defaults to ``os.environ`` at call time.
        """
        self._db = db
        self._environ = environ
        self._tools: dict[str, ToolDefinition] = {}
        self._register_builtin_tools()

    def _register_builtin_tools(self) -> None:
        self.register_tool(
            ToolDefinition(
                name=TOOL_SELECT,
                description=(
                    "Read rows from a whitelisted table in the current organization. "
                    "Unknown columns, filters and operators are dropped and "
                    "reported in meta.dropped."
                ),
                input_schema=ModelSelectRequest.model_json_schema(),
                handler=self._handle_select,
            )
        )
        self.register_tool(
            ToolDefinition(
                name=TOOL_REPORT_RUN,
                description="Run a named read-only report as JSON rows or CSV text.",
                input_schema=_report_input_schema(),
                handler=self._handle_report_run,
            )
        )
        self.register_tool(
            ToolDefinition(
                name=TOOL_LABELS_GET,
                description=(
                    "Get display labels per entity type, falling back to the "
                    "default locale."
                ),
                input_schema=_labels_input_schema(),
                handler=self._handle_labels_get,
            )
        )
        self.register_tool(
            ToolDefinition(
                name=TOOL_CONFIG_PREVIEW,
                description=(
                    "Resolve candidate configuration rules against test contexts "
                    "and optionally compare with the stored rules."
                ),
                input_schema=ModelConfigPreviewRequest.model_json_schema(),
                handler=self._handle_config_preview,
            )
        )

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register or replace a tool definition."""
        self._tools[tool.name] = tool
        logger.debug("Tool registered", extra={"tool_name": tool.name})

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """Return ``{name, description, inputSchema}`` for every tool."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema,
            }
            for tool in sorted(self._tools.values(), key=lambda t: t.name)
        ]

    async def dispatch(
        self,
        tool_name: str,
        params: Mapping[str, Any] | None = None,
        correlation_id: UUID | None = None,
    ) -> dict[str, Any]:
        """Invoke a tool and return its envelope. Never raises."""
        tool = self._tools.get(tool_name)
        if tool is None:
            logger.warning("Unknown tool requested", extra={"tool_name": tool_name})
            return {"error": EnumToolErrorCode.UNKNOWN_TOOL.value, "tools": self.tool_names}

        correlation_id = correlation_id or uuid4()
        start_time = time.perf_counter()
        arguments = self._sanitize_params(tool_name, params, correlation_id)

        try:
            org_id = resolve_trusted_org_id(self._environ, correlation_id)
            result = await tool.handler(org_id, arguments, correlation_id)
        except (ToolError, RuntimeHostError) as e:
            logger.warning(
                "Tool execution failed",
                extra={
                    "tool_name": tool_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "correlation_id": str(correlation_id),
                    "execution_time_ms": (time.perf_counter() - start_time) * 1000,
                },
            )
            return {"exit_code": 1, "error": str(e)}
        except Exception as e:
            logger.exception(
                "Tool execution failed unexpectedly",
                extra={
                    "tool_name": tool_name,
                    "error_type": type(e).__name__,
                    "correlation_id": str(correlation_id),
                    "execution_time_ms": (time.perf_counter() - start_time) * 1000,
                },
            )
            return {"exit_code": 1, "error": str(e)}

        logger.info(
            "Tool executed",
            extra={
                "tool_name": tool_name,
                "correlation_id": str(correlation_id),
                "execution_time_ms": (time.perf_counter() - start_time) * 1000,
            },
        )
        return {**result, "exit_code": 0}

    def _sanitize_params(
        self,
        tool_name: str,
        params: Mapping[str, Any] | None,
        correlation_id: UUID,
    ) -> dict[str, Any]:
        arguments = dict(params) if isinstance(params, Mapping) else {}
        for key in _CALLER_ORG_KEYS:
            if key in arguments:
                arguments.pop(key)
                logger.warning(
                    "Discarded caller-supplied organization scope",
                    extra={
                        "tool_name": tool_name,
                        "param": key,
                        "correlation_id": str(correlation_id),
                    },
                )
        return arguments

    async def _handle_select(
        self, org_id: TrustedOrgId, params: dict[str, Any], correlation_id: UUID
    ) -> dict[str, Any]:
        return await execute_select(self._db, params, org_id, correlation_id)

    async def _handle_report_run(
        self, org_id: TrustedOrgId, params: dict[str, Any], correlation_id: UUID
    ) -> dict[str, Any]:
        report_params = params.get("params")
        return await run_report(
            self._db,
            org_id,
            params.get("report_code"),
            params=report_params if isinstance(report_params, Mapping) else None,
            fmt=params.get("format", "json"),
            display_labels=bool(params.get("display_labels", False)),
            correlation_id=correlation_id,
        )

    async def _handle_labels_get(
        self, org_id: TrustedOrgId, params: dict[str, Any], correlation_id: UUID
    ) -> dict[str, Any]:
        async with self._db.session(correlation_id) as session:
            labels = await fetch_display_labels(session, org_id.value)
        locale = params.get("locale")
        if isinstance(locale, str) and locale:
            return {"labels": labels_for_locale(labels, locale), "locale": locale}
        return {"labels": labels}

    async def _handle_config_preview(
        self, org_id: TrustedOrgId, params: dict[str, Any], correlation_id: UUID
    ) -> dict[str, Any]:
        return await run_config_preview(self._db, org_id, params, correlation_id)


__all__: list[str] = [
    "HeraToolDispatcher",
    "TOOL_CONFIG_PREVIEW",
    "TOOL_LABELS_GET",
    "TOOL_REPORT_RUN",
    "TOOL_SELECT",
    "ToolDefinition",
]
