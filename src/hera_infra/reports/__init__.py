# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Read-only report catalog and executor."""

from hera_infra.reports.report_catalog import REPORT_CATALOG, get_report, list_reports
from hera_infra.reports.report_executor import (
    ORG_SCOPE_PREDICATE,
    bind_report_params,
    is_report_template_safe,
    is_safe_select,
    rows_to_csv,
    run_report,
)

__all__: list[str] = [
    "ORG_SCOPE_PREDICATE",
    "REPORT_CATALOG",
    "bind_report_params",
    "get_report",
    "is_report_template_safe",
    "is_safe_select",
    "list_reports",
    "rows_to_csv",
    "run_report",
]
