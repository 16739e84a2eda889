# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Output formats for hera.report.run."""

from enum import Enum


class EnumReportFormat(str, Enum):
    """Report output formats."""

    JSON = "json"
    CSV = "csv"


__all__ = ["EnumReportFormat"]
