# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Utility helpers."""

from hera_infra.utils.util_json import json_cell, row_to_json_safe, to_json_safe

__all__: list[str] = ["json_cell", "row_to_json_safe", "to_json_safe"]
