# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Whitelisted query compilation, execution and result enrichment."""

from hera_infra.query.dynamic_values import (
    DynamicBool,
    DynamicDate,
    DynamicJson,
    DynamicNumber,
    DynamicText,
    DynamicUnknown,
    DynamicValue,
    decode_dynamic_value,
    flatten_dynamic_rows,
)
from hera_infra.query.result_embeds import (
    DEFAULT_LOCALE,
    DISPLAY_LABELS_SQL,
    DYNAMIC_DATA_SQL,
    TRANSACTION_LINES_SQL,
    apply_embeds,
    fetch_display_labels,
    labels_for_locale,
)
from hera_infra.query.select_compiler import build_select, clamp_limit, clamp_offset
from hera_infra.query.select_executor import execute_select
from hera_infra.query.whitelist_registry import (
    TABLE_WHITELISTS,
    lookup_whitelist,
    registered_tables,
)

__all__: list[str] = [
    "DEFAULT_LOCALE",
    "DISPLAY_LABELS_SQL",
    "DYNAMIC_DATA_SQL",
    "DynamicBool",
    "DynamicDate",
    "DynamicJson",
    "DynamicNumber",
    "DynamicText",
    "DynamicUnknown",
    "DynamicValue",
    "TABLE_WHITELISTS",
    "TRANSACTION_LINES_SQL",
    "apply_embeds",
    "build_select",
    "clamp_limit",
    "clamp_offset",
    "decode_dynamic_value",
    "execute_select",
    "fetch_display_labels",
    "flatten_dynamic_rows",
    "labels_for_locale",
    "lookup_whitelist",
    "registered_tables",
]
