# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code validation, generation and migration."""

from hera_infra.smart_codes.smart_code_generator import (
    generate_app_config_smart_code,
    generate_smart_code,
    migrate_to_domain_v2,
    suggest_smart_code,
    to_segment,
)
from hera_infra.smart_codes.smart_code_validator import (
    DATA_LAYER_PATTERN,
    is_valid_smart_code,
    min_segments_for,
    validate_smart_code,
)

__all__: list[str] = [
    "DATA_LAYER_PATTERN",
    "generate_app_config_smart_code",
    "generate_smart_code",
    "is_valid_smart_code",
    "migrate_to_domain_v2",
    "min_segments_for",
    "suggest_smart_code",
    "to_segment",
    "validate_smart_code",
]
