# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code generation, suggestion and dialect migration.

Every code produced here validates under the DOMAIN_V2 dialect.

Generation precedence for an intent:

1. ``operation_type == VALIDATE`` -> ``HERA.PLATFORM.CONFIG.VALIDATION.SCHEMA.v2``
2. ``industry`` -> ``HERA.PLATFORM.CONFIG.APP.<INDUSTRY>.v2``
3. ``operation_type`` CREATE or LOAD -> ``HERA.PLATFORM.CONFIG.<ENTITY>.<OP>.v2``
4. ``data_type`` -> ``HERA.PLATFORM.CONFIG.DATA.<DATA_TYPE>.v2``
5. otherwise -> ``HERA.PLATFORM.CONFIG.ENTITY.<ENTITY>.v2``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from hera_infra.enums import EnumSmartCodeDialect
from hera_infra.models import ModelSmartCodeIntent
from hera_infra.smart_codes.smart_code_validator import (
    DOMAIN_ACCOUNTING,
    DOMAIN_PLATFORM,
    HERA_PREFIX,
    PLATFORM_CONFIG_SEGMENT,
    V2_VERSION,
    min_segments_for,
    validate_smart_code,
)

logger = logging.getLogger(__name__)

OPERATION_TYPES: frozenset[str] = frozenset({"CREATE", "VALIDATE", "LOAD"})
FILLER_SEGMENT: str = "GENERIC"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_VERSION_SEGMENT = re.compile(r"^[vV][0-9]+$")


def to_segment(value: object) -> str:
    """Normalize a value to an UPPER_SNAKE segment; empty input gives GENERIC."""
    text = _NON_ALNUM.sub("_", str(value or "")).strip("_").upper()
    return text or FILLER_SEGMENT


def _platform(*segments: str) -> str:
    return ".".join((HERA_PREFIX, DOMAIN_PLATFORM, PLATFORM_CONFIG_SEGMENT, *segments, V2_VERSION))


def generate_app_config_smart_code(industry: object, config_type: object = "APP") -> str:
    """Build ``HERA.PLATFORM.CONFIG.<CONFIG_TYPE>.<INDUSTRY>.v2``."""
    return _platform(to_segment(config_type), to_segment(industry))


def generate_smart_code(
    intent: ModelSmartCodeIntent | Mapping[str, Any] | None = None,
    **fields: Any,
) -> str:
    """Deterministically build the canonical code for an intent.

    Raises:
        ValueError: If ``operation_type`` is not CREATE, VALIDATE or LOAD.
    """
    if intent is None:
        intent = ModelSmartCodeIntent(**fields)
    elif not isinstance(intent, ModelSmartCodeIntent):
        intent = ModelSmartCodeIntent.model_validate(dict(intent))

    operation = intent.operation_type.strip().upper() if intent.operation_type else None
    if operation is not None and operation not in OPERATION_TYPES:
        raise ValueError(
            f"Unsupported operation_type '{intent.operation_type}', "
            f"expected one of {sorted(OPERATION_TYPES)}"
        )
    entity = to_segment(intent.entity_type)

    if operation == "VALIDATE":
        return _platform("VALIDATION", "SCHEMA")
    if intent.industry:
        return generate_app_config_smart_code(intent.industry)
    if operation is not None:
        return _platform(entity, operation)
    if intent.data_type:
        return _platform("DATA", to_segment(intent.data_type))
    return _platform("ENTITY", entity)


def _build_v2(body: list[str]) -> str:
    """Shape body segments (domain first) into a DOMAIN_V2 code."""
    segments = [to_segment(s) for s in body if s and s.strip()]
    if not segments:
        segments = [DOMAIN_PLATFORM]
    domain = segments[0]
    if domain == DOMAIN_PLATFORM and (
        len(segments) < 2 or segments[1] != PLATFORM_CONFIG_SEGMENT
    ):
        segments.insert(1, PLATFORM_CONFIG_SEGMENT)
    if domain == DOMAIN_ACCOUNTING:
        segments = [s if s[0].isalpha() else f"N{s}" for s in segments]
    # HERA and version count toward the minimum
    while len(segments) + 2 < min_segments_for(domain):
        segments.append(FILLER_SEGMENT)
    return ".".join((HERA_PREFIX, *segments, V2_VERSION))


def suggest_smart_code(code: object) -> str:
    """Suggest a DOMAIN_V2 code close to ``code``.

    Valid codes are returned unchanged. Otherwise segments are upper-snaked,
    the HERA prefix and ``v2`` suffix are applied, PLATFORM codes get the
    CONFIG segment and short codes are padded with GENERIC.
    """
    if validate_smart_code(code).is_valid:
        return str(code)
    parts = [p for p in str(code or "").split(".") if p.strip()]
    if parts and parts[0].strip().upper() == HERA_PREFIX:
        parts = parts[1:]
    if parts and _VERSION_SEGMENT.match(parts[-1].strip()):
        parts = parts[:-1]
    suggestion = _build_v2(parts)
    logger.debug("Suggested smart code", extra={"suggestion": suggestion})
    return suggestion


def migrate_to_domain_v2(code: str) -> str:
    """Convert a valid DATA_LAYER code to the DOMAIN_V2 dialect.

    The body segments are kept, the version becomes ``v2`` and the domain's
    structural requirements are applied.

    Raises:
        ValueError: If ``code`` is not a valid DATA_LAYER code.
    """
    validation = validate_smart_code(code, EnumSmartCodeDialect.DATA_LAYER)
    if not validation.is_valid:
        reason = validation.error_code.value if validation.error_code else "UNKNOWN"
        raise ValueError(f"Not a valid data-layer smart code: {reason}")
    return _build_v2(validation.segments[1:-1])


__all__ = [
    "OPERATION_TYPES",
    "generate_app_config_smart_code",
    "generate_smart_code",
    "migrate_to_domain_v2",
    "suggest_smart_code",
    "to_segment",
]
