# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code validation for both dialects.

A smart code is a dot-separated classification string such as
``HERA.PLATFORM.CONFIG.APP.SALON.v2``. Two dialects coexist:

``DATA_LAYER``
    Codes attached to entities, transactions, lines and reports. A single
    structural regex; any ``v<digits>`` version.

``DOMAIN_V2``
    Platform and accounting codes. Checks run in order and the first failure
    is reported: non-empty, ``HERA`` prefix, ``v2`` suffix, minimum segment
    count (ACCOUNTING 5, PLATFORM 6, other domains 4), then domain shape
    (segment charset; PLATFORM requires ``CONFIG`` as the third segment;
    ACCOUNTING segments must start with a letter).
"""

from __future__ import annotations

import re

from hera_infra.enums import EnumSmartCodeDialect, EnumSmartCodeError
from hera_infra.models import ModelSmartCodeValidation

DATA_LAYER_PATTERN = re.compile(
    r"^HERA\.[A-Z0-9_]{3,30}(?:\.[A-Z0-9_]{2,40}){3,8}\.v[0-9]+$"
)

HERA_PREFIX: str = "HERA"
V2_VERSION: str = "v2"

DOMAIN_PLATFORM: str = "PLATFORM"
DOMAIN_ACCOUNTING: str = "ACCOUNTING"
PLATFORM_CONFIG_SEGMENT: str = "CONFIG"

MIN_SEGMENTS_BY_DOMAIN: dict[str, int] = {
    DOMAIN_ACCOUNTING: 5,
    DOMAIN_PLATFORM: 6,
}
DEFAULT_MIN_SEGMENTS: int = 4

_SEGMENT = re.compile(r"^[A-Z0-9_]+$")
_ACCOUNTING_SEGMENT = re.compile(r"^[A-Z][A-Z0-9_]*$")
_ANY_VERSION = re.compile(r"^v[0-9]+$")


def min_segments_for(domain: str | None) -> int:
    """Return the minimum total segment count, HERA and version included."""
    return MIN_SEGMENTS_BY_DOMAIN.get(domain or "", DEFAULT_MIN_SEGMENTS)


def _result(
    dialect: EnumSmartCodeDialect,
    segments: list[str],
    error: EnumSmartCodeError | None = None,
) -> ModelSmartCodeValidation:
    return ModelSmartCodeValidation(
        is_valid=error is None,
        dialect=dialect,
        domain=segments[1] if len(segments) > 1 and segments[1] else None,
        error_code=error,
        segments=segments,
    )


def _validate_domain_v2(code: str) -> ModelSmartCodeValidation:
    dialect = EnumSmartCodeDialect.DOMAIN_V2
    segments = code.split(".")
    if segments[0] != HERA_PREFIX:
        return _result(dialect, segments, EnumSmartCodeError.MISSING_HERA_PREFIX)
    if len(segments) < 2 or segments[-1] != V2_VERSION:
        return _result(dialect, segments, EnumSmartCodeError.INVALID_VERSION)

    domain = segments[1]
    if len(segments) < min_segments_for(domain):
        return _result(dialect, segments, EnumSmartCodeError.INSUFFICIENT_SEGMENTS)

    body = segments[1:-1]
    if not all(_SEGMENT.match(segment) for segment in body):
        return _result(dialect, segments, EnumSmartCodeError.INVALID_SEGMENT)
    if domain == DOMAIN_PLATFORM and segments[2] != PLATFORM_CONFIG_SEGMENT:
        return _result(dialect, segments, EnumSmartCodeError.PLATFORM_CONFIG_REQUIRED)
    if domain == DOMAIN_ACCOUNTING and not all(
        _ACCOUNTING_SEGMENT.match(segment) for segment in body
    ):
        return _result(dialect, segments, EnumSmartCodeError.INVALID_SEGMENT)
    return _result(dialect, segments)


def _validate_data_layer(code: str) -> ModelSmartCodeValidation:
    dialect = EnumSmartCodeDialect.DATA_LAYER
    segments = code.split(".")
    if DATA_LAYER_PATTERN.match(code):
        return _result(dialect, segments)
    if segments[0] != HERA_PREFIX:
        return _result(dialect, segments, EnumSmartCodeError.MISSING_HERA_PREFIX)
    if not _ANY_VERSION.match(segments[-1]):
        return _result(dialect, segments, EnumSmartCodeError.INVALID_VERSION)
    return _result(dialect, segments, EnumSmartCodeError.INVALID_FORMAT)


def validate_smart_code(
    code: object,
    dialect: EnumSmartCodeDialect = EnumSmartCodeDialect.DOMAIN_V2,
) -> ModelSmartCodeValidation:
    """Validate ``code`` against one dialect.

    Args:
        code: Candidate smart code. Non-strings fail with EMPTY_CODE.
        dialect: DOMAIN_V2 (default) or DATA_LAYER.

    Returns:
        The validation outcome, with the first failing check's error code.
    """
    if not isinstance(code, str) or not code.strip():
        return ModelSmartCodeValidation(
            is_valid=False,
            dialect=dialect,
            error_code=EnumSmartCodeError.EMPTY_CODE,
        )
    if dialect is EnumSmartCodeDialect.DATA_LAYER:
        return _validate_data_layer(code)
    return _validate_domain_v2(code)


def is_valid_smart_code(
    code: object,
    dialect: EnumSmartCodeDialect = EnumSmartCodeDialect.DOMAIN_V2,
) -> bool:
    return validate_smart_code(code, dialect).is_valid


__all__ = [
    "DATA_LAYER_PATTERN",
    "is_valid_smart_code",
    "min_segments_for",
    "validate_smart_code",
]
