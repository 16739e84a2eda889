# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code dialects.

Two versioning eras coexist and are kept apart on purpose:

- DATA_LAYER: loose structural regex, any ``v<digits>`` version. Used for
  codes attached to entities, transactions, lines and reports.
- DOMAIN_V2: strict, ``v2``-only validator with per-domain segment rules.
  Used for platform configuration and accounting codes.
"""

from enum import Enum


class EnumSmartCodeDialect(str, Enum):
    """Smart code dialect selector."""

    DATA_LAYER = "data_layer"
    DOMAIN_V2 = "domain_v2"


__all__ = ["EnumSmartCodeDialect"]
