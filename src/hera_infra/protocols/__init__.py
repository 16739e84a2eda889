# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Protocol definitions (duck-typed interfaces) for HERA infrastructure."""

from hera_infra.protocols.protocol_db_session import (
    ProtocolDbSession,
    ProtocolDbSessionFactory,
)

__all__: list[str] = ["ProtocolDbSession", "ProtocolDbSessionFactory"]
