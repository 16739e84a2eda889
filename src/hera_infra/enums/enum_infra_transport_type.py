# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Infrastructure Transport Type Enumeration.

Defines the canonical transport types for infrastructure components.
Used for error context and transport identification.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Infrastructure transport types for HERA infrastructure components.

    Attributes:
        DATABASE: Database connection transport (PostgreSQL)
        MCP: Tool RPC transport (hera.* tools driven by AI agents)
        HTTP: HTTP transport used by the tool server
        RUNTIME: In-process runtime (configuration, org context)
    """

    DATABASE = "db"
    MCP = "mcp"
    HTTP = "http"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
