# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Service lifetimes understood by svcmap registries.
"""

from enum import Enum


class ServiceLifetime(str, Enum):
    """Lifetime assigned to a registry entry."""

    SINGLETON = "singleton"
    """One instance for the whole container."""

    SCOPED = "scoped"
    """One instance per scope (unit of work, request)."""

    TRANSIENT = "transient"
    """A new instance on every resolution."""
