# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap

"""
Public API for svcmap logging.
"""

from __future__ import annotations

from svcmap.logging.config import LoggingSettings, LogLevel
from svcmap.logging.logger import StructuredFormatter, get_logger

__all__ = [
    "LogLevel",
    "LoggingSettings",
    "StructuredFormatter",
    "get_logger",
]
