# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Error handling primitives for svcmap.
"""

from svcmap.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, SvcmapError
from svcmap.errors.registry import ErrorRegistry, registry

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ErrorRegistry",
    "ErrorSeverity",
    "SvcmapError",
    "registry",
]
