# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Base error classes for svcmap.

Every svcmap error carries an ErrorCode, which belongs to an ErrorCategory,
plus a severity and a context dictionary describing the failure. Categories
and codes are shared through the process-wide registry, so declaring the same
name twice yields the same object.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from svcmap.errors.registry import registry


class ErrorSeverity(str, Enum):
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorCategory:
    """Named group of error codes (``MAPPING``, ``REGISTRY``)."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ErrorCategory({self.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ErrorCategory) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    @classmethod
    def get_or_create(cls, name: str) -> ErrorCategory:
        return registry.category(name, lambda: cls(name))


class ErrorCode:
    """A unique error code within a category."""

    def __init__(self, code: str, category: ErrorCategory) -> None:
        self.code = code
        self.category = category

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.category.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ErrorCode) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)

    @classmethod
    def get_or_create(cls, code: str, category: ErrorCategory) -> ErrorCode:
        """Register ``code`` under ``category``; an existing code is returned as is."""
        return registry.code(code, lambda: cls(code, category))

    @classmethod
    def get_by_code(cls, code: str) -> ErrorCode:
        """Look up a registered code by name.

        Raises:
            ValueError: If no such code has been registered
        """
        found = registry.lookup_code(code)
        if found is None:
            raise ValueError(f"Error code '{code}' not found in registry")
        return found


class SvcmapError(Exception):
    """
    Base error class for svcmap errors.
    Subclass it per failure; it is never raised directly.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> SvcmapError:
        if cls is SvcmapError:
            raise TypeError(
                "Do not instantiate SvcmapError directly; subclass it for specific errors."
            )
        return super().__new__(cls)

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a new error.

        Args:
            message: Human-readable error message
            code: The registered ErrorCode
            severity: Severity level of the error
            context: Details of the failure; ``kwargs`` are merged into it
        """
        if not isinstance(code, ErrorCode):
            raise TypeError(f"code must be an ErrorCode, not {type(code).__name__}")
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = code.category
        self.severity = severity
        self.context: dict[str, Any] = {**(context or {}), **kwargs}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
