# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Error classes for service-type mapping.

Mapping errors are programming errors surfaced while the application is being
configured; none of them is meant to be retried.
"""

from __future__ import annotations

from typing import Any, Final

from svcmap.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, SvcmapError

MAPPING: Final = ErrorCategory.get_or_create("MAPPING")
MAPPING_ERROR: Final = ErrorCode.get_or_create("MAPPING_ERROR", MAPPING)
MAPPING_INVALID_ARGUMENT: Final = ErrorCode.get_or_create(
    "MAPPING_INVALID_ARGUMENT", MAPPING
)
MAPPING_SELECTOR_CONSUMED: Final = ErrorCode.get_or_create(
    "MAPPING_SELECTOR_CONSUMED", MAPPING
)
MAPPING_UNSUPPORTED_TYPE: Final = ErrorCode.get_or_create(
    "MAPPING_UNSUPPORTED_TYPE", MAPPING
)


class MappingError(SvcmapError):
    """Base class for all mapping errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = MAPPING_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(code, str):
            code = ErrorCode.get_by_code(code)
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class InvalidArgumentError(MappingError, ValueError):
    """Raised when a directive receives an absent or unusable argument."""

    def __init__(self, argument: str, reason: str = "must not be None", **context: Any) -> None:
        """Initialize an invalid argument error.

        Args:
            argument: Name of the offending parameter
            reason: What is wrong with it
            **context: Additional context information
        """
        super().__init__(
            message=f"Argument '{argument}' {reason}",
            code=MAPPING_INVALID_ARGUMENT,
            argument=argument,
            **context,
        )
        self.argument = argument


class SelectorConsumedError(MappingError):
    """Raised when a selector is used after it has populated a registry."""

    def __init__(self, operation: str, **context: Any) -> None:
        super().__init__(
            message=f"Selector has already been populated and cannot perform: {operation}",
            code=MAPPING_SELECTOR_CONSUMED,
            operation=operation,
            **context,
        )


class UnsupportedTypeError(MappingError, TypeError):
    """Raised when a candidate cannot be described as a type."""

    def __init__(self, value: Any, **context: Any) -> None:
        super().__init__(
            message=f"Cannot describe {value!r} as a type",
            code=MAPPING_UNSUPPORTED_TYPE,
            value_type=type(value).__name__,
            **context,
        )
