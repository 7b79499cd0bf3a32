# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Error classes for svcmap registries.
"""

from __future__ import annotations

from typing import Any, Final

from svcmap.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, SvcmapError

REGISTRY: Final = ErrorCategory.get_or_create("REGISTRY")
REGISTRY_ERROR: Final = ErrorCode.get_or_create("REGISTRY_ERROR", REGISTRY)
REGISTRY_DUPLICATE_REGISTRATION: Final = ErrorCode.get_or_create(
    "REGISTRY_DUPLICATE_REGISTRATION", REGISTRY
)
REGISTRY_SERVICE_NOT_REGISTERED: Final = ErrorCode.get_or_create(
    "REGISTRY_SERVICE_NOT_REGISTERED", REGISTRY
)


def _type_name(t: Any) -> str:
    return getattr(t, "__name__", None) or str(t)


class RegistryError(SvcmapError):
    """Base class for registry errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = REGISTRY_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class DuplicateRegistrationError(RegistryError):
    """Raised when a service type is already registered and the strategy forbids it."""

    def __init__(
        self, service_type: Any, implementation_type: Any = None, **context: Any
    ) -> None:
        """Initialize a duplicate registration error.

        Args:
            service_type: The service type that was already registered
            implementation_type: The implementation that was being added
            **context: Additional context information
        """
        if implementation_type is not None:
            context["implementation_name"] = _type_name(implementation_type)
        super().__init__(
            message=f"Service {_type_name(service_type)} is already registered",
            code=REGISTRY_DUPLICATE_REGISTRATION,
            service_name=_type_name(service_type),
            **context,
        )


class ServiceNotRegisteredError(RegistryError, KeyError):
    """Raised when removing a service type that has no registration."""

    def __init__(self, service_type: Any, **context: Any) -> None:
        super().__init__(
            message=f"Service {_type_name(service_type)} is not registered",
            code=REGISTRY_SERVICE_NOT_REGISTERED,
            service_name=_type_name(service_type),
            **context,
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return f"{self.code}: {self.message}"
