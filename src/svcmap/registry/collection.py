# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
In-memory service collection.

ServiceCollection is the default backing registry: an ordered list of
(service type, implementation type, lifetime) entries. Order is preserved
because containers that resolve all implementations of a service, or apply
"last registration wins", depend on it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict

from svcmap.registry.errors import ServiceNotRegisteredError
from svcmap.registry.lifetime import ServiceLifetime


class ServiceDescriptor(BaseModel):
    """A single registry entry."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service_type: Any
    implementation_type: Any
    lifetime: ServiceLifetime

    def __repr__(self) -> str:
        return (
            f"ServiceDescriptor({_name(self.service_type)} -> "
            f"{_name(self.implementation_type)}, {self.lifetime.value})"
        )


def _name(t: Any) -> str:
    return getattr(t, "__name__", None) or str(t)


class ServiceCollection:
    """
    An ordered collection of service descriptors.

    Example:
        ```python
        services = ServiceCollection()
        services.add(ServiceDescriptor(
            service_type=IWidget,
            implementation_type=Widget,
            lifetime=ServiceLifetime.SINGLETON,
        ))
        assert services.is_registered(IWidget)
        ```
    """

    def __init__(self) -> None:
        self._descriptors: list[ServiceDescriptor] = []

    def add(self, descriptor: ServiceDescriptor) -> None:
        """Append a descriptor."""
        self._descriptors.append(descriptor)

    def add_singleton(self, service_type: Any, implementation_type: Any = None) -> ServiceCollection:
        return self._add(service_type, implementation_type, ServiceLifetime.SINGLETON)

    def add_scoped(self, service_type: Any, implementation_type: Any = None) -> ServiceCollection:
        return self._add(service_type, implementation_type, ServiceLifetime.SCOPED)

    def add_transient(self, service_type: Any, implementation_type: Any = None) -> ServiceCollection:
        return self._add(service_type, implementation_type, ServiceLifetime.TRANSIENT)

    def _add(
        self, service_type: Any, implementation_type: Any, lifetime: ServiceLifetime
    ) -> ServiceCollection:
        self.add(
            ServiceDescriptor(
                service_type=service_type,
                implementation_type=(
                    service_type if implementation_type is None else implementation_type
                ),
                lifetime=lifetime,
            )
        )
        return self

    def is_registered(self, service_type: Any) -> bool:
        """
        Check if a service is registered.

        Args:
            service_type: The type of service to check

        Returns:
            True if at least one descriptor exists for the service type
        """
        return any(d.service_type == service_type for d in self._descriptors)

    def remove_service(self, service_type: Any) -> None:
        """
        Remove every registration of a service type.

        Raises:
            ServiceNotRegisteredError: If the service is not registered
        """
        if not self.is_registered(service_type):
            raise ServiceNotRegisteredError(service_type)
        self._descriptors = [
            d for d in self._descriptors if d.service_type != service_type
        ]

    def get_services(self, service_type: Any) -> list[ServiceDescriptor]:
        """Get all descriptors for a service type, in registration order."""
        return [d for d in self._descriptors if d.service_type == service_type]

    def get_implementations(self, service_type: Any) -> list[Any]:
        return [d.implementation_type for d in self.get_services(service_type)]

    def clear(self) -> None:
        self._descriptors.clear()

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(list(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ServiceDescriptor):
            return item in self._descriptors
        return self.is_registered(item)

    def __repr__(self) -> str:
        return f"ServiceCollection({len(self)} descriptors)"
