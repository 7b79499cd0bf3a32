# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Protocol definitions for svcmap registries.

svcmap never resolves services itself; it writes ServiceDescriptor entries into
whatever registry the host application uses. Any object implementing
RegistryProtocol can be populated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from svcmap.registry.collection import ServiceDescriptor


@runtime_checkable
class RegistryProtocol(Protocol):
    """Append-only (from svcmap's viewpoint) collection of service descriptors."""

    def add(self, descriptor: ServiceDescriptor) -> None:
        """Append a descriptor, keeping registration order."""
        ...

    def is_registered(self, service_type: Any) -> bool:
        """Check whether any descriptor exists for the service type."""
        ...

    def remove_service(self, service_type: Any) -> None:
        """Remove every descriptor registered for the service type."""
        ...
