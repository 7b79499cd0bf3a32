# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Registration strategies decide what happens when a service type already has
an entry in the registry.
"""

from __future__ import annotations

from enum import Enum

from svcmap.logging import get_logger
from svcmap.registry.collection import ServiceDescriptor
from svcmap.registry.errors import DuplicateRegistrationError
from svcmap.registry.protocols import RegistryProtocol

logger = get_logger(__name__)


class RegistrationStrategy(str, Enum):
    """Add-policy applied to every entry of a mapping group."""

    APPEND = "append"
    """Always add, keeping earlier registrations."""

    SKIP = "skip"
    """Add only if the service type has no registration yet."""

    REPLACE = "replace"
    """Drop existing registrations of the service type, then add."""

    THROW = "throw"
    """Raise DuplicateRegistrationError if the service type is registered."""

    def apply(self, registry: RegistryProtocol, descriptor: ServiceDescriptor) -> bool:
        """Write a descriptor into the registry according to this strategy.

        Args:
            registry: The registry to write to
            descriptor: The entry to write

        Returns:
            True if the descriptor was added, False if it was skipped

        Raises:
            DuplicateRegistrationError: For THROW when the service type is taken
        """
        if self is RegistrationStrategy.APPEND:
            registry.add(descriptor)
            return True

        registered = registry.is_registered(descriptor.service_type)

        if self is RegistrationStrategy.SKIP:
            if registered:
                logger.debug(
                    "Skipping registration, service already registered",
                    extra={
                        "service_type": descriptor.service_type,
                        "implementation_type": descriptor.implementation_type,
                    },
                )
                return False
        elif self is RegistrationStrategy.REPLACE:
            if registered:
                logger.debug(
                    "Replacing existing registrations",
                    extra={"service_type": descriptor.service_type},
                )
                registry.remove_service(descriptor.service_type)
        elif registered:
            raise DuplicateRegistrationError(
                descriptor.service_type,
                descriptor.implementation_type,
                strategy=self.value,
            )

        registry.add(descriptor)
        return True
