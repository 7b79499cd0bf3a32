# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Backing registry contract and the default in-memory implementation.
"""

from svcmap.registry.collection import ServiceCollection, ServiceDescriptor
from svcmap.registry.errors import (
    DuplicateRegistrationError,
    RegistryError,
    ServiceNotRegisteredError,
)
from svcmap.registry.lifetime import ServiceLifetime
from svcmap.registry.protocols import RegistryProtocol
from svcmap.registry.strategies import RegistrationStrategy

__all__ = [
    "DuplicateRegistrationError",
    "RegistrationStrategy",
    "RegistryError",
    "RegistryProtocol",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceLifetime",
    "ServiceNotRegisteredError",
]
