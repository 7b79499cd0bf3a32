# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
svcmap: convention-based service mapping for dependency injection registries.
"""

from svcmap.mapping import (
    GenericKind,
    InvalidArgumentError,
    LifetimeSelector,
    MappingError,
    MappingGroup,
    MappingSettings,
    SelectorConsumedError,
    ServiceTypeSelector,
    TypeDescriptor,
    TypeFilter,
    describe,
    map_services,
)
from svcmap.registry import (
    DuplicateRegistrationError,
    RegistrationStrategy,
    RegistryProtocol,
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
)

__version__ = "0.1.0"

__all__ = [
    "DuplicateRegistrationError",
    "GenericKind",
    "InvalidArgumentError",
    "LifetimeSelector",
    "MappingError",
    "MappingGroup",
    "MappingSettings",
    "RegistrationStrategy",
    "RegistryProtocol",
    "SelectorConsumedError",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceLifetime",
    "ServiceTypeSelector",
    "TypeDescriptor",
    "TypeFilter",
    "describe",
    "map_services",
]
