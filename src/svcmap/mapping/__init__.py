# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Convention-based service-type mapping.
"""

from svcmap.mapping.config import MappingSettings
from svcmap.mapping.descriptors import GenericKind, TypeDescriptor, describe, is_interface
from svcmap.mapping.errors import (
    InvalidArgumentError,
    MappingError,
    SelectorConsumedError,
    UnsupportedTypeError,
)
from svcmap.mapping.filters import TypeFilter
from svcmap.mapping.groups import LifetimeSelector, MappingEntry, MappingGroup
from svcmap.mapping.matching import (
    find_matching_interface,
    generic_parameters_match,
    interfaces_to_map,
)
from svcmap.mapping.selector import ServiceTypeSelector, map_services

__all__ = [
    "GenericKind",
    "InvalidArgumentError",
    "LifetimeSelector",
    "MappingEntry",
    "MappingError",
    "MappingGroup",
    "MappingSettings",
    "SelectorConsumedError",
    "ServiceTypeSelector",
    "TypeDescriptor",
    "TypeFilter",
    "UnsupportedTypeError",
    "describe",
    "find_matching_interface",
    "generic_parameters_match",
    "interfaces_to_map",
    "is_interface",
    "map_services",
]
