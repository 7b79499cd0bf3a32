# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Convention-based interface matching.

``find_matching_interface`` picks the interface an implementation should be
registered under by name: ``Widget`` maps to ``IWidget``. Open generic
definitions only consider interfaces bound to exactly their own type
parameters, in the same order, so

    class Pair(IPair[B, A], Generic[A, B]): ...

never maps to ``IPair``: a ``Pair[x, y]`` is an ``IPair[y, x]``, and an
open registration of ``IPair`` could not express that.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from svcmap.mapping.config import MappingSettings
from svcmap.mapping.descriptors import GenericKind, TypeDescriptor
from svcmap.mapping.errors import InvalidArgumentError
from svcmap.mapping.filters import TypeFilter

RefineCallback = Callable[[TypeDescriptor, TypeFilter], Iterable[Any]]


def generic_parameters_match(
    parameters: Sequence[Any], arguments: Sequence[Any]
) -> bool:
    """True if ``arguments`` are exactly ``parameters``, positionally."""
    if len(parameters) != len(arguments):
        return False
    return all(p == a for p, a in zip(parameters, arguments))


def interfaces_to_map(candidate: TypeDescriptor) -> tuple[TypeDescriptor, ...]:
    """Interfaces of ``candidate`` that may be offered as its service type.

    Non-generic and closed generic types offer all their interfaces. Open
    generic definitions offer the definitions of the generic interfaces bound
    to their own parameters, dropping every other interface.
    """
    kind = candidate.generic_kind
    if kind is GenericKind.NON_GENERIC or kind is GenericKind.CLOSED_GENERIC:
        return candidate.implemented_interfaces
    if kind is GenericKind.OPEN_GENERIC_DEFINITION:
        return tuple(_open_generic_interfaces(candidate))
    raise ValueError(f"Unknown generic kind: {kind!r}")


def _open_generic_interfaces(candidate: TypeDescriptor) -> Iterator[TypeDescriptor]:
    for interface in candidate.implemented_interfaces:
        if (
            interface.is_generic
            and interface.contains_generic_parameters
            and generic_parameters_match(
                candidate.generic_parameters, interface.generic_arguments
            )
        ):
            yield interface.definition_descriptor()


def find_matching_interface(
    candidate: TypeDescriptor,
    settings: MappingSettings,
    refine: RefineCallback | None = None,
) -> tuple[TypeDescriptor, ...]:
    """Find the conventionally named interface of ``candidate``.

    Args:
        candidate: The implementation type
        settings: Supplies the interface naming convention
        refine: Optional callback receiving the candidate and the name-matched
            interfaces as a TypeFilter, returning the subset to keep

    Returns:
        An empty tuple, or a tuple holding the single chosen interface. When
        several interfaces qualify, the first one in MRO order wins.

    Raises:
        InvalidArgumentError: If ``refine`` returns None
    """
    target = settings.matching_interface_name(candidate.name)
    matched = tuple(i for i in interfaces_to_map(candidate) if i.name == target)

    if refine is None:
        return matched[:1]

    kept = refine(candidate, TypeFilter(matched))
    if kept is None:
        raise InvalidArgumentError(
            "refine",
            "returned None instead of the interfaces to keep",
            candidate=candidate.name,
        )
    # Only entries of the matched set count, in their original order
    remaining = {i.identity if isinstance(i, TypeDescriptor) else i for i in kept}
    for interface in matched:
        if interface.identity in remaining:
            return (interface,)
    return ()
