# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Type filters.

A TypeFilter is an immutable, ordered set of type descriptors. Every method
returns a new filter, which makes it suitable as the working set handed to an
``as_matching_interface`` refinement callback:

    selector.as_matching_interface(
        lambda impl, found: found.in_module("app.contracts")
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from svcmap.mapping.descriptors import TypeDescriptor, describe


def _identity(t: Any) -> Any:
    return t.identity if isinstance(t, TypeDescriptor) else t


def _in_any_module(descriptor: TypeDescriptor, names: tuple[str, ...]) -> bool:
    module = descriptor.module
    if module is None:
        return False
    return any(module == name or module.startswith(f"{name}.") for name in names)


class TypeFilter:
    """Ordered, immutable selection of types with chainable predicates."""

    __slots__ = ("_types",)

    def __init__(self, types: Iterable[Any] = ()) -> None:
        self._types: tuple[TypeDescriptor, ...] = tuple(describe(t) for t in types)

    @property
    def types(self) -> tuple[TypeDescriptor, ...]:
        return self._types

    @property
    def identities(self) -> tuple[Any, ...]:
        return tuple(t.identity for t in self._types)

    def where(self, predicate: Callable[[TypeDescriptor], bool]) -> TypeFilter:
        """Keep the types for which ``predicate`` returns True."""
        return TypeFilter(t for t in self._types if predicate(t))

    def where_not(self, predicate: Callable[[TypeDescriptor], bool]) -> TypeFilter:
        return TypeFilter(t for t in self._types if not predicate(t))

    def assignable_to(self, *types: Any) -> TypeFilter:
        """Keep types assignable to at least one of ``types``."""
        return self.where(lambda t: any(t.is_assignable_to(other) for other in types))

    def not_assignable_to(self, *types: Any) -> TypeFilter:
        return self.where_not(
            lambda t: any(t.is_assignable_to(other) for other in types)
        )

    def in_module(self, *names: str) -> TypeFilter:
        """Keep types defined in any of the modules or packages ``names``."""
        return self.where(lambda t: _in_any_module(t, names))

    def not_in_module(self, *names: str) -> TypeFilter:
        return self.where_not(lambda t: _in_any_module(t, names))

    def with_attribute(self, name: str) -> TypeFilter:
        """Keep types that define (or inherit) the class attribute ``name``."""
        return self.where(lambda t: hasattr(t.identity, name))

    def without_attribute(self, name: str) -> TypeFilter:
        return self.where_not(lambda t: hasattr(t.identity, name))

    def exclude(self, *types: Any) -> TypeFilter:
        excluded = {_identity(t) for t in types}
        return self.where_not(lambda t: t.identity in excluded)

    def first(self) -> TypeDescriptor | None:
        return self._types[0] if self._types else None

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, item: object) -> bool:
        identity = _identity(item)
        return any(t.identity == identity for t in self._types)

    def __repr__(self) -> str:
        names = ", ".join(t.name for t in self._types)
        return f"TypeFilter([{names}])"
