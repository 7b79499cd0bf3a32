# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Type descriptors.

A TypeDescriptor is everything the mapping engine needs to know about a type:
its name, how it is generic, and which interfaces it implements. ``describe()``
builds one from a live class or subscripted generic alias using ``typing``
introspection; descriptors can also be constructed directly from a
precomputed table when the types are not Python classes.

Interfaces are protocols and abstract base classes found in the MRO. Their
generic arguments are bound through ``__orig_bases__``, so for

    class Pair(IPair[B, A], Generic[A, B]): ...

the implemented interface is reported as ``IPair[B, A]``, not ``IPair[A, B]``.
"""

from __future__ import annotations

import inspect
import types
from abc import ABC
from enum import Enum
from typing import (
    Any,
    Generic,
    ParamSpec,
    Protocol,
    TypeVar,
    TypeVarTuple,
    get_args,
    get_origin,
)

from pydantic import BaseModel, ConfigDict, model_validator

from svcmap.mapping.errors import UnsupportedTypeError

# Bases that are typing machinery rather than service contracts
_NOT_INTERFACES: frozenset[Any] = frozenset({object, Generic, Protocol, ABC})

_TYPE_PARAMETERS = (TypeVar, ParamSpec, TypeVarTuple)


class GenericKind(str, Enum):
    """How a type participates in generics."""

    NON_GENERIC = "non_generic"
    CLOSED_GENERIC = "closed_generic"
    OPEN_GENERIC_DEFINITION = "open_generic_definition"

    @property
    def is_generic(self) -> bool:
        return self is not GenericKind.NON_GENERIC


class TypeDescriptor(BaseModel):
    """Immutable description of a candidate type or one of its interfaces.

    Attributes:
        identity: Hashable handle of the type (a class, a generic alias, or any
            opaque value when built from a table)
        name: Simple, non-qualified name
        module: Defining module, if known
        generic_kind: NON_GENERIC, CLOSED_GENERIC or OPEN_GENERIC_DEFINITION
        generic_parameters: Type parameters, only for open generic definitions
        generic_arguments: Type arguments of a constructed generic; these may
            themselves be unbound type variables
        generic_definition: The type with its arguments erased
        implemented_interfaces: Interfaces in MRO order
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identity: Any
    name: str
    module: str | None = None
    generic_kind: GenericKind = GenericKind.NON_GENERIC
    generic_parameters: tuple[Any, ...] = ()
    generic_arguments: tuple[Any, ...] = ()
    generic_definition: Any = None
    implemented_interfaces: tuple[TypeDescriptor, ...] = ()

    @model_validator(mode="after")
    def check_generic_shape(self) -> TypeDescriptor:
        if self.generic_parameters and (
            self.generic_kind is not GenericKind.OPEN_GENERIC_DEFINITION
        ):
            raise ValueError(
                "generic_parameters are only allowed on open generic definitions"
            )
        if self.generic_kind is GenericKind.NON_GENERIC and self.generic_arguments:
            raise ValueError("a non-generic type cannot have generic_arguments")
        return self

    @property
    def is_generic(self) -> bool:
        return self.generic_kind.is_generic

    @property
    def is_generic_type_definition(self) -> bool:
        return self.generic_kind is GenericKind.OPEN_GENERIC_DEFINITION

    @property
    def contains_generic_parameters(self) -> bool:
        """True if any part of this type is still an unbound type parameter."""
        if self.is_generic_type_definition:
            return True
        return any(_contains_type_parameters(arg) for arg in self.generic_arguments)

    def definition_descriptor(self) -> TypeDescriptor:
        """Describe the generic definition of this type (arguments erased).

        Non-generic types and definitions are returned unchanged.
        """
        if (
            self.generic_kind is not GenericKind.CLOSED_GENERIC
            or self.generic_definition is None
        ):
            return self
        if isinstance(self.generic_definition, type):
            return describe(self.generic_definition)
        return TypeDescriptor(
            identity=self.generic_definition,
            name=self.name,
            module=self.module,
            generic_kind=GenericKind.OPEN_GENERIC_DEFINITION,
        )

    def is_assignable_to(self, target: Any) -> bool:
        """Check whether this type can be registered under ``target``.

        ``target`` may be a descriptor or a type identity. Generic
        definitions match any of their constructed forms.
        """
        if isinstance(target, TypeDescriptor):
            target = target.identity
        for candidate in (self, *self.implemented_interfaces):
            if candidate.identity == target or candidate.generic_definition == target:
                return True
        # Concrete base classes are not listed as interfaces
        identity = self.generic_definition if self.is_generic else self.identity
        if isinstance(identity, type) and isinstance(target, type):
            return target in identity.__mro__
        return False

    def __repr__(self) -> str:
        return f"TypeDescriptor({_display_name(self.identity)}, {self.generic_kind.value})"


def is_interface(t: Any) -> bool:
    """
    Check if a class counts as an interface.

    Protocols, abstract classes, and direct ``ABC`` subclasses (marker
    interfaces without abstract methods) qualify.

    Args:
        t: The class to check

    Returns:
        True if the class can be exposed as an implemented interface
    """
    if not isinstance(t, type) or t in _NOT_INTERFACES:
        return False
    if getattr(t, "_is_protocol", False):
        return True
    if inspect.isabstract(t):
        return True
    return ABC in t.__bases__


def describe(obj: Any) -> TypeDescriptor:
    """Build a TypeDescriptor for a class or a subscripted generic alias.

    Descriptors are returned unchanged.

    Raises:
        UnsupportedTypeError: If ``obj`` is neither a class nor a generic alias
    """
    if isinstance(obj, TypeDescriptor):
        return obj
    origin = get_origin(obj)
    if isinstance(origin, type) and origin is not types.UnionType:
        return _describe_alias(obj, origin, get_args(obj))
    if isinstance(obj, type):
        return _describe_class(obj)
    raise UnsupportedTypeError(obj)


def _describe_class(cls: type) -> TypeDescriptor:
    parameters = tuple(getattr(cls, "__parameters__", ()) or ())
    return TypeDescriptor(
        identity=cls,
        name=cls.__name__,
        module=cls.__module__,
        generic_kind=(
            GenericKind.OPEN_GENERIC_DEFINITION
            if parameters
            else GenericKind.NON_GENERIC
        ),
        generic_parameters=parameters,
        generic_definition=cls if parameters else None,
        implemented_interfaces=_implemented_interfaces(cls, {}),
    )


def _describe_alias(alias: Any, origin: type, args: tuple[Any, ...]) -> TypeDescriptor:
    substitutions = dict(zip(_parameters_of(origin), args))
    return TypeDescriptor(
        identity=alias,
        name=origin.__name__,
        module=origin.__module__,
        generic_kind=GenericKind.CLOSED_GENERIC,
        generic_arguments=args,
        generic_definition=origin,
        implemented_interfaces=_implemented_interfaces(origin, substitutions),
    )


def _implemented_interfaces(
    cls: type, substitutions: dict[Any, Any]
) -> tuple[TypeDescriptor, ...]:
    bound = _bind_bases(cls, substitutions, {})
    interfaces = []
    for base in cls.__mro__[1:]:
        if not is_interface(base):
            continue
        args = bound.get(base)
        if args:
            interfaces.append(_describe_alias(base[args], base, args))
        else:
            interfaces.append(_describe_class(base))
    return tuple(interfaces)


def _bind_bases(
    cls: type, substitutions: dict[Any, Any], bound: dict[type, tuple[Any, ...]]
) -> dict[type, tuple[Any, ...]]:
    """Map every generic ancestor of ``cls`` to the arguments it is bound with.

    The nearest binding wins, matching MRO precedence.
    """
    # __orig_bases__ is inherited through attribute lookup; only the class's own counts
    for base in cls.__dict__.get("__orig_bases__", cls.__bases__):
        origin = get_origin(base)
        if origin is None:
            if isinstance(base, type) and base not in _NOT_INTERFACES:
                _bind_bases(base, {}, bound)
            continue
        if origin is Generic or origin is Protocol or not isinstance(origin, type):
            continue
        args = tuple(_substitute(arg, substitutions) for arg in get_args(base))
        bound.setdefault(origin, args)
        _bind_bases(origin, dict(zip(_parameters_of(origin), args)), bound)
    return bound


def _substitute(arg: Any, substitutions: dict[Any, Any]) -> Any:
    if not substitutions:
        return arg
    if isinstance(arg, _TYPE_PARAMETERS):
        return substitutions.get(arg, arg)
    parameters = getattr(arg, "__parameters__", ())
    if parameters and get_origin(arg) is not None:
        return arg[tuple(substitutions.get(p, p) for p in parameters)]
    return arg


def _parameters_of(cls: type) -> tuple[Any, ...]:
    return tuple(getattr(cls, "__parameters__", ()) or ())


def _contains_type_parameters(arg: Any) -> bool:
    if isinstance(arg, _TYPE_PARAMETERS):
        return True
    return bool(getattr(arg, "__parameters__", ()))


def _display_name(identity: Any) -> str:
    if isinstance(identity, type):
        return identity.__name__
    return str(identity)
