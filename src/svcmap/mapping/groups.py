# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Mapping groups and the lifetime selector.

Every directive on a ServiceTypeSelector produces one MappingGroup and hands
back a LifetimeSelector for it. The lifetime selector assigns one lifetime and
one registration strategy to the whole group and later writes the group into
a registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

from svcmap.logging import get_logger
from svcmap.mapping.errors import InvalidArgumentError
from svcmap.registry.collection import ServiceDescriptor
from svcmap.registry.lifetime import ServiceLifetime
from svcmap.registry.protocols import RegistryProtocol
from svcmap.registry.strategies import RegistrationStrategy

if TYPE_CHECKING:
    from svcmap.mapping.selector import ServiceTypeSelector

logger = get_logger(__name__)


class MappingEntry(BaseModel):
    """One implementation type and the service types it is exposed under."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    implementation_type: Any
    service_types: tuple[Any, ...]

    @field_validator("service_types")
    @classmethod
    def check_non_empty(cls, v: tuple[Any, ...]) -> tuple[Any, ...]:
        if not v:
            raise ValueError("a mapping entry needs at least one service type")
        return v


class MappingGroup(BaseModel):
    """Ordered entries produced by a single directive."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    directive: str
    entries: tuple[MappingEntry, ...] = ()

    @classmethod
    def from_selection(
        cls, directive: str, selection: Iterable[tuple[Any, Iterable[Any]]]
    ) -> MappingGroup:
        """Build a group from (implementation, service types) pairs.

        Service types are de-duplicated keeping their first position;
        implementations with no service types get no entry.
        """
        entries = []
        for implementation_type, service_types in selection:
            unique = tuple(dict.fromkeys(service_types))
            if unique:
                entries.append(
                    MappingEntry(
                        implementation_type=implementation_type,
                        service_types=unique,
                    )
                )
        return cls(directive=directive, entries=tuple(entries))

    @property
    def implementation_types(self) -> tuple[Any, ...]:
        return tuple(e.implementation_type for e in self.entries)

    def service_types_for(self, implementation_type: Any) -> tuple[Any, ...]:
        """Service types mapped for an implementation, empty if it has no entry."""
        for entry in self.entries:
            if entry.implementation_type == implementation_type:
                return entry.service_types
        return ()

    def __len__(self) -> int:
        return len(self.entries)


def _coerce_lifetime(lifetime: ServiceLifetime | str | None) -> ServiceLifetime:
    if lifetime is None:
        raise InvalidArgumentError("lifetime")
    try:
        return ServiceLifetime(lifetime)
    except ValueError:
        raise InvalidArgumentError(
            "lifetime",
            f"must be one of: {', '.join(t.value for t in ServiceLifetime)}",
            value=str(lifetime),
        ) from None


def _coerce_strategy(
    strategy: RegistrationStrategy | str | None,
) -> RegistrationStrategy:
    if strategy is None:
        raise InvalidArgumentError("strategy")
    try:
        return RegistrationStrategy(strategy)
    except ValueError:
        raise InvalidArgumentError(
            "strategy",
            f"must be one of: {', '.join(s.value for s in RegistrationStrategy)}",
            value=str(strategy),
        ) from None


class LifetimeSelector:
    """Lifetime and registration strategy of one mapping group.

    The ``with_*`` methods return the owning ServiceTypeSelector so further
    directives can be chained:

        (
            ServiceTypeSelector(types)
            .as_matching_interface()
            .with_scoped_lifetime()
            .as_self()
            .with_singleton_lifetime()
        )
    """

    def __init__(
        self,
        selector: ServiceTypeSelector,
        group: MappingGroup,
        lifetime: ServiceLifetime,
        strategy: RegistrationStrategy,
    ) -> None:
        self._selector = selector
        self._group = group
        self._lifetime = lifetime
        self._strategy = strategy

    @property
    def group(self) -> MappingGroup:
        return self._group

    @property
    def lifetime(self) -> ServiceLifetime:
        return self._lifetime

    @property
    def strategy(self) -> RegistrationStrategy:
        return self._strategy

    def with_lifetime(self, lifetime: ServiceLifetime | str) -> ServiceTypeSelector:
        """Set the lifetime of every registration in this group.

        Raises:
            InvalidArgumentError: If ``lifetime`` is None or not a known lifetime
        """
        self._selector._check_not_consumed("with_lifetime")
        self._lifetime = _coerce_lifetime(lifetime)
        return self._selector

    def with_singleton_lifetime(self) -> ServiceTypeSelector:
        return self.with_lifetime(ServiceLifetime.SINGLETON)

    def with_scoped_lifetime(self) -> ServiceTypeSelector:
        return self.with_lifetime(ServiceLifetime.SCOPED)

    def with_transient_lifetime(self) -> ServiceTypeSelector:
        return self.with_lifetime(ServiceLifetime.TRANSIENT)

    def using(self, strategy: RegistrationStrategy | str) -> LifetimeSelector:
        """Set the registration strategy of this group."""
        self._selector._check_not_consumed("using")
        self._strategy = _coerce_strategy(strategy)
        return self

    def descriptors(self) -> Iterator[ServiceDescriptor]:
        """Registry entries of this group: entry order, then service type order."""
        for entry in self._group.entries:
            for service_type in entry.service_types:
                yield ServiceDescriptor(
                    service_type=service_type,
                    implementation_type=entry.implementation_type,
                    lifetime=self._lifetime,
                )

    def populate(self, registry: RegistryProtocol) -> int:
        """Write this group into ``registry``.

        Returns:
            Number of descriptors actually added
        """
        added = 0
        for descriptor in self.descriptors():
            if self._strategy.apply(registry, descriptor):
                added += 1
        logger.debug(
            "Populated mapping group",
            extra={
                "directive": self._group.directive,
                "lifetime": self._lifetime,
                "strategy": self._strategy,
                "added": added,
            },
        )
        return added

    def __repr__(self) -> str:
        return (
            f"LifetimeSelector({self._group.directive}, {len(self._group)} entries, "
            f"{self._lifetime.value}, {self._strategy.value})"
        )
