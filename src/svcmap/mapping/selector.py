# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Service type selection.

ServiceTypeSelector decides which service types each candidate implementation
is registered under. Each directive (``as_self``, ``as_types``,
``as_selected``, ``as_implemented_interfaces``, ``as_matching_interface``)
appends one mapping group; ``populate`` writes the groups, in the order they
were created, into a registry.

Example:
    ```python
    services = ServiceCollection()
    selector = ServiceTypeSelector([SqlUserRepository, SmtpMailer])
    selector.as_matching_interface().with_scoped_lifetime()
    selector.populate(services)
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, get_origin

from svcmap.logging import get_logger
from svcmap.mapping.config import MappingSettings
from svcmap.mapping.descriptors import TypeDescriptor, describe
from svcmap.mapping.errors import InvalidArgumentError, SelectorConsumedError
from svcmap.mapping.groups import LifetimeSelector, MappingGroup
from svcmap.mapping.matching import RefineCallback, find_matching_interface
from svcmap.registry.protocols import RegistryProtocol

logger = get_logger(__name__)


def _identity(t: Any) -> Any:
    return t.identity if isinstance(t, TypeDescriptor) else t


class ServiceTypeSelector:
    """Maps a fixed, ordered set of candidate types to service types.

    Candidates are described once, at construction, and never filtered,
    de-duplicated or reordered. The selector is single-use: after
    ``populate`` every further call raises SelectorConsumedError.
    """

    def __init__(
        self,
        types: Iterable[Any],
        settings: MappingSettings | None = None,
    ) -> None:
        """Initialize a selector.

        Args:
            types: Candidate classes, generic aliases or TypeDescriptors
            settings: Mapping defaults (loaded from the environment if None)

        Raises:
            InvalidArgumentError: If ``types`` is None
            UnsupportedTypeError: If a candidate cannot be described
        """
        if types is None:
            raise InvalidArgumentError("types")
        self._settings = settings or MappingSettings.load()
        self._candidates: tuple[TypeDescriptor, ...] = tuple(
            describe(t) for t in types
        )
        self._selectors: list[LifetimeSelector] = []
        self._consumed = False

    @property
    def candidates(self) -> tuple[TypeDescriptor, ...]:
        return self._candidates

    @property
    def settings(self) -> MappingSettings:
        return self._settings

    @property
    def groups(self) -> tuple[LifetimeSelector, ...]:
        """Groups added by directives so far, without the self-mapping fallback."""
        return tuple(self._selectors)

    def as_self(self) -> LifetimeSelector:
        """Register each candidate as itself."""
        return self._select("as_self", lambda t: (t.identity,))

    def as_(self, *types: Any) -> LifetimeSelector:
        """Register every candidate under each of ``types``."""
        return self.as_types(types)

    def as_types(self, types: Iterable[Any] | None) -> LifetimeSelector:
        """Register every candidate under the same fixed service types.

        Raises:
            InvalidArgumentError: If ``types`` is None, or a single type or
                string rather than an iterable of service types
        """
        if types is None:
            raise InvalidArgumentError("types")
        # Strings, aliases and descriptors are iterable but are single types
        if (
            isinstance(types, (str, type, TypeDescriptor))
            or get_origin(types) is not None
            or not isinstance(types, Iterable)
        ):
            raise InvalidArgumentError(
                "types",
                "must be an iterable of service types",
                value_type=type(types).__name__,
            )
        service_types = tuple(_identity(t) for t in types)
        return self._select("as_types", lambda _: service_types)

    def as_selected(
        self, selector: Callable[[Any], Iterable[Any]] | None
    ) -> LifetimeSelector:
        """Register each candidate under the types ``selector`` returns for it.

        ``selector`` receives the candidate's identity (usually the class).

        Raises:
            InvalidArgumentError: If ``selector`` is None or not callable, or if
                it returns None for a candidate
        """
        if selector is None:
            raise InvalidArgumentError("selector")
        if not callable(selector):
            raise InvalidArgumentError("selector", "must be callable")

        def select(candidate: TypeDescriptor) -> tuple[Any, ...]:
            result = selector(candidate.identity)
            if result is None:
                raise InvalidArgumentError(
                    "selector",
                    "returned None instead of an iterable of service types",
                    candidate=candidate.name,
                )
            return tuple(_identity(t) for t in result)

        return self._select("as_selected", select)

    def as_implemented_interfaces(self) -> LifetimeSelector:
        """Register each candidate under all of its interfaces, as reported."""
        return self._select(
            "as_implemented_interfaces",
            lambda t: tuple(i.identity for i in t.implemented_interfaces),
        )

    def as_matching_interface(
        self, refine: RefineCallback | None = None
    ) -> LifetimeSelector:
        """Register each candidate under its conventionally named interface.

        ``Widget`` is registered as ``IWidget`` (see MappingSettings for the
        naming convention). Candidates without such an interface get no entry.

        Args:
            refine: Optional callback ``(candidate, TypeFilter) -> kept`` that
                narrows the name-matched interfaces; the first kept one, in
                original order, wins

        Raises:
            InvalidArgumentError: If ``refine`` is not callable
        """
        if refine is not None and not callable(refine):
            raise InvalidArgumentError("refine", "must be callable")
        settings = self._settings
        return self._select(
            "as_matching_interface",
            lambda t: tuple(
                i.identity for i in find_matching_interface(t, settings, refine)
            ),
        )

    def build(self) -> tuple[LifetimeSelector, ...]:
        """Return the groups to populate, in creation order.

        Without any directive, this is a single group registering every
        candidate as itself. Any directive, even one matching nothing,
        suppresses that fallback.
        """
        if self._selectors:
            return tuple(self._selectors)
        logger.debug(
            "No mapping directive given, registering candidates as themselves",
            extra={"candidates": len(self._candidates)},
        )
        return (
            self._new_selector(
                MappingGroup.from_selection(
                    "as_self", ((t.identity, (t.identity,)) for t in self._candidates)
                )
            ),
        )

    def populate(self, registry: RegistryProtocol) -> int:
        """Write every group into ``registry``, each group fully before the next.

        Returns:
            Number of descriptors added

        Raises:
            InvalidArgumentError: If ``registry`` is None
            SelectorConsumedError: If this selector was already populated
        """
        self._check_not_consumed("populate")
        if registry is None:
            raise InvalidArgumentError("registry")
        groups = self.build()
        self._consumed = True
        return sum(group.populate(registry) for group in groups)

    def _select(
        self, directive: str, select: Callable[[TypeDescriptor], Iterable[Any]]
    ) -> LifetimeSelector:
        self._check_not_consumed(directive)
        group = MappingGroup.from_selection(
            directive, ((t.identity, select(t)) for t in self._candidates)
        )
        lifetime_selector = self._new_selector(group)
        self._selectors.append(lifetime_selector)
        logger.debug(
            "Added mapping group",
            extra={
                "directive": directive,
                "entries": len(group),
                "candidates": len(self._candidates),
            },
        )
        return lifetime_selector

    def _new_selector(self, group: MappingGroup) -> LifetimeSelector:
        return LifetimeSelector(
            self,
            group,
            self._settings.default_lifetime,
            self._settings.default_strategy,
        )

    def _check_not_consumed(self, operation: str) -> None:
        if self._consumed:
            raise SelectorConsumedError(operation)

    def __repr__(self) -> str:
        return (
            f"ServiceTypeSelector({len(self._candidates)} candidates, "
            f"{len(self._selectors)} groups)"
        )


def map_services(
    registry: RegistryProtocol,
    types: Iterable[Any],
    configure: Callable[[ServiceTypeSelector], Any] | None = None,
    *,
    settings: MappingSettings | None = None,
) -> int:
    """Map ``types`` and populate ``registry`` in one call.

    Args:
        registry: The registry to populate
        types: Candidate implementation types
        configure: Optional callback applying directives to the selector;
            without it every type is registered as itself
        settings: Mapping defaults

    Returns:
        Number of descriptors added

    Example:
        ```python
        map_services(
            services,
            [SqlUserRepository, SmtpMailer],
            lambda s: s.as_matching_interface().with_singleton_lifetime(),
        )
        ```
    """
    selector = ServiceTypeSelector(types, settings=settings)
    if configure is not None:
        configure(selector)
    return selector.populate(registry)
