import pytest
from pydantic import ValidationError

from conftest_types import IAuditable, IDisposable, IWidget, Gadget, Plain, Widget
from svcmap.mapping.errors import InvalidArgumentError
from svcmap.mapping.groups import MappingEntry, MappingGroup
from svcmap.mapping.selector import ServiceTypeSelector
from svcmap.registry.lifetime import ServiceLifetime
from svcmap.registry.strategies import RegistrationStrategy


def test_from_selection_drops_empty_results():
    group = MappingGroup.from_selection(
        "as_selected", [(Widget, [IWidget]), (Plain, []), (Gadget, [IDisposable])]
    )

    assert group.directive == "as_selected"
    assert group.implementation_types == (Widget, Gadget)
    assert len(group) == 2


def test_from_selection_deduplicates_keeping_first_position():
    group = MappingGroup.from_selection(
        "as_types", [(Widget, [IDisposable, IWidget, IDisposable])]
    )

    assert group.service_types_for(Widget) == (IDisposable, IWidget)


def test_service_types_for_unknown_implementation():
    group = MappingGroup.from_selection("as_self", [(Widget, [Widget])])

    assert group.service_types_for(Plain) == ()


def test_entry_requires_a_service_type():
    with pytest.raises(ValidationError):
        MappingEntry(implementation_type=Widget, service_types=())


def test_groups_are_frozen():
    group = MappingGroup.from_selection("as_self", [(Widget, [Widget])])

    with pytest.raises(ValidationError):
        group.directive = "other"


class TestLifetimeSelector:
    @pytest.fixture
    def lifetime_selector(self, settings):
        return ServiceTypeSelector([Widget, Gadget], settings=settings).as_implemented_interfaces()

    def test_defaults_come_from_settings(self, lifetime_selector):
        assert lifetime_selector.lifetime is ServiceLifetime.TRANSIENT
        assert lifetime_selector.strategy is RegistrationStrategy.APPEND

    def test_lifetime_accepts_strings(self, lifetime_selector):
        lifetime_selector.with_lifetime("singleton")

        assert lifetime_selector.lifetime is ServiceLifetime.SINGLETON

    @pytest.mark.parametrize("lifetime", [None, "forever"])
    def test_invalid_lifetime_is_rejected(self, lifetime_selector, lifetime):
        with pytest.raises(InvalidArgumentError) as exc_info:
            lifetime_selector.with_lifetime(lifetime)

        assert exc_info.value.argument == "lifetime"
        assert lifetime_selector.lifetime is ServiceLifetime.TRANSIENT

    def test_using_returns_itself(self, lifetime_selector):
        assert lifetime_selector.using("replace") is lifetime_selector
        assert lifetime_selector.strategy is RegistrationStrategy.REPLACE

    def test_invalid_strategy_is_rejected(self, lifetime_selector):
        with pytest.raises(InvalidArgumentError) as exc_info:
            lifetime_selector.using("merge")

        assert "append, skip, replace, throw" in exc_info.value.message

    def test_descriptors_follow_entry_then_service_order(self, lifetime_selector):
        lifetime_selector.with_scoped_lifetime()

        pairs = [
            (d.implementation_type, d.service_type, d.lifetime)
            for d in lifetime_selector.descriptors()
        ]

        assert [p[:2] for p in pairs] == [
            (Widget, IWidget),
            (Widget, IDisposable),
            (Widget, IAuditable),
            (Gadget, IDisposable),
        ]
        assert {p[2] for p in pairs} == {ServiceLifetime.SCOPED}

    def test_populate_counts_added_descriptors(self, lifetime_selector, services):
        services.add_transient(IDisposable, Plain)
        lifetime_selector.using(RegistrationStrategy.SKIP)

        assert lifetime_selector.populate(services) == 2
        assert services.get_implementations(IDisposable) == [Plain]

    def test_repr(self, lifetime_selector):
        assert repr(lifetime_selector) == (
            "LifetimeSelector(as_implemented_interfaces, 2 entries, transient, append)"
        )
