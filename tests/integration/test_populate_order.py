"""End-to-end mapping passes against an in-memory ServiceCollection."""

import pytest

from conftest_types import (
    IDisposable,
    IMailer,
    IRepository,
    IWidget,
    Gadget,
    Mailer,
    Pair,
    Repository,
    Widget,
)
from svcmap import (
    DuplicateRegistrationError,
    MappingSettings,
    RegistrationStrategy,
    ServiceCollection,
    ServiceLifetime,
    ServiceTypeSelector,
    map_services,
)

pytestmark = pytest.mark.integration


def _triples(registry):
    return [(d.service_type, d.implementation_type, d.lifetime) for d in registry]


def test_groups_interleave_in_creation_order(settings, services):
    selector = ServiceTypeSelector([Widget, Gadget, Mailer], settings=settings)
    selector.as_matching_interface().with_scoped_lifetime()
    selector.as_(IDisposable).with_singleton_lifetime()
    selector.as_self()

    selector.populate(services)

    assert _triples(services) == [
        (IWidget, Widget, ServiceLifetime.SCOPED),
        (IMailer, Mailer, ServiceLifetime.SCOPED),
        (IDisposable, Widget, ServiceLifetime.SINGLETON),
        (IDisposable, Gadget, ServiceLifetime.SINGLETON),
        (IDisposable, Mailer, ServiceLifetime.SINGLETON),
        (Widget, Widget, ServiceLifetime.TRANSIENT),
        (Gadget, Gadget, ServiceLifetime.TRANSIENT),
        (Mailer, Mailer, ServiceLifetime.TRANSIENT),
    ]


def test_overlapping_groups_write_first_group_first(settings, services):
    selector = ServiceTypeSelector([Widget, Gadget], settings=settings)
    selector.as_(IDisposable).with_singleton_lifetime()
    selector.as_implemented_interfaces().with_scoped_lifetime()

    selector.populate(services)

    assert [
        (d.implementation_type, d.lifetime) for d in services.get_services(IDisposable)
    ] == [
        (Widget, ServiceLifetime.SINGLETON),
        (Gadget, ServiceLifetime.SINGLETON),
        (Widget, ServiceLifetime.SCOPED),
        (Gadget, ServiceLifetime.SCOPED),
    ]


def test_later_group_can_replace_earlier_registrations(settings, services):
    selector = ServiceTypeSelector([Widget, Gadget], settings=settings)
    selector.as_implemented_interfaces()
    selector.as_selected(lambda t: [IDisposable] if t is Gadget else []).using(
        RegistrationStrategy.REPLACE
    )

    selector.populate(services)

    assert services.get_implementations(IDisposable) == [Gadget]
    assert services.get_implementations(IWidget) == [Widget]


def test_throw_strategy_stops_populate(settings, services):
    services.add_singleton(IWidget, Gadget)
    selector = ServiceTypeSelector([Widget], settings=settings)
    selector.as_matching_interface().using(RegistrationStrategy.THROW)

    with pytest.raises(DuplicateRegistrationError):
        selector.populate(services)


def test_open_and_closed_generics(settings, services):
    added = map_services(
        services,
        [Repository, Repository[int, str], Pair],
        lambda s: s.as_matching_interface(),
        settings=settings,
    )

    assert added == 2
    assert services.get_implementations(IRepository) == [Repository]
    assert services.get_implementations(IRepository[int, str]) == [Repository[int, str]]


def test_environment_defaults_apply_to_every_group(monkeypatch):
    monkeypatch.setenv("SVCMAP_DEFAULT_LIFETIME", "singleton")
    monkeypatch.setenv("SVCMAP_DEFAULT_STRATEGY", "skip")
    services = ServiceCollection().add_transient(IWidget, Gadget)

    map_services(services, [Widget, Widget], lambda s: s.as_matching_interface())

    assert _triples(services) == [(IWidget, Gadget, ServiceLifetime.TRANSIENT)]


def test_explicit_settings_win_over_environment(monkeypatch, services):
    monkeypatch.setenv("SVCMAP_DEFAULT_LIFETIME", "singleton")

    map_services(
        services, [Widget], settings=MappingSettings(default_lifetime=ServiceLifetime.SCOPED)
    )

    (descriptor,) = services
    assert descriptor.lifetime is ServiceLifetime.SCOPED
