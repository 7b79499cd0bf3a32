"""Top-level pytest configuration for svcmap."""

import logging
import os

import pytest

# Import error modules for their side effects so the registry holds every code
import svcmap.errors.base
import svcmap.mapping.errors
import svcmap.registry.errors

from svcmap.mapping.config import MappingSettings
from svcmap.registry.collection import ServiceCollection
from svcmap.registry.lifetime import ServiceLifetime
from svcmap.registry.strategies import RegistrationStrategy


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep SVCMAP_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("SVCMAP_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> MappingSettings:
    return MappingSettings(
        default_lifetime=ServiceLifetime.TRANSIENT,
        default_strategy=RegistrationStrategy.APPEND,
    )


@pytest.fixture
def services() -> ServiceCollection:
    return ServiceCollection()


@pytest.fixture
def capture_logs(caplog):
    """Route an svcmap logger into caplog.

    svcmap loggers own their handlers and do not propagate, so caplog's root
    handler is attached to the named logger directly.
    """
    attached = []

    def capture(name: str, level: int = logging.DEBUG):
        logger = logging.getLogger(name)
        logger.addHandler(caplog.handler)
        attached.append(logger)
        caplog.set_level(level, logger=name)
        return caplog

    yield capture
    for logger in attached:
        logger.removeHandler(caplog.handler)
