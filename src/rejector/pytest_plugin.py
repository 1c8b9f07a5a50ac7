"""
pytest fixtures for running tests without rejected components.

Projects supply their registry by overriding the ``component_registry``
fixture, typically in ``conftest.py``::

    @pytest.fixture
    def component_registry():
        return registry

Tests then ask for ``rejecting_registry`` (or just ``rejected_components``).
Declarations on both the test class and the test function are honoured. The
active profiles default to the ``component_profiles`` ini option.
"""

import pytest

from rejector.bootstrap import without_components
from rejector.resolution import Accumulator, resolve_rejecters


def pytest_addoption(parser):
    parser.addini(
        "component_profiles",
        "Profiles used to select providers when resolving rejected components",
        type="linelist",
        default=[],
    )


@pytest.fixture
def component_registry():
    pytest.fail(
        "rejector needs a registry: override the 'component_registry' fixture",
        pytrace=False,
    )


@pytest.fixture
def component_profiles(request):
    profiles = request.config.getini("component_profiles")
    return set(profiles) if profiles else None


@pytest.fixture
def rejected_components(request, component_registry, component_profiles):
    accumulator = Accumulator()
    if request.cls is not None:
        accumulator.visit(request.cls)
    accumulator.visit(request.function)

    return resolve_rejecters(
        accumulator.freeze(),
        component_registry.registered_providers(component_profiles),
    )


@pytest.fixture
def rejecting_registry(component_registry, rejected_components):
    return without_components(component_registry, rejected_components)
