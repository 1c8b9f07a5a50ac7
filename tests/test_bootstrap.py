from abc import ABC, abstractmethod
from typing import Annotated

import pytest

from rejector.annotations import Reject, reject
from rejector.bootstrap import prepare_registry, without_components
from rejector.registry import ComponentProviderRegistry


class Plugin(ABC):
    @abstractmethod
    def name(self) -> str: ...


class MetricsPlugin(Plugin):
    def name(self) -> str:
        return "metrics"


class TracingPlugin(Plugin):
    def name(self) -> str:
        return "tracing"


class Host:
    pass


@pytest.fixture
def registry() -> ComponentProviderRegistry:
    registry = ComponentProviderRegistry()

    registry.provides("metrics")(MetricsPlugin)
    registry.provides("tracing", profiles=["prod"])(TracingPlugin)

    @registry.provides("host")
    def make_host() -> Host:
        return Host()

    return registry


def names_in(registry):
    return {p.name for p in registry.registered_providers()}


def test_without_components_leaves_source_registry_untouched(registry):
    reduced = without_components(registry, {"metrics", "missing"})

    assert names_in(reduced) == {"tracing", "host"}
    assert names_in(registry) == {"metrics", "tracing", "host"}


def test_optional_dependencies_can_be_rejected_by_interface(registry):
    @reject(Plugin)
    class WithoutPlugins:
        pass

    assert names_in(prepare_registry(registry, WithoutPlugins)) == {"host"}


def test_rejection_by_field_and_by_name(registry):
    @reject(bean_name="host")
    class WithoutHostOrMetrics:
        metrics: Annotated[MetricsPlugin, Reject]

    assert names_in(prepare_registry(registry, WithoutHostOrMetrics)) == {"tracing"}


def test_profiles_select_which_providers_are_rejected(registry):
    @reject(Plugin)
    class WithoutPlugins:
        pass

    reduced = prepare_registry(registry, WithoutPlugins, {"dev"})

    assert names_in(reduced) == {"tracing", "host"}
    assert {p.name for p in reduced.registered_providers({"dev"})} == {"host"}


def test_missing_dependency_leaves_registry_as_is(registry):
    class Absent:
        pass

    @reject(Absent)
    class WithoutAbsent:
        pass

    assert names_in(prepare_registry(registry, WithoutAbsent)) == names_in(registry)


def test_empty_registry_is_prepared_without_error():
    @reject(Plugin)
    class WithoutPlugins:
        pass

    reduced = prepare_registry(ComponentProviderRegistry(), WithoutPlugins)

    assert reduced.registered_providers() == []
