from abc import ABC
from itertools import permutations
from typing import Annotated

import pytest

from rejector.annotations import Reject, reject
from rejector.domain import Field
from rejector.errors import ResolutionError
from rejector.registry import ComponentProviderRegistry
from rejector.rejecters import RejectByClass, RejectByName
from rejector.resolution import (
    Accumulator,
    collect_rejecters,
    rejected_components,
    resolve_rejecters,
)
from rejector.visitors import RejectAnnotationVisitor


class ServiceA:
    pass


class ServiceB:
    pass


class Logger(ABC):
    pass


class ConsoleLogger(Logger):
    pass


class Cache:
    pass


@pytest.fixture
def registry() -> ComponentProviderRegistry:
    registry = ComponentProviderRegistry()

    registry.provides("service_a")(ServiceA)
    registry.provides("service_b")(ServiceB)
    registry.provides("console_logger", profiles=["dev"])(ConsoleLogger)

    @registry.provides("cache", profiles=["!test"])
    def make_cache() -> Cache:
        return Cache()

    return registry


def test_class_declaration_listing_types():
    @reject(ServiceA, ServiceB)
    class Example:
        pass

    assert collect_rejecters(Example) == {RejectByClass(ServiceA), RejectByClass(ServiceB)}


def test_class_declaration_naming_a_bean():
    @reject(bean_name="cache")
    class Example:
        pass

    assert collect_rejecters(Example) == {RejectByName("cache")}


def test_bare_field_marker():
    class Example:
        logger: Annotated[Logger, Reject]

    assert collect_rejecters(Example) == {RejectByClass(Logger)}


def test_bean_name_is_ignored_when_types_are_listed():
    @reject(ServiceA, bean_name="cache")
    class Example:
        pass

    assert collect_rejecters(Example) == {RejectByClass(ServiceA)}


def test_unconfigured_declaration_collects_nothing():
    @reject()
    class Example:
        pass

    assert collect_rejecters(Example) == frozenset()


def test_class_and_field_rejecting_same_type_collapse():
    @reject(ServiceA)
    class Example:
        first: Annotated[ServiceA, Reject]
        second: Annotated[ServiceA, Reject()]

    assert collect_rejecters(Example) == {RejectByClass(ServiceA)}


def test_field_visiting_order_does_not_matter():
    fields = [
        Field("a", ServiceA),
        Field("b", ServiceB),
        Field("logger", Logger),
        Field("again", ServiceA),
    ]
    visitor = RejectAnnotationVisitor()

    results = set()
    for ordering in permutations(fields):
        rejecters = set()
        for field in ordering:
            visitor.visit_field(Reject(), field, set(), set(), rejecters)
        results.add(frozenset(rejecters))

    assert results == {
        frozenset(
            {RejectByClass(ServiceA), RejectByClass(ServiceB), RejectByClass(Logger)}
        )
    }


def test_rejected_components_resolves_types_and_names(registry):
    @reject(bean_name="cache")
    class Example:
        logger: Annotated[Logger, Reject]
        service: Annotated[ServiceA, Reject]

    assert rejected_components(Example, registry) == {
        "cache",
        "console_logger",
        "service_a",
    }


def test_unregistered_type_rejects_nothing(registry):
    class Missing:
        pass

    @reject(Missing)
    class Example:
        pass

    assert rejected_components(Example, registry) == frozenset()


def test_unregistered_name_rejects_nothing(registry):
    @reject(bean_name="missing")
    class Example:
        pass

    assert rejected_components(Example, registry) == frozenset()


def test_profiles_restrict_candidate_providers(registry):
    @reject(Logger, Cache)
    class Example:
        pass

    assert rejected_components(Example, registry, {"test"}) == frozenset()
    assert rejected_components(Example, registry, {"dev"}) == {"console_logger", "cache"}


def test_resolution_does_not_modify_registry(registry):
    @reject(ServiceA)
    class Example:
        pass

    before = registry.registered_providers()
    rejected_components(Example, registry)

    assert registry.registered_providers() == before


def test_empty_inputs_resolve_to_nothing(registry):
    assert resolve_rejecters([], registry.registered_providers()) == frozenset()
    assert resolve_rejecters([RejectByClass(ServiceA)], []) == frozenset()
    assert resolve_rejecters([], []) == frozenset()


def test_undeclared_definition_rejects_nothing(registry):
    class Example:
        pass

    assert rejected_components(Example, registry) == frozenset()


def test_resolution_is_logged(registry, caplog):
    caplog.set_level("DEBUG", logger="rejector.resolution")

    @reject(ServiceA)
    class Example:
        pass

    rejected_components(Example, registry)

    assert "matched ['service_a']" in caplog.text
    assert "Rejecting ['service_a']" in caplog.text


def test_accumulator_collects_over_several_definitions():
    @reject(ServiceA)
    class Example:
        pass

    @reject(bean_name="cache")
    def test_something():
        pass

    accumulator = Accumulator()
    accumulator.visit(Example)
    accumulator.visit(test_something)

    assert accumulator.freeze() == {RejectByClass(ServiceA), RejectByName("cache")}
    assert accumulator.frozen


def test_frozen_accumulator_refuses_further_visits():
    class Example:
        pass

    accumulator = Accumulator()
    accumulator.freeze()

    with pytest.raises(ResolutionError, match="already frozen"):
        accumulator.visit(Example)
