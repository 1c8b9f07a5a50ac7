"""Rejecting components from a dependency-injection registry under test.

Tests sometimes need to run without a component that is optional, unavailable
or deliberately absent. Rejector lets a test declare which components must not
be created, either by type (rejecting every provider of the type or of one of
its subtypes) or by name, and works out which registered providers those
declarations select.

Basic Usage:
    >>> from rejector.annotations import Reject, reject
    >>> from rejector.bootstrap import prepare_registry
    >>>
    >>> @reject(Cache)
    ... class TestWithoutCache:
    ...     metrics: Annotated[MetricsClient, Reject]
    >>>
    >>> test_registry = prepare_registry(registry, TestWithoutCache)

The package consists of several modules:
    - annotations: The ``Reject`` marker and ``reject`` decorator
    - rejecters: Predicates matching providers by type or by name
    - visitors: Turning declarations into rejecters
    - resolution: Collecting and resolving the rejecters of a test definition
    - bootstrap: Building the reduced registry a test runs against
    - registry: Component provider registration
    - pytest_plugin: Fixtures exposing the above to pytest
    - errors: Package-specific exceptions
"""
