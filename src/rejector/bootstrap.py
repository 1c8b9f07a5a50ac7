"""Preparing a registry for a test by leaving out its rejected components."""

from typing import Any, Iterable, Optional

from rejector.registry import ComponentProviderRegistry
from rejector.resolution import rejected_components

__all__ = ["without_components", "prepare_registry"]


def without_components(
    registry: ComponentProviderRegistry, names: Iterable[str]
) -> ComponentProviderRegistry:
    """Return a new registry holding every provider not named in ``names``.

    The given registry is left untouched.
    """
    excluded = set(names)
    return ComponentProviderRegistry(
        provider
        for provider in registry.registered_providers()
        if provider.name not in excluded
    )


def prepare_registry(
    registry: ComponentProviderRegistry,
    test_definition: Any,
    profiles: Optional[set[str]] = None,
) -> ComponentProviderRegistry:
    """
    Build the registry a test should run against.

    Rejections declared on ``test_definition`` are resolved against the
    providers active for ``profiles``, and every matched provider is left out
    of the returned registry.

    Args:
        registry: The registry holding every declared provider.
        test_definition: The test class or test function declaring rejections.
        profiles: Optional set of active profile names.

    Returns:
        A new registry without the rejected providers.
    """
    return without_components(
        registry, rejected_components(test_definition, registry, profiles)
    )
