"""
Resolving the rejections declared on a test definition against a registry.

Resolution is a straight pipeline, run once per test definition:

1. every declaration on the definition is visited, adding rejecters to a fresh
   :class:`Accumulator`;
2. the accumulator is frozen;
3. each rejecter is matched against the providers of the registry and the
   matches are unioned into the set of component names to exclude.

The registry is only read. Removing the rejected components is left to the
caller (see :mod:`rejector.bootstrap`).
"""

import logging
from typing import Any, Iterable, Optional

from rejector.errors import ResolutionError
from rejector.registry import ComponentProvider, ComponentProviderRegistry
from rejector.rejecters import Rejecter
from rejector.scanning import declarations_on
from rejector.visitors import visitor_for

__all__ = [
    "Accumulator",
    "collect_rejecters",
    "resolve_rejecters",
    "rejected_components",
]

logger = logging.getLogger(__name__)


class Accumulator:
    """Sets shared by every visit made for one test definition.

    Once frozen, nothing more may be visited into it.
    """

    def __init__(self):
        self.mocks: set[Any] = set()
        self.spies: set[Any] = set()
        self.rejecters: set[Rejecter] = set()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def visit(self, test_definition: Any):
        """Visit every declaration on ``test_definition``.

        Raises:
            ResolutionError: If the accumulator has already been frozen.
        """
        if self._frozen:
            raise ResolutionError(
                f"Cannot visit {test_definition!r}: accumulator is already frozen"
            )

        for declaration, field in declarations_on(test_definition):
            visitor = visitor_for(declaration)
            if field is None:
                visitor.visit_class(declaration, self.mocks, self.spies, self.rejecters)
            else:
                visitor.visit_field(
                    declaration, field, self.mocks, self.spies, self.rejecters
                )

    def freeze(self) -> frozenset[Rejecter]:
        self._frozen = True
        return frozenset(self.rejecters)


def collect_rejecters(test_definition: Any) -> frozenset[Rejecter]:
    """Return the distinct rejecters declared on a test class or function."""
    accumulator = Accumulator()
    accumulator.visit(test_definition)
    return accumulator.freeze()


def resolve_rejecters(
    rejecters: Iterable[Rejecter], providers: Iterable[ComponentProvider]
) -> frozenset[str]:
    """Union the names of the providers matched by each rejecter.

    Args:
        rejecters: The rejecters to resolve.
        providers: The providers currently registered.

    Returns:
        The names of every matched provider. Empty if nothing matched.
    """
    providers = list(providers)
    rejected: set[str] = set()

    for rejecter in rejecters:
        matched = rejecter.rejects(providers)
        logger.debug("%r matched %s", rejecter, sorted(matched) or "nothing")
        rejected |= matched

    return frozenset(rejected)


def rejected_components(
    test_definition: Any,
    registry: ComponentProviderRegistry,
    profiles: Optional[set[str]] = None,
) -> frozenset[str]:
    """Names of the components that must not be created for a test definition.

    Args:
        test_definition: The test class or test function declaring rejections.
        registry: The registry holding the candidate providers. It is not modified.
        profiles: Optional set of active profiles used to select providers.
            If None, all providers are considered.

    Returns:
        The names of the providers to exclude.

    Example:
        >>> @reject(Cache)
        ... class TestWithoutCache: ...
        >>> rejected_components(TestWithoutCache, registry)
        frozenset({'redis_cache'})
    """
    rejecters = collect_rejecters(test_definition)
    rejected = resolve_rejecters(rejecters, registry.registered_providers(profiles))
    logger.debug(
        "Rejecting %s for %r", sorted(rejected) or "nothing", test_definition
    )
    return rejected
