"""
Predicates selecting which registered components a rejection applies to.

A rejecter is resolved against the providers of a live registry, producing the
names of the providers it matches. Rejecters are compared structurally, so two
declarations targeting the same type or name collapse into a single rejecter
when collected into a set.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

from rejector.registry import ComponentProvider

__all__ = ["Rejecter", "RejectByClass", "RejectByName"]


class Rejecter(ABC):
    @abstractmethod
    def matches(self, provider: ComponentProvider) -> bool: ...

    def rejects(self, providers: Iterable[ComponentProvider]) -> frozenset[str]:
        """Return the names of every provider this rejecter matches.

        An empty result is not an error: the rejected dependency may simply
        not be registered.
        """
        return frozenset(
            provider.name for provider in providers if self.matches(provider)
        )


@dataclass(frozen=True)
class RejectByClass(Rejecter):
    """Rejects providers of ``rejected_type`` or any of its subtypes.

    When ``rejected_type`` is an abstract base class, every provider of an
    implementation (including virtual subclasses) is rejected.
    """

    rejected_type: Any

    def matches(self, provider: ComponentProvider) -> bool:
        return any(
            _is_assignable(provided_type, self.rejected_type)
            for provided_type in provider.provided_types
        )


@dataclass(frozen=True)
class RejectByName(Rejecter):
    """Rejects the provider registered under exactly ``name``."""

    name: str

    def matches(self, provider: ComponentProvider) -> bool:
        return provider.name == self.name


def _is_assignable(provided_type: Any, rejected_type: Any) -> bool:
    if provided_type == rejected_type:
        return True
    if not (inspect.isclass(provided_type) and inspect.isclass(rejected_type)):
        return False
    try:
        return issubclass(provided_type, rejected_type)
    except TypeError:
        # non-runtime-checkable protocols only match themselves
        return False
