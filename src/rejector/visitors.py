"""Visitors turning declarations found on a test definition into accumulated definitions."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from rejector.annotations import Reject
from rejector.domain import Field, Rule
from rejector.rejecters import Rejecter

__all__ = ["AnnotationVisitor", "RejectAnnotationVisitor", "VISITORS", "visitor_for"]

logger = logging.getLogger(__name__)


class AnnotationVisitor(ABC):
    """
    Reads one declaration and adds what it describes to the shared accumulator sets.

    A visitor is called once per declaration found on a test definition: once for
    each declaration on the definition itself and once per annotated field. All
    calls for a definition add to the same sets. ``mocks`` and ``spies`` belong
    to substitute-component support; rejection visitors leave them alone.
    """

    @abstractmethod
    def visit_class(
        self,
        annotation: Any,
        mocks: set[Any],
        spies: set[Any],
        rejecters: set[Rejecter],
    ) -> None: ...

    @abstractmethod
    def visit_field(
        self,
        annotation: Any,
        field: Field,
        mocks: set[Any],
        spies: set[Any],
        rejecters: set[Rejecter],
    ) -> None: ...


class RejectAnnotationVisitor(AnnotationVisitor):
    def visit_class(self, annotation, mocks, spies, rejecters):
        rule = Rule(annotation.value, annotation.bean_name)
        added = list(rule.rejecters())
        if not added:
            logger.debug("Ignoring %r: it names neither types nor a bean", annotation)
        rejecters.update(added)

    def visit_field(self, annotation, field, mocks, spies, rejecters):
        # only the field's own type counts, whatever the marker was given
        rule = Rule((field.declared_type,))
        rejecters.update(rule.rejecters())


VISITORS: dict[type, AnnotationVisitor] = {
    Reject: RejectAnnotationVisitor(),
}


def visitor_for(annotation: Any) -> AnnotationVisitor:
    return VISITORS[type(annotation)]
