"""Locating declarations on a test definition."""

import inspect
import sys
from typing import Annotated, Any, Iterator, Optional, get_args, get_origin, get_type_hints

from rejector.annotations import declared_rejections
from rejector.domain import Field
from rejector.visitors import VISITORS

__all__ = ["declarations_on"]


def declarations_on(test_definition: Any) -> Iterator[tuple[Any, Optional[Field]]]:
    """Yield every declaration on a test class or test function.

    Declarations on the definition itself come first, paired with ``None``.
    For classes, each annotated attribute carrying a known marker follows,
    paired with the :class:`Field` it annotates. Attributes annotated on base
    classes are included. Annotations that cannot be resolved are skipped.

    Example:
        >>> class TestThing:
        ...     logger: Annotated[Logger, Reject]
        >>> list(declarations_on(TestThing))
        [(Reject(value=(), bean_name=None), Field(name='logger', declared_type=Logger))]
    """
    for declaration in declared_rejections(test_definition):
        yield declaration, None

    if not inspect.isclass(test_definition):
        return

    for name, annotation in _field_annotations(test_definition).items():
        if get_origin(annotation) is not Annotated:
            continue
        declared_type, *metadata = get_args(annotation)
        for marker in metadata:
            declaration = _as_declaration(marker)
            if declaration is not None:
                yield declaration, Field(name, declared_type)


def _as_declaration(marker: Any) -> Optional[Any]:
    # a bare marker class stands for a marker with default arguments
    if isinstance(marker, type) and marker in VISITORS:
        return marker()
    if type(marker) in VISITORS:
        return marker
    return None


def _field_annotations(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError:
        pass

    # some annotation names a type that is not importable at runtime
    # (e.g. imported under TYPE_CHECKING); resolve each one on its own
    annotations: dict[str, Any] = {}
    for owner in reversed(cls.__mro__):
        module_globals = getattr(sys.modules.get(owner.__module__), "__dict__", {})
        for name, annotation in inspect.get_annotations(owner).items():
            if isinstance(annotation, str):
                try:
                    annotation = eval(annotation, module_globals, dict(vars(owner)))
                except NameError:
                    annotations.pop(name, None)
                    continue
            annotations[name] = annotation
    return annotations
