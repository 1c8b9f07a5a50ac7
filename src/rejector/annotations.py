"""
Declaring components that must not be created for a test.

Rejections are declared either on the test definition itself::

    @reject(SomeDependency)
    class TestSomething:
        ...

which rejects every provider of ``SomeDependency`` or one of its subclasses
(every implementation, if it is an abstract base class), or on an annotated
attribute of a test class, in which case the attribute's type is used::

    class TestSomething:
        dependency: Annotated[SomeDependency, Reject]

Alternatively a single component can be rejected by name::

    @reject(bean_name="some_dependency")
    class TestSomething:
        ...

A typical use is exercising code whose dependency is optional, such as a
provider that takes every registered implementation of an interface.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from rejector.errors import DeclarationError

__all__ = ["Reject", "reject", "declared_rejections"]

REJECTIONS_ATTRIBUTE = "__rejections__"


@dataclass(frozen=True)
class Reject:
    """Marker declaring a rejection.

    Attributes:
        value: Types to reject, as a tuple, list or set. A single type is
            accepted and wrapped in a tuple.
        bean_name: Name of a single component to reject. Only used when
            ``value`` is empty.
    """

    value: Any = ()
    bean_name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.value, (tuple, list, set, frozenset)):
            value = tuple(self.value)
        else:
            value = (self.value,)
        strings = [v for v in value if isinstance(v, str)]
        if strings:
            raise DeclarationError(
                f"Reject expects types but was given {strings}; "
                "use bean_name to reject a component by name"
            )
        object.__setattr__(self, "value", value)


def reject(*types: Any, bean_name: Optional[str] = None) -> Callable:
    """Decorator declaring a rejection on a test class or test function.

    Decorators may be stacked; every declaration is honoured.

    Args:
        types: Types whose providers are rejected.
        bean_name: Name of a single component to reject, used only when no
            types are given.

    Returns:
        A decorator recording the declaration and returning its target unchanged.
    """
    declaration = Reject(types, bean_name)

    def decorator(target: Any) -> Any:
        # read from __dict__ so a subclass does not append to its parent's tuple
        existing = vars(target).get(REJECTIONS_ATTRIBUTE, ())
        setattr(target, REJECTIONS_ATTRIBUTE, existing + (declaration,))
        return target

    return decorator


def declared_rejections(target: Any) -> tuple[Reject, ...]:
    """Type-level declarations on ``target``, including those on base classes."""
    if not isinstance(target, type):
        # functions and bound methods
        return getattr(target, REJECTIONS_ATTRIBUTE, ())
    return tuple(
        declaration
        for owner in reversed(target.__mro__)
        for declaration in vars(owner).get(REJECTIONS_ATTRIBUTE, ())
    )
