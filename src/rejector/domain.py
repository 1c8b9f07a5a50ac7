"""Domain models used throughout the package."""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from rejector.rejecters import Rejecter, RejectByClass, RejectByName

__all__ = ["Field", "Rule"]


@dataclass(frozen=True)
class Field:
    """An annotated attribute of a test definition.

    Attributes:
        name: The attribute name.
        declared_type: The attribute's static type, with any ``Annotated``
            metadata stripped.
    """

    name: str
    declared_type: Any


@dataclass(frozen=True)
class Rule:
    """A single declared exclusion.

    If ``declared_types`` is non-empty the rule rejects by type and
    ``bean_name`` is ignored. Otherwise a ``bean_name`` of ``None`` means the
    rule rejects nothing.

    Attributes:
        declared_types: Types whose providers (and providers of subtypes) are rejected.
        bean_name: The name of a single component to reject.
    """

    declared_types: tuple[Any, ...] = ()
    bean_name: Optional[str] = None

    def rejecters(self) -> Iterator[Rejecter]:
        if self.declared_types:
            for declared_type in self.declared_types:
                yield RejectByClass(declared_type)
        elif self.bean_name is not None:
            yield RejectByName(self.bean_name)
