"""Registration of component providers that rejections are resolved against."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, get_type_hints

from rejector.errors import RegistryError

__all__ = [
    "ComponentProvider",
    "ComponentProviderRegistry",
    "inferred_name",
]


@dataclass(frozen=True)
class ComponentProvider:
    """Encapsulates metadata about a registered component provider.

    Attributes:
        name: Logical name of the component. This is the identifier handed
            back when the component is rejected.
        func: The callable providing the component (function or class).
        profiles: List of profile names under which the component is active.
            Empty list means active in all profiles.
        provided_types: Types the component can satisfy. For functions, the
            return type annotation (if present). For classes, the class
            itself followed by every base class except ``object``.

    Example:
        >>> @registry.provides()
        >>> class RedisCache(Cache):
        ...     pass
        >>>
        >>> # Creates ComponentProvider with:
        >>> # - name: "RedisCache"
        >>> # - provided_types: [RedisCache, Cache]
    """

    name: str
    func: Callable
    profiles: list[str]
    provided_types: list[Any]


def inferred_name(target: Any) -> str:
    """Derive component name from class or function name, removing 'make_' prefix if present.

    Example:
        >>> inferred_name(Database)       # Returns "Database"
        >>> inferred_name(make_database)  # Returns "database"
    """
    if inspect.isclass(target):
        return target.__name__

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__


class ComponentProviderRegistry:
    """Registry for components, supporting registration and profile-based filtering."""

    def __init__(self, providers: Optional[Iterable[ComponentProvider]] = None):
        self._providers = list(providers or [])

    def register(self, provider: ComponentProvider):
        """Register a component explicitly.

        Args:
            provider: The ComponentProvider instance to be registered.
        """
        self._providers.append(provider)

    def registered_providers(
        self, profiles: Optional[set[str]] = None
    ) -> list[ComponentProvider]:
        """Retrieve providers, optionally filtered by active profiles.

        Args:
            profiles: A set of active profile names. If None, returns all providers.

        Returns:
            A list of providers whose profiles match the given profile set.
        """
        if profiles is None:
            return list(self._providers)
        return [p for p in self._providers if _profiles_match(p.profiles, profiles)]

    def provides(
        self, name: Optional[str] = None, profiles: Optional[list[str]] = None
    ) -> Callable:
        """Decorator to register a class or function as a component provider.

        Args:
            name: Optional logical name to assign; defaults to the class name, or
                the function name with any 'make_' prefix removed.
            profiles: Optional list of profiles for which the component is active.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Example:
            @registry.provides(profiles=["dev"])
            def make_thing() -> Thing:
                return Thing()
        """

        def decorator(obj):
            provided_name = name or inferred_name(obj)
            if inspect.isclass(obj):
                provided_types = [t for t in obj.__mro__ if t is not object]
            elif inspect.isfunction(obj):
                return_type = get_type_hints(obj).get("return", None)
                provided_types = [return_type] if return_type is not None else []
            else:
                raise RegistryError(f"{obj} is not a class or function")

            self.register(
                ComponentProvider(
                    provided_name,
                    obj,
                    profiles or [],
                    provided_types,
                )
            )
            return obj

        return decorator


def _profiles_match(stated: list[str], selected: set[str]) -> bool:
    """Check if a provider's profile requirements match the selected profiles.

    Profile matching supports inclusion and exclusion patterns:
    - Normal profiles ("dev", "prod") must be in the selected set
    - Exclusion profiles ("!test") must NOT be in the selected set
    - Empty stated profiles match all selected profiles

    Example:
        >>> _profiles_match(["dev"], {"dev"})          # True
        >>> _profiles_match(["!test"], {"test"})       # False
    """
    provided = [p for p in stated if not p.startswith("!")]
    excluded = [p[1:] for p in stated if p.startswith("!")]

    return not any(e in selected for e in excluded) and (
        not provided or any(p in selected for p in provided)
    )
