"""Exceptions raised by rejector."""

__all__ = ["RejectorError", "RegistryError", "DeclarationError", "ResolutionError"]


class RejectorError(Exception):
    """Base class for errors raised by rejector."""

    pass


class RegistryError(RejectorError):
    """Raised when a component provider cannot be registered."""

    pass


class DeclarationError(RejectorError):
    """Raised when a rejection is declared with arguments of the wrong kind."""

    pass


class ResolutionError(RejectorError):
    """Raised when an accumulator is used after it has been frozen."""

    pass
