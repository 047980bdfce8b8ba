"""Errors raised while declaring, building and using classmeta classes.

Every error is signaled through an error handler (see
``classmeta.abstract.exceptions.handle_error``) and never caught by the engine itself.
"""

from typing import Any, Iterable

from ..abstract.exceptions.traced_exceptions import TracedException


class ClassMetaError(TracedException):
    """General error of the classmeta engine."""


class DeclarationError(ClassMetaError):
    """Signals a bad or missing parameter at class-definition time."""


class DuplicateAttributeError(DeclarationError):
    """Signals an attribute declared twice without the override flag."""


class UnknownTypeError(DeclarationError):
    """Signals a lookup of a type key that was never registered."""


class SealedError(DeclarationError):
    """Signals a declaration attempted after the class or the registry was sealed."""


class ValidationError(ClassMetaError):
    """Signals a value rejected by the checks of an attribute."""

    def __init__(self, attribute: str, value: Any, message: str) -> None:
        super().__init__(message)
        self.attribute = attribute
        self.value = value
        self.message = message


class AccessDeniedError(ClassMetaError):
    """Signals a call to a member from a caller its visibility does not admit."""


class AbstractInstantiationError(ClassMetaError):
    """Signals an attempt to construct an instance of an abstract class."""


class NoSuchAttributeError(ClassMetaError):
    """Signals constructor parameters that match no settable attribute."""

    def __init__(self, names: Iterable[str], package: str) -> None:
        self.names = tuple(names)
        noun = "attributes" if len(self.names) > 1 else "attribute"
        quoted = "', '".join(self.names)
        super().__init__(f"No such {noun} '{quoted}' in {package} objects")
