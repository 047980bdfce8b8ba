"""Method descriptors.

A method is either provided as a code callable, installed on the class when the owner is
built, or already defined on the class. Non-public methods are guarded: their installed
version takes the `caller` keyword.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from ...abstract.exceptions.traced_exceptions import handle_error
from ..constants import Context, Visibility
from ..errors import ClassMetaError, DeclarationError
from ..utilities import coerce_constant, validate_name
from ..visibility import guard

if TYPE_CHECKING:
    from .descriptor import ClassDescriptor


class MethodDescriptor:
    """Describes a method of a class."""

    def __init__(
        self,
        owner: ClassDescriptor,
        name: str,
        code: Callable[..., Any] | None = None,
        *,
        label: str | None = None,
        description: str = "",
        visibility: Visibility | int = Visibility.PUBLIC,
        context: Context | str = Context.INSTANCE,
    ) -> None:
        handler = owner.error_handler
        self.owner = owner
        self.name = validate_name(name, "method", handler)
        if owner.has_member(name):
            handle_error(
                DeclarationError(f"Method '{name}' already exists in class '{owner.package_name}'"),
                handler,
            )
        if code is not None and not callable(code):
            handle_error(DeclarationError("Parameter code must be callable"), handler)
        self.code = code
        self.label = label or name
        self.description = description
        self.visibility = coerce_constant(Visibility, visibility, "visibility", handler)
        self.context = coerce_constant(Context, context, "context", handler)
        self._function: Callable[..., Any] | None = None

    @property
    def function(self) -> Callable[..., Any] | None:
        """Guarded function taking the target first and the `caller` keyword, once built."""
        return self._function

    def build(self) -> Callable[..., Any] | None:
        """Create the guarded method function, target first.

        Returns:
            Callable[..., Any] | None: The function to install, or None when the method is
                already defined on the class and public.
        """
        code = self.code
        name = self.name
        if code is None:
            if not hasattr(self.owner.package, name):
                self.owner.handle_error(
                    DeclarationError(
                        f"No code provided for method '{name}' and class"
                        f" '{self.owner.package_name}' does not define it"
                    )
                )

            def body(target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
                return getattr(target, name)(*args, **kwargs)

        elif self.context is Context.CLASS:

            def body(target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
                cls = target if isinstance(target, type) else type(target)
                return code(cls, *args, **kwargs)

        else:

            def body(target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
                return code(target, *args, **kwargs)

        self._function = guard(
            body, name=name, kind="method", visibility=self.visibility, owner=self.owner
        )
        if code is None:
            # Already on the class. The guard only applies through call().
            return None
        if self.visibility is Visibility.PUBLIC:
            return code
        self._function.__name__ = name
        self._function.__qualname__ = f"{self.owner.package.__qualname__}.{name}"
        return self._function

    def call(self, target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
        """Call the method on target (an instance, or the class for class methods).

        Raises:
            ClassMetaError: Raised if the method was not built.
            AccessDeniedError: Raised if caller may not call the method.
        """
        if self._function is None:
            self.owner.handle_error(ClassMetaError(f"Cannot call method '{self.name}'"))
        return self._function(target, *args, caller=caller, **kwargs)

    def __repr__(self) -> str:
        return f"<MethodDescriptor {self.owner.package_name}.{self.name}>"
