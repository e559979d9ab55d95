"""Custom exceptions for flowstache.

This module provides specialized exception types for template parsing and
rendering errors. Unresolved names and falsy sections are never errors.
"""


class MustacheError(Exception):
    """Base exception for template-related errors."""


class TemplateSyntaxError(MustacheError, ValueError):
    """Raised when template text cannot be parsed.

    This occurs when:
    - A tag is opened but never closed
    - A section is closed without being opened, or by the wrong name
    - A section is still open at the end of the template
    - A delimiter change tag is malformed

    Lambda output that fails to parse is reported with this error as well.
    """

    def __init__(self, message: str, *, line: int | None = None) -> None:
        """Initialize with a message and the optional 1-based line number."""
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class RenderError(MustacheError):
    """Base exception for errors raised while evaluating a template."""


class UnstringifiableValueError(RenderError, TypeError):
    """Raised when a sequence or scope is interpolated as text."""

    def __init__(self, name: str, kind: str) -> None:
        """Initialize with the tag name and the offending value kind."""
        self.name = name
        self.kind = kind
        super().__init__(f"Cannot interpolate {kind} value bound to {name!r}")


class PartialNotFoundError(RenderError, LookupError):
    """Raised when a partial name cannot be resolved by the loader."""

    def __init__(self, name: str) -> None:
        """Initialize with the missing partial name."""
        self.name = name
        super().__init__(f"Unknown partial: {name!r}")


class LambdaError(RenderError):
    """Raised when a lambda bound in the context fails during rendering."""


class RecursionLimitError(RenderError):
    """Raised when nested partial or lambda expansion exceeds the depth limit.

    This prevents unbounded recursion from self-referential partials or
    lambdas that return templates invoking themselves.
    """
