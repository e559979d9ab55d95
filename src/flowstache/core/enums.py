"""Type-safe enumerations for the template engine."""

from enum import StrEnum


class EscapePolicy(StrEnum):
    """Escape policies for interpolated values."""

    NONE = "none"
    HTML = "html"
