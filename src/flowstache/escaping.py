"""Escape policy implementations for interpolated values."""

from collections.abc import Callable
from html import escape

from flowstache.core.enums import EscapePolicy


def no_escape(s: str) -> str:
    """Return string without escaping."""
    return s


def escape_html(s: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` as HTML entities."""
    return escape(s, quote=False).replace('"', "&quot;")


def get_escaper(policy: EscapePolicy) -> Callable[[str], str]:
    """Get the escape function for a policy.

    Raises:
        ValueError: When policy is not supported

    """
    match policy:
        case EscapePolicy.HTML:
            return escape_html
        case EscapePolicy.NONE:
            return no_escape
    msg = f"Unsupported escape policy: {policy!s}"
    raise ValueError(msg)
