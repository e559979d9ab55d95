"""Core functionality for flowstache.

This module contains the error hierarchy, enumerations and render
configuration shared by the parser and the render engine.
"""

from flowstache.core.config import RenderConfig
from flowstache.core.enums import EscapePolicy
from flowstache.core.errors import LambdaError
from flowstache.core.errors import MustacheError
from flowstache.core.errors import PartialNotFoundError
from flowstache.core.errors import RecursionLimitError
from flowstache.core.errors import RenderError
from flowstache.core.errors import TemplateSyntaxError
from flowstache.core.errors import UnstringifiableValueError

__all__ = [
    "EscapePolicy",
    "LambdaError",
    "MustacheError",
    "PartialNotFoundError",
    "RecursionLimitError",
    "RenderConfig",
    "RenderError",
    "TemplateSyntaxError",
    "UnstringifiableValueError",
]
