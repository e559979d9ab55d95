"""flowstache - a logic-less Mustache template engine.

Values are bound to names in a Scope (directly, through ScopeBuilder, or
converted from plain Python data and pydantic models), templates are parsed
into nodes, and the RenderEngine walks those nodes against a context stack,
writing output to a sink as it goes.
"""

from flowstache.builder import ScopeBuilder
from flowstache.context import ContextStack
from flowstache.context import resolve
from flowstache.core import EscapePolicy
from flowstache.core import LambdaError
from flowstache.core import MustacheError
from flowstache.core import PartialNotFoundError
from flowstache.core import RecursionLimitError
from flowstache.core import RenderConfig
from flowstache.core import RenderError
from flowstache.core import TemplateSyntaxError
from flowstache.core import UnstringifiableValueError
from flowstache.delimiters import DEFAULT_DELIMITERS
from flowstache.delimiters import Delimiters
from flowstache.delimiters import DelimiterState
from flowstache.engine import OutputSink
from flowstache.engine import RenderEngine
from flowstache.escaping import escape_html
from flowstache.parser import parse
from flowstache.partials import DictPartials
from flowstache.partials import DirectoryPartials
from flowstache.partials import PartialLoader
from flowstache.project_info import ProjectInfo
from flowstache.project_info import get_project_info
from flowstache.templates import MustacheRenderer
from flowstache.templates import MustacheTemplate
from flowstache.templates import render
from flowstache.templates import render_to
from flowstache.validation import VariableValidationError
from flowstache.validation import collect_partials
from flowstache.validation import collect_variables
from flowstache.values import Bool
from flowstache.values import Lambda
from flowstache.values import Scope
from flowstache.values import Sequence
from flowstache.values import Static
from flowstache.values import Value
from flowstache.values import from_python
from flowstache.values import stringify
from flowstache.values import to_scope
from flowstache.values import truthy

# Public API - supports both direct and module imports
__all__ = [
    "DEFAULT_DELIMITERS",
    "Bool",
    "ContextStack",
    "DelimiterState",
    "Delimiters",
    "DictPartials",
    "DirectoryPartials",
    "EscapePolicy",
    "Lambda",
    "LambdaError",
    "MustacheError",
    "MustacheRenderer",
    "MustacheTemplate",
    "OutputSink",
    "PartialLoader",
    "PartialNotFoundError",
    "ProjectInfo",
    "RecursionLimitError",
    "RenderConfig",
    "RenderEngine",
    "RenderError",
    "Scope",
    "ScopeBuilder",
    "Sequence",
    "Static",
    "TemplateSyntaxError",
    "UnstringifiableValueError",
    "Value",
    "VariableValidationError",
    "collect_partials",
    "collect_variables",
    "escape_html",
    "from_python",
    "get_project_info",
    "parse",
    "render",
    "render_to",
    "resolve",
    "stringify",
    "to_scope",
    "truthy",
]
__version__ = get_project_info().version
