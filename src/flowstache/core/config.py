"""Render configuration.

This module provides configuration options for template rendering including
the expansion depth limit, escaping and diagnostics for unresolved names.
"""

from pydantic import BaseModel
from pydantic import Field

from flowstache.core.enums import EscapePolicy


class RenderConfig(BaseModel):
    """Configuration for a render call.

    Attributes:
        max_depth: Maximum nesting of partial and lambda expansions before
            raising RecursionLimitError. Default is 64.
        escape_policy: How escaped variable tags are escaped. HTML by default;
            NONE disables escaping for non-HTML output.
        warn_on_missing: Whether to log a warning for every tag name that
            does not resolve. Missing names still render as empty text.

    """

    model_config = {"frozen": True}

    max_depth: int = Field(default=64, ge=1)
    escape_policy: EscapePolicy = Field(default=EscapePolicy.HTML)
    warn_on_missing: bool = Field(
        default=False,
        description="Log a warning when a tag name cannot be resolved",
    )
