"""Fluent builder for root scopes.

Examples:
    >>> scope = (
    ...     ScopeBuilder()
    ...     .insert_static("planet", "world")
    ...     .insert_lambda("greet", lambda text: "Hello, {{planet}}!")
    ...     .build()
    ... )

"""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Self

from flowstache.core.config import RenderConfig
from flowstache.engine import OutputSink
from flowstache.templates import Partials
from flowstache.templates import render_to
from flowstache.values import Bool
from flowstache.values import Lambda
from flowstache.values import Scope
from flowstache.values import Static
from flowstache.values import Value
from flowstache.values import from_python
from flowstache.values import to_scope


class ScopeBuilder:
    """Build a Scope one binding at a time; later inserts replace earlier ones."""

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._values: dict[str, Value] = {}

    def insert(self, name: str, value: object) -> Self:
        """Bind any convertible Python value (see ``from_python``)."""
        if isinstance(value, ScopeBuilder):
            value = value.build()
        self._values[name] = from_python(value)
        return self

    def insert_static(self, name: str, text: str) -> Self:
        """Bind a string."""
        self._values[name] = Static(text=text)
        return self

    def insert_bool(self, name: str, flag: bool) -> Self:
        """Bind a boolean."""
        self._values[name] = Bool(flag=flag)
        return self

    def insert_lambda(self, name: str, func: Callable[[str], object]) -> Self:
        """Bind a lambda receiving the raw section text, or "" in a variable."""
        self._values[name] = Lambda(func=func)
        return self

    def insert_scope(
        self, name: str, scope: "ScopeBuilder | Mapping[str, object]"
    ) -> Self:
        """Bind a nested scope."""
        if isinstance(scope, ScopeBuilder):
            self._values[name] = scope.build()
        else:
            self._values[name] = to_scope(scope)
        return self

    def insert_sequence(
        self, name: str, items: Iterable["ScopeBuilder | object"]
    ) -> Self:
        """Bind a sequence; each item is a builder, mapping or scalar."""
        built = [
            item.build() if isinstance(item, ScopeBuilder) else item for item in items
        ]
        self._values[name] = from_python(built)
        return self

    def build(self) -> Scope:
        """Return a new Scope holding the current bindings."""
        return Scope(values=dict(self._values))

    def render(
        self,
        template: str,
        sink: OutputSink,
        *,
        partials: Partials = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Render template against the built scope, writing to sink."""
        render_to(template, self.build(), sink, partials=partials, config=config)
