"""High-level rendering API: one-shot functions and reusable templates."""

from collections.abc import Mapping
import io

from pydantic import BaseModel

from flowstache.core.config import RenderConfig
from flowstache.core.enums import EscapePolicy
from flowstache.engine import OutputSink
from flowstache.engine import RenderEngine
from flowstache.parser import parse
from flowstache.partials import PartialLoader
from flowstache.partials import as_partial_loader
from flowstache.validation import collect_variables
from flowstache.validation import validate_variables
from flowstache.values import Scope
from flowstache.values import from_python
from flowstache.values import to_scope

Partials = PartialLoader | Mapping[str, str] | None


def render_to(
    template: str,
    data: Scope | Mapping[str, object] | BaseModel,
    sink: OutputSink,
    *,
    partials: Partials = None,
    config: RenderConfig | None = None,
) -> None:
    """Parse template and render it against data into sink.

    Args:
        template: Template text
        data: Root context as a Scope, mapping or pydantic model
        sink: Destination for output text
        partials: Partial loader, or a mapping of partial sources
        config: Render configuration

    """
    engine = RenderEngine(config=config, partials=as_partial_loader(partials))
    engine.render(parse(template), to_scope(data), sink)


def render(
    template: str,
    data: Scope | Mapping[str, object] | BaseModel,
    *,
    partials: Partials = None,
    config: RenderConfig | None = None,
) -> str:
    """Render template against data and return the output.

    Examples:
        >>> render("Hello, {{name}}!", {"name": "<World>"})
        'Hello, &lt;World&gt;!'

    """
    buffer = io.StringIO()
    render_to(template, data, buffer, partials=partials, config=config)
    return buffer.getvalue()


class MustacheRenderer:
    """Render Mustache (logic-less) templates from plain Python data."""

    def __init__(
        self,
        *,
        strict: bool = False,
        escape_policy: EscapePolicy = EscapePolicy.HTML,
        partials: Partials = None,
    ) -> None:
        """Initialize the Mustache renderer.

        Args:
            strict: Whether to log a warning for each missing variable
            escape_policy: Escaping applied to ``{{name}}`` tags
            partials: Partial loader, or a mapping of partial sources

        """
        self.strict = strict
        self._engine = RenderEngine(
            config=RenderConfig(warn_on_missing=strict, escape_policy=escape_policy),
            partials=as_partial_loader(partials),
        )

    def render(self, template: object, variables: Mapping[str, object]) -> str:
        """Render Mustache template with variables.

        Args:
            template: Template string with {{variable}} syntax
            variables: Mapping of variable names to values

        Returns:
            Rendered string

        Raises:
            TypeError: When template is not a string
            TemplateSyntaxError: When template syntax is invalid

        """
        if not isinstance(template, str):
            msg = f"Mustache template must be str, got {type(template).__name__}"
            raise TypeError(msg)

        return self._engine.render_to_string(parse(template), to_scope(variables))


class MustacheTemplate[TIn: BaseModel]:
    """A template parsed once and rendered from instances of an input model."""

    def __init__(
        self,
        *,
        template: str,
        input_model: type[TIn],
        partials: Partials = None,
        config: RenderConfig | None = None,
        validate: bool = False,
    ) -> None:
        """Initialize a template.

        Args:
            template: Template text
            input_model: Pydantic model defining input variables
            partials: Partial loader, or a mapping of partial sources
            config: Render configuration
            validate: Check that every root-level name in the template is a
                field of input_model

        Raises:
            TemplateSyntaxError: When template syntax is invalid
            VariableValidationError: When validate is set and fields are missing

        """
        self.template = template
        self.input_model = input_model
        self.nodes = parse(template)
        self._engine = RenderEngine(
            config=config, partials=as_partial_loader(partials)
        )
        if validate:
            validate_variables(self.variables(), input_model.model_fields)

    def variables(self) -> set[str]:
        """Return the root-level names the template reads."""
        return collect_variables(self.nodes)

    def render_to(
        self,
        input: TIn,
        sink: OutputSink,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Render into sink; see render."""
        self._engine.render(self.nodes, self._scope(input, extra), sink)

    def render(self, input: TIn, extra: Mapping[str, object] | None = None) -> str:
        """Render template with input model instance.

        Args:
            input: Input model instance providing variables
            extra: Optional extra variables not in model; they win over
                model fields of the same name

        Returns:
            Rendered string

        """
        return self._engine.render_to_string(self.nodes, self._scope(input, extra))

    def _scope(self, input: TIn, extra: Mapping[str, object] | None) -> Scope:
        scope = Scope(values=dict(to_scope(input).values))
        for name, value in (extra or {}).items():
            if value is not None:
                scope.insert(name, from_python(value))
        return scope
