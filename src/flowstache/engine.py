"""Render engine that evaluates parsed templates against a context stack.

Evaluation is a strict depth-first, left-to-right walk. Output goes to a
caller-supplied sink as soon as it is produced, so text written before an
error stays in the sink. Errors abort the render call.
"""

from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
import io
import logging
from typing import Protocol
from typing import assert_never

from opentelemetry import trace

from flowstache.context import ContextStack
from flowstache.core.config import RenderConfig
from flowstache.core.errors import LambdaError
from flowstache.core.errors import MustacheError
from flowstache.core.errors import PartialNotFoundError
from flowstache.core.errors import RecursionLimitError
from flowstache.core.errors import TemplateSyntaxError
from flowstache.delimiters import Delimiters
from flowstache.delimiters import DelimiterState
from flowstache.escaping import get_escaper
from flowstache.nodes import Comment
from flowstache.nodes import DelimiterChange
from flowstache.nodes import InvertedSection
from flowstache.nodes import Node
from flowstache.nodes import Partial
from flowstache.nodes import Section
from flowstache.nodes import Text
from flowstache.nodes import Variable
from flowstache.parser import parse
from flowstache.partials import PartialLoader
from flowstache.values import IMPLICIT_ITERATOR
from flowstache.values import Lambda
from flowstache.values import Scope
from flowstache.values import Sequence
from flowstache.values import Static
from flowstache.values import Value
from flowstache.values import stringify
from flowstache.values import truthy

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

TemplateParser = Callable[[str, Delimiters], list[Node]]


class OutputSink(Protocol):
    """Anything with a text ``write`` method, such as ``io.StringIO``."""

    def write(self, text: str, /) -> object:
        """Append text to the output."""
        ...


class RenderEngine:
    """Evaluate parsed templates.

    The engine itself holds configuration only; every ``render`` call gets
    its own context stack, delimiter state and depth counter, so one engine
    can be reused across calls.
    """

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        partials: PartialLoader | None = None,
        parser: TemplateParser = parse,
    ) -> None:
        """Initialize the render engine.

        Args:
            config: Render configuration (defaults to RenderConfig())
            partials: Loader used for ``{{>name}}`` tags
            parser: Parser used to re-parse lambda output

        """
        self.config = config or RenderConfig()
        self.partials = partials
        self.parser = parser
        self.escape = get_escaper(self.config.escape_policy)

    def render(self, nodes: list[Node], root: Scope, sink: OutputSink) -> None:
        """Render nodes against root, writing output to sink.

        Args:
            nodes: Parsed template
            root: Root scope; it is not modified
            sink: Destination for output text

        Raises:
            UnstringifiableValueError: When a sequence or scope is interpolated
            PartialNotFoundError: When a partial cannot be loaded
            TemplateSyntaxError: When lambda output or a partial is malformed
            LambdaError: When a lambda raises
            RecursionLimitError: When expansions nest beyond config.max_depth,
                or sections nest deeper than the interpreter allows

        """
        with tracer.start_as_current_span("mustache.render") as span:
            span.set_attribute("mustache.node_count", len(nodes))
            span.set_attribute("mustache.root_names", ",".join(root.names()))
            render_pass = _RenderPass(self, ContextStack(root))
            try:
                render_pass.walk(nodes, sink, DelimiterState())
            except RecursionError as e:
                msg = "Template nesting exceeds the interpreter recursion limit"
                raise RecursionLimitError(msg) from e
            span.set_attribute("mustache.lambda_calls", render_pass.lambda_calls)

    def render_to_string(self, nodes: list[Node], root: Scope) -> str:
        """Render nodes against root and return the output."""
        buffer = io.StringIO()
        self.render(nodes, root, buffer)
        return buffer.getvalue()


class _RenderPass:
    """State of a single render call."""

    def __init__(self, engine: RenderEngine, stack: ContextStack) -> None:
        self._engine = engine
        self._config = engine.config
        self._stack = stack
        self._depth = 0
        self.lambda_calls = 0

    def walk(self, nodes: list[Node], sink: OutputSink, state: DelimiterState) -> None:
        for node in nodes:
            match node:
                case Text(text=text):
                    sink.write(text)
                case Variable():
                    self._variable(node, sink, state)
                case Section():
                    self._section(node, sink, state)
                case InvertedSection():
                    self._inverted(node, sink, state)
                case Partial():
                    self._partial(node, sink)
                case Comment():
                    pass
                case DelimiterChange(delimiters=delimiters):
                    state.change(delimiters)
                case _:
                    assert_never(node)

    def _resolve(self, name: str) -> Value | None:
        value = self._stack.resolve(name)
        if value is None and self._config.warn_on_missing:
            logger.warning("Unresolved tag name %r", name)
        return value

    def _variable(
        self, node: Variable, sink: OutputSink, state: DelimiterState
    ) -> None:
        value = self._resolve(node.name)
        if value is None:
            return

        if isinstance(value, Lambda):
            # Lambda output is rendered in full, then escaped like any value.
            buffer = io.StringIO()
            template = self._call(value, node.name, "")
            self._expand(template, node.name, state.current, buffer)
            text = buffer.getvalue()
        else:
            text = stringify(value, node.name)

        sink.write(self._engine.escape(text) if node.escaped else text)

    def _section(self, node: Section, sink: OutputSink, state: DelimiterState) -> None:
        value = self._resolve(node.name)
        if not truthy(value):
            self._skip(node.children, state)
            return

        match value:
            case Lambda():
                template = self._call(value, node.name, node.raw)
                self._expand(template, node.name, node.delimiters, sink)
                self._skip(node.children, state)
            case Sequence(items=items):
                start = state.current
                for item in items:
                    state.change(start)
                    with self._stack.frame(item):
                        self.walk(node.children, sink, state)
            case Scope():
                with self._stack.frame(value):
                    self.walk(node.children, sink, state)
            case Static():
                # Binds "." to the string inside the section.
                with self._stack.frame(Scope(values={IMPLICIT_ITERATOR: value})):
                    self.walk(node.children, sink, state)
            case _:
                self.walk(node.children, sink, state)

    def _inverted(
        self, node: InvertedSection, sink: OutputSink, state: DelimiterState
    ) -> None:
        if truthy(self._resolve(node.name)):
            self._skip(node.children, state)
        else:
            self.walk(node.children, sink, state)

    def _partial(self, node: Partial, sink: OutputSink) -> None:
        loader = self._engine.partials
        if loader is None:
            raise PartialNotFoundError(node.name)

        with self._descend(node.name):
            logger.debug("Rendering partial %r at depth %d", node.name, self._depth)
            nodes = loader.load_partial(node.name, indent=node.indent)
            self.walk(nodes, sink, DelimiterState())

    def _skip(self, nodes: list[Node], state: DelimiterState) -> None:
        """Apply delimiter changes of a section body that is not rendered."""
        for node in nodes:
            match node:
                case DelimiterChange(delimiters=delimiters):
                    state.change(delimiters)
                case Section(children=children) | InvertedSection(children=children):
                    self._skip(children, state)

    def _call(self, func: Lambda, name: str, text: str) -> str:
        logger.debug("Invoking lambda %r with %d chars", name, len(text))
        self.lambda_calls += 1
        try:
            return func(text)
        except MustacheError:
            raise
        except Exception as e:
            msg = f"Lambda {name!r} failed: {e}"
            raise LambdaError(msg) from e

    def _expand(
        self, template: str, name: str, delimiters: Delimiters, sink: OutputSink
    ) -> None:
        """Parse lambda output and render it against the current stack."""
        with self._descend(name):
            try:
                nodes = self._engine.parser(template, delimiters)
            except TemplateSyntaxError as e:
                msg = f"Lambda {name!r} returned an invalid template: {e}"
                raise TemplateSyntaxError(msg) from e
            self.walk(nodes, sink, DelimiterState(delimiters))

    @contextmanager
    def _descend(self, name: str) -> Iterator[None]:
        if self._depth >= self._config.max_depth:
            msg = (
                f"Expanding {name!r} exceeds the maximum depth of "
                f"{self._config.max_depth}"
            )
            raise RecursionLimitError(msg)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
