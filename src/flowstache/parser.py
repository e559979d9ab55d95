"""Parse Mustache template text into a node tree.

Exposes a ``parse()`` function used for top-level templates, partials and
every re-parse of lambda output.

Examples:
    >>> parse("Hey {{#who}}{{name}}!{{/who}}")[1].raw
    '{{name}}!'

"""

from flowstache.core.errors import TemplateSyntaxError
from flowstache.delimiters import DEFAULT_DELIMITERS
from flowstache.delimiters import Delimiters
from flowstache.nodes import Comment
from flowstache.nodes import DelimiterChange
from flowstache.nodes import InvertedSection
from flowstache.nodes import Node
from flowstache.nodes import Partial
from flowstache.nodes import Section
from flowstache.nodes import Text
from flowstache.nodes import Variable

# Sigils that may follow the open delimiter. "{" is the triple mustache.
TAG_SIGILS = "!#^/>&{="

# Tags that swallow their whole line when they stand alone on it.
STANDALONE_SIGILS = frozenset("!#^/>=")


def parse(template: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> list[Node]:
    """Parse template text into nodes.

    Args:
        template: Template text
        delimiters: Delimiters in effect at the start of the text

    Returns:
        The top-level node sequence

    Raises:
        TypeError: When template is not a string
        TemplateSyntaxError: When tags or sections are malformed

    """
    if not isinstance(template, str):
        msg = f"Mustache template must be str, got {type(template).__name__}"
        raise TypeError(msg)
    return _Parser(template, delimiters).parse()


class _OpenSection:
    """Parser state saved when a section opens."""

    def __init__(
        self,
        sigil: str,
        name: str,
        parent: list[Node],
        inner_start: int,
        delimiters: Delimiters,
        line: int,
    ) -> None:
        self.sigil = sigil
        self.name = name
        self.parent = parent
        self.inner_start = inner_start
        self.delimiters = delimiters
        self.line = line


class _Parser:
    def __init__(self, template: str, delimiters: Delimiters) -> None:
        self._template = template
        self._delimiters = delimiters
        self._nodes: list[Node] = []
        self._open: list[_OpenSection] = []

    def parse(self) -> list[Node]:
        template = self._template
        pos = 0
        while True:
            start = template.find(self._delimiters.open, pos)
            if start == -1:
                self._add_text(template[pos:])
                break

            sigil, body, end = self._read_tag(start)

            # Standalone tags consume their leading whitespace and newline.
            text_end, after = start, end
            if sigil in STANDALONE_SIGILS:
                span = self._standalone_span(pos, start, end)
                if span is not None:
                    text_end, after = span

            self._add_text(template[pos:text_end])
            self._handle(sigil, body, start, text_end, after)
            pos = after

        if self._open:
            section = self._open[-1]
            msg = f"Unclosed section {section.name!r}"
            raise TemplateSyntaxError(msg, line=section.line)
        return self._nodes

    def _line(self, index: int) -> int:
        return self._template.count("\n", 0, index) + 1

    def _read_tag(self, start: int) -> tuple[str, str, int]:
        template = self._template
        cursor = start + len(self._delimiters.open)
        sigil = template[cursor : cursor + 1]
        if sigil and sigil in TAG_SIGILS:
            cursor += 1
        else:
            sigil = ""

        closing = self._delimiters.close
        if sigil == "{":
            closing = "}" + closing
        elif sigil == "=":
            closing = "=" + closing

        end = template.find(closing, cursor)
        if end == -1:
            msg = f"Unclosed tag {template[start : start + 20]!r}"
            raise TemplateSyntaxError(msg, line=self._line(start))

        body = template[cursor:end].strip()
        if not body and sigil != "!":
            msg = f"Empty tag {template[start : end + len(closing)]!r}"
            raise TemplateSyntaxError(msg, line=self._line(start))

        if sigil == "{":
            sigil = "&"
        return sigil, body, end + len(closing)

    def _standalone_span(
        self, pos: int, start: int, end: int
    ) -> tuple[int, int] | None:
        """Return (text_end, after) when the tag stands alone on its line."""
        template = self._template
        line_start = template.rfind("\n", 0, start) + 1
        if line_start < pos or template[line_start:start].strip(" \t"):
            return None

        eol = template.find("\n", end)
        line_end = len(template) if eol == -1 else eol
        trailing = template[end:line_end]
        if eol != -1 and trailing.endswith("\r"):
            trailing = trailing[:-1]
        if trailing.strip(" \t"):
            return None
        return line_start, len(template) if eol == -1 else eol + 1

    def _handle(
        self, sigil: str, body: str, start: int, text_end: int, after: int
    ) -> None:
        match sigil:
            case "!":
                self._nodes.append(Comment(text=body))
            case "=":
                self._delimiters = Delimiters.from_tag(body, line=self._line(start))
                self._nodes.append(DelimiterChange(delimiters=self._delimiters))
            case "#" | "^":
                self._open.append(
                    _OpenSection(
                        sigil,
                        body,
                        self._nodes,
                        after,
                        self._delimiters,
                        self._line(start),
                    )
                )
                self._nodes = []
            case "/":
                self._close_section(body, start, text_end)
            case ">":
                indent = self._template[text_end:start]
                self._nodes.append(Partial(name=body, indent=indent))
            case "&":
                self._nodes.append(Variable(name=body, escaped=False))
            case _:
                self._nodes.append(Variable(name=body))

    def _close_section(self, name: str, start: int, text_end: int) -> None:
        if not self._open:
            msg = f"Closing unopened section {name!r}"
            raise TemplateSyntaxError(msg, line=self._line(start))

        section = self._open.pop()
        if section.name != name:
            msg = f"Section {section.name!r} closed by {name!r}"
            raise TemplateSyntaxError(msg, line=self._line(start))

        children = self._nodes
        self._nodes = section.parent
        if section.sigil == "#":
            self._nodes.append(
                Section(
                    name=name,
                    children=children,
                    raw=self._template[section.inner_start : text_end],
                    delimiters=section.delimiters,
                )
            )
        else:
            self._nodes.append(InvertedSection(name=name, children=children))

    def _add_text(self, text: str) -> None:
        if text:
            self._nodes.append(Text(text=text))
