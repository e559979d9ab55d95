"""Template inspection and input validation utilities."""

from collections.abc import Iterable

from flowstache.context import PATH_SEPARATOR
from flowstache.nodes import InvertedSection
from flowstache.nodes import Node
from flowstache.nodes import Partial
from flowstache.nodes import Section
from flowstache.nodes import Variable
from flowstache.parser import parse
from flowstache.values import IMPLICIT_ITERATOR


class VariableValidationError(ValueError):
    """Raised when template variable validation fails."""

    pass


def collect_variables(template: str | list[Node]) -> set[str]:
    """Extract the root-level names a template reads.

    Names inside a section body may resolve against the section's own
    value, so only the section name itself is collected there. Inverted
    sections push no frame and their bodies are searched. Dotted names
    contribute their first segment.

    Args:
        template: Template text or already parsed nodes

    Returns:
        Set of variable names found in template

    Raises:
        TypeError: When template is neither str nor a node list

    """
    nodes = _as_nodes(template)
    names: set[str] = set()
    _collect_names(nodes, names)
    names.discard(IMPLICIT_ITERATOR)
    return names


def collect_partials(template: str | list[Node]) -> set[str]:
    """Extract the names of all partials referenced anywhere in a template."""
    found: set[str] = set()
    stack = [_as_nodes(template)]
    while stack:
        for node in stack.pop():
            match node:
                case Partial(name=name):
                    found.add(name)
                case Section(children=children) | InvertedSection(children=children):
                    stack.append(children)
    return found


def validate_variables(
    vars_required: set[str],
    provided: Iterable[str],
    *,
    allow_extra: bool = True,
) -> None:
    """Validate that all required variables are provided.

    Args:
        vars_required: Set of variable names required by template
        provided: Names of provided variables
        allow_extra: Whether provided names unused by the template are fine

    Raises:
        VariableValidationError: When variables are missing, or extra names
            are given while allow_extra is False

    """
    provided_set = set(provided)
    missing = vars_required - provided_set
    extra = set() if allow_extra else provided_set - vars_required

    if missing or extra:
        msg_parts = []
        if missing:
            msg_parts.append(f"Missing variables: {', '.join(sorted(missing))}")
        if extra:
            msg_parts.append(f"Extra variables: {', '.join(sorted(extra))}")
        msg = "; ".join(msg_parts)
        raise VariableValidationError(msg)


def _as_nodes(template: str | list[Node]) -> list[Node]:
    if isinstance(template, str):
        return parse(template)
    if isinstance(template, list):
        return template
    msg = f"Cannot collect variables from {type(template).__name__}"
    raise TypeError(msg)


def _collect_names(nodes: list[Node], names: set[str]) -> None:
    for node in nodes:
        match node:
            case Variable(name=name) | Section(name=name):
                names.add(_root_name(name))
            case InvertedSection(name=name, children=children):
                names.add(_root_name(name))
                _collect_names(children, names)


def _root_name(name: str) -> str:
    if name == IMPLICIT_ITERATOR:
        return name
    return name.split(PATH_SEPARATOR, 1)[0]
