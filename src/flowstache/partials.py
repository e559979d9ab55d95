"""Partial loaders.

The render engine asks a loader for the parsed nodes of a named partial.
Loaders in this module keep partial sources as text, indent them for
standalone partial tags, and parse them with the default delimiters.
"""

from collections.abc import Mapping
import logging
from pathlib import Path
import re
from typing import Protocol

from flowstache.core.errors import PartialNotFoundError
from flowstache.nodes import Node
from flowstache.parser import parse

logger = logging.getLogger(__name__)

NON_BLANK_LINE_RE = re.compile(r"^(?=.)", re.MULTILINE)


class PartialLoader(Protocol):
    """Protocol for resolving partial names to parsed nodes."""

    def load_partial(self, name: str, *, indent: str = "") -> list[Node]:
        """Return the nodes of partial name, indenting each line by indent."""
        ...


def indent_source(source: str, indent: str) -> str:
    """Prefix every non-empty line of source with indent."""
    if not indent:
        return source
    return NON_BLANK_LINE_RE.sub(indent, source)


class TemplatePartials:
    """Base loader for partials stored as template text."""

    def get_source(self, name: str) -> str | None:
        """Return the template text of partial name, or None when unknown."""
        raise NotImplementedError

    def load_partial(self, name: str, *, indent: str = "") -> list[Node]:
        """Load, indent and parse partial name.

        Raises:
            PartialNotFoundError: When the partial does not exist
            TemplateSyntaxError: When the partial source is malformed

        """
        source = self.get_source(name)
        if source is None:
            raise PartialNotFoundError(name)
        logger.debug("Loaded partial %r (%d chars)", name, len(source))
        return parse(indent_source(source, indent))


class DictPartials(TemplatePartials):
    """Partials held in memory, keyed by name."""

    def __init__(self, sources: Mapping[str, str] | None = None) -> None:
        """Initialize with a mapping of partial names to template text."""
        self._sources = dict(sources or {})

    def add(self, name: str, source: str) -> None:
        """Register or replace a partial."""
        self._sources[name] = source

    def get_source(self, name: str) -> str | None:
        """Return the registered text for name."""
        return self._sources.get(name)


class DirectoryPartials(TemplatePartials):
    """Partials read from ``<root>/<name><extension>`` files."""

    def __init__(self, root: str | Path, *, extension: str = ".mustache") -> None:
        """Initialize the loader.

        Args:
            root: Directory containing partial files
            extension: File extension appended to partial names

        """
        self.root = Path(root)
        self.extension = extension

    def get_source(self, name: str) -> str | None:
        """Read the partial file, or return None when it does not exist.

        Names that would escape the root directory are treated as unknown.
        """
        path = (self.root / f"{name}{self.extension}").resolve()
        if not path.is_relative_to(self.root.resolve()) or not path.is_file():
            return None
        return path.read_text(encoding="utf-8")


def as_partial_loader(
    partials: PartialLoader | Mapping[str, str] | None,
) -> PartialLoader | None:
    """Wrap a mapping of partial sources in a DictPartials loader."""
    if isinstance(partials, Mapping):
        return DictPartials(partials)
    return partials
