"""Tests for partial loaders."""

from pathlib import Path

import pytest

from flowstache import DictPartials
from flowstache import DirectoryPartials
from flowstache import PartialNotFoundError
from flowstache import render
from flowstache.nodes import Text
from flowstache.nodes import Variable
from flowstache.partials import as_partial_loader
from flowstache.partials import indent_source


class TestIndentSource:
    """Test partial indentation."""

    def test_indents_non_empty_lines(self) -> None:
        """Every non-empty line gets the indent."""
        assert indent_source("a\n\nb\n", "  ") == "  a\n\n  b\n"

    def test_no_indent(self) -> None:
        """An empty indent leaves the source as-is."""
        assert indent_source("a\nb", "") == "a\nb"


class TestDictPartials:
    """Test in-memory partials."""

    def test_load(self) -> None:
        """Registered partials are parsed."""
        loader = DictPartials({"p": "x{{y}}"})
        assert loader.load_partial("p") == [Text(text="x"), Variable(name="y")]

    def test_load_with_indent(self) -> None:
        """Indentation is applied before parsing."""
        loader = DictPartials({"p": "a\nb"})
        assert loader.load_partial("p", indent=" ") == [Text(text=" a\n b")]

    def test_add(self) -> None:
        """Partials can be added after construction."""
        loader = DictPartials()
        loader.add("p", "new")
        assert loader.get_source("p") == "new"

    def test_unknown(self) -> None:
        """Unknown names raise PartialNotFoundError."""
        with pytest.raises(PartialNotFoundError, match="Unknown partial: 'x'"):
            DictPartials().load_partial("x")

    def test_not_found_is_lookup_error(self) -> None:
        """PartialNotFoundError can be caught as LookupError."""
        with pytest.raises(LookupError):
            DictPartials().load_partial("x")

    def test_as_partial_loader(self) -> None:
        """Mappings are wrapped; loaders and None pass through."""
        loader = DictPartials()
        assert as_partial_loader(loader) is loader
        assert as_partial_loader(None) is None
        assert isinstance(as_partial_loader({"a": "b"}), DictPartials)


class TestDirectoryPartials:
    """Test file-based partials."""

    def test_load_from_directory(self, tmp_path: Path) -> None:
        """Partials are read from files named after them."""
        (tmp_path / "header.mustache").write_text("<h1>{{title}}</h1>")
        output = render(
            "{{>header}}",
            {"title": "Hi"},
            partials=DirectoryPartials(tmp_path),
        )
        assert output == "<h1>Hi</h1>"

    def test_custom_extension(self, tmp_path: Path) -> None:
        """The file extension is configurable."""
        (tmp_path / "row.txt").write_text("row")
        loader = DirectoryPartials(tmp_path, extension=".txt")
        assert loader.get_source("row") == "row"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files are unknown partials."""
        with pytest.raises(PartialNotFoundError):
            DirectoryPartials(tmp_path).load_partial("nope")

    def test_names_cannot_escape_root(self, tmp_path: Path) -> None:
        """Names resolving outside the root are unknown."""
        root = tmp_path / "partials"
        root.mkdir()
        (tmp_path / "secret.mustache").write_text("secret")
        assert DirectoryPartials(root).get_source("../secret") is None
