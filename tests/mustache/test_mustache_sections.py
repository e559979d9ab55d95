"""Mustache conformance cases for sections and inverted sections."""

from flowstache import Bool
from flowstache import Scope
from flowstache import Sequence
from flowstache import Static
from flowstache import render


class TestSections:
    """Sections gated on truthiness or iterated over sequences."""

    def test_truthy(self) -> None:
        """Truthy sections should have their contents rendered."""
        template = '"{{#boolean}}This should be rendered.{{/boolean}}"'
        result = render(template, {"boolean": True})
        assert result == '"This should be rendered."'

    def test_falsey(self) -> None:
        """Falsey sections should have their contents omitted."""
        template = '"{{#boolean}}This should not be rendered.{{/boolean}}"'
        result = render(template, {"boolean": False})
        assert result == '""'

    def test_missing_name_is_falsey(self) -> None:
        """Unresolved names render nothing."""
        assert render('"{{#missing}}Found key!{{/missing}}"', {}) == '""'

    def test_empty_static_is_truthy(self) -> None:
        """A bound string is truthy even when empty."""
        root = Scope(values={"s": Static(text="")})
        assert render("{{#s}}shown{{/s}}", root) == "shown"

    def test_static_binds_implicit_iterator(self) -> None:
        """Inside a string-valued section "." is the string itself."""
        data = {"s": "a<b", "outer": "o"}
        assert render("{{#s}}[{{.}}|{{outer}}]{{/s}}", data) == "[a&lt;b|o]"

    def test_bool_section_keeps_enclosing_frame(self) -> None:
        """Boolean sections push no frame, so "." stays the enclosing item."""
        data = {"items": ["x", "y"], "flag": True}
        template = "{{#items}}{{#flag}}{{.}}{{/flag}}{{/items}}"
        assert render(template, data) == "xy"

    def test_context(self) -> None:
        """Objects and hashes should be pushed onto the context stack."""
        data = {"context": {"name": "Joe"}}
        assert render('"{{#context}}Hi {{name}}.{{/context}}"', data) == '"Hi Joe."'

    def test_deeply_nested_contexts(self) -> None:
        """All elements on the context stack should be accessible."""
        data = {
            "a": {"one": 1},
            "b": {"two": 2},
            "c": {"three": 3},
        }
        template = (
            "{{#a}}{{one}}{{#b}}{{one}}{{two}}"
            "{{#c}}{{one}}{{two}}{{three}}{{/c}}{{/b}}{{/a}}"
        )
        assert render(template, data) == "1121123"

    def test_list(self) -> None:
        """Lists should be iterated; list items should visit the context stack."""
        data = {"list": [{"item": 1}, {"item": 2}, {"item": 3}]}
        assert render('"{{#list}}{{item}}{{/list}}"', data) == '"123"'

    def test_empty_list(self) -> None:
        """Empty lists should behave like falsey values."""
        assert render('"{{#list}}Yay lists!{{/list}}"', {"list": []}) == '""'

    def test_items_shadow_outer_names(self) -> None:
        """Each element frame shadows outer bindings of the same name."""
        data = {"name": "outer", "list": [{"name": "a"}, {}, {"name": "c"}]}
        assert render("{{#list}}{{name}},{{/list}}", data) == "a,outer,c,"

    def test_doubled(self) -> None:
        """Multiple sections per template should be permitted."""
        data = {"bool": True, "two": "second"}
        template = (
            "{{#bool}}\n* first\n{{/bool}}\n* {{two}}\n{{#bool}}\n* third\n{{/bool}}\n"
        )
        assert render(template, data) == "* first\n* second\n* third\n"

    def test_nested_truthy(self) -> None:
        """Nested truthy sections should have their contents rendered."""
        template = "| A {{#bool}}B {{#bool}}C{{/bool}} D{{/bool}} E |"
        assert render(template, {"bool": True}) == "| A B C D E |"

    def test_implicit_iterator_string(self) -> None:
        """Implicit iterators should directly interpolate strings."""
        data = {"list": ["a", "b", "c", "d", "e"]}
        assert render('"{{#list}}({{.}}){{/list}}"', data) == '"(a)(b)(c)(d)(e)"'

    def test_implicit_iterator_escaped(self) -> None:
        """Implicit iterator values are escaped like any other value."""
        data = {"list": ["<a>", "&"]}
        assert render("{{#list}}{{.}};{{/list}}", data) == "&lt;a&gt;;&amp;;"

    def test_dotted_names_truthy(self) -> None:
        """Dotted names should be valid for Section tags."""
        data = {"a": {"b": {"c": True}}}
        template = '"{{#a.b.c}}Here{{/a.b.c}}" == "Here"'
        assert render(template, data) == '"Here" == "Here"'

    def test_dotted_names_broken_chains(self) -> None:
        """Dotted names that cannot be resolved should be considered falsey."""
        template = '"{{#a.b.c}}Here{{/a.b.c}}" == ""'
        assert render(template, {"a": {}}) == '"" == ""'

    def test_surrounding_whitespace(self) -> None:
        """Sections should not alter surrounding whitespace."""
        template = " | {{#boolean}}\t|\t{{/boolean}} | \n"
        assert render(template, {"boolean": True}) == " | \t|\t | \n"

    def test_standalone_lines(self) -> None:
        """Standalone lines should be removed from the template."""
        template = "| This Is\n{{#boolean}}\n|\n{{/boolean}}\n| A Line\n"
        assert render(template, {"boolean": True}) == "| This Is\n|\n| A Line\n"

    def test_indented_standalone_lines(self) -> None:
        """Indented standalone lines should be removed from the template."""
        template = "| This Is\n  {{#boolean}}\n|\n  {{/boolean}}\n| A Line\n"
        assert render(template, {"boolean": True}) == "| This Is\n|\n| A Line\n"

    def test_standalone_line_endings(self) -> None:
        """'\\r\\n' should be considered a newline for standalone tags."""
        template = "|\r\n{{#boolean}}\r\n{{/boolean}}\r\n|"
        assert render(template, {"boolean": True}) == "|\r\n|"

    def test_standalone_without_previous_line(self) -> None:
        """Standalone tags should not require a newline to precede them."""
        template = "  {{#boolean}}\n#{{/boolean}}\n/"
        assert render(template, {"boolean": True}) == "#\n/"

    def test_standalone_without_newline(self) -> None:
        """Standalone tags should not require a newline to follow them."""
        template = "#{{#boolean}}\n/\n  {{/boolean}}"
        assert render(template, {"boolean": True}) == "#\n/\n"

    def test_padding(self) -> None:
        """Superfluous in-tag whitespace should be ignored."""
        assert render("|{{# boolean }}={{/ boolean }}|", {"boolean": True}) == "|=|"

    def test_typed_values(self) -> None:
        """Sections over explicitly built values follow the same rules."""
        root = Scope(
            values={
                "on": Bool(flag=True),
                "people": Sequence(
                    items=[
                        Scope(values={"name": Static(text="Ann")}),
                        Scope(values={"name": Static(text="Bob")}),
                    ]
                ),
            }
        )
        template = "{{#on}}{{#people}}<{{name}}>{{/people}}{{/on}}"
        assert render(template, root) == "<Ann><Bob>"


class TestInvertedSections:
    """Inverted sections render only when the name is falsy."""

    def test_falsey(self) -> None:
        """Falsey sections should have their contents rendered."""
        template = '"{{^boolean}}This should be rendered.{{/boolean}}"'
        result = render(template, {"boolean": False})
        assert result == '"This should be rendered."'

    def test_truthy(self) -> None:
        """Truthy sections should have their contents omitted."""
        template = '"{{^boolean}}This should not be rendered.{{/boolean}}"'
        result = render(template, {"boolean": True})
        assert result == '""'

    def test_bool_false_renders_other_value(self) -> None:
        """Bool(false) fires the inverted section; Bool(true) suppresses it."""
        template = "<{{^name}}{{other}}{{/name}}>"
        shown = Scope(values={"name": Bool(flag=False), "other": Static(text="x")})
        hidden = Scope(values={"name": Bool(flag=True), "other": Static(text="x")})
        assert render(template, shown) == "<x>"
        assert render(template, hidden) == "<>"

    def test_context(self) -> None:
        """Objects and hashes should behave like truthy values."""
        data = {"context": {"name": "Joe"}}
        assert render('"{{^context}}Hi {{name}}.{{/context}}"', data) == '""'

    def test_list(self) -> None:
        """Lists should behave like truthy values."""
        data = {"list": [{"n": 1}, {"n": 2}]}
        assert render('"{{^list}}{{n}}{{/list}}"', data) == '""'

    def test_empty_list(self) -> None:
        """Empty lists should behave like falsey values."""
        assert render('"{{^list}}Yay lists!{{/list}}"', {"list": []}) == '"Yay lists!"'

    def test_missing_name(self) -> None:
        """Unresolved names fire the inverted section."""
        assert render('"{{^missing}}Found key!{{/missing}}"', {}) == '"Found key!"'

    def test_empty_string_is_truthy(self) -> None:
        """A bound empty string suppresses the inverted section."""
        assert render("[{{^s}}hidden{{/s}}]", {"s": ""}) == "[]"

    def test_dotted_names_falsey(self) -> None:
        """Dotted names should be valid for Inverted Section tags."""
        data = {"a": {"b": {"c": False}}}
        template = '"{{^a.b.c}}Not Here{{/a.b.c}}" == "Not Here"'
        assert render(template, data) == '"Not Here" == "Not Here"'

    def test_standalone_lines(self) -> None:
        """Standalone lines should be removed from the template."""
        template = "| This Is\n{{^boolean}}\n|\n{{/boolean}}\n| A Line\n"
        assert render(template, {"boolean": False}) == "| This Is\n|\n| A Line\n"
