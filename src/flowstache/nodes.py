"""Parsed template nodes.

The parser fuses every section's open and close tags into one node whose
children are the inner nodes. Section nodes also keep the raw inner text
as written, which is what a section lambda receives.
"""

from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import Field

from flowstache.delimiters import DEFAULT_DELIMITERS
from flowstache.delimiters import Delimiters


class Text(BaseModel):
    """A run of literal template text."""

    model_config = {"frozen": True}

    kind: Literal["text"] = "text"
    text: str


class Variable(BaseModel):
    """An interpolation tag; ``escaped`` is False for ``{{{ }}}`` and ``{{& }}``."""

    model_config = {"frozen": True}

    kind: Literal["variable"] = "variable"
    name: str
    escaped: bool = True


class Section(BaseModel):
    """A ``{{#name}}...{{/name}}`` block.

    Attributes:
        name: Tag name of the section.
        children: Nodes between the open and close tags.
        raw: Inner template text exactly as written.
        delimiters: Delimiters in effect at the open tag.

    """

    model_config = {"frozen": True}

    kind: Literal["section"] = "section"
    name: str
    children: list["Node"] = Field(default_factory=list)
    raw: str = ""
    delimiters: Delimiters = DEFAULT_DELIMITERS


class InvertedSection(BaseModel):
    """A ``{{^name}}...{{/name}}`` block rendered only when name is falsy."""

    model_config = {"frozen": True}

    kind: Literal["inverted_section"] = "inverted_section"
    name: str
    children: list["Node"] = Field(default_factory=list)


class Partial(BaseModel):
    """A ``{{>name}}`` include; ``indent`` is set for standalone tags."""

    model_config = {"frozen": True}

    kind: Literal["partial"] = "partial"
    name: str
    indent: str = ""


class Comment(BaseModel):
    """A ``{{! ... }}`` comment."""

    model_config = {"frozen": True}

    kind: Literal["comment"] = "comment"
    text: str = ""


class DelimiterChange(BaseModel):
    """A ``{{=open close=}}`` tag."""

    model_config = {"frozen": True}

    kind: Literal["delimiter_change"] = "delimiter_change"
    delimiters: Delimiters


Node = Annotated[
    Text
    | Variable
    | Section
    | InvertedSection
    | Partial
    | Comment
    | DelimiterChange,
    Field(discriminator="kind"),
]

Section.model_rebuild()
InvertedSection.model_rebuild()
