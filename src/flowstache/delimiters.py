"""Tag delimiters and the mutable delimiter state of a render region."""

from pydantic import BaseModel
from pydantic import field_validator

from flowstache.core.errors import TemplateSyntaxError


class Delimiters(BaseModel):
    """A pair of open and close tag markers."""

    model_config = {"frozen": True}

    open: str = "{{"
    close: str = "}}"

    @field_validator("open", "close")
    @classmethod
    def _check_marker(cls, marker: str) -> str:
        if not marker or "=" in marker or any(c.isspace() for c in marker):
            msg = f"Invalid delimiter: {marker!r}"
            raise ValueError(msg)
        return marker

    @classmethod
    def from_tag(cls, body: str, *, line: int | None = None) -> "Delimiters":
        """Parse the body of a ``{{=open close=}}`` tag.

        Args:
            body: Tag content between the two ``=`` signs
            line: Line number used in error messages

        Returns:
            The new delimiters

        Raises:
            TemplateSyntaxError: When the body is not exactly two valid markers

        """
        markers = body.split()
        if len(markers) != 2:
            msg = f"Invalid delimiter tag: {body!r}"
            raise TemplateSyntaxError(msg, line=line)
        open_, close = markers
        if "=" in open_ or "=" in close:
            msg = f"Invalid delimiter tag: {body!r}"
            raise TemplateSyntaxError(msg, line=line)
        return cls(open=open_, close=close)

    def __str__(self) -> str:
        """Return the markers as they would appear in a delimiter tag."""
        return f"{self.open} {self.close}"


DEFAULT_DELIMITERS = Delimiters()


class DelimiterState:
    """Current delimiters of one render region.

    A delimiter change tag updates the state for the rest of the region.
    Nested regions, such as re-parsed lambda output, work on a copy.
    """

    def __init__(self, delimiters: Delimiters = DEFAULT_DELIMITERS) -> None:
        """Initialize with the delimiters in effect at the region start."""
        self._current = delimiters

    @property
    def current(self) -> Delimiters:
        """The delimiters in effect."""
        return self._current

    def change(self, delimiters: Delimiters) -> None:
        """Switch to new delimiters."""
        self._current = delimiters

    def copy(self) -> "DelimiterState":
        """Return an independent state starting from the current delimiters."""
        return DelimiterState(self._current)
