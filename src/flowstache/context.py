"""Context stack used for name resolution during rendering."""

from collections.abc import Iterator
from contextlib import contextmanager

from flowstache.values import IMPLICIT_ITERATOR
from flowstache.values import Scope
from flowstache.values import Value

PATH_SEPARATOR = "."


class ContextStack:
    """An ordered stack of scopes, innermost last.

    Names resolve against the innermost scope first and fall back outward,
    so a section frame shadows outer bindings of the same name. The root
    scope belongs to the caller and is never modified.
    """

    def __init__(self, *frames: Scope) -> None:
        """Initialize the stack with frames ordered outermost first.

        Args:
            *frames: Initial scopes, typically just the root scope

        """
        self._frames: list[Scope] = list(frames)

    def __len__(self) -> int:
        """Return the number of frames."""
        return len(self._frames)

    def __repr__(self) -> str:
        """Return a debug representation listing the names of each frame."""
        frames = ", ".join(repr(frame.names()) for frame in self._frames)
        return f"ContextStack([{frames}])"

    @property
    def top(self) -> Scope | None:
        """The innermost frame, or None for an empty stack."""
        return self._frames[-1] if self._frames else None

    def frames(self) -> Iterator[Scope]:
        """Iterate frames from innermost to outermost."""
        return reversed(self._frames)

    @contextmanager
    def frame(self, scope: Scope) -> Iterator[Scope]:
        """Push scope for the duration of a with block.

        The frame is popped on every exit path, including exceptions.
        """
        self._frames.append(scope)
        try:
            yield scope
        finally:
            self._frames.pop()

    def resolve(self, name: str) -> Value | None:
        """Resolve a tag name against the stack.

        Dotted names resolve their first segment through the stack and
        every following segment strictly inside the previous result. The
        implicit iterator ``.`` yields the innermost frame's own ``.``
        binding when it has one, else the innermost frame.

        Args:
            name: Tag name, possibly dotted

        Returns:
            The resolved value, or None when any part is missing

        """
        if name == IMPLICIT_ITERATOR:
            top = self.top
            if top is None:
                return None
            return top.get(IMPLICIT_ITERATOR) or top

        head, *rest = name.split(PATH_SEPARATOR)
        value = self._lookup(head)
        for segment in rest:
            if not isinstance(value, Scope):
                return None
            value = value.get(segment)
        return value

    def _lookup(self, name: str) -> Value | None:
        for scope in self.frames():
            if name in scope:
                return scope[name]
        return None


def resolve(stack: ContextStack, name: str) -> Value | None:
    """Resolve name against stack; see ContextStack.resolve."""
    return stack.resolve(name)
