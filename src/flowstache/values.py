"""Context values bound to template names.

A value is one of five kinds: a static string, a boolean, an ordered
sequence of scopes, a nested scope, or a lambda. Truthiness and
stringification are each decided by a single exhaustive match over the
union, so a new kind cannot be added without handling it in both places.
"""

from collections.abc import Callable
from collections.abc import Mapping
from decimal import Decimal
from typing import Annotated
from typing import Literal
from typing import assert_never

from pydantic import BaseModel
from pydantic import Field

from flowstache.core.errors import UnstringifiableValueError

IMPLICIT_ITERATOR = "."


class Static(BaseModel):
    """An immutable string value."""

    model_config = {"frozen": True}

    kind: Literal["static"] = "static"
    text: str


class Bool(BaseModel):
    """A boolean value, mostly used to gate sections."""

    model_config = {"frozen": True}

    kind: Literal["bool"] = "bool"
    flag: bool


class Lambda(BaseModel):
    """A callable value invoked at render time.

    In a variable tag the function receives an empty string; in a section
    it receives the raw, unrendered section body. The result is rendered as
    a template. Results are never cached.
    """

    model_config = {"frozen": True}

    kind: Literal["lambda"] = "lambda"
    func: Callable[[str], object]

    def __call__(self, text: str) -> str:
        """Invoke the wrapped function, coercing the result to str."""
        result = self.func(text)
        if isinstance(result, str):
            return result
        return str(result)


class Scope(BaseModel):
    """A mapping of names to values.

    Each name maps to at most one value; inserting an existing name
    replaces the previous value.
    """

    kind: Literal["scope"] = "scope"
    values: dict[str, "Value"] = Field(default_factory=dict)

    def get(self, name: str) -> "Value | None":
        """Return the value bound to name, or None when absent."""
        return self.values.get(name)

    def insert(self, name: str, value: "Value") -> None:
        """Bind name to value, replacing any previous binding."""
        self.values[name] = value

    def names(self) -> list[str]:
        """Return the bound names in insertion order."""
        return list(self.values)

    def __contains__(self, name: object) -> bool:
        """Return whether name is bound in this scope."""
        return name in self.values

    def __getitem__(self, name: str) -> "Value":
        """Return the value bound to name, raising KeyError when absent."""
        return self.values[name]


class Sequence(BaseModel):
    """An ordered list of scopes, iterated by sections."""

    model_config = {"frozen": True}

    kind: Literal["sequence"] = "sequence"
    items: list[Scope] = Field(default_factory=list)


Value = Annotated[
    Static | Bool | Sequence | Scope | Lambda, Field(discriminator="kind")
]

Scope.model_rebuild()
Sequence.model_rebuild()


def truthy(value: Value | None) -> bool:
    """Decide whether a resolved value opens a section.

    Only ``Bool(False)``, an empty sequence and an unresolved name are
    falsy. A static string is truthy even when empty, and a lambda is
    always truthy.
    """
    match value:
        case None:
            return False
        case Bool(flag=flag):
            return flag
        case Sequence(items=items):
            return bool(items)
        case Static() | Scope() | Lambda():
            return True
        case _:
            assert_never(value)


def stringify(value: Value, name: str) -> str:
    """Convert a resolved value to interpolation text.

    Args:
        value: The resolved value
        name: Tag name, used in the error message

    Returns:
        The text to interpolate; booleans become "true" or "false"

    Raises:
        UnstringifiableValueError: When value is a sequence, scope or lambda

    """
    match value:
        case Static(text=text):
            return text
        case Bool(flag=flag):
            return "true" if flag else "false"
        case Sequence() | Scope() | Lambda():
            raise UnstringifiableValueError(name, value.kind)
        case _:
            assert_never(value)


def from_python(obj: object) -> Value:
    """Convert plain Python data into a context value.

    Strings, booleans and numbers become scalars, mappings and pydantic
    models become scopes, lists and tuples become sequences, and callables
    become lambdas. Mapping entries whose value is None are left out.
    Scalar list items are wrapped in a scope binding the implicit iterator
    so that ``{{.}}`` renders them.

    Raises:
        TypeError: When obj (or a nested item) has no value equivalent

    """
    match obj:
        case Static() | Bool() | Sequence() | Scope() | Lambda():
            return obj
        case str():
            return Static(text=obj)
        case bool():
            return Bool(flag=obj)
        case int() | float() | Decimal():
            return Static(text=str(obj))
        case BaseModel():
            return _scope_from_mapping(dict(obj))
        case Mapping():
            return _scope_from_mapping(obj)
        case list() | tuple():
            return Sequence(items=[_item_scope(item) for item in obj])
        case _ if callable(obj):
            return Lambda(func=obj)
    msg = f"Cannot bind {type(obj).__name__} as a template value"
    raise TypeError(msg)


def to_scope(obj: object) -> Scope:
    """Convert a mapping or pydantic model into a root scope."""
    value = from_python(obj)
    if not isinstance(value, Scope):
        msg = f"Root context must be a mapping, got {type(obj).__name__}"
        raise TypeError(msg)
    return value


def _scope_from_mapping(data: Mapping[object, object]) -> Scope:
    scope = Scope()
    for key, item in data.items():
        if item is None:
            continue
        scope.insert(str(key), from_python(item))
    return scope


def _item_scope(item: object) -> Scope:
    value = from_python(item)
    if isinstance(value, Scope):
        return value
    return Scope(values={IMPLICIT_ITERATOR: value})
