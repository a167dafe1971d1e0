"""
Typed cvar values.

A Value is a tagged scalar: boolean, integer or text. The kind travels with
the payload, so a Value can never exist without knowing what it holds.

Three renderings exist:
    display  - human form used in descriptions (true/false, raw text)
    literal  - round-trippable form used in save files (1/0, quoted text)
    token    - already-tokenized argument form (1/0, raw text)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ValueKind(Enum):
    """The three kinds a cvar may hold."""

    BOOL = "boolean"
    INT = "integer"
    STRING = "string"

    @property
    def type_name(self) -> str:
        return self.value


_PYTHON_TYPES = {
    ValueKind.BOOL: bool,
    ValueKind.INT: int,
    ValueKind.STRING: str,
}

_ZEROS = {
    ValueKind.BOOL: False,
    ValueKind.INT: 0,
    ValueKind.STRING: "",
}

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Value:
    """
    A typed scalar.

    Properties:
        kind: ValueKind tag
        data: Python payload (bool, int or str) matching the kind

    Equality compares kind and payload, so Value.of(True) never equals
    Value.of(1).
    """

    kind: ValueKind
    data: Union[bool, int, str]

    def __post_init__(self):
        expected = _PYTHON_TYPES[self.kind]
        # bool is a subclass of int, reject it explicitly for integers
        if type(self.data) is not expected:
            raise TypeError(
                f"{self.kind.type_name} value expected, got {type(self.data).__name__}"
            )

    @classmethod
    def of(cls, data: Union[bool, int, str]) -> "Value":
        """Build a Value, inferring the kind from the Python type."""
        for kind, py_type in _PYTHON_TYPES.items():
            if type(data) is py_type:
                return cls(kind, data)
        raise TypeError(f"Unsupported value type: {type(data).__name__}")

    @classmethod
    def zero(cls, kind: ValueKind) -> "Value":
        return cls(kind, _ZEROS[kind])

    def display(self) -> str:
        if self.kind is ValueKind.BOOL:
            return "true" if self.data else "false"
        return str(self.data)

    def token(self) -> str:
        """Unquoted argument form; parse_value(kind, token()) gives the value back."""
        if self.kind is ValueKind.STRING:
            return self.data
        return self.literal()

    def literal(self) -> str:
        if self.kind is ValueKind.BOOL:
            return "1" if self.data else "0"
        if self.kind is ValueKind.INT:
            return str(self.data)
        return quote(self.data)


def quote(text: str) -> str:
    """Double-quote text, escaping backslashes, quotes and line breaks."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def parse_value(kind: ValueKind, token: str) -> Value:
    """
    Parse a console token into a Value of the given kind.

    Booleans accept 1/0, true/false, yes/no and on/off in any case.
    Integers accept an optional sign followed by decimal digits.
    Strings are taken verbatim.

    Raises:
        ValueError: If the token cannot be read as the kind
    """
    if kind is ValueKind.BOOL:
        word = token.strip().lower()
        if word in _TRUE_WORDS:
            return Value(kind, True)
        if word in _FALSE_WORDS:
            return Value(kind, False)
        raise ValueError(f"not a boolean: {token!r}")
    if kind is ValueKind.INT:
        digits = token.strip()
        unsigned = digits[1:] if digits[:1] in ("+", "-") else digits
        if not unsigned.isdigit() or not unsigned.isascii():
            raise ValueError(f"not an integer: {token!r}")
        return Value(kind, int(digits))
    return Value(kind, token)


__all__ = ["ValueKind", "Value", "parse_value", "quote"]
