"""
Stacklet runtime values
Nothing, Int and String - immutable, compared structurally
"""

from dataclasses import dataclass


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def wrap_i64(number: int) -> int:
    """Wrap an arbitrary Python int into signed 64-bit range"""
    return (number - INT_MIN) % (2 ** 64) + INT_MIN


ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t', '\0': '\\0'}


def escape_text(text: str) -> str:
    """Escape text for the debug form; other non-printables become \\u{hex}"""
    return "".join(
        ESCAPES.get(ch) or (ch if ch.isprintable() else f"\\u{{{ord(ch):x}}}")
        for ch in text
    )


class Value:
    """Base of all Stacklet values"""
    type_name = "Value"


@dataclass(frozen=True)
class Nothing(Value):
    """Unit value, the result of a program that never produced one"""
    type_name = "Nothing"

    def __repr__(self) -> str:
        return "Nothing"


@dataclass(frozen=True)
class Int(Value):
    """Signed 64-bit integer"""
    value: int
    type_name = "Int"

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Int payload must be an int, got {type(self.value).__name__}")
        if not INT_MIN <= self.value <= INT_MAX:
            raise ValueError(f"Int payload {self.value} is outside the 64-bit range")

    def __repr__(self) -> str:
        return f"Int({self.value})"


@dataclass(frozen=True)
class String(Value):
    """Owned text"""
    value: str
    type_name = "String"

    def __repr__(self) -> str:
        return f'String("{escape_text(self.value)}")'


NOTHING = Nothing()
