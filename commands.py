"""
Stacklet commands - one variant per instruction
Produced once by the parser, read-only afterwards
"""

from dataclasses import dataclass

from values import Value, Int, String


# Operand slots per keyword; a line carries exactly these tokens after the keyword
SIGNATURES = {
    "set": ("NAME", "VALUE"),
    "get": ("NAME",),
    "push": ("VALUE",),
    "pushvar": ("NAME",),
    "pop": (),
    "add": (),
}


def usage(keyword: str) -> str:
    return " ".join((keyword,) + SIGNATURES[keyword])


def literal_text(value: Value) -> str:
    """Render a value back into the literal syntax the parser accepts"""
    if isinstance(value, Int):
        return str(value.value)
    if isinstance(value, String):
        return f'"{value.value}"'
    raise TypeError(f"{value!r} has no literal form")


class Command:
    """Base of all Stacklet commands"""
    keyword = ""

    def __str__(self) -> str:
        return self.keyword


@dataclass(frozen=True)
class SetVar(Command):
    name: str
    value: Value
    keyword = "set"

    def __str__(self) -> str:
        return f"set {self.name} {literal_text(self.value)}"


@dataclass(frozen=True)
class GetVar(Command):
    name: str
    keyword = "get"

    def __str__(self) -> str:
        return f"get {self.name}"


@dataclass(frozen=True)
class PushVar(Command):
    name: str
    keyword = "pushvar"

    def __str__(self) -> str:
        return f"pushvar {self.name}"


@dataclass(frozen=True)
class Push(Command):
    value: Value
    keyword = "push"

    def __str__(self) -> str:
        return f"push {literal_text(self.value)}"


@dataclass(frozen=True)
class Pop(Command):
    keyword = "pop"


@dataclass(frozen=True)
class Add(Command):
    keyword = "add"
