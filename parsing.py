"""
Stacklet Parser
One instruction per line, whitespace-separated tokens, literals checked at parse time
"""

from dataclasses import replace
from typing import List, Optional, Tuple

try:
    from pyparsing import ParseException, Regex
except ImportError:
    raise ImportError("pyparsing library not found. Install with: pip install pyparsing")

from commands import SIGNATURES, Command, SetVar, GetVar, PushVar, Push, Pop, Add
from error_handling import SourceSpan, MismatchNumParams, UnknownCommand, TypeMismatch
from values import Value, Int, String, INT_MIN, INT_MAX


# ASCII whitespace as split on by the language; vertical tab is not a separator
WHITESPACE = " \t\n\r\f"

COMMAND_TYPES = {
    "set": SetVar,
    "get": GetVar,
    "push": Push,
    "pushvar": PushVar,
    "pop": Pop,
    "add": Add,
}


class StackletGrammar:
    """Token and literal grammar definition using pyparsing"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._setup_grammar()

    def _setup_grammar(self):
        # Any run of non-separator characters; names are not restricted further
        token = Regex(r"[^ \t\n\r\f]+").set_name("token")
        token.set_whitespace_chars(WHITESPACE)
        token.parse_with_tabs()

        # "..." with at least the two quotes; inner quotes are kept verbatim
        string_literal = Regex(r'".*"').set_name("string literal")
        string_literal.set_parse_action(lambda t: String(t[0][1:-1]))

        int_literal = Regex(r"[+-]?[0-9]+").set_name("integer literal")
        int_literal.set_parse_action(self._make_int)

        self.token = token
        self.string_literal = string_literal
        self.int_literal = int_literal
        self.value_literal = (string_literal | int_literal).set_name("value literal")

    @staticmethod
    def _make_int(instring: str, loc: int, tokens) -> Int:
        number = int(tokens[0])
        if not INT_MIN <= number <= INT_MAX:
            raise ParseException(instring, loc, "integer literal out of 64-bit range")
        return Int(number)

    def tokenize_line(self, line: str) -> List[Tuple[int, str]]:
        """Split one line into (column, token) pairs, columns 1-based"""
        return [(start + 1, tokens[0]) for tokens, start, _ in self.token.scan_string(line)]

    def parse_value(self, text: str) -> Value:
        """Parse a single value literal token"""
        try:
            value = self.value_literal.parse_string(text, parse_all=True)[0]
        except ParseException as e:
            if self.debug:
                print(f"Literal {text!r} rejected: {e}")
            raise TypeMismatch(f"Invalid value literal {text!r}") from e

        if self.debug:
            print(f"Literal {text!r} -> {value!r}")
        return value


class StackletParser:
    """Main Stacklet parser turning source text into commands"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.grammar = StackletGrammar(debug)

    def parse_file(self, filepath: str) -> List[Command]:
        """Parse a Stacklet source file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_string(content, filepath)

    def parse_string(self, text: str, filename: str = "<input>") -> List[Command]:
        """Parse Stacklet source code from string"""
        commands = []

        for line_num, line in enumerate(text.split('\n'), 1):
            tokens = self.grammar.tokenize_line(line)
            if not tokens:
                continue

            if self.debug:
                print(f"Line {line_num}: {[token for _, token in tokens]}")

            commands.append(self.parse_line(tokens, SourceSpan(filename, line_num, text=line), text))

        if self.debug:
            print(f"Parsed {len(commands)} commands")

        return commands

    def parse_line(self, tokens: List[Tuple[int, str]], span: Optional[SourceSpan] = None,
                   source_text: str = "") -> Command:
        """Build the command for one tokenized, non-blank line"""
        span = span or SourceSpan("<input>", 1)
        keyword_col, keyword = tokens[0]

        if keyword not in COMMAND_TYPES:
            raise UnknownCommand(keyword).locate(
                replace(span, column=keyword_col, text=keyword), source_text)

        slots = SIGNATURES[keyword]
        if len(tokens) - 1 != len(slots):
            raise MismatchNumParams(keyword).locate(
                replace(span, column=keyword_col), source_text)

        args = []
        for slot, (column, operand) in zip(slots, tokens[1:]):
            if slot == "VALUE":
                try:
                    operand = self.grammar.parse_value(operand)
                except TypeMismatch as e:
                    raise e.locate(replace(span, column=column, text=operand), source_text)
            args.append(operand)

        return COMMAND_TYPES[keyword](*args)

    def tokenize(self, text: str) -> List[List[str]]:
        """Tokenize Stacklet source code, one token list per non-blank line"""
        token_lines = []
        for line in text.split('\n'):
            tokens = [token for _, token in self.grammar.tokenize_line(line)]
            if tokens:
                token_lines.append(tokens)
        return token_lines


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> StackletParser:
    """Create a Stacklet parser"""
    return StackletParser(debug=debug)


def create_debug_parser() -> StackletParser:
    """Create a Stacklet parser with debug enabled"""
    return StackletParser(debug=True)


def parse(text: str, filename: str = "<input>") -> List[Command]:
    """Parse source text with a fresh parser"""
    return create_parser().parse_string(text, filename)


def parse_value(text: str) -> Value:
    """Parse a single value literal token"""
    return StackletGrammar().parse_value(text)


def pretty_print_commands(commands: List[Command]) -> str:
    """Pretty print a command list for debugging"""
    return "".join(f"{i:4d}: {command}\n" for i, command in enumerate(commands, 1))
