"""
Error taxonomy and error presentation for Stacklet
Every error is fatal to the parse or evaluate call that raised it
"""

import re
from dataclasses import dataclass
from difflib import get_close_matches
from typing import List, Optional, Dict

from commands import SIGNATURES, usage


@dataclass(frozen=True)
class SourceSpan:
    """Source location of a single line"""
    filename: str
    line: int
    column: int = 1
    text: str = ""

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_parse_error(
    message: str,
    line: int,
    column: int,
    got: Optional[str] = None,
    context: Optional[str] = None,
    suggestions: Optional[List[str]] = None
) -> Dict:
    """Create an immutable parse error structure"""
    return {
        'message': message,
        'line': line,
        'column': column,
        'got': got,
        'context': context,
        'suggestions': suggestions or []
    }


def format_parse_error(error: Dict) -> str:
    """Format parse error as string"""
    error_msg = f"Parse error at line {error['line']}, column {error['column']}:\n"
    error_msg += f"  {error['message']}\n"

    if error['got']:
        error_msg += f"  Got: {error['got']}\n"

    if error['context']:
        error_msg += f"  Context:\n{error['context']}\n"

    if error['suggestions']:
        error_msg += "  Suggestions:\n"
        for suggestion in error['suggestions']:
            error_msg += f"    - {suggestion}\n"

    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 2) -> str:
    """Get context lines around the error"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)


def generate_suggestions(error: 'StackletError', got: Optional[str]) -> List[str]:
    """Generate helpful suggestions based on the error"""
    suggestions = []

    if isinstance(error, UnknownCommand):
        close = get_close_matches(error.command, list(SIGNATURES), n=1)
        if close:
            suggestions.append(f"Did you mean '{close[0]}'?")
        if error.command.lower() in SIGNATURES and error.command != error.command.lower():
            suggestions.append("Keywords are lowercase")

    if isinstance(error, MismatchNumParams) and error.keyword in SIGNATURES:
        suggestions.append(f"Usage: {usage(error.keyword)}")

    if got and '"' in got:
        suggestions.append("String literals cannot contain whitespace or escapes")

    if isinstance(error, TypeMismatch) and got and re.fullmatch(r"[+-]?[0-9]+", got):
        suggestions.append("Integers must fit in a signed 64-bit range")

    return suggestions


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class StackletError(Exception):
    """Base of the closed Stacklet error set"""

    def __init__(self, message: str, span: Optional[SourceSpan] = None):
        self.message = message
        self.span = span
        self.context = ""
        super().__init__(message)

    def locate(self, span: SourceSpan, source_text: str = "") -> 'StackletError':
        """Attach a source location, returning self for re-raising"""
        self.span = span
        if source_text:
            self.context = get_context_lines(source_text, span.line, span.column)
        return self

    def __str__(self) -> str:
        if self.span is None:
            return self.message
        got = self.span.text.strip() or None
        return format_parse_error(make_parse_error(
            self.message,
            self.span.line,
            self.span.column,
            got=got,
            context=self.context or None,
            suggestions=generate_suggestions(self, got)
        )).rstrip('\n')


class StackletParseError(StackletError):
    """Raised while turning text into commands"""


class StackletRuntimeError(StackletError):
    """Raised while executing commands"""


class MismatchNumParams(StackletParseError):
    def __init__(self, keyword: str, span: Optional[SourceSpan] = None):
        self.keyword = keyword
        super().__init__(f"Wrong number of parameters for '{keyword}'", span)


class UnknownCommand(StackletParseError):
    def __init__(self, command: str, span: Optional[SourceSpan] = None):
        self.command = command
        super().__init__(f"Unknown command '{command}'", span)


class TypeMismatch(StackletParseError, StackletRuntimeError):
    """Bad literal syntax at parse time, or incompatible operands at run time"""


class MissingVariable(StackletRuntimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing variable '{name}'")


class EmptyStack(StackletRuntimeError):
    def __init__(self, message: str = "Stack is empty"):
        super().__init__(message)
