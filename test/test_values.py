"""
Value model and error presentation tests for Stacklet
"""

import dataclasses

import pytest
from error_handling import (
    SourceSpan, UnknownCommand, EmptyStack, MismatchNumParams, TypeMismatch,
    get_context_lines, format_parse_error, make_parse_error, generate_suggestions
)
from values import Nothing, Int, String, NOTHING, INT_MIN, INT_MAX, wrap_i64


class TestValues:
  """Test value construction, equality and rendering"""

  def test_debug_rendering(self):
    assert repr(NOTHING) == "Nothing"
    assert repr(Int(30)) == "Int(30)"
    assert repr(Int(-1)) == "Int(-1)"
    assert repr(String("hello")) == 'String("hello")'
    assert repr(String('say "hi"\\')) == 'String("say \\"hi\\"\\\\")'

  def test_debug_rendering_escapes_non_printables(self):
    assert repr(String("a\x00b")) == 'String("a\\0b")'
    assert repr(String("\t\r\n")) == 'String("\\t\\r\\n")'
    assert repr(String("\x0b\x7f")) == 'String("\\u{b}\\u{7f}")'
    assert repr(String("ünï")) == 'String("ünï")'

  def test_structural_equality(self):
    assert Int(1) == Int(1)
    assert String("a") == String("a")
    assert Nothing() == NOTHING
    assert Int(1) != String("1")
    assert Int(0) != NOTHING

  def test_values_are_immutable(self):
    with pytest.raises(dataclasses.FrozenInstanceError):
      Int(1).value = 2

  def test_int_range(self):
    assert Int(INT_MAX).value == INT_MAX
    with pytest.raises(ValueError):
      Int(INT_MAX + 1)
    with pytest.raises(ValueError):
      Int(INT_MIN - 1)

  def test_int_rejects_other_payloads(self):
    with pytest.raises(TypeError):
      Int(True)
    with pytest.raises(TypeError):
      Int("3")

  def test_wrap_i64(self):
    assert wrap_i64(INT_MAX + 1) == INT_MIN
    assert wrap_i64(INT_MIN - 1) == INT_MAX
    assert wrap_i64(-5) == -5


class TestErrorPresentation:
  """Test error formatting helpers"""

  def test_context_lines(self):
    context = get_context_lines("push 1\n\npush oops", 3, 6)
    assert context == (
        "   1: push 1\n"
        "   2: \n"
        "   3: push oops\n"
        "           ^ Error here"
    )

  def test_format_parse_error(self):
    text = format_parse_error(make_parse_error("Bad thing", 4, 2, got="x", suggestions=["Fix it"]))
    assert text == (
        "Parse error at line 4, column 2:\n"
        "  Bad thing\n"
        "  Got: x\n"
        "  Suggestions:\n"
        "    - Fix it\n"
    )

  def test_suggestions(self):
    assert "Did you mean 'pop'?" in generate_suggestions(UnknownCommand("popp"), "popp")
    assert "Keywords are lowercase" in generate_suggestions(UnknownCommand("Add"), "Add")
    assert "Usage: pushvar NAME" in generate_suggestions(MismatchNumParams("pushvar"), None)

  def test_range_hint_only_for_ascii_integers(self):
    hint = "Integers must fit in a signed 64-bit range"
    assert hint in generate_suggestions(TypeMismatch("bad"), "-99999999999999999999")
    assert hint not in generate_suggestions(TypeMismatch("bad"), "²")
    assert hint not in generate_suggestions(TypeMismatch("bad"), "١٢")

  def test_unlocated_error_is_plain_message(self):
    assert str(EmptyStack()) == "Stack is empty"

  def test_locate_returns_error(self):
    error = UnknownCommand("x")
    assert error.locate(SourceSpan("f", 1, 1, "x")) is error
    assert str(error.span) == "f:1:1"
