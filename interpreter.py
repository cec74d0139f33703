"""
Stacklet Interpreter
Executes a flat command list against one variable table and one operand stack
"""

from typing import Dict, List, Optional

from commands import Command, SetVar, GetVar, PushVar, Push, Pop, Add
from error_handling import TypeMismatch, MissingVariable, EmptyStack
from parsing import create_parser
from values import Value, Int, String, NOTHING, wrap_i64


# ============================================================================
# VALUE OPERATIONS
# ============================================================================

def add_values(lhs: Value, rhs: Value) -> Value:
  """Combine two values: Int sum, or String concatenation lhs then rhs"""
  if isinstance(lhs, Int) and isinstance(rhs, Int):
    return Int(wrap_i64(lhs.value + rhs.value))
  if isinstance(lhs, String) and isinstance(rhs, String):
    return String(lhs.value + rhs.value)
  raise TypeMismatch(f"Cannot add {lhs.type_name} and {rhs.type_name}")


# ============================================================================
# EVALUATOR
# ============================================================================

class Evaluator:
  """Owns the variable table and operand stack for a single run"""

  def __init__(self, debug: bool = False):
    self.debug = debug
    self.vars: Dict[str, Value] = {}
    self.stack: List[Value] = []

  def pop(self) -> Value:
    if not self.stack:
      raise EmptyStack()
    return self.stack.pop()

  def lookup(self, name: str) -> Value:
    try:
      return self.vars[name]
    except KeyError:
      raise MissingVariable(name) from None

  def evaluate(self, commands: List[Command]) -> Value:
    """
    Run every command in order and return the pending output.
    The first failing command aborts the run; effects of earlier commands stay.
    """
    output = NOTHING

    for command in commands:
      result = self.execute(command)
      if result is not None:
        output = result

      if self.debug:
        print(f"{str(command):<24} stack={self.stack!r}")

    return output

  def execute(self, command: Command) -> Optional[Value]:
    """Execute one command, returning the new pending output if it sets one"""
    if isinstance(command, SetVar):
      self.vars[command.name] = command.value
    elif isinstance(command, GetVar):
      return self.lookup(command.name)
    elif isinstance(command, PushVar):
      self.stack.append(self.lookup(command.name))
    elif isinstance(command, Push):
      self.stack.append(command.value)
    elif isinstance(command, Pop):
      return self.pop()
    elif isinstance(command, Add):
      # First pop is the left operand: "push a, push b, add" yields b + a
      lhs = self.pop()
      rhs = self.pop()
      self.stack.append(add_values(lhs, rhs))
    else:
      raise TypeError(f"Unknown command type: {type(command).__name__}")
    return None


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False) -> Evaluator:
  """Factory function returning a fresh evaluator"""
  return Evaluator(debug=debug)


def create_debug_interpreter() -> Evaluator:
  """Factory function returning a debug evaluator"""
  return create_interpreter(debug=True)


def run_source(text: str, filename: str = "<input>", debug: bool = False) -> Value:
  """Parse and evaluate source text on a fresh evaluator"""
  commands = create_parser(debug).parse_string(text, filename)
  return create_interpreter(debug).evaluate(commands)
