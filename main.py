"""
Stacklet - Main Entry Point
Runs line-oriented stack programs and prints the final value
"""

import sys
import argparse
import traceback
from typing import List, Optional

from parsing import create_parser, create_debug_parser, pretty_print_commands
from interpreter import create_interpreter, create_debug_interpreter
from error_handling import StackletParseError, StackletRuntimeError


VERSION = "0.1.0"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='stacklet',
      description='Stacklet - a minimal line-oriented stack language',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.stk              # Run a script and print its result
  %(prog)s a.stk b.stk             # Run each script on a fresh evaluator
  %(prog)s --parse script.stk      # Parse and show commands
  %(prog)s --debug script.stk      # Run with a command trace
        """
  )

  parser.add_argument(
      'scripts',
      nargs='+',
      metavar='script',
      help='Stacklet script file(s) to execute'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show commands (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=f'Stacklet v{VERSION}'
  )

  return parser


def load_commands(script_path: str, debug: bool = False):
  """Parse a script file, exiting with status 1 on any failure"""
  parser = create_debug_parser() if debug else create_parser()

  try:
    return parser.parse_file(script_path)
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found")
    print(f"  Hint: Check the file path and make sure the file exists")
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    print(f"  Hint: Make sure you have read permissions for this file")
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding")
    sys.exit(1)
  except StackletParseError as e:
    print(f"Parse error in '{script_path}':\n{e}")
    sys.exit(1)
  except OSError as e:
    print(f"Error: Cannot read '{script_path}': {e}")
    print(f"  Hint: Make sure the path names a regular, readable file")
    sys.exit(1)
  except Exception as e:
    print(f"Unexpected error while processing '{script_path}': {e}")
    if debug:
      traceback.print_exc()
    sys.exit(1)


def parse_file(script_path: str, debug: bool = False) -> None:
  """Parse a script file and show the commands"""
  commands = load_commands(script_path, debug)

  print(f"Parsed {len(commands)} commands from {script_path}:")
  print(pretty_print_commands(commands), end='')


def run_script_file(script_path: str, debug: bool = False) -> None:
  """Run a script file on a fresh evaluator and print the result"""
  commands = load_commands(script_path, debug)
  evaluator = create_debug_interpreter() if debug else create_interpreter()

  try:
    result = evaluator.evaluate(commands)
  except StackletRuntimeError as e:
    print(f"Runtime error in '{script_path}': {e}")
    if debug:
      print(f"  Stack at error: {evaluator.stack!r}")
      print(f"  Variables at error: {evaluator.vars!r}")
    sys.exit(1)
  except Exception as e:
    print(f"Unexpected error while executing '{script_path}': {e}")
    if debug:
      traceback.print_exc()
    sys.exit(1)

  print(repr(result))


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for Stacklet"""
  args = create_arg_parser().parse_args(argv)

  for script in args.scripts:
    if args.parse:
      parse_file(script, debug=args.debug)
    else:
      run_script_file(script, debug=args.debug)


if __name__ == "__main__":
  main()
