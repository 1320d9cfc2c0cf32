"""
Arith Line Interpreter - Main Entry Point
Runs scripts line by line or starts an interactive session
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from error_handling import ArithError, format_error
from interpreter import (
    Computed, Errored, Interpreter, Outcome, Printed,
    create_debug_interpreter, create_interpreter
)
from parsing import dump_statements, tokenize
from utilities import format_number


VERSION = "Arith v1.0.0"

logger = logging.getLogger(__name__)


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      description='Arith - arithmetic, variables and cout, one line at a time',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.txt            # Run a script
  %(prog)s -i                    # Interactive mode
  %(prog)s --tokens script.txt   # Show the tokens of every line
  %(prog)s --parse script.txt    # Show the statement trees of every line
  %(prog)s --debug script.txt    # Run with debug logging
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Arith script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize each line and show the tokens'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse each line and show the statement trees'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug logging for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def configure_logging(debug: bool) -> None:
  logging.basicConfig(
      level=logging.DEBUG if debug else logging.WARNING,
      format="%(levelname)s %(name)s: %(message)s"
  )


def source_lines(text: str) -> List[str]:
  """Trimmed, non-blank lines of a script"""
  return [line.strip() for line in text.split("\n") if line.strip()]


# ============================================================================
# SCRIPT MODE
# ============================================================================

def render_program(interpreter: Interpreter, text: str) -> str:
  """
  Run every line of a script and build the console report.

  Errors come first, one per failing line or Errored outcome, prefixed with
  the line that caused them; printed values follow, one per line.
  """
  errors = []
  printed = []

  for line in source_lines(text):
    try:
      outcomes = interpreter.interpret(line)
    except ArithError as e:
      outcomes = e.outcomes
      errors.append(f"Error for '{line}': {e.message}")
      logger.debug("line %r failed: %s", line, e.message)

    for outcome in outcomes:
      if isinstance(outcome, Printed):
        printed.append(format_number(outcome.value))
      elif isinstance(outcome, Errored):
        errors.append(f"Error for '{line}': {outcome.message}")

  return "".join(f"{entry}\n" for entry in errors + printed)


def read_script(script_path: str) -> str:
  try:
    return Path(script_path).read_text(encoding="utf-8")
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found")
    print(f"  Hint: Check the file path and make sure the file exists")
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding")
    sys.exit(1)


def run_script_file(script_path: str, debug: bool = False) -> None:
  """Run an Arith script file"""
  text = read_script(script_path)
  interpreter = create_debug_interpreter() if debug else create_interpreter()
  logger.debug("running %s", script_path)
  sys.stdout.write(render_program(interpreter, text))


def tokens_file(script_path: str) -> None:
  """Show the tokens of every line of a script"""
  for line in source_lines(read_script(script_path)):
    print(f"{line}")
    print("  " + " ".join(str(token) for token in tokenize(line)))


def parse_file(script_path: str, debug: bool = False) -> None:
  """Parse every line of a script against a running environment and show the trees"""
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  for line in source_lines(read_script(script_path)):
    print(f"{line}")
    try:
      print(dump_statements(interpreter.parse(line)))
      # Later lines may refer to names this line binds
      interpreter.interpret(line)
    except ArithError as e:
      print(format_error(e))


# ============================================================================
# INTERACTIVE MODE
# ============================================================================

def setup_readline():
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.arith_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = ["cout", ":tokens", ":parse", ":env", ":help", "exit"]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(lambda: readline.write_history_file(history_file))


def show_outcomes(outcomes: List[Outcome]) -> None:
  for outcome in outcomes:
    if isinstance(outcome, Printed):
      print(format_number(outcome.value))
    elif isinstance(outcome, Computed):
      print(f"=> {format_number(outcome.value)}")
    else:
      print(f"Error: {outcome.message}")


def run_command(interpreter: Interpreter, code: str) -> bool:
  """Handle a REPL ':' command, returns False when `code` is not one"""
  command, _, argument = code.partition(" ")
  argument = argument.strip()

  if command in (":tokens", ":parse") and not argument:
    print(f"Usage: {command} <line>")
    return True

  if command == ":tokens":
    print(" ".join(str(token) for token in tokenize(argument)))
    return True

  if command == ":parse":
    try:
      print(dump_statements(interpreter.parse(argument)))
    except ArithError as e:
      print(format_error(e))
    return True

  if code == ":env":
    bindings = interpreter.bindings()
    if bindings:
      for name, value in bindings.items():
        print(f"  {name} = {format_number(value)}")
    else:
      print("  (no variables defined)")
    return True

  if code == ":help":
    print("REPL Commands:")
    print("  :tokens <line>    - Show the tokens of a line")
    print("  :parse <line>     - Show the statement trees of a line")
    print("  :env              - Show current variables")
    print("  :help             - Show this help")
    print("  exit              - Exit REPL")
    print()
    print("Language:")
    print("  x = 5             - Assignment")
    print("  (x + 1) * 2       - Expression, shows => value")
    print("  cout << x         - Print a variable or expression")
    return True

  return False


def run_interactive_mode(debug: bool = False, input_func=input) -> None:
  """Run Arith in interactive mode"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  print()

  if input_func is input:
    setup_readline()
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  while True:
    try:
      code = input_func("arith> ").strip()
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    if code == "exit":
      break
    if not code or run_command(interpreter, code):
      continue

    try:
      show_outcomes(interpreter.interpret(code))
    except ArithError as e:
      show_outcomes(e.outcomes)
      print(format_error(e))


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for Arith"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)
  configure_logging(args.debug)

  if args.script:
    if args.tokens:
      tokens_file(args.script)
    elif args.parse:
      parse_file(args.script, debug=args.debug)
    else:
      run_script_file(args.script, debug=args.debug)

  elif args.interactive:
    run_interactive_mode(debug=args.debug)

  else:
    arg_parser.print_help()


if __name__ == "__main__":
  main()
