"""
Command line driver tests for Arith
"""

import pytest
from interpreter import create_interpreter
from main import main, render_program, run_interactive_mode
from utilities import format_number


SCRIPT = """
x = 10
y = x / 4

cout << y
cout << w
5 / 0
  cout << x * 2
"""


def scripted_input(lines):
  """input() replacement that feeds `lines` then raises EOFError"""
  pending = list(lines)

  def fake_input(prompt=""):
    if not pending:
      raise EOFError
    return pending.pop(0)

  return fake_input


class TestRenderProgram:
  """Test script mode output"""

  def test_errors_before_printed_values(self):
    report = render_program(create_interpreter(), SCRIPT)
    assert report == (
        "Error for 'cout << w': variable 'w' is not defined\n"
        "Error for '5 / 0': division by zero\n"
        "2.5\n"
        "20\n"
    )

  def test_computed_values_are_not_shown(self):
    assert render_program(create_interpreter(), "1 + 1\n") == ""

  def test_printed_values_before_a_failure_are_kept(self):
    interpreter = create_interpreter()
    interpreter.env.define("s", "text")
    report = render_program(interpreter, "cout << 1 s + 1")
    assert report == (
        "Error for 'cout << 1 s + 1': arithmetic requires numeric operands: "
        "cannot add str and float\n"
        "1\n"
    )

  def test_too_deep_line_does_not_stop_the_script(self):
    deep = "(" * 5000 + "1" + ")" * 5000
    report = render_program(create_interpreter(), f"{deep}\ncout << 7\n")
    assert report.startswith("Error for '(((")
    assert report.endswith(": expression too deeply nested\n7\n")


class TestFormatNumber:
  """Test number display"""

  def test_integral_and_fractional(self):
    assert format_number(14.0) == "14"
    assert format_number(-3.0) == "-3"
    assert format_number(2.5) == "2.5"

  def test_special_values(self):
    assert format_number(float("inf")) == "Infinity"
    assert format_number(float("-inf")) == "-Infinity"
    assert format_number(float("nan")) == "NaN"


class TestMain:
  """Test the command line entry point"""

  def test_run_script(self, tmp_path, capsys):
    script = tmp_path / "program.txt"
    script.write_text("a = 2\ncout << a * 3\n")
    main([str(script)])
    assert capsys.readouterr().out == "6\n"

  def test_tokens_flag(self, tmp_path, capsys):
    script = tmp_path / "program.txt"
    script.write_text("cout << 1\n")
    main(["--tokens", str(script)])
    out = capsys.readouterr().out
    assert "WORD(cout) OPERATOR(<) OPERATOR(<) WORD(1)" in out

  def test_parse_flag_tracks_bindings(self, tmp_path, capsys):
    script = tmp_path / "program.txt"
    script.write_text("a = 2\na + 1\n")
    main(["--parse", str(script)])
    out = capsys.readouterr().out
    assert "ASSIGN a" in out
    assert "Variable(a)" in out

  def test_missing_script(self, tmp_path, capsys):
    with pytest.raises(SystemExit):
      main([str(tmp_path / "missing.txt")])
    assert "not found" in capsys.readouterr().out


class TestInteractiveMode:
  """Test the REPL loop"""

  def test_session(self, capsys):
    run_interactive_mode(input_func=scripted_input([
        "x = 3",
        "x * 2",
        "cout << x",
        "cout << nope",
        ":env",
        "1 +",
        "exit",
        "never reached",
    ]))
    out = capsys.readouterr().out
    assert "=> 6\n" in out
    assert "\n3\n" in out
    assert "Error: variable 'nope' is not defined" in out
    assert "  x = 3" in out
    assert "Syntax error: expected a number" in out
    assert "never reached" not in out

  def test_end_of_input(self, capsys):
    run_interactive_mode(input_func=scripted_input([]))
    assert "Goodbye!" in capsys.readouterr().out

  def test_commands(self, capsys):
    run_interactive_mode(input_func=scripted_input([
        ":tokens 1 + x",
        ":parse 2 * 3",
        ":parse y",
        ":help",
        "exit",
    ]))
    out = capsys.readouterr().out
    assert "WORD(1) OPERATOR(+) WORD(x)" in out
    assert "MULTIPLY\n  Number(2.0)\n  Number(3.0)" in out
    assert "Syntax error: expected a number" in out
    assert "REPL Commands:" in out

  def test_commands_without_argument(self, capsys):
    run_interactive_mode(input_func=scripted_input([":tokens", ":parse", "exit"]))
    out = capsys.readouterr().out
    assert "Usage: :tokens <line>" in out
    assert "Usage: :parse <line>" in out
    assert "expected a number" not in out
