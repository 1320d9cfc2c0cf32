"""
Utilities module for the Arith interpreter
Value checks, error builders and number display shared by the evaluator and the CLI
"""

from typing import Any
import math

from error_handling import ArithTypeError


# ==================== VALUE CHECKS ====================

def is_number(val: Any) -> bool:
  """
  Check whether a runtime value is numeric

  Booleans are rejected even though Python treats them as ints.
  """
  return isinstance(val, (int, float)) and not isinstance(val, bool)


# ==================== ERROR MESSAGE BUILDERS ====================

def operation_error(op_name: str, left: Any, right: Any) -> ArithTypeError:
  """
  Generate an arithmetic operand error

  Args:
    op_name: Operation name
    left: Left operand value
    right: Right operand value

  Returns:
    ArithTypeError with formatted message
  """
  return ArithTypeError(
    f"arithmetic requires numeric operands: cannot {op_name} "
    f"{type(left).__name__} and {type(right).__name__}"
  )


def assignment_error(name: str, value: Any) -> ArithTypeError:
  return ArithTypeError(
    f"assignment requires a numeric value: cannot assign {type(value).__name__} to '{name}'"
  )


# ==================== DISPLAY ====================

def format_number(value: float) -> str:
  """
  Render a value the way the console shows numbers

  Examples:
    format_number(14.0) -> "14"
    format_number(2.5) -> "2.5"
    format_number(float("inf")) -> "Infinity"
  """
  if math.isnan(value):
    return "NaN"
  if math.isinf(value):
    return "Infinity" if value > 0 else "-Infinity"
  if float(value).is_integer() and abs(value) < 1e21:
    return str(int(value))
  return repr(float(value))
