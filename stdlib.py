"""
Arith Standard Library
The four arithmetic operators, with IEEE-754 division
"""

from typing import Any, Callable, Dict
import math
import operator

from semantics import BinaryKind
from utilities import is_number, operation_error


# ============================================================================
# OPERATOR FACTORY
# ============================================================================

def binary_arithmetic_op(
  op: Callable[[float, float], float],
  op_name: str
) -> Callable[[Any, Any], float]:
  """
  Factory for binary arithmetic operations

  Both operands must be numeric; the result is always a float.
  """
  def arithmetic(x: Any, y: Any) -> float:
    if not is_number(x) or not is_number(y):
      raise operation_error(op_name, x, y)
    return float(op(x, y))

  return arithmetic


def ieee_truediv(x: float, y: float) -> float:
  """Division that yields inf or nan for a zero divisor instead of raising"""
  if y == 0:
    if x == 0 or math.isnan(x):
      return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)
  return x / y


# ============================================================================
# ARITHMETIC
# ============================================================================

arith_add = binary_arithmetic_op(operator.add, "add")
arith_sub = binary_arithmetic_op(operator.sub, "subtract")
arith_mul = binary_arithmetic_op(operator.mul, "multiply")
arith_div = binary_arithmetic_op(ieee_truediv, "divide")


OPERATIONS: Dict[BinaryKind, Callable[[Any, Any], float]] = {
  BinaryKind.ADD: arith_add,
  BinaryKind.SUBTRACT: arith_sub,
  BinaryKind.MULTIPLY: arith_mul,
  BinaryKind.DIVIDE: arith_div,
}


def apply_operation(kind: BinaryKind, x: Any, y: Any) -> float:
  return OPERATIONS[kind](x, y)
