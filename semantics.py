"""
Arith abstract syntax tree and variable environment
The tree is a closed set of frozen dataclasses; the environment is the only mutable state
"""

from typing import Dict, Union
from dataclasses import dataclass
from enum import Enum
import logging


logger = logging.getLogger(__name__)


# ============================================================================
# AST NODES
# ============================================================================

class BinaryKind(Enum):
  """Arithmetic operators understood by the evaluator"""
  ADD = "+"
  SUBTRACT = "-"
  MULTIPLY = "*"
  DIVIDE = "/"

  @classmethod
  def from_symbol(cls, symbol: str) -> "BinaryKind":
    return cls(symbol)


@dataclass(frozen=True)
class Number:
  value: float

  def __str__(self) -> str:
    return f"Number({self.value})"


@dataclass(frozen=True)
class Variable:
  name: str

  def __str__(self) -> str:
    return f"Variable({self.name})"


@dataclass(frozen=True)
class BinaryOp:
  kind: BinaryKind
  left: "Node"
  right: "Node"

  def __str__(self) -> str:
    return f"{self.kind.name}({self.left}, {self.right})"


@dataclass(frozen=True)
class Assign:
  name: str
  expr: "Node"

  def __str__(self) -> str:
    return f"Assign({self.name}, {self.expr})"


@dataclass(frozen=True)
class Print:
  """The `cout << expr` statement"""
  expr: "Node"

  def __str__(self) -> str:
    return f"Print({self.expr})"


Node = Union[Number, Variable, BinaryOp, Assign, Print]


def pretty_print_ast(node: Node, indent: int = 0) -> str:
  """Pretty print a statement tree, one node per line"""
  lines = []
  # Explicit stack: long sums are deeper than the recursion limit
  pending = [(node, indent)]

  while pending:
    current, depth = pending.pop()
    prefix = "  " * depth

    if isinstance(current, BinaryOp):
      lines.append(f"{prefix}{current.kind.name}")
      pending.append((current.right, depth + 1))
      pending.append((current.left, depth + 1))
    elif isinstance(current, Assign):
      lines.append(f"{prefix}ASSIGN {current.name}")
      pending.append((current.expr, depth + 1))
    elif isinstance(current, Print):
      lines.append(f"{prefix}PRINT")
      pending.append((current.expr, depth + 1))
    else:
      lines.append(f"{prefix}{current}")

  return "\n".join(lines)


# ============================================================================
# ENVIRONMENT
# ============================================================================

class NameView:
  """Read-only membership view over an environment, handed to the parser"""

  def __init__(self, bindings: Dict[str, float]):
    self._bindings = bindings

  def __contains__(self, name: object) -> bool:
    return name in self._bindings

  def __repr__(self) -> str:
    return f"NameView({sorted(self._bindings)})"


class Environment:
  """Name to value store that lives as long as its interpreter and never shrinks"""

  def __init__(self):
    self._bindings: Dict[str, float] = {}

  def __repr__(self) -> str:
    return f"Environment({self._bindings})"

  def __contains__(self, name: object) -> bool:
    return name in self._bindings

  def define(self, name: str, value: float) -> float:
    logger.debug("define %s = %r", name, value)
    self._bindings[name] = value
    return value

  def lookup(self, name: str) -> float:
    """Raises KeyError for unknown names"""
    return self._bindings[name]

  def names(self) -> NameView:
    return NameView(self._bindings)

  def snapshot(self) -> Dict[str, float]:
    return dict(self._bindings)

