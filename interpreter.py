"""
Arith Interpreter
Tree-walking evaluator and the line-oriented interpreter facade
"""

from typing import Callable, Dict, List, Optional, Union
from dataclasses import dataclass
import logging

from error_handling import ArithError, ArithSyntaxError, ArithUndefinedVariableError
from parsing import ArithParser, create_parser
from semantics import Assign, BinaryOp, Environment, Node, Number, Print, Variable
from stdlib import apply_operation
from utilities import assignment_error, is_number


logger = logging.getLogger(__name__)


# ============================================================================
# OUTCOMES
# ============================================================================

@dataclass(frozen=True)
class Printed:
  """Value written by a `cout <<` statement"""
  value: float


@dataclass(frozen=True)
class Computed:
  """Value of a bare expression statement"""
  value: float


@dataclass(frozen=True)
class Errored:
  """Recoverable error reported in-band, the rest of the line still runs"""
  message: str


Outcome = Union[Printed, Computed, Errored]


# ============================================================================
# EVALUATOR
# ============================================================================

class Evaluator:
  """Evaluates statement trees against a mutable environment"""

  def __init__(self, env: Environment):
    self.env = env
    self._dispatch: Dict[type, Callable[[Node], float]] = {
        Number: self._eval_number,
        Variable: self._eval_variable,
        BinaryOp: self._eval_binary_op,
        Assign: self._eval_assign,
    }

  def evaluate(self, node: Node) -> float:
    """Evaluate an expression or assignment to its numeric value"""
    handler = self._dispatch.get(type(node))
    if handler is None:
      raise ValueError(f"Cannot evaluate {type(node).__name__} as an expression")
    return handler(node)

  def _eval_number(self, node: Number) -> float:
    return node.value

  def _eval_variable(self, node: Variable) -> float:
    if node.name not in self.env:
      raise ArithUndefinedVariableError(node.name)
    return self.env.lookup(node.name)

  def _eval_binary_op(self, node: BinaryOp) -> float:
    # Sums and products nest on the left, walk that spine without recursing
    spine = []
    while isinstance(node, BinaryOp):
      spine.append(node)
      node = node.left

    value = self.evaluate(node)
    for op in reversed(spine):
      value = apply_operation(op.kind, value, self.evaluate(op.right))
    return value

  def _eval_assign(self, node: Assign) -> float:
    value = self.evaluate(node.expr)
    if not is_number(value):
      raise assignment_error(node.name, value)
    return self.env.define(node.name, value)

  def print_statement(self, node: Print) -> Outcome:
    """Evaluate a print; an unbound bare name is reported, not raised"""
    if isinstance(node.expr, Variable) and node.expr.name not in self.env:
      return Errored(f"variable '{node.expr.name}' is not defined")
    return Printed(self.evaluate(node.expr))

  def run_statement(self, node: Node) -> Optional[Outcome]:
    """Evaluate one top-level statement; assignments produce no outcome"""
    if isinstance(node, Print):
      return self.print_statement(node)
    if isinstance(node, Assign):
      self.evaluate(node)
      return None
    return Computed(self.evaluate(node))


def evaluate(nodes: List[Node], env: Environment) -> List[Outcome]:
  """
  Evaluate the statements of one line in order.

  A failure stops the remaining statements; outcomes produced before it are
  attached to the raised error as `outcomes`.
  """
  evaluator = Evaluator(env)
  outcomes: List[Outcome] = []

  for node in nodes:
    try:
      outcome = evaluator.run_statement(node)
    except ArithError as e:
      e.outcomes = outcomes
      raise
    except RecursionError:
      raise ArithSyntaxError("expression too deeply nested", outcomes=outcomes) from None
    if outcome is not None:
      outcomes.append(outcome)

  logger.debug("outcomes: %s", outcomes)
  return outcomes


# ============================================================================
# INTERPRETER
# ============================================================================

class Interpreter:
  """One variable environment plus the line pipeline: validate, tokenize, parse, evaluate"""

  def __init__(self, parser: Optional[ArithParser] = None, debug: bool = False):
    self.env = Environment()
    self.parser = parser or create_parser()
    self.debug = debug

  def parse(self, line: str) -> List[Node]:
    return self.parser.parse_line(line, self.env.names())

  def interpret(self, line: str) -> List[Outcome]:
    try:
      statements = self.parse(line)
      outcomes = evaluate(statements, self.env)
    except ArithError as e:
      e.line = line
      raise
    finally:
      if self.debug:
        logger.debug("environment after %r: %s", line, self.env.snapshot())
    return outcomes

  def bindings(self) -> Dict[str, float]:
    return self.env.snapshot()


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False) -> Interpreter:
  """Factory function returning a fresh interpreter with an empty environment"""
  return Interpreter(create_parser(), debug=debug)


def create_debug_interpreter() -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True)
