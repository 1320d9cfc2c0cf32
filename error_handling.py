"""
Error taxonomy for the Arith line interpreter
Every failure raised by the validator, parser or evaluator derives from ArithError
"""

from typing import List, Optional, Dict, Any


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_error_info(
    kind: str,
    message: str,
    line: Optional[str] = None,
    column: Optional[int] = None
) -> Dict:
    """Create an immutable error description"""
    return {
        'kind': kind,
        'message': message,
        'line': line,
        'column': column
    }


def format_error_info(info: Dict) -> str:
    """Format an error description with a caret under the offending column"""
    error_msg = f"{info['kind']}: {info['message']}"

    if info['line'] is not None:
        error_msg += f"\n  {info['line']}"
        if info['column']:
            error_msg += f"\n  {' ' * (info['column'] - 1)}^"

    return error_msg


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class ArithError(Exception):
    """Base class for every error raised while interpreting a line"""
    kind = "Error"

    def __init__(self, message: str, column: Optional[int] = None,
                 line: Optional[str] = None, outcomes: Optional[List[Any]] = None):
        self.message = message
        self.column = column
        self.line = line
        # Outcomes produced on the same line before the failure
        self.outcomes = outcomes or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict:
        return make_error_info(self.kind, self.message, self.line, self.column)


class ArithSyntaxError(ArithError):
    """Malformed input, raised by the validator or the parser"""
    kind = "Syntax error"


class ArithTypeError(ArithError):
    """Arithmetic or assignment on a non-numeric value"""
    kind = "Type error"


class ArithUndefinedVariableError(ArithError):
    """Read of a variable that is not in the environment"""
    kind = "Undefined variable"

    def __init__(self, name: str, column: Optional[int] = None,
                 line: Optional[str] = None, outcomes: Optional[List[Any]] = None):
        self.name = name
        super().__init__(f"variable '{name}' is not defined", column, line, outcomes)


def format_error(error: ArithError) -> str:
    """Render an ArithError the way the interactive driver shows it"""
    return format_error_info(error.to_dict())
