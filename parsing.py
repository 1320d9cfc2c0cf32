"""
Arith Language Parser
Line tokenizer, pre-parse validator and recursive-descent parser
"""

from typing import Container, List, Optional, Sequence
from dataclasses import dataclass
import logging

from pyparsing import Regex

from error_handling import ArithSyntaxError
from semantics import (
    Assign, BinaryKind, BinaryOp, Node, Number, Print, Variable, pretty_print_ast
)


logger = logging.getLogger(__name__)

# Lexical classes of a WORD token
NUMBER_LITERAL = Regex(r"-?[0-9]+(\.[0-9]+)?")
IDENTIFIER = Regex(r"[a-zA-Z_][a-zA-Z0-9_]*")

# Textual guards applied to a raw line before it is tokenized
TRAILING_DIVISION = Regex(r"/\s*$")
DIVISION_BY_ZERO = Regex(r"/\s*0")

PRINT_KEYWORD = "cout"


def is_number_literal(text: str) -> bool:
    return NUMBER_LITERAL.matches(text, parse_all=True)


def is_identifier(text: Optional[str]) -> bool:
    if not text:
        return False
    return IDENTIFIER.matches(text, parse_all=True)


@dataclass(frozen=True)
class Token:
    """Arith token with the 1-based column it starts at"""
    type: str
    value: str
    column: int

    def __str__(self) -> str:
        return f"{self.type}({self.value})"


# ============================================================================
# TOKENIZER
# ============================================================================

class Tokenizer:
    """Splits one line into WORD, OPERATOR, DELIMITER and OTHER tokens"""

    operators = {'+', '-', '*', '/', '=', '<', '>'}
    delimiters = {'(', ')', ','}

    def __init__(self):
        self._tokens: List[Token] = []
        self._buffer = ""
        self._start = 0

    def tokenize(self, line: str) -> List[Token]:
        self._tokens = []
        self._buffer = ""

        for pos, char in enumerate(line):
            if self._is_word_char(char):
                self._append(char, pos)
            elif char == '.' and self._buffer_is_integer():
                # Decimal point inside a numeric run
                self._append(char, pos)
            elif char == '-' and pos + 1 < len(line) and self._is_word_char(line[pos + 1]):
                # Glued unary minus starts the following run
                self._flush()
                self._append(char, pos)
            elif char in self.operators or char in self.delimiters or char == ' ':
                self._flush()
                if char != ' ':
                    self._emit(self._symbol_type(char), char, pos)
            else:
                self._flush()
                self._emit("OTHER", char, pos)

        self._flush()
        return self._tokens

    def _symbol_type(self, char: str) -> str:
        return "OPERATOR" if char in self.operators else "DELIMITER"

    @staticmethod
    def _is_word_char(char: str) -> bool:
        return char == '_' or (char.isascii() and char.isalnum())

    def _buffer_is_integer(self) -> bool:
        digits = self._buffer[1:] if self._buffer.startswith('-') else self._buffer
        return digits.isdigit()

    def _append(self, char: str, pos: int) -> None:
        if not self._buffer:
            self._start = pos
        self._buffer += char

    def _flush(self) -> None:
        if self._buffer:
            self._emit("WORD", self._buffer, self._start)
            self._buffer = ""

    def _emit(self, token_type: str, value: str, pos: int) -> None:
        self._tokens.append(Token(token_type, value, pos + 1))


def tokenize(line: str) -> List[Token]:
    """Tokenize one line of Arith source"""
    return Tokenizer().tokenize(line)


# ============================================================================
# VALIDATOR
# ============================================================================

def _first_match(pattern: Regex, line: str) -> Optional[int]:
    for _, start, _ in pattern.scan_string(line, max_matches=1):
        return start
    return None


def validate(line: str) -> None:
    """Reject lines the parser must never see

    Raises:
        ArithSyntaxError for a trailing '/' or a '/' followed by a literal 0
    """
    location = _first_match(TRAILING_DIVISION, line)
    if location is not None:
        raise ArithSyntaxError(
            "incomplete expression: a line cannot end with a division", location + 1
        )

    location = _first_match(DIVISION_BY_ZERO, line)
    if location is not None:
        raise ArithSyntaxError("division by zero", location + 1)


# ============================================================================
# PARSER
# ============================================================================

class Parser:
    """Recursive-descent parser over an immutable token sequence

    Identifiers are resolved against `names` while parsing: a word becomes a
    Variable only if it is already bound, otherwise it has to be a number.
    """

    def __init__(self, tokens: Sequence[Token], names: Container[str]):
        self._tokens = tuple(tokens)
        self._names = names
        self._pos = 0

    def parse(self) -> List[Node]:
        statements = []
        try:
            while not self._at_end():
                statements.append(self._statement())
        except RecursionError:
            # Each open parenthesis costs a few Python frames
            raise ArithSyntaxError("expression too deeply nested") from None
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsed %d statement(s):\n%s", len(statements), dump_statements(statements))
        return statements

    def _statement(self) -> Node:
        if self._peek() == PRINT_KEYWORD:
            return self._print()
        if is_identifier(self._peek()) and self._peek(1) == "=":
            return self._assignment()
        return self._expression()

    def _print(self) -> Print:
        self._advance()
        for _ in range(2):
            self._expect("<", "expected '<<'")

        name = self._peek()
        if is_identifier(name) and self._peek(1) not in ("+", "-", "*", "/"):
            # Bare name: bound or not, the evaluator reports it
            self._advance()
            return Print(Variable(name))
        return Print(self._expression())

    def _assignment(self) -> Assign:
        name = self._advance().value
        self._expect("=", "expected '='")
        return Assign(name, self._expression())

    def _expression(self) -> Node:
        left = self._term()
        while self._peek() in ("+", "-"):
            kind = BinaryKind.from_symbol(self._advance().value)
            left = BinaryOp(kind, left, self._term())
        return left

    def _term(self) -> Node:
        left = self._factor()
        while self._peek() in ("*", "/"):
            kind = BinaryKind.from_symbol(self._advance().value)
            left = BinaryOp(kind, left, self._factor())
        return left

    def _factor(self) -> Node:
        token = self._peek()

        if token == "(":
            self._advance()
            expr = self._expression()
            self._expect(")", "unterminated parenthesis")
            return expr

        if token is not None and token in self._names:
            self._advance()
            return Variable(token)

        if token is None or not is_number_literal(token):
            raise self._error("expected a number")
        self._advance()
        return Number(float(token))

    def _expect(self, value: str, message: str) -> Token:
        if self._peek() != value:
            raise self._error(message)
        return self._advance()

    def _peek(self, offset: int = 0) -> Optional[str]:
        pos = self._pos + offset
        if pos < len(self._tokens):
            return self._tokens[pos].value
        return None

    def _advance(self) -> Token:
        self._pos += 1
        return self._tokens[self._pos - 1]

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _error(self, message: str) -> ArithSyntaxError:
        # Column of the rejected token, or just past the end of the line
        if not self._at_end():
            column = self._tokens[self._pos].column
        elif self._tokens:
            last = self._tokens[-1]
            column = last.column + len(last.value)
        else:
            column = None
        return ArithSyntaxError(message, column)


def parse(tokens: Sequence[Token], names: Container[str]) -> List[Node]:
    """Parse tokens into top-level statements"""
    return Parser(tokens, names).parse()


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

class ArithParser:
    """Line front end: validation, tokenizing and parsing in one place"""

    def __init__(self, validate_lines: bool = True):
        self.validate_lines = validate_lines

    def tokenize(self, line: str) -> List[Token]:
        return tokenize(line)

    def parse_line(self, line: str, names: Container[str]) -> List[Node]:
        if self.validate_lines:
            validate(line)
        tokens = self.tokenize(line)
        logger.debug("tokens: %s", " ".join(str(t) for t in tokens))
        return parse(tokens, names)


def create_parser(validate_lines: bool = True) -> ArithParser:
    """Factory function for parser"""
    return ArithParser(validate_lines)


def dump_statements(statements: List[Node]) -> str:
    return "\n".join(pretty_print_ast(s) for s in statements)
