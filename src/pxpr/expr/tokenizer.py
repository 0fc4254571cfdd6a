"""
Tokenizer (lexer) for the expression language.

Converts expression strings into a stream of tokens for the parser.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .errors import LexError
from .limits import ExpressionLimits, check_expression_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Literals
    NUMBER = "NUMBER"
    TRUE = "TRUE"
    FALSE = "FALSE"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    PERCENT = "PERCENT"
    NOT = "NOT"
    AND = "AND"
    OR = "OR"
    ARROW = "ARROW"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"

    # Special
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int
    literal: Optional[float] = None
    """Numeric value of a NUMBER token."""


# Keywords recognized by the tokenizer
KEYWORDS: Dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "!": TokenType.NOT,
}


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    """Checks if a character can start an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_identifier_part(ch: str) -> bool:
    """Checks if a character can continue an identifier."""
    return _is_identifier_start(ch) or _is_digit(ch)


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", self._position))
        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _add_token(self, token_type: TokenType, value: str, position: int) -> None:
        self._tokens.append(Token(token_type, value, position))

    def _scan_token(self) -> None:
        ch = self._advance()
        start_position = self._position - 1

        if _is_whitespace(ch):
            return

        if ch in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[ch], ch, start_position)
            return

        # Longest match: '->' must win over a bare '-'
        if ch == "-":
            if self._peek() == ">":
                self._advance()
                self._add_token(TokenType.ARROW, "->", start_position)
            else:
                self._add_token(TokenType.MINUS, "-", start_position)
            return

        if ch == "&":
            if self._peek() == "&":
                self._advance()
                self._add_token(TokenType.AND, "&&", start_position)
            else:
                self._add_token(TokenType.AND, "&", start_position)
            return

        if ch == "|":
            if self._peek() == "|":
                self._advance()
                self._add_token(TokenType.OR, "||", start_position)
            else:
                self._add_token(TokenType.OR, "|", start_position)
            return

        if _is_digit(ch):
            self._scan_number(start_position)
            return

        if _is_identifier_start(ch):
            self._scan_identifier(start_position)
            return

        raise LexError(
            f"Unexpected character: '{ch}'", start_position, self._source, ch
        )

    def _scan_number(self, start_position: int) -> None:
        # Back up to include the first digit
        self._position -= 1

        value = ""

        # Integer part
        while _is_digit(self._peek()):
            value += self._advance()

        # Fractional part; at most one decimal point
        if self._peek() == ".":
            value += self._advance()
            while _is_digit(self._peek()):
                value += self._advance()

        number = float(value)
        if not math.isfinite(number):
            raise LexError(
                f"Invalid number: {value}", start_position, self._source, value
            )

        self._tokens.append(Token(TokenType.NUMBER, value, start_position, number))

    def _scan_identifier(self, start_position: int) -> None:
        # Back up to include the first character
        self._position -= 1

        value = ""

        while _is_identifier_part(self._peek()):
            value += self._advance()

        keyword_type = KEYWORDS.get(value.lower())
        if keyword_type is None:
            raise LexError(
                f"Unknown identifier: '{value}'", start_position, self._source, value
            )

        self._add_token(keyword_type, value, start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens, always terminated by an EOF token

    Raises:
        LexError: If the expression contains invalid characters
        LimitExceededError: If the expression is too long
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
