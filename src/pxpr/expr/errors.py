"""
Error types for the expression evaluator.

All expression errors extend ExpressionError for consistent handling.
Each error carries a ``kind`` tag so callers can report failures without
inspecting the class hierarchy.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    kind = "ExpressionError"

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        # Keep tabs from the source so the caret lines up in a terminal
        padding = "".join(
            ch if ch == "\t" else " " for ch in self.expression[: self.position]
        )
        pointer = padding + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class LexError(ExpressionError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    kind = "LexError"

    def __init__(
        self,
        message: str,
        position: int,
        expression: Optional[str] = None,
        character: Optional[str] = None,
    ):
        super().__init__(message, position, expression)
        self.character = character


class ParseError(ExpressionError):
    """
    Error thrown during parsing (syntax analysis).
    """

    kind = "ParseError"


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).

    Runtime errors are structural and carry no source position.
    """

    kind = "EvaluationError"

    def __init__(self, message: str, operator: Optional[str] = None):
        super().__init__(message)
        self.operator = operator


class TypeMismatchError(EvaluationError):
    """
    Error thrown when an operator is applied to an operand of the wrong kind.
    """

    kind = "TypeMismatch"

    def __init__(self, operator: str, expected: str, actual: str):
        message = (
            f"Type mismatch: '{operator}' expects {expected} operands, got {actual}"
        )
        super().__init__(message, operator)
        self.expected = expected
        self.actual = actual


class DivisionByZeroError(EvaluationError):
    """
    Error thrown for division or modulo by zero.
    """

    kind = "DivisionByZero"

    def __init__(self, operator: str):
        what = "Division" if operator == "/" else "Modulo"
        super().__init__(f"{what} by zero", operator)


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    kind = "LimitExceeded"

    def __init__(self, limit_name: str, limit: int, actual: Optional[int] = None):
        if actual is None:
            message = f"Limit exceeded: {limit_name} (limit: {limit})"
        else:
            message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
