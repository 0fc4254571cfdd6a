"""
Expression evaluator.

Walks an AST bottom-up and computes its value.

Typing semantics:
- Arithmetic operators (+ - * / %) and unary minus require numbers.
- Logical operators (& | ->) and unary not require booleans.
- There is no implicit coercion between numbers and booleans.
- Both operands are always evaluated before the operator is applied.
"""

import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple, cast

from pxpr.logging import get_logger

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    BooleanLiteralNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    child_nodes,
)
from .errors import (
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    TypeMismatchError,
)
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .parser import Parser
from .tokenizer import tokenize
from .values import Value, get_type_name, is_boolean, is_number

logger = get_logger(__name__)

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "%")

LOGICAL_OPERATORS = ("&", "|", "->")


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[Value]
    """The evaluated value, or None if evaluation failed."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[ExpressionError] = None
    """The error that stopped evaluation, if any."""

    ast: Optional[AstNode] = None
    """The parsed tree, when parsing succeeded."""

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None


class Evaluator:
    """Evaluates an AST node and returns the result."""

    def evaluate(self, node: AstNode) -> Value:
        """
        Evaluates an AST node and returns the value.

        The walk is post-order with an explicit stack: each operator node is
        visited twice, first to schedule its children and then, once their
        values are on the value stack, to apply the operator.
        """
        values: List[Value] = []
        stack: List[Tuple[AstNode, bool]] = [(node, False)]

        while stack:
            current, children_done = stack.pop()
            node_type = current.type

            if node_type == "NumberLiteral":
                values.append(cast(NumberLiteralNode, current).value)
                continue

            if node_type == "BooleanLiteral":
                values.append(cast(BooleanLiteralNode, current).value)
                continue

            if not children_done:
                stack.append((current, True))
                for child in reversed(child_nodes(current)):
                    stack.append((child, False))
                continue

            if node_type == "Grouping":
                # The inner value is already on the stack.
                continue

            if node_type == "UnaryOp":
                n = cast(UnaryOpNode, current)
                values.append(self._evaluate_unary_op(n.operator, values.pop()))
                continue

            if node_type == "BinaryOp":
                n = cast(BinaryOpNode, current)
                right_value = values.pop()
                left_value = values.pop()
                values.append(self._evaluate_binary_op(n.operator, left_value, right_value))
                continue

            raise EvaluationError(f"Unknown node type: {node_type}")

        return values.pop()

    def _evaluate_unary_op(self, operator: UnaryOperator, value: Value) -> Value:
        """Evaluates a unary operation."""
        if operator == "!":
            if not is_boolean(value):
                raise TypeMismatchError("!", "boolean", get_type_name(value))
            return not value

        if operator == "-":
            if not is_number(value):
                raise TypeMismatchError("-", "number", get_type_name(value))
            return -value

        raise EvaluationError(f"Unknown unary operator: {operator}", operator)

    def _evaluate_binary_op(
        self, operator: BinaryOperator, left_value: Value, right_value: Value
    ) -> Value:
        """Evaluates a binary operation on already-evaluated operands."""
        if operator in ARITHMETIC_OPERATORS:
            if not is_number(left_value) or not is_number(right_value):
                raise TypeMismatchError(
                    operator,
                    "number",
                    f"{get_type_name(left_value)} and {get_type_name(right_value)}",
                )
            return self._evaluate_arithmetic(operator, left_value, right_value)

        if operator in LOGICAL_OPERATORS:
            if not is_boolean(left_value) or not is_boolean(right_value):
                raise TypeMismatchError(
                    operator,
                    "boolean",
                    f"{get_type_name(left_value)} and {get_type_name(right_value)}",
                )
            if operator == "&":
                return left_value and right_value
            if operator == "|":
                return left_value or right_value
            return (not left_value) or right_value

        raise EvaluationError(f"Unknown binary operator: {operator}", operator)

    def _evaluate_arithmetic(self, operator: str, left: float, right: float) -> float:
        if operator == "+":
            return left + right

        if operator == "-":
            return left - right

        if operator == "*":
            return left * right

        if right == 0:
            raise DivisionByZeroError(operator)

        if operator == "/":
            return left / right

        # Truncated remainder: the sign follows the dividend
        if not math.isfinite(left):
            return math.nan
        return math.fmod(left, right)


def evaluate(ast: AstNode) -> EvaluationResult:
    """
    Evaluates an AST and returns the result.

    Args:
        ast: The AST to evaluate

    Returns:
        The evaluation result with value and success status
    """
    try:
        value = Evaluator().evaluate(ast)
        return EvaluationResult(value=value, success=True)
    except ExpressionError as error:
        return EvaluationResult(value=None, success=False, error=error)


def evaluate_expression(
    source: str, limits: Optional[ExpressionLimits] = None
) -> EvaluationResult:
    """
    Tokenizes, parses and evaluates an expression string.

    Every call starts from a fresh token stream and tree, so evaluating the
    same text twice gives the same result.

    Args:
        source: The expression string
        limits: Optional expression limits

    Returns:
        The evaluation result. Lexical, syntax, limit and runtime failures
        are reported through ``EvaluationResult.error``.
    """
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    try:
        tokens = tokenize(source, limits)
        try:
            ast = Parser(tokens, source, limits).parse()
        except RecursionError as error:
            # Only reachable when max_nesting_depth is set above what the
            # interpreter stack can hold.
            raise LimitExceededError(
                "recursion_depth", sys.getrecursionlimit()
            ) from error
    except ExpressionError as error:
        logger.debug(
            "expression_rejected",
            kind=error.kind,
            position=error.position,
            reason=error.message,
        )
        return EvaluationResult(value=None, success=False, error=error)

    result = evaluate(ast)
    result.ast = ast
    logger.debug(
        "expression_evaluated",
        success=result.success,
        kind=result.error_kind,
        token_count=len(tokens),
    )
    return result
