"""
Arithmetic and boolean expression engine.

This module provides a deterministic, side-effect-free pipeline that turns
expression text into a value: tokenize, parse, evaluate.
"""

# Core types and utilities
from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    BooleanLiteralNode,
    GroupingNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    ast_to_string,
    calculate_ast_depth,
    child_nodes,
    count_ast_nodes,
)
from .errors import (
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    LexError,
    LimitExceededError,
    ParseError,
    TypeMismatchError,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
    evaluate_expression,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_depth,
    check_ast_node_count,
    check_expression_length,
    check_nesting_depth,
)

# Parser
from .parser import (
    Parser,
    parse,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

# Values
from .values import (
    Value,
    format_value,
    get_type_name,
    is_boolean,
    is_number,
)

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "NumberLiteralNode",
    "BooleanLiteralNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "GroupingNode",
    "UnaryOperator",
    "BinaryOperator",
    "child_nodes",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    # Errors
    "ExpressionError",
    "LexError",
    "ParseError",
    "EvaluationError",
    "TypeMismatchError",
    "DivisionByZeroError",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_nesting_depth",
    "check_ast_depth",
    "check_ast_node_count",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    # Evaluator
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_expression",
    # Values
    "Value",
    "format_value",
    "get_type_name",
    "is_boolean",
    "is_number",
]
