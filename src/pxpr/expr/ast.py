"""
Abstract Syntax Tree (AST) node types for the expression language.

The AST is produced by the parser and consumed by the evaluator. Nodes are
immutable and each node owns its children; operand kinds are only checked
at evaluation time.
"""

from abc import ABC
from dataclasses import dataclass
from typing import List, Literal, Tuple, Union

# ============================================================
# Operator Types
# ============================================================

UnaryOperator = Literal["!", "-"]

BinaryOperator = Literal[
    "*",
    "/",
    "%",
    "+",
    "-",
    "&",
    "|",
    "->",
]


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source expression (for error reporting)."""


@dataclass(frozen=True)
class NumberLiteralNode(AstNodeBase):
    """Number literal node."""

    value: float

    @property
    def type(self) -> Literal["NumberLiteral"]:
        return "NumberLiteral"


@dataclass(frozen=True)
class BooleanLiteralNode(AstNodeBase):
    """Boolean literal node."""

    value: bool

    @property
    def type(self) -> Literal["BooleanLiteral"]:
        return "BooleanLiteral"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary operator node."""

    operator: UnaryOperator
    operand: "AstNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOperator
    left: "AstNode"
    right: "AstNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


@dataclass(frozen=True)
class GroupingNode(AstNodeBase):
    """Parenthesized sub-expression."""

    inner: "AstNode"

    @property
    def type(self) -> Literal["Grouping"]:
        return "Grouping"


# Union type for all AST nodes
AstNode = Union[
    NumberLiteralNode,
    BooleanLiteralNode,
    UnaryOpNode,
    BinaryOpNode,
    GroupingNode,
]


# ============================================================
# AST Utilities
# ============================================================


def child_nodes(node: AstNode) -> Tuple[AstNode, ...]:
    """Returns the direct children of a node, left to right."""
    if node.type == "UnaryOp":
        node = node  # type: UnaryOpNode
        return (node.operand,)

    if node.type == "BinaryOp":
        node = node  # type: BinaryOpNode
        return (node.left, node.right)

    if node.type == "Grouping":
        node = node  # type: GroupingNode
        return (node.inner,)

    return ()


# The utilities below walk the tree with an explicit stack, so long
# left-associative chains never touch the recursion limit.


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack: List[AstNode] = [node]

    while stack:
        current = stack.pop()
        count += 1
        stack.extend(child_nodes(current))

    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    max_depth = 0
    stack: List[Tuple[AstNode, int]] = [(node, 1)]

    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for child in child_nodes(current):
            stack.append((child, depth + 1))

    return max_depth


def _describe_node(node: AstNode) -> str:
    if node.type == "NumberLiteral":
        node = node  # type: NumberLiteralNode
        return f"Number: {node.value}"

    if node.type == "BooleanLiteral":
        node = node  # type: BooleanLiteralNode
        return f"Boolean: {'true' if node.value else 'false'}"

    if node.type == "UnaryOp":
        node = node  # type: UnaryOpNode
        return f"UnaryOp: {node.operator}"

    if node.type == "BinaryOp":
        node = node  # type: BinaryOpNode
        return f"BinaryOp: {node.operator}"

    if node.type == "Grouping":
        return "Grouping:"

    return f"Unknown: {node}"


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    lines: List[str] = []
    stack: List[Tuple[AstNode, int]] = [(node, indent)]

    while stack:
        current, level = stack.pop()
        lines.append("  " * level + _describe_node(current))
        for child in reversed(child_nodes(current)):
            stack.append((child, level + 1))

    return "\n".join(lines)
