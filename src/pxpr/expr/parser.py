"""
Parser for the expression language.

Parses a stream of tokens into an Abstract Syntax Tree (AST).
Uses recursive descent parsing with operator precedence.

Precedence (lowest to highest):
1. Implication: -> (right-associative)
2. Logical OR: |
3. Logical AND: &
4. Logical NOT: !
5. Additive: +, -
6. Multiplicative: *, /, %
7. Unary minus: -
8. Primary: literals, parentheses
"""

from typing import List, Optional

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    BooleanLiteralNode,
    GroupingNode,
    NumberLiteralNode,
    UnaryOpNode,
    calculate_ast_depth,
)
from .errors import ParseError
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_depth,
    check_ast_node_count,
    check_nesting_depth,
)
from .tokenizer import Token, TokenType, tokenize

ADDITIVE_OPERATORS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
}

MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.PERCENT: "%",
}


def _describe(token: Token) -> str:
    """Describes a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.value}'"


class Parser:
    """Parser for expression token streams."""

    def __init__(
        self,
        tokens: List[Token],
        source: Optional[str] = None,
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    ):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self._tokens = tokens
        self._source = source
        self._limits = limits
        self._current = 0
        self._depth = 0
        self._node_count = 0

    def parse(self) -> AstNode:
        """Parses the token stream into an AST."""
        ast = self._parse_implication()

        if not self._is_at_end():
            token = self._peek()
            raise ParseError(
                f"Expected end of input, found {_describe(token)}",
                token.position,
                self._source,
            )

        check_ast_depth(calculate_ast_depth(ast), self._limits)

        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[self._current - 1]

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        if self._check(token_type):
            return self._advance()
        token = self._peek()
        raise ParseError(
            f"Expected {expected}, found {_describe(token)}",
            token.position,
            self._source,
        )

    # ============================================================
    # Limit Tracking
    # ============================================================

    def _enter(self) -> None:
        self._depth += 1
        check_nesting_depth(self._depth, self._limits)

    def _leave(self) -> None:
        self._depth -= 1

    def _node(self, node: AstNode) -> AstNode:
        self._node_count += 1
        check_ast_node_count(self._node_count, self._limits)
        return node

    # ============================================================
    # Expression Parsing (by precedence, lowest to highest)
    # ============================================================

    def _parse_implication(self) -> AstNode:
        """Parses implication: ->, grouping to the right."""
        node = self._parse_disjunction()

        if self._match(TokenType.ARROW):
            position = self._previous().position
            self._enter()
            try:
                right = self._parse_implication()
            finally:
                self._leave()
            node = self._node(
                BinaryOpNode(position=position, operator="->", left=node, right=right)
            )

        return node

    def _parse_disjunction(self) -> AstNode:
        """Parses logical OR: |"""
        node = self._parse_conjunction()

        while self._match(TokenType.OR):
            position = self._previous().position
            right = self._parse_conjunction()
            node = self._node(
                BinaryOpNode(position=position, operator="|", left=node, right=right)
            )

        return node

    def _parse_conjunction(self) -> AstNode:
        """Parses logical AND: &"""
        node = self._parse_negation()

        while self._match(TokenType.AND):
            position = self._previous().position
            right = self._parse_negation()
            node = self._node(
                BinaryOpNode(position=position, operator="&", left=node, right=right)
            )

        return node

    def _parse_negation(self) -> AstNode:
        """Parses logical NOT: !"""
        if self._match(TokenType.NOT):
            position = self._previous().position
            self._enter()
            try:
                operand = self._parse_negation()
            finally:
                self._leave()
            return self._node(UnaryOpNode(position=position, operator="!", operand=operand))

        # There are no comparison operators, so the comparison tier
        # collapses into the additive tier.
        return self._parse_additive()

    def _parse_additive(self) -> AstNode:
        """Parses additive: +, -"""
        node = self._parse_multiplicative()

        while self._match(*ADDITIVE_OPERATORS):
            token = self._previous()
            operator: BinaryOperator = ADDITIVE_OPERATORS[token.type]
            right = self._parse_multiplicative()
            node = self._node(
                BinaryOpNode(
                    position=token.position,
                    operator=operator,
                    left=node,
                    right=right,
                )
            )

        return node

    def _parse_multiplicative(self) -> AstNode:
        """Parses multiplicative: *, /, %"""
        node = self._parse_unary()

        while self._match(*MULTIPLICATIVE_OPERATORS):
            token = self._previous()
            operator: BinaryOperator = MULTIPLICATIVE_OPERATORS[token.type]
            right = self._parse_unary()
            node = self._node(
                BinaryOpNode(
                    position=token.position,
                    operator=operator,
                    left=node,
                    right=right,
                )
            )

        return node

    def _parse_unary(self) -> AstNode:
        """Parses unary minus: -"""
        if self._match(TokenType.MINUS):
            position = self._previous().position
            self._enter()
            try:
                operand = self._parse_unary()
            finally:
                self._leave()
            return self._node(UnaryOpNode(position=position, operator="-", operand=operand))

        return self._parse_primary()

    def _parse_primary(self) -> AstNode:
        """Parses primary expressions: literals and parentheses."""
        token = self._peek()
        position = token.position

        if self._match(TokenType.TRUE):
            return self._node(BooleanLiteralNode(position=position, value=True))
        if self._match(TokenType.FALSE):
            return self._node(BooleanLiteralNode(position=position, value=False))

        if self._match(TokenType.NUMBER):
            literal = self._previous().literal
            if literal is None:
                raise ParseError("Number token without a value", position, self._source)
            return self._node(NumberLiteralNode(position=position, value=literal))

        if self._match(TokenType.LPAREN):
            self._enter()
            try:
                inner = self._parse_implication()
            finally:
                self._leave()
            self._consume(TokenType.RPAREN, "')' after expression")
            return self._node(GroupingNode(position=position, inner=inner))

        raise ParseError(
            f"Expected an expression, found {_describe(token)}",
            position,
            self._source,
        )


def parse(
    source: str, limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS
) -> AstNode:
    """
    Parses an expression string into an AST.

    Args:
        source: The expression string to parse
        limits: Optional expression limits

    Returns:
        The parsed AST

    Raises:
        LexError: If tokenization fails
        ParseError: If parsing fails
        LimitExceededError: If the expression is too large or too deeply nested
    """
    tokens = tokenize(source, limits)
    parser = Parser(tokens, source, limits)
    return parser.parse()
