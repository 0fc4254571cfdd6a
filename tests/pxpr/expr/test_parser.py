"""
Tests for expression parser.
"""

# pyright: reportAttributeAccessIssue=false


import pytest

from pxpr.expr import (
    ExpressionLimits,
    LexError,
    LimitExceededError,
    ParseError,
    Parser,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
    parse,
    tokenize,
)


class TestLiterals:
    """Tests for literal parsing."""

    def test_parses_number_literal(self):
        ast = parse("42")
        assert ast.type == "NumberLiteral"
        assert ast.position == 0
        assert ast.value == 42

    def test_parses_decimal_number(self):
        ast = parse("3.14")
        assert ast.type == "NumberLiteral"
        assert ast.value == pytest.approx(3.14)

    def test_parses_true(self):
        ast = parse("true")
        assert ast.type == "BooleanLiteral"
        assert ast.position == 0
        assert ast.value is True

    def test_parses_false(self):
        ast = parse("false")
        assert ast.type == "BooleanLiteral"
        assert ast.value is False


class TestGrouping:
    """Tests for parenthesized expressions."""

    def test_parses_grouping(self):
        ast = parse("(1)")
        assert ast.type == "Grouping"
        assert ast.position == 0
        assert ast.inner.type == "NumberLiteral"

    def test_parses_nested_grouping(self):
        ast = parse("((true))")
        assert ast.type == "Grouping"
        assert ast.inner.type == "Grouping"
        assert ast.inner.inner.value is True

    def test_grouping_restarts_at_implication(self):
        ast = parse("(true -> false) & true")
        assert ast.type == "BinaryOp"
        assert ast.operator == "&"
        assert ast.left.type == "Grouping"
        assert ast.left.inner.operator == "->"


class TestUnaryOperators:
    """Tests for unary operator parsing."""

    def test_parses_logical_not(self):
        ast = parse("!true")
        assert ast.type == "UnaryOp"
        assert ast.operator == "!"
        assert ast.operand.type == "BooleanLiteral"

    def test_parses_negation(self):
        ast = parse("-5")
        assert ast.type == "UnaryOp"
        assert ast.operator == "-"
        assert ast.operand.type == "NumberLiteral"
        assert ast.operand.value == 5

    def test_parses_double_negation(self):
        ast = parse("- - 3")
        assert ast.type == "UnaryOp"
        assert ast.operand.type == "UnaryOp"
        assert ast.operand.operand.value == 3

    def test_parses_double_not(self):
        ast = parse("!!false")
        assert ast.type == "UnaryOp"
        assert ast.operand.type == "UnaryOp"

    def test_unary_minus_binds_tighter_than_multiplication(self):
        ast = parse("-2 * 3")
        assert ast.type == "BinaryOp"
        assert ast.operator == "*"
        assert ast.left.type == "UnaryOp"

    def test_not_binds_looser_than_arithmetic(self):
        # Type checking is deferred to evaluation.
        ast = parse("!1 + 2")
        assert ast.type == "UnaryOp"
        assert ast.operator == "!"
        assert ast.operand.type == "BinaryOp"
        assert ast.operand.operator == "+"

    def test_not_binds_tighter_than_conjunction(self):
        ast = parse("!true & false")
        assert ast.type == "BinaryOp"
        assert ast.operator == "&"
        assert ast.left.type == "UnaryOp"

    def test_keyword_not_is_logical_not(self):
        ast = parse("not true")
        assert ast.type == "UnaryOp"
        assert ast.operator == "!"


class TestBinaryOperators:
    """Tests for binary operator parsing."""

    def test_parses_arithmetic_operators(self):
        for op in ["+", "-", "*", "/", "%"]:
            ast = parse(f"1 {op} 2")
            assert ast.type == "BinaryOp"
            assert ast.operator == op
            assert ast.position == 2

    def test_parses_logical_operators(self):
        for op in ["&", "|", "->"]:
            ast = parse(f"true {op} false")
            assert ast.type == "BinaryOp"
            assert ast.operator == op

    def test_alternate_spellings_share_operators(self):
        assert parse("true && false").operator == "&"
        assert parse("true and false").operator == "&"
        assert parse("true || false").operator == "|"
        assert parse("true or false").operator == "|"


class TestOperatorPrecedence:
    """Tests for operator precedence."""

    def test_multiplication_before_addition(self):
        ast = parse("2 + 3 * 4")
        assert ast.type == "BinaryOp"
        assert ast.operator == "+"
        assert ast.right.type == "BinaryOp"
        assert ast.right.operator == "*"

    def test_parentheses_override_precedence(self):
        ast = parse("(2 + 3) * 4")
        assert ast.type == "BinaryOp"
        assert ast.operator == "*"
        assert ast.left.type == "Grouping"
        assert ast.left.inner.operator == "+"

    def test_and_before_or(self):
        ast = parse("true | false & true")
        assert ast.operator == "|"
        assert ast.right.operator == "&"

    def test_or_before_implication(self):
        ast = parse("true | false -> false")
        assert ast.operator == "->"
        assert ast.left.operator == "|"


class TestAssociativity:
    """Tests for operator associativity."""

    def test_subtraction_is_left_associative(self):
        ast = parse("1 - 2 - 3")
        assert ast.operator == "-"
        assert ast.left.type == "BinaryOp"
        assert ast.left.operator == "-"
        assert ast.right.type == "NumberLiteral"

    def test_division_is_left_associative(self):
        ast = parse("8 / 4 / 2")
        assert ast.left.operator == "/"
        assert ast.right.value == 2

    def test_implication_is_right_associative(self):
        ast = parse("true -> false -> true")
        assert ast.operator == "->"
        assert ast.left.type == "BooleanLiteral"
        assert ast.right.type == "BinaryOp"
        assert ast.right.operator == "->"


class TestParserContract:
    """Tests for parsing a token stream directly."""

    def test_parses_token_stream(self):
        tokens = tokenize("1 + 2")
        ast = Parser(tokens).parse()
        assert ast.operator == "+"

    def test_rejects_stream_without_eof(self):
        tokens = tokenize("1")[:-1]
        with pytest.raises(ValueError):
            Parser(tokens)


class TestErrorHandling:
    """Tests for error handling."""

    def test_throws_on_empty_input(self):
        with pytest.raises(ParseError) as exc_info:
            parse("")
        assert "end of input" in exc_info.value.message

    def test_throws_on_unclosed_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(1 + 2")
        assert exc_info.value.position == 6
        assert exc_info.value.message == (
            "Expected ')' after expression, found end of input"
        )

    def test_throws_on_missing_operand(self):
        with pytest.raises(ParseError) as exc_info:
            parse("1 +")
        assert exc_info.value.position == 3

    def test_throws_on_trailing_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("1 2")
        assert exc_info.value.position == 2
        assert exc_info.value.message == "Expected end of input, found '2'"

    def test_throws_on_unmatched_closing_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse("1 + 2)")
        assert exc_info.value.position == 5

    def test_throws_on_empty_parentheses(self):
        with pytest.raises(ParseError):
            parse("()")

    def test_throws_on_not_inside_arithmetic(self):
        with pytest.raises(ParseError):
            parse("1 + !true")

    def test_throws_on_dangling_implication(self):
        with pytest.raises(ParseError):
            parse("true ->")

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse("1 @ 2")

    def test_number_overflow_is_a_lex_error(self):
        with pytest.raises(LexError):
            parse("9" * 400)

    def test_error_kind_is_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse("1 +")
        assert exc_info.value.kind == "ParseError"


class TestLimits:
    """Tests for parser resource limits."""

    def test_rejects_deep_parenthesis_nesting(self):
        source = "(" * 100 + "1" + ")" * 100
        with pytest.raises(LimitExceededError) as exc_info:
            parse(source)
        assert exc_info.value.limit_name == "max_nesting_depth"

    def test_rejects_long_unary_chain(self):
        with pytest.raises(LimitExceededError):
            parse("-" * 200 + "1")

    def test_rejects_long_implication_chain(self):
        with pytest.raises(LimitExceededError):
            parse(" -> ".join(["true"] * 200))

    def test_rejects_too_many_nodes(self):
        limits = ExpressionLimits(max_ast_nodes=100)
        with pytest.raises(LimitExceededError) as exc_info:
            parse(" + ".join(["1"] * 60), limits)
        assert exc_info.value.limit_name == "max_ast_nodes"

    def test_rejects_deep_tree(self):
        limits = ExpressionLimits(max_ast_depth=4)
        with pytest.raises(LimitExceededError) as exc_info:
            parse("1 + 1 + 1 + 1 + 1", limits)
        assert exc_info.value.limit_name == "max_ast_depth"

    def test_accepts_nesting_within_limits(self):
        source = "(" * 20 + "1" + ")" * 20
        ast = parse(source)
        assert calculate_ast_depth(ast) == 21

    def test_accepts_long_sum_with_default_limits(self):
        ast = parse(" + ".join(["1"] * 200))
        assert count_ast_nodes(ast) == 399
        assert calculate_ast_depth(ast) == 200


class TestAstUtilities:
    """Tests for AST helper functions."""

    def test_counts_nodes(self):
        assert count_ast_nodes(parse("(1 + 2) * -3")) == 7

    def test_calculates_depth(self):
        assert calculate_ast_depth(parse("1")) == 1
        assert calculate_ast_depth(parse("(1 + 2) * 3")) == 4

    def test_renders_tree(self):
        rendered = ast_to_string(parse("!(true | false)"))
        assert rendered == (
            "UnaryOp: !\n"
            "  Grouping:\n"
            "    BinaryOp: |\n"
            "      Boolean: true\n"
            "      Boolean: false"
        )

    def test_nodes_are_immutable(self):
        ast = parse("1")
        with pytest.raises(AttributeError):
            ast.value = 2

    def test_walks_long_chain_without_recursion(self):
        limits = ExpressionLimits(
            max_expression_length=20000, max_ast_nodes=10000, max_ast_depth=10000
        )
        ast = parse(" + ".join(["1"] * 3000), limits)
        assert count_ast_nodes(ast) == 5999
        assert calculate_ast_depth(ast) == 3000
        rendered = ast_to_string(ast).split("\n")
        assert len(rendered) == 5999
        assert rendered[0] == "BinaryOp: +"
        assert rendered[-1] == "  Number: 1.0"
