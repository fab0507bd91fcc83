"""
Test suite for expression parsing in the Korelin parser.

Expressions are rendered fully parenthesized so precedence and
associativity can be compared as plain strings.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from korelin.parser import parse_string
from korelin.parser.parser import string_value
from korelin.parser.ast_nodes import (
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, AssignmentExpression, FunctionLiteral, CallExpression,
    ArrayLiteral, IndexExpression, ReturnStatement
)


def render(node):
    if isinstance(node, Identifier):
        return node.value
    if isinstance(node, IntegerLiteral):
        return str(node.value)
    if isinstance(node, StringLiteral):
        return repr(node.value)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, PrefixExpression):
        return f"({node.operator.lexeme}{render(node.right)})"
    if isinstance(node, (InfixExpression, AssignmentExpression)):
        return f"({render(node.left)} {node.operator.lexeme} {render(node.right)})"
    if isinstance(node, CallExpression):
        return f"{render(node.function)}({', '.join(render(a) for a in node.arguments)})"
    if isinstance(node, IndexExpression):
        return f"({render(node.left)}[{render(node.index)}])"
    if isinstance(node, ArrayLiteral):
        return f"[{', '.join(render(e) for e in node.elements)}]"
    if isinstance(node, FunctionLiteral):
        return f"func({', '.join(p.lexeme for p in node.parameters)})"
    raise TypeError(f"cannot render {node!r}")


class ExpressionTestCase(unittest.TestCase):

    def expression(self, source):
        result = parse_string(source)
        self.assertEqual(result.errors, [], f"Unexpected errors: {[str(e) for e in result.errors]}")
        self.addCleanup(result.release)
        self.assertEqual(len(result.program), 1)
        return result.program.statements[0].expression

    def assertParsesAs(self, source, expected):
        self.assertEqual(render(self.expression(source)), expected)


class TestPrecedence(ExpressionTestCase):

    def test_factor_binds_tighter_than_term(self):
        self.assertParsesAs("1 + 2 * 3;", "(1 + (2 * 3))")
        self.assertParsesAs("1 * 2 + 3;", "((1 * 2) + 3)")
        self.assertParsesAs("a % b - c / d;", "((a % b) - (c / d))")

    def test_binary_operators_are_left_associative(self):
        self.assertParsesAs("a - b - c;", "((a - b) - c)")
        self.assertParsesAs("a / b * c;", "((a / b) * c)")

    def test_comparison_equality_and_logic(self):
        self.assertParsesAs("a < b == c > d;", "((a < b) == (c > d))")
        self.assertParsesAs("a || b && c;", "(a || (b && c))")
        self.assertParsesAs("a && b || c;", "((a && b) || c)")
        self.assertParsesAs("a <= b != c >= d;", "((a <= b) != (c >= d))")

    def test_prefix_operators(self):
        self.assertParsesAs("-a * b;", "((-a) * b)")
        self.assertParsesAs("-1 + 2;", "((-1) + 2)")
        self.assertParsesAs("!-a;", "(!(-a))")
        self.assertParsesAs("!true == false;", "((!true) == false)")

    def test_grouping_overrides_precedence(self):
        self.assertParsesAs("(1 + 2) * 3;", "((1 + 2) * 3)")
        self.assertParsesAs("-(a + b);", "(-(a + b))")
        self.assertParsesAs("((x));", "x")

    def test_assignment_is_right_associative(self):
        self.assertParsesAs("a = b = c;", "(a = (b = c))")
        self.assertParsesAs("a = b + c;", "(a = (b + c))")
        self.assertParsesAs("x += 1;", "(x += 1)")

    def test_unknown_operator_ends_the_expression(self):
        result = parse_string("a ^ b;")
        self.addCleanup(result.release)
        self.assertEqual(render(result.program.statements[0].expression), "a")
        self.assertEqual([e.code for e in result.errors], ["P005"])


class TestPostfixAndCompound(ExpressionTestCase):

    def test_calls(self):
        self.assertParsesAs("add(1, 2 * 3, x);", "add(1, (2 * 3), x)")
        self.assertParsesAs("f();", "f()")
        self.assertParsesAs("f(g(1))(2);", "f(g(1))(2)")
        self.assertParsesAs("a + f(b) * c;", "(a + (f(b) * c))")

    def test_index(self):
        self.assertParsesAs("xs[1 + 1];", "(xs[(1 + 1)])")
        self.assertParsesAs("m[0][1];", "((m[0])[1])")
        self.assertParsesAs("f(x)[0];", "(f(x)[0])")
        self.assertParsesAs("-xs[0];", "(-(xs[0]))")

    def test_array_literals(self):
        self.assertParsesAs("[1, a, [2]];", "[1, a, [2]]")
        self.assertParsesAs("[];", "[]")
        self.assertParsesAs("[1, 2][0];", "([1, 2][0])")

    def test_function_literal(self):
        node = self.expression("func(a, b) { return a + b; };")
        self.assertIsInstance(node, FunctionLiteral)
        self.assertEqual([p.lexeme for p in node.parameters], ["a", "b"])
        (stmt,) = node.body.statements
        self.assertIsInstance(stmt, ReturnStatement)
        self.assertEqual(render(stmt.return_value), "(a + b)")

    def test_function_literal_call(self):
        self.assertParsesAs("func(x) { }(1);", "func(x)(1)")


class TestLiterals(ExpressionTestCase):

    def test_integer_value(self):
        node = self.expression("12345;")
        self.assertEqual(node.value, 12345)
        self.assertEqual(node.token.lexeme, "12345")

    def test_string_value_strips_delimiters(self):
        node = self.expression('"hello world";')
        self.assertEqual(node.value, "hello world")
        self.assertEqual(node.token.lexeme, '"hello world"')

    def test_escaped_delimiter_in_value(self):
        node = self.expression('"a\\"b";')
        self.assertEqual(node.token.length, 6)
        self.assertEqual(node.value, 'a"b')

    def test_single_quoted_string(self):
        self.assertEqual(self.expression("'it';").value, "it")

    def test_booleans(self):
        self.assertIs(self.expression("true;").value, True)
        self.assertIs(self.expression("false;").value, False)

    def test_string_value_helper(self):
        self.assertEqual(string_value('""'), "")
        self.assertEqual(string_value('"abc'), "abc")
        self.assertEqual(string_value('"a\\"'), 'a"')
        self.assertEqual(string_value("'x\\'y'"), "x'y")
        self.assertEqual(string_value('"a\\nb"'), "a\\nb")


if __name__ == "__main__":
    unittest.main()
