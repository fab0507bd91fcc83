"""
Tests for the indented tree dump.
"""

import io
import textwrap
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from korelin.lexer.tokens import StaticToken, OwnedToken, TokenType, SourceLocation
from korelin.parser import parse_string, format_ast, print_ast, release_tree
from korelin.parser.ast_nodes import (
    Identifier, PrefixExpression, ClassLiteral, BlockStatement
)

LOCATION = SourceLocation("<test>", 1, 1, 0)


def dump(source):
    result = parse_string(source)
    try:
        return format_ast(result.program)
    finally:
        result.release()


def expected(text):
    return textwrap.dedent(text).lstrip("\n")


class TestTreePrinter(unittest.TestCase):

    def test_let_with_infix_value(self):
        self.assertEqual(dump("let x = 1 + 2;"), expected("""
            Program
              LetStatement (name: 'x')
                InfixExpression (operator: '+')
                  IntegerLiteral (value: 1)
                  IntegerLiteral (value: 2)
            """))

    def test_literals(self):
        self.assertEqual(dump('var s = "hi"; true; name;'), expected("""
            Program
              VarStatement (name: 's')
                StringLiteral (value: "hi")
              ExpressionStatement
                BooleanLiteral (value: true)
              ExpressionStatement
                Identifier (value: 'name')
            """))

    def test_if_statement_sections(self):
        self.assertEqual(dump("if (a) { b; } else { c; }"), expected("""
            Program
              IfStatement
                Condition:
                  Identifier (value: 'a')
                Consequence:
                  BlockStatement
                    ExpressionStatement
                      Identifier (value: 'b')
                Alternative:
                  BlockStatement
                    ExpressionStatement
                      Identifier (value: 'c')
            """))

    def test_loops(self):
        self.assertEqual(dump("for (; i < 3; ) { break; } while (x) { continue; }"), expected("""
            Program
              ForStatement
                Condition:
                  InfixExpression (operator: '<')
                    Identifier (value: 'i')
                    IntegerLiteral (value: 3)
                Body:
                  BlockStatement
                    BreakStatement
              WhileStatement
                Condition:
                  Identifier (value: 'x')
                Body:
                  BlockStatement
                    ContinueStatement
            """))

    def test_functions_calls_and_arrays(self):
        self.assertEqual(dump("let f = func(a, b) { return -a; }; f([1], 2)[0];"), expected("""
            Program
              LetStatement (name: 'f')
                FunctionLiteral (parameters: [a, b])
                  BlockStatement
                    ReturnStatement
                      PrefixExpression (operator: '-')
                        Identifier (value: 'a')
              ExpressionStatement
                IndexExpression
                  CallExpression
                    Identifier (value: 'f')
                    ArrayLiteral
                      IntegerLiteral (value: 1)
                    IntegerLiteral (value: 2)
                  IntegerLiteral (value: 0)
            """))

    def test_assignment(self):
        self.assertEqual(dump("x = y;"), expected("""
            Program
              ExpressionStatement
                AssignmentExpression (operator: '=')
                  Identifier (value: 'x')
                  Identifier (value: 'y')
            """))

    def test_class_literal_built_by_hand(self):
        node = ClassLiteral(StaticToken(TokenType.CLASS, "class", LOCATION),
                            OwnedToken(TokenType.IDENTIFIER, "Point", LOCATION),
                            BlockStatement(StaticToken(TokenType.LEFT_BRACE, "{", LOCATION)))
        self.assertEqual(format_ast(node), "ClassLiteral (name: 'Point')\n  BlockStatement\n")

    def test_none_prints_nothing(self):
        self.assertEqual(format_ast(None), "")

    def test_print_to_stream(self):
        stream = io.StringIO()
        result = parse_string("x;")
        print_ast(result.program, stream)
        result.release()
        self.assertEqual(stream.getvalue(), "Program\n  ExpressionStatement\n    Identifier (value: 'x')\n")

    def test_deep_tree_prints_without_recursion(self):
        depth = 5000
        node = Identifier(OwnedToken(TokenType.IDENTIFIER, "x", LOCATION))
        for _ in range(depth):
            node = PrefixExpression(StaticToken(TokenType.MINUS, "-", LOCATION), node)

        lines = format_ast(node).splitlines()
        self.assertEqual(len(lines), depth + 1)
        self.assertEqual(lines[-1], "  " * depth + "Identifier (value: 'x')")
        self.assertEqual(release_tree(node), depth + 1)


if __name__ == "__main__":
    unittest.main()
