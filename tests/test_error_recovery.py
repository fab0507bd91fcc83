"""
Test suite for syntax error reporting and recovery.

Tests cover:
- One diagnostic per malformed statement, valid neighbours kept
- Recovery inside blocks and unclosed blocks
- Merged lexical and syntax diagnostics
- Nesting limit and allocation failure
- No leaked tokens or nodes on any error path
"""

import unittest
from unittest import mock
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from korelin.config import ParserConfig
from korelin.parser import parse_string
from korelin.parser.ast_nodes import Program, LetStatement, IfStatement, ExpressionStatement
from korelin.parser.errors import ParseError


def codes(result):
    return [error.diagnostic.code for error in result.errors]


class RecoveryTestCase(unittest.TestCase):

    def parse(self, source, config=None):
        result = parse_string(source, config)
        self.addCleanup(self._release, result)
        return result

    def _release(self, result):
        result.release()
        self.assertEqual(result.ledger.outstanding(), 0, result.ledger.summary())


class TestStatementRecovery(RecoveryTestCase):

    def test_missing_name_costs_one_statement(self):
        result = self.parse("let = 5; let a = 1; let b = 2;")
        names = [stmt.name.lexeme for stmt in result.program.statements]
        self.assertEqual(names, ["a", "b"])
        self.assertEqual(codes(result), ["P001"])
        self.assertFalse(result.ok)

    def test_missing_value_costs_one_statement(self):
        result = self.parse("let x = ; let y = 2;")
        self.assertEqual([s.name.lexeme for s in result.program.statements], ["y"])
        self.assertEqual(codes(result), ["P005"])

    def test_each_bad_statement_is_reported(self):
        result = self.parse("let = 1; let c = 3; var = 2; x;")
        self.assertEqual(codes(result), ["P001", "P001"])
        self.assertEqual(len(result.program), 2)

    def test_recovery_stops_before_statement_keyword(self):
        # No ';' after the broken statement
        result = self.parse("let 5 if (a) { b; }")
        self.assertEqual(codes(result), ["P001"])
        (stmt,) = result.program.statements
        self.assertIsInstance(stmt, IfStatement)

    def test_error_message_names_expected_and_found(self):
        result = self.parse("let = 5;")
        error = result.errors[0]
        self.assertIsInstance(error, ParseError)
        self.assertIn("IDENTIFIER", error.diagnostic.message)
        self.assertIn("ASSIGN", error.diagnostic.message)
        self.assertEqual(error.location.column, 5)

    def test_unexpected_end_of_input(self):
        result = self.parse("let x = ")
        self.assertEqual(codes(result), ["P010"])
        self.assertEqual(len(result.program), 0)

    def test_missing_closing_paren_in_condition(self):
        result = self.parse("if (a { b; }")
        self.assertEqual(codes(result)[0], "P001")

    def test_stray_tokens_never_escape(self):
        result = self.parse(")))]]]}}} ,,, = == ;")
        self.assertIsInstance(result.program, Program)
        self.assertEqual(len(result.program), 0)
        self.assertGreater(len(result.errors), 0)

    def test_broken_call_arguments(self):
        result = self.parse("f(1, 2; g(3);")
        self.assertEqual(codes(result)[0], "P001")
        self.assertEqual(result.program.statements[-1].expression.function.value, "g")

    def test_broken_function_literal(self):
        result = self.parse("let f = func(a, 1) { }; let ok = 1;")
        self.assertEqual(codes(result), ["P001"])
        self.assertEqual([s.name.lexeme for s in result.program.statements], ["ok"])


class TestBlockRecovery(RecoveryTestCase):

    def test_bad_statement_inside_block_is_dropped(self):
        result = self.parse("if (a) { let = 1; b; } c;")
        self.assertEqual(codes(result), ["P001"])
        stmt, after = result.program.statements
        self.assertEqual(len(stmt.consequence), 1)
        self.assertIsInstance(stmt.consequence.statements[0], ExpressionStatement)
        self.assertEqual(after.expression.value, "c")

    def test_recovery_stops_before_closing_brace(self):
        result = self.parse("while (x) { y + } z;")
        self.assertEqual(codes(result), ["P005"])
        loop, after = result.program.statements
        self.assertEqual(len(loop.body), 0)
        self.assertEqual(after.expression.value, "z")

    def test_without_block_recovery_one_token_is_skipped(self):
        source = "{ let = 1; b; }"
        recovered = self.parse(source)
        stepped = self.parse(source, ParserConfig(recover_inside_blocks=False))

        self.assertEqual(len(recovered.errors), 1)
        self.assertEqual(len(recovered.program.statements[0]), 1)
        self.assertEqual(len(stepped.errors), 2)
        self.assertEqual(len(stepped.program.statements[0]), 2)

    def test_unclosed_block_keeps_its_statements(self):
        result = self.parse("if (a) { b; c;")
        self.assertEqual(codes(result), ["P004"])
        (stmt,) = result.program.statements
        self.assertEqual(len(stmt.consequence), 2)
        self.assertIn("'{'", result.errors[0].diagnostic.message)


class TestMergedDiagnostics(RecoveryTestCase):

    def test_lexical_error_inside_valid_statement(self):
        result = self.parse("let x = 1 @ 2; let y = 3;")
        self.assertEqual(codes(result), ["L001"])
        self.assertEqual(len(result.program), 2)

    def test_diagnostics_are_ordered_by_offset(self):
        result = self.parse("let = 1; let y = @; if (a { }")
        self.assertEqual(codes(result), ["P001", "L001", "P001"])
        offsets = [error.location.offset for error in result.errors]
        self.assertEqual(offsets, sorted(offsets))

    def test_invalid_character_is_reported_once(self):
        result = self.parse("@; a; let b = 1 + #; let c = 2;")
        self.assertEqual(codes(result), ["L001", "L001"])
        self.assertEqual(result.program.statements[0].expression.value, "a")
        self.assertEqual([s.name.lexeme for s in result.program.statements[1:]], ["c"])

    def test_invalid_character_where_a_name_is_expected(self):
        result = self.parse("let @ = 1; let d = 4;")
        self.assertEqual(codes(result), ["L001"])
        self.assertEqual(len(result.program), 1)

    def test_unterminated_string_is_a_warning(self):
        result = self.parse('let s = "abc')
        self.assertEqual(result.errors, [])
        self.assertEqual([w.diagnostic.code for w in result.warnings], ["L002"])
        self.assertEqual(result.program.statements[0].value.value, "abc")


class TestLimits(RecoveryTestCase):

    def test_deep_parentheses_hit_the_nesting_limit(self):
        depth = 500
        result = self.parse("(" * depth + "1" + ")" * depth + "; let ok = 1;")
        self.assertEqual(codes(result), ["P013"])
        self.assertEqual([s.name.lexeme for s in result.program.statements], ["ok"])

    def test_deep_blocks_hit_the_nesting_limit(self):
        result = self.parse("{" * 300 + "}" * 300)
        self.assertIn("P013", codes(result))

    def test_configured_limit(self):
        config = ParserConfig(max_nesting_depth=10)
        shallow = self.parse("!" * 8 + "x;", config)
        deep = self.parse("!" * 12 + "x;", config)
        self.assertEqual(shallow.errors, [])
        self.assertEqual(codes(deep), ["P013"])

    def test_else_if_chain_counts_as_nesting(self):
        config = ParserConfig(max_nesting_depth=5)
        short = self.parse("if (a) { } " + "else if (a) { } " * 3, config)
        long = self.parse("if (a) { } " + "else if (a) { } " * 10, config)
        self.assertEqual(short.errors, [])
        self.assertIn("P013", codes(long))

    def test_limit_must_be_positive(self):
        with self.assertRaises(ValueError):
            ParserConfig(max_nesting_depth=0)

    def test_long_flat_expression_is_not_nesting(self):
        result = self.parse(" + ".join(["1"] * 2000) + ";")
        self.assertEqual(result.errors, [])

    def test_huge_integer_literal(self):
        result = self.parse("9" * 5000 + "; let ok = 1;")
        self.assertLessEqual(len(result.errors), 1)
        self.assertIsInstance(result.program.statements[-1], LetStatement)

    def test_allocation_failure_releases_everything(self):
        with mock.patch.object(Program, "append", side_effect=MemoryError):
            with self.assertLogs("korelin.parser.parser", level="ERROR"):
                result = parse_string("let a = 1; let b = 2;")

        self.assertIsNone(result.program)
        self.assertEqual(codes(result), ["P014"])
        self.assertEqual(result.ledger.outstanding(), 0)


class TestNoLeaksOnErrorPaths(RecoveryTestCase):
    """Every malformed input leaves only the returned tree outstanding."""

    SOURCES = [
        "let",
        "let x = (1 + ;",
        "if (a) { b; } else",
        "if (a) { b; } else x",
        "for (let i = 0; i < ; i = i + 1) { }",
        "for (i; j; k { }",
        "while (a b) { }",
        "f(1, [2, 3), 4);",
        "xs[1;",
        "func(a, b { return a; };",
        "return (a + b",
        '"unterminated',
        "{ { { let = 1; } ",
        "let a = -;",
    ]

    def test_malformed_inputs(self):
        for source in self.SOURCES:
            with self.subTest(source=source):
                result = parse_string(source)
                self.assertIsNotNone(result.program)
                result.release()
                self.assertEqual(result.ledger.outstanding(), 0, result.ledger.summary())


if __name__ == "__main__":
    unittest.main()
