"""
Korelin Parser Package

Implements a Pratt-based recursive descent parser for the Korelin language.

Key Features:
- Top-down operator precedence (Pratt parsing)
- Statement-level error recovery and synchronization
- Closed AST node set with exhaustive visitors
- Iterative tree printer and teardown
- Ownership tracking for tokens and nodes
"""

from .ast_nodes import *
from .parser import Parser, Precedence, ParseResult, parse_string, parse_file
from .printer import TreePrinter, format_ast, print_ast
from .teardown import TreeReleaser, release_tree
from .errors import ParseError, ParseWarning, LexicalTokenError

__all__ = [
    # Core parser
    "Parser", "Precedence", "ParseResult", "parse_string", "parse_file",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor", "NODE_CLASSES",
    "Program", "Statement", "Expression",
    "LetStatement", "VarStatement", "ReturnStatement", "ExpressionStatement",
    "BlockStatement", "IfStatement", "ForStatement", "WhileStatement",
    "BreakStatement", "ContinueStatement",
    "Identifier", "IntegerLiteral", "StringLiteral", "BooleanLiteral",
    "PrefixExpression", "InfixExpression", "AssignmentExpression",
    "FunctionLiteral", "CallExpression", "ArrayLiteral", "IndexExpression",
    "ClassLiteral", "MemberAccessExpression",

    # Tree utilities
    "TreePrinter", "format_ast", "print_ast", "TreeReleaser", "release_tree",

    # Error handling
    "ParseError", "ParseWarning", "LexicalTokenError",
]
