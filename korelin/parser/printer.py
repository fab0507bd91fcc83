"""
Indented text dump of a Korelin syntax tree, for debugging.

One line per node, two spaces per level. Literal nodes show their value,
operator nodes their operator and declarations their name. If statements
and loops label their parts on lines of their own.

The walk uses an explicit stack, so deeply nested trees print without
touching the interpreter's recursion limit.
"""

import sys
from typing import List, Optional, TextIO, Tuple, Union

from .ast_nodes import (
    ASTNode, ASTVisitor, Program, LetStatement, VarStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, IfStatement, ForStatement,
    WhileStatement, BreakStatement, ContinueStatement, Identifier,
    IntegerLiteral, StringLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, AssignmentExpression, FunctionLiteral, CallExpression,
    ArrayLiteral, IndexExpression, ClassLiteral, MemberAccessExpression
)

INDENT = "  "

# A header line plus the parts below it; each part is a child node or a
# label line, paired with its depth relative to the header.
Part = Tuple[Union[ASTNode, str], int]
Layout = Tuple[str, List[Part]]


def _nested(*nodes: Optional[ASTNode]) -> List[Part]:
    return [(node, 1) for node in nodes if node is not None]


def _labelled(label: str, node: Optional[ASTNode]) -> List[Part]:
    if node is None:
        return []
    return [(f"{label}:", 1), (node, 2)]


class TreePrinter(ASTVisitor):
    """Lays out each node variant; format() drives the walk."""

    def __init__(self, indent: str = INDENT):
        self.indent = indent

    def format(self, root: Optional[ASTNode]) -> str:
        if root is None:
            return ""

        lines = []
        stack: List[Part] = [(root, 0)]
        while stack:
            item, depth = stack.pop()
            if isinstance(item, str):
                lines.append(self.indent * depth + item)
                continue

            header, parts = item.accept(self)
            lines.append(self.indent * depth + header)
            for part, offset in reversed(parts):
                stack.append((part, depth + offset))

        return "\n".join(lines) + "\n"

    # Top-level and statements

    def visit_program(self, node: Program) -> Layout:
        return "Program", _nested(*node.statements)

    def visit_let_statement(self, node: LetStatement) -> Layout:
        return f"LetStatement (name: '{node.name.lexeme}')", _nested(node.value)

    def visit_var_statement(self, node: VarStatement) -> Layout:
        return f"VarStatement (name: '{node.name.lexeme}')", _nested(node.value)

    def visit_return_statement(self, node: ReturnStatement) -> Layout:
        return "ReturnStatement", _nested(node.return_value)

    def visit_expression_statement(self, node: ExpressionStatement) -> Layout:
        return "ExpressionStatement", _nested(node.expression)

    def visit_block_statement(self, node: BlockStatement) -> Layout:
        return "BlockStatement", _nested(*node.statements)

    def visit_if_statement(self, node: IfStatement) -> Layout:
        parts = (_labelled("Condition", node.condition)
                 + _labelled("Consequence", node.consequence)
                 + _labelled("Alternative", node.alternative))
        return "IfStatement", parts

    def visit_for_statement(self, node: ForStatement) -> Layout:
        parts = (_labelled("Initializer", node.initializer)
                 + _labelled("Condition", node.condition)
                 + _labelled("Update", node.update)
                 + _labelled("Body", node.body))
        return "ForStatement", parts

    def visit_while_statement(self, node: WhileStatement) -> Layout:
        parts = _labelled("Condition", node.condition) + _labelled("Body", node.body)
        return "WhileStatement", parts

    def visit_break_statement(self, node: BreakStatement) -> Layout:
        return "BreakStatement", []

    def visit_continue_statement(self, node: ContinueStatement) -> Layout:
        return "ContinueStatement", []

    # Literals

    def visit_identifier(self, node: Identifier) -> Layout:
        return f"Identifier (value: '{node.value}')", []

    def visit_integer_literal(self, node: IntegerLiteral) -> Layout:
        return f"IntegerLiteral (value: {node.value})", []

    def visit_string_literal(self, node: StringLiteral) -> Layout:
        return f'StringLiteral (value: "{node.value}")', []

    def visit_boolean_literal(self, node: BooleanLiteral) -> Layout:
        return f"BooleanLiteral (value: {'true' if node.value else 'false'})", []

    # Operators

    def visit_prefix_expression(self, node: PrefixExpression) -> Layout:
        return f"PrefixExpression (operator: '{node.operator.lexeme}')", _nested(node.right)

    def visit_infix_expression(self, node: InfixExpression) -> Layout:
        return (f"InfixExpression (operator: '{node.operator.lexeme}')",
                _nested(node.left, node.right))

    def visit_assignment_expression(self, node: AssignmentExpression) -> Layout:
        return (f"AssignmentExpression (operator: '{node.operator.lexeme}')",
                _nested(node.left, node.right))

    # Functions, collections, classes

    def visit_function_literal(self, node: FunctionLiteral) -> Layout:
        names = ", ".join(param.lexeme for param in node.parameters)
        return f"FunctionLiteral (parameters: [{names}])", _nested(node.body)

    def visit_call_expression(self, node: CallExpression) -> Layout:
        return "CallExpression", _nested(node.function, *node.arguments)

    def visit_array_literal(self, node: ArrayLiteral) -> Layout:
        return "ArrayLiteral", _nested(*node.elements)

    def visit_index_expression(self, node: IndexExpression) -> Layout:
        return "IndexExpression", _nested(node.left, node.index)

    def visit_class_literal(self, node: ClassLiteral) -> Layout:
        return f"ClassLiteral (name: '{node.name.lexeme}')", _nested(node.body)

    def visit_member_access_expression(self, node: MemberAccessExpression) -> Layout:
        return (f"MemberAccessExpression (member: '{node.member.lexeme}')",
                _nested(node.target))


def format_ast(node: Optional[ASTNode]) -> str:
    """Render ``node`` and everything below it as indented text."""
    return TreePrinter().format(node)


def print_ast(node: Optional[ASTNode], stream: TextIO = None):
    """Write format_ast(node) to ``stream`` (stdout by default)."""
    stream = stream if stream is not None else sys.stdout
    stream.write(format_ast(node))
