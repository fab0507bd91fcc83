"""
Tree teardown: give every node and owned token copy back to the ledger.

release_tree walks the tree post-order with an explicit stack, so children
are released before their parent and a very deep tree cannot exhaust the
interpreter stack. Each visit releases the token copies that variant owns
and unlinks its children; the driver then releases the node itself.
"""

import logging
from typing import List, Optional

from ..lexer.tokens import Token
from ..ownership import LedgerError, OwnershipLedger
from .ast_nodes import (
    ASTNode, ASTVisitor, Program, LetStatement, VarStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, IfStatement, ForStatement,
    WhileStatement, BreakStatement, ContinueStatement, Identifier,
    IntegerLiteral, StringLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, AssignmentExpression, FunctionLiteral, CallExpression,
    ArrayLiteral, IndexExpression, ClassLiteral, MemberAccessExpression
)

logger = logging.getLogger(__name__)


class TreeReleaser(ASTVisitor):
    """Releases what a single node owns; children are handled by the driver."""

    def __init__(self, ledger: OwnershipLedger):
        self.ledger = ledger
        self.tokens_released = 0

    def _release_tokens(self, *tokens: Optional[Token]):
        for token in tokens:
            if token is not None and token.owns_lexeme:
                self.ledger.release(token)
                self.tokens_released += 1

    def visit_program(self, node: Program):
        node.statements.clear()

    def visit_let_statement(self, node: LetStatement):
        self._release_tokens(node.name)
        node.value = None

    def visit_var_statement(self, node: VarStatement):
        self._release_tokens(node.name)
        node.value = None

    def visit_return_statement(self, node: ReturnStatement):
        node.return_value = None

    def visit_expression_statement(self, node: ExpressionStatement):
        node.expression = None

    def visit_block_statement(self, node: BlockStatement):
        node.statements.clear()

    def visit_if_statement(self, node: IfStatement):
        node.condition = None
        node.consequence = None
        node.alternative = None

    def visit_for_statement(self, node: ForStatement):
        node.initializer = None
        node.condition = None
        node.update = None
        node.body = None

    def visit_while_statement(self, node: WhileStatement):
        node.condition = None
        node.body = None

    def visit_break_statement(self, node: BreakStatement):
        pass

    def visit_continue_statement(self, node: ContinueStatement):
        pass

    def visit_identifier(self, node: Identifier):
        self._release_tokens(node.token)

    def visit_integer_literal(self, node: IntegerLiteral):
        self._release_tokens(node.token)

    def visit_string_literal(self, node: StringLiteral):
        self._release_tokens(node.token)

    def visit_boolean_literal(self, node: BooleanLiteral):
        pass

    def visit_prefix_expression(self, node: PrefixExpression):
        node.right = None

    def visit_infix_expression(self, node: InfixExpression):
        node.left = None
        node.right = None

    def visit_assignment_expression(self, node: AssignmentExpression):
        node.left = None
        node.right = None

    def visit_function_literal(self, node: FunctionLiteral):
        self._release_tokens(*node.parameters)
        node.parameters.clear()
        node.body = None

    def visit_call_expression(self, node: CallExpression):
        node.function = None
        node.arguments.clear()

    def visit_array_literal(self, node: ArrayLiteral):
        node.elements.clear()

    def visit_index_expression(self, node: IndexExpression):
        node.left = None
        node.index = None

    def visit_class_literal(self, node: ClassLiteral):
        self._release_tokens(node.name)
        node.body = None

    def visit_member_access_expression(self, node: MemberAccessExpression):
        self._release_tokens(node.member)
        node.target = None


def _post_order(root: ASTNode) -> List[ASTNode]:
    """Nodes below and including ``root``, children first, in source order."""
    seen = set()
    pending = [root]
    reverse_post_order = []
    while pending:
        node = pending.pop()
        if id(node) in seen:
            raise LedgerError(f"{node.node_type.value} is reachable twice from the tree root")
        seen.add(id(node))
        reverse_post_order.append(node)
        pending.extend(node.children())
    reverse_post_order.reverse()
    return reverse_post_order


def release_tree(root: Optional[ASTNode], ledger: Optional[OwnershipLedger] = None) -> int:
    """
    Release ``root`` and everything it owns.

    The whole tree is checked for shared nodes before anything is released,
    so a malformed tree raises LedgerError and is left untouched.

    Args:
        root: Tree to release; None is accepted and does nothing
        ledger: Ledger the nodes and token copies were acquired from. Without
            one nothing is tracked and the tree is only unlinked.

    Returns:
        Number of nodes released
    """
    if root is None:
        return 0
    if ledger is None:
        ledger = OwnershipLedger(enabled=False)

    nodes = _post_order(root)
    releaser = TreeReleaser(ledger)
    for node in nodes:
        node.accept(releaser)
        node.parent = None
        ledger.release(node)

    logger.debug("released %d nodes and %d token copies", len(nodes), releaser.tokens_released)
    return len(nodes)
