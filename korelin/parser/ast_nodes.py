"""
Abstract Syntax Tree node definitions for Korelin.

The node set is closed: ASTNodeType lists every variant and each variant has
exactly one class here. Anything that has to handle every kind of node
(printer, teardown) is written as an ASTVisitor, whose visit methods are all
abstract, so a visitor that forgets a variant cannot even be instantiated.

Ownership is a strict tree. A node is linked into exactly one parent, the
link happens when the parent is constructed (or, for programs and blocks,
appended to), and linking an already-parented node is refused. Nodes that
hold a literal or operator lexeme keep their own copy of the token.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Type
from enum import Enum

from ..lexer.tokens import Token
from ..ownership import LedgerError


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    LET_STATEMENT = "LetStatement"
    VAR_STATEMENT = "VarStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"
    IF_STATEMENT = "IfStatement"
    FOR_STATEMENT = "ForStatement"
    WHILE_STATEMENT = "WhileStatement"
    BREAK_STATEMENT = "BreakStatement"
    CONTINUE_STATEMENT = "ContinueStatement"

    # Literals
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"

    # Operators
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"

    # Functions, collections, classes
    FUNCTION_LITERAL = "FunctionLiteral"
    CALL_EXPRESSION = "CallExpression"
    ARRAY_LITERAL = "ArrayLiteral"
    INDEX_EXPRESSION = "IndexExpression"
    CLASS_LITERAL = "ClassLiteral"
    MEMBER_ACCESS_EXPRESSION = "MemberAccessExpression"


# Concrete node class per variant, filled in as classes are defined
NODE_CLASSES: Dict[ASTNodeType, Type["ASTNode"]] = {}


class ASTVisitor(ABC):
    """
    Visitor interface with one method per node variant.

    Every method is abstract on purpose: a subclass has to handle the whole
    tag set before Python will let it be instantiated.
    """

    def visit(self, node: "ASTNode") -> Any:
        return node.accept(self)

    @abstractmethod
    def visit_program(self, node: "Program") -> Any: ...

    @abstractmethod
    def visit_let_statement(self, node: "LetStatement") -> Any: ...

    @abstractmethod
    def visit_var_statement(self, node: "VarStatement") -> Any: ...

    @abstractmethod
    def visit_return_statement(self, node: "ReturnStatement") -> Any: ...

    @abstractmethod
    def visit_expression_statement(self, node: "ExpressionStatement") -> Any: ...

    @abstractmethod
    def visit_block_statement(self, node: "BlockStatement") -> Any: ...

    @abstractmethod
    def visit_if_statement(self, node: "IfStatement") -> Any: ...

    @abstractmethod
    def visit_for_statement(self, node: "ForStatement") -> Any: ...

    @abstractmethod
    def visit_while_statement(self, node: "WhileStatement") -> Any: ...

    @abstractmethod
    def visit_break_statement(self, node: "BreakStatement") -> Any: ...

    @abstractmethod
    def visit_continue_statement(self, node: "ContinueStatement") -> Any: ...

    @abstractmethod
    def visit_identifier(self, node: "Identifier") -> Any: ...

    @abstractmethod
    def visit_integer_literal(self, node: "IntegerLiteral") -> Any: ...

    @abstractmethod
    def visit_string_literal(self, node: "StringLiteral") -> Any: ...

    @abstractmethod
    def visit_boolean_literal(self, node: "BooleanLiteral") -> Any: ...

    @abstractmethod
    def visit_prefix_expression(self, node: "PrefixExpression") -> Any: ...

    @abstractmethod
    def visit_infix_expression(self, node: "InfixExpression") -> Any: ...

    @abstractmethod
    def visit_assignment_expression(self, node: "AssignmentExpression") -> Any: ...

    @abstractmethod
    def visit_function_literal(self, node: "FunctionLiteral") -> Any: ...

    @abstractmethod
    def visit_call_expression(self, node: "CallExpression") -> Any: ...

    @abstractmethod
    def visit_array_literal(self, node: "ArrayLiteral") -> Any: ...

    @abstractmethod
    def visit_index_expression(self, node: "IndexExpression") -> Any: ...

    @abstractmethod
    def visit_class_literal(self, node: "ClassLiteral") -> Any: ...

    @abstractmethod
    def visit_member_access_expression(self, node: "MemberAccessExpression") -> Any: ...


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        node_type = cls.__dict__.get("node_type")
        if node_type is not None:
            if node_type in NODE_CLASSES:
                raise TypeError(f"{node_type.value} already has a node class")
            NODE_CLASSES[node_type] = cls

    def __init__(self):
        self.parent: Optional["ASTNode"] = None

    def _adopt(self, child: Optional["ASTNode"]) -> Optional["ASTNode"]:
        """Link ``child`` under this node; a node has at most one parent."""
        if child is None:
            return None
        if child.parent is not None:
            raise LedgerError(
                f"{child.node_type.value} is already owned by {child.parent.node_type.value}"
            )
        child.parent = self
        return child

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""

    @abstractmethod
    def children(self) -> List["ASTNode"]:
        """Owned child nodes in source order."""

    def owned_tokens(self) -> List[Token]:
        """Token copies embedded in this node."""
        return []

    def __str__(self) -> str:
        return self.node_type.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Statement(ASTNode):
    """Base class for statements."""


class Expression(ASTNode):
    """Base class for expressions."""


# ============================================================================
# Top-level
# ============================================================================

class Program(ASTNode):
    """Root node: the ordered statements of a whole source buffer."""
    node_type = ASTNodeType.PROGRAM

    def __init__(self, statements: Optional[List[Statement]] = None):
        super().__init__()
        self.statements: List[Statement] = []
        for stmt in statements or []:
            self.append(stmt)

    def append(self, stmt: Statement):
        self.statements.append(self._adopt(stmt))

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_program(self)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __repr__(self) -> str:
        return f"Program({len(self.statements)} statements)"


# ============================================================================
# Statements
# ============================================================================

class _BindingStatement(Statement):
    """Shared shape of let and var: a name and an optional value."""

    def __init__(self, name: Token, value: Optional[Expression]):
        super().__init__()
        self.name = name
        self.value = self._adopt(value)

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []

    def owned_tokens(self) -> List[Token]:
        return [self.name]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name.lexeme!r})"


class LetStatement(_BindingStatement):
    """let x = 42;"""
    node_type = ASTNodeType.LET_STATEMENT

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_let_statement(self)


class VarStatement(_BindingStatement):
    """var x = 42;"""
    node_type = ASTNodeType.VAR_STATEMENT

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_var_statement(self)


class ReturnStatement(Statement):
    """return x + y;  (the value may be absent)"""
    node_type = ASTNodeType.RETURN_STATEMENT

    def __init__(self, token: Token, return_value: Optional[Expression]):
        super().__init__()
        self.token = token
        self.return_value = self._adopt(return_value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_return_statement(self)

    def children(self) -> List[ASTNode]:
        return [self.return_value] if self.return_value is not None else []


class ExpressionStatement(Statement):
    """An expression evaluated for its effect: x = 1;"""
    node_type = ASTNodeType.EXPRESSION_STATEMENT

    def __init__(self, expression: Expression):
        super().__init__()
        self.expression = self._adopt(expression)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression_statement(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


class BlockStatement(Statement):
    """Statements wrapped in braces."""
    node_type = ASTNodeType.BLOCK_STATEMENT

    def __init__(self, token: Token, statements: Optional[List[Statement]] = None):
        super().__init__()
        self.token = token
        self.statements: List[Statement] = []
        for stmt in statements or []:
            self.append(stmt)

    def append(self, stmt: Statement):
        self.statements.append(self._adopt(stmt))

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block_statement(self)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __len__(self) -> int:
        return len(self.statements)


class IfStatement(Statement):
    """
    if (cond) { ... } with an optional alternative.

    The alternative is either a BlockStatement or, for else-if chains,
    another IfStatement.
    """
    node_type = ASTNodeType.IF_STATEMENT

    def __init__(self, token: Token, condition: Expression, consequence: BlockStatement,
                 alternative: Optional[Statement] = None):
        super().__init__()
        self.token = token
        self.condition = self._adopt(condition)
        self.consequence = self._adopt(consequence)
        self.alternative = self._adopt(alternative)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if_statement(self)

    def children(self) -> List[ASTNode]:
        children = [self.condition, self.consequence]
        if self.alternative is not None:
            children.append(self.alternative)
        return children


class ForStatement(Statement):
    """for (init; cond; update) { ... }; every clause may be empty."""
    node_type = ASTNodeType.FOR_STATEMENT

    def __init__(self, token: Token, initializer: Optional[Statement],
                 condition: Optional[Expression], update: Optional[Expression],
                 body: BlockStatement):
        super().__init__()
        self.token = token
        self.initializer = self._adopt(initializer)
        self.condition = self._adopt(condition)
        self.update = self._adopt(update)
        self.body = self._adopt(body)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_for_statement(self)

    def children(self) -> List[ASTNode]:
        parts = [self.initializer, self.condition, self.update, self.body]
        return [part for part in parts if part is not None]


class WhileStatement(Statement):
    """while (cond) { ... }"""
    node_type = ASTNodeType.WHILE_STATEMENT

    def __init__(self, token: Token, condition: Expression, body: BlockStatement):
        super().__init__()
        self.token = token
        self.condition = self._adopt(condition)
        self.body = self._adopt(body)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_while_statement(self)

    def children(self) -> List[ASTNode]:
        return [self.condition, self.body]


class BreakStatement(Statement):
    node_type = ASTNodeType.BREAK_STATEMENT

    def __init__(self, token: Token):
        super().__init__()
        self.token = token

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_break_statement(self)

    def children(self) -> List[ASTNode]:
        return []


class ContinueStatement(Statement):
    node_type = ASTNodeType.CONTINUE_STATEMENT

    def __init__(self, token: Token):
        super().__init__()
        self.token = token

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_continue_statement(self)

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Literals
# ============================================================================

class Identifier(Expression):
    """x, myVariable, add"""
    node_type = ASTNodeType.IDENTIFIER

    def __init__(self, token: Token):
        super().__init__()
        self.token = token

    @property
    def value(self) -> str:
        return self.token.lexeme

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier(self)

    def children(self) -> List[ASTNode]:
        return []

    def owned_tokens(self) -> List[Token]:
        return [self.token]

    def __repr__(self) -> str:
        return f"Identifier({self.value!r})"


class IntegerLiteral(Expression):
    """42, 100"""
    node_type = ASTNodeType.INTEGER_LITERAL

    def __init__(self, token: Token, value: int):
        super().__init__()
        self.token = token
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_literal(self)

    def children(self) -> List[ASTNode]:
        return []

    def owned_tokens(self) -> List[Token]:
        return [self.token]

    def __repr__(self) -> str:
        return f"IntegerLiteral({self.value})"


class StringLiteral(Expression):
    """
    "hello world"

    ``token`` keeps the raw lexeme with its delimiters; ``value`` is the
    text between them with escaped delimiters unescaped.
    """
    node_type = ASTNodeType.STRING_LITERAL

    def __init__(self, token: Token, value: str):
        super().__init__()
        self.token = token
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_string_literal(self)

    def children(self) -> List[ASTNode]:
        return []

    def owned_tokens(self) -> List[Token]:
        return [self.token]

    def __repr__(self) -> str:
        return f"StringLiteral({self.value!r})"


class BooleanLiteral(Expression):
    """true, false"""
    node_type = ASTNodeType.BOOLEAN_LITERAL

    def __init__(self, token: Token, value: bool):
        super().__init__()
        self.token = token
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_boolean_literal(self)

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"BooleanLiteral({self.value})"


# ============================================================================
# Operators
# ============================================================================

class PrefixExpression(Expression):
    """!isReady, -count"""
    node_type = ASTNodeType.PREFIX_EXPRESSION

    def __init__(self, operator: Token, right: Expression):
        super().__init__()
        self.operator = operator
        self.right = self._adopt(right)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_prefix_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.right]

    def __repr__(self) -> str:
        return f"PrefixExpression({self.operator.lexeme!r}, {self.right!r})"


class InfixExpression(Expression):
    """x + y, a == b"""
    node_type = ASTNodeType.INFIX_EXPRESSION

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__()
        self.left = self._adopt(left)
        self.operator = operator
        self.right = self._adopt(right)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_infix_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def __repr__(self) -> str:
        return f"InfixExpression({self.left!r}, {self.operator.lexeme!r}, {self.right!r})"


class AssignmentExpression(Expression):
    """x = 42; right associative, so a = b = c nests to the right."""
    node_type = ASTNodeType.ASSIGNMENT_EXPRESSION

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__()
        self.left = self._adopt(left)
        self.operator = operator
        self.right = self._adopt(right)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assignment_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def __repr__(self) -> str:
        return f"AssignmentExpression({self.left!r}, {self.right!r})"


# ============================================================================
# Functions, collections, classes
# ============================================================================

class FunctionLiteral(Expression):
    """func(x, y) { return x + y; }"""
    node_type = ASTNodeType.FUNCTION_LITERAL

    def __init__(self, token: Token, parameters: List[Token], body: BlockStatement):
        super().__init__()
        self.token = token
        self.parameters = list(parameters)
        self.body = self._adopt(body)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_literal(self)

    def children(self) -> List[ASTNode]:
        return [self.body]

    def owned_tokens(self) -> List[Token]:
        return list(self.parameters)


class CallExpression(Expression):
    """add(1, 2)"""
    node_type = ASTNodeType.CALL_EXPRESSION

    def __init__(self, function: Expression, arguments: List[Expression]):
        super().__init__()
        self.function = self._adopt(function)
        self.arguments = [self._adopt(arg) for arg in arguments]

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.function] + self.arguments


class ArrayLiteral(Expression):
    """[1, "two", x]"""
    node_type = ASTNodeType.ARRAY_LITERAL

    def __init__(self, token: Token, elements: List[Expression]):
        super().__init__()
        self.token = token
        self.elements = [self._adopt(element) for element in elements]

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array_literal(self)

    def children(self) -> List[ASTNode]:
        return list(self.elements)


class IndexExpression(Expression):
    """myArray[0], obj["key"]"""
    node_type = ASTNodeType.INDEX_EXPRESSION

    def __init__(self, left: Expression, index: Expression):
        super().__init__()
        self.left = self._adopt(left)
        self.index = self._adopt(index)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_index_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.index]


class ClassLiteral(Expression):
    """
    class MyClass { ... }

    Part of the node set so later stages can rely on it; the parser does
    not produce it yet.
    """
    node_type = ASTNodeType.CLASS_LITERAL

    def __init__(self, token: Token, name: Token, body: BlockStatement):
        super().__init__()
        self.token = token
        self.name = name
        self.body = self._adopt(body)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_class_literal(self)

    def children(self) -> List[ASTNode]:
        return [self.body]

    def owned_tokens(self) -> List[Token]:
        return [self.name]


class MemberAccessExpression(Expression):
    """
    obj.property

    Not produced by the parser yet: the scanner has no '.' token.
    """
    node_type = ASTNodeType.MEMBER_ACCESS_EXPRESSION

    def __init__(self, target: Expression, member: Token):
        super().__init__()
        self.target = self._adopt(target)
        self.member = member

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_member_access_expression(self)

    def children(self) -> List[ASTNode]:
        return [self.target]

    def owned_tokens(self) -> List[Token]:
        return [self.member]


# Alias for the main AST type
AST = Program
