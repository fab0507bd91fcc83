"""
Korelin Pratt Parser Implementation

Top-down operator precedence parser over a two-token window (current and
peek) pulled from the lexer on demand. Statements are parsed by keyword
dispatch, expressions by prefix/infix tables and a precedence ladder.

Errors are raised as ParseError inside productions and caught at statement
boundaries, at top level and inside blocks. The parser then records the
diagnostic, synchronizes to the next statement and keeps going, so one
parse reports every independent syntax error.

Ownership rules the productions follow:
- moving the window releases the token that leaves it
- nodes keep their own copies of identifier and literal tokens
- a production that fails releases the subtrees it built itself; a
  ``left`` operand handed to an infix production stays with the caller
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Type, Union

from ..config import ParserConfig
from ..lexer import Lexer
from ..lexer.errors import LexerError, LexerWarning
from ..lexer.tokens import Token, TokenType
from ..ownership import OwnershipLedger
from .ast_nodes import (
    ASTNode, Program, Statement, Expression, LetStatement, VarStatement,
    ReturnStatement, ExpressionStatement, BlockStatement, IfStatement,
    ForStatement, WhileStatement, BreakStatement, ContinueStatement,
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, AssignmentExpression, FunctionLiteral,
    CallExpression, ArrayLiteral, IndexExpression
)
from .errors import (
    ParseError, ParseWarning, LexicalTokenError, STATEMENT_STARTERS,
    create_unexpected_token_error, create_unclosed_delimiter_error,
    create_invalid_expression_error, create_invalid_integer_error,
    create_nesting_too_deep_error, create_resource_exhaustion_error,
    create_jump_outside_loop_warning
)
from .teardown import release_tree

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    LOWEST = 0
    ASSIGNMENT = 1      # =, +=, -=, &=, |=
    OR = 2              # ||
    AND = 3             # &&
    EQUALITY = 4        # ==, !=
    COMPARISON = 5      # <, >, <=, >=
    TERM = 6            # +, -
    FACTOR = 7          # *, /, %
    UNARY = 8           # !x, -x
    CALL = 9            # f(x)
    INDEX = 10          # a[i]


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.ASSIGN: Precedence.ASSIGNMENT,
    TokenType.PLUS_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.MINUS_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.BIT_AND_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.BIT_OR_ASSIGN: Precedence.ASSIGNMENT,

    TokenType.LOGICAL_OR: Precedence.OR,
    TokenType.LOGICAL_AND: Precedence.AND,

    TokenType.EQUAL: Precedence.EQUALITY,
    TokenType.NOT_EQUAL: Precedence.EQUALITY,

    TokenType.LESS_THAN: Precedence.COMPARISON,
    TokenType.GREATER_THAN: Precedence.COMPARISON,
    TokenType.LESS_EQUAL: Precedence.COMPARISON,
    TokenType.GREATER_EQUAL: Precedence.COMPARISON,

    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,

    TokenType.MULTIPLY: Precedence.FACTOR,
    TokenType.DIVIDE: Precedence.FACTOR,
    TokenType.MODULO: Precedence.FACTOR,

    TokenType.LEFT_PAREN: Precedence.CALL,
    TokenType.LEFT_BRACKET: Precedence.INDEX,
}


def string_value(lexeme: str) -> str:
    """
    Text of a string literal lexeme without its delimiters.

    An escaped delimiter becomes the bare delimiter. An unterminated literal
    (no closing delimiter) only loses its opening one.
    """
    quote = lexeme[:1]
    if not quote:
        return ""
    terminated = (len(lexeme) >= 2 and lexeme[-1] == quote
                  and (len(lexeme) == 2 or lexeme[-2] != "\\"))
    body = lexeme[1:-1] if terminated else lexeme[1:]
    return body.replace("\\" + quote, quote)


class Parser:
    """
    Korelin Pratt parser.

    Owns the two-token window it pulls from ``lexer``. After
    parse_program() returns, every token the lexer handed out has been
    released or copied into the tree.
    """

    def __init__(self, lexer: Lexer, config: Optional[ParserConfig] = None):
        self.lexer = lexer
        self.config = config if config is not None else ParserConfig()
        self.ledger: OwnershipLedger = lexer.ledger
        self.errors: List[ParseError] = []
        self.warnings: List[ParseWarning] = []

        self._depth = 0
        self._loop_depth = 0
        self._finished = False

        # Filled by parse_program(), so an unused parser holds no tokens
        self.current: Optional[Token] = None
        self.peek: Optional[Token] = None

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize statement dispatch and expression parsing tables."""

        self.statement_parsers: Dict[TokenType, Callable[[], Statement]] = {
            TokenType.LET: self._parse_let_statement,
            TokenType.VAR: self._parse_var_statement,
            TokenType.RETURN: self._parse_return_statement,
            TokenType.IF: self._parse_if_statement,
            TokenType.LEFT_BRACE: self.parse_block_statement,
            TokenType.WHILE: self._parse_while_statement,
            TokenType.FOR: self._parse_for_statement,
            TokenType.BREAK: self._parse_break_statement,
            TokenType.CONTINUE: self._parse_continue_statement,
        }

        # Tokens that can start an expression
        self.prefix_parsers: Dict[TokenType, Callable[[], Expression]] = {
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.INTEGER: self._parse_integer_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
            TokenType.LOGICAL_NOT: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LEFT_PAREN: self._parse_grouped_expression,
            TokenType.LEFT_BRACKET: self._parse_array_literal,
            TokenType.FUNC: self._parse_function_literal,
        }

        # Tokens that continue an expression
        self.infix_parsers: Dict[TokenType, Callable[[Expression], Expression]] = {
            TokenType.LEFT_PAREN: self._parse_call_expression,
            TokenType.LEFT_BRACKET: self._parse_index_expression,
        }
        for token_type, precedence in PRECEDENCES.items():
            if precedence is Precedence.ASSIGNMENT:
                self.infix_parsers[token_type] = self._parse_assignment_expression
            elif token_type not in self.infix_parsers:
                self.infix_parsers[token_type] = self._parse_infix_expression

    # ------------------------------------------------------------------
    # Token window
    # ------------------------------------------------------------------

    def _advance(self):
        """Shift peek into current and pull a new peek from the lexer."""
        self._release_token(self.current)
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def _current_is(self, token_type: TokenType) -> bool:
        return self.current.type is token_type

    def _peek_is(self, token_type: TokenType) -> bool:
        return self.peek.type is token_type

    def _expect_peek(self, token_type: TokenType):
        """Advance if peek has the expected kind, otherwise raise without moving."""
        if self._peek_is(TokenType.ERROR):
            raise LexicalTokenError(self.peek)
        if not self._peek_is(token_type):
            raise create_unexpected_token_error(token_type, self.peek)
        self._advance()

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek.type, Precedence.LOWEST)

    def _current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    def _skip_to_statement_end(self):
        """Discard tokens up to the next ';' (left as current) or EOF."""
        while not self._current_is(TokenType.SEMICOLON) and not self._current_is(TokenType.EOF):
            self._advance()

    # ------------------------------------------------------------------
    # Ownership helpers
    # ------------------------------------------------------------------

    def _track(self, node: ASTNode) -> ASTNode:
        return self.ledger.acquire(node)

    def _copy(self, token: Token) -> Token:
        return token.copy(self.ledger)

    def _release_token(self, token: Optional[Token]):
        if token is not None and token.owns_lexeme:
            self.ledger.release(token)

    def _discard(self, *parts: Union[None, ASTNode, Token]):
        """Release partial work after a failed production."""
        for part in parts:
            if isinstance(part, ASTNode):
                release_tree(part, self.ledger)
            else:
                self._release_token(part)

    def _release_window(self):
        self._release_token(self.current)
        self._release_token(self.peek)

    @contextmanager
    def _nested(self):
        """Count one level of expression or block nesting."""
        self._depth += 1
        try:
            if self._depth > self.config.max_nesting_depth:
                raise create_nesting_too_deep_error(self.config.max_nesting_depth, self.current)
            yield
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------
    # Diagnostics and recovery
    # ------------------------------------------------------------------

    def _record(self, error: ParseError):
        if isinstance(error, LexicalTokenError):
            logger.debug("%s: statement dropped at lexical error", error.location)
            return
        self.errors.append(error)
        logger.debug("%s: [%s] %s", error.location, error.code, error.diagnostic.message)

    def _warn(self, warning: ParseWarning):
        self.warnings.append(warning)
        logger.debug("%s: [%s] %s", warning.location, warning.diagnostic.code,
                     warning.diagnostic.message)

    def _synchronize(self, inside_block: bool = False):
        """
        Skip to the next statement boundary after a syntax error.

        Consumes at least one token unless it already sits on the closing
        '}' of a block. Stops after a consumed ';', in front of a statement
        keyword or at EOF; inside a block also in front of '}'.
        """
        start = self.current
        if inside_block and self._current_is(TokenType.RIGHT_BRACE):
            return

        while not self._current_is(TokenType.EOF):
            was_semicolon = self._current_is(TokenType.SEMICOLON)
            self._advance()
            if was_semicolon or self.current.type in STATEMENT_STARTERS:
                break
            if inside_block and self._current_is(TokenType.RIGHT_BRACE):
                break

        logger.debug("synchronized from %s to %s", start.location, self.current.location)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Optional[Program]:
        """
        Parse the whole input.

        Returns:
            The Program, which holds every statement that parsed; syntax
            errors are in ``errors``. None if the tree could not be grown
            (a P014 diagnostic is recorded and the partial tree released).
        """
        if self._finished:
            raise RuntimeError("parse_program() can only be called once per parser")
        self._finished = True

        self.current = self.lexer.next_token()
        self.peek = self.lexer.next_token()

        program = self._track(Program())

        while not self._current_is(TokenType.EOF):
            # Empty statement
            if self._current_is(TokenType.SEMICOLON):
                self._advance()
                continue

            try:
                stmt = self.parse_statement()
            except ParseError as error:
                self._record(error)
                self._synchronize()
                continue

            try:
                program.append(stmt)
            except MemoryError:
                logger.error("out of memory after %d statements", len(program))
                self._record(create_resource_exhaustion_error(self.current.location))
                self._discard(stmt, program)
                self._release_window()
                return None

            self._advance()

        self._release_window()
        return program

    def parse_statement(self) -> Statement:
        """Parse one statement starting at the current token."""
        statement_parser = self.statement_parsers.get(self.current.type)
        if statement_parser is not None:
            return statement_parser()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement:
        """let name [= value] ... ;"""
        return self._parse_binding(LetStatement)

    def _parse_var_statement(self) -> VarStatement:
        """var name [= value] ... ;"""
        return self._parse_binding(VarStatement)

    def _parse_binding(self, node_class: Type[Statement]) -> Statement:
        self._expect_peek(TokenType.IDENTIFIER)
        name = self._copy(self.current)

        value = None
        try:
            if self._peek_is(TokenType.ASSIGN):
                self._advance()
                self._advance()
                value = self.parse_expression(Precedence.LOWEST)
        except ParseError:
            self._discard(name)
            raise

        # Anything between the value and ';' is dropped
        self._skip_to_statement_end()
        return self._track(node_class(name, value))

    def _parse_return_statement(self) -> ReturnStatement:
        """return [value];"""
        token = self.current
        value = None

        if self._peek_is(TokenType.SEMICOLON):
            self._advance()
        elif not (self._peek_is(TokenType.EOF) or self._peek_is(TokenType.RIGHT_BRACE)):
            self._advance()
            value = self.parse_expression(Precedence.LOWEST)
            self._skip_to_statement_end()

        return self._track(ReturnStatement(token, value))

    def _parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression(Precedence.LOWEST)
        if self._peek_is(TokenType.SEMICOLON):
            self._advance()
        return self._track(ExpressionStatement(expression))

    def parse_block_statement(self) -> BlockStatement:
        """
        Parse a braced block; current is the opening '{'.

        A statement that fails inside the block is recorded and left out of
        it. Running into EOF records an unclosed-delimiter error and keeps
        the statements parsed so far. Ends with current on '}' (or EOF).
        """
        with self._nested():
            opening = self.current
            block = self._track(BlockStatement(opening))
            self._advance()

            while not self._current_is(TokenType.RIGHT_BRACE) and not self._current_is(TokenType.EOF):
                if self._current_is(TokenType.SEMICOLON):
                    self._advance()
                    continue

                try:
                    stmt = self.parse_statement()
                except ParseError as error:
                    self._record(error)
                    if self.config.recover_inside_blocks:
                        self._synchronize(inside_block=True)
                    elif not self._current_is(TokenType.RIGHT_BRACE):
                        self._advance()
                    continue

                block.append(stmt)
                self._advance()

            if self._current_is(TokenType.EOF):
                self._record(create_unclosed_delimiter_error(
                    opening.lexeme, opening.location, self.current.location))

            return block

    def _parse_if_statement(self) -> IfStatement:
        """if (cond) { ... } [else if ... | elseif ... | else { ... }]"""
        token = self.current
        self._expect_peek(TokenType.LEFT_PAREN)
        self._advance()

        condition = self.parse_expression(Precedence.LOWEST)
        consequence = None
        alternative = None
        try:
            self._expect_peek(TokenType.RIGHT_PAREN)
            self._expect_peek(TokenType.LEFT_BRACE)
            consequence = self.parse_block_statement()

            if self._peek_is(TokenType.ELSEIF):
                self._advance()
                alternative = self._parse_chained_if()
            elif self._peek_is(TokenType.ELSE):
                self._advance()
                if self._peek_is(TokenType.IF):
                    self._advance()
                    alternative = self._parse_chained_if()
                else:
                    self._expect_peek(TokenType.LEFT_BRACE)
                    alternative = self.parse_block_statement()
        except ParseError:
            self._discard(condition, consequence, alternative)
            raise

        return self._track(IfStatement(token, condition, consequence, alternative))

    def _parse_chained_if(self) -> IfStatement:
        with self._nested():
            return self._parse_if_statement()

    def _parse_while_statement(self) -> WhileStatement:
        """while (cond) { ... }"""
        token = self.current
        self._expect_peek(TokenType.LEFT_PAREN)
        self._advance()

        condition = self.parse_expression(Precedence.LOWEST)
        try:
            self._expect_peek(TokenType.RIGHT_PAREN)
            self._expect_peek(TokenType.LEFT_BRACE)
            body = self._parse_loop_body()
        except ParseError:
            self._discard(condition)
            raise

        return self._track(WhileStatement(token, condition, body))

    def _parse_for_statement(self) -> ForStatement:
        """for ([init]; [cond]; [update]) { ... }"""
        token = self.current
        self._expect_peek(TokenType.LEFT_PAREN)

        initializer = None
        condition = None
        update = None
        try:
            self._advance()
            if self._current_is(TokenType.LET) or self._current_is(TokenType.VAR):
                # Bindings run up to their own ';'
                initializer = self.parse_statement()
            elif not self._current_is(TokenType.SEMICOLON):
                expression = self.parse_expression(Precedence.LOWEST)
                initializer = self._track(ExpressionStatement(expression))
                self._expect_peek(TokenType.SEMICOLON)
            if not self._current_is(TokenType.SEMICOLON):
                raise create_unexpected_token_error(TokenType.SEMICOLON, self.current)

            if self._peek_is(TokenType.SEMICOLON):
                self._advance()
            else:
                self._advance()
                condition = self.parse_expression(Precedence.LOWEST)
                self._expect_peek(TokenType.SEMICOLON)

            if self._peek_is(TokenType.RIGHT_PAREN):
                self._advance()
            else:
                self._advance()
                update = self.parse_expression(Precedence.LOWEST)
                self._expect_peek(TokenType.RIGHT_PAREN)

            self._expect_peek(TokenType.LEFT_BRACE)
            body = self._parse_loop_body()
        except ParseError:
            self._discard(initializer, condition, update)
            raise

        return self._track(ForStatement(token, initializer, condition, update, body))

    def _parse_loop_body(self) -> BlockStatement:
        self._loop_depth += 1
        try:
            return self.parse_block_statement()
        finally:
            self._loop_depth -= 1

    def _parse_break_statement(self) -> BreakStatement:
        return self._parse_loop_jump(BreakStatement)

    def _parse_continue_statement(self) -> ContinueStatement:
        return self._parse_loop_jump(ContinueStatement)

    def _parse_loop_jump(self, node_class: Type[Statement]) -> Statement:
        token = self.current
        if self._loop_depth == 0:
            self._warn(create_jump_outside_loop_warning(token))
        if self._peek_is(TokenType.SEMICOLON):
            self._advance()
        return self._track(node_class(token))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> Expression:
        """
        Parse an expression whose operators all bind tighter than ``precedence``.

        Starts at the current token and ends with current on the last token
        of the expression.
        """
        with self._nested():
            prefix_parser = self.prefix_parsers.get(self.current.type)
            if prefix_parser is None:
                if self._current_is(TokenType.ERROR):
                    raise LexicalTokenError(self.current)
                raise create_invalid_expression_error(self.current)

            left = prefix_parser()
            try:
                while (not self._peek_is(TokenType.SEMICOLON)
                       and precedence < self._peek_precedence()):
                    infix_parser = self.infix_parsers.get(self.peek.type)
                    if infix_parser is None:
                        break
                    self._advance()
                    left = infix_parser(left)
            except ParseError:
                self._discard(left)
                raise

            return left

    # Prefix parsers (tokens that can start expressions)

    def _parse_identifier(self) -> Identifier:
        return self._track(Identifier(self._copy(self.current)))

    def _parse_integer_literal(self) -> IntegerLiteral:
        try:
            value = int(self.current.lexeme)
        except ValueError:
            raise create_invalid_integer_error(self.current) from None
        return self._track(IntegerLiteral(self._copy(self.current), value))

    def _parse_string_literal(self) -> StringLiteral:
        token = self.current
        return self._track(StringLiteral(self._copy(token), string_value(token.lexeme)))

    def _parse_boolean_literal(self) -> BooleanLiteral:
        token = self.current
        return self._track(BooleanLiteral(token, token.type is TokenType.TRUE))

    def _parse_prefix_expression(self) -> PrefixExpression:
        """!x, -x"""
        operator = self.current
        self._advance()
        right = self.parse_expression(Precedence.UNARY)
        return self._track(PrefixExpression(operator, right))

    def _parse_grouped_expression(self) -> Expression:
        """(expr); the parentheses leave no node behind."""
        self._advance()
        expression = self.parse_expression(Precedence.LOWEST)
        try:
            self._expect_peek(TokenType.RIGHT_PAREN)
        except ParseError:
            self._discard(expression)
            raise
        return expression

    def _parse_array_literal(self) -> ArrayLiteral:
        """[a, b, c]"""
        token = self.current
        elements = self._parse_expression_list(TokenType.RIGHT_BRACKET)
        return self._track(ArrayLiteral(token, elements))

    def _parse_function_literal(self) -> FunctionLiteral:
        """func(a, b) { ... }"""
        token = self.current
        self._expect_peek(TokenType.LEFT_PAREN)
        parameters = self._parse_parameters()

        # A function body starts a fresh loop context
        outer_loop_depth, self._loop_depth = self._loop_depth, 0
        try:
            self._expect_peek(TokenType.LEFT_BRACE)
            body = self.parse_block_statement()
        except ParseError:
            self._discard(*parameters)
            raise
        finally:
            self._loop_depth = outer_loop_depth

        return self._track(FunctionLiteral(token, parameters, body))

    def _parse_parameters(self) -> List[Token]:
        """Identifier list after '(' up to and including ')'."""
        parameters: List[Token] = []
        if self._peek_is(TokenType.RIGHT_PAREN):
            self._advance()
            return parameters

        try:
            self._expect_peek(TokenType.IDENTIFIER)
            parameters.append(self._copy(self.current))
            while self._peek_is(TokenType.COMMA):
                self._advance()
                self._expect_peek(TokenType.IDENTIFIER)
                parameters.append(self._copy(self.current))
            self._expect_peek(TokenType.RIGHT_PAREN)
        except ParseError:
            self._discard(*parameters)
            raise

        return parameters

    def _parse_expression_list(self, end: TokenType) -> List[Expression]:
        """Comma separated expressions after an opener, through ``end``."""
        items: List[Expression] = []
        if self._peek_is(end):
            self._advance()
            return items

        try:
            self._advance()
            items.append(self.parse_expression(Precedence.LOWEST))
            while self._peek_is(TokenType.COMMA):
                self._advance()
                self._advance()
                items.append(self.parse_expression(Precedence.LOWEST))
            self._expect_peek(end)
        except ParseError:
            self._discard(*items)
            raise

        return items

    # Infix parsers (current is the operator; ``left`` stays with the caller on failure)

    def _parse_infix_expression(self, left: Expression) -> InfixExpression:
        """Left associative binary operator."""
        operator = self.current
        precedence = self._current_precedence()
        self._advance()
        right = self.parse_expression(precedence)
        return self._track(InfixExpression(left, operator, right))

    def _parse_assignment_expression(self, left: Expression) -> AssignmentExpression:
        """Right associative: a = b = c is a = (b = c)."""
        operator = self.current
        self._advance()
        right = self.parse_expression(Precedence.LOWEST)
        return self._track(AssignmentExpression(left, operator, right))

    def _parse_call_expression(self, function: Expression) -> CallExpression:
        arguments = self._parse_expression_list(TokenType.RIGHT_PAREN)
        return self._track(CallExpression(function, arguments))

    def _parse_index_expression(self, left: Expression) -> IndexExpression:
        self._advance()
        index = self.parse_expression(Precedence.LOWEST)
        try:
            self._expect_peek(TokenType.RIGHT_BRACKET)
        except ParseError:
            self._discard(index)
            raise
        return self._track(IndexExpression(left, index))


AnyError = Union[LexerError, ParseError]
AnyWarning = Union[LexerWarning, ParseWarning]


@dataclass
class ParseResult:
    """Everything one parse produced."""
    program: Optional[Program]
    errors: List[AnyError] = field(default_factory=list)
    warnings: List[AnyWarning] = field(default_factory=list)
    ledger: OwnershipLedger = field(default_factory=OwnershipLedger)

    @property
    def ok(self) -> bool:
        return self.program is not None and not self.errors

    def release(self):
        """Tear down the tree; afterwards the ledger should be empty."""
        release_tree(self.program, self.ledger)
        self.program = None


def _by_offset(diagnostics: list) -> list:
    return sorted(diagnostics, key=lambda item: item.location.offset)


def parse_string(source: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        config: Parser settings; defaults to ParserConfig()

    Returns:
        ParseResult with lexical and syntax diagnostics ordered by offset
    """
    config = config if config is not None else ParserConfig()
    ledger = OwnershipLedger(enabled=config.track_ownership)
    lexer = Lexer(source, config.filename, ledger=ledger)
    parser = Parser(lexer, config)
    program = parser.parse_program()

    return ParseResult(
        program=program,
        errors=_by_offset(lexer.errors + parser.errors),
        warnings=_by_offset(lexer.warnings + parser.warnings),
        ledger=ledger,
    )


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to parse a source file.

    Raises:
        OSError: If file cannot be read
    """
    config = config if config is not None else ParserConfig()
    if config.filename == ParserConfig.filename:
        config = replace(config, filename=str(filepath))

    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()

    return parse_string(source, config)
