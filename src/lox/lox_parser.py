"""
Lox Language Parser

Parses Lox tokens into an abstract syntax tree of `lox.lox_ast` nodes.

This module implements a single-pass recursive-descent parser. Operator
precedence is encoded by the order of the expression methods, weakest binding
first:

    assignment → or → and → equality → comparison → term → factor → unary → call → primary

Grammar
-------
    program     → declaration* EOF
    declaration → classDecl | funDecl | varDecl | statement
    classDecl   → "class" IDENTIFIER "{" function* "}"
    funDecl     → "fun" function
    function    → IDENTIFIER "(" parameters? ")" block
    varDecl     → "var" IDENTIFIER ( "=" expression )? ";"
    statement   → exprStmt | forStmt | ifStmt | printStmt | returnStmt | whileStmt | block
    forStmt     → "for" "(" ( varDecl | exprStmt | ";" ) expression? ";" expression? ")" statement
    ifStmt      → "if" "(" expression ")" statement ( "else" statement )?
    returnStmt  → "return" expression? ";"
    whileStmt   → "while" "(" expression ")" statement
    block       → "{" declaration* "}"
    assignment  → ( call "." )? IDENTIFIER "=" assignment | logic_or
    call        → primary ( "(" arguments? ")" | "." IDENTIFIER )*
    primary     → NUMBER | STRING | "true" | "false" | "nil" | "this"
                | "(" expression ")" | IDENTIFIER

Parser Behavior
---------------
- Never raises on bad input. Every syntax error goes to the diagnostic sink.
- A missing required token raises `ParseError`, which is caught only in
  `parse_declaration()`. The parser then skips ahead to the next statement
  boundary and records `None` in place of the abandoned declaration.
- Invalid assignment targets and oversized argument or parameter lists are
  reported without interrupting the parse.
- `for` loops are desugared into `While` and `Block` nodes.
- Assignment chains and `else if` chains are read in a loop, so their length
  is not bounded by recursion.
- Expressions nested deeper than `max_depth`, or statements and functions
  nested deeper than `max_statement_depth`, are reported as "Too much
  nesting." and the whole top-level declaration is skipped.

Entry Points
------------
- `parse()`: Parse a full program into a list of top-level statements.

Returns
-------
list[Stmt | None]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    Call,
    Class,
    Expr,
    Expression,
    Function,
    Get,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Return,
    Set,
    Stmt,
    This,
    Unary,
    Var,
    Variable,
    While,
)
from lox.lox_constants import (
    AND,
    BANG,
    BANG_EQUAL,
    CLASS,
    COMMA,
    DOT,
    ELSE,
    EOF,
    EQUAL,
    EQUAL_EQUAL,
    FALSE,
    FOR,
    FUN,
    GREATER,
    GREATER_EQUAL,
    IDENTIFIER,
    IF,
    LEFT_BRACE,
    LEFT_PAREN,
    LESS,
    LESS_EQUAL,
    MAX_ARGUMENTS,
    MAX_NESTING_DEPTH,
    MAX_STATEMENT_DEPTH,
    MINUS,
    NIL,
    NUMBER,
    OR,
    PLUS,
    PRINT,
    RETURN,
    RIGHT_BRACE,
    RIGHT_PAREN,
    SEMICOLON,
    SLASH,
    STAR,
    STRING,
    SYNC_TOKENS,
    THIS,
    TRUE,
    VAR,
    WHILE,
)
from lox.lox_errors import DiagnosticSink, ErrorReporter, ParseError
from lox.lox_token import Token, eof_token

logger = logging.getLogger(__name__)


class NestingError(ParseError):
    """Raised when the nesting limit is exceeded; unwinds to the top level."""


class Parser:
    """
    Lox Parser Class

    Transforms a list of tokens into a list of statements. One instance parses
    one token sequence once.

    Attributes
    ----------
    tokens : tuple[Token, ...]
        The input token stream, always terminated by an EOF token.
    current : int
        Index of the next token to consume. Only ever moves forward.
    reporter : DiagnosticSink
        Receives `(token, message)` for every syntax error.
    max_depth : int
        Deepest allowed nesting of expressions (groupings, call arguments,
        prefix operators).
    max_statement_depth : int
        Deepest allowed nesting of statements and function bodies.

    Methods
    -------
    parse() -> list[Stmt | None]
        Parse a complete program.
    parse_declaration() -> Stmt | None
        Parse one declaration, recovering from syntax errors.
    parse_statement() -> Stmt
        Parse one statement.
    parse_expression() -> Expr
        Parse one expression.
    synchronize() -> None
        Skip tokens up to the next likely statement boundary.
    skip_declaration(start) -> None
        Skip past the end of an over-nested declaration.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        reporter: DiagnosticSink | None = None,
        max_depth: int = MAX_NESTING_DEPTH,
        max_statement_depth: int = MAX_STATEMENT_DEPTH,
    ) -> None:
        stream = tuple(tokens)
        if not stream or stream[-1].type != EOF:
            stream += (eof_token(stream[-1].line if stream else 1),)
        self.tokens: tuple[Token, ...] = stream
        self.current: int = 0
        self.reporter: DiagnosticSink = (
            reporter if reporter is not None else ErrorReporter()
        )
        self.max_depth: int = max_depth
        self.max_statement_depth: int = max_statement_depth
        self._depth: dict[str, int] = {"expression": 0, "statement": 0}

    # ------------------------------------------------------------------
    # Token cursor
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous() if self.current > 0 else self.peek()

    def check(self, type_: str) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == type_

    def match(self, *types: str) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: str, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        """Report a diagnostic and return (not raise) the matching ParseError."""
        self.reporter(token, message)
        return ParseError(token, message)

    @contextmanager
    def _nested(self, kind: str = "expression") -> Iterator[None]:
        limit = self.max_statement_depth if kind == "statement" else self.max_depth
        if self._depth[kind] >= limit:
            token = self.peek()
            self.reporter(token, "Too much nesting.")
            raise NestingError(token, "Too much nesting.")
        self._depth[kind] += 1
        try:
            yield
        finally:
            self._depth[kind] -= 1

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def parse(self) -> list[Stmt | None]:
        """Parse a full Lox program and return its top-level statements."""
        statements: list[Stmt | None] = []
        while not self.is_at_end():
            statements.append(self.parse_declaration())
        return statements

    def parse_declaration(self) -> Stmt | None:
        """Parse a class, function, or variable declaration, or a statement.

        Returns None when the declaration had a fatal syntax error; the cursor
        is then left at the next statement boundary.
        """
        start = self.current
        try:
            if self.match(CLASS):
                return self.parse_class()
            if self.match(FUN):
                return self.parse_function("function")
            if self.match(VAR):
                return self.parse_var()
            return self.parse_statement()
        except NestingError:
            if any(self._depth.values()):
                raise
            self.skip_declaration(start)
            return None
        except ParseError:
            self.synchronize(start)
            return None

    def parse_class(self) -> Class:
        name = self.consume(IDENTIFIER, "Expect class name.")
        self.consume(LEFT_BRACE, "Expect '{' before class body.")

        methods: list[Function] = []
        while not self.check(RIGHT_BRACE) and not self.is_at_end():
            methods.append(self.parse_function("method"))

        self.consume(RIGHT_BRACE, "Expect '}' after class body.")
        return Class(name, tuple(methods))

    def parse_function(self, kind: str) -> Function:
        """Parse a function or method; `kind` only shapes the error messages."""
        with self._nested("statement"):
            name = self.consume(IDENTIFIER, f"Expect {kind} name.")
            self.consume(LEFT_PAREN, f"Expect '(' after {kind} name.")
            params: list[Token] = []
            if not self.check(RIGHT_PAREN):
                while True:
                    if len(params) >= MAX_ARGUMENTS:
                        self.error(
                            self.peek(),
                            f"Can't have more than {MAX_ARGUMENTS} parameters.",
                        )
                    params.append(self.consume(IDENTIFIER, "Expect parameter name."))
                    if not self.match(COMMA):
                        break
            self.consume(RIGHT_PAREN, "Expect ')' after parameters.")

            self.consume(LEFT_BRACE, f"Expect '{{' before {kind} body.")
            body = self.parse_block()
            return Function(name, tuple(params), tuple(body))

    def parse_var(self) -> Var:
        name = self.consume(IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(EQUAL):
            initializer = self.parse_expression()

        self.consume(SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_statement(self) -> Stmt:
        """Parse a single statement, dispatching on its leading token."""
        with self._nested("statement"):
            if self.match(FOR):
                return self.parse_for()
            if self.match(IF):
                return self.parse_if()
            if self.match(PRINT):
                return self.parse_print()
            if self.match(RETURN):
                return self.parse_return()
            if self.match(WHILE):
                return self.parse_while()
            if self.match(LEFT_BRACE):
                return Block(tuple(self.parse_block()))
            return self.parse_expression_statement()

    def parse_block(self) -> list[Stmt | None]:
        """Parse declarations up to the closing brace; `{` is already consumed."""
        statements: list[Stmt | None] = []
        while not self.check(RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.parse_declaration())

        self.consume(RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def parse_for(self) -> Stmt:
        """Parse a `for` loop and rewrite it as a `while` loop."""
        self.consume(LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Stmt | None
        if self.match(SEMICOLON):
            initializer = None
        elif self.match(VAR):
            initializer = self.parse_var()
        else:
            initializer = self.parse_expression_statement()

        condition = None
        if not self.check(SEMICOLON):
            condition = self.parse_expression()
        self.consume(SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(RIGHT_PAREN):
            increment = self.parse_expression()
        self.consume(RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.parse_statement()

        if increment is not None:
            body = Block((body, Expression(increment)))
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block((initializer, body))

        return body

    def parse_if(self) -> If:
        """Parse an `if` statement and any `else if` arms that follow it.

        The arms are collected in a loop and folded into nested `If` nodes,
        so a long `else if` chain costs one nesting level, not one per arm.
        """
        arms: list[tuple[Expr, Stmt]] = []
        else_branch: Stmt | None = None
        while True:
            self.consume(LEFT_PAREN, "Expect '(' after 'if'.")
            condition = self.parse_expression()
            self.consume(RIGHT_PAREN, "Expect ')' after if condition.")
            arms.append((condition, self.parse_statement()))

            # greedy: `else` belongs to the innermost `if`
            if not self.match(ELSE):
                break
            if not self.match(IF):
                else_branch = self.parse_statement()
                break

        condition, then_branch = arms.pop()
        node = If(condition, then_branch, else_branch)
        for condition, then_branch in reversed(arms):
            node = If(condition, then_branch, node)
        return node

    def parse_print(self) -> Print:
        value = self.parse_expression()
        self.consume(SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def parse_return(self) -> Return:
        keyword = self.previous()
        value = None
        if not self.check(SEMICOLON):
            value = self.parse_expression()

        self.consume(SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def parse_while(self) -> While:
        self.consume(LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(RIGHT_PAREN, "Expect ')' after condition.")
        body = self.parse_statement()
        return While(condition, body)

    def parse_expression_statement(self) -> Expression:
        expr = self.parse_expression()
        self.consume(SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expr:
        with self._nested():
            return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        """Parse a right-associative assignment, or fall through to `or`.

        `a = b = c` is read left to right as the operands `a`, `b`, `c`, then
        folded from the right into `Assign(a, Assign(b, c))`.
        """
        targets: list[tuple[Expr, Token]] = []
        expr = self.parse_or()
        while self.match(EQUAL):
            targets.append((expr, self.previous()))
            expr = self.parse_or()

        for target, equals in reversed(targets):
            match target:
                case Variable(name):
                    expr = Assign(name, expr)
                case Get(obj, name):
                    expr = Set(obj, name, expr)
                case _:
                    # reported, not raised: the left-hand side is kept as parsed
                    self.error(equals, "Invalid assignment target.")
                    expr = target

        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()

        while self.match(OR):
            operator = self.previous()
            right = self.parse_and()
            expr = Logical(expr, operator, right)

        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()

        while self.match(AND):
            operator = self.previous()
            right = self.parse_equality()
            expr = Logical(expr, operator, right)

        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()

        while self.match(BANG_EQUAL, EQUAL_EQUAL):
            operator = self.previous()
            right = self.parse_comparison()
            expr = Binary(expr, operator, right)

        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()

        while self.match(GREATER, GREATER_EQUAL, LESS, LESS_EQUAL):
            operator = self.previous()
            right = self.parse_term()
            expr = Binary(expr, operator, right)

        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()

        while self.match(MINUS, PLUS):
            operator = self.previous()
            right = self.parse_factor()
            expr = Binary(expr, operator, right)

        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()

        while self.match(SLASH, STAR):
            operator = self.previous()
            right = self.parse_unary()
            expr = Binary(expr, operator, right)

        return expr

    def parse_unary(self) -> Expr:
        if self.match(BANG, MINUS):
            operator = self.previous()
            with self._nested():
                right = self.parse_unary()
            return Unary(operator, right)

        return self.parse_call()

    def parse_call(self) -> Expr:
        """Parse a primary expression followed by any call or property suffixes."""
        expr = self.parse_primary()

        while True:
            if self.match(LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(DOT):
                name = self.consume(IDENTIFIER, "Expect property name after '.'.")
                expr = Get(expr, name)
            else:
                break

        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: list[Expr] = []
        if not self.check(RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(
                        self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments."
                    )
                arguments.append(self.parse_expression())
                if not self.match(COMMA):
                    break

        paren = self.consume(RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def parse_primary(self) -> Expr:
        if self.match(FALSE):
            return Literal(False)
        if self.match(TRUE):
            return Literal(True)
        if self.match(NIL):
            return Literal(None)

        if self.match(NUMBER, STRING):
            return Literal(self.previous().literal)

        if self.match(LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        if self.match(IDENTIFIER):
            return Variable(self.previous())

        if self.match(THIS):
            return This(self.previous())

        raise self.error(self.peek(), "Expect expression.")

    # ------------------------------------------------------------------
    # Error recovery
    # ------------------------------------------------------------------

    def synchronize(self, start: int | None = None) -> None:
        """Discard tokens until just after a `;` or just before a statement keyword.

        At least one token is always skipped, except when the failed
        declaration (which began at index `start`) already consumed tokens
        and the cursor now sits on a statement keyword: that keyword starts
        the next declaration and is kept.
        """
        skipped_from = self.current
        if (
            start is None
            or self.current == start
            or self.peek().type not in SYNC_TOKENS
        ):
            self.advance()

            while not self.is_at_end():
                if self.previous().type == SEMICOLON:
                    break
                if self.peek().type in SYNC_TOKENS:
                    break
                self.advance()

        logger.debug(
            "resynchronized at line %d after skipping %d token(s)",
            self.peek().line,
            self.current - skipped_from,
        )

    def skip_declaration(self, start: int) -> None:
        """Move the cursor past the end of the declaration that began at `start`.

        Used after a nesting error, where the declaration is abandoned as a
        whole. The end is the first `;` or `}` that leaves every bracket opened
        since `start` closed again and is not followed by `else`.
        """
        balance = 0
        index = start
        while self.tokens[index].type != EOF:
            type_ = self.tokens[index].type
            index += 1
            if type_ in (LEFT_PAREN, LEFT_BRACE):
                balance += 1
            elif type_ in (RIGHT_PAREN, RIGHT_BRACE):
                balance -= 1
            if (
                balance <= 0
                and type_ in (SEMICOLON, RIGHT_BRACE)
                and self.tokens[index].type != ELSE
            ):
                break

        skipped_from = self.current
        self.current = max(self.current, index)
        logger.debug(
            "skipped over-nested declaration at line %d (%d token(s))",
            self.tokens[start].line,
            self.current - skipped_from,
        )


__all__ = ["NestingError", "Parser"]
