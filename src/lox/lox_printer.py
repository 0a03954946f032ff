"""
Renders Lox AST nodes as parenthesized, Lisp-style text.

This module defines the `AstPrinter` class, used to inspect parser output in
tests, in the CLI, and while debugging. Every operator and statement is written
in prefix position with its operands, so precedence and associativity are
visible at a glance:

    1 - 2 - 3       →  (- (- 1.0 2.0) 3.0)
    -2 * 3          →  (* (- 2.0) 3.0)
    a = b = c       →  (= a (= b c))
    print a.b(1);   →  (print (call (. a b) 1.0))

Statements that error recovery replaced with `None` render as ``<error>``.
"""

from __future__ import annotations

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    Call,
    Class,
    Expression,
    Function,
    Get,
    Grouping,
    If,
    Literal,
    Logical,
    Node,
    Print,
    Return,
    Set,
    This,
    Unary,
    Var,
    Variable,
    While,
)
from lox.lox_token import LiteralValue

ERROR_PLACEHOLDER = "<error>"


class AstPrinter:
    """Converts expression and statement trees to strings.

    Methods:
        render(node): Returns the text form of one node.
        render_program(statements): Renders a statement list, one per line.
    """

    def render_program(self, statements: list[Node | None]) -> str:
        return "\n".join(self.render(stmt) for stmt in statements)

    def render(self, node: Node | None) -> str:
        """
        Dispatches on the node variant and returns its text form.

        Raises
        ------
        TypeError
            If `node` is not an AST node or None.
        """
        match node:
            case None:
                return ERROR_PLACEHOLDER
            case Literal(value):
                return self.render_literal(value)
            case Grouping(expression):
                return self.parenthesize("group", expression)
            case Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Binary(left, operator, right) | Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Variable(name):
                return name.lexeme
            case Assign(name, value):
                return self.parenthesize("=", name.lexeme, value)
            case Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)
            case Get(obj, name):
                return self.parenthesize(".", obj, name.lexeme)
            case Set(obj, name, value):
                return self.parenthesize("=", obj, name.lexeme, value)
            case This():
                return "this"
            case Expression(expression):
                return self.parenthesize(";", expression)
            case Print(expression):
                return self.parenthesize("print", expression)
            case Var(name, None):
                return self.parenthesize("var", name.lexeme)
            case Var(name, initializer):
                return self.parenthesize("var", name.lexeme, "=", initializer)
            case Block(statements):
                return self.parenthesize("block", *statements)
            case If(condition, then_branch, None):
                return self.parenthesize("if", condition, then_branch)
            case If(condition, then_branch, else_branch):
                return self.parenthesize("if-else", condition, then_branch, else_branch)
            case While(condition, body):
                return self.parenthesize("while", condition, body)
            case Function():
                return self.render_function(node)
            case Return(_, None):
                return "(return)"
            case Return(_, value):
                return self.parenthesize("return", value)
            case Class(name, methods):
                return self.parenthesize("class", name.lexeme, *methods)
        raise TypeError(f"Cannot render {node!r}")

    def render_literal(self, value: LiteralValue) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def render_function(self, node: Function) -> str:
        params = " ".join(param.lexeme for param in node.params)
        head = f"fun {node.name.lexeme}({params})"
        return self.parenthesize(head, *node.body)

    def parenthesize(self, name: str, *parts: Node | str | None) -> str:
        # plain strings are emitted as-is, nodes are rendered recursively
        pieces = [name]
        for part in parts:
            pieces.append(part if isinstance(part, str) else self.render(part))
        return f"({' '.join(pieces)})"


__all__ = ["AstPrinter", "ERROR_PLACEHOLDER"]
