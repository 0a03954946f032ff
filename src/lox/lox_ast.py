"""
Defines the abstract syntax tree (AST) for the Lox programming language.

The tree is made of two closed families of immutable nodes:

    Expr:
        Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
        Call, Get, Set, This

    Stmt:
        Expression, Print, Var, Block, If, While, Function, Return, Class

Each family is a `Union` of frozen dataclasses, so consumers dispatch with
`match` statements instead of type inspection. Nodes that stand for a named
reference or an operator keep the originating `Token` for diagnostics.

There is no `for` node: the parser rewrites `for` loops into `Block`, `While`
and `Expression` statements.

Functions:
    to_dict(node): Serializes a node (or a `None` placeholder left by error
        recovery) into nested plain dictionaries, suitable for JSON output.

Example:
    >>> expr = Binary(Literal(1.0), Token("PLUS", "+", None, 1), Literal(2.0))
    >>> to_dict(expr)["kind"]
    'Binary'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from lox.lox_token import LiteralValue, Token

# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    value: LiteralValue


@dataclass(frozen=True)
class Grouping:
    expression: Expr


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical:
    """`and` / `or`. Short-circuiting is left to the evaluator."""

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: Expr


@dataclass(frozen=True)
class Call:
    """A call; `paren` is the closing parenthesis, used to locate runtime errors."""

    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Get:
    object: Expr
    name: Token


@dataclass(frozen=True)
class Set:
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True)
class This:
    keyword: Token


Expr = Union[
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call, Get, Set, This
]

# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Print:
    expression: Expr


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Expr | None = None


@dataclass(frozen=True)
class Block:
    # None marks an inner declaration dropped by error recovery
    statements: tuple[Stmt | None, ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None = None


@dataclass(frozen=True)
class While:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function:
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt | None, ...]


@dataclass(frozen=True)
class Return:
    keyword: Token
    value: Expr | None = None


@dataclass(frozen=True)
class Class:
    name: Token
    methods: tuple[Function, ...]


Stmt = Union[Expression, Print, Var, Block, If, While, Function, Return, Class]

Node = Union[Expr, Stmt]


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def token_to_dict(token: Token) -> dict[str, Any]:
    return {"lexeme": token.lexeme, "line": token.line}


def to_dict(node: Node | None) -> dict[str, Any] | None:
    """
    Converts a node and all of its descendants into plain dictionaries.

    Every dictionary carries a ``kind`` key naming the node class; tokens are
    reduced to their lexeme and line. ``None`` (a declaration discarded by error
    recovery) is returned unchanged.

    Args:
        node: An `Expr`, a `Stmt`, or `None`.

    Returns:
        A JSON-compatible dictionary, or `None`.

    Raises:
        TypeError: If `node` is not an AST node.
    """
    match node:
        case None:
            return None
        case Literal(value):
            return {"kind": "Literal", "value": value}
        case Grouping(expression):
            return {"kind": "Grouping", "expression": to_dict(expression)}
        case Unary(operator, right):
            return {
                "kind": "Unary",
                "operator": token_to_dict(operator),
                "right": to_dict(right),
            }
        case Binary(left, operator, right) | Logical(left, operator, right):
            return {
                "kind": type(node).__name__,
                "left": to_dict(left),
                "operator": token_to_dict(operator),
                "right": to_dict(right),
            }
        case Variable(name):
            return {"kind": "Variable", "name": token_to_dict(name)}
        case Assign(name, value):
            return {
                "kind": "Assign",
                "name": token_to_dict(name),
                "value": to_dict(value),
            }
        case Call(callee, paren, arguments):
            return {
                "kind": "Call",
                "callee": to_dict(callee),
                "paren": token_to_dict(paren),
                "arguments": [to_dict(arg) for arg in arguments],
            }
        case Get(obj, name):
            return {"kind": "Get", "object": to_dict(obj), "name": token_to_dict(name)}
        case Set(obj, name, value):
            return {
                "kind": "Set",
                "object": to_dict(obj),
                "name": token_to_dict(name),
                "value": to_dict(value),
            }
        case This(keyword):
            return {"kind": "This", "keyword": token_to_dict(keyword)}
        case Expression(expression) | Print(expression):
            return {"kind": type(node).__name__, "expression": to_dict(expression)}
        case Var(name, initializer):
            return {
                "kind": "Var",
                "name": token_to_dict(name),
                "initializer": to_dict(initializer),
            }
        case Block(statements):
            return {"kind": "Block", "statements": [to_dict(s) for s in statements]}
        case If(condition, then_branch, else_branch):
            return {
                "kind": "If",
                "condition": to_dict(condition),
                "then_branch": to_dict(then_branch),
                "else_branch": to_dict(else_branch),
            }
        case While(condition, body):
            return {
                "kind": "While",
                "condition": to_dict(condition),
                "body": to_dict(body),
            }
        case Function(name, params, body):
            return {
                "kind": "Function",
                "name": token_to_dict(name),
                "params": [token_to_dict(p) for p in params],
                "body": [to_dict(s) for s in body],
            }
        case Return(keyword, value):
            return {
                "kind": "Return",
                "keyword": token_to_dict(keyword),
                "value": to_dict(value),
            }
        case Class(name, methods):
            return {
                "kind": "Class",
                "name": token_to_dict(name),
                "methods": [to_dict(m) for m in methods],
            }
    raise TypeError(f"Not an AST node: {node!r}")
