import dataclasses
import json
from typing import Any

import hypothesis.strategies as st
import pytest
from hypothesis import given

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
    Print,
    Return,
    Set,
    This,
    Unary,
    Var,
    Variable,
    While,
    to_dict,
)
from lox.lox_token import Token

NAME_X = Token("IDENTIFIER", "x", None, 1)
NAME_Y = Token("IDENTIFIER", "y", None, 2)
PLUS = Token("PLUS", "+", None, 1)
PAREN = Token("RIGHT_PAREN", ")", None, 1)


def test_nodes_compare_structurally() -> None:
    n1 = Binary(Literal(1.0), PLUS, Variable(NAME_X))
    n2 = Binary(Literal(1.0), PLUS, Variable(NAME_X))
    assert n1 == n2


def test_nodes_differ_by_token() -> None:
    assert Variable(NAME_X) != Variable(NAME_Y)


def test_binary_and_logical_are_distinct() -> None:
    or_tok = Token("OR", "or", None, 1)
    assert Binary(Literal(1.0), or_tok, Literal(2.0)) != Logical(
        Literal(1.0), or_tok, Literal(2.0)
    )


def test_nodes_are_frozen() -> None:
    node = Var(NAME_X, Literal(1.0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.initializer = Literal(2.0)  # type: ignore[misc]


def test_optional_fields_default_to_none() -> None:
    assert Var(NAME_X).initializer is None
    assert If(Literal(True), Print(Literal(1.0))).else_branch is None
    assert Return(Token("RETURN", "return", None, 1)).value is None


def test_to_dict_literal() -> None:
    assert to_dict(Literal(1.0)) == {"kind": "Literal", "value": 1.0}


def test_to_dict_none_placeholder() -> None:
    assert to_dict(None) is None


def test_to_dict_binary() -> None:
    d = to_dict(Binary(Literal(1.0), PLUS, Variable(NAME_X)))
    assert d == {
        "kind": "Binary",
        "left": {"kind": "Literal", "value": 1.0},
        "operator": {"lexeme": "+", "line": 1},
        "right": {"kind": "Variable", "name": {"lexeme": "x", "line": 1}},
    }


def test_to_dict_call_and_property_access() -> None:
    node = Set(Get(Call(Variable(NAME_X), PAREN, (Literal(1.0),)), NAME_Y), NAME_X, This(Token("THIS", "this", None, 1)))
    d: Any = to_dict(node)
    assert d["kind"] == "Set"
    assert d["object"]["kind"] == "Get"
    assert d["object"]["object"]["kind"] == "Call"
    assert d["object"]["object"]["arguments"] == [{"kind": "Literal", "value": 1.0}]
    assert d["value"] == {"kind": "This", "keyword": {"lexeme": "this", "line": 1}}


def test_to_dict_statements() -> None:
    method = Function(NAME_Y, (NAME_X,), (Return(Token("RETURN", "return", None, 2), Variable(NAME_X)),))
    program = Block(
        (
            Var(NAME_X, Unary(Token("MINUS", "-", None, 1), Literal(1.0))),
            While(Grouping(Literal(True)), Expression(Assign(NAME_X, Literal(2.0)))),
            If(Literal(False), Print(Literal("a")), None),
            Class(NAME_X, (method,)),
            None,
        )
    )
    d: Any = to_dict(program)
    kinds = [s["kind"] if s else None for s in d["statements"]]
    assert kinds == ["Var", "While", "If", "Class", None]
    assert d["statements"][2]["else_branch"] is None
    assert d["statements"][3]["methods"][0]["params"] == [{"lexeme": "x", "line": 1}]
    # plain data all the way down
    assert json.loads(json.dumps(d)) == d


def test_to_dict_rejects_non_nodes() -> None:
    with pytest.raises(TypeError, match="Not an AST node"):
        to_dict("print 1;")  # type: ignore[arg-type]


@given(st.one_of(st.none(), st.booleans(), st.floats(allow_nan=False), st.text()))
def test_literal_to_dict_keeps_value(value: Any) -> None:
    assert to_dict(Literal(value)) == {"kind": "Literal", "value": value}
