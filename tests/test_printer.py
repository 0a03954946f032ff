# tests/test_printer.py

import pytest

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
)
from lox.lox_printer import ERROR_PLACEHOLDER, AstPrinter
from lox.lox_token import Token


def ident(name: str) -> Token:
    return Token("IDENTIFIER", name, None, 1)


def op(type_: str, lexeme: str) -> Token:
    return Token(type_, lexeme, None, 1)


RET = op("RETURN", "return")
PAREN = op("RIGHT_PAREN", ")")


def test_render_literals() -> None:
    printer = AstPrinter()
    assert printer.render(Literal(None)) == "nil"
    assert printer.render(Literal(True)) == "true"
    assert printer.render(Literal(False)) == "false"
    assert printer.render(Literal(3.0)) == "3.0"
    assert printer.render(Literal("hi")) == "hi"


def test_render_nested_arithmetic() -> None:
    node = Binary(
        Unary(op("MINUS", "-"), Literal(123.0)),
        op("STAR", "*"),
        Grouping(Literal(45.67)),
    )
    assert AstPrinter().render(node) == "(* (- 123.0) (group 45.67))"


def test_render_logical() -> None:
    node = Logical(Variable(ident("a")), op("OR", "or"), Variable(ident("b")))
    assert AstPrinter().render(node) == "(or a b)"


def test_render_assignment_and_property_access() -> None:
    printer = AstPrinter()
    assert printer.render(Assign(ident("a"), Literal(1.0))) == "(= a 1.0)"
    getter = Get(Variable(ident("a")), ident("b"))
    assert printer.render(getter) == "(. a b)"
    setter = Set(This(op("THIS", "this")), ident("x"), Variable(ident("x")))
    assert printer.render(setter) == "(= this x x)"


def test_render_call() -> None:
    printer = AstPrinter()
    assert printer.render(Call(Variable(ident("f")), PAREN, ())) == "(call f)"
    call = Call(Variable(ident("f")), PAREN, (Literal(1.0), Variable(ident("x"))))
    assert printer.render(call) == "(call f 1.0 x)"


@pytest.mark.parametrize(
    "node, expected",
    [
        (Expression(Variable(ident("x"))), "(; x)"),
        (Print(Literal("hi")), "(print hi)"),
        (Var(ident("x")), "(var x)"),
        (Var(ident("x"), Literal(1.0)), "(var x = 1.0)"),
        (Block(()), "(block)"),
        (Block((Print(Literal(1.0)), None)), "(block (print 1.0) <error>)"),
        (If(Variable(ident("c")), Print(Literal(1.0))), "(if c (print 1.0))"),
        (
            If(Variable(ident("c")), Print(Literal(1.0)), Print(Literal(2.0))),
            "(if-else c (print 1.0) (print 2.0))",
        ),
        (While(Literal(True), Block(())), "(while true (block))"),
        (Return(RET), "(return)"),
        (Return(RET, Literal(None)), "(return nil)"),
    ],
)
def test_render_statements(node: object, expected: str) -> None:
    assert AstPrinter().render(node) == expected  # type: ignore[arg-type]


def test_render_function_and_class() -> None:
    fn = Function(
        ident("add"),
        (ident("a"), ident("b")),
        (Return(RET, Binary(Variable(ident("a")), op("PLUS", "+"), Variable(ident("b")))),),
    )
    assert AstPrinter().render(fn) == "(fun add(a b) (return (+ a b)))"
    empty = Function(ident("init"), (), ())
    cls = Class(ident("Point"), (empty,))
    assert AstPrinter().render(cls) == "(class Point (fun init()))"


def test_render_program_one_line_per_statement() -> None:
    program = [Print(Literal(1.0)), None, Expression(Variable(ident("x")))]
    assert AstPrinter().render_program(program) == f"(print 1.0)\n{ERROR_PLACEHOLDER}\n(; x)"


def test_render_rejects_unknown_objects() -> None:
    with pytest.raises(TypeError, match="Cannot render"):
        AstPrinter().render(42)  # type: ignore[arg-type]
