import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_constants import CANONICAL_TOKENS, EOF, SYNC_TOKENS, keyword_tokens, token_hashmap
from lox.lox_token import Token, eof_token


def test_token_fields() -> None:
    tok = Token("NUMBER", "42", 42.0, 3)
    assert tok.type == "NUMBER"
    assert tok.lexeme == "42"
    assert tok.literal == 42.0
    assert tok.line == 3


def test_token_repr() -> None:
    assert repr(Token("IDENTIFIER", "x")) == "Token(IDENTIFIER, 'x')"
    assert repr(Token("STRING", '"hi"', "hi")) == "Token(STRING, '\"hi\"', 'hi')"


def test_token_is_immutable() -> None:
    tok = Token("IDENTIFIER", "x", None, 1)
    with pytest.raises(AttributeError):
        tok.lexeme = "y"  # type: ignore[misc]


def test_token_equality_includes_line() -> None:
    assert Token("IDENTIFIER", "x", None, 1) == Token("IDENTIFIER", "x", None, 1)
    assert Token("IDENTIFIER", "x", None, 1) != Token("IDENTIFIER", "x", None, 2)
    assert Token("IDENTIFIER", "x") != "x"


def test_eof_token() -> None:
    tok = eof_token(7)
    assert tok.type == EOF
    assert tok.is_eof
    assert tok.line == 7
    assert not Token("IDENTIFIER", "x").is_eof


def test_vocabulary_is_consistent() -> None:
    assert set(token_hashmap.values()) <= set(CANONICAL_TOKENS)
    assert set(keyword_tokens.values()) <= set(CANONICAL_TOKENS)
    assert SYNC_TOKENS <= set(keyword_tokens.values())
    assert len(set(CANONICAL_TOKENS)) == len(CANONICAL_TOKENS)


@given(
    type_=st.sampled_from(CANONICAL_TOKENS),
    lexeme=st.text(max_size=10),
    line=st.integers(min_value=0, max_value=10_000),
)
def test_equal_tokens_hash_equal(type_: str, lexeme: str, line: int) -> None:
    a = Token(type_, lexeme, None, line)
    b = Token(type_, lexeme, None, line)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
