"""
Token value consumed by the Lox parser.

Tokens are produced by an external scanner (or loaded from a JSON token dump, see
`lox.lox_serialize`). The parser only reads them.

Classes:
    Token: An immutable token with type, lexeme, literal payload, and source line.

Example:
    >>> tok = Token("NUMBER", "42", 42.0, 1)
    >>> print(tok)
    Token(NUMBER, '42', 42.0)
"""

from typing import Any

from lox.lox_constants import EOF

LiteralValue = float | str | bool | None
"""Payload carried by NUMBER, STRING, and literal-keyword tokens."""


class Token:
    """Represents a single lexical token in the Lox language.

    Tokens are immutable once built: assigning to any attribute raises
    `AttributeError`.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENTIFIER', 'NUMBER', 'EOF').
        lexeme (str): The raw source text of the token.
        literal (float | str | bool | None): The literal payload, if any.
        line (int): The 1-based line number where the token appears.
    """

    __slots__ = ("type", "lexeme", "literal", "line")

    def __init__(
        self,
        type_: str,
        lexeme: str,
        literal: LiteralValue = None,
        line: int = 0,
    ) -> None:
        """Initializes a new Token instance.

        Args:
            type_ (str): The token's type.
            lexeme (str): The source text of the token.
            literal (LiteralValue, optional): The literal payload (default is None).
            line (int, optional): The line number (default is 0).
        """
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        if self.literal is None:
            return f"Token({self.type}, {self.lexeme!r})"
        return f"Token({self.type}, {self.lexeme!r}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.lexeme == other.lexeme
            and self.literal == other.literal
            and self.line == other.line
        )

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme, self.literal, self.line))

    @property
    def is_eof(self) -> bool:
        return self.type == EOF


def eof_token(line: int = 0) -> Token:
    """Builds the end-of-input marker for the given line."""
    return Token(EOF, "", None, line)


__all__ = ["LiteralValue", "Token", "eof_token"]
