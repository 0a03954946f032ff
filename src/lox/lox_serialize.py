"""
Reads token dumps and writes parse trees as JSON.

A token dump is what an external Lox scanner hands to the parser, written as a
JSON array of token objects:

    [
        {"type": "PRINT", "lexeme": "print", "literal": null, "line": 1},
        {"type": "NUMBER", "lexeme": "1", "literal": 1.0, "line": 1},
        {"type": "SEMICOLON", "lexeme": ";", "literal": null, "line": 1},
        {"type": "EOF", "lexeme": "", "literal": null, "line": 1}
    ]

Only ``type`` is required; ``lexeme`` defaults to the empty string, ``literal``
to null and ``line`` to 0. A dump without a trailing EOF entry gets one
appended.

Functions:
    - tokens_from_json(text): Parse a token dump from a JSON string.
    - load_tokens(path): Read a token dump from a file.
    - tokens_to_json(tokens): Write tokens back out in the dump format.
    - program_to_json(statements): Serialize a parsed program.

Raises:
    TokenDumpError: If the dump is not valid JSON or does not match the format.
"""

import json
from collections.abc import Sequence
from typing import Any

from lox.lox_ast import Stmt, to_dict
from lox.lox_constants import CANONICAL_TOKENS, EOF
from lox.lox_token import Token, eof_token


class TokenDumpError(ValueError):
    """Raised when a token dump cannot be turned into tokens.

    Attributes:
        index (int | None): Position of the offending entry, when known.
    """

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


def token_from_dict(entry: Any, index: int = 0) -> Token:
    if not isinstance(entry, dict):
        raise TokenDumpError(f"Token #{index} must be an object, got {entry!r}", index)

    type_ = entry.get("type")
    if type_ not in CANONICAL_TOKENS:
        raise TokenDumpError(f"Token #{index} has unknown type {type_!r}", index)

    lexeme = entry.get("lexeme", "")
    literal = entry.get("literal")
    line = entry.get("line", 0)
    if not isinstance(lexeme, str):
        raise TokenDumpError(f"Token #{index} lexeme must be a string", index)
    if literal is not None and not isinstance(literal, (bool, int, float, str)):
        raise TokenDumpError(f"Token #{index} has unsupported literal {literal!r}", index)
    if not isinstance(line, int) or isinstance(line, bool):
        raise TokenDumpError(f"Token #{index} line must be an integer", index)

    # NUMBER literals are always doubles in Lox
    if isinstance(literal, int) and not isinstance(literal, bool):
        try:
            literal = float(literal)
        except OverflowError as e:
            raise TokenDumpError(f"Token #{index} literal is out of range", index) from e

    return Token(type_, lexeme, literal, line)


def tokens_from_json(text: str) -> list[Token]:
    """
    Parses a JSON token dump into a list of tokens ending with EOF.

    Args:
        text: The JSON document.

    Returns:
        The tokens, in order.

    Raises:
        TokenDumpError: If the JSON is malformed or an entry is invalid.
    """
    # ValueError covers JSONDecodeError and integers past the digit limit
    try:
        raw = json.loads(text)
    except ValueError as e:
        raise TokenDumpError(f"Invalid token dump: {e}") from e
    except RecursionError as e:
        raise TokenDumpError("Invalid token dump: nested too deeply") from e

    if not isinstance(raw, list):
        raise TokenDumpError("Token dump must be a JSON array")

    tokens = [token_from_dict(entry, i) for i, entry in enumerate(raw)]
    if not tokens or tokens[-1].type != EOF:
        tokens.append(eof_token(tokens[-1].line if tokens else 1))
    return tokens


def load_tokens(path: str) -> list[Token]:
    """Reads a token dump from `path` (UTF-8)."""
    with open(path, encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise TokenDumpError(f"Token dump is not valid UTF-8: {e}") from e
    return tokens_from_json(text)


def tokens_to_json(tokens: Sequence[Token]) -> str:
    return json.dumps(
        [
            {
                "type": tok.type,
                "lexeme": tok.lexeme,
                "literal": tok.literal,
                "line": tok.line,
            }
            for tok in tokens
        ]
    )


def program_to_json(statements: Sequence[Stmt | None], indent: int | None = 2) -> str:
    return json.dumps([to_dict(stmt) for stmt in statements], indent=indent)


__all__ = [
    "TokenDumpError",
    "load_tokens",
    "program_to_json",
    "token_from_dict",
    "tokens_from_json",
    "tokens_to_json",
]
