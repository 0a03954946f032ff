"""
Diagnostic contract for the Lox parser.

The parser never prints or exits. Every syntax error is handed to a diagnostic
sink as a `(token, message)` pair; deciding what to do about it belongs to the
caller.

Classes:
    - DiagnosticSink: Protocol for anything callable as ``sink(token, message)``.
    - Diagnostic: One reported syntax error.
    - ErrorReporter: Default sink that records diagnostics and logs them.
    - ParseError: Fatal, recoverable error raised when a required token is
      missing; caught only at the declaration boundary.
"""

import logging
from typing import NamedTuple, Protocol

from lox.lox_token import Token

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):  # pragma: no cover
    """Callable receiving every syntax error the parser reports."""

    def __call__(self, token: Token, message: str) -> None: ...


class Diagnostic(NamedTuple):
    token: Token
    message: str

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def where(self) -> str:
        """Location fragment: ``at end`` for EOF, otherwise ``at 'lexeme'``."""
        if self.token.is_eof:
            return "at end"
        return f"at '{self.token.lexeme}'"


class ErrorReporter:
    """Collects diagnostics in the order they were reported.

    Attributes:
        diagnostics (list[Diagnostic]): Everything reported, in order.
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, token: Token, message: str) -> None:
        diagnostic = Diagnostic(token, message)
        logger.debug("[line %d] syntax error %s: %s", token.line, diagnostic.where, message)
        self.diagnostics.append(diagnostic)

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]


class ParseError(SyntaxError):
    """A required token was missing; the current declaration is abandoned.

    The diagnostic has already been sent to the sink when this is raised.

    Attributes:
        token (Token): The offending token.
        message (str): The diagnostic message.
    """

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


__all__ = ["Diagnostic", "DiagnosticSink", "ErrorReporter", "ParseError"]
