import logging

import pytest

from lox.lox_errors import Diagnostic, ErrorReporter, ParseError
from lox.lox_token import Token, eof_token

SEMI = Token("SEMICOLON", ";", None, 4)


def test_reporter_starts_clean() -> None:
    reporter = ErrorReporter()
    assert not reporter.had_error
    assert reporter.diagnostics == []


def test_reporter_records_in_order() -> None:
    reporter = ErrorReporter()
    reporter(SEMI, "Expect expression.")
    reporter(eof_token(5), "Expect ';' after value.")
    assert reporter.had_error
    assert reporter.messages == ["Expect expression.", "Expect ';' after value."]
    assert reporter.diagnostics[0] == Diagnostic(SEMI, "Expect expression.")


def test_reporter_logs_diagnostics(caplog: pytest.LogCaptureFixture) -> None:
    reporter = ErrorReporter()
    with caplog.at_level(logging.DEBUG, logger="lox.lox_errors"):
        reporter(SEMI, "Expect expression.")
    assert "[line 4] syntax error at ';': Expect expression." in caplog.text


def test_diagnostic_location() -> None:
    assert Diagnostic(SEMI, "m").where == "at ';'"
    assert Diagnostic(SEMI, "m").line == 4
    assert Diagnostic(eof_token(9), "m").where == "at end"


def test_parse_error_carries_token_and_message() -> None:
    err = ParseError(SEMI, "Expect expression.")
    assert isinstance(err, SyntaxError)
    assert err.token is SEMI
    assert err.message == "Expect expression."
    assert str(err) == "Expect expression."
