"""
Lox parser CLI Entrypoint.

This module provides the command-line interface for parsing Lox token dumps.
Scanning is done elsewhere; this tool takes the scanner's output (a JSON token
dump, see `lox.lox_serialize`) and prints the resulting syntax tree.

Features:
    - Read tokens from a `.json` file or an inline JSON string.
    - Print the tree as parenthesized text or as JSON.
    - Output to console or file.
    - Report every syntax error on stderr as `[line N] Error at 'x': message`.

Exit status:
    0   the program parsed cleanly
    2   bad command-line arguments
    65  syntax errors were reported, or the token dump is malformed
    66  the input file does not exist

Example usage:
    loxparse program.tokens.json
    loxparse -s '[{"type": "NIL", "lexeme": "nil"}]' --format json
    loxparse program.tokens.json -o tree.txt --verbose

Functions:
    run_parse(source, is_string=False, fmt="tree", out=None, max_depth=..., max_statement_depth=...) -> int:
        Executes the pipeline (load tokens → parse → render → output) and returns the exit status.

    main() -> None:
        Parses CLI arguments and exits with the status from `run_parse`.
"""

import argparse
import logging
import sys

from lox.lox_constants import MAX_NESTING_DEPTH, MAX_STATEMENT_DEPTH
from lox.lox_errors import Diagnostic, ErrorReporter
from lox.lox_parser import Parser
from lox.lox_printer import AstPrinter
from lox.lox_serialize import TokenDumpError, load_tokens, program_to_json, tokens_from_json

logger = logging.getLogger(__name__)

EX_OK = 0
EX_DATAERR = 65
EX_NOINPUT = 66


def format_diagnostic(diagnostic: Diagnostic) -> str:
    return f"[line {diagnostic.line}] Error {diagnostic.where}: {diagnostic.message}"


def run_parse(
    source: str,
    is_string: bool = False,
    fmt: str = "tree",
    out: str | None = None,
    max_depth: int = MAX_NESTING_DEPTH,
    max_statement_depth: int = MAX_STATEMENT_DEPTH,
) -> int:
    """
    Run the parser on a token dump and print or write the tree.

    Args:
        source (str): Path to a `.json` token dump, or the JSON itself when `is_string` is set.
        is_string (bool): If True, treats `source` as raw JSON instead of a file path. Defaults to False.
        fmt (str): Output format, 'tree' (parenthesized text) or 'json'. Defaults to 'tree'.
        out (str | None): Optional path to write the output to. If None, prints to stdout.
        max_depth (int): Expression nesting limit passed to the parser.
        max_statement_depth (int): Statement nesting limit passed to the parser.

    Returns:
        int: The process exit status.

    Side Effects:
        - Prints diagnostics to stderr.
        - Prints the tree to stdout or writes it to `out`.
    """
    # 1. Load tokens
    try:
        tokens = tokens_from_json(source) if is_string else load_tokens(source)
    except FileNotFoundError:
        print(f"[error] No such file: {source}", file=sys.stderr)
        return EX_NOINPUT
    except TokenDumpError as e:
        print(f"[error] {e}", file=sys.stderr)
        return EX_DATAERR
    logger.debug("loaded %d token(s)", len(tokens))

    # 2. Parsing
    reporter = ErrorReporter()
    statements = Parser(
        tokens,
        reporter=reporter,
        max_depth=max_depth,
        max_statement_depth=max_statement_depth,
    ).parse()
    for diagnostic in reporter.diagnostics:
        print(format_diagnostic(diagnostic), file=sys.stderr)
    logger.debug(
        "parsed %d statement(s) with %d error(s)",
        len(statements),
        len(reporter.diagnostics),
    )

    # 3. Rendering
    if fmt == "json":
        output = program_to_json(statements)
    else:
        output = AstPrinter().render_program(statements)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
    else:
        print(output)

    return EX_DATAERR if reporter.had_error else EX_OK


def main() -> None:
    """
    Entry point for the Lox parser CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw JSON string instead of a file path.
        - `-f`, `--format`: Output format ('tree' or 'json'), default is 'tree'.
        - `-o`, `--out`: Write output to a file.
        - `--max-depth`: Maximum expression nesting before the parser gives up on a declaration.
        - `--max-statement-depth`: Maximum statement and function nesting.
        - `-v`, `--verbose`: Enable debug logging.
    """
    parser = argparse.ArgumentParser(
        prog="loxparse", description="Parse a Lox token dump into a syntax tree."
    )
    parser.add_argument("source", help="Token dump filename or raw JSON (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal JSON"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("tree", "json"),
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_NESTING_DEPTH,
        help=f"Expression nesting limit (default: {MAX_NESTING_DEPTH})",
    )
    parser.add_argument(
        "--max-statement-depth",
        type=int,
        default=MAX_STATEMENT_DEPTH,
        help=f"Statement nesting limit (default: {MAX_STATEMENT_DEPTH})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()
    if args.max_depth < 1:
        parser.error("--max-depth must be at least 1")
    if args.max_statement_depth < 1:
        parser.error("--max-statement-depth must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s (%(name)s): %(message)s",
    )

    sys.exit(
        run_parse(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            max_depth=args.max_depth,
            max_statement_depth=args.max_statement_depth,
        )
    )


if __name__ == "__main__":
    main()
