"""
tokscan - Token Dump Command-Line Interface
===========================================

This module implements the command-line driver for the scanner. It reads
source text, scans it to the end and prints one token per line as
'KIND: text', followed by any diagnostics on stderr.

Usage Examples
--------------
Scan a file:
    $ tokscan program.js

Scan an expression given on the command line:
    $ tokscan -e 'let x = a >>> 2;'

Show token positions:
    $ tokscan --positions program.js

Fail (exit 1) if the source has lexical errors:
    $ tokscan --strict program.js

Scan a validation-rule list:
    $ tokscan --rules -e "[required, min[0], max[100]]"

Exit Codes
----------
0 - Success
1 - Lexical errors (with --strict) or rule syntax error
2 - Invalid arguments or unreadable input
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from tokscan import __version__
from tokscan.cli.errors import ExitCode, handle_cli_exception
from tokscan.rules import RuleTokenizer
from tokscan.scanner import Scanner, format_tokens
from tokscan.stream import CharacterStream
from tokscan.tokens import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Send scanner debug logging to stderr in verbose mode."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s: %(name)s: %(message)s",
        )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-e", "--expression",
    help="Scan this text instead of a file",
)
@click.option(
    "--rules",
    is_flag=True,
    help="Use the validation-rule tokenizer instead of the main scanner",
)
@click.option(
    "--positions",
    is_flag=True,
    help="Prefix each token with line:column",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any lexical error was found",
)
@click.option(
    "-k", "--keyword",
    multiple=True,
    help="Reserve an extra keyword (can be repeated)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tokscan")
def main(
    input_file: Optional[Path],
    expression: Optional[str],
    rules: bool,
    positions: bool,
    strict: bool,
    keyword: tuple[str, ...],
    verbose: bool,
) -> None:
    """
    Print the tokens of a source file.

    INPUT_FILE is the file to scan. Without INPUT_FILE or -e, the source
    is read from standard input.

    \b
    Examples:
        tokscan program.js              # One token per line
        tokscan -e 'a >>>= 1'           # Scan inline text
        tokscan --positions app.js      # Include line:column
        tokscan --strict app.js         # Fail on lexical errors
    """
    if input_file is not None and expression is not None:
        raise click.UsageError("give either INPUT_FILE or --expression, not both")
    if rules and (keyword or strict):
        raise click.UsageError("--rules cannot be combined with --keyword or --strict")

    setup_logging(verbose)

    try:
        if expression is not None:
            source, filename = expression, "<expression>"
        elif input_file is not None:
            source, filename = input_file.read_text(), str(input_file)
        else:
            source, filename = click.get_text_stream("stdin").read(), "<stdin>"

        logger.debug(f"Scanning {filename} ({len(source)} characters)")
        stream = CharacterStream(source, filename)

        if rules:
            for token in RuleTokenizer(stream).tokenize():
                if positions:
                    click.echo(f"{token.location.line}:{token.location.column} {token}")
                else:
                    click.echo(str(token))
            return

        config = DEFAULT_CONFIG.with_keywords(*keyword) if keyword else DEFAULT_CONFIG
        scanner = Scanner(stream, config)
        tokens = list(scanner.tokenize())
        click.echo(format_tokens(tokens, positions=positions))

        for diagnostic in scanner.diagnostics:
            click.echo(str(diagnostic), err=True)

        if scanner.diagnostics:
            click.echo(f"{len(scanner.diagnostics)} diagnostic(s) in {filename}", err=True)

        if strict and scanner.has_errors():
            sys.exit(ExitCode.SCAN_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
