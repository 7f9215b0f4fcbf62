"""
Scanner (Tokenizer)
===================

This module implements the lexical scanner. It converts the characters
of a CharacterStream into classified tokens, on demand, for a parser.

Token Production
----------------
Each call to the production step skips whitespace and then dispatches
on the current character:

| First character        | Result                                      |
|------------------------|---------------------------------------------|
| letter or _            | IDENTIFIER, KEYWORD, NULL/BOOLEAN_LITERAL   |
| "                      | STRING_LITERAL (quotes stripped)            |
| ( ) { } [ ] , ; : ? @  | SEPARATOR                                   |
| digit or .             | INTEGER/DECIMAL_LITERAL, '...', operator .  |
| /                      | comment (skipped), / or /=                  |
| + - * % > < = ! & ^ ~  | OPERATOR, longest match wins                |
| vertical bar           | OPERATOR, longest match wins                |
| end of input           | EOF (repeats forever)                       |

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Error Recovery
--------------
The scanner never raises for bad input. Problems are recorded in the
scanner's diagnostics and scanning carries on:

- unrecognized character: skipped
- unterminated string: the partial text is returned as a string literal
- unterminated comment: the rest of the input is dropped
- '..' without a third dot: both dots are skipped
- leading zero (0123): "0" is returned, the remaining digits follow

Lookahead
---------
next() consumes a token, peek() and peek2() look one and two tokens
ahead. Looked-ahead tokens are kept in a small buffer so the stream is
never read twice.

Example Usage
-------------
>>> from tokscan import CharacterStream, Scanner
>>> scanner = Scanner(CharacterStream('let x = "hi";'))
>>> for token in scanner.tokenize():
...     print(repr(token))
Token(KEYWORD, 'let', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(OPERATOR, '=', 1:7)
Token(STRING_LITERAL, 'hi', 1:9)
Token(SEPARATOR, ';', 1:13)
Token(EOF, 1:14)
"""

from collections import deque
from typing import Iterator, List, Optional
import logging
import string

from tokscan.errors import (
    Diagnostic,
    DiagnosticCollector,
    InvalidCharacterError,
    MalformedEllipsisError,
    MalformedNumberError,
    ScanError,
    SourceLocation,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from tokscan.stream import CharacterStream
from tokscan.tokens import DEFAULT_CONFIG, ScannerConfig, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Character Classes
# =============================================================================

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)
NONZERO_DIGITS = frozenset("123456789")
OPERATOR_START = frozenset("+-*%><=!|&^~")

# Words that are always literals, never keywords or identifiers
LITERAL_WORDS = {
    "null": TokenKind.NULL_LITERAL,
    "true": TokenKind.BOOLEAN_LITERAL,
    "false": TokenKind.BOOLEAN_LITERAL,
}


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based tokenizer with two tokens of lookahead.

    The scanner owns its CharacterStream. Tokens are only produced when
    next(), peek() or peek2() asks for them.

    Usage:
        scanner = Scanner(CharacterStream(source_text, filename))
        while not scanner.peek().is_eof():
            token = scanner.next()

    Attributes:
        stream: The character stream being scanned
        config: Keywords, separators and whitespace for this grammar
    """

    # Most tokens a consumer can look ahead (peek2)
    LOOKAHEAD_DEPTH = 2

    def __init__(
        self,
        stream: CharacterStream,
        config: Optional[ScannerConfig] = None,
        max_errors: Optional[int] = 100,
    ):
        """
        Initialize the scanner.

        Args:
            stream: Character stream to read from; owned by the scanner
            config: Grammar configuration (default: DEFAULT_CONFIG)
            max_errors: Errors recorded before diagnostics are cut off
                (None for no limit)
        """
        self.stream = stream
        self.config = config or DEFAULT_CONFIG

        self._buffer: deque[Token] = deque()
        self._collector = DiagnosticCollector(max_errors=max_errors)

        self._token_count = 0
        self._eof_seen = False

    # =========================================================================
    # Lookahead Protocol
    # =========================================================================

    def next(self) -> Token:
        """Consume and return the next token."""
        if self._buffer:
            return self._buffer.popleft()
        return self._produce()

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if not self._buffer:
            self._buffer.append(self._produce())
        return self._buffer[0]

    def peek2(self) -> Token:
        """Return the token after the next one without consuming anything."""
        while len(self._buffer) < self.LOOKAHEAD_DEPTH:
            self._buffer.append(self._produce())
        return self._buffer[1]

    def tokenize(self) -> Iterator[Token]:
        """
        Yield the remaining tokens, ending with a single EOF token.

        Yields:
            Token objects in source order
        """
        while True:
            token = self.next()
            yield token
            if token.is_eof():
                return

    # =========================================================================
    # Diagnostics
    # =========================================================================

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Problems found so far, in the order they were found."""
        return self._collector.diagnostics

    def has_errors(self) -> bool:
        return self._collector.has_errors()

    def report(self) -> str:
        """Format the diagnostics for display."""
        return self._collector.report()

    def raise_if_errors(self) -> None:
        """
        Raise if any errors were recorded.

        Raises:
            ScanFailedError: Containing the full diagnostics report
        """
        self._collector.raise_if_errors()

    def _report(self, error: ScanError) -> None:
        """Record a recoverable error and continue."""
        if self._collector.should_stop():
            return
        self._collector.add(error)
        logger.debug(f"Recorded diagnostic: {error.location}: {error.message}")
        if self._collector.should_stop():
            logger.debug("Error limit reached; further diagnostics dropped")

    def _context_line(self) -> Optional[str]:
        """Source line for an error message, or None once errors are dropped."""
        if self._collector.should_stop():
            return None
        return self.stream.current_line()

    # =========================================================================
    # Token Production
    # =========================================================================

    def _produce(self) -> Token:
        """
        Produce the next token from the stream.

        Comments and skipped characters do not produce a token; the loop
        goes round again until something does.
        """
        while True:
            self._skip_whitespace()

            start_line = self.stream.line
            start_column = self.stream.column

            if self.stream.is_at_end():
                return self._make_eof(start_line, start_column)

            token = self._scan_token(start_line, start_column)
            if token is not None:
                self._token_count += 1
                return token

    def _make_eof(self, line: int, column: int) -> Token:
        if not self._eof_seen:
            self._eof_seen = True
            logger.debug(
                f"Reached end of {self.stream.filename}: "
                f"{self._token_count} tokens, {len(self._collector)} diagnostics"
            )
        return self._make_token(TokenKind.EOF, "", line, column)

    def _make_token(
        self,
        kind: TokenKind,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            kind=kind,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.stream.filename,
        )

    def _location(self, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.stream.filename, line, column)

    def _skip_whitespace(self) -> None:
        whitespace = self.config.whitespace
        while self.stream.peek() in whitespace:
            self.stream.next()

    def _scan_token(self, start_line: int, start_column: int) -> Optional[Token]:
        """
        Scan one token starting at the current character.

        Returns:
            The token, or None if the input consumed produced no token
        """
        char = self.stream.peek()

        # Identifiers, keywords and word literals
        if char in IDENT_START:
            return self._scan_identifier(start_line, start_column)

        # String literal
        if char == '"':
            return self._scan_string(start_line, start_column)

        # Separators
        if char in self.config.separators:
            self.stream.next()
            return self._make_token(TokenKind.SEPARATOR, char, start_line, start_column)

        # Numbers, '.', '...'
        if char in DIGITS or char == ".":
            return self._scan_number(start_line, start_column)

        # Comments or division
        if char == "/":
            return self._scan_slash(start_line, start_column)

        if char in OPERATOR_START:
            return self._scan_operator(start_line, start_column)

        # Unknown character: skip it
        self._report(InvalidCharacterError(
            char,
            self._location(start_line, start_column),
            self._context_line(),
        ))
        self.stream.next()
        return None

    # =========================================================================
    # Words and Strings
    # =========================================================================

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier, keyword, or null/true/false.

        Identifiers start with a letter or underscore and continue with
        letters, digits and underscores.
        """
        chars = [self.stream.next()]
        while self.stream.peek() in IDENT_CHARS:
            chars.append(self.stream.next())

        word = "".join(chars)

        if word in LITERAL_WORDS:
            kind = LITERAL_WORDS[word]
        elif word in self.config.keywords:
            kind = TokenKind.KEYWORD
        else:
            kind = TokenKind.IDENTIFIER

        return self._make_token(kind, word, start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string literal.

        Backslashes have no special meaning. The literal may span lines.
        """
        source_line = self._context_line()
        self.stream.next()  # consume opening "

        chars = []
        while not self.stream.is_at_end() and self.stream.peek() != '"':
            chars.append(self.stream.next())

        if not self.stream.match('"'):
            self._report(UnterminatedStringError(
                self._location(start_line, start_column),
                source_line,
            ))

        return self._make_token(
            TokenKind.STRING_LITERAL, "".join(chars), start_line, start_column
        )

    # =========================================================================
    # Numbers
    # =========================================================================

    def _scan_number(self, start_line: int, start_column: int) -> Optional[Token]:
        """
        Scan a decimal numeric literal.

        Handles:
        - Integers: 0, 42
        - Decimals: 3.14, .5
        - The '...' separator and the '.' operator
        """
        if self.stream.peek() == ".":
            return self._scan_dot(start_line, start_column)

        chars = [self.stream.next()]

        if chars[0] == "0":
            # 0123 is not a valid literal: keep the 0, leave the rest
            if self.stream.peek() in NONZERO_DIGITS:
                self._report(MalformedNumberError(
                    self._location(start_line, start_column),
                    self._context_line(),
                ))
                return self._make_token(
                    TokenKind.INTEGER_LITERAL, "0", start_line, start_column
                )
        else:
            while self.stream.peek() in DIGITS:
                chars.append(self.stream.next())

        # Fraction: only if a digit follows the '.'
        if self.stream.peek() == "." and self.stream.peek(1) in DIGITS:
            chars.append(self.stream.next())
            while self.stream.peek() in DIGITS:
                chars.append(self.stream.next())
            return self._make_token(
                TokenKind.DECIMAL_LITERAL, "".join(chars), start_line, start_column
            )

        return self._make_token(
            TokenKind.INTEGER_LITERAL, "".join(chars), start_line, start_column
        )

    def _scan_dot(self, start_line: int, start_column: int) -> Optional[Token]:
        """Scan something starting with '.': .5, '...', or the '.' operator."""
        self.stream.next()  # consume .

        if self.stream.peek() in DIGITS:
            chars = ["."]
            while self.stream.peek() in DIGITS:
                chars.append(self.stream.next())
            return self._make_token(
                TokenKind.DECIMAL_LITERAL, "".join(chars), start_line, start_column
            )

        if self.stream.peek() == ".":
            if self.stream.peek(1) == ".":
                self.stream.next()
                self.stream.next()
                return self._make_token(
                    TokenKind.SEPARATOR, "...", start_line, start_column
                )

            self.stream.next()  # consume second .
            self._report(MalformedEllipsisError(
                self._location(start_line, start_column),
                self._context_line(),
            ))
            return None

        return self._make_token(TokenKind.OPERATOR, ".", start_line, start_column)

    # =========================================================================
    # Comments
    # =========================================================================

    def _scan_slash(self, start_line: int, start_column: int) -> Optional[Token]:
        """Scan a comment (returns None) or the / and /= operators."""
        source_line = self._context_line()
        self.stream.next()  # consume /

        if self.stream.match("*"):
            self._skip_block_comment(start_line, start_column, source_line)
            return None

        if self.stream.match("/"):
            self._skip_line_comment()
            return None

        if self.stream.match("="):
            return self._operator("/=", start_line, start_column)
        return self._operator("/", start_line, start_column)

    def _skip_block_comment(
        self,
        start_line: int,
        start_column: int,
        source_line: Optional[str],
    ) -> None:
        """Skip the body of a /* ... */ comment, including the closing */."""
        previous = ""
        while not self.stream.is_at_end():
            char = self.stream.next()
            if previous == "*" and char == "/":
                return
            previous = char

        self._report(UnterminatedCommentError(
            self._location(start_line, start_column),
            source_line,
        ))

    def _skip_line_comment(self) -> None:
        """Skip to the end of the line (the newline itself is whitespace)."""
        while not self.stream.is_at_end() and self.stream.peek() != "\n":
            self.stream.next()

    # =========================================================================
    # Operators
    # =========================================================================

    def _operator(self, text: str, start_line: int, start_column: int) -> Token:
        return self._make_token(TokenKind.OPERATOR, text, start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan an operator, always taking the longest one available.

        '>>>=' is one token, never '>>' '>=' or four '>'.
        """
        char = self.stream.next()
        match = self.stream.match

        if char == "+":
            if match("+"):
                return self._operator("++", start_line, start_column)
            if match("="):
                return self._operator("+=", start_line, start_column)
            return self._operator("+", start_line, start_column)

        if char == "-":
            if match("-"):
                return self._operator("--", start_line, start_column)
            if match("="):
                return self._operator("-=", start_line, start_column)
            return self._operator("-", start_line, start_column)

        if char == "*":
            if match("="):
                return self._operator("*=", start_line, start_column)
            return self._operator("*", start_line, start_column)

        if char == "%":
            if match("="):
                return self._operator("%=", start_line, start_column)
            return self._operator("%", start_line, start_column)

        if char == ">":
            if match("="):
                return self._operator(">=", start_line, start_column)
            if match(">"):
                if match(">"):
                    if match("="):
                        return self._operator(">>>=", start_line, start_column)
                    return self._operator(">>>", start_line, start_column)
                if match("="):
                    return self._operator(">>=", start_line, start_column)
                return self._operator(">>", start_line, start_column)
            return self._operator(">", start_line, start_column)

        if char == "<":
            if match("="):
                return self._operator("<=", start_line, start_column)
            if match("<"):
                if match("="):
                    return self._operator("<<=", start_line, start_column)
                return self._operator("<<", start_line, start_column)
            return self._operator("<", start_line, start_column)

        if char == "=":
            if match("="):
                if match("="):
                    return self._operator("===", start_line, start_column)
                return self._operator("==", start_line, start_column)
            if match(">"):
                return self._operator("=>", start_line, start_column)
            return self._operator("=", start_line, start_column)

        if char == "!":
            if match("="):
                if match("="):
                    return self._operator("!==", start_line, start_column)
                return self._operator("!=", start_line, start_column)
            return self._operator("!", start_line, start_column)

        if char == "|":
            if match("|"):
                return self._operator("||", start_line, start_column)
            if match("="):
                return self._operator("|=", start_line, start_column)
            return self._operator("|", start_line, start_column)

        if char == "&":
            if match("&"):
                return self._operator("&&", start_line, start_column)
            if match("="):
                return self._operator("&=", start_line, start_column)
            return self._operator("&", start_line, start_column)

        if char == "^":
            if match("="):
                return self._operator("^=", start_line, start_column)
            return self._operator("^", start_line, start_column)

        # '~' has no longer form
        return self._operator(char, start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: str,
    filename: str = "<input>",
    config: Optional[ScannerConfig] = None,
) -> List[Token]:
    """
    Tokenize source text in one call.

    Args:
        source: Text to scan
        filename: Name used in token locations
        config: Grammar configuration (default: DEFAULT_CONFIG)

    Returns:
        All tokens, ending with a single EOF token
    """
    scanner = Scanner(CharacterStream(source, filename), config)
    return list(scanner.tokenize())


def format_tokens(tokens: List[Token], positions: bool = False) -> str:
    """
    Render tokens one per line as 'KIND: text'.

    Args:
        tokens: Tokens to render
        positions: Prefix each line with 'line:column'
    """
    lines = []
    for token in tokens:
        if positions:
            lines.append(f"{token.line}:{token.column} {token}")
        else:
            lines.append(str(token))
    return "\n".join(lines)
