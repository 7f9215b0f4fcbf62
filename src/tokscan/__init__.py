"""
tokscan - Lexical Scanner with Bounded Lookahead
================================================

This package turns source text into a stream of classified tokens for a
parser. It is the first stage of a language front end.

Main Components
---------------
- **stream**: CharacterStream, a cursor over source text that tracks
  line and column

- **scanner**: Scanner, the pull-based tokenizer with next()/peek()/peek2()
  and a per-scanner diagnostics channel

- **tokens**: TokenKind, Token and ScannerConfig (keywords, separators,
  whitespace for one grammar)

- **rules**: RuleTokenizer, a separate tokenizer for bracketed
  validation-rule lists

Quick Start
-----------
    >>> from tokscan import CharacterStream, Scanner
    >>> scanner = Scanner(CharacterStream("a >>>= 1"))
    >>> scanner.peek2()
    Token(OPERATOR, '>>>=', 1:3)
    >>> scanner.next()
    Token(IDENTIFIER, 'a', 1:1)

Or tokenize everything at once:
    >>> from tokscan import tokenize
    >>> [t.text for t in tokenize("f(x);")]
    ['f', '(', 'x', ')', ';', '']

Or use the command-line tool:
    $ tokscan program.js
    $ tokscan -e 'let x = 1;' --positions
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from tokscan.errors import (
    TokscanError,
    SourceLocation,
    ScanError,
    UnterminatedStringError,
    UnterminatedCommentError,
    InvalidCharacterError,
    MalformedNumberError,
    MalformedEllipsisError,
    ScanFailedError,
    RuleSyntaxError,
    Severity,
    Diagnostic,
    DiagnosticCollector,
)
from tokscan.tokens import (
    TokenKind,
    Token,
    ScannerConfig,
    DEFAULT_CONFIG,
    DEFAULT_KEYWORDS,
    DEFAULT_SEPARATORS,
    DEFAULT_WHITESPACE,
)
from tokscan.stream import CharacterStream, EOF_CHAR
from tokscan.scanner import Scanner, tokenize, format_tokens
from tokscan.rules import (
    RuleTokenizer,
    RuleToken,
    RuleTokenKind,
    tokenize_rules,
)

__all__ = [
    "__version__",

    # Errors and diagnostics
    "TokscanError",
    "SourceLocation",
    "ScanError",
    "UnterminatedStringError",
    "UnterminatedCommentError",
    "InvalidCharacterError",
    "MalformedNumberError",
    "MalformedEllipsisError",
    "ScanFailedError",
    "RuleSyntaxError",
    "Severity",
    "Diagnostic",
    "DiagnosticCollector",

    # Tokens and configuration
    "TokenKind",
    "Token",
    "ScannerConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_KEYWORDS",
    "DEFAULT_SEPARATORS",
    "DEFAULT_WHITESPACE",

    # Scanning
    "CharacterStream",
    "EOF_CHAR",
    "Scanner",
    "tokenize",
    "format_tokens",

    # Rule lists
    "RuleTokenizer",
    "RuleToken",
    "RuleTokenKind",
    "tokenize_rules",
]
