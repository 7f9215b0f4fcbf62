"""
Token Model and Scanner Configuration
=====================================

This module defines the token kinds produced by the scanner, the
immutable Token value, and the ScannerConfig that carries the reserved
words, separators and whitespace characters for one grammar.

Token Kinds
-----------
| Kind            | Example lexemes              |
|-----------------|------------------------------|
| KEYWORD         | function, return, let        |
| IDENTIFIER      | foo, _tmp, x1                |
| STRING_LITERAL  | "abc" (text is abc)          |
| INTEGER_LITERAL | 0, 42                        |
| DECIMAL_LITERAL | 3.14, .5                     |
| NULL_LITERAL    | null                         |
| BOOLEAN_LITERAL | true, false                  |
| SEPARATOR       | ( ) { } [ ] , ; : ? @ ...    |
| OPERATOR        | + ++ += >>>= === => .        |
| EOF             | (empty text)                 |

Configuration
-------------
The keyword and separator sets are not global state. Each Scanner gets a
ScannerConfig at construction time, so scanners for different grammars
can coexist:

    >>> config = ScannerConfig(keywords=frozenset({"fn", "let"}))
    >>> scanner = Scanner(CharacterStream("fn main"), config)
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto

from tokscan.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Category of a scanned lexeme."""

    KEYWORD = auto()
    IDENTIFIER = auto()

    # === Literals ===
    STRING_LITERAL = auto()
    INTEGER_LITERAL = auto()
    DECIMAL_LITERAL = auto()
    NULL_LITERAL = auto()
    BOOLEAN_LITERAL = auto()

    # === Punctuation ===
    SEPARATOR = auto()
    OPERATOR = auto()

    # === Structural ===
    EOF = auto()


# =============================================================================
# Default Grammar
# =============================================================================

DEFAULT_KEYWORDS: frozenset[str] = frozenset({
    "function", "class", "break", "delete", "return", "case", "do", "if",
    "switch", "var", "catch", "else", "in", "this", "void", "continue",
    "false", "instanceof", "throw", "while", "debugger", "finally", "new",
    "true", "with", "default", "for", "null", "try", "typeof",

    # Reserved in strict mode
    "implements", "let", "private", "public", "yield", "interface",
    "package", "protected", "static",
})

DEFAULT_SEPARATORS: frozenset[str] = frozenset("(){}[],;:?@")

DEFAULT_WHITESPACE: frozenset[str] = frozenset(" \n\t")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        kind: The TokenKind classification
        text: The lexeme, with string quotes removed
        line: Line where the lexeme starts (1-indexed)
        column: Column where the lexeme starts (1-indexed)
        filename: Name of the source
    """
    kind: TokenKind
    text: str
    line: int = 0
    column: int = 0
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.kind is TokenKind.EOF:
            return f"Token(EOF, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.text}"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_eof(self) -> bool:
        return self.kind is TokenKind.EOF


# =============================================================================
# Scanner Configuration
# =============================================================================

@dataclass(frozen=True)
class ScannerConfig:
    """
    Grammar data injected into a Scanner.

    Attributes:
        keywords: Reserved words classified as KEYWORD
        separators: Single characters classified as SEPARATOR
        whitespace: Characters skipped between tokens

    null, true and false are always classified as literals, whether or
    not they appear in keywords.
    """
    keywords: frozenset[str] = field(default=DEFAULT_KEYWORDS)
    separators: frozenset[str] = field(default=DEFAULT_SEPARATORS)
    whitespace: frozenset[str] = field(default=DEFAULT_WHITESPACE)

    def __post_init__(self):
        # Accept any iterable of strings but store frozensets
        object.__setattr__(self, "keywords", frozenset(self.keywords))
        object.__setattr__(self, "separators", frozenset(self.separators))
        object.__setattr__(self, "whitespace", frozenset(self.whitespace))

        for char in self.separators | self.whitespace:
            if len(char) != 1:
                raise ValueError(f"expected a single character, got {char!r}")

    def with_keywords(self, *extra: str) -> "ScannerConfig":
        """Return a copy of this config with extra reserved words."""
        return replace(self, keywords=self.keywords | frozenset(extra))


DEFAULT_CONFIG = ScannerConfig()
