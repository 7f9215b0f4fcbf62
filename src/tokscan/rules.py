"""
Rule List Tokenizer
===================

A small tokenizer for bracketed validation-rule lists such as:

    [required, custom[positiveInt], min[0], max[100], pattern['^a']]

This grammar is much smaller than the one handled by Scanner and is kept
apart from it on purpose: it has its own keyword and separator sets, no
comments and no multi-character operators.

Token Kinds
-----------
- KEYWORD: custom
- IDENTIFIER: required, positiveInt, min
- SEPARATOR: [ ] ,
- STRING_LITERAL: 'single quoted' (quotes stripped)
- NUMBER_LITERAL: 100, 2.5
- EOF

Unlike Scanner, the rule tokenizer stops at the first error and raises
RuleSyntaxError.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List
import string

from tokscan.errors import RuleSyntaxError, SourceLocation
from tokscan.stream import CharacterStream


class RuleTokenKind(Enum):
    KEYWORD = auto()
    IDENTIFIER = auto()
    SEPARATOR = auto()
    STRING_LITERAL = auto()
    NUMBER_LITERAL = auto()
    EOF = auto()


RULE_KEYWORDS = frozenset({"custom"})
RULE_SEPARATORS = frozenset("[],")
RULE_WHITESPACE = frozenset(" \n\t")

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")


@dataclass(frozen=True)
class RuleToken:
    """A token from a rule list."""
    kind: RuleTokenKind
    text: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.text}"


class RuleTokenizer:
    """
    Tokenizes a validation-rule list.

    Usage:
        tokenizer = RuleTokenizer(CharacterStream("[required, min[0]]"))
        tokens = list(tokenizer.tokenize())
    """

    def __init__(self, stream: CharacterStream):
        self.stream = stream

    def tokenize(self) -> Iterator[RuleToken]:
        """Yield every token, ending with EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is RuleTokenKind.EOF:
                return

    def next_token(self) -> RuleToken:
        """
        Scan and return the next token.

        Raises:
            RuleSyntaxError: On a character outside the rule grammar
        """
        while self.stream.peek() in RULE_WHITESPACE:
            self.stream.next()

        location = self.stream.location()
        char = self.stream.peek()

        if self.stream.is_at_end():
            return RuleToken(RuleTokenKind.EOF, "", location)

        if char in _LETTERS:
            return self._scan_identifier(location)

        if char in RULE_SEPARATORS:
            self.stream.next()
            return RuleToken(RuleTokenKind.SEPARATOR, char, location)

        if char == "'":
            return self._scan_string(location)

        if char in _DIGITS:
            return self._scan_number(location)

        raise RuleSyntaxError(f"unexpected character '{char}'", location)

    def _scan_identifier(self, location: SourceLocation) -> RuleToken:
        chars = [self.stream.next()]
        while self.stream.peek() in _IDENT_CHARS:
            chars.append(self.stream.next())

        word = "".join(chars)
        if word in RULE_KEYWORDS:
            return RuleToken(RuleTokenKind.KEYWORD, word, location)
        return RuleToken(RuleTokenKind.IDENTIFIER, word, location)

    def _scan_string(self, location: SourceLocation) -> RuleToken:
        self.stream.next()  # consume opening '

        chars = []
        while self.stream.peek() != "'":
            if self.stream.is_at_end():
                raise RuleSyntaxError(
                    f"string literal '{''.join(chars)}' needs a closing single quote",
                    location,
                )
            chars.append(self.stream.next())

        self.stream.next()  # consume closing '
        return RuleToken(RuleTokenKind.STRING_LITERAL, "".join(chars), location)

    def _scan_number(self, location: SourceLocation) -> RuleToken:
        chars = [self.stream.next()]
        while self.stream.peek() in _DIGITS:
            chars.append(self.stream.next())

        if self.stream.peek() == "." and self.stream.peek(1) in _DIGITS:
            chars.append(self.stream.next())
            while self.stream.peek() in _DIGITS:
                chars.append(self.stream.next())

        return RuleToken(RuleTokenKind.NUMBER_LITERAL, "".join(chars), location)


def tokenize_rules(source: str, filename: str = "<rules>") -> List[RuleToken]:
    """Tokenize a rule list in one call. Raises RuleSyntaxError on bad input."""
    return list(RuleTokenizer(CharacterStream(source, filename)).tokenize())
