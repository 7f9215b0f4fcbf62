"""
Character Stream
================

A read-only view over source text with a single forward-moving cursor.
The stream tracks line and column for every consumed character so that
tokens and diagnostics can report where they came from.

Reads past the end of the text are defined, not erroneous: peek() and
next() return the empty string and the cursor stays where it is.

    >>> stream = CharacterStream("ab\\nc")
    >>> stream.next(), stream.next(), stream.next()
    ('a', 'b', '\\n')
    >>> stream.line, stream.column
    (2, 1)
"""

from tokscan.errors import SourceLocation


# Returned by peek()/next() outside the source text
EOF_CHAR = ""


class CharacterStream:
    """
    Cursor over an immutable source string.

    Attributes:
        source: The text being read
        filename: Name of the source (for locations)
        pos: Offset of the next character to read
        line: Current line number (1-indexed)
        column: Current column number (1-indexed)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self.pos = 0
        self.line = 1
        self.column = 1

        # Offset where the current line starts, for diagnostic context
        self._line_start_pos = 0

    def peek(self, offset: int = 0) -> str:
        """
        Look at the character at pos + offset without advancing.

        Returns EOF_CHAR if that position is outside the source.
        """
        pos = self.pos + offset
        if pos < 0 or pos >= len(self.source):
            return EOF_CHAR
        return self.source[pos]

    def next(self) -> str:
        """
        Consume and return the current character.

        At end of input this returns EOF_CHAR and changes nothing.
        """
        if self.is_at_end():
            return EOF_CHAR

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
            self._line_start_pos = self.pos
        else:
            self.column += 1

        return char

    def match(self, expected: str) -> bool:
        """Consume the current character if it equals expected."""
        if expected and self.peek() == expected:
            self.next()
            return True
        return False

    def is_at_end(self) -> bool:
        return self.peek() == EOF_CHAR

    def location(self) -> SourceLocation:
        """Return the location of the character under the cursor."""
        return SourceLocation(self.filename, self.line, self.column)

    def current_line(self) -> str:
        """Get the text of the line holding the cursor."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    def __repr__(self) -> str:
        return (
            f"CharacterStream({self.filename!r}, pos={self.pos}, "
            f"{self.line}:{self.column})"
        )
