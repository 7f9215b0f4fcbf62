"""
tokscan Error Hierarchy
=======================

This module defines the exception hierarchy and the diagnostics collector
used by the scanner. All exceptions inherit from TokscanError, allowing
callers to catch every scanner-related error with a single except clause.

Exception Hierarchy
-------------------
TokscanError (base)
├── ScanError - recoverable lexical errors in source text
│   ├── UnterminatedStringError - missing closing '"'
│   ├── UnterminatedCommentError - missing closing '*/'
│   ├── InvalidCharacterError - character outside the grammar
│   ├── MalformedNumberError - number with a leading zero
│   └── MalformedEllipsisError - '..' not followed by a third '.'
├── ScanFailedError - aggregate report raised on request
└── RuleSyntaxError - errors from the rule-list tokenizer

Recoverable vs Fatal
--------------------
The scanner never raises ScanError subclasses. It records them in a
DiagnosticCollector and keeps going, so a consumer always receives a
well-formed token stream ending in EOF. A consumer that wants fatal
behaviour calls raise_if_errors() on the collector once scanning is done.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TokscanError(Exception):
    """
    Base exception for all tokscan errors.

        try:
            tokens = tokenize_rules(text)
        except TokscanError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Scan Errors
# =============================================================================

# Widest slice of a source line kept for error context
MAX_CONTEXT_WIDTH = 80


class ScanError(TokscanError):
    """
    Lexical error in source text.

    Carries the location, an optional hint and the offending source line
    so the message can point at the problem. The full message is built
    when the error is printed. Long source lines are clipped to a window
    of MAX_CONTEXT_WIDTH characters around the error column.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The (possibly clipped) source text around the error
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = None
        self._caret_column = location.column if location else 0
        if source_line is not None:
            self._set_source_line(source_line)
        super().__init__(message)

    def __str__(self) -> str:
        return self._format_message()

    def _set_source_line(self, line: str) -> None:
        """Keep at most MAX_CONTEXT_WIDTH characters around the caret."""
        if len(line) <= MAX_CONTEXT_WIDTH:
            self.source_line = line
            return

        column = self._caret_column
        start = max(0, column - 1 - MAX_CONTEXT_WIDTH // 2)
        end = start + MAX_CONTEXT_WIDTH
        clipped = line[start:end]

        if start > 0:
            clipped = "..." + clipped
            self._caret_column = column - start + 3
        if end < len(line):
            clipped = clipped + "..."

        self.source_line = clipped

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            demo.js:3:9: error: unrecognized character '#'
                let a = #b;
                        ^
            hint: remove the character or move it into a string
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self._caret_column > 0:
                padding = " " * (4 + self._caret_column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnterminatedStringError(ScanError):
    """
    String literal reached end of input before its closing quote.

    Example:
        let s = "hello
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class UnterminatedCommentError(ScanError):
    """Block comment reached end of input before '*/'."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )


class InvalidCharacterError(ScanError):
    """
    Character that cannot start any token.

    The scanner skips the character and carries on with the next one.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unrecognized character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class MalformedNumberError(ScanError):
    """
    Integer literal written with a leading zero.

    Example:
        let n = 0123;
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "integer literal cannot start with '0'",
            location=location,
            hint="remove the leading zero",
            source_line=source_line,
        )


class MalformedEllipsisError(ScanError):
    """Two dots that are not followed by a third."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unrecognized pattern '..'",
            location=location,
            hint="did you mean '...'?",
            source_line=source_line,
        )


class ScanFailedError(ScanError):
    """
    Aggregate error containing every error recorded during a scan.

    The message is already a formatted report from DiagnosticCollector
    and is passed through unchanged.
    """

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Rule Tokenizer Errors
# =============================================================================

class RuleSyntaxError(TokscanError):
    """
    Error raised by the rule-list tokenizer.

    Unlike the main scanner, the rule tokenizer stops at the first
    problem it meets.
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        if location:
            super().__init__(f"{location}: error: {message}")
        else:
            super().__init__(f"error: {message}")


# =============================================================================
# Diagnostics
# =============================================================================

class Severity(Enum):
    """How serious a recorded diagnostic is."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """
    One entry in the diagnostics channel.

    Attributes:
        location: Where the problem was found
        severity: ERROR or WARNING
        message: Short description, without location prefix
        hint: Optional suggestion for fixing
        error: The ScanError this diagnostic was built from, if any
    """
    location: SourceLocation
    severity: Severity
    message: str
    hint: Optional[str] = None
    error: Optional[ScanError] = None

    def __str__(self) -> str:
        if self.error is not None:
            return str(self.error)
        return f"{self.location}: {self.severity.value}: {self.message}"


class DiagnosticCollector:
    """
    Collects diagnostics for batch reporting.

    The scanner owns one collector and adds to it instead of raising, so
    that a single pass reports every problem in the source.

    After max_errors errors, one "too many errors" diagnostic is recorded
    and further errors are dropped. Pass max_errors=None for no limit.

    Example:
        collector = DiagnosticCollector()
        collector.add(InvalidCharacterError("#", location))

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: Optional[int] = 100):
        self._diagnostics: List[Diagnostic] = []
        self.max_errors = max_errors
        self._error_count = 0
        self._stopped = False

    def should_stop(self) -> bool:
        """Return True once the error limit has been reached."""
        return self._stopped

    def add(self, error: ScanError) -> Optional[Diagnostic]:
        """
        Record a scan error and return the diagnostic built from it.

        Returns None if the error limit was already reached.
        """
        if self._stopped:
            return None

        diagnostic = Diagnostic(
            location=error.location,
            severity=Severity.ERROR,
            message=error.message,
            hint=error.hint,
            error=error,
        )
        self._diagnostics.append(diagnostic)
        self._error_count += 1

        if self.max_errors is not None and self._error_count >= self.max_errors:
            self._diagnostics.append(Diagnostic(
                location=error.location,
                severity=Severity.ERROR,
                message=(
                    f"too many errors (limit {self.max_errors}); "
                    f"further errors not recorded"
                ),
            ))
            self._stopped = True

        return diagnostic

    def add_warning(self, message: str, location: SourceLocation) -> Diagnostic:
        """Record a warning."""
        diagnostic = Diagnostic(
            location=location,
            severity=Severity.WARNING,
            message=message,
        )
        self._diagnostics.append(diagnostic)
        return diagnostic

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """All diagnostics in the order they were recorded."""
        return list(self._diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity is Severity.WARNING]

    def has_errors(self) -> bool:
        """Return True if any errors have been recorded."""
        return any(d.severity is Severity.ERROR for d in self._diagnostics)

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for diagnostic in self.errors:
            lines.append(str(diagnostic))
            lines.append("")

        for diagnostic in self.warnings:
            lines.append(str(diagnostic))

        error_word = "error" if self.error_count() == 1 else "errors"
        warning_word = "warning" if self.warning_count() == 1 else "warnings"
        lines.append(
            f"\n{self.error_count()} {error_word}, "
            f"{self.warning_count()} {warning_word}"
        )

        return "\n".join(lines)

    def raise_if_errors(self) -> None:
        """Raise a ScanFailedError if any errors were recorded."""
        if self.has_errors():
            raise ScanFailedError(self.report())
