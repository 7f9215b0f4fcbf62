"""
Tests for Errors and Diagnostics
================================

These tests verify error message formatting, the DiagnosticCollector and
the diagnostics channel exposed by Scanner.
"""

import pytest

from tokscan import (
    CharacterStream,
    Diagnostic,
    DiagnosticCollector,
    InvalidCharacterError,
    MalformedNumberError,
    RuleSyntaxError,
    ScanError,
    ScanFailedError,
    Scanner,
    Severity,
    SourceLocation,
    TokscanError,
    UnterminatedCommentError,
    UnterminatedStringError,
)


LOCATION = SourceLocation("app.js", 3, 9)


# =============================================================================
# Exception Formatting
# =============================================================================

class TestScanErrorFormatting:

    def test_hierarchy(self):
        assert issubclass(ScanError, TokscanError)
        assert issubclass(UnterminatedStringError, ScanError)
        assert issubclass(ScanFailedError, ScanError)
        assert issubclass(RuleSyntaxError, TokscanError)

    def test_location_prefix(self):
        error = ScanError("something odd", LOCATION)
        assert str(error) == "app.js:3:9: error: something odd"

    def test_without_location(self):
        assert str(ScanError("something odd")) == "error: something odd"

    def test_source_line_and_caret(self):
        error = InvalidCharacterError("#", LOCATION, "let a = #b;")
        lines = str(error).split("\n")
        assert lines[0] == "app.js:3:9: error: unrecognized character '#' (0x23)"
        assert lines[1] == "    let a = #b;"
        assert lines[2] == "            ^"

    def test_long_source_line_is_clipped(self):
        line = "a" * 5000 + "#" + "b" * 5000
        error = InvalidCharacterError("#", SourceLocation("app.js", 1, 5001), line)
        assert error.source_line.startswith("...")
        assert error.source_line.endswith("...")
        assert len(error.source_line) == 86

        lines = str(error).split("\n")
        assert lines[1].index("#") == 47
        assert lines[2].index("^") == 47

    def test_clipped_near_line_start(self):
        line = "#" + "b" * 500
        error = InvalidCharacterError("#", SourceLocation("app.js", 1, 1), line)
        assert error.source_line == "#" + "b" * 79 + "..."
        assert str(error).split("\n")[2] == "    ^"

    def test_args_hold_only_the_message(self):
        error = InvalidCharacterError("#", LOCATION, "let a = #b;")
        assert error.args == ("unrecognized character '#' (0x23)",)

    def test_hint(self):
        error = UnterminatedCommentError(LOCATION)
        assert str(error).endswith("hint: add closing */ to terminate the comment")

    def test_invalid_character_keeps_char(self):
        assert InvalidCharacterError("$", LOCATION).char == "$"

    def test_rule_syntax_error_message(self):
        error = RuleSyntaxError("unexpected character '!'", SourceLocation("<rules>", 1, 4))
        assert str(error) == "<rules>:1:4: error: unexpected character '!'"


# =============================================================================
# Diagnostic Collector
# =============================================================================

class TestDiagnosticCollector:

    def test_empty(self):
        collector = DiagnosticCollector()
        assert not collector.has_errors()
        assert len(collector) == 0
        collector.raise_if_errors()

    def test_add_error(self):
        collector = DiagnosticCollector()
        diagnostic = collector.add(MalformedNumberError(LOCATION))
        assert isinstance(diagnostic, Diagnostic)
        assert diagnostic.severity is Severity.ERROR
        assert diagnostic.location == LOCATION
        assert diagnostic.hint == "remove the leading zero"
        assert collector.error_count() == 1

    def test_add_warning(self):
        collector = DiagnosticCollector()
        collector.add_warning("suspicious", LOCATION)
        assert not collector.has_errors()
        assert collector.warning_count() == 1
        assert str(collector.warnings[0]) == "app.js:3:9: warning: suspicious"

    def test_order_preserved(self):
        collector = DiagnosticCollector()
        collector.add(InvalidCharacterError("#", LOCATION))
        collector.add_warning("w", LOCATION)
        collector.add(UnterminatedStringError(LOCATION))
        severities = [d.severity for d in collector.diagnostics]
        assert severities == [Severity.ERROR, Severity.WARNING, Severity.ERROR]

    def test_report_summary(self):
        collector = DiagnosticCollector()
        collector.add(InvalidCharacterError("#", LOCATION))
        collector.add(InvalidCharacterError("$", LOCATION))
        collector.add_warning("w", LOCATION)
        report = collector.report()
        assert "'#'" in report
        assert "'$'" in report
        assert report.endswith("2 errors, 1 warning")

    def test_raise_if_errors(self):
        collector = DiagnosticCollector()
        collector.add(UnterminatedStringError(LOCATION))
        with pytest.raises(ScanFailedError, match="unterminated string literal"):
            collector.raise_if_errors()

    def test_max_errors(self):
        collector = DiagnosticCollector(max_errors=2)
        assert collector.add(InvalidCharacterError("#", LOCATION)) is not None
        assert not collector.should_stop()
        collector.add(InvalidCharacterError("$", LOCATION))
        assert collector.should_stop()
        assert collector.add(InvalidCharacterError("%", LOCATION)) is None

        messages = [d.message for d in collector.diagnostics]
        assert len(messages) == 3
        assert messages[-1] == "too many errors (limit 2); further errors not recorded"
        assert str(collector.diagnostics[-1]).startswith("app.js:3:9: error: too many errors")

    def test_warnings_still_recorded_after_limit(self):
        collector = DiagnosticCollector(max_errors=1)
        collector.add(InvalidCharacterError("#", LOCATION))
        collector.add_warning("w", LOCATION)
        assert collector.warning_count() == 1

    def test_no_limit(self):
        collector = DiagnosticCollector(max_errors=None)
        for _ in range(150):
            collector.add(InvalidCharacterError("#", LOCATION))
        assert not collector.should_stop()
        assert collector.error_count() == 150

    def test_diagnostics_is_a_copy(self):
        collector = DiagnosticCollector()
        collector.add(UnterminatedStringError(LOCATION))
        collector.diagnostics.clear()
        assert len(collector) == 1


# =============================================================================
# Scanner Diagnostics Channel
# =============================================================================

class TestScannerDiagnostics:

    def test_clean_source_has_none(self):
        scanner = Scanner(CharacterStream("let a = 1;"))
        list(scanner.tokenize())
        assert scanner.diagnostics == []
        assert not scanner.has_errors()
        scanner.raise_if_errors()

    def test_errors_recorded_not_raised(self):
        scanner = Scanner(CharacterStream('a # "b', "bad.js"))
        tokens = list(scanner.tokenize())
        assert [t.text for t in tokens] == ["a", "b", ""]
        assert scanner.has_errors()
        assert [str(d.location) for d in scanner.diagnostics] == ["bad.js:1:3", "bad.js:1:5"]

    def test_raise_if_errors(self):
        scanner = Scanner(CharacterStream("/* open", "bad.js"))
        list(scanner.tokenize())
        with pytest.raises(ScanFailedError) as exc_info:
            scanner.raise_if_errors()
        assert "bad.js:1:1: error: unterminated comment" in str(exc_info.value)

    def test_report(self):
        scanner = Scanner(CharacterStream("0123"))
        list(scanner.tokenize())
        assert "1 error, 0 warnings" in scanner.report()

    def test_diagnostic_errors_logged(self, caplog):
        import logging
        with caplog.at_level(logging.DEBUG, logger="tokscan.scanner"):
            scanner = Scanner(CharacterStream("#"))
            list(scanner.tokenize())
        assert "Recorded diagnostic" in caplog.text
        assert "Reached end of <input>" in caplog.text
