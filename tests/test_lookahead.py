"""
Tests for the Scanner Lookahead Protocol
========================================

next() consumes, peek() and peek2() observe. These tests check ordering,
idempotence and that peeking never reads further than it needs to.
"""

import pytest

from tokscan import CharacterStream, Scanner, TokenKind


def make_scanner(source: str) -> Scanner:
    return Scanner(CharacterStream(source, "<test>"))


# =============================================================================
# End of Input
# =============================================================================

class TestEndOfInput:
    """EOF is reached and repeats."""

    @pytest.mark.parametrize("source", ["", "a", "a b c", "/* open", '"open', "#"])
    def test_eof_repeats(self, source):
        scanner = make_scanner(source)
        for _ in range(20):
            if scanner.next().kind == TokenKind.EOF:
                break
        else:
            pytest.fail("EOF was never produced")

        for _ in range(3):
            assert scanner.next().kind == TokenKind.EOF
            assert scanner.peek().kind == TokenKind.EOF
            assert scanner.peek2().kind == TokenKind.EOF

    def test_tokenize_yields_single_eof(self):
        tokens = list(make_scanner("a b").tokenize())
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert tokens[-1].is_eof()

    def test_peek2_past_end(self):
        scanner = make_scanner("x")
        assert scanner.peek2().kind == TokenKind.EOF
        assert scanner.next().text == "x"
        assert scanner.next().kind == TokenKind.EOF


# =============================================================================
# Peek
# =============================================================================

class TestPeek:
    """peek() and peek2() do not consume."""

    def test_peek_twice_identical(self):
        scanner = make_scanner("foo bar")
        first = scanner.peek()
        second = scanner.peek()
        assert first == second
        assert (first.kind, first.text) == (TokenKind.IDENTIFIER, "foo")

    def test_peek_then_next(self):
        scanner = make_scanner("foo bar")
        peeked = scanner.peek()
        assert scanner.next() == peeked
        assert scanner.next().text == "bar"

    def test_peek2_order(self):
        """peek2, next, next returns what peek and peek2 exposed."""
        scanner = make_scanner("a + 1")
        first = scanner.peek()
        second = scanner.peek2()
        assert scanner.next() == first
        assert scanner.next() == second
        assert scanner.next().text == "1"

    def test_peek2_before_peek(self):
        scanner = make_scanner("x = y")
        second = scanner.peek2()
        first = scanner.peek()
        assert first.text == "x"
        assert second.text == "="

    def test_peek2_repeated(self):
        scanner = make_scanner("a b c")
        assert scanner.peek2() == scanner.peek2()
        assert scanner.peek2().text == "b"

    def test_peek_does_not_read_further(self):
        scanner = make_scanner("ab cd ef")
        scanner.peek()
        assert scanner.stream.pos == 2
        scanner.peek()
        assert scanner.stream.pos == 2
        scanner.peek2()
        assert scanner.stream.pos == 5
        scanner.peek2()
        assert scanner.stream.pos == 5

    def test_next_after_peek2_does_not_read(self):
        scanner = make_scanner("ab cd ef")
        scanner.peek2()
        scanner.next()
        scanner.next()
        assert scanner.stream.pos == 5

    def test_peek_after_next_refills(self):
        scanner = make_scanner("a b c")
        scanner.peek2()
        scanner.next()
        assert scanner.peek().text == "b"
        assert scanner.peek2().text == "c"

    def test_buffer_never_exceeds_depth(self):
        scanner = make_scanner("a b c d e")
        for _ in range(5):
            scanner.peek()
            scanner.peek2()
            assert len(scanner._buffer) <= Scanner.LOOKAHEAD_DEPTH
            scanner.next()

    def test_interleaved_matches_plain_scan(self):
        source = "let total = price * 1.5 >>> 2; // done"
        plain = list(make_scanner(source).tokenize())

        scanner = make_scanner(source)
        mixed = []
        while True:
            scanner.peek2()
            scanner.peek()
            token = scanner.next()
            mixed.append(token)
            if token.is_eof():
                break

        assert mixed == plain


# =============================================================================
# Diagnostics and Lookahead
# =============================================================================

class TestDiagnosticsWithLookahead:

    def test_peek_records_diagnostic_once(self):
        scanner = make_scanner("# a")
        scanner.peek()
        scanner.peek()
        scanner.peek2()
        assert len(scanner.diagnostics) == 1

    def test_diagnostics_in_source_order(self):
        scanner = make_scanner('# a $ "b')
        list(scanner.tokenize())
        messages = [d.message for d in scanner.diagnostics]
        assert "'#'" in messages[0]
        assert "'$'" in messages[1]
        assert "unterminated string" in messages[2]
