# =============================================================================
# test_comments.py - Comment Scanner Unit Tests
# =============================================================================
# Tests for brace, paren-star and line comment handling.
#
# Test coverage includes:
#   - Brace comment nesting and balance
#   - Paren-star comments closing at the first '*)'
#   - Line comments, including a file that ends inside one
#   - Line counting across multi-line comments
#   - Error conditions
# =============================================================================

import pytest
from pasvm.scanner import tokenize, PascalLexer, TokenKind
from pasvm.scanner.source import CharacterSource
from pasvm.scanner.session import ScanSession
from pasvm.scanner.comments import CommentScanner
from pasvm.scanner.errors import (
    CommentSyntaxError,
    UnbalancedCommentError,
    UnknownCharacterError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def lexemes(source: str) -> list[str]:
    """Tokenize and return the lexemes, without the EOF token."""
    return [t.lexeme for t in tokenize(source, "<test>") if not t.is_eof]


def make_scanner(text: str) -> tuple[CommentScanner, ScanSession]:
    """Build a comment scanner reading text with the opener already consumed."""
    session = ScanSession(CharacterSource(text, "<test>"))
    return CommentScanner(session), session


# =============================================================================
# Brace Comments
# =============================================================================

class TestBraceComments:
    """Test '{ ... }' comments."""

    def test_simple_comment(self):
        assert lexemes("a { comment } b") == ["a", "b"]

    def test_comment_only(self):
        assert lexemes("{ nothing here }") == []

    def test_comment_splits_identifiers(self):
        assert lexemes("a{c}b") == ["a", "b"]

    def test_nested_comment(self):
        assert lexemes("a { outer { inner } still outer } b") == ["a", "b"]

    def test_nesting_returns_to_entry_level(self):
        comments, session = make_scanner(" a { b { c } } d }tail")
        comments.scan_brace_comment()
        assert session.comment_level == 0
        assert session.source.next() == "t"

    def test_other_delimiters_are_comment_text(self):
        """'(*', '*)' and '//' mean nothing inside a brace comment."""
        assert lexemes("{ (* // *) } x") == ["x"]

    def test_unclosed_comment(self):
        with pytest.raises(UnbalancedCommentError):
            lexemes("a { never closed")

    def test_unclosed_nested_comment(self):
        with pytest.raises(UnbalancedCommentError):
            lexemes("{ outer { inner }")

    def test_stray_close_brace(self):
        with pytest.raises(UnbalancedCommentError):
            lexemes("a } b")

    def test_extra_close_brace_after_comment(self):
        with pytest.raises(UnbalancedCommentError):
            lexemes("{ a } }")

    def test_error_mentions_opening_line(self):
        with pytest.raises(UnbalancedCommentError) as exc_info:
            lexemes("\n\n{ open\n\n")
        assert exc_info.value.line == 5
        assert "line 3" in str(exc_info.value)

    def test_deeply_nested_comment(self):
        """Nesting depth is not limited by the Python call stack."""
        assert lexemes("{" * 5000 + "}" * 5000 + " x") == ["x"]

    def test_deeply_nested_unclosed_comment(self):
        with pytest.raises(UnbalancedCommentError) as exc_info:
            lexemes("{" * 5000)
        assert "line 1" in str(exc_info.value)

    def test_deep_nesting_returns_to_entry_level(self):
        comments, session = make_scanner("{" * 3000 + "}" * 3000 + "}tail")
        comments.scan_brace_comment()
        assert session.comment_level == 0
        assert session.source.next() == "t"

    def test_nested_comment_inside_directive_argument(self):
        """A comment nested in a directive is closed without ending the directive."""
        comments, session = make_scanner("$define {{ c }} fast}x")
        comments.scan_brace_comment()
        assert session.defines.is_defined("fast")
        assert session.comment_level == 0
        assert session.source.next() == "x"


# =============================================================================
# Paren-Star Comments
# =============================================================================

class TestParenStarComments:
    """Test '(* ... *)' comments."""

    def test_simple_comment(self):
        assert lexemes("a (* comment *) b") == ["a", "b"]

    def test_adjacent(self):
        assert lexemes("a(*c*)b") == ["a", "b"]

    def test_stars_before_close(self):
        assert lexemes("(* a ** b **) x") == ["x"]

    def test_open_star_does_not_close(self):
        """'(*)' opens a comment; its '*' cannot also close it."""
        with pytest.raises(UnbalancedCommentError):
            lexemes("(*) x")

    def test_braces_are_comment_text(self):
        assert lexemes("(* { } } *) x") == ["x"]

    def test_does_not_nest(self):
        """An interior '(*' is not a nested opener."""
        lexer = PascalLexer("(* a (* b *) c *)", "<test>")
        token = lexer.next_token()
        assert token.kind is TokenKind.IDENTIFIER
        assert token.lexeme == "c"
        with pytest.raises(UnknownCharacterError) as exc_info:
            lexer.next_token()
        assert exc_info.value.char == "*"

    def test_unclosed_comment(self):
        with pytest.raises(UnbalancedCommentError):
            lexemes("(* never closed")

    def test_lone_paren(self):
        with pytest.raises(CommentSyntaxError) as exc_info:
            lexemes("a ( b")
        assert exc_info.value.found == " "

    def test_paren_must_be_immediately_followed_by_star(self):
        with pytest.raises(CommentSyntaxError):
            lexemes("( * not a comment *)")

    def test_paren_at_end_of_file(self):
        with pytest.raises(CommentSyntaxError):
            lexemes("a (")

    def test_paren_before_newline_reports_paren_line(self):
        with pytest.raises(CommentSyntaxError) as exc_info:
            lexemes("a (\nb")
        assert exc_info.value.line == 1
        assert str(exc_info.value).startswith("<test>:1: error:")


# =============================================================================
# Line Comments
# =============================================================================

class TestLineComments:
    """Test '//' comments."""

    def test_comment_to_end_of_line(self):
        assert lexemes("a // comment\nb") == ["a", "b"]

    def test_comment_to_eof_yields_only_eof(self):
        tokens = tokenize("// comment to EOF", "<test>")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.EOF

    def test_comment_to_eof_after_tokens(self):
        tokens = tokenize("a // trailing", "<test>")
        assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER, TokenKind.EOF]

    def test_brace_inside_line_comment(self):
        assert lexemes("// { not a comment opener\nx") == ["x"]

    def test_single_slash(self):
        with pytest.raises(UnknownCharacterError) as exc_info:
            lexemes("a / b")
        assert exc_info.value.char == "/"


# =============================================================================
# Line Tracking
# =============================================================================

class TestLineTracking:
    """Test that comments keep the line counter accurate."""

    def test_multiline_brace_comment(self):
        tokens = tokenize("{\n\n}\nx", "<test>")
        assert tokens[0].line == 4

    def test_multiline_paren_comment(self):
        tokens = tokenize("(*\n*\n*)x", "<test>")
        assert tokens[0].line == 3

    def test_line_comment_newline_counted(self):
        tokens = tokenize("// one\n// two\nx", "<test>")
        assert tokens[0].line == 3
