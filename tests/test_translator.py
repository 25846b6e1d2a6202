"""
Tests for the Translator Driver
===============================

These tests verify that the translator scans sources and files, writes
the token listing, and keeps partial output when a scan fails.
"""

import pytest

from pasvm.translator import Translator, ScannerOptions, TranslationResult
from pasvm.scanner.session import AppType
from pasvm.scanner.errors import (
    SourceIOError,
    UnbalancedCommentError,
    UnknownCharacterError,
)


# =============================================================================
# Options
# =============================================================================

class TestScannerOptions:
    """Tests for ScannerOptions defaults."""

    def test_defaults(self):
        options = ScannerOptions()
        assert options.defines == []
        assert options.include_paths == ["."]
        assert options.max_include_depth == 16

    def test_defines_reach_the_scanner(self):
        translator = Translator(ScannerOptions(defines=["Debug"]))
        result = translator.translate_source("{$ifdef debug} on {$else} off {$endif}")
        assert result.output_lines == ["1\ton"]
        assert result.defines == ["debug"]

    def test_include_depth_limit(self, tmp_path):
        (tmp_path / "a.inc").write_text("{$include b.inc}")
        (tmp_path / "b.inc").write_text("deep")
        translator = Translator(ScannerOptions(max_include_depth=1))
        with pytest.raises(SourceIOError) as exc_info:
            translator.translate_source("{$include a.inc}", str(tmp_path / "main.pas"))
        assert "nesting" in str(exc_info.value)


# =============================================================================
# Source Translation
# =============================================================================

class TestTranslateSource:
    """Tests for Translator.translate_source()."""

    def test_output_lines(self):
        result = Translator().translate_source("program hello\nbegin end.")
        assert result.output_lines == [
            "1\tprogram",
            "1\thello",
            "2\tbegin",
            "2\tend.",
        ]

    def test_tokens_end_with_eof(self):
        result = Translator().translate_source("a")
        assert len(result.tokens) == 2
        assert result.tokens[-1].is_eof
        assert result.token_count == 1

    def test_output_has_trailing_newline(self):
        result = Translator().translate_source("a b")
        assert result.output == "1\ta\n1\tb\n"

    def test_empty_output(self):
        result = Translator().translate_source("{ only a comment }")
        assert result.output == "\n"

    def test_app_type(self):
        result = Translator().translate_source("{$apptype gui} program x")
        assert result.app_type is AppType.GUI

    def test_line_count(self):
        result = Translator().translate_source("a\nb\nc\n")
        assert result.lines == 4

    def test_partial_output_kept_on_error(self):
        translator = Translator()
        with pytest.raises(UnknownCharacterError):
            translator.translate_source("a b ; c")
        assert translator.output_lines == ["1\ta", "1\tb"]

    def test_each_scan_is_fresh(self):
        """Defines from one scan do not leak into the next."""
        translator = Translator()
        translator.translate_source("{$define x}")
        result = translator.translate_source("{$ifdef x} a {$endif}")
        assert result.output_lines == []


# =============================================================================
# File Translation
# =============================================================================

class TestTranslateFile:
    """Tests for Translator.translate_file()."""

    def test_default_output_name(self, tmp_path):
        source = tmp_path / "hello.pas"
        source.write_text("program hello")
        result = Translator().translate_file(source)

        output = tmp_path / "hello.pas.out"
        assert output.read_text() == "1\tprogram\n1\thello\n"
        assert isinstance(result, TranslationResult)
        assert result.filename == str(source)

    def test_explicit_output(self, tmp_path):
        source = tmp_path / "hello.pas"
        source.write_text("x")
        output = tmp_path / "listing.txt"
        Translator().translate_file(source, output)
        assert output.read_text() == "1\tx\n"

    def test_missing_input(self, tmp_path):
        with pytest.raises(SourceIOError) as exc_info:
            Translator().translate_file(tmp_path / "missing.pas")
        assert "can not open input file" in str(exc_info.value)
        assert not (tmp_path / "missing.pas.out").exists()

    def test_output_not_creatable(self, tmp_path):
        source = tmp_path / "hello.pas"
        source.write_text("x")
        with pytest.raises(SourceIOError) as exc_info:
            Translator().translate_file(source, tmp_path / "no" / "such" / "dir.out")
        assert "can not open write file" in str(exc_info.value)

    def test_include_relative_to_input(self, tmp_path):
        (tmp_path / "defs.inc").write_text("{$define fast}")
        source = tmp_path / "main.pas"
        source.write_text("{$include defs.inc}\n{$ifdef fast} quick {$endif}")
        result = Translator().translate_file(source)
        assert result.output_lines == ["2\tquick"]

    def test_scan_error_propagates(self, tmp_path):
        source = tmp_path / "bad.pas"
        source.write_text("a { open")
        translator = Translator()
        with pytest.raises(UnbalancedCommentError):
            translator.translate_file(source)
        assert translator.output_lines == ["1\ta"]
