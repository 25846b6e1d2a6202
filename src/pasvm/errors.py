"""
Pascal 2 VM Error Hierarchy
===========================

This module defines the root of the exception hierarchy for the whole
translator. All exceptions inherit from PasvmError, allowing callers to
catch every translator-related error with a single except clause.

Exception Hierarchy
-------------------
PasvmError (base)
└── ScanError (lexical front-end, see pasvm.scanner.errors)
    ├── UnbalancedCommentError
    ├── CommentSyntaxError
    ├── InvalidDirectiveArgumentError
    ├── DanglingElseError
    ├── DanglingEndifError
    ├── UnterminatedConditionalError
    ├── UnknownCharacterError
    └── SourceIOError
        └── IncludeError

Error messages follow this format:
    filename:line: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class PasvmError(Exception):
    """
    Base exception for all Pascal 2 VM errors.

    All exceptions raised by the translator inherit from this class:

        try:
            Translator().translate_file("hello.pas")
        except PasvmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in Pascal source for error reporting.

    The scanner only tracks lines, so a location is a filename plus a
    1-indexed line number.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"
