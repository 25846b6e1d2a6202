"""
Scanner Error Hierarchy
=======================

Every fault the lexical front-end detects is fatal: it is raised at the
point of detection, carries the current line, and unwinds the whole scan.
There is no warning level and no local recovery.

Exception Hierarchy
-------------------
ScanError (base for all scanner errors)
├── UnbalancedCommentError - brace nesting underflow, or EOF inside a comment
├── CommentSyntaxError - '(' not immediately followed by '*'
├── InvalidDirectiveArgumentError - bad or missing directive argument
├── DanglingElseError - {$else} without {$ifdef}, or a second {$else}
├── DanglingEndifError - {$endif} without {$ifdef}
├── UnterminatedConditionalError - EOF with {$ifdef} still open
├── UnknownCharacterError - character outside every accepted class
└── SourceIOError - input/output file cannot be opened or created
    └── IncludeError - {$include} file cannot be found or spliced

Example:
    hello.pas:7: error: unbalanced comment: unexpected '}'
    hint: remove the '}' or add a matching '{'
"""

from typing import Optional, List

from pasvm.errors import PasvmError, SourceLocation


# =============================================================================
# Base Scanner Exception
# =============================================================================

class ScanError(PasvmError):
    """
    Base exception for all scanner errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number the error was detected on, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

            hello.pas:3: error: dangling {$else}
            hint: every {$else} needs an open {$ifdef}
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Comment Errors
# =============================================================================

class UnbalancedCommentError(ScanError):
    """
    Brace comment nesting went negative, or the file ended inside a
    brace or paren-star comment.
    """
    pass


class CommentSyntaxError(ScanError):
    """
    A '(' that does not open a '(*' comment.

    Parentheses have no meaning to this scanner other than opening a
    comment, so a lone '(' is always a fault.
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        shown = repr(found) if found else "end of file"
        super().__init__(
            f"comment syntax error: expected '*' after '(', found {shown}",
            location=location,
        )


# =============================================================================
# Directive Errors
# =============================================================================

class InvalidDirectiveArgumentError(ScanError):
    """
    A directive argument is missing or not one of the accepted values.

    Example:
        {$apptype service}    // only console and gui are accepted
    """

    def __init__(
        self,
        directive: str,
        argument: str,
        location: Optional[SourceLocation] = None,
        expected: Optional[List[str]] = None,
    ):
        self.directive = directive
        self.argument = argument
        self.expected = expected or []

        hint = None
        if self.expected:
            hint = "expected one of: " + ", ".join(self.expected)

        if argument:
            message = f"invalid argument '{argument}' for {{${directive}}}"
        else:
            message = f"missing argument for {{${directive}}}"

        super().__init__(message, location=location, hint=hint)


class DanglingElseError(ScanError):
    """{$else} with no open {$ifdef}, or a second {$else} for one {$ifdef}."""
    pass


class DanglingEndifError(ScanError):
    """{$endif} with no open {$ifdef}."""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "dangling {$endif}",
            location=location,
            hint="every {$endif} needs an open {$ifdef}",
        )


class UnterminatedConditionalError(ScanError):
    """End of file reached while one or more {$ifdef} frames are open."""

    def __init__(self, depth: int, location: Optional[SourceLocation] = None):
        self.depth = depth
        super().__init__(
            f"{depth} unterminated {{$ifdef}} at end of file",
            location=location,
            hint="add the missing {$endif}",
        )


# =============================================================================
# Token Errors
# =============================================================================

class UnknownCharacterError(ScanError):
    """
    A character outside every accepted class appeared where a token
    was expected.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown character '{char}' (0x{ord(char):02X})",
            location=location,
        )


# =============================================================================
# I/O Errors
# =============================================================================

class SourceIOError(ScanError):
    """The input file cannot be opened, or the output file cannot be created."""
    pass


class IncludeError(SourceIOError):
    """
    Error splicing an {$include} file.

    Raised when:
        - Include file not found
        - Include file unreadable
        - Circular include detected
        - Include nesting too deep
    """

    def __init__(
        self,
        filename: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        search_paths: Optional[List[str]] = None,
    ):
        self.included_filename = filename
        self.reason = reason
        self.search_paths = search_paths or []

        hint = None
        if self.search_paths:
            hint = "searched in: " + ", ".join(self.search_paths)

        super().__init__(
            f"cannot include '{filename}': {reason}",
            location=location,
            hint=hint,
        )
