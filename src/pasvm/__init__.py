"""
Pascal 2 VM - Pascal Source Front-End
=====================================

This package provides the lexical front-end of a Pascal to virtual
machine translator. It converts Pascal source into a token stream for a
downstream parser, consuming comments and executing the compiler
directives embedded in them.

Main Components
---------------
- **scanner**: character source, comment and directive scanners, and
    the token scanner (PascalLexer)

- **translator**: runs one scan of one input and writes the token
    listing (Translator, ScannerOptions)

- **cli**: the pasvm command-line tool

Quick Start
-----------
Tokenize a string:
    >>> from pasvm import tokenize
    >>> [t.lexeme for t in tokenize("unit.name.proc")]
    ['unit.name.proc', '']

Scan a file:
    >>> from pasvm import Translator
    >>> result = Translator().translate_file("hello.pas")
    >>> print(result.output)

Or use the command-line tool:
    $ pasvm hello.pas

Version History
---------------
1.0.0 - Initial release with comment, directive and token scanning
"""

__version__ = "1.0.0"
__author__ = "Jens Kallup & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from pasvm.errors import PasvmError, SourceLocation
from pasvm.scanner import (
    PascalLexer,
    Token,
    TokenKind,
    tokenize,
    ScanError,
    UnbalancedCommentError,
    CommentSyntaxError,
    InvalidDirectiveArgumentError,
    DanglingElseError,
    DanglingEndifError,
    UnterminatedConditionalError,
    UnknownCharacterError,
    SourceIOError,
    IncludeError,
)
from pasvm.translator import Translator, ScannerOptions, TranslationResult

__all__ = [
    "__version__",
    "PasvmError",
    "SourceLocation",
    "PascalLexer",
    "Token",
    "TokenKind",
    "tokenize",
    "ScanError",
    "UnbalancedCommentError",
    "CommentSyntaxError",
    "InvalidDirectiveArgumentError",
    "DanglingElseError",
    "DanglingEndifError",
    "UnterminatedConditionalError",
    "UnknownCharacterError",
    "SourceIOError",
    "IncludeError",
    "Translator",
    "ScannerOptions",
    "TranslationResult",
]
