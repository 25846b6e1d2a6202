"""
Pascal Lexical Front-End
========================

This package converts Pascal source text into tokens while consuming
comments and interpreting the compiler directives embedded in them.

Components
----------
- source:     CharacterSource, a positioned stream with one-char pushback
- comments:   CommentScanner for {...}, (*...*) and // comments
- directives: DirectiveScanner for {$define}, {$ifdef}, {$include}, ...
- session:    DefineTable, ConditionalStack and the per-scan ScanSession
- includes:   IncludeResolver, the {$include} file collaborator
- lexer:      PascalLexer, the token scanner

Pipeline
--------
    Source text → CharacterSource → PascalLexer → Tokens → (parser)
                                         ↕
                           CommentScanner ↔ DirectiveScanner

Usage
-----
>>> from pasvm.scanner import tokenize
>>> [t.lexeme for t in tokenize("{$define x}{$ifdef x} yes {$else} no {$endif}")]
['yes', '']
"""

from typing import Iterable, Optional

from pasvm.scanner.source import CharacterSource, EOF
from pasvm.scanner.session import (
    AppType,
    ConditionalFrame,
    ConditionalStack,
    DefineTable,
    ScanSession,
)
from pasvm.scanner.includes import IncludeResolver
from pasvm.scanner.lexer import PascalLexer, Token, TokenKind
from pasvm.scanner.errors import (
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


def tokenize(
    source: str,
    filename: str = "<input>",
    defines: Iterable[str] = (),
    include_paths: Optional[list[str]] = None,
) -> list[Token]:
    """
    Tokenize Pascal source text.

    Args:
        source: Source text
        filename: Source filename for error reporting
        defines: Conditional symbols defined before scanning
        include_paths: Directories to search for {$include} files

    Returns:
        All tokens, ending with the EOF token
    """
    lexer = PascalLexer(
        source,
        filename,
        defines=defines,
        includer=IncludeResolver(include_paths),
    )
    return list(lexer.tokenize())


__all__ = [
    "CharacterSource",
    "EOF",
    "AppType",
    "ConditionalFrame",
    "ConditionalStack",
    "DefineTable",
    "ScanSession",
    "IncludeResolver",
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
]
