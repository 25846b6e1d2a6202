"""
Pascal Lexer (Token Scanner)
============================

This module implements the top-level lexer of the Pascal front-end.
It turns source text into a stream of tokens for the downstream parser,
consuming comments and compiler directives along the way.

Token Categories
----------------
- IDENTIFIER: words built from letters, digits, '_', '.', ':' and '\\'
- EOF: end of input, always the last token

Everything else the scanner accepts is a comment:
- Brace:      { comment }      (nests)
- Paren-star: (* comment *)    (does not nest)
- Line:       // comment

Dots in Identifiers
-------------------
A '.' continues an identifier only once more than two characters have
been collected, so qualified names stay whole while a short word is
split from the dot that follows it:

| Input          | Tokens                  |
|----------------|-------------------------|
| unit.name.proc | 'unit.name.proc'        |
| a.b            | 'a', '.', 'b'           |

Conditional Compilation
-----------------------
Text inside a false {$ifdef} branch produces no tokens. Comments in it
must still be balanced; any other characters are discarded.

Example Usage
-------------
>>> from pasvm.scanner.lexer import PascalLexer
>>> lexer = PascalLexer("program hello { greet } begin end", "hello.pas")
>>> for token in lexer.tokenize():
...     print(token)
Token(IDENTIFIER, 'program', 1)
Token(IDENTIFIER, 'hello', 1)
Token(IDENTIFIER, 'begin', 1)
Token(IDENTIFIER, 'end', 1)
Token(EOF, 1)
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Optional

from pasvm.errors import SourceLocation
from pasvm.scanner.source import EOF, CharacterSource
from pasvm.scanner.session import DefineTable, ScanSession
from pasvm.scanner.comments import CommentScanner, WHITESPACE
from pasvm.scanner.directives import IDENT_CHARS
from pasvm.scanner.includes import IncludeResolver
from pasvm.scanner.errors import (
    UnknownCharacterError,
    UnterminatedConditionalError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Types
# =============================================================================

class TokenKind(Enum):
    """Token kinds produced by the Pascal lexer."""
    IDENTIFIER = auto()     # Identifier, keyword or qualified name
    EOF = auto()            # End of file


@dataclass(frozen=True)
class Token:
    """
    A single token from Pascal source.

    Attributes:
        kind: The TokenKind classification
        lexeme: The raw characters of the token ("" for EOF)
        line: Line number the token starts on (1-indexed)
        filename: File the token was read from
    """
    kind: TokenKind
    lexeme: str
    line: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.kind is TokenKind.EOF:
            return f"Token({self.kind.name}, {self.line})"
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line)

    @property
    def is_eof(self) -> bool:
        return self.kind is TokenKind.EOF


# =============================================================================
# Lexer Implementation
# =============================================================================

class PascalLexer:
    """
    Tokenizes Pascal source text.

    Each call to next_token() yields exactly one token. The scan is not
    restartable: once the EOF token has been produced every further call
    returns it again.

    Usage:
        lexer = PascalLexer(source_text, filename, defines=["debug"])
        tokens = list(lexer.tokenize())

    Attributes:
        source: Character source being scanned
        session: Shared scanner state (defines, conditionals, nesting)
        comments: Comment scanner handling '{', '(*' and '//'
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        defines: Iterable[str] = (),
        includer: Optional[IncludeResolver] = None,
        line_number: int = 1,
    ):
        """
        Initialize the lexer with source text.

        Args:
            source: Pascal source text to tokenize
            filename: Name of the source file (for error messages)
            defines: Conditional symbols defined before the scan starts
            includer: Collaborator that loads {$include} files
            line_number: Starting line number
        """
        self.source = CharacterSource(source, filename, line_number)
        self.session = ScanSession(self.source, DefineTable(defines))
        self.comments = CommentScanner(self.session, includer)
        self._eof_token: Optional[Token] = None

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the EOF token.

        Raises:
            ScanError: On the first fault found; the scan is abandoned
        """
        while True:
            token = self.next_token()
            yield token
            if token.is_eof:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Raises:
            UnknownCharacterError: On a character no token or comment accepts
            ScanError: On any comment or directive fault
        """
        if self._eof_token is not None:
            return self._eof_token

        source = self.source

        while True:
            char = source.next()

            if char == EOF:
                return self._end_of_file()

            if char in WHITESPACE:
                continue

            if char == "{":
                self.comments.scan_brace_comment()
                continue

            if char == "}":
                self.comments.close_stray_brace()
                continue

            if char == "(":
                # A lone '(' is inert in a false branch
                if not self.session.active and source.peek() != "*":
                    continue
                self.comments.scan_paren_comment()
                continue

            if char == "/":
                following = source.next()
                if following == "/":
                    if self.comments.scan_line_comment():
                        return self._end_of_file()
                    continue
                source.pushback(following)
                if not self.session.active:
                    continue
                raise UnknownCharacterError(char, source.location())

            if char in IDENT_CHARS:
                line = source.line
                filename = source.filename
                lexeme = self._scan_lexeme(char)
                if not self.session.active:
                    continue
                logger.info("token: %s", lexeme)
                return Token(TokenKind.IDENTIFIER, lexeme, line, filename)

            if not self.session.active:
                continue

            raise UnknownCharacterError(char, source.location())

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_lexeme(self, first: str) -> str:
        """
        Collect an identifier starting with first.

        A '.' continues the lexeme only when more than two characters have
        been collected; otherwise it is left for the next token. A '.' with
        nothing collected is a token of its own.
        """
        if first == ".":
            return first

        source = self.source
        chars = [first]

        while True:
            char = source.next()

            if char == ".":
                if len(chars) > 2:
                    chars.append(char)
                    continue
                source.pushback(char)
                break

            if char in IDENT_CHARS:
                chars.append(char)
                continue

            # Blanks end the lexeme and are consumed with it
            if char != EOF and char in WHITESPACE:
                break

            source.pushback(char)
            break

        return "".join(chars)

    def _end_of_file(self) -> Token:
        """
        Produce the EOF token.

        Raises:
            UnterminatedConditionalError: If an {$ifdef} is still open
        """
        conditionals = self.session.conditionals
        if conditionals:
            raise UnterminatedConditionalError(
                len(conditionals), self.source.location(),
            )

        self._eof_token = Token(
            TokenKind.EOF, "", self.source.line, self.source.filename,
        )
        logger.debug("end of file at line %d", self.source.line)
        return self._eof_token
