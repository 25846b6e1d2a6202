"""
Comment Scanner
===============

Consumes the three Pascal comment forms. Each entry point is called with
the opening delimiter already consumed and returns once the matching
close delimiter has been consumed.

Comment Forms
-------------
| Form       | Open | Close      | Nests |
|------------|------|------------|-------|
| Brace      | {    | }          | yes   |
| Paren-star | (*   | *)         | no    |
| Line       | //   | end of line| -     |

Brace comments nest: every inner '{' needs its own '}'. Paren-star
comments do not: the first '*)' closes the comment no matter how many
'(*' appear inside it.

A brace comment opened at nesting level 0 whose first non-blank
character is '$' carries a compiler directive, handed to the
DirectiveScanner. Files named by {$include} are spliced into the
character source once that comment is closed.
"""

import logging
from typing import Optional

from pasvm.scanner.source import EOF
from pasvm.scanner.session import ScanSession
from pasvm.scanner.directives import DirectiveScanner
from pasvm.scanner.includes import IncludeResolver
from pasvm.scanner.errors import (
    CommentSyntaxError,
    UnbalancedCommentError,
)

logger = logging.getLogger(__name__)


# Characters absorbed without affecting comment state
WHITESPACE = " \t\r\n"


class CommentScanner:
    """
    Consumes brace, paren-star and line comments for one scan session.

    Attributes:
        session: Shared scanner state
        directives: Directive scanner used for '{$...}' comments
    """

    def __init__(
        self,
        session: ScanSession,
        includer: Optional[IncludeResolver] = None,
    ):
        """
        Initialize the comment scanner.

        Args:
            session: Shared scanner state
            includer: Collaborator that loads {$include} files
        """
        self.session = session
        self.directives = DirectiveScanner(session, self)
        self._includer = includer or IncludeResolver()

    # =========================================================================
    # Brace Comments
    # =========================================================================

    def scan_brace_comment(self) -> None:
        """
        Consume a brace comment, including nested brace comments.

        Entered with '{' consumed. The nesting level is back to its entry
        value on return. Inner braces are tracked in session.comment_level
        rather than by recursion, so nesting depth is unbounded.

        Raises:
            UnbalancedCommentError: If the file ends before the closing '}'
        """
        source = self.session.source
        start_line = source.line
        base = self.session.comment_level
        level = self.session.open_comment()

        # Only a top-level comment can carry a directive
        expect_directive = level == 1

        while self.session.comment_level > base:
            char = source.next()

            if char == EOF:
                raise UnbalancedCommentError(
                    "unbalanced comment: end of file inside '{' comment",
                    source.location(),
                    hint=f"comment opened at line {start_line} is never closed",
                )

            if char in WHITESPACE:
                continue

            if char == "$" and expect_directive:
                expect_directive = False
                self.directives.scan_directive()
                continue

            expect_directive = False

            if char == "{":
                self.session.open_comment()
            elif char == "}":
                self.session.close_comment()

        if level == 1:
            self._splice_pending_includes()

    def close_stray_brace(self) -> None:
        """
        Handle a '}' found outside any comment.

        Raises:
            UnbalancedCommentError: Always, since the nesting level is zero
        """
        self.session.close_comment()

    # =========================================================================
    # Paren-Star Comments
    # =========================================================================

    def scan_paren_comment(self) -> None:
        """
        Consume a '(* ... *)' comment.

        Entered with '(' consumed; the next character must be '*'.
        Interior '(*' sequences do not nest.

        Raises:
            CommentSyntaxError: If '(' is not immediately followed by '*'
            UnbalancedCommentError: If the file ends before '*)'
        """
        source = self.session.source
        start_line = source.line
        location = source.location()

        char = source.next()
        if char != "*":
            raise CommentSyntaxError(char, location)

        star = False
        while True:
            char = source.next()

            if char == EOF:
                raise UnbalancedCommentError(
                    "unbalanced comment: end of file inside '(*' comment",
                    source.location(),
                    hint=f"comment opened at line {start_line} needs a closing '*)'",
                )

            if star and char == ")":
                return

            star = char == "*"

    # =========================================================================
    # Line Comments
    # =========================================================================

    def scan_line_comment(self) -> bool:
        """
        Consume a '//' comment up to and including the end of line.

        Entered with '//' consumed.

        Returns:
            True if the file ended inside the comment
        """
        source = self.session.source
        while True:
            char = source.next()
            if char == "\n":
                return False
            if char == EOF:
                return True

    # =========================================================================
    # Include Splicing
    # =========================================================================

    def _splice_pending_includes(self) -> None:
        """Splice files queued by {$include} into the character source."""
        pending = self.session.pending_includes
        if not pending:
            return

        source = self.session.source

        # Splice in reverse so the first queued file is read first
        for name in reversed(pending):
            text, path = self._includer.load(name, source)
            logger.info("including %s", path)
            source.splice(text, path)

        pending.clear()
