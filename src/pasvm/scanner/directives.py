"""
Directive Scanner
=================

Reads and executes the compiler directive carried by a '{$...}' comment.
The scanner is entered with the '$' already consumed; it reads the
directive name, dispatches to its handler, and leaves the rest of the
comment to the CommentScanner.

Supported Directives
--------------------
{$apptype console|gui}  - Record the application kind
{$define NAME}          - Define a conditional symbol
{$undef NAME}           - Remove a conditional symbol
{$ifdef NAME}           - Open a conditional block, active if NAME is defined
{$else}                 - Switch to the other branch of the open block
{$endif}                - Close the open conditional block
{$include FILE}         - Splice FILE into the source after this comment

Names and arguments are case-insensitive: both are lower-cased before
use. An unknown directive is not an error; the comment is ordinary
comment text.

Inside an inactive conditional branch only {$ifdef}, {$else} and
{$endif} are executed, so that block nesting stays balanced.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from pasvm.scanner.source import EOF
from pasvm.scanner.session import AppType, ScanSession
from pasvm.scanner.errors import InvalidDirectiveArgumentError

if TYPE_CHECKING:
    from pasvm.scanner.comments import CommentScanner

logger = logging.getLogger(__name__)


# Characters that make up directive names and arguments
IDENT_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "_.:\\"
)

WHITESPACE = " \t\r\n"

# Directives executed even inside an inactive branch
CONDITIONAL_DIRECTIVES = frozenset({"ifdef", "else", "endif"})


class DirectiveScanner:
    """
    Parses and executes '{$...}' compiler directives.

    Attributes:
        session: Shared scanner state mutated by the handlers
        comments: Comment scanner used for comments nested in arguments
    """

    def __init__(self, session: ScanSession, comments: "CommentScanner"):
        self.session = session
        self.comments = comments

        self._handlers: dict[str, Callable[[], None]] = {
            "apptype": self._do_apptype,
            "define": self._do_define,
            "else": self._do_else,
            "endif": self._do_endif,
            "ifdef": self._do_ifdef,
            "include": self._do_include,
            "undef": self._do_undef,
        }

    @property
    def names(self) -> list[str]:
        """Names of all recognized directives."""
        return sorted(self._handlers)

    def scan_directive(self) -> Optional[str]:
        """
        Read a directive name and run its handler.

        Entered with '$' consumed.

        Returns:
            The lower-cased directive name if it was executed, None if the
            directive is unknown or skipped in an inactive branch
        """
        name = self._read_word(resume_after_comment=False)
        key = name.lower()

        handler = self._handlers.get(key)
        if handler is None:
            logger.debug("unknown directive '$%s' treated as comment", name)
            return None

        if not self.session.active and key not in CONDITIONAL_DIRECTIVES:
            logger.debug("skipping {$%s} in inactive branch", key)
            return None

        logger.info("directive: %s", key)
        handler()
        return key

    # =========================================================================
    # Reading
    # =========================================================================

    def _read_word(self, resume_after_comment: bool) -> str:
        """
        Read a name or argument made of identifier characters.

        Leading blanks are skipped. The word ends at a blank or newline
        (consumed), at '}' or any other character (left in the stream), or
        at a '{' which opens a nested comment. A nested comment before the
        first word character is skipped and reading resumes.
        """
        source = self.session.source
        chars: list[str] = []

        while True:
            char = source.next()

            if char in IDENT_CHARS:
                chars.append(char)
                continue

            if char in WHITESPACE and char != EOF:
                if chars:
                    break
                continue

            if char == "{" and resume_after_comment:
                self.comments.scan_brace_comment()
                if chars:
                    break
                continue

            source.pushback(char)
            break

        return "".join(chars)

    def _read_argument(self, directive: str) -> str:
        """
        Read the required argument of a directive, lower-cased.

        Raises:
            InvalidDirectiveArgumentError: If the argument is missing
        """
        argument = self._read_word(resume_after_comment=True)
        if not argument:
            raise InvalidDirectiveArgumentError(
                directive, "", self.session.source.location(),
            )
        return argument.lower()

    # =========================================================================
    # Handlers
    # =========================================================================

    def _do_apptype(self) -> None:
        """{$apptype console|gui}"""
        location = self.session.source.location()
        argument = self._read_argument("apptype")
        try:
            app_type = AppType(argument)
        except ValueError:
            raise InvalidDirectiveArgumentError(
                "apptype",
                argument,
                location,
                expected=[kind.value for kind in AppType],
            ) from None

        self.session.app_type = app_type
        logger.info(app_type.description)

    def _do_define(self) -> None:
        """{$define NAME}"""
        name = self._read_argument("define")
        self.session.defines.define(name)
        logger.info("define token: %s", name)

    def _do_undef(self) -> None:
        """{$undef NAME}"""
        name = self._read_argument("undef")
        self.session.defines.undef(name)
        logger.info("undef token: %s", name)

    def _do_ifdef(self) -> None:
        """{$ifdef NAME}"""
        name = self._read_argument("ifdef")
        taken = self.session.defines.is_defined(name)
        self.session.conditionals.push(taken)
        logger.info("ifdef token: %s (%s)", name, "taken" if taken else "skipped")

    def _do_else(self) -> None:
        """{$else}"""
        frame = self.session.conditionals.flip(self.session.source.location())
        logger.debug("else: branch %s", "taken" if frame.branch_taken else "skipped")

    def _do_endif(self) -> None:
        """{$endif}"""
        self.session.conditionals.pop(self.session.source.location())
        logger.debug("endif: %d open", len(self.session.conditionals))

    def _do_include(self) -> None:
        """{$include FILE}"""
        name = self._read_argument("include")
        self.session.pending_includes.append(name)
        logger.info("include token: %s", name)
