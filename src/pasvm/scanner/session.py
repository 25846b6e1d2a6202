"""
Scanner Session State
=====================

The mutable state shared by the scanner components for one scan of one
input:

- DefineTable: the set of names introduced by {$define}
- ConditionalStack: one ConditionalFrame per open {$ifdef}
- ScanSession: the above plus the character source, the brace comment
  nesting level, the recorded application type and pending includes

A session is created when a scan starts and discarded when it ends. It is
never shared between scans.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from pasvm.scanner.source import CharacterSource
from pasvm.scanner.errors import (
    DanglingElseError,
    DanglingEndifError,
    UnbalancedCommentError,
)


# =============================================================================
# Application Type
# =============================================================================

class AppType(Enum):
    """Application kind recorded by {$apptype}."""
    CONSOLE = "console"
    GUI = "gui"

    @property
    def description(self) -> str:
        """Human-readable label reported by the driver."""
        if self is AppType.CONSOLE:
            return "console application"
        return "graphical app"


# =============================================================================
# Define Table
# =============================================================================

class DefineTable:
    """
    Ordered set of defined conditional symbols.

    Names are lower-cased on every operation, so {$DEFINE Debug} and
    {$ifdef DEBUG} refer to the same symbol. Defining an existing name and
    undefining an absent one are both no-ops.
    """

    def __init__(self, names: Iterable[str] = ()):
        # dict preserves insertion order; values are unused
        self._names: dict[str, None] = {}
        for name in names:
            self.define(name)

    def define(self, name: str) -> None:
        """Insert a name."""
        self._names.setdefault(name.lower(), None)

    def undef(self, name: str) -> None:
        """Remove a name if present."""
        self._names.pop(name.lower(), None)

    def is_defined(self, name: str) -> bool:
        """Return True if the name is currently defined."""
        return name.lower() in self._names

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_defined(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"DefineTable({list(self._names)!r})"


# =============================================================================
# Conditional Stack
# =============================================================================

@dataclass
class ConditionalFrame:
    """
    State of one open {$ifdef}.

    Attributes:
        branch_taken: True while the current branch is active
        else_seen: True once {$else} has been processed for this frame
    """
    branch_taken: bool
    else_seen: bool = False


class ConditionalStack:
    """
    Stack of ConditionalFrame objects, one per open {$ifdef}.

    Source text is active only while every open frame has its branch
    taken, so a nested {$ifdef} inside an inactive region stays inactive
    regardless of its own condition.
    """

    def __init__(self):
        self._frames: list[ConditionalFrame] = []

    def push(self, branch_taken: bool) -> ConditionalFrame:
        """Open a frame for {$ifdef}."""
        frame = ConditionalFrame(branch_taken)
        self._frames.append(frame)
        return frame

    def flip(self, location=None) -> ConditionalFrame:
        """
        Switch the top frame to its {$else} branch.

        Raises:
            DanglingElseError: If no frame is open or {$else} was already seen
        """
        if not self._frames:
            raise DanglingElseError(
                "dangling {$else}",
                location,
                hint="every {$else} needs an open {$ifdef}",
            )

        frame = self._frames[-1]
        if frame.else_seen:
            raise DanglingElseError(
                "duplicate {$else} for the same {$ifdef}",
                location,
                hint="an {$ifdef} block can have at most one {$else}",
            )

        frame.branch_taken = not frame.branch_taken
        frame.else_seen = True
        return frame

    def pop(self, location=None) -> ConditionalFrame:
        """
        Close the top frame for {$endif}.

        Raises:
            DanglingEndifError: If no frame is open
        """
        if not self._frames:
            raise DanglingEndifError(location)
        return self._frames.pop()

    @property
    def active(self) -> bool:
        """True if source text at this point produces tokens."""
        return all(frame.branch_taken for frame in self._frames)

    @property
    def top(self) -> Optional[ConditionalFrame]:
        """The innermost open frame, or None."""
        return self._frames[-1] if self._frames else None

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)


# =============================================================================
# Scan Session
# =============================================================================

@dataclass
class ScanSession:
    """
    Everything the scanner components share for one scan.

    Attributes:
        source: Character source being scanned
        defines: Currently defined conditional symbols
        conditionals: Open {$ifdef} frames
        comment_level: Current brace comment nesting level (never negative)
        app_type: Application kind from {$apptype}, if any
        pending_includes: Include names waiting for their directive's
            comment to close before being spliced
    """
    source: CharacterSource
    defines: DefineTable = field(default_factory=DefineTable)
    conditionals: ConditionalStack = field(default_factory=ConditionalStack)
    comment_level: int = 0
    app_type: Optional[AppType] = None
    pending_includes: list[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        """True if the current source text is outside any false branch."""
        return self.conditionals.active

    def open_comment(self) -> int:
        """Enter a brace comment and return the new nesting level."""
        self.comment_level += 1
        return self.comment_level

    def close_comment(self) -> int:
        """
        Leave a brace comment and return the new nesting level.

        Raises:
            UnbalancedCommentError: If the level would drop below zero
        """
        if self.comment_level == 0:
            raise UnbalancedCommentError(
                "unbalanced comment: unexpected '}'",
                self.source.location(),
                hint="remove the '}' or add a matching '{'",
            )
        self.comment_level -= 1
        return self.comment_level
