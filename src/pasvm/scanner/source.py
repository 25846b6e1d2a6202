"""
Character Source
================

A positioned character stream over Pascal source text. Every other
scanner component reads characters exclusively through this class.

The stream offers:
- next(): the next character, or EOF ("") once input is exhausted
- pushback(): return a single character to the stream
- line: the current line number

Included files are spliced in as additional frames. Each frame carries
its own filename and line counter; when a spliced frame is exhausted the
enclosing frame resumes where it left off.
"""

from dataclasses import dataclass

from pasvm.errors import SourceLocation


# Sentinel returned by next() at end of input
EOF = ""


@dataclass
class _Frame:
    """Read position within one piece of spliced text."""
    text: str
    filename: str
    line: int = 1
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)


class CharacterSource:
    """
    Character stream with one character of pushback and line tracking.

    Every newline returned by next() increments the line counter exactly
    once, before the caller sees it. EOF is returned repeatedly, without
    side effects, once all frames are exhausted.

    Usage:
        source = CharacterSource("program hello", "hello.pas")
        c = source.next()       # 'p'
        source.pushback(c)
        source.next()           # 'p' again

    Attributes:
        filename: Name of the file currently being read
        line: Current line number in that file
    """

    def __init__(
        self,
        text: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        """
        Initialize the source over a block of text.

        Args:
            text: Source text to stream
            filename: Name used in error locations
            line_number: Starting line number
        """
        self._frames: list[_Frame] = [_Frame(text, filename, line_number)]
        self._pushed: str | None = None

    # =========================================================================
    # Stream Access
    # =========================================================================

    def next(self) -> str:
        """
        Consume and return the next character.

        Returns:
            The next character, or EOF when the input is exhausted
        """
        if self._pushed is not None:
            char = self._pushed
            self._pushed = None
        else:
            # Drop exhausted spliced frames, never the outermost one
            while len(self._frames) > 1 and self._frames[-1].at_end():
                self._frames.pop()

            frame = self._frames[-1]
            if frame.at_end():
                return EOF

            char = frame.text[frame.pos]
            frame.pos += 1

        if char == "\n":
            self._frames[-1].line += 1

        return char

    def pushback(self, char: str) -> None:
        """
        Return one character to the stream.

        Pushing back a newline undoes its line increment so that it is
        counted once when read again. Pushing back EOF is a no-op.

        Raises:
            ValueError: If a character is already pushed back
        """
        if char == EOF:
            return
        if self._pushed is not None:
            raise ValueError("pushback buffer already holds a character")

        self._pushed = char
        if char == "\n":
            self._frames[-1].line -= 1

    def peek(self) -> str:
        """Look at the next character without consuming it."""
        char = self.next()
        self.pushback(char)
        return char

    # =========================================================================
    # Position
    # =========================================================================

    @property
    def line(self) -> int:
        """Current line number in the active frame."""
        return self._frames[-1].line

    @property
    def filename(self) -> str:
        """Name of the file currently being read."""
        return self._frames[-1].filename

    def location(self) -> SourceLocation:
        """Return the current position for error reporting."""
        return SourceLocation(self.filename, self.line)

    # =========================================================================
    # Splicing
    # =========================================================================

    def splice(self, text: str, filename: str) -> None:
        """
        Insert text at the current read position.

        The spliced text is read to completion before the current frame
        resumes. A pending pushback character stays in front of it.

        Args:
            text: Characters to insert
            filename: Name reported in locations while reading them
        """
        self._frames.append(_Frame(text, filename))

    @property
    def depth(self) -> int:
        """Number of spliced frames currently open (0 for the main file)."""
        return len(self._frames) - 1

    def active_files(self) -> list[str]:
        """
        Filenames of all open frames, outermost first.

        An exhausted frame stays open until the next read moves past it,
        so text spliced at its very end still counts as nested inside it.
        """
        return [frame.filename for frame in self._frames]
