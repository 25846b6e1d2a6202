"""
Include File Resolution
=======================

Locates and loads the file named by an {$include} directive so that the
comment scanner can splice it into the character source.

Search order:
1. The directory of the file containing the directive
2. Each configured include path, in order

Directive arguments arrive lower-cased, so when the name is not found
verbatim a case-insensitive match in the search directory is accepted.
Backslashes in the name are treated as path separators.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from pasvm.scanner.errors import IncludeError

if TYPE_CHECKING:
    from pasvm.scanner.source import CharacterSource


DEFAULT_MAX_INCLUDE_DEPTH = 16


class IncludeResolver:
    """
    Finds and reads {$include} files.

    Guards against circular inclusion and runaway nesting.

    Attributes:
        include_paths: Directories searched after the including file's own
        max_depth: Maximum number of nested includes
    """

    def __init__(
        self,
        include_paths: Optional[list[str]] = None,
        max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ):
        self.include_paths = include_paths or ["."]
        self.max_depth = max_depth

    def resolve(self, name: str, current_file: str) -> Optional[Path]:
        """
        Find an include file.

        Args:
            name: File name from the directive
            current_file: File containing the directive

        Returns:
            Path to the file, or None if not found
        """
        relative = Path(name.replace("\\", "/"))

        for directory in self._search_paths(current_file):
            candidate = directory / relative
            if candidate.is_file():
                return candidate

            # Case-insensitive fallback on the final path component
            parent = candidate.parent
            if parent.is_dir():
                wanted = candidate.name.lower()
                for entry in sorted(parent.iterdir()):
                    if entry.name.lower() == wanted and entry.is_file():
                        return entry

        return None

    def load(self, name: str, source: "CharacterSource") -> tuple[str, str]:
        """
        Resolve and read an include file for splicing into a source.

        Args:
            name: File name from the directive
            source: Character source the text will be spliced into

        Returns:
            Tuple of (file text, path used as the frame filename)

        Raises:
            IncludeError: If the file is missing, unreadable, already being
                included, or nesting is too deep
        """
        location = source.location()

        if source.depth >= self.max_depth:
            raise IncludeError(
                name,
                f"include nesting deeper than {self.max_depth}",
                location,
            )

        path = self.resolve(name, source.filename)
        if path is None:
            raise IncludeError(
                name,
                "file not found",
                location,
                search_paths=[str(p) for p in self._search_paths(source.filename)],
            )

        resolved = path.resolve()
        active = {Path(filename).resolve() for filename in source.active_files()}
        if resolved in active:
            raise IncludeError(name, "circular include detected", location)

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IncludeError(name, str(e), location) from e

        return text, str(path)

    def _search_paths(self, current_file: str) -> list[Path]:
        """Directories searched for an include from current_file."""
        return [Path(current_file).parent] + [Path(p) for p in self.include_paths]
