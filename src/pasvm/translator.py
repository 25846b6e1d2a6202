"""
Pascal 2 VM Translator Driver
=============================

This module runs one scan of one Pascal input and produces the output
artifact. It is the glue between the command line and the lexical
front-end:

    Input file → PascalLexer → Token stream → Output listing

Usage
-----
Command line:
    $ pasvm hello.pas            # writes hello.pas.out

Programmatic:
    >>> from pasvm.translator import Translator
    >>> result = Translator().translate_source("program hello")
    >>> result.output_lines
    ['1\\tprogram', '1\\thello']

Output Listing
--------------
One line per identifier token, formatted as LINE<TAB>lexeme, followed by
a trailing newline when written to a file. If the scan fails, the lines
collected so far remain in Translator.output_lines for diagnosis.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pasvm.scanner.lexer import PascalLexer, Token
from pasvm.scanner.session import AppType
from pasvm.scanner.includes import IncludeResolver, DEFAULT_MAX_INCLUDE_DEPTH
from pasvm.scanner.errors import SourceIOError

logger = logging.getLogger(__name__)


@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        defines: Conditional symbols defined before the scan starts,
                 as if by {$define NAME} at the top of the input
        include_paths: Directories to search for {$include} files
        max_include_depth: Maximum nesting of {$include} files
    """
    defines: list[str] = None
    include_paths: list[str] = None
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH

    def __post_init__(self):
        if self.defines is None:
            self.defines = []
        if self.include_paths is None:
            self.include_paths = ["."]


@dataclass
class TranslationResult:
    """
    Result of translating one input.

    Attributes:
        filename: Name of the scanned file
        tokens: All tokens produced, ending with EOF
        output_lines: Output listing, one line per identifier token
        app_type: Application kind from {$apptype}, if any
        defines: Conditional symbols defined at end of scan
        lines: Line number reached at end of scan
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    output_lines: list[str] = field(default_factory=list)
    app_type: Optional[AppType] = None
    defines: list[str] = field(default_factory=list)
    lines: int = 0

    @property
    def output(self) -> str:
        """The output artifact text, with its trailing newline."""
        return "\n".join(self.output_lines) + "\n"

    @property
    def token_count(self) -> int:
        """Number of identifier tokens (EOF excluded)."""
        return len(self.output_lines)


class Translator:
    """
    Runs the lexical front-end over one input.

    Example:
        translator = Translator(ScannerOptions(defines=["debug"]))
        result = translator.translate_file("hello.pas")
        print(result.output)

    Attributes:
        options: Scanner configuration options
        output_lines: Output listing of the most recent scan, complete or
                      partial if the scan failed
    """

    def __init__(self, options: Optional[ScannerOptions] = None):
        """
        Initialize the translator.

        Args:
            options: Scanner configuration (uses defaults if None)
        """
        self.options = options or ScannerOptions()
        self.output_lines: list[str] = []

    def translate_source(
        self,
        source: str,
        filename: str = "<input>",
    ) -> TranslationResult:
        """
        Scan source text to completion.

        Args:
            source: Pascal source text
            filename: Source filename for error messages

        Returns:
            TranslationResult with the token stream and output listing

        Raises:
            ScanError: If scanning fails
        """
        result = TranslationResult(filename=filename)
        self.output_lines = result.output_lines

        includer = IncludeResolver(
            self.options.include_paths,
            max_depth=self.options.max_include_depth,
        )
        lexer = PascalLexer(
            source,
            filename,
            defines=self.options.defines,
            includer=includer,
        )

        for token in lexer.tokenize():
            result.tokens.append(token)
            if not token.is_eof:
                result.output_lines.append(f"{token.line}\t{token.lexeme}")

        result.app_type = lexer.session.app_type
        result.defines = list(lexer.session.defines)
        result.lines = lexer.source.line

        logger.debug(
            "scanned %s: %d tokens, %d lines",
            filename, result.token_count, result.lines,
        )
        return result

    def translate_file(
        self,
        input_path: str | Path,
        output_path: Optional[str | Path] = None,
    ) -> TranslationResult:
        """
        Scan a file and write the output listing.

        The output file is created before scanning starts and both files
        are closed on every exit path.

        Args:
            input_path: Pascal source file
            output_path: Output file (default: input path + ".out")

        Returns:
            TranslationResult for the scan

        Raises:
            SourceIOError: If the input cannot be read or the output created
            ScanError: If scanning fails
        """
        input_path = Path(input_path)
        if output_path is None:
            output_path = input_path.with_name(input_path.name + ".out")
        output_path = Path(output_path)

        self.output_lines = []

        try:
            infile = open(input_path, "r", encoding="utf-8")
        except OSError as e:
            raise SourceIOError(f"can not open input file '{input_path}': {e.strerror}") from e

        with infile:
            try:
                outfile = open(output_path, "w", encoding="utf-8")
            except OSError as e:
                raise SourceIOError(
                    f"can not open write file '{output_path}': {e.strerror}"
                ) from e

            with outfile:
                try:
                    source = infile.read()
                except (OSError, UnicodeDecodeError) as e:
                    raise SourceIOError(f"can not read input file '{input_path}': {e}") from e

                result = self.translate_source(source, str(input_path))
                outfile.write(result.output)

        logger.debug("wrote %s", output_path)
        return result
