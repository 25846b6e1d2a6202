"""
pasvm - Pascal 2 VM Command-Line Interface
==========================================

This module implements the command-line interface for the Pascal
front-end. It scans a Pascal source file, interprets its compiler
directives, and writes the resulting token listing.

Usage Examples
--------------
Basic scan (writes hello.pas.out):
    $ pasvm hello.pas

With output file:
    $ pasvm hello.pas hello.tok

With predefined symbols and include path:
    $ pasvm -d debug -I ./inc hello.pas

Verbose mode (level-tagged trace with internal state):
    $ pasvm -v hello.pas
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click

from pasvm import __version__
from pasvm.translator import Translator, ScannerOptions
from pasvm.cli.errors import ExitCode, handle_cli_exception


def setup_logging(verbose: bool) -> Callable[[], None]:
    """
    Send the translator's log records to stdout.

    Returns:
        A function that removes the handler and restores the logger
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(levelname)s: %(message)s" if verbose else "%(message)s"
    ))

    logger = logging.getLogger("pasvm")
    saved_level = logger.level
    saved_propagate = logger.propagate

    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # Records go to stdout only, not also through root handlers
    logger.propagate = False

    def restore() -> None:
        logger.removeHandler(handler)
        logger.setLevel(saved_level)
        logger.propagate = saved_propagate

    return restore


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-d", "--define",
    multiple=True,
    help="Define a conditional symbol (can be repeated)",
)
@click.option(
    "-I", "--include",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Add include search path (can be repeated)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="pasvm")
@click.pass_context
def main(
    ctx: click.Context,
    input_file: Optional[Path],
    output_file: Optional[Path],
    define: tuple[str, ...],
    include: tuple[Path, ...],
    verbose: bool,
) -> None:
    """
    Scan a Pascal source file.

    INPUT_FILE is the Pascal source to scan. OUTPUT_FILE receives the
    token listing (default: INPUT_FILE.out).

    \b
    Examples:
        pasvm hello.pas              # Outputs hello.pas.out
        pasvm hello.pas out.txt      # Specify output file
        pasvm -d debug hello.pas     # Predefine {$define debug}
        pasvm -I inc/ hello.pas      # Add include path

    \b
    Supported directives:
        {$apptype console|gui}
        {$define NAME}  {$undef NAME}
        {$ifdef NAME}   {$else}  {$endif}
        {$include FILE}
    """
    click.echo("Pascal 2 VM")

    if input_file is None:
        click.echo(ctx.get_usage())
        sys.exit(ExitCode.FAILURE)

    options = ScannerOptions(
        defines=list(define),
        include_paths=[str(p) for p in include] or None,
    )
    translator = Translator(options)
    restore_logging = setup_logging(verbose)

    try:
        if verbose:
            click.echo(f"Scanning {input_file}...")
            if define:
                click.echo(f"Defines: {', '.join(define)}")

        result = translator.translate_file(input_file, output_file)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")

        click.echo(f"Lines: {result.lines}")
        click.echo("done.")

    except Exception as e:
        # Show what was scanned before the failure
        if translator.output_lines:
            click.echo("\n".join(translator.output_lines))
        handle_cli_exception(e, verbose)

    finally:
        restore_logging()


if __name__ == "__main__":
    main()
