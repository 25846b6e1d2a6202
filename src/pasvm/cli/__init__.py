"""
Pascal 2 VM Command-Line Interface
==================================

This package provides the command-line tool for the translator:

- **pasvm**: scan a Pascal source file and write its token listing

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["pasvm"]
