"""
tokscan Command-Line Interface
==============================

- **tokscan**: print the tokens and diagnostics of a source file

The tool is a Click-based CLI application.
"""

__all__ = ["tokscan"]
