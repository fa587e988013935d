"""CLI module for datum tools.

Provides the ``geodatum`` command-line interface for inspecting the built-in
datum catalog and resolving transformations between datums.
"""

from geodatum.cli.main import app

__all__ = ["app"]
