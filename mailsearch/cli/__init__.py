"""Mail search CLI.

Command-line front end for searching exported mail with rich output.
"""

from mailsearch.cli.main import cli

__all__ = ["cli"]
