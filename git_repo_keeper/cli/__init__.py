"""Command-line interface for git-repo-keeper.

This package provides the CLI entry point, argument parsing and the
SSH_ASKPASS helper used for passphrase-protected keys.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
