"""
git-repo-keeper - Keep track of the sync state of many Git repositories
"""

from .__version__ import __version__
from .core import RepoKeeper
from .cli.main import main

__all__ = ["RepoKeeper", "main", "__version__"]
