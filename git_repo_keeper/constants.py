"""Shared constants for git-repo-keeper."""

from dataclasses import dataclass
from typing import Dict, List

from git_repo_keeper.models.status import StatusKind


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns for the classic display mode
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Repository", 30),
    ColumnDefinition("status", "Status", 14),
    ColumnDefinition("branch", "Branch", 24),
    ColumnDefinition("url", "Remote URL"),
]


# Branch sentinels
HEAD_SENTINEL = "HEAD"  # Unborn or detached HEAD
UNKNOWN_BRANCH = "unknown"  # Repository could not be read

DEFAULT_REMOTE_NAME = "origin"

# Repository extensions GitPython can read safely (lowercase, as stored by git config)
SUPPORTED_REPOSITORY_EXTENSIONS = frozenset(
    {"noop", "preciousobjects", "partialclone", "worktreeconfig"}
)
MAX_REPOSITORY_FORMAT_VERSION = 1


# Status display names
STATUS_DISPLAY: Dict[StatusKind, str] = {
    StatusKind.CLEAN: "clean",
    StatusKind.DIRTY: "unclean",
    StatusKind.AHEAD: "unpushed",
    StatusKind.BEHIND: "behind",
    StatusKind.DIVERGED: "diverged",
    StatusKind.DETACHED: "detached",
    StatusKind.NO_UPSTREAM: "no upstream",
    StatusKind.UNKNOWN: "unknown",
}

# Rich styles per status
STATUS_COLORS: Dict[StatusKind, str] = {
    StatusKind.CLEAN: "green",
    StatusKind.DIRTY: "red",
    StatusKind.AHEAD: "blue",
    StatusKind.BEHIND: "magenta",
    StatusKind.DIVERGED: "yellow",
    StatusKind.DETACHED: "cyan",
    StatusKind.NO_UPSTREAM: "yellow",
    StatusKind.UNKNOWN: "dim",
}
