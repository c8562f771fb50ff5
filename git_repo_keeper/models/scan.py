"""Scan result models"""
from dataclasses import dataclass, field
from typing import Tuple

from git_repo_keeper.models.repository import RepositoryView


@dataclass(frozen=True)
class ScanFailure:
    """A repository whose view could not be built."""
    path: str
    error: str


@dataclass(frozen=True)
class ScanResult:
    """Views of every repository scanned, plus the ones that failed."""
    views: Tuple[RepositoryView, ...] = field(default_factory=tuple)
    failures: Tuple[ScanFailure, ...] = field(default_factory=tuple)
