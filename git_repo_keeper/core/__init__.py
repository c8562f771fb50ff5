"""Core scanning logic for git-repo-keeper."""

from .repo_keeper import RepoKeeper

__all__ = ["RepoKeeper"]
