"""GitPython adapter for opening repositories and reading HEAD."""

from pathlib import Path
from typing import Optional, Union

import git

from git_repo_keeper.constants import (
    HEAD_SENTINEL,
    MAX_REPOSITORY_FORMAT_VERSION,
    SUPPORTED_REPOSITORY_EXTENSIONS,
)
from git_repo_keeper.exceptions import RepositoryOpenError, UnsupportedRepositoryError
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)


def open_repository(path: Union[str, Path]) -> git.Repo:
    """Open the repository at ``path``.

    GitPython reads refs, packs and loose objects itself instead of going
    through git, so repository formats it does not know would be misread.
    Those are rejected here with UnsupportedRepositoryError before anything
    else touches the repository.

    Raises:
        UnsupportedRepositoryError: repository format version or extensions are not readable
        RepositoryOpenError: path is missing or not a repository
    """
    try:
        repo = git.Repo(path)
    except git.exc.NoSuchPathError as e:
        raise RepositoryOpenError(str(path), "path does not exist") from e
    except git.exc.InvalidGitRepositoryError as e:
        raise RepositoryOpenError(str(path), "not a git repository") from e

    try:
        _check_repository_format(repo, str(path))
    except UnsupportedRepositoryError:
        repo.close()
        raise
    return repo


def _check_repository_format(repo: git.Repo, path: str) -> None:
    reader = repo.config_reader("repository")
    try:
        version = int(reader.get_value("core", "repositoryformatversion", 0))
    except (TypeError, ValueError) as e:
        raise UnsupportedRepositoryError(path, "unreadable core.repositoryformatversion") from e

    if version > MAX_REPOSITORY_FORMAT_VERSION:
        raise UnsupportedRepositoryError(path, f"repository format version {version}")

    # Version 0 repositories ignore extensions, as git does
    if version == 0 or not reader.has_section("extensions"):
        return

    for name, _ in reader.items("extensions"):
        if name.lower() not in SUPPORTED_REPOSITORY_EXTENSIONS:
            raise UnsupportedRepositoryError(path, f"extensions.{name}")


def resolve_head(repo: git.Repo) -> Optional[git.SymbolicReference]:
    """Return the branch HEAD points to, the detached HEAD itself, or None when unborn."""
    if not repo.head.is_valid():
        return None
    if repo.head.is_detached:
        return repo.head
    return repo.head.reference


def head_shorthand(head: Optional[git.SymbolicReference]) -> str:
    """Short name of a HEAD reference ("HEAD" when unborn or detached)."""
    if head is None:
        return HEAD_SENTINEL
    # Branch heads report their short name, the detached HEAD reports "HEAD"
    return head.name
