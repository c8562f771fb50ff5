"""Remote selection for status checks and fetches."""

from typing import Optional

import git

from git_repo_keeper.constants import DEFAULT_REMOTE_NAME
from git_repo_keeper.models.repository import RemoteSelection
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)


def select_remote(repo: git.Repo) -> RemoteSelection:
    """Pick "origin", or the first remote when there is no "origin".

    GitPython enumerates remotes in the order their sections appear in the
    repository config. That order is not sorted on purpose; it is a best
    effort guess, not a contract.
    """
    remotes = list(repo.remotes)
    if not remotes:
        logger.debug(f"No remotes configured for {repo.working_dir or repo.git_dir}")
        return RemoteSelection(None, None)

    for remote in remotes:
        if remote.name == DEFAULT_REMOTE_NAME:
            return RemoteSelection(remote, remote.name)

    chosen = remotes[0]
    logger.debug(f"No '{DEFAULT_REMOTE_NAME}' remote, using '{chosen.name}'")
    return RemoteSelection(chosen, chosen.name)


def remote_url(remote: Optional[git.Remote]) -> Optional[str]:
    """URL of a remote, or None when the remote has no URL configured."""
    if remote is None:
        return None
    try:
        return remote.url
    except Exception as e:
        logger.debug(f"Remote '{remote.name}' has no readable URL: {e}")
        return None
