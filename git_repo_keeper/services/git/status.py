"""Status classification for a single repository."""

from typing import NamedTuple, Optional, Tuple

import git

from git_repo_keeper.models.status import Status
from git_repo_keeper.services.git.backend import resolve_head
from git_repo_keeper.services.git.remotes import select_remote
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)


class Classification(NamedTuple):
    """Result of classifying a repository."""
    status: Status
    head: Optional[git.SymbolicReference]
    remote: Optional[git.Remote]


class StatusClassifier:
    """Computes the synchronization status of a repository.

    Git errors raised while reading the repository are not caught here;
    they are fatal for that repository and handled by the caller.
    """

    def classify(self, repo: git.Repo) -> Classification:
        """Classify the working tree and current branch of ``repo``."""
        head = resolve_head(repo)
        selection = select_remote(repo)
        location = repo.working_dir or repo.git_dir

        dirty = False if repo.bare else self.has_local_changes(repo, head)

        if head is None:
            # No commits yet, nothing can be ahead or behind
            logger.debug(f"{location}: unborn HEAD")
            status = Status.dirty() if dirty else Status.clean()
            return Classification(status, None, selection.remote)

        if dirty:
            return Classification(Status.dirty(), head, selection.remote)

        if repo.head.is_detached:
            logger.debug(f"{location}: detached HEAD at {repo.head.commit.hexsha[:7]}")
            return Classification(Status.detached(), head, selection.remote)

        upstream = self.find_upstream(repo, head, selection.name)
        if upstream is None:
            logger.debug(f"{location}: no upstream for {head.name}")
            return Classification(Status.no_upstream(), head, selection.remote)

        # Full ref paths, so a tag or file named like the branch cannot shadow it
        ahead, behind = self.count_ahead_behind(repo, head.path, upstream.path)
        logger.debug(f"{location}: {head.name} vs {upstream.name} ahead={ahead} behind={behind}")
        return Classification(Status.from_counts(ahead, behind), head, selection.remote)

    def has_local_changes(self, repo: git.Repo, head: Optional[git.SymbolicReference]) -> bool:
        """Check for staged, unstaged or untracked changes."""
        if head is None:
            # Without HEAD every index entry is a staged addition
            staged = bool(repo.index.entries)
        else:
            staged = bool(repo.index.diff("HEAD"))
        if staged:
            return True

        if repo.index.diff(None):
            return True

        return bool(repo.untracked_files)

    def find_upstream(
        self,
        repo: git.Repo,
        branch: git.Head,
        remote_name: Optional[str],
    ) -> Optional[git.RemoteReference]:
        """Find the remote-tracking ref to compare the branch against.

        The configured tracking branch wins. Otherwise the branch of the same
        name on the selected remote is used, if it has been fetched.
        """
        tracking = branch.tracking_branch()
        if tracking is not None and tracking.is_valid():
            return tracking

        if remote_name is None:
            return None

        candidate = f"{remote_name}/{branch.name}"
        try:
            return repo.refs[candidate]
        except (IndexError, KeyError, AttributeError):
            return None

    def count_ahead_behind(self, repo: git.Repo, local: str, upstream: str) -> Tuple[int, int]:
        """Count commits reachable only from ``local`` and only from ``upstream``."""
        ahead = sum(1 for _ in repo.iter_commits(f"{upstream}..{local}"))
        behind = sum(1 for _ in repo.iter_commits(f"{local}..{upstream}"))
        return ahead, behind
