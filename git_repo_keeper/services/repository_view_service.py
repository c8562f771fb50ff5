"""Service for building the view of a single repository"""

from pathlib import Path
from typing import Optional, Sequence, Union, TYPE_CHECKING

import git

from git_repo_keeper.constants import UNKNOWN_BRANCH
from git_repo_keeper.exceptions import PathEncodingError, UnsupportedRepositoryError
from git_repo_keeper.models.repository import RepositoryView, SubmoduleView
from git_repo_keeper.models.status import Status
from git_repo_keeper.services.git import (
    RemoteFetcher,
    StatusClassifier,
    SubmoduleTraversal,
    head_shorthand,
    open_repository,
    remote_url,
)
from git_repo_keeper.services.ssh_identity import SshIdentityResolver
from git_repo_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_repo_keeper.config import Config

logger = get_logger(__name__)


def _as_text(value: str, path: Path, component: str) -> str:
    # Undecodable bytes in a path show up as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathEncodingError(repr(path), component) from e
    return value


class RepositoryViewBuilder:
    """Builds a RepositoryView for a repository path."""

    def __init__(
        self,
        config: Union["Config", dict],
        fetcher: Optional[RemoteFetcher] = None,
        classifier: Optional[StatusClassifier] = None,
    ):
        """Initialize the builder.

        Args:
            config: Configuration dictionary or Config object
            fetcher: RemoteFetcher to use; built from config when fetching is enabled
            classifier: StatusClassifier to use (dependency injection for tests)
        """
        self.config = config
        self.include_email = config.get("include_email", True)
        self.include_submodules = config.get("include_submodules", True)
        self.fetch_remote = config.get("fetch_remote", False)
        self.classifier = classifier or StatusClassifier()
        self.submodule_traversal = SubmoduleTraversal(self.classifier)

        if fetcher is None and self.fetch_remote:
            fetcher = self._default_fetcher(config)
        self.fetcher = fetcher

    @staticmethod
    def _default_fetcher(config: Union["Config", dict]) -> RemoteFetcher:
        home_dir = config.get("home_dir")
        resolver = SshIdentityResolver(
            home=Path(home_dir) if home_dir else Path.home(),
            config_path=config.get("ssh_config_path"),
        )
        return RemoteFetcher(
            resolver,
            timeout=config.get("fetch_timeout", 30.0),
            passphrase=config.get("ssh_passphrase"),
        )

    def build(self, repo_path: Union[str, Path]) -> RepositoryView:
        """Collect the view for the repository at ``repo_path``.

        Raises:
            RepositoryOpenError: the path is not a readable repository
            PathEncodingError: the name or parent of the path is not valid text
            git.exc.GitError: reading the repository failed
        """
        repo_path = Path(repo_path)
        logger.debug(f"Building view for repository at {repo_path}")

        try:
            repo = open_repository(repo_path)
        except UnsupportedRepositoryError as e:
            logger.error(f"Skipping status of {repo_path}: {e.reason} is not supported by GitPython")
            return self.finalize(repo_path, None, Status.unknown(), None, None, ())

        try:
            return self._build_from_repo(repo_path, repo)
        finally:
            repo.close()

    def _build_from_repo(self, repo_path: Path, repo: git.Repo) -> RepositoryView:
        status, head, remote = self.classifier.classify(repo)

        if self.include_submodules and not repo.bare:
            submodules = self.submodule_traversal.list_submodules(repo)
        else:
            submodules = []

        branch = head_shorthand(head)
        email = self.get_email(repo) if self.include_email else None
        url = remote_url(remote)

        if self.fetch_remote and self.fetcher is not None and url and head is not None:
            if self.fetcher.fetch(repo, remote, url, branch):
                # Pick up the refreshed remote-tracking refs
                status = self.classifier.classify(repo).status

        logger.debug(f"Finalized view for repository at {repo_path}")
        return self.finalize(repo_path, branch, status, url, email, submodules)

    @staticmethod
    def finalize(
        path: Path,
        branch: Optional[str],
        status: Status,
        url: Optional[str],
        email: Optional[str],
        submodules: Sequence[SubmoduleView],
    ) -> RepositoryView:
        """Assemble a RepositoryView for ``path``."""
        path = Path(path)
        if not path.name:
            raise PathEncodingError(repr(path), "file name (path has no final component)")
        name = _as_text(path.name, path, "file name")

        parent_path = path.parent
        parent = None if parent_path == path else _as_text(str(parent_path), path, "parent")

        return RepositoryView(
            name=name,
            branch=branch if branch is not None else UNKNOWN_BRANCH,
            status=status,
            parent=parent,
            url=url,
            email=email,
            submodules=tuple(submodules),
        )

    @staticmethod
    def get_email(repo: git.Repo) -> Optional[str]:
        """Find "user.email" in the repository config, falling back to global and system.

        The email is informational only, so every error is absorbed.
        """
        try:
            email = repo.config_reader().get_value("user", "email")
        except Exception as e:
            logger.debug(f"Ignored error reading user.email: {e}")
            return None
        return str(email) if email else None
