"""Submodule traversal."""

import os
import re
from typing import List, NamedTuple, Optional

import git

from git_repo_keeper.constants import UNKNOWN_BRANCH
from git_repo_keeper.exceptions import RepositoryOpenError
from git_repo_keeper.models.repository import SubmoduleView
from git_repo_keeper.models.status import Status
from git_repo_keeper.services.git.backend import head_shorthand, open_repository, resolve_head
from git_repo_keeper.services.git.status import StatusClassifier
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)

GITMODULES_FILE = ".gitmodules"
_SECTION_RE = re.compile(r'^submodule\s+"(?P<name>.+)"$')


class Registration(NamedTuple):
    """A submodule entry from .gitmodules."""
    name: str
    path: str
    url: Optional[str]


class SubmoduleTraversal:
    """Builds one SubmoduleView per submodule registered in a repository.

    Submodules are classified but never fetched, and their own submodules
    are not visited.
    """

    def __init__(self, classifier: Optional[StatusClassifier] = None):
        self.classifier = classifier or StatusClassifier()

    def list_submodules(self, repo: git.Repo) -> List[SubmoduleView]:
        if repo.bare:
            return []
        return [self._view_for(repo, registration) for registration in self.registrations(repo)]

    def registrations(self, repo: git.Repo) -> List[Registration]:
        """Submodules registered in ``repo``.

        GitPython reads .gitmodules from the HEAD commit. Without a commit
        (a submodule added to a fresh repository) the working tree copy is
        read instead.
        """
        if resolve_head(repo) is None:
            return self._worktree_registrations(repo)

        registrations = []
        for submodule in repo.submodules:
            registrations.append(Registration(submodule.name, submodule.path, self._submodule_url(submodule)))
        return registrations

    @staticmethod
    def _worktree_registrations(repo: git.Repo) -> List[Registration]:
        gitmodules = os.path.join(repo.working_tree_dir, GITMODULES_FILE)
        if not os.path.isfile(gitmodules):
            return []

        registrations = []
        with git.GitConfigParser(gitmodules, read_only=True) as parser:
            for section in parser.sections():
                match = _SECTION_RE.match(section)
                if match is None:
                    continue
                name = match.group("name")
                path = str(parser.get_value(section, "path", name))
                url = parser.get_value(section, "url", "")
                registrations.append(Registration(name, path, str(url) if url else None))
        return registrations

    def _view_for(self, repo: git.Repo, registration: Registration) -> SubmoduleView:
        name, url = registration.name, registration.url
        path = os.path.join(repo.working_tree_dir, registration.path)

        try:
            subrepo = open_repository(path)
        except RepositoryOpenError as e:
            # Not checked out, or a format GitPython cannot read
            logger.debug(f"Submodule {name}: {e}")
            return SubmoduleView(name, UNKNOWN_BRANCH, Status.unknown(), url)

        try:
            classification = self.classifier.classify(subrepo)
        except (git.exc.GitError, ValueError, OSError) as e:
            logger.warning(f"Could not read status of submodule {name}: {e}")
            return SubmoduleView(name, UNKNOWN_BRANCH, Status.unknown(), url)
        finally:
            subrepo.close()

        return SubmoduleView(
            name=name,
            branch=head_shorthand(classification.head),
            status=classification.status,
            url=url,
        )

    @staticmethod
    def _submodule_url(submodule: git.Submodule) -> Optional[str]:
        try:
            return submodule.url or None
        except Exception as e:
            logger.debug(f"Submodule {submodule.name} has no url: {e}")
            return None
