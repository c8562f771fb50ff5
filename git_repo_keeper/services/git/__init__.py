"""Git-related services for git-repo-keeper."""

from .backend import open_repository, resolve_head, head_shorthand
from .remotes import select_remote, remote_url
from .status import StatusClassifier, Classification
from .submodules import SubmoduleTraversal
from .fetch import RemoteFetcher

__all__ = [
    "open_repository",
    "resolve_head",
    "head_shorthand",
    "select_remote",
    "remote_url",
    "StatusClassifier",
    "Classification",
    "SubmoduleTraversal",
    "RemoteFetcher",
]
