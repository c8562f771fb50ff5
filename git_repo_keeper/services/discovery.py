"""Discovery of repositories below target directories."""

import os
from pathlib import Path
from typing import Iterable, List, Union

from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)


def find_repositories(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Walk each target path and return every repository found, sorted.

    Nested repositories are found too. Submodules and linked worktrees use a
    ``.git`` file and are therefore not listed on their own. Symlinks are not
    followed.
    """
    found = set()
    for target in paths:
        target = Path(target).expanduser().absolute()
        if not target.is_dir():
            logger.warning(f"Skipping {target}: not a directory")
            continue
        found.update(_walk(target))
    return sorted(found)


def _walk(root: Path) -> List[Path]:
    repositories = []
    pending = [root]

    while pending:
        directory = pending.pop()
        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            continue

        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue

            if entry.name == ".git":
                repositories.append(directory)
            else:
                pending.append(Path(entry.path))

    logger.debug(f"Found {len(repositories)} repositories under {root}")
    return repositories
