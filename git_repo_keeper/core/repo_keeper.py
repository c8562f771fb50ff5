"""Core functionality for git-repo-keeper"""

import os
from contextlib import nullcontext
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from rich.console import Console
from rich.progress import Progress

from git_repo_keeper.config import Config
from git_repo_keeper.models.repository import RepositoryView
from git_repo_keeper.models.scan import ScanFailure, ScanResult
from git_repo_keeper.services.discovery import find_repositories
from git_repo_keeper.services.display_service import DisplayService
from git_repo_keeper.services.repository_view_service import RepositoryViewBuilder
from git_repo_keeper.utils.threading import get_optimal_worker_count
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)

Outcome = Tuple[Path, Optional[RepositoryView], Optional[str]]


def _sort_key(view: RepositoryView):
    return (view.parent or "", view.name)


class RepoKeeper:
    """Scans repositories and reports their status."""

    def __init__(
        self,
        config: Union[Config, dict],
        builder: Optional[RepositoryViewBuilder] = None,
        display_service: Optional[DisplayService] = None,
    ):
        """Initialize RepoKeeper.

        Args:
            config: Configuration dict or Config object
            builder: RepositoryViewBuilder to use (built from config when omitted)
            display_service: DisplayService to render with (built from config when omitted)
        """
        if isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.verbose = config.get("verbose", False)
        self.debug_mode = config.get("debug", False)
        self.builder = builder or RepositoryViewBuilder(config)
        self.display_service = display_service or DisplayService(
            display_mode=config.get("display_mode", "standard"),
            color_mode=config.get("color_mode", "always"),
        )

    def scan(self, paths: Optional[Iterable[Union[str, Path]]] = None, show_progress: bool = False) -> ScanResult:
        """Discover repositories under ``paths`` and build a view for each.

        A repository that fails is recorded as a ScanFailure; it never stops
        the others from being scanned.
        """
        targets = list(paths) if paths is not None else (self.config.paths or [os.getcwd()])
        repositories = find_repositories(targets)
        logger.info(f"Found {len(repositories)} repositories")

        # Debug mode forces sequential processing for readable logs
        if self.config.sequential or self.debug_mode or len(repositories) <= 1:
            outcomes = self._scan_sequential(repositories)
        else:
            outcomes = self._scan_parallel(repositories, show_progress)

        views: List[RepositoryView] = []
        failures: List[ScanFailure] = []
        for path, view, error in outcomes:
            if view is not None:
                views.append(view)
            else:
                failures.append(ScanFailure(path=str(path), error=error or "unknown error"))

        views.sort(key=_sort_key)
        failures.sort(key=lambda f: f.path)
        return ScanResult(views=tuple(views), failures=tuple(failures))

    def run(self) -> ScanResult:
        """Scan the configured paths and display the result."""
        show_progress = self.display_service.display_mode != "json"
        result = self.scan(show_progress=show_progress)
        self.display_service.display(result)
        return result

    def _build_one(self, path: Path) -> Outcome:
        try:
            return path, self.builder.build(path), None
        except Exception as e:
            logger.error(f"Error scanning repository {path}: {e}")
            if self.debug_mode:
                logger.debug("Traceback:", exc_info=True)
            return path, None, str(e)

    def _scan_sequential(self, repositories: List[Path]) -> List[Outcome]:
        """Build views one repository at a time."""
        return [self._build_one(path) for path in repositories]

    def _scan_parallel(self, repositories: List[Path], show_progress: bool) -> List[Outcome]:
        """Build views in a bounded ThreadPoolExecutor."""
        max_workers = get_optimal_worker_count(self.config.workers, tasks=len(repositories))
        logger.debug(f"Using {max_workers} workers for parallel processing")
        outcomes: List[Outcome] = []

        # Progress goes to stderr so it never mixes with the report itself
        progress_context = (
            Progress(console=Console(stderr=True), transient=True) if show_progress else nullcontext()
        )
        with progress_context as progress:
            task = (
                progress.add_task(f"Scanning repositories ({max_workers} workers)...", total=len(repositories))
                if progress is not None
                else None
            )

            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_path = {
                    executor.submit(self._build_one, path): path for path in repositories
                }
                for future in as_completed(future_to_path):
                    outcomes.append(future.result())
                    if progress is not None:
                        progress.update(task, advance=1)

        return outcomes
