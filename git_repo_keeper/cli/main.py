"""Command-line interface for git-repo-keeper"""

import json
import sys

from rich.console import Console

from git_repo_keeper.cli.args import parse_args
from git_repo_keeper.config import build_config
from git_repo_keeper.core import RepoKeeper
from git_repo_keeper.logging_config import setup_logging
from git_repo_keeper.utils.threading import get_threading_info

console = Console(stderr=True)

OVERRIDE_KEYS = [
    "color_mode",
    "display_mode",
    "dry_run",
    "fetch_remote",
    "fetch_timeout",
    "include_submodules",
    "include_email",
    "workers",
    "sequential",
    "verbose",
    "debug",
]


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    debug = bool(parsed_args.debug)
    try:
        # Command-line flags only, so config file problems are reported
        setup_logging(verbose=bool(parsed_args.verbose), debug=debug)

        overrides = {key: getattr(parsed_args, key) for key in OVERRIDE_KEYS}
        overrides["paths"] = parsed_args.paths or None
        config = build_config(overrides, ignore_config_file=parsed_args.ignore_config_file)
        debug = config.debug
        if (config.verbose, config.debug) != (bool(parsed_args.verbose), bool(parsed_args.debug)):
            setup_logging(verbose=config.verbose, debug=config.debug)

        if config.dry_run:
            print(json.dumps(config.to_dict(mask_secrets=True), indent=2))
            return 0

        if config.debug:
            threading_info = get_threading_info()
            console.print("[yellow]Threading Information:[/yellow]")
            console.print(f"  Python version: {threading_info['python_version']}")
            console.print(f"  Threading mode: {threading_info['mode']}")
            console.print(f"  CPU count: {threading_info['cpu_count']}")
            console.print(f"  Optimal workers: {threading_info['optimal_workers']}")
            console.print("[dim]Note: Debug mode forces sequential processing for readable logs[/dim]")

        keeper = RepoKeeper(config)
        keeper.run()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
