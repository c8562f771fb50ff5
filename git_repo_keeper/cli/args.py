"""Command-line argument parsing for git-repo-keeper."""

import argparse
from git_repo_keeper.__version__ import __version__
from git_repo_keeper.config import COLOR_MODES, DISPLAY_MODES

DESCRIPTION = (
    "Keep track of multiple Git repositories. By default, shows the status of "
    "every repository under the current working directory."
)

EPILOG = (
    "Config file: command-line options take priority, anything not given falls back to "
    "the first config file found at $XDG_CONFIG_HOME/git-repo-keeper.json, "
    "$XDG_CONFIG_HOME/git-repo-keeper/config.json or $HOME/.config/git-repo-keeper.json."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-repo-keeper", description=DESCRIPTION, epilog=EPILOG
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Path(s) to target directories (defaults to current working directory)",
    )
    parser.add_argument("--version", action="version", version=f"git-repo-keeper {__version__}")
    parser.add_argument("-c", "--color-mode", choices=COLOR_MODES, help="Configure the color settings")
    parser.add_argument(
        "-d",
        "--display-mode",
        choices=DISPLAY_MODES,
        help="Configure how collected information is displayed",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Display the merged config options and exit",
    )
    parser.add_argument(
        "--remote",
        dest="fetch_remote",
        action="store_true",
        default=None,
        help="Fetch the current branch of each repository before reporting",
    )
    parser.add_argument(
        "--fetch-timeout",
        type=float,
        metavar="SECONDS",
        help="Give up on a fetch after this many seconds (default: 30)",
    )
    parser.add_argument(
        "--no-submodules",
        dest="include_submodules",
        action="store_false",
        default=None,
        help="Do not report submodules",
    )
    parser.add_argument(
        "--no-email",
        dest="include_email",
        action="store_false",
        default=None,
        help="Do not look up user.email",
    )
    parser.add_argument(
        "-i",
        "--ignore-config-file",
        action="store_true",
        help="Ignore config file settings",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers (default: auto-detect based on CPU and threading mode)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        default=None,
        help="Force sequential processing (disable parallelism)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None, help="Show verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Show debug information for troubleshooting"
    )
    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
