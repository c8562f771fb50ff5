"""Logging configuration for git-repo-keeper"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_DIR_NAME = '.git-repo-keeper'
LOG_FILE_NAME = 'git-repo-keeper.log'

# Loggers of libraries that are chatty at DEBUG
NOISY_LOGGERS = ('git', 'paramiko')


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when stderr is a terminal."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelname)
        if color is None or not sys.stderr.isatty():
            return super().format(record)

        # Records are shared between handlers; color a copy only
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def default_log_file() -> Path:
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # One scan per file
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        # Scans run on worker threads, so the thread name matters
        formatter = ColoredFormatter(
            fmt='%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
    else:
        formatter = ColoredFormatter(fmt='[%(name)s] %(levelname)s: %(message)s')
    handler.setFormatter(formatter)
    return handler


def setup_logging(verbose: bool = False, debug: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure logging for a scan.

    Args:
        verbose: Show INFO messages, such as skipped fetches
        debug: Show DEBUG messages and also keep them in a log file
        log_file: Where the debug log goes (default ~/.git-repo-keeper/git-repo-keeper.log)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # GitPython logs every git invocation and paramiko every config read
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)

    if debug:
        root_logger.addHandler(_file_handler(log_file or default_log_file()))
    root_logger.addHandler(_console_handler(level, debug))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module of this package.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger named without the package prefix, e.g. "services.git.fetch"
    """
    # Only the package prefix is stripped, so services.git.* never ends
    # up under GitPython's own "git" logger
    if name.startswith('git_repo_keeper.'):
        name = name[len('git_repo_keeper.'):]
    return logging.getLogger(name)
