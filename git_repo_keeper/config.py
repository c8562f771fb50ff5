"""Configuration handling for git-repo-keeper"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from git_repo_keeper.exceptions import ConfigError
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "git-repo-keeper.json"
PASSPHRASE_ENV_VAR = "GIT_REPO_KEEPER_SSH_PASSPHRASE"

DISPLAY_MODES = ["standard", "classic", "json"]
COLOR_MODES = ["always", "compatibility", "never"]


@dataclass
class Config:
    """Configuration for git-repo-keeper with validation."""

    # Scan targets (empty = current working directory)
    paths: List[str] = field(default_factory=list)

    # Output
    display_mode: str = "standard"
    color_mode: str = "always"

    # What to collect per repository
    include_email: bool = True
    include_submodules: bool = True

    # Remote refresh
    fetch_remote: bool = False
    fetch_timeout: float = 30.0  # seconds
    ssh_passphrase: Optional[str] = None
    ssh_config_path: Optional[str] = None  # None = <home_dir>/.ssh/config
    home_dir: Optional[str] = None  # None = the user's home directory

    # Execution modes
    workers: Optional[int] = None  # Number of parallel workers (None = auto-detect)
    sequential: bool = False
    verbose: bool = False
    debug: bool = False
    dry_run: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_paths()
        self._validate_display_mode()
        self._validate_color_mode()
        self._validate_fetch_timeout()
        self._validate_workers()

    def _validate_paths(self):
        """Validate paths is a list of strings."""
        if not isinstance(self.paths, list) or not all(isinstance(p, str) for p in self.paths):
            raise ConfigError("paths must be a list of strings")

    def _validate_display_mode(self):
        """Validate display_mode is one of allowed values."""
        if self.display_mode not in DISPLAY_MODES:
            raise ConfigError(
                f"display_mode must be one of {DISPLAY_MODES}, got '{self.display_mode}'"
            )

    def _validate_color_mode(self):
        """Validate color_mode is one of allowed values."""
        if self.color_mode not in COLOR_MODES:
            raise ConfigError(f"color_mode must be one of {COLOR_MODES}, got '{self.color_mode}'")

    def _validate_fetch_timeout(self):
        """Validate fetch_timeout is positive."""
        if self.fetch_timeout <= 0:
            raise ConfigError(f"fetch_timeout must be positive, got {self.fetch_timeout}")

    def _validate_workers(self):
        """Validate workers is positive when set."""
        if self.workers is not None and self.workers <= 0:
            raise ConfigError(f"workers must be positive, got {self.workers}")

    def resolved_home(self) -> Path:
        """Home directory used for SSH configuration and default identity lookups."""
        return Path(self.home_dir) if self.home_dir else Path.home()

    def to_dict(self, mask_secrets: bool = False) -> dict:
        """Convert config to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["paths"] = list(self.paths)
        if mask_secrets and data["ssh_passphrase"]:
            data["ssh_passphrase"] = "***"
        return data

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        unknown = sorted(k for k in config_dict if k not in known_fields)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def config_file_candidates(environ: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Return config file locations in lookup order."""
    env = os.environ if environ is None else environ
    candidates = []

    xdg_config_home = env.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        candidates.append(Path(xdg_config_home) / CONFIG_FILE_NAME)
        candidates.append(Path(xdg_config_home) / "git-repo-keeper" / "config.json")

    home = env.get("HOME")
    home_dir = Path(home) if home else Path.home()
    candidates.append(home_dir / ".config" / CONFIG_FILE_NAME)
    return candidates


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Return the first existing config file, if any."""
    for candidate in config_file_candidates(environ):
        if candidate.is_file():
            logger.debug(f"Using config file {candidate}")
            return candidate
    logger.debug("No config file found")
    return None


def load_config_file(path: Path) -> Dict:
    """Read a JSON config file into a dictionary."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def build_config(
    overrides: Mapping[str, object],
    ignore_config_file: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Merge config file values with command-line overrides.

    Overrides set to None are treated as "not given" so file values survive.
    """
    env = os.environ if environ is None else environ
    merged: Dict = {}

    if not ignore_config_file:
        config_path = find_config_file(env)
        if config_path is not None:
            merged.update(load_config_file(config_path))

    if not merged.get("ssh_passphrase") and env.get(PASSPHRASE_ENV_VAR):
        merged["ssh_passphrase"] = env[PASSPHRASE_ENV_VAR]

    merged.update({k: v for k, v in overrides.items() if v is not None})
    return Config.from_dict(merged)
