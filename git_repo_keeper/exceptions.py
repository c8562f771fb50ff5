"""Custom exceptions for git-repo-keeper"""

from typing import Optional


class GitRepoKeeperError(Exception):
    """Base exception for all git-repo-keeper errors."""
    pass


class RepositoryOpenError(GitRepoKeeperError):
    """Exception raised when a repository cannot be opened or read."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Could not open repository at '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class UnsupportedRepositoryError(RepositoryOpenError):
    """Exception raised when repository metadata uses a format GitPython cannot read."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"unsupported repository format ({reason})")


class PathEncodingError(GitRepoKeeperError):
    """Exception raised when a repository path cannot be represented as text."""

    def __init__(self, path: str, component: str):
        self.path = path
        self.component = component
        super().__init__(f"Could not convert {component} of path to text: {path!r}")


class SshConfigError(GitRepoKeeperError):
    """Exception raised when the SSH client configuration cannot be parsed."""

    def __init__(self, config_path: str, message: Optional[str] = None):
        self.config_path = config_path
        self.message = message

        error_msg = f"Invalid SSH configuration in '{config_path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class CredentialError(GitRepoKeeperError):
    """Exception raised when no usable credential can be offered for a remote."""

    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        self.message = message

        error_msg = f"No credential available for '{url}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConfigError(GitRepoKeeperError, ValueError):
    """Exception raised for invalid configuration values or files."""
    pass
