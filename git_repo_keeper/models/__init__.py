"""Data models for git-repo-keeper."""

from .status import Status, StatusKind
from .scan import ScanResult, ScanFailure
from .repository import (
    RepositoryView,
    SubmoduleView,
    RemoteSelection,
    SshIdentity,
    SshKeyCredential,
)

__all__ = [
    "Status",
    "StatusKind",
    "RepositoryView",
    "SubmoduleView",
    "RemoteSelection",
    "SshIdentity",
    "SshKeyCredential",
    "ScanResult",
    "ScanFailure",
]
