"""Repository view models"""
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple, TYPE_CHECKING

from git_repo_keeper.models.status import Status

if TYPE_CHECKING:
    import git


@dataclass(frozen=True)
class SubmoduleView:
    """Status summary of a submodule checked out inside a repository."""
    name: str
    branch: str
    status: Status
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "branch": self.branch,
            "status": self.status.to_dict(),
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubmoduleView":
        return cls(
            name=data["name"],
            branch=data["branch"],
            status=Status.from_dict(data["status"]),
            url=data.get("url"),
        )


@dataclass(frozen=True)
class RepositoryView:
    """Everything collected for a single repository during a scan."""
    name: str  # Directory name of the repository
    branch: str  # "HEAD" when unborn or detached, "unknown" when unreadable
    status: Status
    parent: Optional[str] = None  # None when the path has no parent
    url: Optional[str] = None
    email: Optional[str] = None
    submodules: Tuple[SubmoduleView, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "name": self.name,
            "branch": self.branch,
            "status": self.status.to_dict(),
            "parent": self.parent,
            "url": self.url,
            "email": self.email,
            "submodules": [submodule.to_dict() for submodule in self.submodules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepositoryView":
        return cls(
            name=data["name"],
            branch=data["branch"],
            status=Status.from_dict(data["status"]),
            parent=data.get("parent"),
            url=data.get("url"),
            email=data.get("email"),
            submodules=tuple(SubmoduleView.from_dict(s) for s in data.get("submodules", [])),
        )


class RemoteSelection(NamedTuple):
    """Remote picked for a repository, both fields None when there are no remotes."""
    remote: Optional["git.Remote"]
    name: Optional[str]


@dataclass(frozen=True)
class SshIdentity:
    """Private key (and optional passphrase) used to authenticate one fetch."""
    identity_file: str
    passphrase: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.passphrase else None
        return f"SshIdentity(identity_file={self.identity_file!r}, passphrase={masked!r})"


@dataclass(frozen=True)
class SshKeyCredential:
    """SSH key credential handed to the transport."""
    username: Optional[str]
    private_key: str
    passphrase: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.passphrase else None
        return (
            f"SshKeyCredential(username={self.username!r}, "
            f"private_key={self.private_key!r}, passphrase={masked!r})"
        )
