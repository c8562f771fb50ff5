"""SSH identity resolution for authenticating fetches over SSH."""

from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import paramiko
from paramiko.ssh_exception import ConfigParseError

from git_repo_keeper.exceptions import CredentialError, SshConfigError
from git_repo_keeper.models.repository import SshIdentity, SshKeyCredential
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)

SSH_KEY_AUTH = "ssh_key"
NON_SSH_SCHEMES = ("http", "https", "file")


def extract_host(url: str) -> Optional[str]:
    """Host part of an SSH remote URL.

    Handles ``ssh://user@host:port/path`` and the scp-like ``user@host:path``.
    Returns None for anything that is not an SSH remote.
    """
    if "://" in url:
        parsed = urlparse(url)
        if parsed.scheme in NON_SSH_SCHEMES:
            return None
        return parsed.hostname

    if url.startswith(("/", ".", "~")):
        return None

    if "@" in url:
        host = url.split("@", 1)[1].split(":", 1)[0]
        return host or None

    # "host:path" without a user, but not a Windows drive or local path
    head, sep, _ = url.partition(":")
    if sep and len(head) > 1 and "/" not in head:
        return head
    return None


def extract_username(url: str) -> Optional[str]:
    """User part of an SSH remote URL, if it has one."""
    if "://" in url:
        return urlparse(url).username
    if "@" in url:
        return url.split("@", 1)[0] or None
    return None


def needs_ssh_credentials(url: str) -> bool:
    """True when fetching ``url`` goes through the SSH transport."""
    return extract_host(url) is not None


class SshIdentityResolver:
    """Resolves the private key to use for a host from the SSH client config.

    The home directory and config path are injected so lookups never depend
    on the process environment.
    """

    def __init__(self, home: Union[str, Path], config_path: Optional[Union[str, Path]] = None):
        self.home = Path(home)
        self.config_path = Path(config_path) if config_path else self.home / ".ssh" / "config"

    @property
    def default_identity_file(self) -> Path:
        return self.home / ".ssh" / "id_rsa"

    def resolve(self, host: str, passphrase: Optional[str] = None) -> SshIdentity:
        """Resolve the identity for ``host``.

        Raises:
            SshConfigError: the config file exists but cannot be parsed
        """
        identity_file = self._lookup_identity_file(host)
        if identity_file is None:
            identity_file = str(self.default_identity_file)
            logger.debug(f"No IdentityFile for {host}, using default {identity_file}")
        else:
            logger.debug(f"IdentityFile for {host}: {identity_file}")
        return SshIdentity(identity_file=identity_file, passphrase=passphrase or None)

    def _lookup_identity_file(self, host: str) -> Optional[str]:
        try:
            config = paramiko.SSHConfig.from_path(str(self.config_path))
        except FileNotFoundError:
            logger.debug(f"SSH config {self.config_path} not found")
            return None
        except ConfigParseError as e:
            raise SshConfigError(str(self.config_path), str(e)) from e
        except OSError as e:
            raise SshConfigError(str(self.config_path), str(e)) from e

        # lookup() also applies "Host *" defaults; only the first IdentityFile counts
        identity_files = config.lookup(host).get("identityfile")
        if not identity_files:
            return None
        return identity_files[0]


class CredentialCallback:
    """Credential callback bound to one resolved identity.

    The transport may ask for credentials any number of times during a
    single fetch. Every call returns an equal credential built from the
    identity captured at construction, without reading any files.
    """

    def __init__(self, identity: SshIdentity):
        self._identity = identity

    @property
    def identity(self) -> SshIdentity:
        return self._identity

    def __call__(self, url: str, username_from_url: Optional[str], allowed_types) -> SshKeyCredential:
        if SSH_KEY_AUTH not in allowed_types:
            raise CredentialError(url, f"only SSH keys are offered, transport allows {sorted(allowed_types)}")
        return SshKeyCredential(
            username=username_from_url,
            private_key=self._identity.identity_file,
            passphrase=self._identity.passphrase,
        )
