"""Fetching the current branch from a remote."""

import shlex
import shutil
from typing import Callable, Dict, Optional

import git

from git_repo_keeper.config import PASSPHRASE_ENV_VAR
from git_repo_keeper.models.repository import SshKeyCredential
from git_repo_keeper.services.ssh_identity import (
    SSH_KEY_AUTH,
    CredentialCallback,
    SshIdentityResolver,
    extract_host,
    extract_username,
)
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)

ASKPASS_PROGRAM = "git-repo-keeper-askpass"


def find_askpass_program() -> Optional[str]:
    """Locate the installed askpass helper."""
    return shutil.which(ASKPASS_PROGRAM)


def ssh_environment(
    credential: SshKeyCredential,
    askpass_program: Optional[str] = None,
) -> Dict[str, str]:
    """Build the git environment that makes ssh use ``credential``."""
    parts = ["ssh", "-i", shlex.quote(credential.private_key), "-o", "IdentitiesOnly=yes"]
    env: Dict[str, str] = {}

    if credential.passphrase and askpass_program:
        # ssh reads the passphrase from the askpass helper, which echoes it back
        env["SSH_ASKPASS"] = askpass_program
        env["SSH_ASKPASS_REQUIRE"] = "force"
        env[PASSPHRASE_ENV_VAR] = credential.passphrase
    else:
        if credential.passphrase:
            logger.warning(
                f"{ASKPASS_PROGRAM} not found on PATH, "
                f"passphrase for {credential.private_key} cannot be supplied"
            )
        parts.extend(["-o", "BatchMode=yes"])

    env["GIT_SSH_COMMAND"] = " ".join(parts)
    return env


class RemoteFetcher:
    """Fetches a single branch ref, authenticating SSH remotes with a key."""

    def __init__(
        self,
        resolver: SshIdentityResolver,
        timeout: float = 30.0,
        passphrase: Optional[str] = None,
        askpass_locator: Callable[[], Optional[str]] = find_askpass_program,
    ):
        self.resolver = resolver
        self.timeout = timeout
        self.passphrase = passphrase
        self.askpass_locator = askpass_locator

    def credential_callback(self, url: str) -> CredentialCallback:
        """Resolve the identity for ``url`` once and bind it to a callback."""
        host = extract_host(url)
        identity = self.resolver.resolve(host, self.passphrase)
        return CredentialCallback(identity)

    def credential_environment(self, url: str) -> Dict[str, str]:
        """Environment for one fetch attempt of ``url``; empty for non-SSH remotes."""
        if extract_host(url) is None:
            logger.debug(f"{url} is not an SSH remote, fetching without credentials")
            return {}

        callback = self.credential_callback(url)
        credential = callback(url, extract_username(url), (SSH_KEY_AUTH,))
        logger.debug(f"Fetching {url} with ssh key {credential.private_key}")
        askpass = self.askpass_locator() if credential.passphrase else None
        return ssh_environment(credential, askpass)

    def fetch(
        self,
        repo: git.Repo,
        remote: Optional[git.Remote],
        url: Optional[str],
        branch: Optional[str],
    ) -> bool:
        """Fetch ``branch`` from ``remote``.

        Skipped when there is no remote URL or no current branch. Any failure
        is logged and reported as False; the repository is then simply
        treated as possibly stale.

        Returns:
            True if the fetch ran and succeeded
        """
        if remote is None or not url or not branch:
            logger.debug("Skipping fetch: no remote URL or no current branch")
            return False

        try:
            env = self.credential_environment(url)
            with repo.git.custom_environment(**env):
                remote.fetch(refspec=branch, kill_after_timeout=self.timeout)
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            logger.info(
                f"Assuming stale; could not fetch branch {branch} from {url} "
                f"(exit {e.status}): {stderr or e}"
            )
            return False
        except Exception as e:
            logger.info(f"Assuming stale; could not fetch branch {branch} from {url}: {e}")
            return False

        logger.debug(f"Fetched branch {branch} from {url}")
        return True
