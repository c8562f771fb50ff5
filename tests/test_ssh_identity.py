"""Tests for SSH identity resolution and the credential callback"""
import pytest

from git_repo_keeper.exceptions import CredentialError, SshConfigError
from git_repo_keeper.models.repository import SshIdentity, SshKeyCredential
from git_repo_keeper.services.ssh_identity import (
    CredentialCallback,
    SshIdentityResolver,
    extract_host,
    extract_username,
    needs_ssh_credentials,
)


@pytest.fixture
def fake_home(temp_dir):
    home = temp_dir / "home"
    (home / ".ssh").mkdir(parents=True)
    return home


def write_ssh_config(home, text):
    path = home / ".ssh" / "config"
    path.write_text(text)
    return path


class TestUrlParsing:
    """Host and user extraction from remote URLs."""

    @pytest.mark.parametrize(
        "url,host",
        [
            ("git@github.com:owner/repo.git", "github.com"),
            ("ssh://git@gitlab.example.com:2222/owner/repo.git", "gitlab.example.com"),
            ("myhost:owner/repo.git", "myhost"),
            ("https://github.com/owner/repo.git", None),
            ("file:///srv/git/repo.git", None),
            ("/srv/git/repo.git", None),
            ("../repo.git", None),
        ],
    )
    def test_extract_host(self, url, host):
        assert extract_host(url) == host

    def test_extract_username(self):
        assert extract_username("git@github.com:owner/repo.git") == "git"
        assert extract_username("ssh://deploy@host/repo.git") == "deploy"
        assert extract_username("myhost:repo.git") is None

    def test_https_never_needs_ssh(self):
        assert needs_ssh_credentials("https://github.com/owner/repo.git") is False
        assert needs_ssh_credentials("git@github.com:owner/repo.git") is True


class TestSshIdentityResolver:
    """Identity file lookup from the SSH client config."""

    def test_host_block_identity_file(self, fake_home):
        key = fake_home / ".ssh" / "id_github"
        write_ssh_config(
            fake_home,
            f"Host github.com\n    User git\n    IdentityFile {key}\n\nHost other\n    IdentityFile /nope\n",
        )
        resolver = SshIdentityResolver(fake_home)

        identity = resolver.resolve("github.com")
        assert identity == SshIdentity(identity_file=str(key))

    def test_first_identity_file_wins(self, fake_home):
        write_ssh_config(
            fake_home,
            "Host github.com\n    IdentityFile /keys/first\n    IdentityFile /keys/second\n",
        )
        identity = SshIdentityResolver(fake_home).resolve("github.com")
        assert identity.identity_file == "/keys/first"

    def test_no_matching_block_uses_default(self, fake_home):
        write_ssh_config(fake_home, "Host gitlab.com\n    IdentityFile /keys/gitlab\n")
        identity = SshIdentityResolver(fake_home).resolve("github.com")
        assert identity.identity_file == str(fake_home / ".ssh" / "id_rsa")

    def test_missing_config_file_uses_default(self, temp_dir):
        home = temp_dir / "no-ssh-here"
        identity = SshIdentityResolver(home).resolve("github.com", passphrase="secret")
        assert identity.identity_file == str(home / ".ssh" / "id_rsa")
        assert identity.passphrase == "secret"

    def test_explicit_config_path(self, fake_home, temp_dir):
        config_path = temp_dir / "custom_ssh_config"
        config_path.write_text("Host example.org\n    IdentityFile /keys/example\n")
        resolver = SshIdentityResolver(fake_home, config_path=config_path)
        assert resolver.resolve("example.org").identity_file == "/keys/example"

    def test_unparsable_config_raises(self, fake_home):
        write_ssh_config(fake_home, "Host github.com\n    ===broken\n")
        with pytest.raises(SshConfigError):
            SshIdentityResolver(fake_home).resolve("github.com")

    def test_empty_passphrase_is_none(self, fake_home):
        identity = SshIdentityResolver(fake_home).resolve("github.com", passphrase="")
        assert identity.passphrase is None

    def test_repr_hides_passphrase(self):
        assert "hunter2" not in repr(SshIdentity("/keys/id", "hunter2"))


class TestCredentialCallback:
    """The callback must be safe to invoke any number of times."""

    def test_returns_ssh_key_credential(self):
        callback = CredentialCallback(SshIdentity("/keys/id_ed25519", "pw"))
        credential = callback("git@host:repo.git", "git", ("ssh_key",))
        assert credential == SshKeyCredential(username="git", private_key="/keys/id_ed25519", passphrase="pw")

    def test_repeated_invocations_are_identical(self):
        callback = CredentialCallback(SshIdentity("/keys/id_rsa"))
        results = [callback("git@host:repo.git", "git", ("ssh_key",)) for _ in range(3)]
        assert results[0] == results[1] == results[2]

    def test_rejects_transport_without_ssh_keys(self):
        callback = CredentialCallback(SshIdentity("/keys/id_rsa"))
        with pytest.raises(CredentialError):
            callback("https://host/repo.git", None, ("user_pass_plaintext",))
