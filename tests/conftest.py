"""Pytest fixtures for git-repo-keeper tests"""
import tempfile
from pathlib import Path
import pytest
import git


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> git.Commit:
    """Write a file into the working tree and commit it."""
    path = Path(repo.working_tree_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


def configure_identity(repo: git.Repo, email: str = "test@example.com") -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", email)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a configuration dictionary for tests."""
    return {
        'verbose': False,
        'debug': False,
        'include_email': True,
        'include_submodules': True,
        'fetch_remote': False,
        'fetch_timeout': 10.0,
        'sequential': True,
    }


@pytest.fixture
def empty_repo(temp_dir):
    """A freshly initialized repository without commits."""
    repo_path = temp_dir / "empty_repo"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    configure_identity(repo)
    yield repo
    repo.close()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main and no remotes."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_identity(repo)
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def upstream_repo(temp_dir, git_repo):
    """A bare repository that git_repo tracks as origin/main."""
    bare_path = temp_dir / "upstream.git"
    bare = git.Repo.init(bare_path, bare=True)

    git_repo.create_remote('origin', str(bare_path))
    git_repo.git.push("-u", "origin", "main")
    bare.git.symbolic_ref("HEAD", "refs/heads/main")

    yield bare

    bare.close()


@pytest.fixture
def other_clone(temp_dir, upstream_repo):
    """A second working copy of the upstream, used to push commits git_repo lacks."""
    clone = git.Repo.clone_from(upstream_repo.git_dir, temp_dir / "other_clone", branch="main")
    configure_identity(clone, "other@example.com")
    yield clone
    clone.close()


@pytest.fixture
def submodule_source(temp_dir):
    """A small repository to add as a submodule."""
    source_path = temp_dir / "library"
    source_path.mkdir()
    source = git.Repo.init(source_path)
    configure_identity(source)
    commit_file(source, "lib.txt", "library\n", "Library commit")
    source.git.branch('-M', 'main')
    yield source
    source.close()


def add_submodule(repo: git.Repo, source: git.Repo, path: str, commit: bool = True) -> None:
    """Register ``source`` as a submodule of ``repo`` at ``path``, committing unless told not to."""
    # Local file transport is disabled for submodules by default
    repo.git.execute(
        ["git", "-c", "protocol.file.allow=always", "submodule", "add", source.working_tree_dir, path]
    )
    if commit:
        repo.git.commit("-m", f"Add submodule {path}")
