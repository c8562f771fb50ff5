"""Tests for RepositoryViewBuilder"""
from pathlib import Path
from unittest.mock import Mock

import pytest

from conftest import add_submodule, commit_file
from git_repo_keeper.exceptions import PathEncodingError, RepositoryOpenError
from git_repo_keeper.models.status import Status, StatusKind
from git_repo_keeper.services.git import RemoteFetcher
from git_repo_keeper.services.repository_view_service import RepositoryViewBuilder


@pytest.fixture
def builder(mock_config):
    return RepositoryViewBuilder(mock_config)


class TestBuildView:
    """End-to-end view construction for real repositories."""

    def test_clean_repository_with_upstream(self, builder, git_repo, upstream_repo):
        view = builder.build(git_repo.working_tree_dir)

        repo_path = Path(git_repo.working_tree_dir)
        assert view.name == repo_path.name
        assert view.parent == str(repo_path.parent)
        assert view.branch == "main"
        assert view.status == Status.clean()
        assert view.url == git_repo.remotes.origin.url
        assert view.email == "test@example.com"
        assert view.submodules == ()

    def test_unpushed_commits(self, builder, git_repo, upstream_repo):
        commit_file(git_repo, "one.txt", "1\n", "One")
        commit_file(git_repo, "two.txt", "2\n", "Two")
        assert builder.build(git_repo.working_tree_dir).status == Status.ahead_by(2)

    def test_zero_remotes(self, git_repo, mock_config):
        """No remotes: url is absent and fetch is never attempted."""
        fetcher = Mock(spec=RemoteFetcher)
        mock_config["fetch_remote"] = True
        builder = RepositoryViewBuilder(mock_config, fetcher=fetcher)

        view = builder.build(git_repo.working_tree_dir)

        assert view.url is None
        assert view.status == Status.no_upstream()
        fetcher.fetch.assert_not_called()

    def test_unborn_head(self, builder, empty_repo):
        view = builder.build(empty_repo.working_tree_dir)
        assert view.branch == "HEAD"
        assert view.status.kind not in (StatusKind.AHEAD, StatusKind.BEHIND, StatusKind.DIVERGED)

    def test_unborn_head_is_not_fetched(self, empty_repo, mock_config):
        empty_repo.create_remote("origin", "git@github.com:test/empty.git")
        fetcher = Mock(spec=RemoteFetcher)
        mock_config["fetch_remote"] = True

        view = RepositoryViewBuilder(mock_config, fetcher=fetcher).build(empty_repo.working_tree_dir)

        assert view.url == "git@github.com:test/empty.git"
        fetcher.fetch.assert_not_called()

    def test_email_disabled(self, git_repo, mock_config):
        mock_config["include_email"] = False
        view = RepositoryViewBuilder(mock_config).build(git_repo.working_tree_dir)
        assert view.email is None

    def test_submodules_included(self, builder, git_repo, submodule_source):
        add_submodule(git_repo, submodule_source, "libs/first")
        view = builder.build(git_repo.working_tree_dir)
        assert [s.name for s in view.submodules] == ["libs/first"]

    def test_submodule_added_to_unborn_repository(self, builder, empty_repo, submodule_source):
        add_submodule(empty_repo, submodule_source, "libs/first", commit=False)

        view = builder.build(empty_repo.working_tree_dir)

        assert view.branch == "HEAD"
        assert view.status == Status.dirty()
        assert [s.name for s in view.submodules] == ["libs/first"]

    def test_submodules_disabled(self, git_repo, submodule_source, mock_config):
        add_submodule(git_repo, submodule_source, "libs/first")
        mock_config["include_submodules"] = False
        view = RepositoryViewBuilder(mock_config).build(git_repo.working_tree_dir)
        assert view.submodules == ()

    def test_bare_repository(self, builder, upstream_repo):
        view = builder.build(upstream_repo.git_dir)
        assert view.name == "upstream.git"
        assert view.submodules == ()

    def test_not_a_repository_raises(self, builder, temp_dir):
        plain = temp_dir / "plain"
        plain.mkdir()
        with pytest.raises(RepositoryOpenError):
            builder.build(plain)


class TestUnsupportedRepository:
    """Repositories GitPython cannot read degrade to Unknown."""

    def test_unsupported_extension_gives_unknown_view(self, builder, git_repo):
        with git_repo.config_writer() as writer:
            writer.set_value("core", "repositoryformatversion", 1)
            writer.set_value("extensions", "refStorage", "reftable")

        view = builder.build(git_repo.working_tree_dir)

        assert view.status == Status.unknown()
        assert view.branch == "unknown"
        assert view.submodules == ()
        assert view.url is None
        assert view.email is None
        assert view.name == Path(git_repo.working_tree_dir).name


class TestFetchIntegration:
    """Fetch ordering and its effect on the view."""

    def test_fetch_refreshes_status(self, git_repo, upstream_repo, other_clone, mock_config):
        commit_file(other_clone, "remote.txt", "remote\n", "Remote commit")
        other_clone.git.push("origin", "main")
        mock_config["fetch_remote"] = True

        view = RepositoryViewBuilder(mock_config).build(git_repo.working_tree_dir)
        assert view.status == Status.behind_by(1)

    def test_failed_fetch_keeps_view(self, git_repo, upstream_repo, mock_config):
        fetcher = Mock(spec=RemoteFetcher)
        fetcher.fetch.return_value = False
        mock_config["fetch_remote"] = True

        view = RepositoryViewBuilder(mock_config, fetcher=fetcher).build(git_repo.working_tree_dir)

        assert view.status == Status.clean()
        fetcher.fetch.assert_called_once()
        _, _, url, branch = fetcher.fetch.call_args.args
        assert url == view.url
        assert branch == "main"

    def test_fetch_disabled(self, git_repo, upstream_repo, mock_config):
        fetcher = Mock(spec=RemoteFetcher)
        RepositoryViewBuilder(mock_config, fetcher=fetcher).build(git_repo.working_tree_dir)
        fetcher.fetch.assert_not_called()


class TestFinalize:
    """Path to text conversion."""

    def test_name_and_parent(self):
        view = RepositoryViewBuilder.finalize(
            Path("/home/user/src/project"), "main", Status.clean(), None, None, []
        )
        assert view.name == "project"
        assert view.parent == "/home/user/src"

    def test_missing_branch_becomes_unknown(self):
        view = RepositoryViewBuilder.finalize(Path("/src/project"), None, Status.unknown(), None, None, [])
        assert view.branch == "unknown"

    def test_non_text_name_is_rejected(self):
        # os.fsdecode turns undecodable bytes into lone surrogates
        bad = Path("/src/caf\udce9")
        with pytest.raises(PathEncodingError):
            RepositoryViewBuilder.finalize(bad, "main", Status.clean(), None, None, [])

    def test_non_text_parent_is_rejected(self):
        bad = Path("/src/caf\udce9/project")
        with pytest.raises(PathEncodingError):
            RepositoryViewBuilder.finalize(bad, "main", Status.clean(), None, None, [])

    def test_root_has_no_name(self):
        with pytest.raises(PathEncodingError):
            RepositoryViewBuilder.finalize(Path("/"), "main", Status.clean(), None, None, [])
