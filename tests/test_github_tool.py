"""Tests for the GitHub tool.

Only the PyGithub client is mocked.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from github import GithubException

from code_fixer.config import FixerConfig
from code_fixer.models import FileChange
from code_fixer.tools import GitHubTool, parse_repo_url, is_code_file


def _entry(path, size=10, type_="blob", sha=None):
    return SimpleNamespace(path=path, size=size, type=type_, sha=sha or f"sha-{path}")


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.default_branch = "main"
    return repo


@pytest.fixture
def tool(repository):
    with patch("code_fixer.tools.github_tool.Github") as github_cls:
        github_cls.return_value.get_repo.return_value = repository
        yield GitHubTool(token="test-token", config=FixerConfig(max_files=3))


class TestParseRepoUrl:
    """Tests for parse_repo_url."""

    @pytest.mark.parametrize("url, expected", [
        ("https://github.com/octo/hello", ("octo", "hello")),
        ("https://github.com/octo/hello.git", ("octo", "hello")),
        ("https://github.com/octo/hello/tree/main/src", ("octo", "hello")),
        ("git@github.com:octo/hello.git", ("octo", "hello")),
        ("octo/hello", ("octo", "hello")),
        ("  octo/hello.js  ", ("octo", "hello.js")),
    ])
    def test_valid_urls(self, url, expected):
        assert parse_repo_url(url) == expected

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "https://gitlab.com/octo/hello",
        "https://github.com/octo",
    ])
    def test_invalid_urls(self, url):
        with pytest.raises(ValueError, match="Invalid GitHub repository URL"):
            parse_repo_url(url)


class TestIsCodeFile:
    def test_extensions(self):
        assert is_code_file("src/app.tsx", (".tsx",)) is True
        assert is_code_file("README.md", (".js", ".py")) is False


class TestGitHubToolInit:
    """Tests for token handling."""

    def test_missing_token_raises(self, monkeypatch):
        """Given no token anywhere, should raise ValueError."""
        # Given
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        # When/Then
        with pytest.raises(ValueError, match="GitHub token required"):
            GitHubTool(config=FixerConfig())

    def test_token_from_environment(self, monkeypatch):
        """Given GITHUB_TOKEN in the environment, should use it."""
        # Given
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")

        # When
        with patch("code_fixer.tools.github_tool.Github") as github_cls:
            tool = GitHubTool(config=FixerConfig())

        # Then
        assert tool.token == "env-token"
        github_cls.assert_called_once_with("env-token")


class TestFetchRepo:
    """Tests for fetch_repo."""

    def test_filters_candidates_and_limits_downloads(self, tool, repository):
        """Should keep small code blobs and download at most max_files."""
        # Given
        repository.get_git_tree.return_value = SimpleNamespace(tree=[
            _entry("src", type_="tree"),
            _entry("src/a.js"),
            _entry("src/b.py"),
            _entry("README.md"),
            _entry("src/huge.js", size=100_000),
            _entry("src/edge.js", size=99_999),
            _entry("src/c.ts"),
        ])
        repository.get_contents.side_effect = lambda path, ref: SimpleNamespace(
            decoded_content=f"// {path}".encode("utf-8")
        )

        # When
        snapshot = tool.fetch_repo("https://github.com/octo/hello")

        # Then
        assert snapshot.owner == "octo"
        assert snapshot.repo == "hello"
        assert snapshot.branch == "main"
        assert snapshot.total_files == 4
        assert [f.path for f in snapshot.files] == ["src/a.js", "src/b.py", "src/edge.js"]
        assert snapshot.files[0].content == "// src/a.js"
        assert snapshot.files[0].sha == "sha-src/a.js"
        repository.get_git_tree.assert_called_once_with("main", recursive=True)

    def test_skips_unreadable_files(self, tool, repository):
        """Files that fail to download or decode should be skipped."""
        # Given
        repository.get_git_tree.return_value = SimpleNamespace(tree=[
            _entry("a.js"), _entry("b.js"), _entry("c.js"),
        ])

        def get_contents(path, ref):
            if path == "a.js":
                raise GithubException(404, {"message": "Not Found"})
            if path == "b.js":
                return SimpleNamespace(decoded_content=b"\xff\xfe")
            return SimpleNamespace(decoded_content=b"return 1")

        repository.get_contents.side_effect = get_contents

        # When
        snapshot = tool.fetch_repo("octo/hello")

        # Then
        assert [f.path for f in snapshot.files] == ["c.js"]
        assert snapshot.total_files == 3

    def test_explicit_branch(self, tool, repository):
        """Given a branch, should read that branch instead of the default."""
        # Given
        repository.get_git_tree.return_value = SimpleNamespace(tree=[])

        # When
        snapshot = tool.fetch_repo("octo/hello", branch="develop")

        # Then
        assert snapshot.branch == "develop"
        repository.get_git_tree.assert_called_once_with("develop", recursive=True)


class TestPushFixes:
    """Tests for push_fixes."""

    def test_creates_branch_commits_and_pr(self, tool, repository):
        """Should branch from base, update each file and open a PR."""
        # Given
        repository.get_git_ref.return_value = SimpleNamespace(object=SimpleNamespace(sha="base-sha"))
        repository.create_pull.return_value = SimpleNamespace(
            number=42, html_url="https://github.com/octo/hello/pull/42"
        )
        changes = [
            FileChange(path="src/a.js", content="let a = 1;", sha="s1"),
            FileChange(path="src/b.js", content="let b = 2;", sha="s2"),
        ]

        # When
        result = tool.push_fixes("octo", "hello", changes)

        # Then
        assert result.number == 42
        assert result.url.endswith("/pull/42")
        assert result.branch.startswith("code-fixer/")
        assert result.files_changed == 2

        repository.get_git_ref.assert_called_once_with("heads/main")
        repository.create_git_ref.assert_called_once_with(
            ref=f"refs/heads/{result.branch}", sha="base-sha"
        )
        assert repository.update_file.call_count == 2
        first_call = repository.update_file.call_args_list[0].kwargs
        assert first_call["path"] == "src/a.js"
        assert first_call["sha"] == "s1"
        assert first_call["branch"] == result.branch

        pr_kwargs = repository.create_pull.call_args.kwargs
        assert pr_kwargs["head"] == result.branch
        assert pr_kwargs["base"] == "main"
        assert "`src/b.js`" in pr_kwargs["body"]

    def test_file_without_sha_is_created(self, tool, repository):
        """Given a change with no blob sha, should create the file instead of updating it."""
        # Given
        repository.get_git_ref.return_value = SimpleNamespace(object=SimpleNamespace(sha="base-sha"))
        repository.create_pull.return_value = SimpleNamespace(
            number=7, html_url="https://github.com/octo/hello/pull/7"
        )
        changes = [
            FileChange(path="new.js", content="x;", sha=None),
            FileChange(path="old.js", content="y;", sha="s1"),
        ]

        # When
        result = tool.push_fixes("octo", "hello", changes)

        # Then
        repository.create_file.assert_called_once()
        created = repository.create_file.call_args.kwargs
        assert created["path"] == "new.js"
        assert created["content"] == "x;"
        assert created["branch"] == result.branch
        assert "sha" not in created

        repository.update_file.assert_called_once()
        assert repository.update_file.call_args.kwargs["path"] == "old.js"

    def test_no_changes_raises(self, tool):
        """Given nothing to push, should raise ValueError."""
        with pytest.raises(ValueError, match="No changed files"):
            tool.push_fixes("octo", "hello", [])
