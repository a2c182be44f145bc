"""Tests for the batch pipeline.

Minimal mocking: a small in-memory stand-in replaces the GitHub API.
"""

from typing import List, Optional

from code_fixer.config import FixerConfig
from code_fixer.models import RepoFile, RepoSnapshot, FileChange, PullRequestResult
from code_fixer.pipeline import (
    analyze_files_sync,
    collect_changes,
    collect_local_files,
    scan_repository_sync,
)


class FakeGitHub:
    """In-memory stand-in for GitHubTool."""

    def __init__(self, snapshot: RepoSnapshot):
        self.snapshot = snapshot
        self.pushed: List[tuple] = []

    def fetch_repo(self, repo_url: str, branch: Optional[str] = None) -> RepoSnapshot:
        return self.snapshot

    def push_fixes(self, owner, repo, changes, base=None) -> PullRequestResult:
        self.pushed.append((owner, repo, changes, base))
        return PullRequestResult(number=12, url="https://github.com/octo/hello/pull/12", branch="code-fixer/x")


class TestCollectLocalFiles:
    """Tests for directory walking."""

    def test_filters_by_extension_size_and_directory(self, tmp_path):
        """Should keep small code files outside excluded directories."""
        # Given
        (tmp_path / "a.js").write_text("var a = 1")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.ts").write_text("let b = 2;")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "dep.js").write_text("var dep")
        (tmp_path / "README.md").write_text("# readme")
        (tmp_path / "big.js").write_text("x" * 100_000)
        (tmp_path / "binary.js").write_bytes(b"\xff\xfe\x00")

        # When
        files = collect_local_files(tmp_path, FixerConfig())

        # Then
        assert sorted(f.path for f in files) == ["a.js", "sub/b.ts"]

    def test_size_limit_is_exclusive(self, tmp_path):
        """Files just below the limit should be included."""
        # Given
        (tmp_path / "edge.js").write_text("x" * 99)
        (tmp_path / "over.js").write_text("x" * 100)

        # When
        files = collect_local_files(tmp_path, FixerConfig(max_file_bytes=100))

        # Then
        assert [f.path for f in files] == ["edge.js"]


class TestAnalyzeFiles:
    """Tests for parallel analysis."""

    def test_reports_in_input_order(self):
        """Given several files, should return one report per file in order."""
        # Given
        files = [RepoFile(path=f"f{i}.js", content=f"var v{i} = {i}") for i in range(8)]

        # When
        reports = analyze_files_sync(files, max_parallel=2)

        # Then
        assert [r.file.path for r in reports] == [f.path for f in files]
        assert all(r.succeeded for r in reports)
        assert reports[3].result.fixed_code == "let v3 = 3;"

    def test_failure_isolated_to_one_file(self):
        """A file that cannot be analyzed should not stop the batch."""
        # Given
        files = [
            RepoFile(path="ok.js", content="return 1"),
            RepoFile(path="bad.js", content=None, size=1),
        ]

        # When
        reports = analyze_files_sync(files)

        # Then
        assert reports[0].succeeded
        assert not reports[1].succeeded
        assert "must be a string" in reports[1].error

    def test_empty_batch(self):
        assert analyze_files_sync([]) == []


class TestCollectChanges:
    """Tests for collect_changes."""

    def test_only_changed_files(self):
        """Only files whose fixed code differs should be pushed."""
        # Given
        reports = analyze_files_sync([
            RepoFile(path="dirty.js", content="var a = 1;", sha="s1"),
            RepoFile(path="clean.js", content="let a = 1;", sha="s2"),
        ])

        # When
        changes = collect_changes(reports)

        # Then
        assert changes == [FileChange(path="dirty.js", content="let a = 1;", sha="s1")]


class TestScanRepository:
    """Tests for scan_repository."""

    def _snapshot(self) -> RepoSnapshot:
        return RepoSnapshot(
            owner="octo",
            repo="hello",
            branch="main",
            files=[
                RepoFile(path="src/index.js", content='var greeting = "Hello World";\nconsole.log(greeting);', sha="abc123"),
                RepoFile(path="src/ok.js", content="const ok = true;", sha="def456"),
            ],
            total_files=2,
        )

    def test_scan_without_push(self):
        """Should analyze all files and compute metrics without pushing."""
        # Given
        github = FakeGitHub(self._snapshot())

        # When
        outcome = scan_repository_sync("octo/hello", github)

        # Then
        assert len(outcome.reports) == 2
        assert outcome.metrics.files_changed == 1
        assert [c.path for c in outcome.changes] == ["src/index.js"]
        assert outcome.pull_request is None
        assert github.pushed == []

    def test_scan_with_push(self):
        """With push, should open a PR against the scanned branch."""
        # Given
        github = FakeGitHub(self._snapshot())

        # When
        outcome = scan_repository_sync("octo/hello", github, push=True)

        # Then
        assert outcome.pull_request.number == 12
        owner, repo, changes, base = github.pushed[0]
        assert (owner, repo, base) == ("octo", "hello", "main")
        assert changes[0].content.startswith('let greeting = "Hello World";')

    def test_push_skipped_when_nothing_changed(self):
        """Clean repositories should not produce a PR."""
        # Given
        snapshot = self._snapshot()
        snapshot.files = [snapshot.files[1]]
        github = FakeGitHub(snapshot)

        # When
        outcome = scan_repository_sync("octo/hello", github, push=True)

        # Then
        assert outcome.pull_request is None
        assert github.pushed == []
