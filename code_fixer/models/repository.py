"""Data models for repository scanning and fix pushing."""

from dataclasses import dataclass, field
from typing import List, Optional

from .issue import AnalysisResult


@dataclass
class RepoFile:
    """A source file fetched from a repository or read from disk."""
    path: str
    content: str
    sha: Optional[str] = None     # Blob SHA, required to update the file on GitHub
    size: int = 0

    def __post_init__(self):
        if self.size == 0:
            self.size = len(self.content.encode("utf-8"))


@dataclass
class RepoSnapshot:
    """Code files fetched from one branch of a repository."""
    owner: str
    repo: str
    branch: str
    files: List[RepoFile] = field(default_factory=list)
    total_files: int = 0          # Candidates before the max_files cut

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_dict(self) -> dict:
        return {
            "owner": self.owner,
            "repo": self.repo,
            "branch": self.branch,
            "files": [
                {"path": f.path, "content": f.content, "sha": f.sha}
                for f in self.files
            ],
            "totalFiles": self.total_files,
        }


@dataclass
class FileReport:
    """Analysis outcome for a single file in a batch."""
    file: RepoFile
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.result is not None

    @property
    def changed(self) -> bool:
        """True when the fixed code differs from the original content."""
        return self.succeeded and self.result.fixed_code != self.file.content


@dataclass
class FileChange:
    """A file update to push."""
    path: str
    content: str
    sha: Optional[str] = None


@dataclass
class PullRequestResult:
    """Result of pushing fixes as a pull request."""
    number: int
    url: str
    branch: str
    files_changed: int = 0

    def to_dict(self) -> dict:
        return {
            "pullRequestNumber": self.number,
            "pullRequestUrl": self.url,
            "branch": self.branch,
        }
