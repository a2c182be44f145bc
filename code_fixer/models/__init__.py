"""Data models for code analysis."""

from .issue import Category, IssueType, Severity, Issue, AnalysisStats, AnalysisResult
from .repository import (
    RepoFile,
    RepoSnapshot,
    FileReport,
    FileChange,
    PullRequestResult,
)

__all__ = [
    "Category",
    "IssueType",
    "Severity",
    "Issue",
    "AnalysisStats",
    "AnalysisResult",
    "RepoFile",
    "RepoSnapshot",
    "FileReport",
    "FileChange",
    "PullRequestResult",
]
