"""Batch analysis - run the analyzer over many files with bounded concurrency."""

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..analyzer import analyze_code
from ..config import FixerConfig, DEFAULT_CONFIG
from ..models import RepoFile, RepoSnapshot, FileReport, FileChange, PullRequestResult
from ..tools import GitHubTool, is_code_file
from ..utils import get_logger, calculate_metrics, ScanMetrics


EXCLUDE_DIRS = {
    ".git", ".venv", "venv", "__pycache__", ".pytest_cache", ".mypy_cache",
    ".ruff_cache", "node_modules", "dist", "build",
}


@dataclass
class ScanOutcome:
    """Result of scanning one repository."""
    snapshot: RepoSnapshot
    reports: List[FileReport] = field(default_factory=list)
    metrics: ScanMetrics = field(default_factory=ScanMetrics)
    changes: List[FileChange] = field(default_factory=list)
    pull_request: Optional[PullRequestResult] = None


def collect_local_files(root: Path, config: Optional[FixerConfig] = None) -> List[RepoFile]:
    """
    Collect code files below a directory.

    Skips vendored/build directories, non-code extensions, files at or
    above max_file_bytes and files that are not valid UTF-8.

    Args:
        root: Directory to walk
        config: Fixer configuration

    Returns:
        RepoFile list with paths relative to root, sorted by path
    """
    config = config or DEFAULT_CONFIG
    logger = get_logger()
    files: List[RepoFile] = []

    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if any(part in EXCLUDE_DIRS for part in path.relative_to(root).parts):
            continue
        if not is_code_file(path.name, config.code_extensions):
            continue

        size = path.stat().st_size
        if size >= config.max_file_bytes:
            logger.debug(f"Skipping {path} ({size} bytes)")
            continue

        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Skipping {path}: not UTF-8")
            continue

        rel = str(path.relative_to(root)).replace("\\", "/")
        files.append(RepoFile(path=rel, content=content, size=size))

    return files


async def analyze_files(
    files: List[RepoFile],
    max_parallel: int = 5
) -> List[FileReport]:
    """
    Analyze files in parallel.

    Args:
        files: Files to analyze
        max_parallel: Maximum number of concurrent analyses

    Returns:
        One FileReport per input file, in input order. A failure in one
        file is recorded on its report and does not stop the others.
    """
    logger = get_logger()
    semaphore = asyncio.Semaphore(max_parallel)

    async def limited_analyze(file: RepoFile) -> FileReport:
        async with semaphore:
            result = await asyncio.to_thread(analyze_code, file.content)
            return FileReport(file=file, result=result)

    tasks = [limited_analyze(f) for f in files]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    reports = []
    for file, outcome in zip(files, results):
        if isinstance(outcome, Exception):
            logger.warning(f"Analysis failed for {file.path}: {outcome}")
            reports.append(FileReport(file=file, error=str(outcome)))
        else:
            logger.debug(f"{file.path}: {outcome.result.summary}")
            reports.append(outcome)

    return reports


def analyze_files_sync(files: List[RepoFile], max_parallel: int = 5) -> List[FileReport]:
    """Synchronous wrapper for analyze_files."""
    return asyncio.run(analyze_files(files, max_parallel=max_parallel))


def collect_changes(reports: List[FileReport]) -> List[FileChange]:
    """Build the list of files whose fixed code differs from the original."""
    return [
        FileChange(path=r.file.path, content=r.result.fixed_code, sha=r.file.sha)
        for r in reports
        if r.changed
    ]


async def scan_repository(
    repo_url: str,
    github: GitHubTool,
    config: Optional[FixerConfig] = None,
    push: bool = False
) -> ScanOutcome:
    """
    Fetch a repository, analyze its code files and optionally push fixes.

    Args:
        repo_url: GitHub URL or "owner/repo"
        github: GitHub tool used for fetching and pushing
        config: Fixer configuration
        push: Open a pull request with the fixed files

    Returns:
        ScanOutcome with reports, metrics, changes and the PR (if pushed)
    """
    config = config or DEFAULT_CONFIG
    logger = get_logger()
    started = time.monotonic()

    snapshot = await asyncio.to_thread(github.fetch_repo, repo_url)
    logger.info(f"Analyzing {len(snapshot.files)} files from {snapshot.full_name}...")

    reports = await analyze_files(snapshot.files, max_parallel=config.max_parallel)
    changes = collect_changes(reports)

    duration_ms = int((time.monotonic() - started) * 1000)
    outcome = ScanOutcome(
        snapshot=snapshot,
        reports=reports,
        metrics=calculate_metrics(reports, duration_ms=duration_ms),
        changes=changes,
    )

    if push:
        if not changes:
            logger.info("No fixes to push")
        else:
            logger.info(f"Pushing fixes for {len(changes)} files...")
            outcome.pull_request = await asyncio.to_thread(
                github.push_fixes,
                snapshot.owner,
                snapshot.repo,
                changes,
                snapshot.branch,
            )

    return outcome


def scan_repository_sync(
    repo_url: str,
    github: GitHubTool,
    config: Optional[FixerConfig] = None,
    push: bool = False
) -> ScanOutcome:
    """Synchronous wrapper for scan_repository."""
    return asyncio.run(scan_repository(repo_url, github, config=config, push=push))
