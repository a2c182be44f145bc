"""Batch pipeline for analyzing many files."""

from .batch import (
    ScanOutcome,
    collect_local_files,
    analyze_files,
    analyze_files_sync,
    collect_changes,
    scan_repository,
    scan_repository_sync,
)

__all__ = [
    "ScanOutcome",
    "collect_local_files",
    "analyze_files",
    "analyze_files_sync",
    "collect_changes",
    "scan_repository",
    "scan_repository_sync",
]
