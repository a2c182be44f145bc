"""Metrics calculation utilities for repository scans."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models import FileReport


@dataclass
class ScanMetrics:
    """Scan metrics aggregated from per-file reports."""

    # File counts
    files_analyzed: int = 0
    files_failed: int = 0
    files_changed: int = 0
    files_clean: int = 0

    # Issue counts by type
    total_issues: int = 0
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0

    # Breakdowns
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)

    # Timing
    duration_ms: Optional[int] = None

    @property
    def issues_per_file(self) -> float:
        if self.files_analyzed == 0:
            return 0.0
        return self.total_issues / self.files_analyzed


def calculate_metrics(
    reports: List[FileReport],
    duration_ms: Optional[int] = None
) -> ScanMetrics:
    """
    Calculate scan metrics from per-file reports.

    Args:
        reports: Reports produced by the batch pipeline
        duration_ms: Scan duration in milliseconds

    Returns:
        ScanMetrics object with calculated statistics
    """
    succeeded = [r for r in reports if r.succeeded]

    severity_counts: Counter = Counter()
    category_counts: Counter = Counter()
    errors = warnings = suggestions = 0

    for report in succeeded:
        stats = report.result.stats
        errors += stats.errors
        warnings += stats.warnings
        suggestions += stats.suggestions
        for issue in report.result.issues:
            severity_counts[issue.severity.value] += 1
            category_counts[issue.category] += 1

    return ScanMetrics(
        files_analyzed=len(succeeded),
        files_failed=len(reports) - len(succeeded),
        files_changed=sum(1 for r in succeeded if r.changed),
        files_clean=sum(1 for r in succeeded if not r.result.has_issues),
        total_issues=errors + warnings + suggestions,
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        by_severity=dict(severity_counts),
        by_category=dict(category_counts),
        duration_ms=duration_ms,
    )


def format_metrics_report(metrics: ScanMetrics) -> str:
    """
    Format metrics as a human-readable report.

    Args:
        metrics: ScanMetrics object

    Returns:
        Formatted report string
    """
    lines = [
        "## Scan Metrics",
        "",
        "### Files",
        f"- Analyzed: {metrics.files_analyzed}",
        f"- Failed: {metrics.files_failed}",
        f"- With fixes: {metrics.files_changed}",
        f"- Clean: {metrics.files_clean}",
        "",
        "### Issues",
        f"- Total: {metrics.total_issues}",
        f"- Errors: {metrics.errors}",
        f"- Warnings: {metrics.warnings}",
        f"- Suggestions: {metrics.suggestions}",
        f"- Per file: {metrics.issues_per_file:.2f}",
    ]

    if metrics.by_severity:
        lines.append("")
        lines.append("### Severity Breakdown")
        for severity in ("critical", "high", "medium", "low"):
            if severity in metrics.by_severity:
                lines.append(f"- {severity.capitalize()}: {metrics.by_severity[severity]}")

    if metrics.by_category:
        lines.append("")
        lines.append("### Category Breakdown")
        for category, count in sorted(metrics.by_category.items()):
            lines.append(f"- {category}: {count}")

    if metrics.duration_ms:
        duration_sec = metrics.duration_ms / 1000
        lines.append("")
        lines.append("### Performance")
        lines.append(f"- Scan duration: {duration_sec:.2f}s")

    return "\n".join(lines)
