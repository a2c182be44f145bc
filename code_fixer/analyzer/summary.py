"""Summary formatting for analysis results."""

from ..models import AnalysisStats


NO_ISSUES_SUMMARY = "No issues found."


def _pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_summary(stats: AnalysisStats) -> str:
    """
    Format issue counts as a human-readable summary.

    Args:
        stats: Counts computed from the issue list

    Returns:
        "No issues found." or e.g. "1 error, 2 warnings, 1 suggestion"
    """
    if stats.total == 0:
        return NO_ISSUES_SUMMARY

    return ", ".join([
        _pluralize(stats.errors, "error"),
        _pluralize(stats.warnings, "warning"),
        _pluralize(stats.suggestions, "suggestion"),
    ])
