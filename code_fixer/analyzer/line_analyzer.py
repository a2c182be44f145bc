"""Line analyzer/fixer - single pass over source text."""

from typing import List

from ..models import Issue, AnalysisStats, AnalysisResult
from .detectors import DETECTORS
from .summary import format_summary


class InvalidInputError(TypeError):
    """Raised when the analyzer is given something other than text."""


def analyze_line(line: str, line_number: int) -> tuple[str, List[Issue]]:
    """
    Run every detector over one line.

    Args:
        line: Line text without its trailing newline
        line_number: 1-based line number

    Returns:
        Tuple of (fixed_line, issues in detection order)
    """
    issues: List[Issue] = []
    working_line = line

    for detector in DETECTORS:
        working_line, issue = detector(working_line, line_number)
        if issue is not None:
            issues.append(issue)

    return working_line, issues


def analyze_code(code: str) -> AnalysisResult:
    """
    Analyze source text line by line and produce a fixed version.

    Pure function: the same input always yields the same issues and
    fixed code.

    Args:
        code: Full source text

    Returns:
        AnalysisResult with issues, fixed code, summary and stats

    Raises:
        InvalidInputError: If code is not a string
    """
    if not isinstance(code, str):
        raise InvalidInputError(f"Code must be a string, got {type(code).__name__}")

    issues: List[Issue] = []
    fixed_lines: List[str] = []

    for index, raw_line in enumerate(code.split("\n")):
        # Keep CRLF separators intact
        line_ending = "\r" if raw_line.endswith("\r") else ""
        line = raw_line[:-1] if line_ending else raw_line

        fixed_line, line_issues = analyze_line(line, index + 1)
        issues.extend(line_issues)
        fixed_lines.append(fixed_line + line_ending)

    stats = AnalysisStats.from_issues(issues)

    return AnalysisResult(
        issues=issues,
        fixed_code="\n".join(fixed_lines),
        summary=format_summary(stats),
        stats=stats,
    )
