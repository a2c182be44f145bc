"""Line-oriented lint analyzer and fixer."""

from .line_analyzer import analyze_code, analyze_line, InvalidInputError
from .summary import format_summary, NO_ISSUES_SUMMARY
from .detectors import (
    detect_console_log,
    detect_var_declaration,
    detect_loose_equality,
    detect_missing_terminator,
    needs_terminator,
)

__all__ = [
    "analyze_code",
    "analyze_line",
    "InvalidInputError",
    "format_summary",
    "NO_ISSUES_SUMMARY",
    "detect_console_log",
    "detect_var_declaration",
    "detect_loose_equality",
    "detect_missing_terminator",
    "needs_terminator",
]
