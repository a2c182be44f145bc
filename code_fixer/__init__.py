"""Code Fixer - line-oriented lint analyzer and auto-fixer."""

from .analyzer import analyze_code, InvalidInputError
from .models import Issue, IssueType, Severity, AnalysisResult, AnalysisStats

__version__ = "0.1.0"

__all__ = [
    "analyze_code",
    "InvalidInputError",
    "Issue",
    "IssueType",
    "Severity",
    "AnalysisResult",
    "AnalysisStats",
]
