"""Data models for analysis issues and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class IssueType(Enum):
    """Severity bucket used for counting."""
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Severity(Enum):
    """Issue severity levels."""
    CRITICAL = "critical"
    HIGH = "high"           # Correctness risks
    MEDIUM = "medium"       # Code quality
    LOW = "low"             # Style, suggestions


class Category:
    """Rule families. Free-form on the wire; these are the ones the analyzer emits."""
    LOGGING = "logging"
    BEST_PRACTICE = "best-practice"
    SYNTAX = "syntax"


@dataclass(frozen=True)
class Issue:
    """One detected problem instance."""
    type: IssueType
    category: str
    line: int          # 1-based
    description: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "category": self.category,
            "line": self.line,
            "description": self.description,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class AnalysisStats:
    """Issue counts derived from an issue list."""
    total: int = 0
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0

    @classmethod
    def from_issues(cls, issues: List[Issue]) -> "AnalysisStats":
        return cls(
            total=len(issues),
            errors=sum(1 for i in issues if i.type is IssueType.ERROR),
            warnings=sum(1 for i in issues if i.type is IssueType.WARNING),
            suggestions=sum(1 for i in issues if i.type is IssueType.SUGGESTION),
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one analyzer call."""
    issues: List[Issue]
    fixed_code: str
    summary: str
    stats: AnalysisStats = field(default_factory=AnalysisStats)

    @property
    def has_issues(self) -> bool:
        return self.stats.total > 0

    def to_dict(self) -> dict:
        """Serialize to the JSON wire contract."""
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "fixedCode": self.fixed_code,
            "summary": self.summary,
            "stats": self.stats.to_dict(),
        }
