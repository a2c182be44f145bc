"""Line detectors.

Each detector takes one line of source text and its 1-based line number and
returns ``(rewritten_line, issue_or_None)``. Detectors never look at other
lines, so each can be tested in isolation and composed in a fixed order by
the line analyzer.
"""

import re
from typing import Optional, Tuple

from ..models import Category, Issue, IssueType, Severity


DetectorResult = Tuple[str, Optional[Issue]]

# Identifier names are ASCII; whitespace between keyword and name may be any
# Unicode space (a pasted NBSP still separates tokens).
CONSOLE_LOG_PATTERN = re.compile(r"\bconsole\.log\b")
VAR_DECLARATION_PATTERN = re.compile(r"\bvar\s+([a-zA-Z_$][a-zA-Z0-9_$]*)")
LOOSE_EQUALITY_PATTERN = re.compile(r"(^|[^=!<>])==([^=])")

TERMINATOR_ENDINGS = (";", "{", "}", ",")
COMMENT_PREFIXES = ("//", "/*", "*")


def detect_console_log(line: str, line_number: int) -> DetectorResult:
    """Flag debug logging calls. The line is left as is."""
    if not CONSOLE_LOG_PATTERN.search(line):
        return line, None

    return line, Issue(
        type=IssueType.WARNING,
        category=Category.LOGGING,
        line=line_number,
        description="Remove console logging in production code.",
        severity=Severity.MEDIUM,
    )


def detect_var_declaration(line: str, line_number: int) -> DetectorResult:
    """Replace the first ``var <name>`` with ``let <name>``.

    Only the keyword changes; the whitespace between keyword and name and
    everything around the match stay verbatim. ``let`` rather than ``const``
    because the variable may be reassigned later.
    """
    match = VAR_DECLARATION_PATTERN.search(line)
    if not match:
        return line, None

    variable_name = match.group(1)
    keyword_end = match.start() + len("var")
    fixed = f"{line[:match.start()]}let{line[keyword_end:]}"

    return fixed, Issue(
        type=IssueType.ERROR,
        category=Category.BEST_PRACTICE,
        line=line_number,
        description=f"Use block-scoped declarations instead of var for {variable_name}.",
        severity=Severity.HIGH,
    )


def detect_loose_equality(line: str, line_number: int) -> DetectorResult:
    """Rewrite every bare ``==`` to ``===``.

    ``===``, ``!=``, ``!==``, ``<==`` and ``>==`` are not touched. A single
    issue is reported per line no matter how many operators were rewritten.
    """
    fixed, count = LOOSE_EQUALITY_PATTERN.subn(r"\1===\2", line)
    if count == 0:
        return line, None

    return fixed, Issue(
        type=IssueType.WARNING,
        category=Category.BEST_PRACTICE,
        line=line_number,
        description="Prefer strict equality checks (===) over loose equality.",
        severity=Severity.MEDIUM,
    )


def needs_terminator(line: str) -> bool:
    """
    Heuristic check for a missing statement terminator.

    Not statement-aware: a bare object-literal continuation line or an
    ``if (x)`` without a brace is terminated too.
    """
    trimmed = line.strip()
    if not trimmed:
        return False
    if trimmed.endswith(TERMINATOR_ENDINGS):
        return False
    if trimmed.startswith(COMMENT_PREFIXES):
        return False
    return True


def detect_missing_terminator(line: str, line_number: int) -> DetectorResult:
    """Append ``;`` to lines that look like unterminated statements."""
    if not needs_terminator(line):
        return line, None

    return f"{line.rstrip()};", Issue(
        type=IssueType.SUGGESTION,
        category=Category.SYNTAX,
        line=line_number,
        description="Terminate statements with semicolons for consistency.",
        severity=Severity.LOW,
    )


# Order matters: the terminator check runs on the line as rewritten so far.
DETECTORS = (
    detect_console_log,
    detect_var_declaration,
    detect_loose_equality,
    detect_missing_terminator,
)
