"""Tools for code fixer."""

from .github_tool import GitHubTool, parse_repo_url, is_code_file

__all__ = [
    "GitHubTool",
    "parse_repo_url",
    "is_code_file",
]
