"""HTTP API for code fixer."""

from .routes import router, get_github_tool, github_tool_factory

__all__ = [
    "router",
    "get_github_tool",
    "github_tool_factory",
]
