"""GitHub API wrapper for fetching repositories and pushing fixes."""

import os
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from github import Github, GithubException
from github.Repository import Repository

from ..config import FixerConfig, DEFAULT_CONFIG
from ..models import RepoFile, RepoSnapshot, FileChange, PullRequestResult
from ..utils import get_logger


GITHUB_URL_PATTERN = re.compile(r"github\.com[/:]([^/\s]+)/([^/\s?#]+)")
SHORT_NAME_PATTERN = re.compile(r"^([\w.-]+)/([\w.-]+)$")


def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """
    Extract owner and repository name from a GitHub URL.

    Accepts https/ssh URLs (optionally ending in .git or a sub-path)
    and the short "owner/repo" form.

    Raises:
        ValueError: If the URL does not name a GitHub repository
    """
    url = (repo_url or "").strip()
    match = GITHUB_URL_PATTERN.search(url) or SHORT_NAME_PATTERN.match(url)
    if not match:
        raise ValueError(f"Invalid GitHub repository URL: {repo_url!r}")

    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not repo:
        raise ValueError(f"Invalid GitHub repository URL: {repo_url!r}")
    return owner, repo


def is_code_file(path: str, extensions: Iterable[str]) -> bool:
    """Check whether a path has one of the given code extensions."""
    return any(path.endswith(ext) for ext in extensions)


class GitHubTool:
    """
    GitHub API wrapper for code fixer.

    Handles:
    - Fetching code files from a repository branch
    - Pushing fixed files to a new branch
    - Opening a pull request with the fixes
    """

    def __init__(self, token: Optional[str] = None, config: Optional[FixerConfig] = None):
        """
        Initialize GitHub tool.

        Args:
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            config: Fixer configuration (file limits, branch prefix)
        """
        self.config = config or DEFAULT_CONFIG
        self.token = token or self.config.github_token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ValueError("GitHub token required. Set GITHUB_TOKEN env var or pass token parameter.")

        self.gh = Github(self.token)
        self.logger = get_logger()

    def get_repository(self, owner: str, repo: str) -> Repository:
        return self.gh.get_repo(f"{owner}/{repo}")

    def fetch_repo(self, repo_url: str, branch: Optional[str] = None) -> RepoSnapshot:
        """
        Fetch code files from a repository.

        Args:
            repo_url: GitHub URL or "owner/repo"
            branch: Branch to read (defaults to the repository default branch)

        Returns:
            RepoSnapshot with up to max_files decoded files
        """
        owner, name = parse_repo_url(repo_url)
        repository = self.get_repository(owner, name)
        branch = branch or repository.default_branch

        self.logger.info(f"Fetching tree for {owner}/{name}@{branch}")
        tree = repository.get_git_tree(branch, recursive=True)

        candidates = [
            entry for entry in tree.tree
            if entry.type == "blob"
            and is_code_file(entry.path, self.config.code_extensions)
            and (entry.size or 0) < self.config.max_file_bytes
        ]

        files: List[RepoFile] = []
        for entry in candidates[:self.config.max_files]:
            try:
                contents = repository.get_contents(entry.path, ref=branch)
                text = contents.decoded_content.decode("utf-8")
            except (GithubException, UnicodeDecodeError) as e:
                self.logger.warning(f"Skipping {entry.path}: {e}")
                continue

            files.append(RepoFile(
                path=entry.path,
                content=text,
                sha=entry.sha,
                size=entry.size or 0,
            ))

        self.logger.info(f"Fetched {len(files)} of {len(candidates)} code files from {owner}/{name}")

        return RepoSnapshot(
            owner=owner,
            repo=name,
            branch=branch,
            files=files,
            total_files=len(candidates),
        )

    def push_fixes(
        self,
        owner: str,
        repo: str,
        changes: List[FileChange],
        base: Optional[str] = None
    ) -> PullRequestResult:
        """
        Commit fixed files to a new branch and open a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            changes: Files to update (blob SHA required for existing files)
            base: Base branch (defaults to the repository default branch)

        Returns:
            PullRequestResult with the PR number, URL and branch

        Raises:
            ValueError: If there is nothing to push
        """
        if not changes:
            raise ValueError("No changed files to push")

        repository = self.get_repository(owner, repo)
        base = base or repository.default_branch

        base_ref = repository.get_git_ref(f"heads/{base}")
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        branch = f"{self.config.branch_prefix}{timestamp}"

        repository.create_git_ref(ref=f"refs/heads/{branch}", sha=base_ref.object.sha)
        self.logger.info(f"Created branch {branch} from {base}")

        for change in changes:
            # No blob sha means the path is new on the branch
            if change.sha is None:
                repository.create_file(
                    path=change.path,
                    message=f"Add {change.path} with automated fixes",
                    content=change.content,
                    branch=branch,
                )
            else:
                repository.update_file(
                    path=change.path,
                    message=f"Apply automated fixes to {change.path}",
                    content=change.content,
                    sha=change.sha,
                    branch=branch,
                )
            self.logger.debug(f"Committed {change.path}")

        pr = repository.create_pull(
            title=f"Automated code fixes ({len(changes)} files)",
            body=self._format_pr_body(changes),
            head=branch,
            base=base,
        )
        self.logger.info(f"Opened PR #{pr.number}: {pr.html_url}")

        return PullRequestResult(
            number=pr.number,
            url=pr.html_url,
            branch=branch,
            files_changed=len(changes),
        )

    def _format_pr_body(self, changes: List[FileChange]) -> str:
        """Format the pull request description."""
        parts = [
            "## Automated Code Fixes\n",
            "Applied line-level fixes: `var` to `let`, loose to strict equality, "
            "and missing statement terminators.\n",
            "\n### Files\n",
        ]
        for change in changes:
            parts.append(f"- `{change.path}`\n")
        parts.append("\n---\n*Generated by code-fixer*")
        return ''.join(parts)
