"""HTTP routes: analyze code, fetch a repository, push fixes."""

from typing import Callable

from fastapi import APIRouter, Depends, HTTPException
from github import GithubException

from ..analyzer import analyze_code, InvalidInputError
from ..config import FixerConfig
from ..models import FileChange
from ..tools import GitHubTool, parse_repo_url
from ..utils import get_logger
from .schemas import AnalyzeRequest, FetchRepoRequest, PushFixesRequest

router = APIRouter()
logger = get_logger("code_fixer.api")


def get_github_tool() -> GitHubTool:
    """Build a GitHub tool from the environment, or fail with 500."""
    try:
        return GitHubTool(config=FixerConfig.from_env())
    except ValueError:
        logger.error("GITHUB_TOKEN not configured")
        raise HTTPException(status_code=500, detail="GitHub integration not configured")


def github_tool_factory() -> Callable[[], GitHubTool]:
    """Dependency handing routes a builder, so request checks run before the token lookup."""
    return get_github_tool


def _github_error(e: GithubException, action: str) -> HTTPException:
    message = e.data.get("message") if isinstance(e.data, dict) else str(e)
    return HTTPException(status_code=e.status or 502, detail=f"Failed to {action}: {message}")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/analyze-code")
def analyze(req: AnalyzeRequest):
    if req.code is None:
        raise HTTPException(status_code=400, detail="Code is required")

    try:
        result = analyze_code(req.code)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Analysis error")
        raise HTTPException(status_code=500, detail=f"Failed to analyze code: {e}")

    logger.info(f"Analyzed {len(req.code)} chars: {result.summary}")
    return result.to_dict()


@router.post("/fetch-repo")
def fetch_repo(
    req: FetchRepoRequest,
    make_github: Callable[[], GitHubTool] = Depends(github_tool_factory),
):
    if not req.repoUrl:
        raise HTTPException(status_code=400, detail="Repository URL is required")

    try:
        parse_repo_url(req.repoUrl)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid GitHub repository URL")

    github = make_github()
    try:
        snapshot = github.fetch_repo(req.repoUrl)
    except GithubException as e:
        logger.error(f"GitHub API error: {e}")
        raise _github_error(e, "fetch repository")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Fetch error")
        raise HTTPException(status_code=500, detail=f"Failed to fetch repository: {e}")

    return snapshot.to_dict()


@router.post("/push-fixes")
def push_fixes(
    req: PushFixesRequest,
    make_github: Callable[[], GitHubTool] = Depends(github_tool_factory),
):
    if not req.owner or not req.repo or not req.files:
        raise HTTPException(status_code=400, detail="Owner, repo, and files are required")

    changes = [FileChange(path=f.path, content=f.content, sha=f.sha) for f in req.files]
    logger.info(f"Creating PR for {req.owner}/{req.repo} with {len(changes)} files")

    github = make_github()
    try:
        result = github.push_fixes(req.owner, req.repo, changes, base=req.base)
    except GithubException as e:
        logger.error(f"GitHub API error: {e}")
        raise _github_error(e, "push fixes")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Push error")
        raise HTTPException(status_code=500, detail=f"Failed to push fixes: {e}")

    return result.to_dict()
