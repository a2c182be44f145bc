"""Request bodies for the HTTP API."""

from typing import Any, List, Optional

from pydantic import BaseModel


class AnalyzeRequest(BaseModel):
    # Any, so that a non-string value reaches the analyzer's type guard
    # and is reported as a 400 rather than a schema error.
    code: Any = None


class FetchRepoRequest(BaseModel):
    repoUrl: Optional[str] = None


class FileChangeModel(BaseModel):
    path: str
    content: str
    sha: Optional[str] = None


class PushFixesRequest(BaseModel):
    owner: Optional[str] = None
    repo: Optional[str] = None
    files: Optional[List[FileChangeModel]] = None
    base: Optional[str] = None
