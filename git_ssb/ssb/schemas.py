"""Builders for the SSB messages git-ssb publishes."""

from __future__ import annotations

from typing import Any

from ..exceptions import SchemaError
from ..models import PullRequest
from .refs import is_repo_id

REPO_TYPE = "git-repo"
ABOUT_TYPE = "about"
PULL_REQUEST_TYPE = "pull-request"


def repo_message(upstream: str | None = None) -> dict[str, Any]:
    message: dict[str, Any] = {"type": REPO_TYPE}
    if upstream is not None:
        _require_repo_id("upstream", upstream)
        message["upstream"] = upstream
    return message


def name_message(repo: str, name: str) -> dict[str, Any]:
    _require_repo_id("about", repo)
    if not name or not name.strip():
        raise SchemaError("Name cannot be empty.")
    return {"type": ABOUT_TYPE, "about": repo, "name": name}


def pull_request_message(request: PullRequest) -> dict[str, Any]:
    """Return the `pull-request` message for a resolved request.

    `repo`/`branch` name the base the changes should land in; `head_repo` and
    `head_branch` name where they come from. `text` is omitted when empty.
    """

    _require_repo_id("repo", request.repo)
    _require_repo_id("head_repo", request.head_repo)
    for field_name in ("branch", "head_branch", "title"):
        if not getattr(request, field_name):
            raise SchemaError(f"Pull request {field_name} cannot be empty.")
    message: dict[str, Any] = {
        "type": PULL_REQUEST_TYPE,
        "repo": request.repo,
        "branch": request.branch,
        "head_repo": request.head_repo,
        "head_branch": request.head_branch,
        "title": request.title,
    }
    if request.text:
        message["text"] = request.text
    return message


def _require_repo_id(field_name: str, value: str) -> None:
    if not is_repo_id(value):
        raise SchemaError(f"Field '{field_name}' must be a repo id, got '{value}'")


__all__ = [
    "ABOUT_TYPE",
    "PULL_REQUEST_TYPE",
    "REPO_TYPE",
    "name_message",
    "pull_request_message",
    "repo_message",
]
