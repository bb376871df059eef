"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class RemoteEntry:
    """A git remote as reported by `git remote`."""

    name: str
    url: str


@dataclass(frozen=True)
class RemoteName:
    """A repo referenced through a configured git remote."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RepoId:
    """A repo referenced by the id of its `git-repo` message."""

    id: str

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class RepoUrl:
    """A repo referenced by an `ssb://` URL."""

    url: str

    def __str__(self) -> str:
        return self.url


RepoRef = Union[RemoteName, RepoId, RepoUrl]


@dataclass(frozen=True)
class Address:
    """Parsed form of `[<repo>:]<branch>`."""

    repo_ref: RepoRef | None
    branch: str


@dataclass(frozen=True)
class ForkNode:
    """A repo in a fork tree, with the forks published against it."""

    repo_id: str
    author: str | None = None
    forks: tuple[ForkNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PullRequest:
    """A fully resolved pull request, ready to be published."""

    repo: str
    branch: str
    head_repo: str
    head_branch: str
    title: str
    text: str = ""

    @property
    def summary(self) -> str:
        return f"{self.head_repo}:{self.head_branch} -> {self.repo}:{self.branch}"
