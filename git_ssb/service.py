"""High-level orchestration for git-ssb commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Sequence

from .address import parse_address
from .exceptions import RemoteExistsError, ValidationError
from .git import RemoteTable
from .models import Address, ForkNode, PullRequest
from .resolver import RepoResolver, split_repo_and_value
from .ssb import refs, schemas
from .ssb.protocol import SsbClient

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_NAME = "ssb"
FALLBACK_BRANCH = "master"


@dataclass
class GitSsbService:
    """Resolve command arguments and hand them to the SSB client.

    The client is only connected once resolution has succeeded, so bad input
    never reaches the server.
    """

    remotes: RemoteTable
    connect: Callable[[], SsbClient]
    resolver: RepoResolver = field(init=False)
    _client: SsbClient | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.resolver = RepoResolver(self.remotes)

    @property
    def client(self) -> SsbClient:
        if self._client is None:
            self._client = self.connect()
        return self._client

    def create(self, remote_name: str = DEFAULT_REMOTE_NAME, upstream: str | None = None) -> str:
        remote_name = remote_name.strip() or DEFAULT_REMOTE_NAME
        if self.remotes.has_remote(remote_name):
            raise RemoteExistsError(remote_name)
        repo_id = self.client.create_repo(upstream=upstream)
        url = refs.repo_url(repo_id)
        logger.debug("Created repo %s (upstream: %s)", repo_id, upstream)
        self.remotes.add_remote(remote_name, url)
        return url

    def fork(self, args: Sequence[str]) -> str:
        token, remote_name = split_repo_and_value("fork", args)
        if not remote_name.strip():
            raise ValidationError("missing remote name")
        upstream = self.resolver.resolve_id(token)
        return self.create(remote_name, upstream=upstream)

    def name(self, args: Sequence[str]) -> str:
        token, name = split_repo_and_value("name", args)
        if not name.strip():
            raise ValidationError("missing name")
        repo_id = self.resolver.resolve_id(token)
        message = schemas.name_message(repo_id, name)
        return self.client.publish(message)

    def forks(self, token: str | None = None) -> ForkNode:
        repo_id = self.resolver.resolve_id(token)
        return self._fork_tree(repo_id, None, seen=set())

    def resolve_pull_request(self, *, head: str | None = None, base: str | None = None) -> PullRequest:
        """Work out head and base of a pull request; the title is filled in later."""

        head_repo, head_branch = self._resolve_head(head)
        base_repo, base_branch = self._resolve_base(base, head_repo)
        if (head_repo, head_branch) == (base_repo, base_branch):
            raise ValidationError(f"Head and base are the same: {head_repo}:{head_branch}")
        return PullRequest(
            repo=base_repo,
            branch=base_branch,
            head_repo=head_repo,
            head_branch=head_branch,
            title="",
        )

    def publish_pull_request(self, request: PullRequest, message: str) -> tuple[PullRequest, str]:
        title, text = split_message(message)
        request = replace(request, title=title, text=text)
        key = self.client.publish(schemas.pull_request_message(request))
        return request, key

    def upstream_of(self, repo_id: str) -> str | None:
        content = self.client.get(repo_id).get("content") or {}
        upstream = content.get("upstream")
        if isinstance(upstream, str) and refs.is_repo_id(upstream):
            return upstream
        return None

    def _resolve_head(self, head: str | None) -> tuple[str, str]:
        if head is None:
            branch = self.remotes.current_branch()
            if not branch:
                raise ValidationError("HEAD is detached; pass -h <branch> to choose the head branch.")
            return self.resolver.resolve_id(), branch
        address = parse_address(head, self.resolver)
        return self._address_repo(address), address.branch

    def _resolve_base(self, base: str | None, head_repo: str) -> tuple[str, str]:
        if base is not None:
            address = parse_address(base, self.resolver)
            if address.repo_ref is not None:
                return self.resolver.repo_id(address.repo_ref), address.branch
            return self.upstream_of(head_repo) or head_repo, address.branch
        repo_id = self.upstream_of(head_repo) or head_repo
        branch = self.remotes.default_branch(refs.repo_url(repo_id))
        if not branch:
            logger.debug("No default branch known for %s, using %s", repo_id, FALLBACK_BRANCH)
            branch = FALLBACK_BRANCH
        return repo_id, branch

    def _address_repo(self, address: Address) -> str:
        if address.repo_ref is None:
            return self.resolver.resolve_id()
        return self.resolver.repo_id(address.repo_ref)

    def _fork_tree(self, repo_id: str, author: str | None, *, seen: set[str]) -> ForkNode:
        seen.add(repo_id)
        children = []
        for fork in self.client.forks(repo_id):
            if fork.repo_id in seen:
                continue
            children.append(self._fork_tree(fork.repo_id, fork.author, seen=seen))
        return ForkNode(repo_id=repo_id, author=author, forks=tuple(children))


def split_message(message: str) -> tuple[str, str]:
    """Split a pull request message into title and body text."""

    text = message.strip()
    if not text:
        raise ValidationError("Aborting pull-request due to empty message.")
    title, _, body = text.partition("\n")
    return title.strip(), body.strip()


__all__ = ["DEFAULT_REMOTE_NAME", "FALLBACK_BRANCH", "GitSsbService", "split_message"]
