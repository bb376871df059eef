"""Decide which git-ssb repo a command applies to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .exceptions import ArityError, NoDefaultRepoError, NotSsbRemoteError, UnknownRepoReferenceError
from .git import RemoteTable
from .models import RemoteEntry, RemoteName, RepoId, RepoRef, RepoUrl
from .ssb import refs

logger = logging.getLogger(__name__)

DEFAULT_REMOTES = ("origin", "ssb")


@dataclass
class RepoResolver:
    """Resolve user tokens into RepoRef values against a remote table."""

    remotes: RemoteTable
    default_remotes: tuple[str, ...] = DEFAULT_REMOTES

    def default(self) -> RemoteName:
        available = self.remotes.list_remotes()
        for name in self.default_remotes:
            if name in available:
                logger.debug("Using default remote %s", name)
                return RemoteName(name)
        raise NoDefaultRepoError(self.default_remotes)

    def explicit(self, token: str) -> RepoRef:
        if self.remotes.has_remote(token):
            return RemoteName(token)
        ref = refs.classify(token)
        if ref is None:
            raise UnknownRepoReferenceError(token)
        return ref

    def resolve(self, token: str | None = None) -> RepoRef:
        if token is None:
            return self.default()
        return self.explicit(token)

    def repo_id(self, ref: RepoRef) -> str:
        """Return the SSB repo id behind a reference."""

        if isinstance(ref, RepoId):
            return ref.id
        if isinstance(ref, RepoUrl):
            repo_id = refs.repo_id_from_url(ref.url)
            if repo_id is None:
                raise UnknownRepoReferenceError(ref.url)
            return repo_id
        if isinstance(ref, RemoteName):
            entry = self.remote_entry(ref.name)
            repo_id = refs.repo_id_from_url(entry.url) if entry else None
            if repo_id is None:
                raise NotSsbRemoteError(ref.name, entry.url if entry else None)
            return repo_id
        raise TypeError(f"Unsupported repo reference: {ref!r}")

    def remote_entry(self, name: str) -> RemoteEntry | None:
        url = self.remotes.url_of(name)
        if url is None:
            return None
        return RemoteEntry(name=name, url=url)

    def resolve_id(self, token: str | None = None) -> str:
        return self.repo_id(self.resolve(token))


def split_repo_and_value(command: str, args: Sequence[str]) -> tuple[str | None, str]:
    """Apply the `[<repo>] <value>` arity rule shared by fork and name.

    One argument means the repo comes from the default remotes; two means the
    first one names the repo explicitly. Anything else is a usage error.
    """

    if len(args) == 1:
        return None, args[0]
    if len(args) == 2:
        return args[0], args[1]
    raise ArityError(command, f"'{command}' takes one or two arguments, got {len(args)}")


__all__ = ["DEFAULT_REMOTES", "RepoResolver", "split_repo_and_value"]
