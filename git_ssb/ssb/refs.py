"""Recognise SSB identifiers in user input."""

from __future__ import annotations

import re

from ..models import RepoId, RepoUrl

URL_SCHEME = "ssb://"

_MSG_ID_RE = re.compile(r"^%[A-Za-z0-9+/]{43}=\.sha256$")
_FEED_ID_RE = re.compile(r"^@[A-Za-z0-9+/]{43}=\.ed25519$")


def is_repo_id(value: str) -> bool:
    """Return True for a message id, the form a git-ssb repo id takes."""

    return bool(_MSG_ID_RE.match(value))


def is_feed_id(value: str) -> bool:
    return bool(_FEED_ID_RE.match(value))


def is_repo_url(value: str) -> bool:
    return value.startswith(URL_SCHEME) and is_repo_id(value[len(URL_SCHEME) :])


def repo_id_from_url(url: str) -> str | None:
    if not is_repo_url(url):
        return None
    return url[len(URL_SCHEME) :]


def repo_url(repo_id: str) -> str:
    return f"{URL_SCHEME}{repo_id}"


def classify(token: str) -> RepoId | RepoUrl | None:
    """Return the variant a token names without consulting git remotes."""

    if is_repo_id(token):
        return RepoId(token)
    if is_repo_url(token):
        return RepoUrl(token)
    return None


__all__ = [
    "URL_SCHEME",
    "classify",
    "is_feed_id",
    "is_repo_id",
    "is_repo_url",
    "repo_id_from_url",
    "repo_url",
]
