"""Parse and format `[<repo>:]<branch>` addresses."""

from __future__ import annotations

from .exceptions import EmptyBranchNameError
from .models import Address, RepoRef
from .resolver import RepoResolver

_ESCAPE = "\\"
_SEPARATOR = ":"


def split_address(text: str) -> tuple[str | None, str]:
    """Split an address into its repo token and branch.

    The split happens at the last unescaped colon, so `ssb://` URLs can be used
    as the repo part. A backslash escapes a colon inside the repo token. With
    no unescaped colon the whole input is the branch, kept as written, so
    `a\\:b` yields the branch `a\\:b`.
    """

    value = text.strip()
    index = _last_separator(value)
    if index < 0:
        branch, token = value, None
    else:
        token = _unescape(value[:index])
        branch = value[index + 1 :]
    if not branch:
        raise EmptyBranchNameError(text)
    return token, branch


def parse_address(text: str, resolver: RepoResolver) -> Address:
    token, branch = split_address(text)
    if token is None:
        return Address(repo_ref=None, branch=branch)
    return Address(repo_ref=resolver.explicit(token), branch=branch)


def format_address(repo_ref: RepoRef | None, branch: str) -> str:
    if repo_ref is None:
        return branch
    # Colons inside the repo part need no escaping: only the last one splits.
    return f"{repo_ref}{_SEPARATOR}{branch}"


def _last_separator(value: str) -> int:
    index = value.rfind(_SEPARATOR)
    while index > 0 and value[index - 1] == _ESCAPE:
        index = value.rfind(_SEPARATOR, 0, index - 1)
    return index


def _unescape(token: str) -> str:
    return token.replace(_ESCAPE + _SEPARATOR, _SEPARATOR)


__all__ = ["format_address", "parse_address", "split_address"]
