"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .exceptions import GitCommandError, GitEnvironmentError

logger = logging.getLogger(__name__)

# git exits with 128 for fatal errors such as "not a git repository".
_FATAL_EXIT = 128


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure."""

    command = ["git", *args]
    logger.debug("Running command: %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitEnvironmentError("git executable not found in PATH") from exc
    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, result.stderr)
    return result


def config_get(key: str, *, cwd: Path | None = None) -> str | None:
    result = run_git(["config", "--get", key], cwd=cwd, check=False)
    if result.returncode != 0:
        return None
    return result.stdout.strip()


class RemoteTable(Protocol):
    """Read and write access to the git remotes of the working repository."""

    def list_remotes(self) -> list[str]:
        ...

    def has_remote(self, name: str) -> bool:
        ...

    def url_of(self, name: str) -> str | None:
        ...

    def add_remote(self, name: str, url: str) -> None:
        ...

    def current_branch(self) -> str | None:
        ...

    def default_branch(self, url: str) -> str | None:
        ...


@dataclass
class GitRemoteTable:
    """RemoteTable backed by the local git binary.

    Nothing is cached: every call runs git again, so a single invocation always
    sees the remotes as they are on disk.
    """

    cwd: Path | None = None

    def list_remotes(self) -> list[str]:
        proc = self._run_in_repo(["remote"])
        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]

    def has_remote(self, name: str) -> bool:
        return name in self.list_remotes()

    def url_of(self, name: str) -> str | None:
        if not self.has_remote(name):
            return None
        proc = self._run_in_repo(["remote", "get-url", name])
        return proc.stdout.strip() or None

    def add_remote(self, name: str, url: str) -> None:
        self._run_in_repo(["remote", "add", name, url])

    def current_branch(self) -> str | None:
        proc = run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=self.cwd, check=False)
        if proc.returncode == _FATAL_EXIT:
            raise GitEnvironmentError(_describe_fatal(proc.stderr))
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def default_branch(self, url: str) -> str | None:
        proc = run_git(["ls-remote", "--symref", url, "HEAD"], cwd=self.cwd, check=False)
        if proc.returncode != 0:
            logger.debug("ls-remote failed for %s: %s", url, proc.stderr.strip())
            return None
        return parse_symref(proc.stdout)

    def _run_in_repo(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        proc = run_git(args, cwd=self.cwd, check=False)
        if proc.returncode == _FATAL_EXIT:
            raise GitEnvironmentError(_describe_fatal(proc.stderr))
        if proc.returncode != 0:
            raise GitCommandError(["git", *args], proc.returncode, proc.stderr)
        return proc


def parse_symref(output: str) -> str | None:
    """Return the branch HEAD points to in `git ls-remote --symref` output."""

    for raw in output.splitlines():
        key, _, rest = raw.partition(" ")
        if key != "ref:":
            continue
        ref, _, name = rest.partition("\t")
        if name.strip() != "HEAD":
            continue
        if ref.startswith("refs/heads/"):
            return ref[len("refs/heads/") :]
    return None


def _describe_fatal(stderr: str) -> str:
    text = stderr.strip()
    if text.startswith("fatal: "):
        text = text[len("fatal: ") :]
    return text or "not a git repository"


__all__ = ["GitRemoteTable", "RemoteTable", "config_get", "parse_symref", "run_git"]
