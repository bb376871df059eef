"""Custom error hierarchy for git-ssb."""

from __future__ import annotations


class GitSsbError(RuntimeError):
    """Base error for the CLI."""


class GitEnvironmentError(GitSsbError):
    """Raised when the git binary is missing or we are not inside a repository."""


class GitCommandError(GitSsbError):
    """Raised when an underlying git command fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        if self.stderr.strip():
            message = f"{message}\n{self.stderr.strip()}"
        super().__init__(message)


class NoDefaultRepoError(GitSsbError):
    """Raised when neither an 'origin' nor an 'ssb' remote is configured."""

    def __init__(self, candidates: tuple[str, ...] = ("origin", "ssb")):
        self.candidates = candidates
        names = " or ".join(f"'{name}'" for name in candidates)
        super().__init__(f"unable to find git-ssb repo: no {names} remote")


class UnknownRepoReferenceError(GitSsbError):
    """Raised when a token is neither a remote name, a repo id nor a repo URL."""

    def __init__(self, token: str, message: str | None = None):
        self.token = token
        super().__init__(message or f"unknown repo '{token}': not a git remote, repo id or ssb:// url")


class NotSsbRemoteError(UnknownRepoReferenceError):
    """Raised when a git remote does not point at a git-ssb repo."""

    def __init__(self, remote: str, url: str | None):
        self.url = url
        super().__init__(remote, f"remote '{remote}' is not a git-ssb repo (url: {url or 'none'})")


class EmptyBranchNameError(GitSsbError):
    """Raised when an address has no branch part."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"missing branch name in '{text}'")


class UnknownCommandError(GitSsbError):
    """Raised when the dispatcher is given a verb it does not know."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"No such command '{command}'")


class UsageError(GitSsbError):
    """Raised when a command is called with the wrong arguments."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


class ArityError(UsageError):
    """Raised when fork or name gets the wrong number of arguments."""


class ValidationError(GitSsbError):
    """Raised when user input fails validation."""


class SchemaError(ValidationError):
    """Raised when a message would not match its SSB schema."""


class RemoteExistsError(GitSsbError):
    """Raised when creating a remote whose name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Remote '{name}' already exists")


class SsbClientError(GitSsbError):
    """Raised when the sbot client or web server fails."""


__all__ = [
    "GitSsbError",
    "GitEnvironmentError",
    "GitCommandError",
    "NoDefaultRepoError",
    "UnknownRepoReferenceError",
    "NotSsbRemoteError",
    "EmptyBranchNameError",
    "UnknownCommandError",
    "UsageError",
    "ArityError",
    "ValidationError",
    "SchemaError",
    "RemoteExistsError",
    "SsbClientError",
]
