"""Protocol definitions for the SSB collaborators."""

from __future__ import annotations

from typing import Any, Protocol

from ..models import ForkNode


class SsbClient(Protocol):
    """Protocol for clients of a running ssb-server."""

    def create_repo(self, *, upstream: str | None = None) -> str:
        """Publish a new `git-repo` message and return the repo id.

        Args:
            upstream: Repo id of the repo being forked, if any

        Raises:
            SsbClientError: If the server rejects the message
        """
        ...

    def publish(self, message: dict[str, Any]) -> str:
        """Publish a message and return its key."""
        ...

    def get(self, message_id: str) -> dict[str, Any]:
        """Return the value of a message (author, content, ...)."""
        ...

    def forks(self, repo_id: str) -> list[ForkNode]:
        """Return the repos that name `repo_id` as their upstream."""
        ...


class WebServer(Protocol):
    """Protocol for the git-ssb web front end."""

    def serve(self, *, host: str, port: int, public: bool = False) -> None:
        """Serve until interrupted."""
        ...
