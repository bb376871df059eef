"""In-memory stand-ins for git and the SSB server."""

from __future__ import annotations

from typing import Any

from git_ssb.models import ForkNode


def make_id(char: str) -> str:
    return f"%{char * 43}=.sha256"


REPO_A = make_id("A")
REPO_B = make_id("B")
REPO_C = make_id("C")
REPO_D = make_id("D")
FEED = f"@{'F' * 43}=.ed25519"


class FakeRemoteTable:
    def __init__(
        self,
        remotes: dict[str, str] | None = None,
        *,
        branch: str | None = "feature",
        default_branches: dict[str, str] | None = None,
    ):
        self.remotes = dict(remotes or {})
        self.branch = branch
        self.default_branches = dict(default_branches or {})
        self.added: list[tuple[str, str]] = []

    def list_remotes(self) -> list[str]:
        return list(self.remotes)

    def has_remote(self, name: str) -> bool:
        return name in self.remotes

    def url_of(self, name: str) -> str | None:
        return self.remotes.get(name)

    def add_remote(self, name: str, url: str) -> None:
        self.remotes[name] = url
        self.added.append((name, url))

    def current_branch(self) -> str | None:
        return self.branch

    def default_branch(self, url: str) -> str | None:
        return self.default_branches.get(url)


class FakeSsbClient:
    def __init__(
        self,
        *,
        messages: dict[str, dict[str, Any]] | None = None,
        forks: dict[str, list[str]] | None = None,
    ):
        self.messages = dict(messages or {})
        self.fork_map = dict(forks or {})
        self.published: list[dict[str, Any]] = []
        self._next = iter("MNOPQRSTUVWXYZ")

    def create_repo(self, *, upstream: str | None = None) -> str:
        content: dict[str, Any] = {"type": "git-repo"}
        if upstream:
            content["upstream"] = upstream
        return self.publish(content)

    def publish(self, message: dict[str, Any]) -> str:
        key = make_id(next(self._next))
        self.published.append(message)
        self.messages[key] = {"author": FEED, "content": message}
        return key

    def get(self, message_id: str) -> dict[str, Any]:
        return self.messages.get(message_id, {"content": {"type": "git-repo"}})

    def forks(self, repo_id: str) -> list[ForkNode]:
        return [ForkNode(repo_id=child, author=FEED) for child in self.fork_map.get(repo_id, [])]


class CountingConnect:
    """Callable handing out one client while counting connections."""

    def __init__(self, client: FakeSsbClient | None = None):
        self.client = client or FakeSsbClient()
        self.calls = 0

    def __call__(self) -> FakeSsbClient:
        self.calls += 1
        return self.client


class FakeWebServer:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def serve(self, *, host: str, port: int, public: bool = False) -> None:
        self.calls.append({"host": host, "port": port, "public": public})
