"""sbot CLI adapter - shells out to the ssb-server `sbot` command."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from typing import Any, Sequence

from ..exceptions import SsbClientError
from ..models import ForkNode
from . import refs, schemas

logger = logging.getLogger(__name__)


class SbotCliClient:
    """SsbClient that talks to a running ssb-server through its CLI."""

    def __init__(self, command: str = "sbot", appname: str | None = None):
        if not shutil.which(command):
            raise SsbClientError(
                f"{command} command not found. Install ssb-server and make sure it is running."
            )
        self.command = command
        self.appname = appname

    def create_repo(self, *, upstream: str | None = None) -> str:
        return self.publish(schemas.repo_message(upstream))

    def publish(self, message: dict[str, Any]) -> str:
        # "." makes sbot read the message as JSON from stdin, so values are not
        # reinterpreted as numbers or booleans the way flags would be.
        output = self._run(["publish", "."], input_text=json.dumps(message))
        data = _single(output)
        key = data.get("key")
        if not key:
            raise SsbClientError(f"sbot publish returned no key: {output.strip()}")
        return str(key)

    def get(self, message_id: str) -> dict[str, Any]:
        return _single(self._run(["get", message_id]))

    def forks(self, repo_id: str) -> list[ForkNode]:
        output = self._run(["links", "--dest", repo_id, "--rel", "upstream", "--values"])
        nodes: list[ForkNode] = []
        for link in parse_json_stream(output):
            content = (link.get("value") or {}).get("content") or {}
            if content.get("type") != schemas.REPO_TYPE:
                continue
            source = link.get("source")
            author = source if isinstance(source, str) and refs.is_feed_id(source) else None
            nodes.append(ForkNode(repo_id=link["key"], author=author))
        return nodes

    def _run(self, args: Sequence[str], *, input_text: str | None = None) -> str:
        cmd = [self.command, *args]
        env = None
        if self.appname:
            env = {**os.environ, "ssb_appname": self.appname}
        logger.debug("Running command: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
                check=True,
                env=env,
            )
        except subprocess.CalledProcessError as e:
            error_msg = f"sbot command failed with exit code {e.returncode}"
            if e.stderr:
                error_msg += f"\nError: {e.stderr.strip()}"
            raise SsbClientError(error_msg) from e
        except FileNotFoundError:
            raise SsbClientError(f"{self.command} command not found") from None
        return result.stdout


def parse_json_stream(text: str) -> list[dict[str, Any]]:
    """Decode the whitespace-separated JSON values sbot prints for streams."""

    decoder = json.JSONDecoder()
    items: list[dict[str, Any]] = []
    index = 0
    length = len(text)
    while True:
        while index < length and text[index].isspace():
            index += 1
        if index >= length:
            return items
        try:
            value, index = decoder.raw_decode(text, index)
        except json.JSONDecodeError as e:
            raise SsbClientError(f"Invalid JSON from sbot: {e}") from e
        if isinstance(value, dict):
            items.append(value)


def _single(output: str) -> dict[str, Any]:
    if not output.strip():
        raise SsbClientError("Empty response from sbot")
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise SsbClientError(f"Invalid JSON response: {e}\nOutput: {output}") from e
    if not isinstance(data, dict):
        raise SsbClientError(f"Unexpected response from sbot: {output.strip()}")
    return data
