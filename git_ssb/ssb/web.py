"""Run the git-ssb-web server."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from ..exceptions import SsbClientError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 7718


def parse_listen_address(value: str | None) -> tuple[str, int]:
    """Parse `[<host>][:<port>]`, filling in localhost:7718."""

    if not value:
        return DEFAULT_HOST, DEFAULT_PORT
    host, sep, port_text = value.rpartition(":")
    if not sep:
        return value, DEFAULT_PORT
    host = host.strip("[]") or DEFAULT_HOST
    if not port_text:
        return host, DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValidationError(f"Invalid port in '{value}'") from exc
    if not 0 < port < 65536:
        raise ValidationError(f"Port out of range in '{value}'")
    return host, port


class GitSsbWebServer:
    """WebServer that execs the `git-ssb-web` command in the foreground."""

    def __init__(self, command: str = "git-ssb-web", appname: str | None = None):
        self.command = command
        self.appname = appname

    def serve(self, *, host: str, port: int, public: bool = False) -> None:
        if not shutil.which(self.command):
            raise SsbClientError(f"{self.command} command not found. Install git-ssb-web first.")
        cmd = [self.command, f"{host}:{port}"]
        if public:
            cmd.append("--public")
        env = None
        if self.appname:
            env = {**os.environ, "ssb_appname": self.appname}
        logger.debug("Running command: %s", " ".join(cmd))
        result = subprocess.run(cmd, check=False, env=env)
        if result.returncode != 0:
            raise SsbClientError(f"{self.command} exited with code {result.returncode}")
