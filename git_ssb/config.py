"""Runtime configuration from the environment and git config."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .exceptions import GitEnvironmentError
from .git import config_get

logger = logging.getLogger(__name__)

APPNAME_ENV = "ssb_appname"
APPNAME_GIT_KEY = "ssb.appname"


@dataclass(frozen=True)
class RuntimeConfig:
    """Settings handed to the SSB collaborators."""

    appname: str | None = None
    sbot_command: str = "sbot"
    web_command: str = "git-ssb-web"


def load_config() -> RuntimeConfig:
    return RuntimeConfig(
        appname=resolve_appname(),
        sbot_command=os.getenv("GIT_SSB_SBOT", RuntimeConfig.sbot_command),
        web_command=os.getenv("GIT_SSB_WEB", RuntimeConfig.web_command),
    )


def resolve_appname() -> str | None:
    """Pick the SSB app name: `ssb_appname` wins over `git config ssb.appname`."""

    if APPNAME_ENV in os.environ:
        return os.environ[APPNAME_ENV] or None
    try:
        return config_get(APPNAME_GIT_KEY) or None
    except GitEnvironmentError:
        logger.debug("git unavailable, using the default ssb app name")
        return None


__all__ = ["RuntimeConfig", "load_config", "resolve_appname"]
