"""Adapters for Secure Scuttlebutt collaborators."""

from .protocol import SsbClient, WebServer
from .sbot_cli import SbotCliClient
from .web import GitSsbWebServer

__all__ = ["GitSsbWebServer", "SbotCliClient", "SsbClient", "WebServer"]
