"""Typer CLI entrypoint for git-ssb."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

import click
import typer
from rich.console import Console
from rich.tree import Tree
from typer.core import TyperGroup

from . import __version__
from .config import RuntimeConfig, load_config
from .exceptions import ArityError, GitSsbError, UnknownCommandError, UsageError, ValidationError
from .git import GitRemoteTable, RemoteTable
from .models import ForkNode, PullRequest
from .service import DEFAULT_REMOTE_NAME, GitSsbService
from .ssb import GitSsbWebServer, SbotCliClient, SsbClient, WebServer
from .ssb.web import parse_listen_address

PROG = "git ssb"

USAGE_EXIT_CODE = 1
# Wrong arity for fork/name only prints the command help and exits 0, unlike
# other usage errors which exit 1.
ARITY_EXIT_CODE = 0
ABORT_EXIT_CODE = 130

logger = logging.getLogger(__name__)


class GitSsbGroup(TyperGroup):
    """Command group that reports unknown verbs as UnknownCommandError."""

    def resolve_command(self, ctx: click.Context, args: list[str]) -> Any:
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            raise UnknownCommandError(args[0])
        return super().resolve_command(ctx, args)


app = typer.Typer(
    cls=GitSsbGroup,
    help="Manage git repos stored on Secure Scuttlebutt.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@dataclass
class AppState:
    remotes: RemoteTable
    connect: Callable[[], SsbClient]
    web: WebServer
    console: Console
    verbose: bool = False

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> AppState:
        return cls(
            remotes=GitRemoteTable(),
            connect=lambda: SbotCliClient(config.sbot_command, appname=config.appname),
            web=GitSsbWebServer(config.web_command, appname=config.appname),
            console=Console(),
        )

    def service(self) -> GitSsbService:
        return GitSsbService(remotes=self.remotes, connect=self.connect)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-ssb {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-ssb version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = AppState.from_config(load_config())
    ctx.obj.verbose = verbose
    if ctx.invoked_subcommand is None:
        print_command_help(None)
        raise typer.Exit(0)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


@app.command(help="Create a git-ssb repo and add it as a git remote")
def create(
    ctx: typer.Context,
    remote_name: str = typer.Argument(DEFAULT_REMOTE_NAME, help="Name of the remote to add."),
) -> None:
    state = _require_state(ctx)
    url = state.service().create(remote_name)
    typer.echo(url)


@app.command(help="Fork a git-ssb repo and add the fork as a git remote")
def fork(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        metavar="[UPSTREAM] REMOTE_NAME",
        help="Id, url or git remote name of the repo to fork (default: 'origin' or 'ssb'), "
        "then the name for the new remote.",
        show_default=False,
    ),
) -> None:
    state = _require_state(ctx)
    url = state.service().fork(args or [])
    typer.echo(url)


@app.command(help="List repos that are forks of a repo")
def forks(
    ctx: typer.Context,
    repo: str | None = typer.Argument(
        None,
        help="Id, url or git remote name of the base repo (default: 'origin' or 'ssb').",
        show_default=False,
    ),
) -> None:
    state = _require_state(ctx)
    root = state.service().forks(repo)
    if not root.forks:
        state.console.print(f"No forks of {root.repo_id}")
        return
    state.console.print(_fork_tree(root))


@app.command(help="Publish a name for a git-ssb repo")
def name(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        metavar="[REPO] NAME",
        help="Id, url or git remote name of the repo (default: 'origin' or 'ssb'), "
        "then the name to give it.",
        show_default=False,
    ),
) -> None:
    state = _require_state(ctx)
    key = state.service().name(args or [])
    typer.echo(key)


@app.command("pull-request", help="Request that changes from <head> be merged into <base>")
def pull_request(
    ctx: typer.Context,
    base: str | None = typer.Option(
        None,
        "-b",
        "--base",
        help="Base in the form [<repo>:]<branch>. Defaults to the upstream of <head>, "
        "or <head>, and its default branch.",
    ),
    head: str | None = typer.Option(
        None,
        "-h",
        "--head",
        help="Head in the form [<repo>:]<branch>. Defaults to 'origin' or 'ssb' "
        "and the current branch.",
    ),
    message: str | None = typer.Option(None, "-m", "--message", help="Text of the pull request."),
    file: Path | None = typer.Option(
        None,
        "-F",
        "--file",
        help="File to read the pull request text from ('-' for stdin).",
        dir_okay=False,
    ),
) -> None:
    state = _require_state(ctx)
    if message is not None and file is not None:
        raise UsageError("pull-request", "Use only one of -m and -F.")
    service = state.service()
    request = service.resolve_pull_request(head=head, base=base)
    if message is None:
        message = _read_message_file(file) if file is not None else _edit_message(request)
    request, key = service.publish_pull_request(request, message)
    logger.info("Published pull request %s", request.summary)
    typer.echo(key)


@app.command(help="Serve a web server for repos")
def web(
    ctx: typer.Context,
    listen: str | None = typer.Argument(
        None,
        metavar="[HOST:PORT]",
        help="Address to bind to (default: localhost:7718).",
        show_default=False,
    ),
    public: bool = typer.Option(False, "--public", help="Make the instance read-only."),
) -> None:
    state = _require_state(ctx)
    host, port = parse_listen_address(listen)
    state.web.serve(host=host, port=port, public=public)


@app.command("help", help="Get help about a command")
def help_(
    command: str | None = typer.Argument(None, help="Command to get help with.", show_default=False),
) -> None:
    print_command_help(command)


@app.command(help="Show the git-ssb version")
def version() -> None:
    typer.echo(f"git-ssb {__version__}")


def print_command_help(command: str | None) -> None:
    group = typer.main.get_command(app)
    root = click.Context(group, info_name=PROG)
    if command is None:
        target, target_ctx = group, root
    else:
        target = group.get_command(root, command)  # type: ignore[attr-defined]
        if target is None:
            raise ValidationError(f"No help for command '{command}'")
        target_ctx = click.Context(target, info_name=command, parent=root)
    text = target.get_help(target_ctx)
    # Rich help is printed directly and returns no text.
    if text:
        typer.echo(text)


def _read_message_file(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text()
    except OSError as exc:
        raise ValidationError(f"Unable to read {path}: {exc}") from exc


def _edit_message(request: PullRequest) -> str:
    template = "\n".join(
        [
            "",
            "# Enter the title of the pull request on the first line,",
            "# followed by a blank line and a description.",
            "# Lines starting with '#' are ignored.",
            f"# head: {request.head_repo}:{request.head_branch}",
            f"# base: {request.repo}:{request.branch}",
            "",
        ]
    )
    edited = typer.edit(template, extension=".md") or ""
    return "\n".join(line for line in edited.splitlines() if not line.startswith("#"))


def _fork_tree(root: ForkNode) -> Tree:
    tree = Tree(_fork_label(root))
    _add_forks(tree, root)
    return tree


def _add_forks(branch: Tree, node: ForkNode) -> None:
    for child in node.forks:
        _add_forks(branch.add(_fork_label(child)), child)


def _fork_label(node: ForkNode) -> str:
    if node.author:
        return f"[bold]{node.repo_id}[/bold] [dim]{node.author}[/dim]"
    return f"[bold]{node.repo_id}[/bold]"


def _fail(message: str) -> None:
    typer.secho(f"{PROG}: {message}", err=True, fg=typer.colors.RED)


def run(argv: Sequence[str] | None = None, *, state: AppState | None = None) -> int:
    """Dispatch a command line and return the process exit code."""

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        result = app(args=args, prog_name=PROG, standalone_mode=False, obj=state)
    except ArityError as exc:
        logger.debug("%s", exc)
        print_command_help(exc.command)
        return ARITY_EXIT_CODE
    except UsageError as exc:
        _fail(str(exc))
        print_command_help(exc.command)
        return USAGE_EXIT_CODE
    except GitSsbError as exc:
        _fail(str(exc))
        return 1
    except click.exceptions.Abort:
        return ABORT_EXIT_CODE
    except click.ClickException as exc:
        _fail(exc.format_message())
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["AppState", "app", "run"]
