"""CLI for cargo-recent."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .api import crate_in, find_recent_crate, find_recent_crate_path
from .constants import LOG_LEVEL_ENV, USAGE_HINT
from .context import RepoContext
from .dispatch import build_cargo_command, format_command, run_cargo
from .errors import DownstreamFailureError, RecentError


app = typer.Typer(
    add_completion=False,
    help="""\
Show and operate on the most recently changed crate. The crate is picked
from uncommitted changes: the newest modified .rs or Cargo file decides.""",
)

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send cargo_recent debug logs to stderr when CARGO_RECENT_LOG is set."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not level_name:
        return

    package_logger = logging.getLogger("cargo_recent")
    level = logging.getLevelName(level_name)
    package_logger.setLevel(level if isinstance(level, int) else logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


def fail(error: object, code: int = 1) -> None:
    err_console.print(f"[red]✗[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
    raise typer.Exit(code)


def show_path() -> None:
    crate_path = find_recent_crate_path()
    # Empty line when nothing has changed
    typer.echo(str(crate_path) if crate_path else "")


def show_name() -> None:
    crate = find_recent_crate()
    typer.echo(crate.name if crate else "")


def run_external(args: List[str]) -> None:
    ctx = RepoContext()
    crate = crate_in(ctx)
    if crate is None:
        typer.echo("")
        return

    cmd = build_cargo_command(args, crate.name, cargo=ctx.config.cargo)
    # Shown as plain cargo even when $CARGO points elsewhere
    typer.echo(format_command(["cargo", *cmd[1:]]))
    run_cargo(cmd)


# No help option: "--help" after a cargo command belongs to cargo
@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def recent(
    ctx: typer.Context,
    command: Optional[List[str]] = typer.Argument(
        None,
        help="'path', 'show', or a cargo command to run on the recently changed crate",
    ),
):
    """Show the path or name of the recently changed crate, or run cargo on it.

    \b
      path            Show the path of the recently changed crate
      show            Show the name of the recently changed crate
      <cargo args>    Run `cargo <args> --package <crate>`
    """
    configure_logging()
    args = list(command or [])
    logger.debug("Current directory: %s", Path.cwd())
    logger.debug("Args: %s", args)

    if not args:
        console.print(USAGE_HINT, markup=False, highlight=False)
        return

    if args[0] in ("--help", "-h"):
        typer.echo(ctx.get_help())
        return

    if args[0] in ("path", "show") and len(args) > 1:
        fail(f"'{args[0]}' takes no arguments, got: {' '.join(args[1:])}")

    try:
        if args[0] == "path":
            show_path()
        elif args[0] == "show":
            show_name()
        else:
            run_external(args)
    except DownstreamFailureError as e:
        fail(e, e.returncode if e.returncode and e.returncode > 0 else 1)
    except RecentError as e:
        fail(e)


def main(argv: Optional[List[str]] = None):
    """Entry point for CLI.

    When run as ``cargo recent ...`` cargo passes ``recent`` as the first
    argument; it is dropped here.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "recent":
        args = args[1:]
    # click drops the first "--"; double it so cargo still receives one
    if "--" in args:
        args.insert(args.index("--"), "--")
    app(args=args, prog_name="cargo recent")


if __name__ == "__main__":
    main()
