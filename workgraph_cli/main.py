"""workgraph CLI: entry-point for all graph operations.

Usage:
    workgraph <action> <resource> [options]

Actions and resources:
    ad  g|w|e|r|c   create
    li  g|w|e|r|c   list
    de  g|w|e|r|c   delete
    up  w|c         update a work / restore a checkpoint

Resources: g=graph, w=work, e=event, r=relation, c=checkpoint.

Example:
    workgraph ad g -gn=demo
    workgraph ad w -gi=1 -wc="task A" -ws=1 -wp=2 -wrp=alice,bob
    workgraph li e -gi=1 -of=7
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Optional

import typer

from workgraph.config import Settings

from workgraph_cli.commands.add import add_app
from workgraph_cli.commands.delete import delete_app
from workgraph_cli.commands.listing import list_app
from workgraph_cli.commands.update import update_app

app = typer.Typer(
    name="workgraph",
    help="Track graphs of works, their relations and event logs.",
    no_args_is_help=True,
)

app.add_typer(add_app, name="ad")
app.add_typer(list_app, name="li")
app.add_typer(delete_app, name="de")
app.add_typer(update_app, name="up")


@app.callback()
def configure(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None, "-dd", "--data-dir", help="Data storage dir (overrides WORKGRAPH_DATA_DIR)."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (overrides WORKGRAPH_LOG_LEVEL)."
    ),
) -> None:
    """Build the settings for this invocation and set up logging."""
    config = Settings()
    if data_dir is not None:
        config.data_dir = data_dir
    if log_level:
        config.log_level = log_level

    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level {config.log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = config


def _click_exceptions(command: Any) -> ModuleType:
    """Return the ``exceptions`` module of the click that *command* is built on.

    Newer typer releases bundle their own copy of click, so the standalone
    ``click`` package does not necessarily raise the errors seen here.
    """
    for cls in type(command).__mro__:
        if cls.__name__ == "Command" and not cls.__module__.startswith("typer.core"):
            package = cls.__module__.rpartition(".")[0]
            return importlib.import_module(f"{package}.exceptions")
    raise RuntimeError(f"{type(command).__name__} is not a click command")


def main(argv: Optional[list[str]] = None) -> None:
    """Console-script entry point.

    Exit codes: 0 on completion (failed operations print a message but still
    exit 0), 1 on argument errors or when the store cannot be opened.
    """
    exceptions = _click_exceptions(typer.main.get_command(app))
    try:
        rv = app(args=argv, prog_name="workgraph", standalone_mode=False)
    except exceptions.ClickException as exc:
        exc.show()
        sys.exit(1)
    except exceptions.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
