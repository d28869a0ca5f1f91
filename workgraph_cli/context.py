"""Per-invocation state for the workgraph CLI.

The root callback stores a :class:`~workgraph.config.Settings` on
``ctx.obj``; commands open the store through :func:`repository`.
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterator

import typer

from workgraph.config import Settings
from workgraph.errors import StoreError, WorkGraphError
from workgraph.store import GraphRepository, open_repository


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings built by the root callback (defaults if absent)."""
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return Settings()


@contextmanager
def repository(ctx: typer.Context) -> Iterator[GraphRepository]:
    """Open the store for one command and close it afterwards.

    A store that cannot be opened ends the process with exit code 1.
    """
    config = get_settings(ctx)
    try:
        conn, repo = open_repository(config)
    except StoreError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        yield repo
    finally:
        conn.close()


def report_errors(func: Callable) -> Callable:
    """Decorator for commands whose failures are reported, not fatal.

    A :class:`~workgraph.errors.WorkGraphError` is printed to stderr and the
    command returns normally, so the exit code stays 0.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except WorkGraphError as exc:
            typer.echo(f"❌ {exc}", err=True)
            return None

    return wrapper
