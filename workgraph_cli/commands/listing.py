"""``li``: list graphs, works, events, relations and checkpoints."""

from __future__ import annotations

from typing import Optional

import typer

from workgraph.store import checkpoints, events, relations, works

from workgraph_cli.context import report_errors, repository
from workgraph_cli.rendering import (
    checkpoints_table,
    events_table,
    graphs_table,
    print_table,
    recent_events_table,
    relations_table,
    works_table,
)

list_app = typer.Typer(help="List graphs, works, events, relations or checkpoints.", no_args_is_help=True)


@list_app.command("g")
@report_errors
def list_graphs(ctx: typer.Context) -> None:
    """List all graphs."""
    with repository(ctx) as repo:
        graphs = repo.list_graphs()
    print_table(graphs_table(graphs))


@list_app.command("w")
@report_errors
def list_works(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
) -> None:
    """List the works of a graph by id."""
    with repository(ctx) as repo:
        rows = works.list_works(repo, graph_id)
    print_table(works_table(rows))


@list_app.command("e")
@report_errors
def list_events(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    work_id: Optional[int] = typer.Option(None, "-wi", "--work-id", help="Work id."),
    offset_days: int = typer.Option(
        -1, "-of", "--offset-days", help="Show events of the last N days across all works."
    ),
) -> None:
    """List the events of one work, or recent events across a graph."""
    if offset_days < 0 and work_id is None:
        raise typer.BadParameter("either -wi or -of is required")

    with repository(ctx) as repo:
        if offset_days >= 0:
            groups = events.list_events_since(repo, graph_id, offset_days)
            table = recent_events_table(groups)
        else:
            work = works.get_work(repo, graph_id, work_id)
            table = events_table(work, work.events)
    print_table(table)


@list_app.command("r")
@report_errors
def list_relations(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
) -> None:
    """List the relations of a graph."""
    with repository(ctx) as repo:
        rows = relations.list_relations(repo, graph_id)
    print_table(relations_table(rows))


@list_app.command("c")
@report_errors
def list_checkpoints(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
) -> None:
    """List the checkpoints of a graph."""
    with repository(ctx) as repo:
        rows = checkpoints.list_checkpoints(repo, graph_id)
    print_table(checkpoints_table(rows))
