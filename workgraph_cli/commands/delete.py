"""``de``: delete graphs, works, events, relations and checkpoints."""

from __future__ import annotations

import typer

from workgraph.store import checkpoints, events, relations, works

from workgraph_cli.context import report_errors, repository

delete_app = typer.Typer(help="Delete a graph, work, event, relation or checkpoint.", no_args_is_help=True)


@delete_app.command("g")
@report_errors
def delete_graph(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
) -> None:
    """Delete a graph and its checkpoints.  Deleting a missing graph succeeds."""
    with repository(ctx) as repo:
        repo.delete_graph(graph_id)
    typer.echo("✅ delete graph success!")


@delete_app.command("w")
@report_errors
def delete_work(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    work_id: int = typer.Option(..., "-wi", "--work-id", help="Work id."),
) -> None:
    """Delete a work and its events."""
    with repository(ctx) as repo:
        works.delete_work(repo, graph_id, work_id)
    typer.echo("✅ delete work success")


@delete_app.command("e")
@report_errors
def delete_event(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    work_id: int = typer.Option(..., "-wi", "--work-id", help="Work id."),
    event_id: int = typer.Option(..., "-ei", "--event-id", help="Event id."),
) -> None:
    """Delete an event from a work."""
    with repository(ctx) as repo:
        removed = events.delete_event(repo, graph_id, work_id, event_id)
    if removed is None:
        typer.echo("⚠️  no such event, nothing deleted")
    else:
        typer.echo("✅ delete event success!")


@delete_app.command("r")
@report_errors
def delete_relation(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    relation_id: int = typer.Option(..., "-ri", "--relation-id", help="Relation id."),
) -> None:
    """Delete a relation."""
    with repository(ctx) as repo:
        relations.delete_relation(repo, graph_id, relation_id)
    typer.echo("✅ delete relation success")


@delete_app.command("c")
@report_errors
def delete_checkpoint(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    checkpoint_id: int = typer.Option(..., "-ci", "--checkpoint-id", help="Checkpoint id."),
) -> None:
    """Delete a checkpoint."""
    with repository(ctx) as repo:
        checkpoints.delete_checkpoint(repo, graph_id, checkpoint_id)
    typer.echo("✅ delete checkpoint success")
