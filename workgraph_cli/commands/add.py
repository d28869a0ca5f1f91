"""``ad``: create graphs, works, events, relations and checkpoints."""

from __future__ import annotations

import typer

from workgraph.errors import EmptyGraphName
from workgraph.store import checkpoints, events, relations, works
from workgraph.store.graphs import create_graph
from workgraph.store.models import Status

from workgraph_cli.context import report_errors, repository

add_app = typer.Typer(help="Create a graph, work, event, relation or checkpoint.", no_args_is_help=True)


@add_app.command("g")
@report_errors
def add_graph(
    ctx: typer.Context,
    name: str = typer.Option("", "-gn", "--graph-name", help="Graph name."),
) -> None:
    """Create a graph."""
    with repository(ctx) as repo:
        try:
            graph = create_graph(repo, name)
        except EmptyGraphName:
            typer.echo("❌ empty graph name", err=True)
            raise typer.Exit(code=1)
    typer.echo(f"✅ create graph success: {graph.id}  name={graph.name!r}")


@add_app.command("w")
@report_errors
def add_work(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    content: str = typer.Option("", "-wc", "--content", help="Work content."),
    status: int = typer.Option(0, "-ws", "--status", min=0, max=2, help="0=start 1=doing 2=end."),
    priority: int = typer.Option(0, "-wp", "--priority", help="Work priority."),
    people: str = typer.Option("", "-wrp", "--related-people", help="Comma separated related people."),
) -> None:
    """Create a work in a graph."""
    with repository(ctx) as repo:
        work = works.create_work(repo, graph_id, content, Status(status), priority, people)
    typer.echo(f"✅ create work success: {work.id}")


@add_app.command("e")
@report_errors
def add_event(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    work_id: int = typer.Option(..., "-wi", "--work-id", help="Work id."),
    content: str = typer.Option("", "-ec", "--content", help="Event content."),
) -> None:
    """Log an event on a work."""
    with repository(ctx) as repo:
        event = events.create_event(repo, graph_id, work_id, content)
    typer.echo(f"✅ create event success: {event.id}")


@add_app.command("r")
@report_errors
def add_relation(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    w1: int = typer.Option(..., "-w1", "--from", help="Source work id."),
    w2: int = typer.Option(..., "-w2", "--to", help="Target work id."),
    description: str = typer.Option("", "-rd", "--description", help="Relation label."),
) -> None:
    """Relate two works of a graph."""
    with repository(ctx) as repo:
        relation = relations.create_relation(repo, graph_id, w1, w2, description)
    typer.echo(f"✅ create relation success: {relation.id}")


@add_app.command("c")
@report_errors
def add_checkpoint(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
) -> None:
    """Snapshot a graph."""
    with repository(ctx) as repo:
        checkpoint = checkpoints.create_checkpoint(repo, graph_id)
    typer.echo(f"✅ create checkpoint success: {checkpoint.id}")
