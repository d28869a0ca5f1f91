"""``up``: update a work, or roll a graph back to a checkpoint."""

from __future__ import annotations

from typing import Optional

import typer

from workgraph.store import checkpoints, works
from workgraph.store.models import Status

from workgraph_cli.context import report_errors, repository

update_app = typer.Typer(help="Update a work or restore a checkpoint.", no_args_is_help=True)


@update_app.command("w")
@report_errors
def update_work(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    work_id: int = typer.Option(..., "-wi", "--work-id", help="Work id."),
    content: str = typer.Option("", "-wc", "--content", help="New content."),
    status: Optional[int] = typer.Option(None, "-ws", "--status", min=0, max=2, help="0=start 1=doing 2=end."),
    priority: Optional[int] = typer.Option(None, "-wp", "--priority", help="New priority."),
    people: str = typer.Option("", "-wrp", "--related-people", help="Replace related people (comma separated)."),
) -> None:
    """Update a work.  Options left out keep their current value."""
    with repository(ctx) as repo:
        works.update_work(
            repo,
            graph_id,
            work_id,
            content=content,
            status=Status(status) if status is not None else None,
            priority=priority,
            related_people=people,
        )
    typer.echo("✅ update work success!")


@update_app.command("c")
@report_errors
def restore_checkpoint(
    ctx: typer.Context,
    graph_id: int = typer.Option(..., "-gi", "--graph-id", help="Graph id."),
    checkpoint_id: int = typer.Option(..., "-ci", "--checkpoint-id", help="Checkpoint id."),
) -> None:
    """Restore a graph from one of its checkpoints."""
    with repository(ctx) as repo:
        checkpoints.restore_checkpoint(repo, graph_id, checkpoint_id)
    typer.echo(f"✅ graph {graph_id} restored from checkpoint {checkpoint_id}")
