"""Utilities for rendering graphs, works and events as console tables.

Column widths come from ``rich``, which measures East Asian wide characters
correctly.  Cell text is wrapped in :class:`rich.text.Text` so user content
is never parsed as console markup.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from workgraph.store.codec import format_timestamp
from workgraph.store.models import Checkpoint, Event, Graph, Relation, Work, WorkEvents


def _table(*columns: str, caption: Text | None = None) -> Table:
    table = Table(caption=caption, show_header=True, header_style="bold")
    for name in columns:
        table.add_column(name)
    return table


def graphs_table(graphs: Iterable[Graph]) -> Table:
    table = _table("id", "graph_name")
    for g in graphs:
        table.add_row(str(g.id), Text(g.name))
    return table


def works_table(works: Iterable[Work]) -> Table:
    table = _table("id", "priority", "status", "updated_at", "events", "content", "people")
    for w in works:
        table.add_row(
            str(w.id),
            str(w.priority),
            str(int(w.status)),
            format_timestamp(w.updated_at),
            str(len(w.events)),
            Text(w.content),
            Text(",".join(w.related_people)),
        )
    return table


def events_table(work: Work, events: Iterable[Event]) -> Table:
    """Events of a single work, captioned with the work itself."""
    table = _table(
        "id",
        "created_at",
        "content",
        caption=Text(f"work-id={work.id}     work-content={work.content}"),
    )
    for e in events:
        table.add_row(str(e.id), format_timestamp(e.created_at), Text(e.content))
    return table


def recent_events_table(groups: Iterable[WorkEvents]) -> Table:
    table = _table("work-id", "work-content", "event-id", "event-created-at", "event-content")
    for group in groups:
        for e in group.events:
            table.add_row(
                str(group.work_id),
                Text(group.content),
                str(e.id),
                format_timestamp(e.created_at),
                Text(e.content),
            )
    return table


def relations_table(relations: Iterable[Relation]) -> Table:
    table = _table("id", "w1", "w2", "description")
    for r in relations:
        table.add_row(str(r.id), str(r.w1), str(r.w2), Text(r.description))
    return table


def checkpoints_table(checkpoints: Iterable[Checkpoint]) -> Table:
    table = _table("id", "created_at", "graph_name", "works")
    for c in checkpoints:
        table.add_row(
            str(c.id),
            format_timestamp(c.created_at),
            Text(c.graph.name),
            str(len(c.graph.works)),
        )
    return table


def print_table(table: Table) -> None:
    """Print *table* to the current ``sys.stdout``."""
    Console().print(table)
