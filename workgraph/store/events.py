"""Operations on the event log of a work."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from workgraph.errors import EmptyContent, WorkNotFound
from workgraph.store.graphs import GraphRepository, next_id
from workgraph.store.models import Event, WorkEvents, now as _now
from workgraph.store.works import get_work

logger = logging.getLogger("workgraph.store.events")

SECONDS_PER_DAY = 24 * 3600


def create_event(
    repo: GraphRepository,
    graph_id: int,
    work_id: int,
    content: str,
    now: Optional[datetime] = None,
) -> Event:
    """Append an event to a work's log and return it.

    Raises:
        EmptyContent: *content* is empty.
        GraphNotFound: The graph does not exist.
        WorkNotFound: The graph has no work *work_id*.
    """
    if not content:
        raise EmptyContent("event content")

    graph = repo.get_graph(graph_id)
    work = graph.works.get(work_id)
    if work is None:
        raise WorkNotFound(graph_id, work_id)

    event = Event(
        id=next_id(e.id for e in work.events),
        content=content,
        created_at=now or _now(),
    )
    graph.works[work_id].events.append(event)
    repo.save_graph(graph)
    return event


def delete_event(
    repo: GraphRepository,
    graph_id: int,
    work_id: int,
    event_id: int,
) -> Optional[Event]:
    """Remove an event from a work's log.

    A missing work or event is not an error; the graph is saved either way.
    Returns the removed event, or ``None`` when nothing matched.
    """
    graph = repo.get_graph(graph_id)
    removed: Optional[Event] = None
    work = graph.works.get(work_id)
    if work is not None:
        kept = [e for e in work.events if e.id != event_id]
        if len(kept) != len(work.events):
            removed = next(e for e in work.events if e.id == event_id)
            work.events = kept

    if removed is None:
        logger.warning(
            "no event %d on work %d in graph %d; nothing deleted",
            event_id, work_id, graph_id,
        )
    repo.save_graph(graph)
    return removed


def list_events(repo: GraphRepository, graph_id: int, work_id: int) -> list[Event]:
    """Return the events of one work in the order they were logged."""
    return list(get_work(repo, graph_id, work_id).events)


def list_events_since(
    repo: GraphRepository,
    graph_id: int,
    offset_days: int,
    now: Optional[datetime] = None,
) -> list[WorkEvents]:
    """Collect events created less than *offset_days* days before *now*.

    Results are grouped per work (ascending work id) and keep each work's
    event order.  Works without a matching event are left out.
    """
    graph = repo.get_graph(graph_id)
    now = now or _now()
    window = timedelta(seconds=offset_days * SECONDS_PER_DAY)

    grouped: list[WorkEvents] = []
    for work in sorted(graph.works.values(), key=lambda w: w.id):
        recent = [e for e in work.events if now - e.created_at < window]
        if recent:
            grouped.append(WorkEvents(work_id=work.id, content=work.content, events=recent))
    return grouped
