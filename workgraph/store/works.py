"""Create / update / delete / list works inside a graph.

Every operation loads the whole graph, changes it in memory and saves the
whole graph back.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from workgraph.errors import EmptyContent, WorkNotFound
from workgraph.store.graphs import GraphRepository, next_id
from workgraph.store.models import Status, Work, now as _now

logger = logging.getLogger("workgraph.store.works")


def split_people(csv: str) -> list[str]:
    """Split a comma separated list of names.

    No trimming and no escaping: ``"alice, bob"`` yields ``["alice", " bob"]``.
    An empty string yields an empty list.
    """
    return csv.split(",") if csv else []


def create_work(
    repo: GraphRepository,
    graph_id: int,
    content: str,
    status: Status = Status.START,
    priority: int = 0,
    related_people: str = "",
    now: Optional[datetime] = None,
) -> Work:
    """Append a new work to a graph and return it.

    Args:
        repo: Graph repository.
        graph_id: Target graph.
        content: Work description.  Must be non-empty.
        status: Initial status.
        priority: Initial priority.
        related_people: Comma separated names.
        now: Override the ``updated_at`` timestamp.

    Raises:
        EmptyContent: *content* is empty.
        GraphNotFound: The graph does not exist.
    """
    if not content:
        raise EmptyContent("work content")

    graph = repo.get_graph(graph_id)
    work = Work(
        id=next_id(graph.works),
        content=content,
        status=Status(status),
        priority=priority,
        related_people=split_people(related_people),
        updated_at=now or _now(),
    )
    graph.works[work.id] = work
    repo.save_graph(graph)
    return work


def update_work(
    repo: GraphRepository,
    graph_id: int,
    work_id: int,
    content: Optional[str] = None,
    status: Optional[Status] = None,
    priority: Optional[int] = None,
    related_people: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Work:
    """Update selected fields of a work.

    ``None`` (or an empty string for *content* / *related_people*) leaves a
    field unchanged.  ``status=Status.START`` and ``priority=0`` are applied
    like any other value.  A non-empty *related_people* replaces the whole
    list.  ``updated_at`` is always refreshed.

    Raises:
        GraphNotFound: The graph does not exist.
        WorkNotFound: The graph has no work *work_id*.
    """
    graph = repo.get_graph(graph_id)
    current = graph.works.get(work_id)
    if current is None:
        raise WorkNotFound(graph_id, work_id)

    changes: dict = {"updated_at": now or _now()}
    if content:
        changes["content"] = content
    if status is not None:
        changes["status"] = Status(status)
    if priority is not None:
        changes["priority"] = priority
    if related_people:
        changes["related_people"] = split_people(related_people)

    updated = replace(current, **changes)
    graph.works[work_id] = updated
    repo.save_graph(graph)
    return updated


def delete_work(repo: GraphRepository, graph_id: int, work_id: int) -> Work:
    """Remove a work (with its events) and return it.

    Raises:
        WorkNotFound: The graph has no work *work_id*.
    """
    graph = repo.get_graph(graph_id)
    work = graph.works.pop(work_id, None)
    if work is None:
        raise WorkNotFound(graph_id, work_id)
    repo.save_graph(graph)
    logger.info("deleted work %d from graph %d", work_id, graph_id)
    return work


def get_work(repo: GraphRepository, graph_id: int, work_id: int) -> Work:
    graph = repo.get_graph(graph_id)
    try:
        return graph.works[work_id]
    except KeyError:
        raise WorkNotFound(graph_id, work_id) from None


def list_works(repo: GraphRepository, graph_id: int) -> list[Work]:
    """Return the works of a graph sorted by ascending id."""
    graph = repo.get_graph(graph_id)
    return sorted(graph.works.values(), key=lambda w: w.id)
