"""Graph checkpoints: frozen copies of a graph kept under their own keys."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from workgraph.store.graphs import GraphRepository, next_id
from workgraph.store.models import Checkpoint, Graph, now as _now

logger = logging.getLogger("workgraph.store.checkpoints")


def create_checkpoint(
    repo: GraphRepository,
    graph_id: int,
    now: Optional[datetime] = None,
) -> Checkpoint:
    """Snapshot the current state of a graph.

    Raises:
        GraphNotFound: The graph does not exist.
    """
    graph = repo.get_graph(graph_id)
    checkpoint = Checkpoint(
        id=next_id(c.id for c in repo.list_checkpoints(graph_id)),
        graph_id=graph_id,
        created_at=now or _now(),
        graph=graph,
    )
    repo.save_checkpoint(checkpoint)
    return checkpoint


def list_checkpoints(repo: GraphRepository, graph_id: int) -> list[Checkpoint]:
    return repo.list_checkpoints(graph_id)


def delete_checkpoint(repo: GraphRepository, graph_id: int, checkpoint_id: int) -> None:
    """Remove a checkpoint.

    Raises:
        CheckpointNotFound: No such checkpoint.
    """
    # Existence check so a typo is reported instead of silently ignored.
    repo.get_checkpoint(graph_id, checkpoint_id)
    repo.delete_checkpoint(graph_id, checkpoint_id)


def restore_checkpoint(repo: GraphRepository, graph_id: int, checkpoint_id: int) -> Graph:
    """Replace the live graph with a checkpoint's copy and return it.

    Raises:
        CheckpointNotFound: No such checkpoint.  Deleting a graph also
            deletes its checkpoints, so a deleted graph cannot be restored.
    """
    checkpoint = repo.get_checkpoint(graph_id, checkpoint_id)
    repo.save_graph(checkpoint.graph)
    logger.info("restored graph %d from checkpoint %d", graph_id, checkpoint_id)
    return checkpoint.graph
