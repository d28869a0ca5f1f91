"""Whole-graph persistence on top of :class:`~workgraph.store.kv.KVStore`.

Key conventions::

    graph-<id>                       one full graph document
    checkpoint-<graph_id>-<cp_id>    a frozen copy of a graph document
"""

from __future__ import annotations

import logging

from workgraph.errors import (
    CheckpointNotFound,
    EmptyGraphName,
    GraphNotFound,
    KeyNotFound,
    MalformedDocument,
)
from workgraph.store import codec
from workgraph.store.kv import KVStore
from workgraph.store.models import Checkpoint, Graph

logger = logging.getLogger("workgraph.store.graphs")

GRAPH_PREFIX = "graph-"
CHECKPOINT_PREFIX = "checkpoint-"


def graph_key(graph_id: int) -> str:
    return f"{GRAPH_PREFIX}{graph_id}"


def checkpoint_key(graph_id: int, checkpoint_id: int) -> str:
    return f"{CHECKPOINT_PREFIX}{graph_id}-{checkpoint_id}"


class GraphRepository:
    """Load, save, delete and list graphs stored in a :class:`KVStore`."""

    def __init__(self, store: KVStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Graphs
    # ------------------------------------------------------------------

    def list_graphs(self) -> list[Graph]:
        """Return every stored graph, ordered by id.

        Decoding is fail-fast: one malformed document aborts the listing.

        Raises:
            MalformedDocument: A stored graph could not be decoded.  The
                message names the offending key.
        """
        graphs: list[Graph] = []
        for key, value in self.store.scan_prefix(GRAPH_PREFIX):
            try:
                graphs.append(codec.loads(value))
            except MalformedDocument as exc:
                raise type(exc)(f"{key.decode('utf-8', 'replace')}: {exc}") from exc
        graphs.sort(key=lambda g: g.id)
        return graphs

    def get_graph(self, graph_id: int) -> Graph:
        """Fetch one graph.

        Raises:
            GraphNotFound: No graph is stored under ``graph-<graph_id>``.
        """
        try:
            data = self.store.get(graph_key(graph_id))
        except KeyNotFound:
            raise GraphNotFound(graph_id) from None
        return codec.loads(data)

    def save_graph(self, graph: Graph) -> None:
        """Encode *graph* and replace whatever was stored at its key."""
        self.store.put(graph_key(graph.id), codec.dumps(graph))
        logger.debug("saved graph %d (%d works)", graph.id, len(graph.works))

    def delete_graph(self, graph_id: int) -> None:
        """Remove a graph and its checkpoints.

        Deleting a missing graph is not an error.  Checkpoints go with the
        graph because its id is free for reuse by the next ``create_graph``.
        """
        stale = [key for key, _ in self.store.scan_prefix(f"{CHECKPOINT_PREFIX}{graph_id}-")]
        for key in stale:
            self.store.delete(key)
        self.store.delete(graph_key(graph_id))
        if stale:
            logger.debug("dropped %d checkpoints of graph %d", len(stale), graph_id)

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def list_checkpoints(self, graph_id: int) -> list[Checkpoint]:
        checkpoints = [
            codec.decode_checkpoint(codec.from_bytes(value))
            for _, value in self.store.scan_prefix(f"{CHECKPOINT_PREFIX}{graph_id}-")
        ]
        checkpoints.sort(key=lambda c: c.id)
        return checkpoints

    def get_checkpoint(self, graph_id: int, checkpoint_id: int) -> Checkpoint:
        try:
            data = self.store.get(checkpoint_key(graph_id, checkpoint_id))
        except KeyNotFound:
            raise CheckpointNotFound(graph_id, checkpoint_id) from None
        return codec.decode_checkpoint(codec.from_bytes(data))

    def save_checkpoint(self, checkpoint: Checkpoint) -> None:
        self.store.put(
            checkpoint_key(checkpoint.graph_id, checkpoint.id),
            codec.to_bytes(codec.encode_checkpoint(checkpoint)),
        )

    def delete_checkpoint(self, graph_id: int, checkpoint_id: int) -> None:
        self.store.delete(checkpoint_key(graph_id, checkpoint_id))


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def next_id(ids) -> int:
    """Allocate ``1 + max(ids)``, or ``1`` for an empty collection."""
    return max(ids, default=0) + 1


def create_graph(repo: GraphRepository, name: str) -> Graph:
    """Create and persist an empty graph named *name*.

    Raises:
        EmptyGraphName: *name* is empty.
    """
    if not name:
        raise EmptyGraphName()
    graph = Graph(id=next_id(g.id for g in repo.list_graphs()), name=name)
    repo.save_graph(graph)
    logger.info("created graph %d %r", graph.id, graph.name)
    return graph
