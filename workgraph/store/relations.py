"""Relations between works of one graph.

Endpoints are plain work ids; nothing checks that they exist.
"""

from __future__ import annotations

from workgraph.errors import RelationNotFound
from workgraph.store.graphs import GraphRepository, next_id
from workgraph.store.models import Relation


def create_relation(
    repo: GraphRepository,
    graph_id: int,
    w1: int,
    w2: int,
    description: str = "",
) -> Relation:
    """Add a relation ``w1 -> w2`` and return it."""
    graph = repo.get_graph(graph_id)
    relation = Relation(id=next_id(graph.relations), w1=w1, w2=w2, description=description)
    graph.relations[relation.id] = relation
    repo.save_graph(graph)
    return relation


def delete_relation(repo: GraphRepository, graph_id: int, relation_id: int) -> Relation:
    """Remove a relation.

    Raises:
        RelationNotFound: The graph has no relation *relation_id*.
    """
    graph = repo.get_graph(graph_id)
    relation = graph.relations.pop(relation_id, None)
    if relation is None:
        raise RelationNotFound(graph_id, relation_id)
    repo.save_graph(graph)
    return relation


def list_relations(repo: GraphRepository, graph_id: int) -> list[Relation]:
    graph = repo.get_graph(graph_id)
    return sorted(graph.relations.values(), key=lambda r: r.id)
