"""JSON encoding of graphs as they are laid out on disk.

Document shape::

    {
      "id": 1,
      "name": "demo",
      "works": {
        "work-1": {
          "id": 1, "content": "task A", "status": 1, "priority": 2,
          "updated_at": "2024-05-01 09:30:00",
          "related_people": ["alice", "bob"],
          "events": [{"id": 1, "content": "started", "created_at": "..."}]
        }
      },
      "relations": {
        "relation-1": {"id": 1, "w1": 1, "w2": 2, "description": "blocks"}
      }
    }

In memory the ``works`` / ``relations`` maps are keyed by integer id; the
``work-<id>`` / ``relation-<id>`` string keys only exist in the document.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from workgraph.errors import MalformedDocument, MalformedTimestamp
from workgraph.store.models import Checkpoint, Event, Graph, Relation, Status, Work

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

WORK_KEY_PREFIX = "work-"
RELATION_KEY_PREFIX = "relation-"


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS``; anything else is malformed.

    ``strptime`` alone accepts fields without zero padding, so the parsed
    value must also format back to the exact input.
    """
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as exc:
        raise MalformedTimestamp(f"Invalid timestamp: {value!r}") from exc
    if format_timestamp(parsed) != value:
        raise MalformedTimestamp(f"Invalid timestamp: {value!r}")
    return parsed


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _require(obj: dict[str, Any], name: str, kind: type, where: str) -> Any:
    if name not in obj:
        raise MalformedDocument(f"{where}: missing field {name!r}")
    value = obj[name]
    # bool is a subclass of int but never a valid id/status/priority
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise MalformedDocument(
            f"{where}: field {name!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional(obj: dict[str, Any], name: str, kind: type, where: str) -> Any:
    if name not in obj:
        return kind()
    return _require(obj, name, kind, where)


def _as_object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedDocument(f"{where}: expected an object")
    return value


def _check_key(key: str, prefix: str, item_id: int, where: str) -> None:
    if key != f"{prefix}{item_id}":
        raise MalformedDocument(f"{where}: key {key!r} does not match id {item_id}")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _encode_event(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "content": event.content,
        "created_at": format_timestamp(event.created_at),
    }


def _encode_work(work: Work) -> dict[str, Any]:
    return {
        "id": work.id,
        "content": work.content,
        "status": int(work.status),
        "priority": work.priority,
        "updated_at": format_timestamp(work.updated_at),
        "related_people": list(work.related_people),
        "events": [_encode_event(e) for e in work.events],
    }


def _encode_relation(relation: Relation) -> dict[str, Any]:
    return {
        "id": relation.id,
        "w1": relation.w1,
        "w2": relation.w2,
        "description": relation.description,
    }


def encode_graph(graph: Graph) -> dict[str, Any]:
    """Map a :class:`Graph` onto its JSON document tree."""
    return {
        "id": graph.id,
        "name": graph.name,
        "works": {
            f"{WORK_KEY_PREFIX}{w.id}": _encode_work(w) for w in graph.works.values()
        },
        "relations": {
            f"{RELATION_KEY_PREFIX}{r.id}": _encode_relation(r)
            for r in graph.relations.values()
        },
    }


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _decode_event(obj: Any, where: str) -> Event:
    obj = _as_object(obj, where)
    return Event(
        id=_require(obj, "id", int, where),
        content=_require(obj, "content", str, where),
        created_at=parse_timestamp(_require(obj, "created_at", str, where)),
    )


def _decode_work(obj: Any, where: str) -> Work:
    obj = _as_object(obj, where)
    raw_status = _require(obj, "status", int, where)
    try:
        status = Status(raw_status)
    except ValueError as exc:
        raise MalformedDocument(f"{where}: unknown status {raw_status}") from exc

    people = _optional(obj, "related_people", list, where)
    if not all(isinstance(p, str) for p in people):
        raise MalformedDocument(f"{where}: related_people must hold strings")

    events = [
        _decode_event(e, f"{where}.events[{i}]")
        for i, e in enumerate(_optional(obj, "events", list, where))
    ]
    return Work(
        id=_require(obj, "id", int, where),
        content=_require(obj, "content", str, where),
        status=status,
        priority=_require(obj, "priority", int, where),
        updated_at=parse_timestamp(_require(obj, "updated_at", str, where)),
        related_people=list(people),
        events=events,
    )


def _decode_relation(obj: Any, where: str) -> Relation:
    obj = _as_object(obj, where)
    return Relation(
        id=_require(obj, "id", int, where),
        w1=_require(obj, "w1", int, where),
        w2=_require(obj, "w2", int, where),
        description=_require(obj, "description", str, where),
    )


def decode_graph(doc: Any) -> Graph:
    """Rebuild a :class:`Graph` from its JSON document tree.

    Raises:
        MalformedDocument: A required field is absent or mistyped.
        MalformedTimestamp: A timestamp does not match ``TIMESTAMP_FORMAT``.
    """
    doc = _as_object(doc, "graph")
    graph = Graph(
        id=_require(doc, "id", int, "graph"),
        name=_require(doc, "name", str, "graph"),
    )

    for key, value in _optional(doc, "works", dict, "graph").items():
        work = _decode_work(value, f"graph.works[{key}]")
        _check_key(key, WORK_KEY_PREFIX, work.id, "graph.works")
        graph.works[work.id] = work

    for key, value in _optional(doc, "relations", dict, "graph").items():
        relation = _decode_relation(value, f"graph.relations[{key}]")
        _check_key(key, RELATION_KEY_PREFIX, relation.id, "graph.relations")
        graph.relations[relation.id] = relation

    return graph


def encode_checkpoint(checkpoint: Checkpoint) -> dict[str, Any]:
    return {
        "id": checkpoint.id,
        "graph_id": checkpoint.graph_id,
        "created_at": format_timestamp(checkpoint.created_at),
        "graph": encode_graph(checkpoint.graph),
    }


def decode_checkpoint(doc: Any) -> Checkpoint:
    doc = _as_object(doc, "checkpoint")
    graph_id = _require(doc, "graph_id", int, "checkpoint")
    graph = decode_graph(_require(doc, "graph", dict, "checkpoint"))
    if graph.id != graph_id:
        raise MalformedDocument(
            f"checkpoint: graph_id {graph_id} does not match graph id {graph.id}"
        )
    return Checkpoint(
        id=_require(doc, "id", int, "checkpoint"),
        graph_id=graph_id,
        created_at=parse_timestamp(_require(doc, "created_at", str, "checkpoint")),
        graph=graph,
    )


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------

def to_bytes(doc: dict[str, Any]) -> bytes:
    return json.dumps(
        doc, ensure_ascii=False, sort_keys=True, separators=(",", ":")
    ).encode("utf-8")


def from_bytes(data: bytes) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedDocument(f"Invalid JSON document: {exc}") from exc


def dumps(graph: Graph) -> bytes:
    """Serialise a graph to UTF-8 JSON text."""
    return to_bytes(encode_graph(graph))


def loads(data: bytes) -> Graph:
    """Deserialise UTF-8 JSON text produced by :func:`dumps`."""
    return decode_graph(from_bytes(data))
