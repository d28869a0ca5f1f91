"""Exception hierarchy shared by the store, codec and operations."""

from __future__ import annotations


class WorkGraphError(Exception):
    """Base class for every error raised by workgraph."""


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

class NotFoundError(WorkGraphError, LookupError):
    pass


class KeyNotFound(NotFoundError):
    def __init__(self, key: bytes) -> None:
        super().__init__(f"Key not found: {key!r}")
        self.key = key


class GraphNotFound(NotFoundError):
    def __init__(self, graph_id: int) -> None:
        super().__init__(f"Graph not found: {graph_id}")
        self.graph_id = graph_id


class WorkNotFound(NotFoundError):
    def __init__(self, graph_id: int, work_id: int) -> None:
        super().__init__(f"Work {work_id} not found in graph {graph_id}")
        self.graph_id = graph_id
        self.work_id = work_id


class RelationNotFound(NotFoundError):
    def __init__(self, graph_id: int, relation_id: int) -> None:
        super().__init__(f"Relation {relation_id} not found in graph {graph_id}")
        self.graph_id = graph_id
        self.relation_id = relation_id


class CheckpointNotFound(NotFoundError):
    def __init__(self, graph_id: int, checkpoint_id: int) -> None:
        super().__init__(f"Checkpoint {checkpoint_id} not found for graph {graph_id}")
        self.graph_id = graph_id
        self.checkpoint_id = checkpoint_id


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class MalformedDocument(WorkGraphError, ValueError):
    """A stored document violates the on-disk schema."""


class MalformedTimestamp(MalformedDocument):
    """A timestamp string does not match ``YYYY-MM-DD HH:MM:SS``."""


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

class StoreError(WorkGraphError, OSError):
    """The key-value engine failed to read or write."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class ValidationError(WorkGraphError, ValueError):
    pass


class EmptyContent(ValidationError):
    def __init__(self, what: str = "content") -> None:
        super().__init__(f"{what} is empty")


class EmptyGraphName(ValidationError):
    def __init__(self) -> None:
        super().__init__("graph name is empty")
