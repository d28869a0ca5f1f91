"""workgraph: a personal tracker for graphs of works, relations and events."""

__version__ = "0.1.0"
