"""Command-line interface for workgraph."""
