"""Command groups: ``ad`` (create), ``li`` (list), ``de`` (delete), ``up`` (update)."""
