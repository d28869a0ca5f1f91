"""Where workgraph keeps its data and how loudly it logs.

``WORKGRAPH_DATA_DIR`` and ``WORKGRAPH_LOG_LEVEL`` are read from the
environment each time a :class:`Settings` is built.  A ``.env`` file next to
``pyproject.toml`` may supply them; variables already set in the environment
win over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# workgraph/config.py -> repository root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WORKGRAPH_DATA_DIR", Path.home() / ".workgraph")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite file backing the key-value store."""
        return self.data_dir / "graph.db"

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("WORKGRAPH_LOG_LEVEL", "WARNING")
    )


# Module-level default; the CLI builds its own Settings per invocation.
settings = Settings()
