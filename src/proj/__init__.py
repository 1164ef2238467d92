"""proj: register named projects and start/stop them by name.

Provides a minimal, local-first CLI with:
- settings loaded from the environment or `.env`
- structured logging
- a SQLite record store with a YAML sidecar file per project
"""

__version__ = "0.1.0"

from proj.config import ProjSettings

__all__ = ["__version__", "ProjSettings"]
