"""Platform helpers (process execution)."""

from mrel.platform.process import ProcessError, run

__all__ = ["ProcessError", "run"]
