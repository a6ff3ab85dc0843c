"""Application services."""

from mrel.services.release import CHECK_STEP_IDS, ReleaseService, scm_initialization

__all__ = ["CHECK_STEP_IDS", "ReleaseService", "scm_initialization"]
