"""Release steps.

Each step declares its descriptor (id, description, order, online
requirement) and takes its collaborators in its constructor:
- CheckScmStatus (10): working copy has no uncommitted changes
- CheckAlreadyReleased (20): no module's release version is published yet
- TagScm (50): creates the release tag
- PushScm (60): pushes commits and tag
"""

from mrel.steps.check_already_released import CheckAlreadyReleased
from mrel.steps.scm import CONTEXT_TAG_KEY, CheckScmStatus, PushScm, TagScm, tag_name

__all__ = [
    "CONTEXT_TAG_KEY",
    "CheckAlreadyReleased",
    "CheckScmStatus",
    "PushScm",
    "TagScm",
    "tag_name",
]
