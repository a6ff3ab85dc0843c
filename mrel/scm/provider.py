"""SCM provider contract."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol

from mrel.core.result import Result
from mrel.scm.initialization import ScmProviderInitialization

__all__ = ["ScmError", "ScmErrorKind", "ScmProvider", "ScmStatus"]

ScmErrorKind = Literal[
    "not_initialized",
    "already_initialized",
    "command_failed",
    "tag_exists",
]


@dataclass(frozen=True, slots=True)
class ScmError:
    """Error from an SCM operation.

    Attributes:
        kind: Failure category
        command: Operation that failed (e.g. "tag", "push")
        message: Error details from the backend
    """

    kind: ScmErrorKind
    command: str
    message: str

    def __str__(self) -> str:
        return f"{self.command}: {self.message}"


@dataclass(frozen=True, slots=True)
class ScmStatus:
    """Working copy state relevant to a release.

    Attributes:
        branch: Current branch name ("" when detached)
        upstream: Upstream branch, None if not set
        ahead: Commits not yet pushed
        behind: Commits not yet pulled
        changed_paths: Modified, staged or untracked paths
    """

    branch: str
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0
    changed_paths: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.changed_paths


class ScmProvider(Protocol):
    """What the release pipeline needs from a source-control backend.

    ``initialize`` must be called exactly once before any other operation.
    How credentials are used (SSH key before password, agents, helpers) is
    the provider's policy.
    """

    def initialize(self, initialization: ScmProviderInitialization) -> Result[None, ScmError]: ...

    def checkout(self, remote_url: str, branch: str | None = None) -> Result[None, ScmError]:
        """Check out ``remote_url`` into the working directory."""
        ...

    def status(self) -> Result[ScmStatus, ScmError]: ...

    def is_clean(self) -> bool:
        """False if the working copy has changes or its state is unknown."""
        ...

    def commit(self, message: str, paths: Sequence[str] = ()) -> Result[str, ScmError]:
        """Commit ``paths`` (all tracked changes if empty); returns the revision."""
        ...

    def tag(self, name: str, message: str) -> Result[None, ScmError]: ...

    def has_tag(self, name: str) -> bool: ...

    def push(self, include_tags: bool = True) -> Result[None, ScmError]: ...
