"""Processing step contract.

A step is plain data (its descriptor) plus an ``execute`` entry point. It
returns ``Ok(None)`` to let the pipeline continue or ``Err(StepFailure)`` to
abort the whole release. Steps declare their collaborators in their
constructor; nothing is injected behind their back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Literal, Protocol

from mrel.core.coordinates import ArtifactCoordinates
from mrel.core.result import Result
from mrel.pipeline.context import ExecutionContext

__all__ = [
    "ProcessingStep",
    "Severity",
    "StepDescriptor",
    "StepFailure",
    "StepFailureKind",
]

StepFailureKind = Literal[
    "already_released_remote",
    "already_released_local",
    "resolution_failed",
    "scm_dirty",
    "scm_failed",
    "tag_exists",
    "invalid_state",
    "requires_online",
]


class Severity(Enum):
    """How a step failed. Both abort the pipeline."""

    FAILURE = auto()
    """The release must not proceed (a check found a violation)."""

    ERROR = auto()
    """The step could not do its work (network, SCM, wiring)."""

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class StepDescriptor:
    """Registry metadata of a step.

    Attributes:
        id: Stable, unique identifier
        description: Operator-facing summary
        order: Position in the pipeline (lower runs first)
        requires_online: The step needs network access
    """

    id: str
    description: str
    order: int
    requires_online: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Step id cannot be empty")


@dataclass(frozen=True, slots=True)
class StepFailure:
    """Why a step aborted the release.

    Attributes:
        step_id: Step that failed
        kind: Condition that triggered the abort
        message: What went wrong
        severity: FAILURE (release blocked) or ERROR (step could not run)
        offending: Every artifact involved, in reactor order
        hint: What the operator should inspect or do
    """

    step_id: str
    kind: StepFailureKind
    message: str
    severity: Severity = Severity.FAILURE
    offending: tuple[ArtifactCoordinates, ...] = ()
    hint: str | None = None

    def pretty(self) -> str:
        text = f"[{self.kind}] {self.message}"
        if self.offending:
            text += ": " + ", ".join(str(c) for c in self.offending)
        if self.hint:
            text += f" (hint: {self.hint})"
        return text


class ProcessingStep(Protocol):
    """A unit of release work."""

    @property
    def descriptor(self) -> StepDescriptor: ...

    def execute(self, context: ExecutionContext) -> Result[None, StepFailure]: ...
