"""Source-control steps: working copy check, release tag, push.

The provider handed to these steps must already be initialized.
"""

from __future__ import annotations

from collections.abc import Sequence

from mrel.core.config import DEFAULT_TAG_PATTERN
from mrel.core.metadata import ReleaseMetadata, ReleasePhase
from mrel.core.project import ReactorProject, snapshot_projects
from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.pipeline.context import ExecutionContext
from mrel.pipeline.step import Severity, StepDescriptor, StepFailure
from mrel.scm.provider import ScmError, ScmProvider

__all__ = ["CONTEXT_TAG_KEY", "CheckScmStatus", "PushScm", "TagScm", "tag_name"]

CONTEXT_TAG_KEY = "scm.tag"


def tag_name(pattern: str, project: ReactorProject, version: str) -> str:
    """Render a tag pattern such as ``{artifact_id}-{version}``.

    Raises:
        ValueError: If the pattern uses an unknown placeholder, an attribute or
            index lookup, or is not a valid format string.
    """
    try:
        return pattern.format(
            group_id=project.group_id,
            artifact_id=project.artifact_id,
            version=version,
        )
    except (KeyError, IndexError) as e:
        raise ValueError(f"Invalid tag pattern {pattern!r}: unknown placeholder {e}") from e
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid tag pattern {pattern!r}: {e}") from e


def _scm_failure(step_id: str, error: ScmError) -> StepFailure:
    return StepFailure(
        step_id=step_id,
        kind="tag_exists" if error.kind == "tag_exists" else "scm_failed",
        message=str(error),
        severity=Severity.ERROR,
    )


class CheckScmStatus:
    descriptor = StepDescriptor(
        id="checkScmStatus",
        description="Checks that the working copy has no uncommitted changes.",
        order=10,
    )

    def __init__(self, *, scm: ScmProvider, console: ConsoleProtocol) -> None:
        self._scm = scm
        self._console = console

    def execute(self, context: ExecutionContext) -> Result[None, StepFailure]:
        match self._scm.status():
            case Err(error):
                return Err(_scm_failure(self.descriptor.id, error))
            case Ok(status) if not status.is_clean:
                for path in status.changed_paths:
                    self._console.error(f"uncommitted change: {path}")
                return Err(
                    StepFailure(
                        step_id=self.descriptor.id,
                        kind="scm_dirty",
                        message=f"The working copy has {len(status.changed_paths)} uncommitted change(s)",
                        hint="commit or stash your changes before releasing",
                    )
                )
            case Ok(status):
                self._console.debug(f"working copy clean on branch '{status.branch}'")
                return Ok(None)


class TagScm:
    """Tags the release after all checks passed.

    The tag is named after the first module scheduled for release (the
    reactor root in a conventional build) and published to later steps under
    ``scm.tag``.
    """

    descriptor = StepDescriptor(
        id="tagScm",
        description="Creates the release tag in the working copy.",
        order=50,
    )

    def __init__(
        self,
        *,
        reactor_projects: Sequence[ReactorProject],
        metadata: ReleaseMetadata,
        scm: ScmProvider,
        console: ConsoleProtocol,
        tag_pattern: str = DEFAULT_TAG_PATTERN,
    ) -> None:
        self._reactor_projects = tuple(reactor_projects)
        self._metadata = metadata
        self._scm = scm
        self._console = console
        self._tag_pattern = tag_pattern

    def execute(self, context: ExecutionContext) -> Result[None, StepFailure]:
        releasing = snapshot_projects(self._reactor_projects)
        if not releasing:
            self._console.info("No module is scheduled for release, nothing to tag.")
            context.set(CONTEXT_TAG_KEY, None)
            return Ok(None)

        root = releasing[0]
        release = self._metadata.coordinates(root.group_id, root.artifact_id, ReleasePhase.RELEASE)
        try:
            name = tag_name(self._tag_pattern, root, release.version)
        except ValueError as e:
            return Err(
                StepFailure(
                    step_id=self.descriptor.id,
                    kind="invalid_state",
                    message=str(e),
                    severity=Severity.ERROR,
                    hint="fix release.tag_pattern in the configuration",
                )
            )

        if self._scm.has_tag(name):
            self._console.error(f"tag already exists: {name}")
            return Err(
                StepFailure(
                    step_id=self.descriptor.id,
                    kind="tag_exists",
                    message=f"The release tag '{name}' already exists",
                    offending=(release,),
                    hint="delete the stale tag or pick another release version",
                )
            )

        result = self._scm.tag(name, f"Release {release.artifact_id} {release.version}")
        if isinstance(result, Err):
            return Err(_scm_failure(self.descriptor.id, result.error))

        context.set(CONTEXT_TAG_KEY, name)
        self._console.success(f"tagged {name}")
        return Ok(None)


class PushScm:
    descriptor = StepDescriptor(
        id="pushScm",
        description="Pushes the release commits and tag to the remote.",
        order=60,
        requires_online=True,
    )

    def __init__(self, *, scm: ScmProvider, console: ConsoleProtocol) -> None:
        self._scm = scm
        self._console = console

    def execute(self, context: ExecutionContext) -> Result[None, StepFailure]:
        if CONTEXT_TAG_KEY not in context:
            return Err(
                StepFailure(
                    step_id=self.descriptor.id,
                    kind="invalid_state",
                    message="No release tag was created before pushing",
                    severity=Severity.ERROR,
                )
            )

        tag = context.get(CONTEXT_TAG_KEY)
        if tag is None:
            self._console.info("No release tag, nothing to push.")
            return Ok(None)

        result = self._scm.push(include_tags=True)
        if isinstance(result, Err):
            return Err(_scm_failure(self.descriptor.id, result.error))

        self._console.success(f"pushed {tag}")
        return Ok(None)
