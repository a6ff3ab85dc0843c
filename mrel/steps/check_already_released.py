"""Gate: refuse to release modules whose release version is already published.

Only modules scheduled for release (snapshot versions) are checked. Each one is
looked up in the remote repositories first; only if it is not there is the
local repository consulted. Results are collected for the whole reactor before
deciding, so the operator sees every offending module in one report.

- Remote hits always abort: remote repositories do not accept redeployment.
- Local hits abort unless ``allow_local_release_artifacts`` is set, in which
  case they are reported as warnings.
"""

from __future__ import annotations

from collections.abc import Sequence

from mrel.core.coordinates import ARTIFACT_TYPE_POM, ArtifactCoordinates
from mrel.core.metadata import ReleaseMetadata, ReleasePhase
from mrel.core.project import ReactorProject, snapshot_projects
from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.pipeline.context import ExecutionContext
from mrel.pipeline.step import Severity, StepDescriptor, StepFailure
from mrel.repository.resolver import ArtifactResolver, Found, ResolutionError

__all__ = ["CheckAlreadyReleased"]


class CheckAlreadyReleased:
    descriptor = StepDescriptor(
        id="checkAlreadyReleased",
        description=(
            "Checks the repositories for already released artifacts so the artifacts "
            "produced by this release can be deployed safely."
        ),
        order=20,
        requires_online=True,
    )

    def __init__(
        self,
        *,
        reactor_projects: Sequence[ReactorProject],
        metadata: ReleaseMetadata,
        resolver: ArtifactResolver,
        console: ConsoleProtocol,
        allow_local_release_artifacts: bool = False,
    ) -> None:
        self._reactor_projects = tuple(reactor_projects)
        self._metadata = metadata
        self._resolver = resolver
        self._console = console
        self._allow_local_release_artifacts = allow_local_release_artifacts

    def execute(self, context: ExecutionContext) -> Result[None, StepFailure]:
        self._console.info("Checking repositories for already released artifacts of modules scheduled for release.")
        self._console.debug("If any module was already released with its release version, the release stops here.")

        remote_hits: list[ArtifactCoordinates] = []
        local_hits: list[ArtifactCoordinates] = []

        for project in snapshot_projects(self._reactor_projects):
            self._console.debug(f"checking module '{project}'")
            coordinates = self._metadata.coordinates(
                project.group_id, project.artifact_id, ReleasePhase.RELEASE
            ).with_type(ARTIFACT_TYPE_POM)

            remote = self._resolver.resolve(coordinates, remote_only=True)
            if isinstance(remote, Err):
                return Err(self._resolution_failure(remote.error))
            if isinstance(remote.value, Found):
                remote_hits.append(coordinates)
                continue

            local = self._resolver.resolve(coordinates, remote_only=False)
            if isinstance(local, Err):
                return Err(self._resolution_failure(local.error))
            if isinstance(local.value, Found):
                local_hits.append(coordinates)

        if remote_hits:
            return Err(self._report_remote(remote_hits))
        if local_hits:
            return self._report_local(local_hits)
        return Ok(None)

    def _report_remote(self, hits: list[ArtifactCoordinates]) -> StepFailure:
        for coordinates in hits:
            self._console.error(f"already present in a remote repository: {coordinates}")
        return StepFailure(
            step_id=self.descriptor.id,
            kind="already_released_remote",
            message="Some of the reactor projects have already been released",
            severity=Severity.FAILURE,
            offending=tuple(hits),
            hint="check your remote repositories; released versions cannot be redeployed",
        )

    def _report_local(self, hits: list[ArtifactCoordinates]) -> Result[None, StepFailure]:
        if self._allow_local_release_artifacts:
            for coordinates in hits:
                self._console.warning(f"already present in the local repository (allowed): {coordinates}")
            return Ok(None)

        for coordinates in hits:
            self._console.error(f"already present in the local repository: {coordinates}")
        return Err(
            StepFailure(
                step_id=self.descriptor.id,
                kind="already_released_local",
                message="Some of the reactor projects have already been released locally",
                severity=Severity.FAILURE,
                offending=tuple(hits),
                hint=(
                    "check your local repository and remove the stale artifacts, "
                    "or allow local release artifacts"
                ),
            )
        )

    def _resolution_failure(self, error: ResolutionError) -> StepFailure:
        self._console.error(str(error))
        return StepFailure(
            step_id=self.descriptor.id,
            kind="resolution_failed",
            message=f"Could not determine the release state in the {error.scope} repositories",
            severity=Severity.ERROR,
            offending=(error.coordinates,),
            hint="the release state of this module is unknown; fix repository access and retry",
        )
