from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from mrel.core.config import Config
from mrel.core.metadata import ReleaseMetadata
from mrel.core.project import ReactorProject, snapshot_projects
from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.pipeline.context import ExecutionContext
from mrel.pipeline.runner import PipelineReport, PipelineRunner, StepRegistry
from mrel.pipeline.step import Severity, StepFailure
from mrel.repository.http import HttpClient, RealHttpClient
from mrel.repository.resolver import (
    ArtifactResolver,
    LocalRepositoryResolver,
    MavenArtifactResolver,
    RemoteRepositoryResolver,
)
from mrel.scm.git import GitScmProvider
from mrel.scm.initialization import ScmProviderInitialization, ScmProviderInitializationBuilder
from mrel.scm.provider import ScmProvider
from mrel.steps import CheckAlreadyReleased, CheckScmStatus, PushScm, TagScm

CHECK_STEP_IDS: tuple[str, ...] = (CheckAlreadyReleased.descriptor.id,)
SCM_STEP_IDS: frozenset[str] = frozenset(
    {CheckScmStatus.descriptor.id, TagScm.descriptor.id, PushScm.descriptor.id}
)


def scm_initialization(config: Config, console: ConsoleProtocol | None) -> ScmProviderInitialization:
    scm = config.scm
    return (
        ScmProviderInitializationBuilder(Path(scm.working_directory))
        .with_username(scm.username)
        .with_password(scm.password)
        .with_ssh_private_key(scm.ssh_private_key)
        .with_ssh_private_key_passphrase(scm.ssh_private_key_passphrase)
        .with_console(console)
        .build()
    )


class ReleaseService:
    """Builds the step registry for a reactor and runs it."""

    def __init__(
        self,
        *,
        config: Config,
        reactor: Sequence[ReactorProject],
        console: ConsoleProtocol,
        resolver: ArtifactResolver | None = None,
        scm: ScmProvider | None = None,
        http: HttpClient | None = None,
    ) -> None:
        self._config = config
        self._reactor = tuple(reactor)
        self._console = console
        self._metadata = ReleaseMetadata.from_reactor(
            self._reactor,
            default_release_version=config.release.default_release_version,
        )
        self._resolver = resolver if resolver is not None else self._default_resolver(http or RealHttpClient())
        self._scm = scm if scm is not None else GitScmProvider()
        self._scm_initialized = False

    @property
    def metadata(self) -> ReleaseMetadata:
        return self._metadata

    def registry(self) -> StepRegistry:
        release = self._config.release
        return StepRegistry(
            [
                CheckScmStatus(scm=self._scm, console=self._console),
                CheckAlreadyReleased(
                    reactor_projects=self._reactor,
                    metadata=self._metadata,
                    resolver=self._resolver,
                    console=self._console,
                    allow_local_release_artifacts=release.allow_local_release_artifacts,
                ),
                TagScm(
                    reactor_projects=self._reactor,
                    metadata=self._metadata,
                    scm=self._scm,
                    console=self._console,
                    tag_pattern=release.tag_pattern,
                ),
                PushScm(scm=self._scm, console=self._console),
            ]
        )

    def run(self, step_ids: Sequence[str] | None = None) -> Result[PipelineReport, StepFailure]:
        """Run the selected steps (all when ``step_ids`` is None).

        Raises:
            ValueError: If ``step_ids`` names an unknown step.
        """
        registry = self.registry()
        if step_ids is not None:
            registry = registry.select(step_ids)

        online = not self._config.release.offline
        releasing = snapshot_projects(self._reactor)
        self._console.info(
            f"{len(releasing)} of {len(self._reactor)} module(s) scheduled for release "
            f"({'online' if online else 'offline'})"
        )
        context = ExecutionContext(online=online)
        runner = PipelineRunner(self._console)
        admitted = runner.admit(registry, context)
        if isinstance(admitted, Err):
            return admitted
        if any(step_id in registry for step_id in SCM_STEP_IDS):
            initialized = self._initialize_scm()
            if isinstance(initialized, Err):
                return initialized

        return runner.run(registry, context)

    def _initialize_scm(self) -> Result[None, StepFailure]:
        if self._scm_initialized:
            return Ok(None)
        result = self._scm.initialize(scm_initialization(self._config, self._console))
        if isinstance(result, Err):
            return Err(
                StepFailure(
                    step_id="scmInitialization",
                    kind="scm_failed",
                    message=str(result.error),
                    severity=Severity.ERROR,
                )
            )
        self._scm_initialized = True
        return Ok(None)

    def _default_resolver(self, http: HttpClient) -> ArtifactResolver:
        repositories = self._config.repositories
        return MavenArtifactResolver(
            local=LocalRepositoryResolver(repositories.local_path),
            remote=RemoteRepositoryResolver(repositories.remote, http),
        )
