"""Release metadata: per-module coordinates for each release phase.

The table is filled once before the pipeline starts and only read afterwards,
so every step sees the same release version for a module.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from enum import Enum, auto

from .coordinates import ArtifactCoordinates
from .errors import MetadataLookupError
from .project import SNAPSHOT_SUFFIX, ReactorProject

__all__ = ["ReleaseMetadata", "ReleasePhase", "release_version_for"]


class ReleasePhase(Enum):
    """Coordinate states a module passes through during one release."""

    CURRENT = auto()
    """Snapshot version the build currently declares."""

    RELEASE = auto()
    """Version being released."""

    NEXT_SNAPSHOT = auto()
    """Development version after the release."""

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


def release_version_for(project: ReactorProject, default_release_version: str | None) -> str:
    """Pick the release version of a module.

    Precedence: the module's own override, then the run-wide default, then the
    current version without its snapshot suffix.
    """
    if project.release_version:
        return project.release_version
    if default_release_version:
        return default_release_version
    return project.version.removesuffix(SNAPSHOT_SUFFIX)


class ReleaseMetadata:
    """Coordinates of every module at every registered phase."""

    def __init__(self) -> None:
        self._by_module: dict[tuple[str, str], dict[ReleasePhase, ArtifactCoordinates]] = {}

    @classmethod
    def from_reactor(
        cls,
        projects: Iterable[ReactorProject],
        *,
        default_release_version: str | None = None,
    ) -> ReleaseMetadata:
        """Build metadata for the snapshot modules of a reactor.

        CURRENT and RELEASE are registered for every snapshot module.
        NEXT_SNAPSHOT only when the module declares one.
        """
        metadata = cls()
        for project in projects:
            if not project.is_snapshot:
                continue
            current = project.coordinates
            metadata.register(current, ReleasePhase.CURRENT)
            release = replace(current, version=release_version_for(project, default_release_version))
            metadata.register(release, ReleasePhase.RELEASE)
            if project.next_snapshot_version:
                metadata.register(
                    replace(current, version=project.next_snapshot_version),
                    ReleasePhase.NEXT_SNAPSHOT,
                )
        return metadata

    def register(self, coordinates: ArtifactCoordinates, phase: ReleasePhase) -> None:
        """Record a module's coordinates for a phase.

        Registering identical coordinates twice is a no-op.

        Raises:
            ValueError: If the phase already holds different coordinates.
        """
        phases = self._by_module.setdefault(coordinates.module_key, {})
        existing = phases.get(phase)
        if existing is not None and existing != coordinates:
            raise ValueError(
                f"{phase} coordinates of {coordinates.group_id}:{coordinates.artifact_id} "
                f"already set to {existing}, refusing {coordinates}"
            )
        phases[phase] = coordinates

    def coordinates(self, group_id: str, artifact_id: str, phase: ReleasePhase) -> ArtifactCoordinates:
        """Return a module's coordinates at a phase.

        Raises:
            MetadataLookupError: If the module or phase was never registered.
        """
        phases = self._by_module.get((group_id, artifact_id))
        if phases is None:
            raise MetadataLookupError(group_id, artifact_id)
        coords = phases.get(phase)
        if coords is None:
            raise MetadataLookupError(group_id, artifact_id, phase)
        return coords

    def phases(self, group_id: str, artifact_id: str) -> Mapping[ReleasePhase, ArtifactCoordinates]:
        phases = self._by_module.get((group_id, artifact_id))
        if phases is None:
            raise MetadataLookupError(group_id, artifact_id)
        return dict(phases)

    def __contains__(self, module_key: object) -> bool:
        return module_key in self._by_module

    def __len__(self) -> int:
        return len(self._by_module)
