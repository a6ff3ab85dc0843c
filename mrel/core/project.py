"""Reactor projects and the reactor manifest.

Reading POM files is not mrel's job. A front end (or a person) writes the
reactor as a TOML manifest, one ``[[modules]]`` table per module, in build
order:

    [[modules]]
    group_id = "com.example"
    artifact_id = "parent"
    version = "1.0.0-SNAPSHOT"
    packaging = "pom"
    release_version = "1.0.0"                 # optional override
    next_snapshot_version = "1.0.1-SNAPSHOT"  # optional
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import ConfigError, parse_toml
from .coordinates import ARTIFACT_TYPE_POM, ArtifactCoordinates
from .result import Err, Ok, Result
from .structured import get_str, get_tables

__all__ = [
    "SNAPSHOT_SUFFIX",
    "ReactorProject",
    "is_snapshot_version",
    "load_reactor",
    "snapshot_projects",
]

SNAPSHOT_SUFFIX = "-SNAPSHOT"


def is_snapshot_version(version: str) -> bool:
    return version.endswith(SNAPSHOT_SUFFIX)


@dataclass(frozen=True, slots=True)
class ReactorProject:
    """One module of the multi-module build.

    Attributes:
        group_id: Maven group
        artifact_id: Module name
        version: Current version as declared in the build
        packaging: Packaging type ("pom", "jar", ...)
        release_version: Per-module release version override, if declared
        next_snapshot_version: Development version after the release, if declared
    """

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    release_version: str | None = None
    next_snapshot_version: str | None = None

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot_version(self.version)

    @property
    def coordinates(self) -> ArtifactCoordinates:
        """Current coordinates of the module's POM."""
        return ArtifactCoordinates(self.group_id, self.artifact_id, self.version, ARTIFACT_TYPE_POM)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


def snapshot_projects(projects: tuple[ReactorProject, ...]) -> tuple[ReactorProject, ...]:
    """Keep only modules scheduled for release, preserving reactor order."""
    return tuple(p for p in projects if p.is_snapshot)


def load_reactor(path: Path) -> Result[tuple[ReactorProject, ...], ConfigError]:
    """Load the reactor manifest.

    Returns:
        Ok(projects) in manifest order, Err(ConfigError) on failure
    """
    result = parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        modules = get_tables(result.value, "modules")
    except ValueError as e:
        return Err(ConfigError(f"Invalid reactor manifest: {e}", path=path))
    if not modules:
        return Err(ConfigError("Reactor manifest declares no [[modules]]", path=path))

    projects: list[ReactorProject] = []
    seen: set[tuple[str, str]] = set()
    for index, module in enumerate(modules):
        group_id = get_str(module, "group_id")
        artifact_id = get_str(module, "artifact_id")
        version = get_str(module, "version")
        if group_id is None or artifact_id is None or version is None:
            return Err(
                ConfigError(
                    f"modules[{index}] needs group_id, artifact_id and version",
                    path=path,
                )
            )
        if (group_id, artifact_id) in seen:
            return Err(
                ConfigError(f"Duplicate module {group_id}:{artifact_id}", path=path),
            )
        seen.add((group_id, artifact_id))
        projects.append(
            ReactorProject(
                group_id=group_id,
                artifact_id=artifact_id,
                version=version,
                packaging=get_str(module, "packaging") or "jar",
                release_version=get_str(module, "release_version"),
                next_snapshot_version=get_str(module, "next_snapshot_version"),
            )
        )

    return Ok(tuple(projects))
