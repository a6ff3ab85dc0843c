"""Artifact coordinates."""

from __future__ import annotations

from dataclasses import dataclass, replace

__all__ = ["ARTIFACT_TYPE_POM", "ArtifactCoordinates"]

ARTIFACT_TYPE_POM = "pom"
"""Type of the release descriptor artifact every module publishes."""


@dataclass(frozen=True, slots=True)
class ArtifactCoordinates:
    """Identifies one publishable artifact.

    Attributes:
        group_id: Maven group (e.g. "com.example")
        artifact_id: Module name within the group
        version: Version string (e.g. "1.0.0" or "1.1.0-SNAPSHOT")
        type: Artifact type ("pom", "jar", ...)
    """

    group_id: str
    artifact_id: str
    version: str
    type: str = ARTIFACT_TYPE_POM

    @property
    def module_key(self) -> tuple[str, str]:
        """The (group_id, artifact_id) identity, independent of version."""
        return (self.group_id, self.artifact_id)

    def with_type(self, artifact_type: str) -> ArtifactCoordinates:
        return replace(self, type=artifact_type)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.type}:{self.version}"
