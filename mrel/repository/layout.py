"""Maven 2 repository layout."""

from __future__ import annotations

from mrel.core.coordinates import ArtifactCoordinates

__all__ = ["artifact_path", "extension_for"]

# Packaging types whose file extension differs from the type name.
_TYPE_EXTENSIONS = {
    "maven-plugin": "jar",
    "bundle": "jar",
    "ejb": "jar",
    "test-jar": "jar",
    "java-source": "jar",
    "javadoc": "jar",
}


def extension_for(artifact_type: str) -> str:
    return _TYPE_EXTENSIONS.get(artifact_type, artifact_type)


def artifact_path(coordinates: ArtifactCoordinates) -> str:
    """Relative path of an artifact inside a Maven 2 repository.

    ``com.example:core:pom:1.0`` maps to ``com/example/core/1.0/core-1.0.pom``.
    Always uses forward slashes so the result works for URLs and, joined via
    ``Path``, for local directories.
    """
    group_path = coordinates.group_id.replace(".", "/")
    file_name = f"{coordinates.artifact_id}-{coordinates.version}.{extension_for(coordinates.type)}"
    return f"{group_path}/{coordinates.artifact_id}/{coordinates.version}/{file_name}"
