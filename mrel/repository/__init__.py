"""Repository layer: tells whether an artifact already exists.

Usage:
    from mrel.repository import MavenArtifactResolver, LocalRepositoryResolver

    resolver = MavenArtifactResolver(
        local=LocalRepositoryResolver(Path("~/.m2/repository").expanduser()),
        remote=RemoteRepositoryResolver(config.repositories.remote, RealHttpClient()),
    )
    resolver.resolve(coords, remote_only=True)
"""

from mrel.repository.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from mrel.repository.layout import artifact_path
from mrel.repository.resolver import (
    Absent,
    ArtifactResolver,
    Found,
    LocalRepositoryResolver,
    MavenArtifactResolver,
    MockArtifactResolver,
    RemoteRepositoryResolver,
    RepositoryScope,
    Resolution,
    ResolutionError,
)

__all__ = [
    # http
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # layout
    "artifact_path",
    # resolver
    "Absent",
    "ArtifactResolver",
    "Found",
    "LocalRepositoryResolver",
    "MavenArtifactResolver",
    "MockArtifactResolver",
    "RemoteRepositoryResolver",
    "RepositoryScope",
    "Resolution",
    "ResolutionError",
]
