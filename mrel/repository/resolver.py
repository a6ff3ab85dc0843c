"""Artifact resolution against the local and remote repositories.

A resolution answers one question: can this artifact be obtained from the
given scope? The answer is a tagged value:

- ``Ok(Found(location))``: the artifact exists in that scope
- ``Ok(Absent())``: the scope was fully consulted and the artifact is not there
- ``Err(ResolutionError)``: the scope could not be consulted

Absence is a normal outcome. An outage never turns into ``Absent``, because
callers treat absence as "safe to release".
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from mrel.core.config import RemoteRepository
from mrel.core.coordinates import ArtifactCoordinates
from mrel.core.result import Err, Ok, Result
from mrel.repository.http import HttpClient
from mrel.repository.layout import artifact_path

__all__ = [
    "Absent",
    "ArtifactResolver",
    "Found",
    "LocalRepositoryResolver",
    "MavenArtifactResolver",
    "MockArtifactResolver",
    "RemoteRepositoryResolver",
    "Resolution",
    "ResolutionError",
    "RepositoryScope",
]


class RepositoryScope(Enum):
    LOCAL = "local"
    REMOTE = "remote"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Found:
    """The artifact exists.

    Attributes:
        location: File path (local) or URL (remote) of the artifact
        repository: Id of the repository that holds it
    """

    location: str
    repository: str = "local"


@dataclass(frozen=True, slots=True)
class Absent:
    """The artifact does not exist in the consulted scope."""


type Resolution = Found | Absent


@dataclass(frozen=True, slots=True)
class ResolutionError:
    """Presence could not be determined (connectivity, auth, server error)."""

    coordinates: ArtifactCoordinates
    scope: RepositoryScope
    message: str

    def __str__(self) -> str:
        return f"could not query {self.scope} repositories for {self.coordinates}: {self.message}"


class ArtifactResolver(Protocol):
    """Boundary to the repository layer."""

    def resolve(
        self, coordinates: ArtifactCoordinates, remote_only: bool
    ) -> Result[Resolution, ResolutionError]:
        """Check presence of an artifact.

        Args:
            coordinates: Artifact to look for
            remote_only: True consults remote repositories only, False the
                local repository only
        """
        ...


class LocalRepositoryResolver:
    """Looks artifacts up in a local Maven repository directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, coordinates: ArtifactCoordinates) -> Result[Resolution, ResolutionError]:
        path = self._root / artifact_path(coordinates)
        try:
            exists = path.is_file()
        except OSError as e:
            return Err(ResolutionError(coordinates, RepositoryScope.LOCAL, str(e)))
        if exists:
            return Ok(Found(location=str(path), repository="local"))
        return Ok(Absent())


class RemoteRepositoryResolver:
    """Queries remote repositories with HEAD requests, in declaration order.

    The first repository answering 2xx wins. 404 and 410 mean "not in this
    repository". Anything else (401, 403, 5xx, no answer) is a failure to
    consult that repository; if no other repository has the artifact the whole
    resolution fails. With no repositories configured nothing can be consulted,
    so every resolution fails.
    """

    def __init__(self, repositories: Sequence[RemoteRepository], http: HttpClient) -> None:
        self._repositories = tuple(repositories)
        self._http = http

    @property
    def repositories(self) -> tuple[RemoteRepository, ...]:
        return self._repositories

    def resolve(self, coordinates: ArtifactCoordinates) -> Result[Resolution, ResolutionError]:
        if not self._repositories:
            return Err(ResolutionError(coordinates, RepositoryScope.REMOTE, "no remote repositories configured"))
        relative = artifact_path(coordinates)
        failures: list[str] = []

        for repository in self._repositories:
            url = f"{repository.url.rstrip('/')}/{relative}"
            auth = (repository.username, repository.password) if repository.username else None
            match self._http.head(url, auth=auth):
                case Err(error):
                    failures.append(f"{repository.id}: {error.message}")
                case Ok(status) if 200 <= status < 300:
                    return Ok(Found(location=url, repository=repository.id))
                case Ok(404 | 410):
                    continue
                case Ok(status):
                    failures.append(f"{repository.id}: HTTP {status}")

        if failures:
            return Err(ResolutionError(coordinates, RepositoryScope.REMOTE, "; ".join(failures)))
        return Ok(Absent())


class MavenArtifactResolver:
    """Dispatches on ``remote_only`` between the local and remote resolvers."""

    def __init__(self, local: LocalRepositoryResolver, remote: RemoteRepositoryResolver) -> None:
        self._local = local
        self._remote = remote

    def resolve(
        self, coordinates: ArtifactCoordinates, remote_only: bool
    ) -> Result[Resolution, ResolutionError]:
        if remote_only:
            return self._remote.resolve(coordinates)
        return self._local.resolve(coordinates)


def _empty_calls() -> list[tuple[ArtifactCoordinates, bool]]:
    return []


@dataclass
class MockArtifactResolver:
    """In-memory resolver for tests; records every call.

    Usage:
        resolver = MockArtifactResolver()
        resolver.publish_remote(coords)
        resolver.fail(coords, remote_only=True, message="timeout")
    """

    remote: set[ArtifactCoordinates] = field(default_factory=set)
    local: set[ArtifactCoordinates] = field(default_factory=set)
    errors: dict[tuple[ArtifactCoordinates, bool], str] = field(default_factory=dict)
    calls: list[tuple[ArtifactCoordinates, bool]] = field(default_factory=_empty_calls)

    def publish_remote(self, coordinates: ArtifactCoordinates) -> None:
        self.remote.add(coordinates)

    def publish_local(self, coordinates: ArtifactCoordinates) -> None:
        self.local.add(coordinates)

    def fail(self, coordinates: ArtifactCoordinates, *, remote_only: bool, message: str) -> None:
        self.errors[(coordinates, remote_only)] = message

    def resolve(
        self, coordinates: ArtifactCoordinates, remote_only: bool
    ) -> Result[Resolution, ResolutionError]:
        self.calls.append((coordinates, remote_only))
        scope = RepositoryScope.REMOTE if remote_only else RepositoryScope.LOCAL

        message = self.errors.get((coordinates, remote_only))
        if message is not None:
            return Err(ResolutionError(coordinates, scope, message))

        store = self.remote if remote_only else self.local
        if coordinates in store:
            return Ok(Found(location=f"mock://{scope}/{artifact_path(coordinates)}", repository=str(scope)))
        return Ok(Absent())

    def calls_for(self, coordinates: ArtifactCoordinates) -> list[bool]:
        """``remote_only`` flags of the calls made for one artifact, in order."""
        return [remote_only for coords, remote_only in self.calls if coords == coordinates]
