"""Typed configuration loading and access.

Dataclasses for the ``mrel.toml`` structure:

    [release]
    default_release_version = "1.0.0"
    allow_local_release_artifacts = false
    offline = false
    tag_pattern = "{artifact_id}-{version}"

    [repositories]
    local = "~/.m2/repository"

    [[repositories.remote]]
    id = "central"
    url = "https://repo.maven.apache.org/maven2"

    [scm]
    working_directory = "."
    username = "release-bot"
    ssh_private_key = "~/.ssh/id_ed25519"

Secrets can also come from the environment, see ``apply_env``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table, get_tables

__all__ = [
    "Config",
    "ConfigError",
    "ReleaseConfig",
    "RemoteRepository",
    "RepositoriesConfig",
    "ScmConfig",
    "load_config",
    "load_config_or_default",
    "parse_toml",
    "DEFAULT_LOCAL_REPOSITORY",
    "DEFAULT_TAG_PATTERN",
    "ENV_SCM_USERNAME",
    "ENV_SCM_PASSWORD",
    "ENV_SCM_SSH_PASSPHRASE",
]

DEFAULT_LOCAL_REPOSITORY = "~/.m2/repository"
DEFAULT_TAG_PATTERN = "{artifact_id}-{version}"

ENV_SCM_USERNAME = "MREL_SCM_USERNAME"
ENV_SCM_PASSWORD = "MREL_SCM_PASSWORD"
ENV_SCM_SSH_PASSPHRASE = "MREL_SCM_SSH_PASSPHRASE"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when a config file or reactor manifest cannot be loaded."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Options of the release run itself."""

    default_release_version: str | None = None
    allow_local_release_artifacts: bool = False
    offline: bool = False
    tag_pattern: str = DEFAULT_TAG_PATTERN


@dataclass(frozen=True, slots=True)
class RemoteRepository:
    """A remote artifact repository queried for already released artifacts."""

    id: str
    url: str
    username: str | None = None
    password: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoriesConfig:
    local: str = DEFAULT_LOCAL_REPOSITORY
    remote: tuple[RemoteRepository, ...] = ()

    @property
    def local_path(self) -> Path:
        return Path(os.path.expandvars(self.local)).expanduser()


@dataclass(frozen=True, slots=True)
class ScmConfig:
    """Where the SCM provider works and which credentials it gets.

    Every credential is optional; the provider falls back to whatever the
    user's git setup offers (agent, credential helper).
    """

    working_directory: str = "."
    username: str | None = None
    password: str | None = None
    ssh_private_key: str | None = None
    ssh_private_key_passphrase: str | None = None


def _release_flag(release: Mapping[str, object], key: str) -> bool:
    if key not in release:
        return False
    value = get_bool(release, key)
    if value is None:
        raise ValueError(f"release.{key} must be a boolean")
    return value


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    repositories: RepositoriesConfig = field(default_factory=RepositoriesConfig)
    scm: ScmConfig = field(default_factory=ScmConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a remote repository entry is malformed or a release
                flag is not a boolean.
        """
        release: StrDict = get_table(data, "release") or {}
        repositories: StrDict = get_table(data, "repositories") or {}
        scm: StrDict = get_table(data, "scm") or {}

        remotes: list[RemoteRepository] = []
        for index, entry in enumerate(get_tables(repositories, "remote") or []):
            url = get_str(entry, "url")
            if url is None:
                raise ValueError(f"repositories.remote[{index}] is missing 'url'")
            remotes.append(
                RemoteRepository(
                    id=get_str(entry, "id") or f"remote-{index}",
                    url=url,
                    username=get_str(entry, "username"),
                    password=get_str(entry, "password"),
                )
            )

        allow_local = _release_flag(release, "allow_local_release_artifacts")
        offline = _release_flag(release, "offline")
        return cls(
            release=ReleaseConfig(
                default_release_version=get_str(release, "default_release_version"),
                allow_local_release_artifacts=allow_local,
                offline=offline,
                tag_pattern=get_str(release, "tag_pattern") or DEFAULT_TAG_PATTERN,
            ),
            repositories=RepositoriesConfig(
                local=get_str(repositories, "local") or DEFAULT_LOCAL_REPOSITORY,
                remote=tuple(remotes),
            ),
            scm=ScmConfig(
                working_directory=get_str(scm, "working_directory") or ".",
                username=get_str(scm, "username"),
                password=get_str(scm, "password"),
                ssh_private_key=get_str(scm, "ssh_private_key"),
                ssh_private_key_passphrase=get_str(scm, "ssh_private_key_passphrase"),
            ),
        )

    def apply_env(self, env: Mapping[str, str] | None = None) -> Config:
        """Return a copy with SCM secrets taken from the environment.

        Environment values win over the file so secrets can stay out of it.
        """
        source = os.environ if env is None else env
        scm = self.scm
        if source.get(ENV_SCM_USERNAME):
            scm = replace(scm, username=source[ENV_SCM_USERNAME])
        if source.get(ENV_SCM_PASSWORD):
            scm = replace(scm, password=source[ENV_SCM_PASSWORD])
        if source.get(ENV_SCM_SSH_PASSPHRASE):
            scm = replace(scm, ssh_private_key_passphrase=source[ENV_SCM_SSH_PASSPHRASE])
        return replace(self, scm=scm)


def parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("TOML root must be a table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"File not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading file: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to mrel.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return the default config if it is missing."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
