"""Initialization data handed to an SCM provider.

Where credentials come from (config file, environment, prompt) is not the
provider's concern. The caller collects them with the builder and hands the
immutable result to ``ScmProvider.initialize`` exactly once.

Usage:
    init = (
        ScmProviderInitializationBuilder(Path("checkout"))
        .with_username("release-bot")
        .with_password(token)
        .build()
    )
    provider.initialize(init)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mrel.core.errors import ConfigurationError
from mrel.output.console import ConsoleProtocol

__all__ = ["ScmProviderInitialization", "ScmProviderInitializationBuilder"]

_MISSING_WORKING_DIR = "The working directory for the SCM provider must be specified"


@dataclass(frozen=True, slots=True)
class ScmProviderInitialization:
    """Immutable provider configuration.

    Optional fields are None when not set. No cross-field rules apply: an SSH
    key without a passphrase is a valid, passphrase-less key.

    Attributes:
        working_directory: Directory the provider works on. It need not exist
            yet if the provider is used to check out into it.
        username: Account name for password authentication
        password: Password or access token
        ssh_private_key: Path of the SSH private key to use
        ssh_private_key_passphrase: Passphrase of that key
        console: Sink for the provider's diagnostics
    """

    working_directory: Path
    username: str | None = None
    password: str | None = None
    ssh_private_key: str | None = None
    ssh_private_key_passphrase: str | None = None
    console: ConsoleProtocol | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.working_directory is None:  # pyright: ignore[reportUnnecessaryComparison]
            raise ConfigurationError(_MISSING_WORKING_DIR)

    @property
    def has_ssh_key(self) -> bool:
        return self.ssh_private_key is not None

    @property
    def has_password_auth(self) -> bool:
        return self.username is not None

    def __repr__(self) -> str:
        # Secrets stay out of tracebacks and debug output.
        return (
            f"ScmProviderInitialization(working_directory={self.working_directory!r}, "
            f"username={self.username!r}, password={'***' if self.password else None}, "
            f"ssh_private_key={self.ssh_private_key!r}, "
            f"ssh_private_key_passphrase={'***' if self.ssh_private_key_passphrase else None})"
        )


class ScmProviderInitializationBuilder:
    """Fluent builder for ``ScmProviderInitialization``.

    The working directory is validated here, before any setter runs. Setters
    are independent of each other and may be called in any order.
    """

    def __init__(self, working_directory: Path | str | None) -> None:
        if working_directory is None:
            raise ConfigurationError(_MISSING_WORKING_DIR)
        self._working_directory = Path(working_directory)
        self._username: str | None = None
        self._password: str | None = None
        self._ssh_private_key: str | None = None
        self._ssh_private_key_passphrase: str | None = None
        self._console: ConsoleProtocol | None = None

    def with_username(self, username: str | None) -> ScmProviderInitializationBuilder:
        self._username = username
        return self

    def with_password(self, password: str | None) -> ScmProviderInitializationBuilder:
        self._password = password
        return self

    def with_ssh_private_key(self, ssh_private_key: str | None) -> ScmProviderInitializationBuilder:
        self._ssh_private_key = ssh_private_key
        return self

    def with_ssh_private_key_passphrase(self, passphrase: str | None) -> ScmProviderInitializationBuilder:
        self._ssh_private_key_passphrase = passphrase
        return self

    def with_console(self, console: ConsoleProtocol | None) -> ScmProviderInitializationBuilder:
        self._console = console
        return self

    def build(self) -> ScmProviderInitialization:
        return ScmProviderInitialization(
            working_directory=self._working_directory,
            username=self._username,
            password=self._password,
            ssh_private_key=self._ssh_private_key,
            ssh_private_key_passphrase=self._ssh_private_key_passphrase,
            console=self._console,
        )
