"""Tests for mrel.scm.initialization module."""

from __future__ import annotations

from pathlib import Path

import pytest

from mrel.core.errors import ConfigurationError
from mrel.output.console import MockConsole
from mrel.scm.initialization import ScmProviderInitialization, ScmProviderInitializationBuilder


class TestBuilder:
    def test_missing_working_directory_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="working directory for the SCM provider must be specified"):
            ScmProviderInitializationBuilder(None)

    def test_defaults(self, tmp_path: Path) -> None:
        init = ScmProviderInitializationBuilder(tmp_path).build()
        assert init.working_directory == tmp_path
        assert init.username is None
        assert init.password is None
        assert init.ssh_private_key is None
        assert init.ssh_private_key_passphrase is None
        assert init.console is None

    def test_accepts_str(self) -> None:
        init = ScmProviderInitializationBuilder("checkout").build()
        assert init.working_directory == Path("checkout")

    def test_working_directory_need_not_exist(self, tmp_path: Path) -> None:
        target = tmp_path / "not" / "yet"
        assert ScmProviderInitializationBuilder(target).build().working_directory == target

    def test_all_fields(self, tmp_path: Path) -> None:
        console = MockConsole()
        init = (
            ScmProviderInitializationBuilder(tmp_path)
            .with_username("release-bot")
            .with_password("token")
            .with_ssh_private_key("~/.ssh/id_ed25519")
            .with_ssh_private_key_passphrase("phrase")
            .with_console(console)
            .build()
        )
        assert init.username == "release-bot"
        assert init.password == "token"
        assert init.ssh_private_key == "~/.ssh/id_ed25519"
        assert init.ssh_private_key_passphrase == "phrase"
        assert init.console is console

    def test_setter_order_does_not_matter(self, tmp_path: Path) -> None:
        a = (
            ScmProviderInitializationBuilder(tmp_path)
            .with_username("u")
            .with_password("p")
            .with_ssh_private_key("k")
            .build()
        )
        b = (
            ScmProviderInitializationBuilder(tmp_path)
            .with_ssh_private_key("k")
            .with_password("p")
            .with_username("u")
            .build()
        )
        assert a == b

    def test_last_value_wins(self, tmp_path: Path) -> None:
        init = ScmProviderInitializationBuilder(tmp_path).with_username("a").with_username("b").build()
        assert init.username == "b"

    def test_passphrase_without_key_is_accepted(self, tmp_path: Path) -> None:
        init = ScmProviderInitializationBuilder(tmp_path).with_ssh_private_key_passphrase("phrase").build()
        assert init.ssh_private_key is None
        assert init.ssh_private_key_passphrase == "phrase"

    def test_builds_are_independent(self, tmp_path: Path) -> None:
        builder = ScmProviderInitializationBuilder(tmp_path).with_username("first")
        first = builder.build()
        second = builder.with_username("second").build()
        assert first.username == "first"
        assert second.username == "second"


class TestScmProviderInitialization:
    def test_direct_construction_rejects_none(self) -> None:
        with pytest.raises(ConfigurationError):
            ScmProviderInitialization(working_directory=None)  # type: ignore[arg-type]

    def test_frozen(self, tmp_path: Path) -> None:
        init = ScmProviderInitialization(working_directory=tmp_path)
        with pytest.raises(AttributeError):
            init.username = "x"  # type: ignore[misc]

    def test_auth_flags(self, tmp_path: Path) -> None:
        assert ScmProviderInitialization(tmp_path, ssh_private_key="k").has_ssh_key
        assert not ScmProviderInitialization(tmp_path).has_ssh_key
        assert ScmProviderInitialization(tmp_path, username="u").has_password_auth

    def test_console_ignored_for_equality(self, tmp_path: Path) -> None:
        assert ScmProviderInitialization(tmp_path, console=MockConsole()) == ScmProviderInitialization(tmp_path)

    def test_repr_masks_secrets(self, tmp_path: Path) -> None:
        init = ScmProviderInitialization(
            tmp_path, username="bot", password="s3cret", ssh_private_key_passphrase="phrase"
        )
        text = repr(init)
        assert "s3cret" not in text
        assert "phrase" not in text
        assert "bot" in text
