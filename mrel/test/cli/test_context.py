from __future__ import annotations

from pathlib import Path

import pytest
import typer

from mrel.cli.context import RunOptions, apply_options, build_context
from mrel.core.config import ENV_SCM_PASSWORD, Config
from mrel.core.errors import ErrorCode

REACTOR_TOML = """
[[modules]]
group_id = "com.example"
artifact_id = "core"
version = "1.0.0-SNAPSHOT"
"""


def _reactor(tmp_path: Path) -> Path:
    path = tmp_path / "reactor.toml"
    path.write_text(REACTOR_TOML, encoding="utf-8")
    return path


class TestApplyOptions:
    def test_none_keeps_config(self) -> None:
        config = Config()
        assert apply_options(config, RunOptions()) == config

    def test_overrides(self) -> None:
        config = apply_options(
            Config(),
            RunOptions(offline=True, allow_local_release_artifacts=True, release_version="3.0.0"),
        )
        assert config.release.offline is True
        assert config.release.allow_local_release_artifacts is True
        assert config.release.default_release_version == "3.0.0"

    def test_explicit_false_overrides_file(self) -> None:
        config = Config.from_dict({"release": {"offline": True}})
        assert apply_options(config, RunOptions(offline=False)).release.offline is False


class TestBuildContext:
    def test_without_config_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        ctx = build_context(RunOptions(reactor_path=_reactor(tmp_path)))
        assert ctx.config.release.offline is False
        assert [p.artifact_id for p in ctx.reactor] == ["core"]

    def test_relative_working_directory_resolved_against_config(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        config_path = config_dir / "mrel.toml"
        config_path.write_text('[scm]\nworking_directory = "../checkout"\n', encoding="utf-8")

        ctx = build_context(RunOptions(config_path=config_path, reactor_path=_reactor(tmp_path)))

        assert Path(ctx.config.scm.working_directory) == config_dir.resolve() / "../checkout"

    def test_env_secrets_applied(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_SCM_PASSWORD, "from-env")
        monkeypatch.chdir(tmp_path)
        ctx = build_context(RunOptions(reactor_path=_reactor(tmp_path)))
        assert ctx.config.scm.password == "from-env"

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc:
            build_context(RunOptions(config_path=tmp_path / "other.toml", reactor_path=_reactor(tmp_path)))
        assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)

    def test_invalid_config(self, tmp_path: Path) -> None:
        config_path = tmp_path / "mrel.toml"
        config_path.write_text("[release\n", encoding="utf-8")
        with pytest.raises(typer.Exit) as exc:
            build_context(RunOptions(config_path=config_path, reactor_path=_reactor(tmp_path)))
        assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)

    def test_missing_reactor(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(typer.Exit) as exc:
            build_context(RunOptions(reactor_path=tmp_path / "reactor.toml"))
        assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
