from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
import typer

from mrel.cli.context import CLIContext, RunOptions
from mrel.core.config import Config, ReleaseConfig
from mrel.core.coordinates import ArtifactCoordinates
from mrel.core.errors import ErrorCode, MetadataLookupError
from mrel.core.project import ReactorProject
from mrel.core.result import Err, Ok, Result
from mrel.output.console import MockConsole
from mrel.pipeline.runner import PipelineReport
from mrel.pipeline.step import Severity, StepFailure

REACTOR = (ReactorProject("com.example", "core", "1.0.0-SNAPSHOT"),)
CORE_RELEASE = ArtifactCoordinates("com.example", "core", "1.0.0")


def _ctx() -> CLIContext:
    return CLIContext(config=Config(), reactor=REACTOR, console=MockConsole())


def _patch(
    monkeypatch: pytest.MonkeyPatch,
    ctx: CLIContext,
    *,
    outcome: Result[PipelineReport, StepFailure] | None = None,
    raises: Exception | None = None,
) -> list[Sequence[str] | None]:
    import mrel.cli.commands._helpers as helpers
    import mrel.cli.commands.release_cmd as release_cmd

    requested: list[Sequence[str] | None] = []

    class FakeReleaseService:
        def __init__(self, **_: object) -> None:
            pass

        def run(self, step_ids: Sequence[str] | None = None) -> Result[PipelineReport, StepFailure]:
            requested.append(step_ids)
            if raises is not None:
                raise raises
            assert outcome is not None
            return outcome

    monkeypatch.setattr(release_cmd, "build_context", lambda options: ctx)
    monkeypatch.setattr(helpers, "ReleaseService", FakeReleaseService)
    return requested


def _check() -> None:
    import mrel.cli.commands.release_cmd as release_cmd

    release_cmd.check(
        config=Path("mrel.toml"),
        reactor=Path("reactor.toml"),
        offline=None,
        allow_local_release_artifacts=None,
        release_version=None,
        verbose=False,
    )


def _release() -> None:
    import mrel.cli.commands.release_cmd as release_cmd

    release_cmd.release(
        config=Path("mrel.toml"),
        reactor=Path("reactor.toml"),
        offline=None,
        allow_local_release_artifacts=None,
        release_version=None,
        verbose=False,
    )


def test_check_passes(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    requested = _patch(monkeypatch, ctx, outcome=Ok(PipelineReport(executed=("checkAlreadyReleased",))))

    _check()

    assert requested == [("checkAlreadyReleased",)]
    assert isinstance(ctx.console, MockConsole)
    assert "OK 1 step(s) passed" in ctx.console.messages


def test_check_already_released_exits_release_blocked(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    _patch(
        monkeypatch,
        ctx,
        outcome=Err(
            StepFailure(
                step_id="checkAlreadyReleased",
                kind="already_released_remote",
                message="Some of the reactor projects have already been released",
                offending=(CORE_RELEASE,),
                hint="check your remote repositories",
            )
        ),
    )

    with pytest.raises(typer.Exit) as exc:
        _check()

    assert exc.value.exit_code == int(ErrorCode.RELEASE_BLOCKED)
    assert isinstance(ctx.console, MockConsole)
    assert "  com.example:core:pom:1.0.0" in ctx.console.messages
    assert "hint: check your remote repositories" in ctx.console.messages
    assert ctx.console.find("[already_released_remote]")


def test_check_resolution_failure_exits_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    _patch(
        monkeypatch,
        ctx,
        outcome=Err(
            StepFailure(
                step_id="checkAlreadyReleased",
                kind="resolution_failed",
                message="Could not determine the release state in the remote repositories",
                severity=Severity.ERROR,
            )
        ),
    )

    with pytest.raises(typer.Exit) as exc:
        _check()

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)


def test_release_runs_all_steps(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    requested = _patch(
        monkeypatch,
        ctx,
        outcome=Ok(PipelineReport(executed=("checkScmStatus", "checkAlreadyReleased", "tagScm", "pushScm"))),
    )

    _release()

    assert requested == [None]
    assert isinstance(ctx.console, MockConsole)
    assert "OK 4 step(s) passed" in ctx.console.messages


def test_check_offline_exits_user_error(monkeypatch: pytest.MonkeyPatch) -> None:
    import mrel.cli.commands.release_cmd as release_cmd

    console = MockConsole()
    ctx = CLIContext(config=Config(release=ReleaseConfig(offline=True)), reactor=REACTOR, console=console)
    monkeypatch.setattr(release_cmd, "build_context", lambda options: ctx)

    with pytest.raises(typer.Exit) as exc:
        _check()

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert "error: step 'checkAlreadyReleased' requires online access" in console.messages
    assert console.find("[requires_online]")
    assert not console.find("step(s) passed")


def test_release_tag_clash_exits_scm_error(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    _patch(
        monkeypatch,
        ctx,
        outcome=Err(StepFailure(step_id="tagScm", kind="tag_exists", message="The release tag 'core-1.0.0' already exists")),
    )

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(ErrorCode.SCM_ERROR)


def test_metadata_lookup_error_exits_internal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx()
    _patch(monkeypatch, ctx, raises=MetadataLookupError("com.example", "core"))

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(ErrorCode.INTERNAL_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("internal error")


def test_steps_lists_descriptors_in_order(capsys: pytest.CaptureFixture[str]) -> None:
    import mrel.cli.commands.release_cmd as release_cmd

    release_cmd.steps()

    out = capsys.readouterr().out
    positions = [out.index(step_id) for step_id in ("checkScmStatus", "checkAlreadyReleased", "tagScm", "pushScm")]
    assert positions == sorted(positions)
    assert "checkAlreadyReleased (online)" in out


def test_run_options_defaults() -> None:
    options = RunOptions()
    assert options.config_path == Path("mrel.toml")
    assert options.reactor_path == Path("reactor.toml")
    assert options.offline is None
