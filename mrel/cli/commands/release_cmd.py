from __future__ import annotations

from pathlib import Path

import typer

from mrel.cli.commands._helpers import run_pipeline
from mrel.cli.context import DEFAULT_CONFIG_FILE, DEFAULT_REACTOR_FILE, RunOptions, build_context
from mrel.output.console import RichConsole, Style
from mrel.services.release import CHECK_STEP_IDS
from mrel.steps import CheckAlreadyReleased, CheckScmStatus, PushScm, TagScm

_CONFIG_OPTION = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to mrel.toml")
_REACTOR_OPTION = typer.Option(DEFAULT_REACTOR_FILE, "--reactor", "-r", help="Path to the reactor manifest")
_OFFLINE_OPTION = typer.Option(None, "--offline/--online", help="Run without network access; steps that need it abort the run")
_ALLOW_LOCAL_OPTION = typer.Option(
    None,
    "--allow-local-release-artifacts/--deny-local-release-artifacts",
    help="Only warn about release artifacts found in the local repository",
)
_RELEASE_VERSION_OPTION = typer.Option(
    None, "--release-version", help="Release version for modules without their own override"
)
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug output")


def check(
    config: Path = _CONFIG_OPTION,
    reactor: Path = _REACTOR_OPTION,
    offline: bool | None = _OFFLINE_OPTION,
    allow_local_release_artifacts: bool | None = _ALLOW_LOCAL_OPTION,
    release_version: str | None = _RELEASE_VERSION_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Check that no module has already been released."""
    ctx = build_context(
        RunOptions(
            config_path=config,
            reactor_path=reactor,
            offline=offline,
            allow_local_release_artifacts=allow_local_release_artifacts,
            release_version=release_version,
            verbose=verbose,
        )
    )
    run_pipeline(ctx, CHECK_STEP_IDS)


def release(
    config: Path = _CONFIG_OPTION,
    reactor: Path = _REACTOR_OPTION,
    offline: bool | None = _OFFLINE_OPTION,
    allow_local_release_artifacts: bool | None = _ALLOW_LOCAL_OPTION,
    release_version: str | None = _RELEASE_VERSION_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Run every release step: checks, tag, push."""
    ctx = build_context(
        RunOptions(
            config_path=config,
            reactor_path=reactor,
            offline=offline,
            allow_local_release_artifacts=allow_local_release_artifacts,
            release_version=release_version,
            verbose=verbose,
        )
    )
    run_pipeline(ctx, None)


def steps() -> None:
    """List the release steps in execution order."""
    console = RichConsole()
    descriptors = sorted(
        (s.descriptor for s in (CheckScmStatus, CheckAlreadyReleased, TagScm, PushScm)),
        key=lambda d: (d.order, d.id),
    )
    for d in descriptors:
        online = " (online)" if d.requires_online else ""
        console.print(f"{d.order:>3}  {d.id}{online}", Style.HEADER)
        console.print(f"     {d.description}", Style.DIM)
