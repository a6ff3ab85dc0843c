from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import typer

from mrel.core.config import Config, load_config
from mrel.core.errors import ErrorCode
from mrel.core.project import ReactorProject, load_reactor
from mrel.core.result import Err
from mrel.output.console import ConsoleProtocol, RichConsole

DEFAULT_CONFIG_FILE = Path("mrel.toml")
DEFAULT_REACTOR_FILE = Path("reactor.toml")


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    reactor: tuple[ReactorProject, ...]
    console: ConsoleProtocol


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Command-line overrides applied on top of the config file."""

    config_path: Path = DEFAULT_CONFIG_FILE
    reactor_path: Path = DEFAULT_REACTOR_FILE
    offline: bool | None = None
    allow_local_release_artifacts: bool | None = None
    release_version: str | None = None
    verbose: bool = False


def apply_options(config: Config, options: RunOptions) -> Config:
    release = config.release
    if options.offline is not None:
        release = replace(release, offline=options.offline)
    if options.allow_local_release_artifacts is not None:
        release = replace(release, allow_local_release_artifacts=options.allow_local_release_artifacts)
    if options.release_version is not None:
        release = replace(release, default_release_version=options.release_version)
    return replace(config, release=release)


def build_context(options: RunOptions) -> CLIContext:
    console = RichConsole(verbose=options.verbose)

    config = Config()
    if options.config_path.exists():
        config_result = load_config(options.config_path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        config = config_result.value
        # A relative working directory is relative to the config file.
        working_dir = Path(config.scm.working_directory)
        if not working_dir.is_absolute():
            working_dir = options.config_path.resolve().parent / working_dir
            config = replace(config, scm=replace(config.scm, working_directory=str(working_dir)))
    elif options.config_path != DEFAULT_CONFIG_FILE:
        typer.echo(f"error: config file not found: {options.config_path}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    reactor_result = load_reactor(options.reactor_path)
    if isinstance(reactor_result, Err):
        typer.echo(f"error: {reactor_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        config=apply_options(config.apply_env(), options),
        reactor=reactor_result.value,
        console=console,
    )
