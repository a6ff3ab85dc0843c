"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from mrel.core.errors import ErrorCode, MetadataLookupError
from mrel.core.result import Err, Ok
from mrel.output.console import Style
from mrel.pipeline.step import StepFailure
from mrel.services.release import ReleaseService

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mrel.cli.context import CLIContext


def exit_code_for(failure: StepFailure) -> ErrorCode:
    match failure.kind:
        case "already_released_remote" | "already_released_local":
            return ErrorCode.RELEASE_BLOCKED
        case "resolution_failed":
            return ErrorCode.NETWORK_ERROR
        case "scm_dirty" | "scm_failed" | "tag_exists":
            return ErrorCode.SCM_ERROR
        case "invalid_state":
            return ErrorCode.INTERNAL_ERROR
        case "requires_online":
            return ErrorCode.USER_ERROR


def report_failure(ctx: CLIContext, failure: StepFailure) -> NoReturn:
    """Print the abort report and exit with the matching code."""
    console = ctx.console
    console.error(f"{failure.message} [{failure.kind}]")
    for coordinates in failure.offending:
        console.print(f"  {coordinates}", Style.ERROR)
    if failure.hint:
        console.print(f"hint: {failure.hint}", Style.DIM)
    raise typer.Exit(code=int(exit_code_for(failure)))


def run_pipeline(ctx: CLIContext, step_ids: Sequence[str] | None) -> None:
    service = ReleaseService(config=ctx.config, reactor=ctx.reactor, console=ctx.console)
    try:
        outcome = service.run(step_ids)
    except MetadataLookupError as e:
        ctx.console.error(f"internal error: {e}")
        raise typer.Exit(code=int(ErrorCode.INTERNAL_ERROR))

    match outcome:
        case Err(failure):
            report_failure(ctx, failure)
        case Ok(report):
            ctx.console.success(f"{len(report.executed)} step(s) passed")
