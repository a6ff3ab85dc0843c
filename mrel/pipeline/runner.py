"""Step registry and sequential pipeline runner.

The registry is built explicitly at startup. The runner executes its steps one
at a time in ``(order, id)`` order and stops at the first failure: no later
step runs once a step has returned ``Err``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.pipeline.context import ExecutionContext
from mrel.pipeline.step import ProcessingStep, Severity, StepFailure

__all__ = ["PipelineReport", "PipelineRunner", "StepRegistry"]


class StepRegistry:
    """Ordered table of the steps of a release."""

    def __init__(self, steps: Iterable[ProcessingStep] = ()) -> None:
        self._steps: dict[str, ProcessingStep] = {}
        for step in steps:
            self.register(step)

    def register(self, step: ProcessingStep) -> None:
        """Add a step.

        Raises:
            ValueError: If another step already uses the same id.
        """
        step_id = step.descriptor.id
        if step_id in self._steps:
            raise ValueError(f"Duplicate step id: {step_id}")
        self._steps[step_id] = step

    def get(self, step_id: str) -> ProcessingStep | None:
        return self._steps.get(step_id)

    def ordered(self) -> list[ProcessingStep]:
        return sorted(self._steps.values(), key=lambda s: (s.descriptor.order, s.descriptor.id))

    def select(self, step_ids: Iterable[str]) -> StepRegistry:
        """Registry restricted to ``step_ids``; order still comes from descriptors.

        Raises:
            ValueError: If an id is unknown.
        """
        selected: list[ProcessingStep] = []
        for step_id in step_ids:
            step = self._steps.get(step_id)
            if step is None:
                raise ValueError(f"Unknown step: {step_id}")
            selected.append(step)
        return StepRegistry(selected)

    def __iter__(self) -> Iterator[ProcessingStep]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._steps


@dataclass(frozen=True, slots=True)
class PipelineReport:
    """Outcome of a pipeline that ran to completion.

    Attributes:
        executed: Ids of the steps that ran, in execution order
    """

    executed: tuple[str, ...]


class PipelineRunner:
    """Runs a registry against one execution context.

    An offline run that includes a step requiring network access is refused
    before any step runs. Steps are never skipped.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def admit(self, registry: StepRegistry, context: ExecutionContext) -> Result[None, StepFailure]:
        """Refuse an offline run that selects an online-only step."""
        if context.online:
            return Ok(None)
        online_only = [s.descriptor.id for s in registry.ordered() if s.descriptor.requires_online]
        if not online_only:
            return Ok(None)
        for step_id in online_only:
            self._console.error(f"step '{step_id}' requires online access")
        return Err(
            StepFailure(
                step_id=online_only[0],
                kind="requires_online",
                message=f"The run is offline but {len(online_only)} selected step(s) need network access",
                severity=Severity.ERROR,
                hint="run online, or drop the offline option",
            )
        )

    def run(self, registry: StepRegistry, context: ExecutionContext) -> Result[PipelineReport, StepFailure]:
        admitted = self.admit(registry, context)
        if isinstance(admitted, Err):
            return admitted

        steps = registry.ordered()
        executed: list[str] = []
        for step in steps:
            descriptor = step.descriptor
            self._console.header(f"{descriptor.id}: {descriptor.description}")
            outcome = step.execute(context)
            executed.append(descriptor.id)
            if isinstance(outcome, Err):
                failure = outcome.error
                self._console.error(f"step '{descriptor.id}' aborted the release ({failure.severity})")
                return outcome

        return Ok(PipelineReport(executed=tuple(executed)))
