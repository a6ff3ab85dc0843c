"""Release pipeline: context, step contract, registry and runner."""

from mrel.pipeline.context import ExecutionContext
from mrel.pipeline.runner import PipelineReport, PipelineRunner, StepRegistry
from mrel.pipeline.step import ProcessingStep, Severity, StepDescriptor, StepFailure

__all__ = [
    "ExecutionContext",
    "PipelineReport",
    "PipelineRunner",
    "ProcessingStep",
    "Severity",
    "StepDescriptor",
    "StepFailure",
    "StepRegistry",
]
