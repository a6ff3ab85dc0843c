"""Tests for mrel.pipeline.step module."""

from __future__ import annotations

import pytest

from mrel.core.coordinates import ArtifactCoordinates
from mrel.pipeline.step import Severity, StepDescriptor, StepFailure


class TestStepDescriptor:
    def test_defaults(self) -> None:
        descriptor = StepDescriptor(id="check", description="Checks", order=10)
        assert descriptor.requires_online is False

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="Step id cannot be empty"):
            StepDescriptor(id="", description="x", order=1)


class TestStepFailure:
    def test_defaults(self) -> None:
        failure = StepFailure(step_id="s", kind="invalid_state", message="broken")
        assert failure.severity is Severity.FAILURE
        assert failure.offending == ()
        assert failure.hint is None

    def test_pretty(self) -> None:
        failure = StepFailure(
            step_id="checkAlreadyReleased",
            kind="already_released_remote",
            message="Already released",
            offending=(
                ArtifactCoordinates("g", "a", "1.0"),
                ArtifactCoordinates("g", "b", "1.0"),
            ),
            hint="check your repositories",
        )
        assert failure.pretty() == (
            "[already_released_remote] Already released: g:a:pom:1.0, g:b:pom:1.0 "
            "(hint: check your repositories)"
        )

    def test_severity_str(self) -> None:
        assert str(Severity.ERROR) == "error"
        assert str(Severity.FAILURE) == "failure"
