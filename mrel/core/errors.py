"""Error codes and construction-time errors.

``ErrorCode`` maps release outcomes to shell exit codes. The exception
classes cover faults that must stop the program before any release step runs.
"""

from enum import IntEnum

__all__ = ["ConfigurationError", "ErrorCode", "MetadataLookupError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad arguments)
    - 2: Configuration error (unreadable config or reactor manifest)
    - 3: Release blocked (a check found an offending module)
    - 4: Network error (a repository could not be queried)
    - 5: SCM error (git failed, dirty working copy, tag clash)
    - 6: Internal error (pipeline wiring fault)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    RELEASE_BLOCKED = 3
    NETWORK_ERROR = 4
    SCM_ERROR = 5
    INTERNAL_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK


class ConfigurationError(ValueError):
    """Mandatory initialization input is missing or malformed."""


class MetadataLookupError(LookupError):
    """Release metadata was requested for a module or phase never registered.

    This points at a pipeline ordering bug (a step ran before the metadata was
    populated), not at something the operator can fix.
    """

    def __init__(self, group_id: str, artifact_id: str, phase: object | None = None) -> None:
        self.group_id = group_id
        self.artifact_id = artifact_id
        self.phase = phase
        target = f"{group_id}:{artifact_id}"
        if phase is None:
            super().__init__(f"no release metadata registered for module {target}")
        else:
            super().__init__(f"no {phase} coordinates registered for module {target}")
