"""Execution context shared by the steps of one pipeline run."""

from __future__ import annotations

from collections.abc import Iterator

__all__ = ["ExecutionContext"]


class ExecutionContext:
    """Per-run state passed by reference to every step.

    ``online`` is decided once when the run starts. The scratch values let a
    step publish results for steps ordered after it; a step must not rely on a
    value from a step that is not declared to run earlier.
    """

    def __init__(self, *, online: bool = True) -> None:
        self._online = online
        self._values: dict[str, object] = {}

    @property
    def online(self) -> bool:
        return self._online

    def set(self, key: str, value: object) -> None:
        self._values[key] = value

    def get(self, key: str, default: object = None) -> object:
        return self._values.get(key, default)

    def require(self, key: str) -> object:
        """Return a value an earlier step must have published.

        Raises:
            KeyError: If no step published ``key``.
        """
        if key not in self._values:
            raise KeyError(f"no earlier step published '{key}'")
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"ExecutionContext(online={self._online}, keys={sorted(self._values)})"
