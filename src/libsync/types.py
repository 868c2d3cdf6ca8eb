import pathlib
from typing import Protocol


class MalformedReportError(ValueError):
    """The dependency report is not JSON or lacks a required field."""


class EmptyInputWarning(UserWarning):
    """The dependency report lists no dependency at all."""


class ModuleWriter(Protocol):
    """Protocol for objects that persist rendered Kotlin sources."""

    def write(self, sources: dict[str, str]) -> list[pathlib.Path]:
        """
        Persist rendered sources.

        Args:
            sources: Mapping of module name to rendered source text.

        Returns:
            The paths that were written, in the order of ``sources``.
        """
        ...
