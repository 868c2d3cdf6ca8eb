import enum
from typing import Callable, List, Optional, Tuple

from libsync.models import AvailableDependency, Dependency

MAX_REASON_LINES = 4
TRUNCATION_MARKER = "...."


class DependencyStatus(enum.Enum):
    UP_TO_DATE = "up-to-date"
    OUTDATED = "outdated"
    EXCEEDED = "exceeded"
    REJECTED = "rejected"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def _rejection(dependency: Dependency) -> str:
    lines = (dependency.reason or "").splitlines()
    shorter = lines[:MAX_REASON_LINES]
    if len(lines) > MAX_REASON_LINES:
        shorter.append(TRUNCATION_MARKER)
    return "error: " + "\n".join(shorter)


def describe_available(available: AvailableDependency) -> str:
    """Describes the most stable channel in which an upgrade exists."""
    for channel in ("release", "milestone", "integration"):
        version = getattr(available, channel)
        if not _is_blank(version):
            return f"available: {channel}={version}"
    return f"available: {available!r}"


Rule = Tuple[
    Callable[[Dependency], bool], DependencyStatus, Callable[[Dependency], str]
]

# Evaluated in order, the first matching predicate wins.
RULES: List[Rule] = [
    (
        lambda d: not _is_blank(d.latest),
        DependencyStatus.EXCEEDED,
        lambda d: f"exceeds the version found: {d.latest}",
    ),
    (
        lambda d: not _is_blank(d.reason),
        DependencyStatus.REJECTED,
        _rejection,
    ),
    (
        lambda d: d.available is not None,
        DependencyStatus.OUTDATED,
        lambda d: describe_available(d.available),
    ),
    (
        lambda d: True,
        DependencyStatus.UP_TO_DATE,
        lambda d: "up-to-date",
    ),
]


class StatusAnnotator:
    """Describes the update status of a dependency for the generated comments."""

    def __init__(self, rules: Optional[List[Rule]] = None):
        self.rules = rules if rules is not None else RULES

    def _match(self, dependency: Dependency) -> Rule:
        for rule in self.rules:
            predicate = rule[0]
            if predicate(dependency):
                return rule
        raise LookupError(f"No status rule matches {dependency.group}:{dependency.name}")

    def status(self, dependency: Dependency) -> DependencyStatus:
        return self._match(dependency)[1]

    def annotate(self, dependency: Dependency) -> str:
        """
        Returns the comment text for a dependency, without comment delimiters.

        Single line except for rejected updates, which keep up to four lines
        of the rejection reason.
        """
        _, _, formatter = self._match(dependency)
        return formatter(dependency)
