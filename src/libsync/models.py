from dataclasses import dataclass, field
from typing import Any, List, Optional, Self

from libsync.types import MalformedReportError


def _optional_str(payload: dict, key: str, where: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedReportError(f"{where}: field '{key}' must be a string")
    return value


def _required_str(payload: dict, key: str, where: str) -> str:
    if key not in payload or payload[key] is None:
        raise MalformedReportError(f"{where}: missing required field '{key}'")
    value = payload[key]
    if not isinstance(value, str):
        raise MalformedReportError(f"{where}: field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class AvailableDependency:
    release: Optional[str] = None
    "Newer version in the release channel"

    milestone: Optional[str] = None
    "Newer version in the milestone channel"

    integration: Optional[str] = None
    "Newer version in the integration channel"

    @classmethod
    def from_payload(cls, payload: Any, where: str) -> Self:
        if not isinstance(payload, dict):
            raise MalformedReportError(f"{where}: 'available' must be an object")
        return cls(
            release=_optional_str(payload, "release", where),
            milestone=_optional_str(payload, "milestone", where),
            integration=_optional_str(payload, "integration", where),
        )


@dataclass(frozen=True)
class Dependency:
    """A single entry of one of the report buckets."""

    group: str
    name: str
    version: str
    "Version currently pinned in the build"

    latest: Optional[str] = None
    "Set when the pinned version exceeds the latest one found"

    reason: Optional[str] = None
    "Why the update check failed, may span several lines"

    available: Optional[AvailableDependency] = None
    project_url: Optional[str] = None

    escaped_name: Optional[str] = field(default=None, compare=False)
    "Resolved constant name, only set on instances returned by the resolver"

    @property
    def coordinate(self) -> str:
        return f"{self.group}:{self.name}:"

    @classmethod
    def from_payload(cls, payload: Any, where: str) -> Self:
        if not isinstance(payload, dict):
            raise MalformedReportError(f"{where}: dependency must be an object")

        group = _required_str(payload, "group", where)
        name = _required_str(payload, "name", where)
        if not group or not name:
            raise MalformedReportError(f"{where}: 'group' and 'name' must not be empty")

        available = payload.get("available")
        return cls(
            group=group,
            name=name,
            version=_required_str(payload, "version", where),
            latest=_optional_str(payload, "latest", where),
            reason=_optional_str(payload, "reason", where),
            available=(
                AvailableDependency.from_payload(available, where)
                if available is not None
                else None
            ),
            project_url=_optional_str(payload, "projectUrl", where),
        )


@dataclass(frozen=True)
class GradleVersion:
    version: str = ""

    @classmethod
    def from_payload(cls, payload: Any, where: str) -> Self:
        if not isinstance(payload, dict):
            raise MalformedReportError(f"{where}: must be an object")
        return cls(version=_optional_str(payload, "version", where) or "")


@dataclass(frozen=True)
class GradleConfig:
    """Versions of Gradle itself, one per release channel."""

    running: GradleVersion
    current: GradleVersion
    nightly: GradleVersion
    release_candidate: GradleVersion

    @classmethod
    def from_payload(cls, payload: Any) -> Self:
        if not isinstance(payload, dict):
            raise MalformedReportError("gradle: must be an object")

        def channel(key: str) -> GradleVersion:
            if key not in payload:
                raise MalformedReportError(f"gradle: missing required field '{key}'")
            return GradleVersion.from_payload(payload[key], f"gradle.{key}")

        return cls(
            running=channel("running"),
            current=channel("current"),
            nightly=channel("nightly"),
            release_candidate=channel("releaseCandidate"),
        )


@dataclass(frozen=True)
class DependencyGraph:
    current: List[Dependency]
    exceeded: List[Dependency]
    outdated: List[Dependency]
    gradle: GradleConfig

    def dependencies(self) -> List[Dependency]:
        """All buckets flattened into a single sequence, in report order."""
        return [*self.current, *self.exceeded, *self.outdated]
