import json
import pathlib
from typing import Any, List

from libsync.models import Dependency, DependencyGraph, GradleConfig
from libsync.types import MalformedReportError

BUCKETS = ("current", "exceeded", "outdated")


class ReportParser:
    """Parses the JSON report written by `./gradlew dependencyUpdates`."""

    def parse(self, content: str) -> DependencyGraph:
        """
        Parses a report and returns the dependency graph it describes.

        Args:
            content: The JSON text of the report.

        Returns:
            A DependencyGraph with the three dependency buckets and the Gradle versions.

        Raises:
            MalformedReportError: If the content is not JSON or a required field is missing.
        """
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedReportError(f"Report is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise MalformedReportError("Report must be a JSON object")

        buckets = {bucket: self._parse_bucket(payload, bucket) for bucket in BUCKETS}

        if "gradle" not in payload:
            raise MalformedReportError("Report is missing the 'gradle' object")

        return DependencyGraph(
            current=buckets["current"],
            exceeded=buckets["exceeded"],
            outdated=buckets["outdated"],
            gradle=GradleConfig.from_payload(payload["gradle"]),
        )

    def parse_file(self, path: pathlib.Path) -> DependencyGraph:
        """Reads and parses the report stored at `path`."""
        return self.parse(path.read_text(encoding="utf-8"))

    def _parse_bucket(self, payload: dict, bucket: str) -> List[Dependency]:
        section: Any = payload.get(bucket)
        if section is None:
            return []

        # The scanner wraps each bucket as {"count": n, "dependencies": [...]}
        if isinstance(section, dict):
            section = section.get("dependencies", [])

        if not isinstance(section, list):
            raise MalformedReportError(f"{bucket}: must be a list of dependencies")

        return [
            Dependency.from_payload(entry, f"{bucket}[{index}]")
            for index, entry in enumerate(section)
        ]
