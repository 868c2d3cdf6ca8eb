import pathlib
from dataclasses import dataclass, field
from typing import FrozenSet

DEFAULT_REPORT_PATH = pathlib.Path("build/dependencyUpdates/report.json")
DEFAULT_OUTPUT_DIR = pathlib.Path("buildSrc/src/main/java")

# Names too generic to be useful as `Libs.core` etc.
# Many of them come from https://developer.android.com/jetpack/androidx/migrate
GENERIC_NAMES: FrozenSet[str] = frozenset(
    {
        "collection",
        "common",
        "compiler",
        "core",
        "core-testing",
        "db",
        "extensions",
        "io",
        "loader",
        "media",
        "migration",
        "monitor",
        "print",
        "rules",
        "runner",
        "runtime",
        "testing",
    }
)

GENERATED_HEADER = """\
Generated by [gradle-kotlin-dsl-libs](https://github.com/jmfayard/gradle-kotlin-dsl-libs)

Run again
  `$ ./gradlew syncLibs`
to update this file"""

INITIAL_BUILD_GRADLE_KTS = """\
plugins {
    `kotlin-dsl`
}
repositories {
    jcenter()
}
"""


@dataclass(frozen=True)
class SyncConfig:
    """
    Settings for one run of the pipeline.

    Relative paths are resolved against `project_dir`.
    """

    project_dir: pathlib.Path = field(default_factory=pathlib.Path)
    report_path: pathlib.Path = DEFAULT_REPORT_PATH
    output_dir: pathlib.Path = DEFAULT_OUTPUT_DIR
    libs_class_name: str = "Libs"
    versions_class_name: str = "Versions"
    gradle_class_name: str = "Gradle"
    denylist: FrozenSet[str] = GENERIC_NAMES
    generated_header: str = GENERATED_HEADER
    initial_build_script: str = INITIAL_BUILD_GRADLE_KTS

    @property
    def report_file(self) -> pathlib.Path:
        return self.project_dir / self.report_path

    @property
    def output_path(self) -> pathlib.Path:
        return self.project_dir / self.output_dir

    @property
    def libs_file(self) -> pathlib.Path:
        return self.output_path / f"{self.libs_class_name}.kt"
