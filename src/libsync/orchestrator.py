import pathlib
import random
import sys
import textwrap
import warnings
from dataclasses import dataclass
from typing import List, Optional

from libsync.annotator import StatusAnnotator
from libsync.config import SyncConfig
from libsync.generator import GeneratedModules, ModuleGenerator
from libsync.models import Dependency
from libsync.parser import ReportParser
from libsync.renderer import KotlinRenderer
from libsync.resolver import NameResolver
from libsync.types import EmptyInputWarning, ModuleWriter
from libsync.writer import ModuleFileWriter, create_basic_structure


@dataclass(frozen=True)
class SyncResult:
    dependencies: List[Dependency]
    "Resolved dependencies, in output order"

    modules: GeneratedModules


class SyncLibsOrchestrator:
    """
    Orchestrates the report to Kotlin constants workflow.

    Parses the report, resolves constant names, annotates the update status
    of each dependency and generates the Versions and Libs modules. Writing
    is delegated to a ModuleWriter so that nothing is written unless both
    modules were produced.
    """

    def __init__(
        self,
        config: Optional[SyncConfig] = None,
        writer: Optional[ModuleWriter] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the orchestrator with necessary components.

        Args:
            config: Settings for the run. Defaults to SyncConfig().
            writer: Destination of the rendered files. Defaults to a
                    ModuleFileWriter targeting `config.output_path`.
            rng: Random source used to pick the example in the help message.
        """
        self.config = config or SyncConfig()
        self.parser = ReportParser()
        self.resolver = NameResolver(self.config.denylist)
        self.annotator = StatusAnnotator()
        self.generator = ModuleGenerator(self.config, self.annotator)
        self.renderer = KotlinRenderer()
        self.writer = writer or ModuleFileWriter(self.config.output_path)
        self.rng = rng or random.Random()

    def process_report(self, content: str) -> SyncResult:
        """
        Runs the pipeline on the text of a report.

        Args:
            content: The JSON report produced by `./gradlew dependencyUpdates`.

        Returns:
            The resolved dependencies and both generated modules.

        Raises:
            MalformedReportError: If the report cannot be parsed.
        """
        graph = self.parser.parse(content)
        flattened = graph.dependencies()

        if not flattened:
            warnings.warn(
                "The report lists no dependency, only Gradle versions will be generated",
                EmptyInputWarning,
                stacklevel=2,
            )

        dependencies = self.resolver.resolve(flattened)
        modules = self.generator.generate(dependencies, graph.gradle)
        return SyncResult(dependencies=dependencies, modules=modules)

    def generate(self, content: str) -> GeneratedModules:
        return self.process_report(content).modules

    def process_from_file(self, filepath: Optional[pathlib.Path] = None) -> SyncResult:
        """
        Runs the pipeline on a report file.

        Args:
            filepath: Path of the report. Defaults to `config.report_file`.
        """
        path = filepath or self.config.report_file
        return self.process_report(path.read_text(encoding="utf-8"))

    def render(self, modules: GeneratedModules) -> dict[str, str]:
        return self.renderer.render_all(modules)

    def sync(self, content: str) -> List[pathlib.Path]:
        """
        Generates and writes both Kotlin files from the text of a report.

        Returns:
            The paths written by the writer.
        """
        result = self.process_report(content)
        sources = self.render(result.modules)
        return self.writer.write(sources)

    def sync_project(self) -> List[pathlib.Path]:
        """
        Full `syncLibs` run on `config.project_dir`.

        Reads the report, creates the buildSrc scaffolding if needed and
        writes Versions.kt and Libs.kt, printing help messages to stderr.
        """
        file_existed = self.config.libs_file.exists()
        print(self.help_message_before(self.config.report_file), file=sys.stderr)

        result = self.process_from_file()
        sources = self.render(result.modules)

        create_basic_structure(
            self.config.project_dir,
            self.config.output_dir,
            self.config.initial_build_script,
        )
        written = self.writer.write(sources)

        print(
            self.help_message_after(
                file_existed, self.config.libs_file, result.dependencies
            ),
            file=sys.stderr,
        )
        return written

    def help_message_before(self, report_path: pathlib.Path) -> str:
        return textwrap.dedent(
            f"""\
            Done running $ ./gradlew dependencyUpdates   # com.github.ben-manes:gradle-versions-plugin
            Reading info about your dependencies from {report_path.absolute()}"""
        )

    def help_message_after(
        self,
        file_existed: bool,
        output_file: pathlib.Path,
        dependencies: List[Dependency],
    ) -> str:
        created_or_updated = "Updated file" if file_existed else "Created file"
        some_dependency = (
            self.rng.choice(dependencies).escaped_name if dependencies else "xxx"
        )
        libs = self.config.libs_class_name

        lines = [
            f"{created_or_updated} {output_file.absolute()}",
            "",
            "It contains meta-data about all your dependencies, including available updates and links to the website",
            "",
            "Its content is available in all your build.gradle and build.gradle.kts",
            "",
            "// build.gradle or build.gradle.kts",
            "dependencies {",
            f"   {libs}.{some_dependency}",
            "}",
            "",
            "Run again the task any time you add a dependency or want to check for updates",
            "   $ ./gradlew syncLibs",
        ]
        return "\n".join(lines)
