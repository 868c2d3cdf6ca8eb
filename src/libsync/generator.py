from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from libsync.annotator import StatusAnnotator
from libsync.config import SyncConfig
from libsync.models import Dependency, GradleConfig


@dataclass(frozen=True)
class Reference:
    """Points at a constant declared in another generated module."""

    module: str
    name: str


@dataclass(frozen=True)
class Constant:
    name: str
    literal: str
    "String literal part of the value"

    reference: Optional[Reference] = None
    "Constant whose value is appended to `literal`"

    comment: Optional[str] = None
    "Status annotation, rendered as a code comment"

    doc: Optional[str] = None
    "Documentation, rendered as KDoc"


@dataclass(frozen=True)
class GeneratedModule:
    name: str
    doc: Optional[str]
    constants: Tuple[Constant, ...]
    nested: Tuple["GeneratedModule", ...] = ()

    def constant(self, name: str) -> Constant:
        for constant in self.constants:
            if constant.name == name:
                return constant
        raise KeyError(f"{self.name} has no constant named {name!r}")


@dataclass(frozen=True)
class GeneratedModules:
    versions: GeneratedModule
    libs: GeneratedModule

    def __iter__(self) -> Iterator[GeneratedModule]:
        yield self.versions
        yield self.libs

    def value_of(self, constant: Constant) -> str:
        """Effective string value of `constant`, following its reference if any."""
        if constant.reference is None:
            return constant.literal

        modules = {module.name: module for module in self}
        target = modules[constant.reference.module].constant(constant.reference.name)
        return constant.literal + self.value_of(target)


class ModuleGenerator:
    """Builds the Versions and Libs module descriptions."""

    def __init__(
        self,
        config: Optional[SyncConfig] = None,
        annotator: Optional[StatusAnnotator] = None,
    ):
        self.config = config or SyncConfig()
        self.annotator = annotator or StatusAnnotator()

    def generate(
        self, dependencies: Sequence[Dependency], gradle: GradleConfig
    ) -> GeneratedModules:
        """
        Generates both modules from resolved dependencies.

        Args:
            dependencies: Dependencies returned by the name resolver, in output order.
            gradle: The Gradle versions found in the report.

        Returns:
            The Versions and Libs module descriptions.
        """
        for dependency in dependencies:
            if dependency.escaped_name is None:
                raise ValueError(
                    f"{dependency.group}:{dependency.name} has no resolved name"
                )

        return GeneratedModules(
            versions=self._versions(dependencies, gradle),
            libs=self._libs(dependencies),
        )

    def _versions(
        self, dependencies: Sequence[Dependency], gradle: GradleConfig
    ) -> GeneratedModule:
        constants = tuple(
            Constant(
                name=d.escaped_name,
                literal=d.version,
                comment=self.annotator.annotate(d),
            )
            for d in dependencies
        )
        return GeneratedModule(
            name=self.config.versions_class_name,
            doc=self.config.generated_header,
            constants=constants,
            nested=(self._gradle(gradle),),
        )

    def _gradle(self, gradle: GradleConfig) -> GeneratedModule:
        constants: List[Constant] = [
            Constant("runningVersion", gradle.running.version),
            Constant("currentVersion", gradle.current.version),
            Constant("nightlyVersion", gradle.nightly.version),
            Constant("releaseCandidate", gradle.release_candidate.version),
        ]
        return GeneratedModule(
            name=self.config.gradle_class_name, doc=None, constants=tuple(constants)
        )

    def _libs(self, dependencies: Sequence[Dependency]) -> GeneratedModule:
        constants = tuple(
            Constant(
                name=d.escaped_name,
                literal=d.coordinate,
                reference=Reference(self.config.versions_class_name, d.escaped_name),
                doc=f"[{d.name} website]({d.project_url})" if d.project_url else None,
            )
            for d in dependencies
        )
        return GeneratedModule(
            name=self.config.libs_class_name,
            doc=self.config.generated_header,
            constants=constants,
        )
