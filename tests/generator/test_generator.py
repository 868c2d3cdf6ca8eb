import pytest

from libsync.config import GENERATED_HEADER, SyncConfig
from libsync.generator import Constant, GeneratedModules, ModuleGenerator, Reference
from libsync.models import AvailableDependency, Dependency, GradleConfig, GradleVersion
from libsync.resolver import resolve_names


@pytest.fixture
def gradle() -> GradleConfig:
    return GradleConfig(
        running=GradleVersion("4.10.2"),
        current=GradleVersion("4.10.2"),
        nightly=GradleVersion("5.1-20181023000026+0000"),
        release_candidate=GradleVersion("5.0-rc-1"),
    )


@pytest.fixture
def modules(gradle: GradleConfig) -> GeneratedModules:
    dependencies = resolve_names(
        [
            Dependency(
                "com.squareup.moshi",
                "moshi",
                "1.6.0",
                available=AvailableDependency(release="1.7.0"),
                project_url="https://github.com/square/moshi",
            ),
            Dependency("junit", "junit", "4.12"),
        ]
    )
    return ModuleGenerator().generate(dependencies, gradle)


class TestModuleGenerator:
    def test_versions_constants(self, modules: GeneratedModules) -> None:
        assert modules.versions.name == "Versions"
        assert modules.versions.constants == (
            Constant("junit", "4.12", comment="up-to-date"),
            Constant("moshi", "1.6.0", comment="available: release=1.7.0"),
        )

    def test_gradle_constants(self, modules: GeneratedModules) -> None:
        (gradle,) = modules.versions.nested

        assert gradle.name == "Gradle"
        assert [(c.name, c.literal) for c in gradle.constants] == [
            ("runningVersion", "4.10.2"),
            ("currentVersion", "4.10.2"),
            ("nightlyVersion", "5.1-20181023000026+0000"),
            ("releaseCandidate", "5.0-rc-1"),
        ]

    def test_libs_reference_versions(self, modules: GeneratedModules) -> None:
        moshi = modules.libs.constant("moshi")

        assert moshi.literal == "com.squareup.moshi:moshi:"
        assert moshi.reference == Reference("Versions", "moshi")
        assert moshi.doc == "[moshi website](https://github.com/square/moshi)"

    def test_libs_without_project_url_have_no_doc(self, modules: GeneratedModules) -> None:
        assert modules.libs.constant("junit").doc is None

    def test_effective_value(self, modules: GeneratedModules) -> None:
        moshi = modules.libs.constant("moshi")

        assert modules.value_of(moshi) == "com.squareup.moshi:moshi:1.6.0"

    def test_provenance(self, modules: GeneratedModules) -> None:
        assert modules.versions.doc == GENERATED_HEADER
        assert modules.libs.doc == GENERATED_HEADER
        assert "./gradlew syncLibs" in GENERATED_HEADER

    def test_iteration_order(self, modules: GeneratedModules) -> None:
        assert [m.name for m in modules] == ["Versions", "Libs"]

    def test_empty(self, gradle: GradleConfig) -> None:
        modules = ModuleGenerator().generate([], gradle)

        assert modules.versions.constants == ()
        assert len(modules.versions.nested[0].constants) == 4
        assert modules.libs.constants == ()

    def test_custom_class_names(self, gradle: GradleConfig) -> None:
        config = SyncConfig(libs_class_name="Deps", versions_class_name="Vers")
        dependencies = resolve_names([Dependency("junit", "junit", "4.12")])

        modules = ModuleGenerator(config).generate(dependencies, gradle)

        assert modules.libs.name == "Deps"
        assert modules.libs.constant("junit").reference == Reference("Vers", "junit")
        assert modules.value_of(modules.libs.constant("junit")) == "junit:junit:4.12"

    def test_unresolved_dependency_is_rejected(self, gradle: GradleConfig) -> None:
        with pytest.raises(ValueError, match="junit:junit"):
            ModuleGenerator().generate([Dependency("junit", "junit", "4.12")], gradle)

    def test_unknown_constant(self, modules: GeneratedModules) -> None:
        with pytest.raises(KeyError):
            modules.libs.constant("okhttp")
