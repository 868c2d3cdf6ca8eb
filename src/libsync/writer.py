import pathlib
import sys
from typing import List, Tuple

from libsync.config import INITIAL_BUILD_GRADLE_KTS


class ModuleFileWriter:
    """Writes rendered modules as `<Name>.kt` files into one directory."""

    def __init__(self, output_dir: pathlib.Path):
        self.output_dir = output_dir

    def write(self, sources: dict[str, str]) -> List[pathlib.Path]:
        """
        Writes every rendered source to `output_dir`, creating it if needed.

        Sources are first staged next to their target; the targets are only
        replaced once every source was staged, so a failed write leaves the
        existing files untouched.

        Args:
            sources: Mapping of module name to Kotlin source text.

        Returns:
            The written paths, in the order of `sources`.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        staged: List[Tuple[pathlib.Path, pathlib.Path]] = []
        try:
            for name, source in sources.items():
                path = self.output_dir / f"{name}.kt"
                temp = path.with_name(f".{path.name}.tmp")
                staged.append((temp, path))
                temp.write_text(source, encoding="utf-8")
        except OSError:
            for temp, _ in staged:
                temp.unlink(missing_ok=True)
            raise

        for temp, path in staged:
            temp.replace(path)
        return [path for _, path in staged]


def create_basic_structure(
    project_dir: pathlib.Path,
    output_dir: pathlib.Path,
    build_script: str = INITIAL_BUILD_GRADLE_KTS,
) -> None:
    """
    Creates the `buildSrc` module if the project does not have one yet.

    Existing files are never overwritten.

    Args:
        project_dir: Root directory of the Gradle project.
        output_dir: Source directory of buildSrc, relative to `project_dir`.
        build_script: Content of a new `buildSrc/build.gradle.kts`.
    """
    folder = project_dir / output_dir
    if not folder.is_dir():
        folder.mkdir(parents=True)

    build_src = project_dir / "buildSrc" / "build.gradle.kts"
    if not build_src.exists():
        build_src.parent.mkdir(parents=True, exist_ok=True)
        build_src.write_text(build_script, encoding="utf-8")
        print(f"Created {build_src}", file=sys.stderr)
