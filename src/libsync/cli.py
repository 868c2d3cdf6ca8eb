import argparse
import pathlib
import sys
from typing import List, Optional

from rich.console import Console
from rich.rule import Rule
from rich.syntax import Syntax

from libsync.config import DEFAULT_OUTPUT_DIR, DEFAULT_REPORT_PATH, SyncConfig
from libsync.orchestrator import SyncLibsOrchestrator
from libsync.types import MalformedReportError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libsync",
        description="Generate Versions.kt and Libs.kt from the report of `./gradlew dependencyUpdates`.",
    )
    parser.add_argument(
        "--project-dir",
        type=pathlib.Path,
        default=pathlib.Path("."),
        help="Root of the Gradle project (default: current directory)",
    )
    parser.add_argument(
        "--report",
        type=pathlib.Path,
        default=DEFAULT_REPORT_PATH,
        help=f"Report path, relative to the project (default: {DEFAULT_REPORT_PATH})",
    )
    parser.add_argument(
        "--output-dir",
        type=pathlib.Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Where to write the Kotlin files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--libs-class", default="Libs", help="Name of the Libs object")
    parser.add_argument(
        "--versions-class", default="Versions", help="Name of the Versions object"
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated files instead of writing them",
    )
    mode.add_argument(
        "--browse",
        action="store_true",
        help="Browse the dependencies and their generated constants",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = SyncConfig(
        project_dir=args.project_dir,
        report_path=args.report,
        output_dir=args.output_dir,
        libs_class_name=args.libs_class,
        versions_class_name=args.versions_class,
    )
    orchestrator = SyncLibsOrchestrator(config=config)

    try:
        if args.dry_run or args.browse:
            result = orchestrator.process_from_file()
        else:
            orchestrator.sync_project()
            return 0
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except MalformedReportError as e:
        print(f"Malformed report {config.report_file}: {e}", file=sys.stderr)
        return 1

    if args.browse:
        from libsync.tui import LibsBrowserApp

        LibsBrowserApp(result.dependencies, result.modules).run()
        return 0

    console = Console()
    for name, source in orchestrator.render(result.modules).items():
        console.print(Rule(f"{name}.kt"))
        console.print(Syntax(source, "kotlin", theme="monokai", line_numbers=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
