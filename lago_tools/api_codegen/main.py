"""
API Code Generator - Generates typed request bindings from the server's OpenAPI document.

For the selected consuming project this writes, into the project's API
directory:
- types.ts with every named schema and every unified enum
- one <tag>.ts per tag group (parameter/body/response classes, request
  functions, React Query hooks)
- index.ts re-exporting all of them

Every fatal condition (missing document, unknown project, missing tag
allow-list) is detected before the output directory is touched.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from ..shared import SchemaError, load_schema
from .document import DescriptionDocument, parse_document
from .emitter import GeneratorContext, OutputUnit, generate, summarize
from .projects import DEFAULT_SPEC_PATH, ProjectConfig, get_project, load_projects


def load_document(path: Path) -> DescriptionDocument:
    """Load and parse the description document at ``path``.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        SchemaError: If it cannot be parsed.
    """
    return parse_document(load_schema(path), str(path))


def write_units(units: Sequence[OutputUnit], output_dir: Path) -> list[Path]:
    """Write rendered units, overwriting any previous generation."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for unit in units:
        target = output_dir / unit.filename
        target.write_text(unit.content, encoding="utf-8")
        written.append(target)
    return written


def run(
    project_name: str,
    *,
    root: Path = Path("."),
    spec_path: Path | None = None,
    output_dir: Path | None = None,
    config_path: Path | None = None,
    dry_run: bool = False,
) -> list[OutputUnit]:
    """Generate bindings for one project and write them unless ``dry_run``.

    Raises:
        SchemaError: On any fatal input or configuration problem.
    """
    projects = load_projects(config_path)
    project: ProjectConfig = get_project(project_name, projects)

    spec = spec_path if spec_path is not None else root / DEFAULT_SPEC_PATH
    document = load_document(spec)

    target = output_dir if output_dir is not None else root / project.output_dir
    tag_filter = ", ".join(project.allowed_tags or ())
    print(f"Generating API bindings (project: {project.name}, tags: {tag_filter or 'none'})...")

    units = generate(document, project, GeneratorContext())
    stats = summarize(units)
    if stats["modules"] == 0:
        print(
            f"warning: no operations matched (project: {project.name}, tags: {tag_filter})",
            file=sys.stderr,
        )

    if dry_run:
        for unit in units:
            print(f"Would generate {unit.filename} -> {target / unit.filename}")
    else:
        for path in write_units(units, target):
            print(f"Generated {path.stem} -> {path}")

    print(
        f"Done: {stats['modules']} tag module(s), {stats['operations']} operation(s) "
        f"for project '{project.name}'"
    )
    return units


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("project", help="Target project selector (e.g. app, operation)")
    parser.add_argument("--root", default=Path("."), type=Path, help="Repository root (default: current directory)")
    parser.add_argument("--spec", default=None, type=Path, help=f"Path to the OpenAPI document (default: <root>/{DEFAULT_SPEC_PATH})")
    parser.add_argument("--output", default=None, type=Path, help="Override the project's output directory")
    parser.add_argument("--config", default=None, type=Path, help="YAML/JSON file overriding the project table")
    parser.add_argument("--dry-run", action="store_true", help="Render everything but write nothing")
    args = parser.parse_args(argv)

    try:
        run(
            args.project,
            root=args.root,
            spec_path=args.spec,
            output_dir=args.output,
            config_path=args.config,
            dry_run=args.dry_run,
        )
    except SchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
