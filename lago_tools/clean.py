#!/usr/bin/env python3
"""
Remove generated API bindings.

Deletes the output directory of each configured project (or of the one
given with --project), so the next codegen run starts from scratch.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import Sequence

from lago_tools.api_codegen.projects import get_project, load_projects
from lago_tools.shared import SchemaError


def get_dir_size(path: Path) -> int:
    """Get total size of a directory in bytes."""
    if not path.exists():
        return 0
    return sum(item.stat().st_size for item in path.rglob("*") if item.is_file())


def format_size(size_bytes: float) -> str:
    """Format size in human-readable form."""
    for unit in ("B", "KB", "MB", "GB"):
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def clean_directory(path: Path, description: str, *, dry_run: bool = False) -> int:
    """Remove a generated directory, returning bytes freed."""
    if not path.exists():
        return 0

    size = get_dir_size(path)
    if dry_run:
        print(f"  Would remove: {path} ({description}) - {format_size(size)}")
    else:
        print(f"  Removing: {path} ({description}) - {format_size(size)}")
        shutil.rmtree(path)
    return size


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--root", default=Path("."), type=Path, help="Repository root (default: current directory)")
    parser.add_argument("--project", default=None, help="Only clean this project's bindings")
    parser.add_argument("--config", default=None, type=Path, help="YAML/JSON file overriding the project table")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be cleaned without removing anything",
    )
    args = parser.parse_args(argv)

    try:
        projects = load_projects(args.config)
        selected = [get_project(args.project, projects)] if args.project else list(projects.values())
    except SchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    total_freed = 0
    print("Cleaning generated API bindings...")
    for project in selected:
        total_freed += clean_directory(
            args.root / project.output_dir,
            f"{project.name} bindings",
            dry_run=args.dry_run,
        )

    action = "Would free" if args.dry_run else "Freed"
    print(f"\n{action}: {format_size(total_freed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
