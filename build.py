#!/usr/bin/env python3
"""
Build tool wrapper for the Lago monorepo.

This is a convenience wrapper that forwards to the lago_tools module.
Run with --help to see available commands.

Usage:
    python build.py <command> [options]
    ./build.py <command> [options]  (on Unix with execute permission)

Commands:
    codegen     Generate typed API bindings for a consuming project
    clean       Remove generated API bindings

Examples:
    python build.py codegen app
    python build.py codegen operation --spec apps/lago-server/swagger.json
    python build.py clean --dry-run
"""

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to lago_tools module."""
    return subprocess.call(
        [sys.executable, "-m", "lago_tools"] + sys.argv[1:],
        cwd=ROOT,
    )


if __name__ == "__main__":
    sys.exit(main())
