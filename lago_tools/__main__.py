#!/usr/bin/env python3
"""
Unified build tools CLI for the Lago monorepo.

Usage:
    python -m lago_tools <command> [options]

Commands:
    codegen     Generate typed API bindings for a consuming project
    clean       Remove generated API bindings

Examples:
    python -m lago_tools codegen app
    python -m lago_tools codegen operation --dry-run
    python -m lago_tools clean --project app --dry-run
"""

from __future__ import annotations

import sys


def cmd_codegen(args: list[str]) -> int:
    """Run the API code generator."""
    from lago_tools.api_codegen import main as api_codegen
    try:
        return api_codegen.main(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


def cmd_clean(args: list[str]) -> int:
    """Remove generated bindings."""
    from lago_tools import clean
    try:
        return clean.main(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "codegen": (cmd_codegen, "Generate typed API bindings for a project"),
    "clean": (cmd_clean, "Remove generated API bindings"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
