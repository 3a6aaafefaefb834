"""Target-project configuration and operation partitioning."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Iterable, Mapping

from ..shared import ConfigurationError, load_schema
from .document import Operation

# Conventional location of the exported description document
DEFAULT_SPEC_PATH: Final[Path] = Path("apps/lago-server/swagger.json")


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Where a consuming project's bindings go and which tags it pulls in."""

    name: str
    output_dir: Path
    allowed_tags: tuple[str, ...] | None

    @property
    def owner_tag(self) -> str:
        """Second-tag value marking an operation as owned by this project."""
        return self.name.capitalize()


PROJECTS: Final[dict[str, ProjectConfig]] = {
    "app": ProjectConfig(
        name="app",
        output_dir=Path("apps/lago-app/src/lib/apis"),
        allowed_tags=("Auth",),
    ),
    "operation": ProjectConfig(
        name="operation",
        output_dir=Path("apps/lago-operation/src/lib/apis"),
        allowed_tags=(
            "AdminUsers",
            "AdminProducts",
            "AdminOrders",
            "AdminDashboard",
            "AdminAuth",
        ),
    ),
}


def load_projects(config_path: Path | None = None) -> dict[str, ProjectConfig]:
    """Return the project table, merged with an optional YAML/JSON override.

    The override file has the shape::

        projects:
          app:
            output: apps/lago-app/src/lib/apis
            tags: [Auth, Uploads]

    Raises:
        ConfigurationError: If the override file is malformed.
    """
    projects = dict(PROJECTS)
    if config_path is None:
        return projects

    if not config_path.is_file():
        raise ConfigurationError("configuration file not found", schema_path=str(config_path))
    data = load_schema(config_path)
    entries = data.get("projects", {})
    if not isinstance(entries, dict):
        raise ConfigurationError("'projects' must be a mapping", schema_path=str(config_path))

    for name, entry in entries.items():
        projects[str(name)] = _project_from_entry(str(name), entry, projects.get(str(name)), config_path)
    return projects


def _project_from_entry(
    name: str,
    entry: Any,
    current: ProjectConfig | None,
    config_path: Path,
) -> ProjectConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError("entry must be a mapping", name, str(config_path))

    output = entry.get("output")
    if output is None and current is None:
        raise ConfigurationError("missing 'output' directory", name, str(config_path))

    tags = entry.get("tags", current.allowed_tags if current else None)
    if tags is not None and not (isinstance(tags, (list, tuple)) and all(isinstance(t, str) for t in tags)):
        raise ConfigurationError("'tags' must be a list of strings", name, str(config_path))

    return ProjectConfig(
        name=name,
        output_dir=Path(output) if output is not None else current.output_dir,
        allowed_tags=tuple(tags) if tags is not None else None,
    )


def get_project(name: str, projects: Mapping[str, ProjectConfig] = PROJECTS) -> ProjectConfig:
    """Look up a project selector, rejecting unknown or incomplete entries.

    Raises:
        ConfigurationError: If the selector is unknown or has no tag allow-list.
    """
    project = projects.get(name)
    if project is None:
        supported = ", ".join(sorted(projects))
        raise ConfigurationError(f"unsupported project type; supported: {supported}", name)
    if project.allowed_tags is None:
        raise ConfigurationError("no tag allow-list configured", name)
    return project


def partition(operations: Iterable[Operation], project: ProjectConfig) -> list[Operation]:
    """Keep the operations a project's bindings should contain.

    An operation is kept when its second tag is the project's capitalized
    name or its first tag is in the project's allow-list. Document order is
    preserved; everything else is dropped.

    Raises:
        ConfigurationError: If the project has no tag allow-list.
    """
    if project.allowed_tags is None:
        raise ConfigurationError("no tag allow-list configured", project.name)
    allowed = frozenset(project.allowed_tags)
    return [
        op for op in operations
        if op.owner == project.owner_tag or (op.tags and op.tags[0] in allowed)
    ]


def group_by_tag(operations: Iterable[Operation]) -> dict[str, list[Operation]]:
    """Group operations by first tag, in order of first appearance."""
    grouped: dict[str, list[Operation]] = {}
    for op in operations:
        grouped.setdefault(op.tag, []).append(op)
    return grouped
