from pathlib import Path

import pytest
import yaml

from lago_tools.api_codegen.document import Operation
from lago_tools.api_codegen.projects import (
    PROJECTS,
    ProjectConfig,
    get_project,
    group_by_tag,
    load_projects,
    partition,
)
from lago_tools.shared.errors import ConfigurationError


def _op(path, *tags):
    return Operation(path=path, method="GET", tags=tuple(tags))


class TestGetProject:
    def test_known_projects(self):
        assert get_project("app").output_dir == Path("apps/lago-app/src/lib/apis")
        assert get_project("operation").allowed_tags == (
            "AdminUsers",
            "AdminProducts",
            "AdminOrders",
            "AdminDashboard",
            "AdminAuth",
        )

    def test_unknown_project(self):
        with pytest.raises(ConfigurationError, match="unsupported project type") as exc_info:
            get_project("backoffice")
        assert exc_info.value.project == "backoffice"
        assert "app, operation" in str(exc_info.value)

    def test_missing_allow_list(self):
        projects = {"kiosk": ProjectConfig("kiosk", Path("out"), None)}
        with pytest.raises(ConfigurationError, match="no tag allow-list"):
            get_project("kiosk", projects)

    def test_owner_tag(self):
        assert PROJECTS["operation"].owner_tag == "Operation"


class TestPartition:
    def test_owner_tag_or_allow_list(self):
        ops = [
            _op("/api/products", "Products", "App"),
            _op("/api/auth/login", "Auth"),
            _op("/api/admin/users", "AdminUsers", "Operation"),
            _op("/api/billing", "Billing"),
            _op("/health"),
        ]
        kept = partition(ops, PROJECTS["app"])
        assert [op.path for op in kept] == ["/api/products", "/api/auth/login"]

    def test_allow_list_matches_first_tag_only(self):
        ops = [_op("/api/x", "Products", "Auth")]
        assert partition(ops, PROJECTS["app"]) == []

    def test_owner_tag_matches_second_tag_only(self):
        ops = [_op("/api/x", "App")]
        assert partition(ops, PROJECTS["app"]) == []

    def test_missing_allow_list(self):
        with pytest.raises(ConfigurationError):
            partition([], ProjectConfig("kiosk", Path("out"), None))

    def test_sample_document(self, document):
        kept = partition(document.operations, PROJECTS["operation"])
        assert [op.path for op in kept] == ["/api/admin/users"]


class TestGroupByTag:
    def test_first_appearance_order(self):
        ops = [_op("/a", "Products"), _op("/b", "Auth"), _op("/c", "Products")]
        grouped = group_by_tag(ops)
        assert list(grouped) == ["Products", "Auth"]
        assert [op.path for op in grouped["Products"]] == ["/a", "/c"]


class TestLoadProjects:
    def test_defaults_without_config(self):
        assert load_projects() == PROJECTS

    def test_override_existing_project(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"app": {"tags": ["Auth", "Uploads"]}}}))

        projects = load_projects(config)

        assert projects["app"].allowed_tags == ("Auth", "Uploads")
        assert projects["app"].output_dir == PROJECTS["app"].output_dir
        assert projects["operation"] == PROJECTS["operation"]

    def test_add_project(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"kiosk": {"output": "apps/kiosk/api", "tags": ["Kiosk"]}}}))

        project = get_project("kiosk", load_projects(config))

        assert project.output_dir == Path("apps/kiosk/api")
        assert project.owner_tag == "Kiosk"

    def test_new_project_without_tags_is_rejected_on_lookup(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"kiosk": {"output": "apps/kiosk/api"}}}))

        projects = load_projects(config)

        assert projects["kiosk"].allowed_tags is None
        with pytest.raises(ConfigurationError, match="no tag allow-list"):
            get_project("kiosk", projects)

    def test_new_project_without_output(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"kiosk": {"tags": ["Kiosk"]}}}))

        with pytest.raises(ConfigurationError, match="missing 'output'"):
            load_projects(config)

    def test_tags_must_be_strings(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"app": {"tags": "Auth"}}}))

        with pytest.raises(ConfigurationError, match="list of strings"):
            load_projects(config)

    def test_projects_must_be_mapping(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": ["app"]}))

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_projects(config)

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="configuration file not found"):
            load_projects(tmp_path / "missing.yaml")
