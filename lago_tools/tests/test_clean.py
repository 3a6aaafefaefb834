
import pytest
import yaml

from lago_tools.api_codegen.projects import PROJECTS
from lago_tools.clean import clean_directory, format_size, get_dir_size, main


def _populate(root, project):
    output = root / PROJECTS[project].output_dir
    output.mkdir(parents=True)
    (output / "index.ts").write_text("export * from './types';\n")
    return output


class TestGetDirSize:
    def test_get_dir_size(self, tmp_path):
        file_path = tmp_path / "test.txt"
        content = "hello world"
        file_path.write_text(content)
        expected_size = len(content.encode())

        assert get_dir_size(tmp_path) == expected_size

    def test_get_dir_size_nested(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "x.ts").write_text("12345")
        (tmp_path / "y.ts").write_text("123")

        assert get_dir_size(tmp_path) == 8

    def test_get_dir_size_nonexistent(self, tmp_path):
        assert get_dir_size(tmp_path / "nonexistent") == 0


class TestFormatSize:
    @pytest.mark.parametrize(
        "size_bytes,expected",
        [
            (0, "0.0 B"),
            (512, "512.0 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1048576, "1.0 MB"),
            (1073741824, "1.0 GB"),
            (1099511627776, "1.0 TB"),
        ],
    )
    def test_format_size(self, size_bytes, expected):
        assert format_size(size_bytes) == expected


class TestCleanDirectory:
    def test_clean_directory_exists(self, tmp_path, capsys):
        dir_path = tmp_path / "apis"
        dir_path.mkdir()
        (dir_path / "types.ts").write_text("content")

        size = clean_directory(dir_path, "app bindings")

        assert size == len("content")
        assert not dir_path.exists()
        captured = capsys.readouterr()
        assert "Removing:" in captured.out
        assert "app bindings" in captured.out

    def test_clean_directory_dry_run(self, tmp_path, capsys):
        dir_path = tmp_path / "apis"
        dir_path.mkdir()
        (dir_path / "types.ts").write_text("content")

        clean_directory(dir_path, "app bindings", dry_run=True)

        assert dir_path.exists()
        assert "Would remove:" in capsys.readouterr().out

    def test_clean_directory_nonexistent(self, tmp_path):
        assert clean_directory(tmp_path / "nonexistent", "test") == 0


class TestMain:
    def test_main_cleans_every_project(self, tmp_path):
        app = _populate(tmp_path, "app")
        operation = _populate(tmp_path, "operation")

        assert main(["--root", str(tmp_path)]) == 0

        assert not app.exists()
        assert not operation.exists()

    def test_main_single_project(self, tmp_path):
        app = _populate(tmp_path, "app")
        operation = _populate(tmp_path, "operation")

        assert main(["--root", str(tmp_path), "--project", "app"]) == 0

        assert not app.exists()
        assert operation.exists()

    def test_main_dry_run(self, tmp_path, capsys):
        app = _populate(tmp_path, "app")

        assert main(["--root", str(tmp_path), "--dry-run"]) == 0

        assert app.exists()
        assert "Would free:" in capsys.readouterr().out

    def test_main_unknown_project(self, tmp_path, capsys):
        assert main(["--root", str(tmp_path), "--project", "backoffice"]) == 1
        assert "unsupported project type" in capsys.readouterr().err

    def test_main_with_config(self, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text(yaml.dump({"projects": {"kiosk": {"output": "apps/kiosk/api", "tags": ["Kiosk"]}}}))
        kiosk = tmp_path / "apps" / "kiosk" / "api"
        kiosk.mkdir(parents=True)

        assert main(["--root", str(tmp_path), "--config", str(config), "--project", "kiosk"]) == 0

        assert not kiosk.exists()
        assert (tmp_path / "apps").exists()
