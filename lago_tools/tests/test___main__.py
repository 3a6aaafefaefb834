from unittest.mock import patch

from lago_tools import __main__


class TestCmdFunctions:
    @patch("lago_tools.api_codegen.main.main")
    def test_cmd_codegen_success(self, mock_main):
        mock_main.return_value = 0
        result = __main__.cmd_codegen(["app"])
        assert result == 0
        mock_main.assert_called_once_with(["app"])

    @patch("lago_tools.api_codegen.main.main")
    def test_cmd_codegen_failure(self, mock_main):
        mock_main.return_value = 1
        assert __main__.cmd_codegen(["backoffice"]) == 1

    @patch("lago_tools.api_codegen.main.main")
    def test_cmd_codegen_usage_error(self, mock_main):
        mock_main.side_effect = SystemExit(2)
        assert __main__.cmd_codegen([]) == 2

    @patch("lago_tools.clean.main")
    def test_cmd_clean_success(self, mock_main):
        mock_main.return_value = 0
        result = __main__.cmd_clean(["--dry-run"])
        assert result == 0
        mock_main.assert_called_once_with(["--dry-run"])

    @patch("lago_tools.clean.main")
    def test_cmd_clean_failure(self, mock_main):
        mock_main.side_effect = SystemExit(1)
        assert __main__.cmd_clean([]) == 1


class TestMain:
    def test_main_help(self):
        with patch("sys.argv", ["lago_tools"]), patch("builtins.print") as mock_print:
            result = __main__.main()
            assert result == 0
            mock_print.assert_called()

    def test_main_unknown_command(self):
        with (
            patch("sys.argv", ["lago_tools", "unknown"]),
            patch("builtins.print"),
        ):
            result = __main__.main()
            assert result == 1

    @patch("lago_tools.api_codegen.main.main")
    def test_main_dispatches_with_args(self, mock_main):
        mock_main.return_value = 0
        with patch("sys.argv", ["lago_tools", "codegen", "operation", "--dry-run"]):
            result = __main__.main()
        assert result == 0
        mock_main.assert_called_once_with(["operation", "--dry-run"])
