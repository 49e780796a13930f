"""Tests for htmlroute.cli — entrypoint, ``routes`` and ``run``."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from htmlroute.app import App
from htmlroute.cli import main

CONFIG = """\
root_dir = "html"

[server]
host = "127.0.0.1"
port = 8000

[[routes]]
pattern = "/"
file = "index.html"

[[routes]]
pattern = "/users/:id"
file = "user.html"

[[routes]]
pattern = "/docs/*"
file = "docs.html"
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "htmlroute.toml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["routes", "run"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "htmlroute" in capsys.readouterr().out

    def test_unknown_command(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["serve"])
        assert exc_info.value.code == 2


class TestRoutesCommand:
    def test_lists_routes(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "--config", str(config_file)])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["KIND", "PATTERN", "FILE"]
        assert lines[2].split() == ["static", "/", "index.html"]
        assert lines[3].split() == ["dynamic", "/users/:id", "user.html"]
        assert lines[4].split() == ["wildcard", "/docs/*", "docs.html"]

    def test_default_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes"])
        assert "index.html" in capsys.readouterr().out

    def test_missing_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--config", str(tmp_path / "nope.toml")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_route(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[[routes]]\npattern = "/users/:"\nfile = "u.html"\n', encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--config", str(path)])
        assert exc_info.value.code == 1
        assert "/users/:" in capsys.readouterr().err


class TestRunCommand:
    @patch("htmlroute.server.dev.run_dev_server")
    def test_config_host_and_port(self, mock_server: MagicMock, config_file: Path) -> None:
        main(["run", "--config", str(config_file)])
        mock_server.assert_called_once()
        args, kwargs = mock_server.call_args
        assert isinstance(args[0], App)
        assert args[1] == "127.0.0.1"
        assert args[2] == 8000
        assert kwargs["log_level"] == "info"

    @patch("htmlroute.server.dev.run_dev_server")
    def test_host_and_port_override(self, mock_server: MagicMock, config_file: Path) -> None:
        main(["run", "--config", str(config_file), "--host", "0.0.0.0", "--port", "3000"])
        args = mock_server.call_args[0]
        assert args[1] == "0.0.0.0"
        assert args[2] == 3000

    @patch("htmlroute.server.dev.run_dev_server")
    def test_port_zero_is_not_replaced(self, mock_server: MagicMock, config_file: Path) -> None:
        main(["run", "--config", str(config_file), "--port", "0"])
        assert mock_server.call_args[0][2] == 0

    @patch("htmlroute.server.dev.run_dev_server")
    def test_app_built_from_config(self, mock_server: MagicMock, config_file: Path) -> None:
        main(["run", "--config", str(config_file)])
        app = mock_server.call_args[0][0]
        assert [r.file for r in app.router.routes] == ["index.html", "user.html", "docs.html"]
        assert app.reader.root == (config_file.parent / "html").resolve()
        assert app.classifier.production is False

    @patch("htmlroute.server.dev.run_dev_server")
    def test_production_flag(self, mock_server: MagicMock, config_file: Path) -> None:
        main(["run", "--config", str(config_file), "--production"])
        app = mock_server.call_args[0][0]
        assert app.config.production is True
        assert app.classifier.production is True

    def test_port_must_be_integer(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "--port", "abc"])
        assert exc_info.value.code == 2
