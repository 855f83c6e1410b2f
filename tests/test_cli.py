"""Smoke tests for the CLI.

These tests verify CLI behaviour without a running server: build
commands are pointed at a respx-mocked URL and serve patches uvicorn.
"""

import json
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from buildsvc import __version__
from buildsvc.cli import app
from buildsvc.store import InMemoryBuildStore

runner = CliRunner()

SERVER = "http://builds.test"


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Build Service" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_short_version_flag(self) -> None:
        """CLI -V should print version and exit 0."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert "Usage:" in result.stdout

    def test_builds_help(self) -> None:
        """CLI builds --help should list the subcommands."""
        result = runner.invoke(app, ["builds", "--help"])
        assert result.exit_code == 0
        for command in ("create", "get", "replace", "patch", "delete"):
            assert command in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command_shows_all_settings(self) -> None:
        """CLI config should show all configuration fields."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Server:" in result.stdout
        assert "Client:" in result.stdout
        assert "Listen address" in result.stdout
        assert "Log level" in result.stdout
        assert "Server URL" in result.stdout
        assert "Timeout (seconds)" in result.stdout

    def test_config_json_contains_all_fields(self) -> None:
        """CLI config --json should contain all config fields."""
        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        config_data = json.loads(result.stdout)
        for key in ["http_addr", "log_level", "server_url", "client_timeout"]:
            assert key in config_data, f"Missing key: {key}"


class TestCLIServe:
    """Test CLI serve command."""

    def test_serve_runs_uvicorn(self) -> None:
        """serve should run uvicorn with the parsed listen address."""
        with patch("uvicorn.run") as mock_run, patch(
            "buildsvc.log.configure_logging"
        ) as mock_logging:
            result = runner.invoke(
                app, ["serve", "--http-addr", "127.0.0.1:9000", "--log-level", "debug"]
            )

        assert result.exit_code == 0, result.stdout
        mock_logging.assert_called_once_with("DEBUG")
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert isinstance(args[0].state.build_store, InMemoryBuildStore)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9000
        assert kwargs["log_level"] == "debug"

    def test_serve_default_address(self) -> None:
        """serve should listen on all interfaces by default."""
        with patch("uvicorn.run") as mock_run, patch("buildsvc.log.configure_logging"):
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.stdout
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"
        assert mock_run.call_args.kwargs["port"] == 8080

    def test_serve_invalid_log_level(self) -> None:
        """serve should reject unknown log levels without a traceback."""
        with patch("uvicorn.run") as mock_run, patch(
            "buildsvc.log.configure_logging"
        ) as mock_logging:
            result = runner.invoke(app, ["serve", "--log-level", "verbose"])

        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Invalid log level" in result.stdout
        mock_logging.assert_not_called()
        mock_run.assert_not_called()

    def test_serve_invalid_address(self) -> None:
        """serve should reject an address without a port."""
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--http-addr", "localhost"])

        assert result.exit_code == 2
        mock_run.assert_not_called()


class TestCLIBuilds:
    """Test CLI build commands against a mocked server."""

    @respx.mock
    def test_create(self) -> None:
        """builds create should POST the build."""
        route = respx.post(f"{SERVER}/builds").mock(
            return_value=httpx.Response(201, json={"id": "b1", "name": "nightly"})
        )
        result = runner.invoke(
            app, ["builds", "create", "b1", "--name", "nightly", "--server", SERVER]
        )

        assert result.exit_code == 0
        assert "Created build b1" in result.stdout
        assert json.loads(route.calls.last.request.content) == {
            "id": "b1",
            "name": "nightly",
        }

    @respx.mock
    def test_create_conflict(self) -> None:
        """builds create should exit 1 when the build exists."""
        respx.post(f"{SERVER}/builds").mock(
            return_value=httpx.Response(
                409,
                json={"detail": {"code": "build_exists", "message": "exists"}},
            )
        )
        result = runner.invoke(app, ["builds", "create", "b1", "--server", SERVER])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    @respx.mock
    def test_get_json(self) -> None:
        """builds get --json should print the build as JSON."""
        respx.get(f"{SERVER}/builds/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1", "name": "nightly"})
        )
        result = runner.invoke(app, ["builds", "get", "b1", "--json", "--server", SERVER])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"id": "b1", "name": "nightly"}

    @respx.mock
    def test_get_unset_name(self) -> None:
        """builds get should mark an unset name."""
        respx.get(f"{SERVER}/builds/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1"})
        )
        result = runner.invoke(app, ["builds", "get", "b1", "--server", SERVER])

        assert result.exit_code == 0
        assert "(unset)" in result.stdout

    @respx.mock
    def test_get_not_found(self) -> None:
        """builds get should exit 1 for a missing build."""
        respx.get(f"{SERVER}/builds/nope").mock(
            return_value=httpx.Response(
                404,
                json={"detail": {"code": "build_not_found", "message": "missing"}},
            )
        )
        result = runner.invoke(app, ["builds", "get", "nope", "--server", SERVER])

        assert result.exit_code == 1
        assert "Build not found: nope" in result.stdout

    @respx.mock
    def test_replace(self) -> None:
        """builds replace should PUT the full build."""
        route = respx.put(f"{SERVER}/builds/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1"})
        )
        result = runner.invoke(app, ["builds", "replace", "b1", "--server", SERVER])

        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == {"id": "b1"}

    @respx.mock
    def test_patch(self) -> None:
        """builds patch should PATCH only the given fields."""
        route = respx.patch(f"{SERVER}/builds/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1", "name": "new"})
        )
        result = runner.invoke(
            app, ["builds", "patch", "b1", "--name", "new", "--server", SERVER]
        )

        assert result.exit_code == 0
        assert "Updated build b1" in result.stdout
        assert json.loads(route.calls.last.request.content) == {"name": "new"}

    @respx.mock
    def test_delete(self) -> None:
        """builds delete should DELETE the build."""
        respx.delete(f"{SERVER}/builds/b1").mock(return_value=httpx.Response(204))
        result = runner.invoke(app, ["builds", "delete", "b1", "--server", SERVER])

        assert result.exit_code == 0
        assert "Deleted build b1" in result.stdout

    @respx.mock
    def test_server_unreachable(self) -> None:
        """Transport failures should exit 1 with an error message."""
        respx.delete(f"{SERVER}/builds/b1").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        result = runner.invoke(app, ["builds", "delete", "b1", "--server", SERVER])

        assert result.exit_code == 1
        assert "failed" in result.stdout
