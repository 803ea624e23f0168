"""Tests for the interactive `shell` command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from unitctl.cli import cli
from unitctl.commands._context import AppContext
from unitctl.commands.shell import run_line
from unitctl.config.settings import UnitSettings


def _run(cli_runner: CliRunner, lines: list[str], *args: str):
    return cli_runner.invoke(cli, [*args, "shell"], input="\n".join(lines) + "\n")


@pytest.mark.usefixtures("_isolated_config")
class TestShellSession:
    def test_convert_with_selected_domain(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["domain Temperature", "convert 100 C F", "quit"])
        assert result.exit_code == 0
        assert "domain: Temperature" in result.stdout
        assert "212.0000 F" in result.stdout

    def test_convert_uses_remembered_units(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert 1000 m km", "convert 5"], "-q")
        assert result.exit_code == 0
        assert "1.000000 km" in result.stdout
        assert "0.005000 km" in result.stdout

    def test_history_accumulates(self, cli_runner: CliRunner) -> None:
        lines = ["convert 1000 m km", "domain Mass", "convert 1 kg g", "history"]
        result = _run(cli_runner, lines, "-q")
        assert "Length: 1000 m -> 1.000000 km" in result.stdout
        assert "Mass: 1 kg -> 1000.000000 g" in result.stdout

    def test_history_json(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert 1000 m km", "history --json"], "-q")
        out = result.stdout
        items = json.loads(out[out.index("[") : out.rindex("]") + 1])
        assert items == [
            {
                "domain": "Length",
                "input_value": 1000.0,
                "source_unit": "m",
                "target_unit": "km",
                "result_text": "1.000000 km",
            }
        ]

    def test_failed_conversion_not_recorded(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert abc m km", "status"], "--json")
        assert result.exit_code == 0
        assert "NOT_A_NUMBER" in result.stderr
        assert '"history_count": 0' in result.stdout

    def test_reset_clears_history(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert 1 m km", "reset", "history"], "-q")
        assert "OK: reset" in result.stdout
        assert "Length: 1 m" not in result.stdout

    def test_start_domain_option(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["units"], "-q")
        assert "km" in result.stdout
        result = cli_runner.invoke(cli, ["-q", "shell", "-d", "Volume"], input="units\n")
        assert "m³" in result.stdout
        assert "km" not in result.stdout

    def test_bad_start_domain_exits(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "-d", "Nope"], input="quit\n")
        assert result.exit_code == 1
        assert "Unknown domain 'Nope'" in result.stderr

    def test_eof_ends_shell(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "shell"], input="convert 1 m km\n")
        assert result.exit_code == 0
        assert "0.001000 km" in result.stdout

    def test_configured_prompt(self, cli_runner: CliRunner, tmp_path) -> None:
        (tmp_path / "unitctl.toml").write_text('[shell]\nprompt = "uc$ "\n')
        result = _run(cli_runner, ["quit"])
        assert "uc$ " in result.stdout


@pytest.mark.usefixtures("_isolated_config")
class TestShellErrors:
    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["frobnicate", "quit"])
        assert result.exit_code == 0
        assert "Unknown command 'frobnicate'" in result.stderr

    def test_errors_do_not_end_the_shell(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert -5 m km", "convert 5 m km"], "-q")
        assert result.exit_code == 0
        assert "Negative values are not valid for Length." in result.stderr
        assert "0.005000 km" in result.stdout

    def test_convert_usage(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ["convert 1 m"], "--json")
        assert json.loads(result.stderr)["error"]["code"] == "USAGE"

    def test_unbalanced_quotes(self, cli_runner: CliRunner) -> None:
        result = _run(cli_runner, ['domain "Length'], "-q")
        assert result.exit_code == 0
        assert "ERROR: shell" in result.stderr


@pytest.mark.usefixtures("_isolated_config")
class TestRunLine:
    @pytest.fixture
    def app(self) -> AppContext:
        return AppContext(UnitSettings.from_cli(quiet=True))

    def test_exit_words(self, app: AppContext) -> None:
        for word in ("quit", "exit", "q", "QUIT"):
            assert run_line(app, word) is False

    def test_blank_line_continues(self, app: AppContext) -> None:
        assert run_line(app, "   ") is True

    def test_state_carries_between_lines(
        self, app: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run_line(app, "domain Temperature")
        run_line(app, "convert 0 C K")
        assert app.session.domain == "Temperature"
        assert len(app.session.history) == 1
        assert "273.1500 K" in capsys.readouterr().out

    def test_help(self, app: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_line(app, "help") is True
        assert "convert VALUE [FROM TO]" in capsys.readouterr().out

    def test_history_display_limit(
        self, tmp_path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / "unitctl.toml").write_text("[shell]\nhistory_limit_display = 2\n")
        limited = AppContext(UnitSettings.from_cli(quiet=True))
        for value in ("1", "2", "3"):
            run_line(limited, f"convert {value} m km")
        capsys.readouterr()
        run_line(limited, "history")
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["Length: 2 m -> 0.002000 km", "Length: 3 m -> 0.003000 km"]
        assert len(limited.session.history) == 3
