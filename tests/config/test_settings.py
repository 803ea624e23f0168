"""Tests for UnitSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from unitctl.config.settings import UnitSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("UNITCTL_CONFIG", "UNITCTL_QUIET", "UNITCTL_DISPLAY__LINEAR_PRECISION"):
        monkeypatch.delenv(name, raising=False)


class TestUnitSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = UnitSettings.from_cli(search_from=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.display.linear_precision == 6
        assert settings.session.default_domain == "Length"
        assert settings.shell.prompt == "unitctl> "

    def test_frozen(self, tmp_path: Path) -> None:
        settings = UnitSettings.from_cli(search_from=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "unitctl.toml"
        toml.write_text('[display]\nlinear_precision = 3\n[session]\ndefault_domain = "Mass"\n')
        settings = UnitSettings.from_cli(search_from=tmp_path)
        assert settings.display.linear_precision == 3
        assert settings.display.temperature_precision == 4
        assert settings.session.default_domain == "Mass"
        assert settings.config_path == toml

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "unitctl.toml").write_text('[shell]\nprompt = "> "\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = UnitSettings.from_cli(search_from=nested)
        assert settings.shell.prompt == "> "

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "unitctl.toml").write_text("")
        settings = UnitSettings.from_cli(search_from=tmp_path)
        assert settings.display.linear_precision == 6

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[display]\ntemperature_precision = 2\n")
        settings = UnitSettings.from_cli(config_path=str(custom), search_from=tmp_path)
        assert settings.display.temperature_precision == 2
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        settings = UnitSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None
        assert settings.display.linear_precision == 6

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "unitctl.toml").write_text("[display\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            UnitSettings.from_cli(search_from=tmp_path)

    def test_out_of_range_value_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "unitctl.toml").write_text("[display]\nlinear_precision = 99\n")
        with pytest.raises(ValidationError):
            UnitSettings.from_cli(search_from=tmp_path)


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = UnitSettings.from_cli(
            search_from=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
            log_json=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        """CLI flags take priority over TOML values."""
        (tmp_path / "unitctl.toml").write_text("quiet = true\n")
        settings = UnitSettings.from_cli(search_from=tmp_path, quiet=False)
        assert settings.quiet is False


class TestEnvVars:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UNITCTL_QUIET", "true")
        settings = UnitSettings.from_cli(search_from=tmp_path)
        assert settings.quiet is True

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "unitctl.toml").write_text("[display]\nlinear_precision = 3\n")
        monkeypatch.setenv("UNITCTL_DISPLAY__LINEAR_PRECISION", "8")

        settings = UnitSettings.from_cli(search_from=tmp_path)

        assert settings.display.linear_precision == 8
