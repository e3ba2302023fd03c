"""Tests for TypemodelSettings — priority chain and derived values."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from typemodel.config.discovery import CONFIG_FILENAME
from typemodel.config.settings import TypemodelSettings


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        settings = TypemodelSettings.from_cli(project_root=tmp_path)
        assert settings.config_path is None
        assert settings.strict_references is False
        assert settings.plugins.enabled is True
        assert settings.plugin_dir == tmp_path / ".typemodel" / "plugins"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = TypemodelSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestPriority:
    def test_toml_values(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            '[assembly]\nstrict_references = true\n[plugins]\nlocal_dir = "ext"\n'
        )
        settings = TypemodelSettings.from_cli()
        assert settings.config_path == tmp_path / CONFIG_FILENAME
        assert settings.project_root == tmp_path
        assert settings.strict_references is True
        assert settings.plugin_dir == tmp_path / "ext"

    def test_empty_toml_keeps_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        settings = TypemodelSettings.from_cli()
        assert settings.config_path == tmp_path / CONFIG_FILENAME
        assert settings.strict_references is False
        assert settings.plugins.enabled is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[assembly]\nstrict_references = true\n")
        monkeypatch.setenv("TYPEMODEL_ASSEMBLY__STRICT_REFERENCES", "false")
        settings = TypemodelSettings.from_cli()
        assert settings.assembly.strict_references is False

    def test_cli_flag_overrides_all(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TYPEMODEL_VERBOSE", "false")
        settings = TypemodelSettings.from_cli(verbose=True, strict=True)
        assert settings.verbose is True
        assert settings.strict_references is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "other.toml"
        custom.write_text("[plugins]\nenabled = false\n")
        settings = TypemodelSettings.from_cli(config_path=str(custom))
        assert settings.config_path == custom
        assert settings.plugins.enabled is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[assembly\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            TypemodelSettings.from_cli()
