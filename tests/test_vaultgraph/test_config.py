"""Unit tests for vaultgraph.config."""

import textwrap
from pathlib import Path

import pytest

from vaultgraph.config import ConfigError, Settings, load_settings


class TestSettingsFromDict:
    def test_defaults(self):
        settings = Settings.from_dict({})
        assert settings.vault_path == Path(".")
        assert settings.format == "json"
        assert settings.verbose is False
        assert settings.extra == {}

    def test_section(self):
        settings = Settings.from_dict({"vaultgraph": {"vault_path": "/notes", "format": "yaml", "verbose": True}})
        assert settings.vault_path == Path("/notes")
        assert settings.format == "yaml"
        assert settings.verbose is True

    def test_flat_dict_without_section(self):
        settings = Settings.from_dict({"format": "table"})
        assert settings.format == "table"

    def test_unknown_keys_kept(self):
        settings = Settings.from_dict({"vaultgraph": {"colour": "auto"}})
        assert settings.extra == {"colour": "auto"}

    def test_home_is_expanded(self):
        settings = Settings.from_dict({"vault_path": "~/notes"})
        assert "~" not in str(settings.vault_path)

    def test_section_must_be_a_table(self):
        with pytest.raises(ConfigError, match="must be a table"):
            Settings.from_dict({"vaultgraph": "oops"})

    def test_vault_path_must_be_a_string(self):
        with pytest.raises(ConfigError, match="vault_path must be a string"):
            Settings.from_dict({"vault_path": 42})

    def test_verbose_must_be_a_bool(self):
        with pytest.raises(ConfigError, match="verbose must be true or false"):
            Settings.from_dict({"verbose": "yes"})

    def test_relative_path_joined_to_base_dir(self):
        settings = Settings.from_dict({"vault_path": "notes"}, base_dir=Path("/etc/vg"))
        assert settings.vault_path == Path("/etc/vg/notes")

    def test_bad_format(self):
        with pytest.raises(ConfigError, match="Unknown output format"):
            Settings.from_dict({"format": "xml"})


class TestLoadSettings:
    def test_none_gives_defaults(self):
        assert load_settings(None) == Settings()

    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "vaultgraph.toml"
        path.write_text(
            textwrap.dedent("""\
                [vaultgraph]
                vault_path = "vault"
                format = "yaml"
            """),
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.vault_path == tmp_path / "vault"
        assert settings.format == "yaml"

    def test_relative_vault_path_ignores_cwd(self, tmp_path: Path, monkeypatch):
        conf_dir = tmp_path / "conf"
        conf_dir.mkdir()
        path = conf_dir / "vaultgraph.toml"
        path.write_text('vault_path = "../notes"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_settings(path).vault_path == conf_dir / ".." / "notes"

    def test_absolute_vault_path_kept(self, tmp_path: Path):
        path = tmp_path / "vaultgraph.toml"
        path.write_text(f'vault_path = "{(tmp_path / "v").as_posix()}"\n', encoding="utf-8")
        assert load_settings(path).vault_path == tmp_path / "v"

    def test_section_that_is_not_a_table(self, tmp_path: Path):
        path = tmp_path / "vaultgraph.toml"
        path.write_text('vaultgraph = "oops"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a table"):
            load_settings(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_settings(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("format = = json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)
