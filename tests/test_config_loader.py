"""Tests for settings loading."""

import pytest

from dsi_installer import constants
from dsi_installer.core.config_loader import ConfigLoader, InstallerSettings
from dsi_installer.exceptions import ConfigurationError


class TestInstallerSettings:
    def test_defaults(self):
        settings = InstallerSettings()

        assert settings.supported_versions == ("2018", "2019", "2020", "2022")
        assert settings.host_process_name == "Revit"
        assert settings.gate_poll_interval == 5

    def test_source_directory_release_and_debug(self):
        settings = InstallerSettings(
            source_path_prefix="S/Revit ",
            source_path_postfix="",
            debug_path_prefix="D/Revit ",
            debug_path_postfix="/bin",
        )

        assert settings.source_directory("2020") == "S/Revit 2020"
        assert settings.source_directory("2020", debug=True) == "D/Revit 2020/bin"

    def test_remote_paths(self):
        settings = InstallerSettings()

        assert settings.remote_app_data_path("WS-042", "jdoe") == "\\\\WS-042\\c$\\Users\\jdoe\\AppData\\Local"
        assert settings.remote_addins_path("WS-042") == "\\\\WS-042\\c$\\ProgramData\\Autodesk\\Revit\\Addins"
        assert settings.remote_dll_root("jdoe") == "C:\\Users\\jdoe\\AppData\\Local"

    def test_local_app_data_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOCALAPPDATA", "/home/jdoe/AppData/Local")

        assert InstallerSettings().local_app_data_path() == "/home/jdoe/AppData/Local"


class TestConfigLoader:
    def test_no_file_gives_defaults(self, monkeypatch, tmp_path):
        monkeypatch.delenv(constants.CONFIG_ENV_VAR, raising=False)
        monkeypatch.setattr("sys.argv", [str(tmp_path / "dsi-installer")])

        assert ConfigLoader().load() == InstallerSettings()

    def test_env_var_file_overrides(self, monkeypatch, tmp_path):
        path = tmp_path / "installer.yml"
        path.write_text(
            "dll_name: OtherToolkit\n"
            "supported_versions: [2023, 2024]\n"
            "gate_poll_interval: 1\n"
        )
        monkeypatch.setenv(constants.CONFIG_ENV_VAR, str(path))

        settings = ConfigLoader().load()

        assert settings.dll_name == "OtherToolkit"
        assert settings.supported_versions == ("2023", "2024")
        assert settings.gate_poll_interval == 1
        assert settings.client_guid == constants.CLIENT_GUID

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "installer.yml"
        path.write_text("dll_nme: typo\n")

        with pytest.raises(ConfigurationError) as excinfo:
            ConfigLoader(path).load()

        assert "dll_nme" in excinfo.value.message

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "installer.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "installer.yml"
        path.write_text("dll_name: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_missing_explicit_file_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path / "absent.yml").load()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "installer.yml"
        path.write_text("")

        assert ConfigLoader(path).load() == InstallerSettings()
