"""Shared fixtures for installer tests."""

import pytest

from dsi_installer.core.config_loader import InstallerSettings
from tests.helpers import CapturingLogger


@pytest.fixture
def logger():
    return CapturingLogger()


@pytest.fixture
def verbose_logger():
    return CapturingLogger(verbose=True)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every path into tmp_path."""
    return InstallerSettings(
        dll_name="DSIRevitToolkit",
        client_guid="00000000-1111-2222-3333-444444444444",
        install_directory_name="InstallDir",
        source_path_prefix=str(tmp_path / "share") + "/Revit ",
        source_path_postfix="",
        debug_path_prefix=str(tmp_path / "debug") + "/Revit ",
        debug_path_postfix="/bin",
        revit_addins_path=str(tmp_path / "Addins"),
        local_app_data=str(tmp_path / "LocalAppData"),
        gate_poll_interval=5,
    )
