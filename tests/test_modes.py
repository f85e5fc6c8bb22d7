"""Tests for deployment mode selection."""

import pytest

from dsi_installer.core.arguments import parse_arguments
from dsi_installer.core.modes import AdminRemote, ManifestOnly, Relay, Standalone, select_mode


class TestSelectMode:
    def test_no_flags_is_standalone_with_manifests(self):
        mode = select_mode(parse_arguments([]))

        assert mode == Standalone(write_manifests=True)

    def test_launched_from_addin_skips_manifests(self):
        mode = select_mode(parse_arguments(["--launched-from-addin"]))

        assert mode == Standalone(write_manifests=False)

    def test_admin_beats_install(self):
        config = parse_arguments(["--deploy-install", "--deploy-as-admin", "WS-042", "jdoe"])

        assert select_mode(config) == AdminRemote(machine="WS-042", user="jdoe")

    def test_admin_beats_manifest(self):
        config = parse_arguments(["--deploy-manifest", "--deploy-as-admin", "WS-042", "jdoe"])

        assert isinstance(select_mode(config), AdminRemote)

    def test_install_beats_manifest(self):
        config = parse_arguments(["--deploy-manifest", "--deploy-install"])

        assert isinstance(select_mode(config), Relay)

    def test_relay_with_full_credentials(self):
        config = parse_arguments(["--deploy-install", "-u", "jdoe", "-p", "pw", "-d", "DSI"])

        mode = select_mode(config)

        assert mode.credential is not None
        assert mode.credential.qualified_user == "DSI\\jdoe"
        assert mode.missing == ()

    @pytest.mark.parametrize(
        "tokens,missing",
        [
            (["-u", "jdoe", "-d", "DSI"], ("password",)),
            (["-p", "pw"], ("username", "domain")),
        ],
    )
    def test_relay_with_partial_credentials(self, tokens, missing):
        mode = select_mode(parse_arguments(["--deploy-install"] + tokens))

        assert mode.credential is None
        assert mode.missing == missing

    def test_manifest_only_carries_app_data(self):
        config = parse_arguments(["--deploy-manifest", "--app-data-directory", "/tmp/appdata"])

        assert select_mode(config) == ManifestOnly(app_data_directory="/tmp/appdata")
