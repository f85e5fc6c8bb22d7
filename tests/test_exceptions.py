"""Tests for the installer error types."""

from dsi_installer.exceptions import CredentialError, InstallerError, MissingSourceError


class TestInstallerError:
    def test_context_is_appended(self):
        error = CredentialError("credentials incomplete", context="missing: password")

        assert error.message == "credentials incomplete"
        assert str(error) == "credentials incomplete (missing: password)"

    def test_message_only(self):
        assert str(InstallerError("boom")) == "boom"

    def test_missing_source_is_a_file_not_found(self):
        error = MissingSourceError("/share/Revit 2020")

        assert isinstance(error, FileNotFoundError)
        assert error.source == "/share/Revit 2020"
        assert str(error).endswith("/share/Revit 2020")
