"""Tests for SecretValue and the credential models."""

import pickle

import pytest

from dsi_installer.models.credentials import RemoteCredential, SecretValue


class TestSecretValue:
    def test_masked_everywhere(self):
        secret = SecretValue.from_plain("hunter2")

        assert "hunter2" not in str(secret)
        assert "hunter2" not in repr(secret)
        assert "hunter2" not in f"{secret}"
        assert "hunter2" not in "{}".format(secret)

    def test_reveal_and_read_only(self):
        secret = SecretValue.from_plain("hunter2")

        assert secret.reveal() == "hunter2"
        assert secret.is_read_only
        with pytest.raises(ValueError):
            secret.append("x")

    def test_append_before_sealing(self):
        secret = SecretValue("hun")
        secret.append("ter2")
        secret.make_read_only()

        assert secret.reveal() == "hunter2"

    def test_clear(self):
        secret = SecretValue.from_plain("hunter2")
        secret.clear()

        assert secret.is_cleared
        assert not secret
        with pytest.raises(ValueError):
            secret.reveal()

    def test_context_manager_clears(self):
        with SecretValue.from_plain("hunter2") as secret:
            assert secret.reveal() == "hunter2"

        assert secret.is_cleared

    def test_empty_secret_is_not_cleared(self):
        secret = SecretValue.from_plain("")

        assert not secret.is_cleared
        assert secret.reveal() == ""

        secret.clear()
        assert secret.is_cleared

    def test_cannot_be_pickled(self):
        with pytest.raises(TypeError):
            pickle.dumps(SecretValue.from_plain("hunter2"))


class TestRemoteCredential:
    def test_repr_hides_password(self):
        credential = RemoteCredential("jdoe", SecretValue.from_plain("hunter2"), "DSI")

        assert credential.qualified_user == "DSI\\jdoe"
        assert "hunter2" not in repr(credential)

