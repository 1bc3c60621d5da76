"""Tests for Credentials resolution and masking."""

import dataclasses

import pytest

from login_agent.auth import base_auth
from login_agent.auth.base_auth import Credentials, prompt_credentials


class TestFromEnv:

    def test_reads_default_variables(self):
        env = {"LINKEDIN_EMAIL": "jane@example.com", "LINKEDIN_PASSWORD": "pw"}
        creds = Credentials.from_env(env)
        assert creds.identifier == "jane@example.com"
        assert creds.secret == "pw"
        assert creds.is_complete

    def test_custom_variable_names(self):
        env = {"APP_USER": "bob", "APP_PASS": "s3cret"}
        creds = Credentials.from_env(env, identifier_var="APP_USER", secret_var="APP_PASS")
        assert creds == Credentials("bob", "s3cret")

    @pytest.mark.parametrize("env", [
        {},
        {"LINKEDIN_EMAIL": "jane@example.com"},
        {"LINKEDIN_PASSWORD": "pw"},
        {"LINKEDIN_EMAIL": "   ", "LINKEDIN_PASSWORD": "pw"},
    ])
    def test_missing_values_are_incomplete_not_errors(self, env):
        assert Credentials.from_env(env).is_complete is False

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_EMAIL", "env@example.com")
        monkeypatch.setenv("LINKEDIN_PASSWORD", "pw")
        assert Credentials.from_env().identifier == "env@example.com"


class TestCredentialsValue:

    def test_frozen(self):
        creds = Credentials("jane@example.com", "pw")
        with pytest.raises(dataclasses.FrozenInstanceError):
            creds.secret = "other"

    def test_repr_hides_secret(self):
        assert "hunter2" not in repr(Credentials("jane@example.com", "hunter2"))

    @pytest.mark.parametrize("identifier,masked", [
        ("jane.doe@example.com", "j*******@example.com"),
        ("jo@example.com", "j***@example.com"),
        ("username", "u*******"),
        ("", "<empty>"),
    ])
    def test_masked_identifier(self, identifier, masked):
        assert Credentials(identifier, "pw").masked_identifier == masked


class TestPrompt:

    def test_complete_credentials_not_prompted(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda _: pytest.fail("prompted"))
        creds = Credentials("jane@example.com", "pw")
        assert prompt_credentials(creds) is creds

    def test_prompts_missing_fields(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda _: "  jane@example.com ")
        monkeypatch.setattr(base_auth.getpass, "getpass", lambda _: "typed-secret")
        original = Credentials()
        creds = prompt_credentials(original)
        assert creds == Credentials("jane@example.com", "typed-secret")
        assert original == Credentials()

    def test_prompts_only_secret(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda _: pytest.fail("prompted"))
        monkeypatch.setattr(base_auth.getpass, "getpass", lambda _: "typed-secret")
        creds = prompt_credentials(Credentials("jane@example.com", ""))
        assert creds.secret == "typed-secret"
        assert "jane@example.com" not in capsys.readouterr().out
