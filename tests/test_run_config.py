"""Tests for LoginRunConfig layering and conversion."""

import argparse
import logging

import pytest

from login_agent.__main__ import build_parser
from login_agent.auth.policy import LoginPolicy
from login_agent.run_config import LoginRunConfig


class TestDefaults:

    def test_policy_defaults_match(self):
        assert LoginRunConfig().to_policy() == LoginPolicy()

    def test_session_kwargs(self):
        kwargs = LoginRunConfig(profile_dir="/tmp/p", headless=True).to_session_kwargs()
        assert kwargs["profile_dir"] == "/tmp/p"
        assert kwargs["headless"] is True
        assert kwargs["element_timeout_ms"] == 15_000


class TestFromEnv:

    def test_overrides(self):
        cfg = LoginRunConfig.from_env({
            "LOGIN_MAX_CHECKS": "40",
            "LOGIN_POLL_INTERVAL": "1.5",
            "LOGIN_GRACE_CHECKS": "2",
            "LOGIN_HEADLESS": "yes",
            "LOGIN_PROFILE_DIR": "profiles/a",
            "LOGIN_URL": "https://example.com/login",
        })
        assert cfg.max_checks == 40
        assert cfg.poll_interval_s == 1.5
        assert cfg.grace_checks == 2
        assert cfg.headless is True
        assert cfg.profile_dir == "profiles/a"
        assert cfg.login_url == "https://example.com/login"

    def test_invalid_values_ignored(self, caplog):
        caplog.set_level(logging.WARNING)
        cfg = LoginRunConfig.from_env({"LOGIN_MAX_CHECKS": "many", "LOGIN_GRACE_CHECKS": ""})
        assert cfg.max_checks == 25
        assert cfg.grace_checks == 5
        assert "LOGIN_MAX_CHECKS" in caplog.text

    def test_empty_env(self):
        assert LoginRunConfig.from_env({}) == LoginRunConfig()


class TestFromCliArgs:

    def test_flags_override_base(self):
        args = build_parser().parse_args([
            "--max-checks", "10", "--poll-interval", "2", "--grace-checks", "1",
            "--headless", "--profile-dir", "p2",
        ])
        base = LoginRunConfig(max_checks=40, settle_delay_s=1.0)
        cfg = LoginRunConfig.from_cli_args(args, base=base)
        assert cfg.max_checks == 10
        assert cfg.poll_interval_s == 2.0
        assert cfg.grace_checks == 1
        assert cfg.headless is True
        assert cfg.profile_dir == "p2"
        # untouched flag keeps the base value
        assert cfg.settle_delay_s == 1.0

    def test_absent_flags_keep_base(self):
        args = build_parser().parse_args([])
        base = LoginRunConfig(max_checks=40, headless=True)
        assert LoginRunConfig.from_cli_args(args, base=base) == base

    def test_plain_namespace(self):
        cfg = LoginRunConfig.from_cli_args(argparse.Namespace(login_url="https://x.test/login"))
        assert cfg.login_url == "https://x.test/login"
        assert cfg.to_policy().login_url == "https://x.test/login"


class TestRangeChecks:

    @pytest.mark.parametrize("env", [
        {"LOGIN_MAX_CHECKS": "0"},
        {"LOGIN_GRACE_CHECKS": "-3"},
        {"LOGIN_POLL_INTERVAL": "-1.5"},
    ])
    def test_out_of_range_env_rejected_by_policy(self, env):
        cfg = LoginRunConfig.from_env(env)
        with pytest.raises(ValueError):
            cfg.to_policy()

    def test_zero_max_checks_flag_rejected_by_policy(self):
        args = build_parser().parse_args(["--max-checks", "0"])
        with pytest.raises(ValueError):
            LoginRunConfig.from_cli_args(args).to_policy()
