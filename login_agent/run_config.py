"""
Unified Run Configuration
=========================
Single source of truth for ALL login-agent defaults.

Layering (later wins):
    1. ``_DEFAULTS`` below
    2. ``LOGIN_*`` environment variables (``from_env``)
    3. CLI flags (``from_cli_args``)

The login core only ever sees the ``LoginPolicy`` built by ``to_policy()``;
browser launch settings go to ``BrowserSession`` via ``to_session_kwargs()``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .auth.policy import LoginPolicy

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Canonical defaults. Login surface and timing come from LoginPolicy
# ---------------------------------------------------------------------------
_POLICY_DEFAULTS = LoginPolicy()

_DEFAULTS = {
    **{f.name: getattr(_POLICY_DEFAULTS, f.name) for f in fields(LoginPolicy)},
    "navigation_timeout_ms": 60_000,
    "profile_dir": "chrome-profile",
    "headless": False,             # headed so a human can clear checkpoints
    "identifier_var": "LINKEDIN_EMAIL",
    "secret_var": "LINKEDIN_PASSWORD",
}

# env var → (field, parser)
_ENV_OVERRIDES = {
    "LOGIN_URL": ("login_url", str),
    "LOGIN_MAX_CHECKS": ("max_checks", int),
    "LOGIN_POLL_INTERVAL": ("poll_interval_s", float),
    "LOGIN_GRACE_CHECKS": ("grace_checks", int),
    "LOGIN_SETTLE_DELAY": ("settle_delay_s", float),
    "LOGIN_PROFILE_DIR": ("profile_dir", str),
    "LOGIN_HEADLESS": ("headless", "bool"),
}

_TRUTHY = ("1", "true", "yes", "y", "on")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


@dataclass
class LoginRunConfig:
    """
    Unified configuration for one login-agent run.

    Populate via:
      - ``LoginRunConfig()``                  → all defaults
      - ``LoginRunConfig(max_checks=10)``      → override one value
      - ``LoginRunConfig.from_env()``          → ``LOGIN_*`` env vars
      - ``LoginRunConfig.from_cli_args(ns)``   → argparse Namespace
    """

    # ---- Login surface ----
    login_url: str = _DEFAULTS["login_url"]
    identifier_selector: str = _DEFAULTS["identifier_selector"]
    secret_selector: str = _DEFAULTS["secret_selector"]
    submit_selector: str = _DEFAULTS["submit_selector"]

    # ---- Location markers ----
    success_marker: str = _DEFAULTS["success_marker"]
    checkpoint_marker: str = _DEFAULTS["checkpoint_marker"]
    login_marker: str = _DEFAULTS["login_marker"]

    # ---- Timing budget ----
    max_checks: int = _DEFAULTS["max_checks"]
    poll_interval_s: float = _DEFAULTS["poll_interval_s"]
    grace_checks: int = _DEFAULTS["grace_checks"]
    settle_delay_s: float = _DEFAULTS["settle_delay_s"]
    element_timeout_ms: int = _DEFAULTS["element_timeout_ms"]
    navigation_timeout_ms: int = _DEFAULTS["navigation_timeout_ms"]

    # ---- Browser ----
    profile_dir: str = _DEFAULTS["profile_dir"]
    headless: bool = _DEFAULTS["headless"]

    # ---- Credential sources ----
    identifier_var: str = _DEFAULTS["identifier_var"]
    secret_var: str = _DEFAULTS["secret_var"]

    # -----------------------------------------------------------------------
    # Factory helpers
    # -----------------------------------------------------------------------
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoginRunConfig":
        """Build config from ``LOGIN_*`` variables (``os.environ`` by default).

        Unparseable values are logged and ignored. Range checks happen in
        ``to_policy()``, which raises ``ValueError``.
        """
        env = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for var, (name, parser) in _ENV_OVERRIDES.items():
            raw = env.get(var)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[name] = _parse_bool(raw) if parser == "bool" else parser(raw.strip())
            except ValueError:
                logger.warning(f"Ignoring invalid {var}={raw!r}")
        return cls(**overrides)

    @classmethod
    def from_cli_args(cls, args, base: Optional["LoginRunConfig"] = None) -> "LoginRunConfig":
        """Overlay an argparse Namespace (``__main__.py``) on *base*.

        Flags left at ``None`` keep the base value.
        """
        base = base or cls()
        flag_map = {
            "login_url": "login_url",
            "max_checks": "max_checks",
            "poll_interval": "poll_interval_s",
            "grace_checks": "grace_checks",
            "settle_delay": "settle_delay_s",
            "profile_dir": "profile_dir",
        }
        overrides: Dict[str, Any] = {}
        for flag, name in flag_map.items():
            value = getattr(args, flag, None)
            if value is not None:
                overrides[name] = value
        if getattr(args, "headless", False):
            overrides["headless"] = True
        return replace(base, **overrides)

    # -----------------------------------------------------------------------
    # Converters
    # -----------------------------------------------------------------------
    def to_policy(self) -> LoginPolicy:
        """Return the ``LoginPolicy`` the login core runs on."""
        policy_fields = {f.name for f in fields(LoginPolicy)}
        return LoginPolicy(**{
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name in policy_fields
        })

    def to_session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``BrowserSession``."""
        return {
            "profile_dir": self.profile_dir,
            "headless": self.headless,
            "element_timeout_ms": self.element_timeout_ms,
            "navigation_timeout_ms": self.navigation_timeout_ms,
        }

    # -----------------------------------------------------------------------
    # Logging helper
    # -----------------------------------------------------------------------
    def log_summary(self) -> None:
        """Emit a structured summary to the logger (no credentials)."""
        logger.info("=" * 60)
        logger.info("LOGIN RUN CONFIG")
        logger.info("=" * 60)
        logger.info(f"  Login URL:        {self.login_url}")
        logger.info(f"  Success Marker:   {self.success_marker}")
        logger.info(f"  Checkpoint:       {self.checkpoint_marker}")
        logger.info(f"  Max Checks:       {self.max_checks} every {self.poll_interval_s}s")
        logger.info(f"  Grace Checks:     {self.grace_checks}")
        logger.info(f"  Profile Dir:      {self.profile_dir}")
        logger.info(f"  Headless:         {self.headless}")
        logger.info(f"  Credentials:      ${self.identifier_var} / ${self.secret_var}")
        logger.info("=" * 60)
