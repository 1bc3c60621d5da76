"""
Login Manager
=============
Runs one login attempt against a browser page and reduces everything it
observes to an ``Outcome``.

Steps:
    1. Fast path — already on an authenticated location → done, nothing sent
    2. Credential check — either field empty → FAILED, no browser commands
    3. Submission — navigate, fill identifier, fill secret, click submit
       (single pass, never retried)
    4. Polling — sample the location every ``poll_interval_s`` for at most
       ``max_checks`` checks and let ``LoginPolicy.next_step`` decide

Checkpoint / CAPTCHA pages are never solved here: the loop keeps waiting
while a human completes them in the visible browser window.

The page is borrowed. The manager never closes it; tearing the browser
down from outside makes the next location fetch fail, which ends the
attempt as FAILED.

Security:
    - The secret is never logged or printed.
    - Only the masked identifier and location URLs appear in logs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..browser.base import BrowserError, PageDriver
from .base_auth import Credentials, Outcome
from .errors import (
    AuthError,
    BudgetExhausted,
    ConfigurationError,
    InteractionError,
    RejectedError,
    SessionLostError,
)
from .policy import LoginPolicy, Observation, Step
from .session_detector import SessionDetector

logger = logging.getLogger(__name__)


@dataclass
class AttemptReport:
    """Diagnostics for one attempt. ``outcome`` is all most callers need."""

    outcome: Outcome
    checks_used: int = 0
    last_location: Optional[str] = None
    checkpoint_seen: bool = False
    fast_path: bool = False
    error: Optional[AuthError] = None

    @property
    def reason(self) -> str:
        if self.error is not None:
            return type(self.error).__name__
        return "AlreadyAuthenticated" if self.fast_path else "Authenticated"


class LoginManager:
    """Location-driven login flow.

    Usage::

        manager = LoginManager(driver, LoginPolicy(max_checks=25))
        outcome = manager.authenticate(Credentials.from_env())

    Args:
        driver: Page to drive (borrowed, never closed).
        policy: Site description and timing budget.
        sleep:  Blocking sleep, injectable for tests.
        detector: Success rule for both the fast path and polling
                  (defaults to the policy's success marker).
    """

    def __init__(
        self,
        driver: PageDriver,
        policy: Optional[LoginPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        detector: Optional[SessionDetector] = None,
    ):
        self.driver = driver
        self.policy = policy or LoginPolicy()
        self.detector = detector or SessionDetector(driver, self.policy.success_marker)
        self._sleep = sleep

    def authenticate(self, creds: Credentials) -> Outcome:
        """Run one attempt and return its outcome."""
        return self.run_attempt(creds).outcome

    def run_attempt(self, creds: Credentials) -> AttemptReport:
        """Run one attempt and return the full report."""
        if self.detector.is_authenticated():
            logger.info("[AUTH] Session already active (persistent profile) — skipping login")
            return AttemptReport(outcome=Outcome.AUTHENTICATED, fast_path=True)

        report = AttemptReport(outcome=Outcome.FAILED)
        try:
            if not creds.is_complete:
                raise ConfigurationError("Missing login credentials (identifier or secret)")

            logger.info(f"[AUTH] Performing login as {creds.masked_identifier}")
            self._submit(creds)
            self._poll(report)
        except AuthError as exc:
            report.outcome = exc.outcome
            report.error = exc
            if exc.outcome is Outcome.TIMED_OUT:
                logger.warning(f"[AUTH] ⏰ {exc}")
            else:
                logger.error(f"[AUTH] ❌ {exc}")
        return report

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _submit(self, creds: Credentials) -> None:
        """Navigate to the login page, fill both fields, click submit."""
        policy = self.policy
        try:
            self.driver.navigate(policy.login_url)
            self.driver.wait_load()

            identifier_field = self.driver.find_input(
                policy.identifier_selector, timeout_ms=policy.element_timeout_ms
            )
            identifier_field.focus()
            identifier_field.set_text(creds.identifier)
            self._sleep(policy.settle_delay_s)
            logger.info("[AUTH] Identifier filled")

            secret_field = self.driver.find_input(policy.secret_selector)
            secret_field.focus()
            secret_field.set_text(creds.secret)
            self._sleep(policy.settle_delay_s)
            logger.info("[AUTH] Password filled")

            self.driver.find_clickable(policy.submit_selector).click()
            logger.info("[AUTH] Submit clicked")
        except BrowserError as exc:
            raise InteractionError(f"Login form interaction failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Post-submit polling
    # ------------------------------------------------------------------

    def _poll(self, report: AttemptReport) -> None:
        """Sample the location until the policy reaches a terminal step.

        Sets ``report.outcome`` on success; raises an ``AuthError`` for
        every other terminal step.
        """
        policy = self.policy
        for check in range(1, policy.max_checks + 1):
            self._sleep(policy.poll_interval_s)
            report.checks_used = check

            try:
                location = self.driver.current_location()
            except BrowserError as exc:
                logger.debug(f"[AUTH] Location fetch failed: {exc}")
                location = None
            else:
                report.last_location = location
                logger.info(
                    f"[AUTH] Login progress check {check}/{policy.max_checks} → {location[:120]}"
                )

            observation = policy.classify(location, self.detector.matches)
            if observation is Observation.CHECKPOINT:
                if not report.checkpoint_seen:
                    logger.warning("[AUTH] ⚠ CAPTCHA or security checkpoint detected.")
                logger.info("[AUTH] Awaiting manual resolution in the browser...")
                report.checkpoint_seen = True
            elif observation is Observation.LOGIN_PAGE and check <= policy.grace_checks:
                logger.debug(f"[AUTH] Still on login page (grace {check}/{policy.grace_checks})")

            step = policy.next_step(check, location, self.detector.matches)
            if step is Step.CONTINUE:
                continue
            if step is Step.AUTHENTICATED:
                report.outcome = Outcome.AUTHENTICATED
                logger.info("[AUTH] ✅ Login successful")
                return
            if step is Step.FAILED:
                if location is None:
                    raise SessionLostError("Login interrupted: page closed or unreachable")
                raise RejectedError("Login failed: redirected back to login page")
            raise BudgetExhausted(
                f"Login not completed after {policy.max_checks} checks "
                f"(~{policy.max_wait_s:.0f}s)"
            )
