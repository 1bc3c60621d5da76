"""
Login Policy
============
Everything the login flow needs to know about the target site, plus the
post-submit state machine.

The state machine is a pure function of (check index, observed location):
no clock, no browser. ``LoginManager`` feeds it one observation per check
and acts on the returned ``Step``, so any location sequence can be replayed
in tests without real delays.

Transition rule for check ``i`` (1-based) of ``max_checks``:

    location unavailable            → FAILED
    contains success marker         → AUTHENTICATED
    contains checkpoint marker      → CONTINUE   (human must act)
    contains login marker, i > grace→ FAILED
    anything else                   → CONTINUE
    CONTINUE on i == max_checks     → TIMED_OUT

Markers are tested in that order, so a location carrying several markers
resolves to the most positive one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .session_detector import DEFAULT_SUCCESS_MARKER, location_matches


class Observation(str, Enum):
    """What a single location sample looks like."""

    UNAVAILABLE = "unavailable"
    AUTHENTICATED = "authenticated"
    CHECKPOINT = "checkpoint"
    LOGIN_PAGE = "login_page"
    OTHER = "other"


class Step(str, Enum):
    """Decision after one post-submit check."""

    CONTINUE = "continue"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class LoginPolicy:
    """Site description + timing budget for one login attempt."""

    # ── Login surface ─────────────────────────────────────────────────
    login_url: str = "https://www.linkedin.com/login"
    identifier_selector: str = 'input[name="session_key"]'
    secret_selector: str = 'input[name="session_password"]'
    submit_selector: str = 'button[type="submit"]'

    # ── Location markers ──────────────────────────────────────────────
    success_marker: str = DEFAULT_SUCCESS_MARKER
    checkpoint_marker: str = "/checkpoint"
    login_marker: str = "/login"

    # ── Timing budget ─────────────────────────────────────────────────
    max_checks: int = 25
    """Number of post-submit location checks before giving up."""

    poll_interval_s: float = 3.0
    """Sleep before every check."""

    grace_checks: int = 5
    """Checks during which landing on the login page is not yet a rejection."""

    settle_delay_s: float = 0.4
    """Pause after each field fill so the page's input handlers catch up."""

    element_timeout_ms: int = 15_000
    """Lookup timeout for the first login field."""

    def __post_init__(self):
        if self.max_checks < 1:
            raise ValueError(f"max_checks must be >= 1, got {self.max_checks}")
        if self.grace_checks < 0:
            raise ValueError(f"grace_checks must be >= 0, got {self.grace_checks}")
        if self.poll_interval_s < 0 or self.settle_delay_s < 0:
            raise ValueError("delays must be non-negative")
        if not self.success_marker:
            raise ValueError("success_marker must be a non-empty string")

    def classify(
        self,
        location: Optional[str],
        is_authenticated: Optional[Callable[[str], bool]] = None,
    ) -> Observation:
        """Map one location sample (``None`` = fetch failed) to an observation.

        *is_authenticated* is the success rule; ``LoginManager`` passes
        ``SessionDetector.matches`` so the fast path and the polling loop
        share it. Without it, the success marker is matched directly.
        """
        if location is None:
            return Observation.UNAVAILABLE
        if is_authenticated is None:
            is_authenticated = self._matches_success
        if is_authenticated(location):
            return Observation.AUTHENTICATED
        if location_matches(location, self.checkpoint_marker):
            return Observation.CHECKPOINT
        if location_matches(location, self.login_marker):
            return Observation.LOGIN_PAGE
        return Observation.OTHER

    def next_step(
        self,
        check: int,
        location: Optional[str],
        is_authenticated: Optional[Callable[[str], bool]] = None,
    ) -> Step:
        """Decide what follows check number *check* (1-based)."""
        if check < 1 or check > self.max_checks:
            raise ValueError(f"check {check} outside 1..{self.max_checks}")

        observation = self.classify(location, is_authenticated)
        if observation is Observation.UNAVAILABLE:
            return Step.FAILED
        if observation is Observation.AUTHENTICATED:
            return Step.AUTHENTICATED
        if observation is Observation.LOGIN_PAGE and check > self.grace_checks:
            return Step.FAILED
        if check >= self.max_checks:
            return Step.TIMED_OUT
        return Step.CONTINUE

    def _matches_success(self, location: str) -> bool:
        return location_matches(location, self.success_marker)

    @property
    def max_wait_s(self) -> float:
        """Upper bound on the time spent polling after submit."""
        return self.max_checks * self.poll_interval_s
