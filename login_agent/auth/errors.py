"""
Login attempt errors.

Each error ends one attempt and knows which ``Outcome`` it collapses into
at the public boundary of ``LoginManager``. Callers that need more than the
outcome read ``AttemptReport.error`` or the log.
"""

from __future__ import annotations

from .base_auth import Outcome


class AuthError(Exception):
    """Base class for errors that terminate a login attempt."""

    outcome: Outcome = Outcome.FAILED


class ConfigurationError(AuthError):
    """Credentials missing; nothing was sent to the browser."""


class InteractionError(AuthError):
    """A required login control could not be located or used."""


class SessionLostError(AuthError):
    """The page became unreachable while waiting for the login result."""


class RejectedError(AuthError):
    """The browser settled back on the login page after the grace window."""


class BudgetExhausted(AuthError):
    """All post-submit checks were used without a terminal observation."""

    outcome = Outcome.TIMED_OUT
