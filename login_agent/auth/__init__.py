"""
Authentication Module
=====================
Location-driven login for a remotely-controlled browser page.

Architecture:
    - ``SessionDetector`` — is the page already inside the authenticated area?
    - ``LoginPolicy``     — site markers, selectors, timing budget and the
      post-submit state machine (``next_step``)
    - ``LoginManager``    — fast path, credential submission, polling loop
    - ``Credentials``     — immutable credential pair (env / prompt)
    - ``Outcome``         — AUTHENTICATED / FAILED / TIMED_OUT

Usage::

    from login_agent.auth import Credentials, LoginManager, LoginPolicy

    manager = LoginManager(driver, LoginPolicy())
    outcome = manager.authenticate(Credentials.from_env())
"""

from .base_auth import Credentials, Outcome, prompt_credentials
from .errors import (
    AuthError,
    BudgetExhausted,
    ConfigurationError,
    InteractionError,
    RejectedError,
    SessionLostError,
)
from .login_manager import AttemptReport, LoginManager
from .policy import LoginPolicy, Observation, Step
from .session_detector import SessionDetector, location_matches

__all__ = [
    'AttemptReport',
    'AuthError',
    'BudgetExhausted',
    'ConfigurationError',
    'Credentials',
    'InteractionError',
    'LoginManager',
    'LoginPolicy',
    'Observation',
    'Outcome',
    'RejectedError',
    'SessionDetector',
    'SessionLostError',
    'Step',
    'location_matches',
    'prompt_credentials',
]
