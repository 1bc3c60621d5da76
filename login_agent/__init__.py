"""
Login Agent Package
Automated login for a remotely-controlled browser session, with outcome
detection from the page location alone.

CLI Usage:
    python -m login_agent [options]

    Options:
        --login-url       Login page URL
        --max-checks      Post-submit location checks (default: 25)
        --poll-interval   Seconds between checks (default: 3.0)
        --grace-checks    Checks before the login page counts as rejection (default: 5)
        --profile-dir     Persistent browser profile (default: chrome-profile)
        --headless        No visible window
        --interactive     Prompt for missing credentials
"""

from .auth import (
    AttemptReport,
    Credentials,
    LoginManager,
    LoginPolicy,
    Outcome,
    SessionDetector,
)
from .run_config import LoginRunConfig

__all__ = [
    'AttemptReport',
    'Credentials',
    'LoginManager',
    'LoginPolicy',
    'LoginRunConfig',
    'Outcome',
    'SessionDetector',
]

__version__ = '1.0.0'
